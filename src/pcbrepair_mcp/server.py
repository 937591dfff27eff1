"""pcbrepair MCP server entry point."""

from __future__ import annotations

import sys

from fastmcp import FastMCP

from .logging_config import create_logger, setup_logging
from .resources import register_board_resources
from .tools import TOOL_REGISTRY

logger = create_logger(__name__)


def create_server() -> FastMCP:
    """Create and configure the pcbrepair MCP server."""
    mcp = FastMCP("pcbrepair-mcp")

    for spec in TOOL_REGISTRY.values():
        mcp.tool(spec.handler, name=spec.name, description=spec.description)

    register_board_resources(mcp)

    logger.debug("Registered %d tools", len(TOOL_REGISTRY))
    return mcp


def main() -> None:
    """Console entry point for the MCP server."""
    # stdout carries the stdio transport
    setup_logging(stream=sys.stderr)
    create_server().run()


if __name__ == "__main__":
    main()
