"""Tool registry shared by the MCP server and the tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..exceptions import PcbRepairError
from ..logging_config import create_logger

if TYPE_CHECKING:
    from collections.abc import Callable

logger = create_logger(__name__)


@dataclass
class ToolSpec:
    """Declarative specification for a single MCP tool."""

    name: str
    description: str
    handler: Callable[..., Any]
    category: str = "general"


TOOL_REGISTRY: dict[str, ToolSpec] = {}


def register_tool(
    name: str,
    description: str,
    handler: Callable[..., Any],
    *,
    category: str = "general",
) -> None:
    """Register a tool in the global registry."""
    TOOL_REGISTRY[name] = ToolSpec(
        name=name,
        description=description,
        handler=handler,
        category=category,
    )


def get_categories() -> dict[str, list[ToolSpec]]:
    """Return tools grouped by category."""
    categories: dict[str, list[ToolSpec]] = {}
    for tool in TOOL_REGISTRY.values():
        categories.setdefault(tool.category, []).append(tool)
    return categories


def error_response(tool_name: str, exc: PcbRepairError) -> dict[str, Any]:
    """Log a failed tool call and turn the error into a tool result."""
    logger.warning("Tool %s failed: [%s] %s", tool_name, exc.error_code, exc.message)
    result = exc.to_dict()
    result["tool"] = tool_name
    return result
