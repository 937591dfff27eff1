"""MCP resources: read-only views of the loaded repair file."""

from __future__ import annotations

import json

from fastmcp import FastMCP

from ..exceptions import NoFileLoadedError


def _not_loaded() -> str:
    return json.dumps({"error": NoFileLoadedError().message})


def board_summary() -> str:
    """Board identity, unit, decryption key and record counts."""
    from .. import state

    if not state.is_loaded():
        return _not_loaded()
    return json.dumps(state.get_summary().to_dict(), indent=2)


def board_components() -> str:
    """All placed component symbols."""
    from .. import state

    if not state.is_loaded():
        return _not_loaded()
    symbols = state.get_file().content.symbols
    return json.dumps(
        {"count": len(symbols), "components": [s.to_dict() for s in symbols]},
        indent=2,
    )


def board_bom() -> str:
    """The bill of materials from the description document."""
    from .. import state

    if not state.is_loaded():
        return _not_loaded()
    return json.dumps(state.get_file().description.to_dict(), indent=2)


def footprint_detail(refdes: str) -> str:
    """Centred pin geometry of one component."""
    from .. import state

    if not state.is_loaded():
        return _not_loaded()
    footprint = state.get_file().footprints.get(refdes)
    if footprint is None:
        return json.dumps({"error": f"No footprint for refdes '{refdes}'"})
    return json.dumps(footprint.to_dict(), indent=2)


def register_board_resources(mcp: FastMCP) -> None:
    """Register board-related MCP resources."""
    mcp.resource("pcbrepair://board/summary")(board_summary)
    mcp.resource("pcbrepair://board/components")(board_components)
    mcp.resource("pcbrepair://board/bom")(board_bom)
    mcp.resource("pcbrepair://footprint/{refdes}")(footprint_detail)
