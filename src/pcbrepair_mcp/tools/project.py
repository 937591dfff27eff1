"""Project tools: open a repair file and query its components and pins."""

from __future__ import annotations

from typing import Any

from ..exceptions import PcbRepairError, ValidationError
from ..logging_config import request_scope
from .registry import error_response, register_tool


def _open_repair_file_handler(file_path: str) -> dict[str, Any]:
    """Open an ASUS .fz or ASRock .cae repair file.

    Args:
        file_path: Path to the repair file.
    """
    from .. import state
    from ..security import get_validator

    with request_scope():
        try:
            path = get_validator().validate_input(file_path)
            summary = state.load_file(str(path))
        except PcbRepairError as e:
            return error_response("open_repair_file", e)
        return {
            "status": "ok",
            "message": f"Loaded board: {summary.board_model or path.name}",
            "summary": summary.to_dict(),
        }


def _get_board_info_handler() -> dict[str, Any]:
    """Get summary information about the currently loaded repair file."""
    from .. import state

    with request_scope():
        try:
            return state.get_summary().to_dict()
        except PcbRepairError as e:
            return error_response("get_board_info", e)


def _list_components_handler(limit: int = 100, offset: int = 0) -> dict[str, Any]:
    """List placed components with their BOM part numbers (paginated).

    Args:
        limit: Maximum number of components to return. Default: 100.
        offset: Number of components to skip. Default: 0.
    """
    from .. import state

    with request_scope():
        try:
            if limit < 1 or offset < 0:
                raise ValidationError("limit must be >= 1 and offset >= 0", field="limit")
            repair_file = state.get_file()
        except PcbRepairError as e:
            return error_response("list_components", e)

        symbols = repair_file.content.symbols
        footprints = repair_file.footprints
        page = symbols[offset : offset + limit]
        components = []
        for sym in page:
            bom = repair_file.description.component_for(sym.refdes)
            fp = footprints.get(sym.refdes)
            components.append(
                {
                    **sym.to_dict(),
                    "part_number": bom.part_number if bom else None,
                    "pin_count": len(fp.pins) if fp else 0,
                }
            )
        return {
            "count": len(symbols),
            "returned": len(page),
            "offset": offset,
            "has_more": offset + limit < len(symbols),
            "components": components,
        }


def _find_component_handler(refdes: str) -> dict[str, Any]:
    """Find a component by reference designator (e.g., 'U1', 'C12').

    Args:
        refdes: The reference designator to search for.
    """
    from .. import state

    with request_scope():
        try:
            repair_file = state.get_file()
        except PcbRepairError as e:
            return error_response("find_component", e)

        symbols = [s for s in repair_file.content.symbols if s.refdes == refdes]
        footprint = repair_file.footprints.get(refdes)
        bom = repair_file.description.component_for(refdes)
        if not symbols and footprint is None and bom is None:
            return {"found": False, "message": f"No component with refdes '{refdes}'"}
        return {
            "found": True,
            "refdes": refdes,
            "symbol": symbols[0].to_dict() if symbols else None,
            "bom": bom.to_dict() if bom else None,
            "footprint": footprint.to_dict() if footprint else None,
        }


def _get_footprint_handler(refdes: str) -> dict[str, Any]:
    """Get the centred pin geometry (mm) of one component.

    Args:
        refdes: The reference designator of the component.
    """
    from .. import state

    with request_scope():
        try:
            repair_file = state.get_file()
        except PcbRepairError as e:
            return error_response("get_footprint", e)

        footprint = repair_file.footprints.get(refdes)
        if footprint is None:
            return {"found": False, "message": f"No footprint for refdes '{refdes}'"}
        return {"found": True, "footprint": footprint.to_dict()}


def _list_net_pins_handler(net_name: str) -> dict[str, Any]:
    """List every pin connected to a net.

    Args:
        net_name: Net name, matched exactly (e.g., 'GND').
    """
    from .. import state
    from ..schema.interpret import display_pin_name, effective_pin_number

    with request_scope():
        try:
            repair_file = state.get_file()
        except PcbRepairError as e:
            return error_response("list_net_pins", e)

        pins = []
        for pin in repair_file.content.pins:
            if pin.net_name != net_name:
                continue
            number = effective_pin_number(pin)
            pins.append(
                {
                    "refdes": pin.refdes,
                    "number": number,
                    "name": display_pin_name(pin, number),
                    "test_point": pin.test_point,
                }
            )
        return {"net_name": net_name, "pin_count": len(pins), "pins": pins}


register_tool(
    name="open_repair_file",
    description="Open an ASUS .fz or ASRock .cae PCB repair file for analysis.",
    handler=_open_repair_file_handler,
    category="project",
)

register_tool(
    name="get_board_info",
    description="Get board model, revision, unit and record counts of the loaded file.",
    handler=_get_board_info_handler,
    category="project",
)

register_tool(
    name="list_components",
    description="List placed components with part numbers and pin counts (paginated).",
    handler=_list_components_handler,
    category="project",
)

register_tool(
    name="find_component",
    description="Find a component by refdes: symbol, BOM line and footprint pins.",
    handler=_find_component_handler,
    category="project",
)

register_tool(
    name="get_footprint",
    description="Get the pin geometry of one component in mm, centred on its origin.",
    handler=_get_footprint_handler,
    category="project",
)

register_tool(
    name="list_net_pins",
    description="List the component pins connected to a net.",
    handler=_list_net_pins_handler,
    category="nets",
)
