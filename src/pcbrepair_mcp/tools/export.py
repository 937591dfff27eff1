"""Export tools for the KiCad footprint library and bill of materials."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..exceptions import FileLoadingError, PcbRepairError
from ..logging_config import request_scope
from .registry import error_response, register_tool


def _export_footprints_handler(output_dir: str | None = None) -> dict[str, Any]:
    """Export every component footprint as a KiCad .kicad_mod file.

    Args:
        output_dir: Target directory. Defaults to '<file stem>.pretty' next to
            the repair file.
    """
    from .. import state
    from ..export import default_library_dir, export_footprints
    from ..security import get_validator

    with request_scope():
        try:
            repair_file = state.get_file()
            if output_dir is None:
                base = repair_file.path or Path.cwd() / f"{repair_file.stem}.fz"
                target = default_library_dir(base)
            else:
                target = Path(output_dir)
            target = get_validator().validate_directory(target)
            try:
                written = export_footprints(repair_file.footprints, target, repair_file.stem)
            except OSError as e:
                raise FileLoadingError(
                    f"Cannot write to {target}: {e}", file_path=str(target)
                ) from e
        except PcbRepairError as e:
            return error_response("export_footprints", e)

        return {
            "status": "ok",
            "output_dir": str(target),
            "footprint_count": len(written),
            "files": [p.name for p in written],
        }


def _export_bom_handler() -> dict[str, Any]:
    """Export the bill of materials from the description document.

    Each line is flagged with the refdes tokens that have no pins in the
    content document.
    """
    from .. import state

    with request_scope():
        try:
            repair_file = state.get_file()
        except PcbRepairError as e:
            return error_response("export_bom", e)

        footprints = repair_file.footprints
        items = []
        for component in repair_file.description.components:
            item = component.to_dict()
            item["unplaced"] = [r for r in component.location if r not in footprints]
            items.append(item)
        return {
            "board_model": repair_file.description.board_model,
            "line_count": len(items),
            "total_quantity": sum(c.quantity for c in repair_file.description.components),
            "items": items,
        }


register_tool(
    name="export_footprints",
    description="Write all component footprints as a KiCad .pretty library.",
    handler=_export_footprints_handler,
    category="export",
)

register_tool(
    name="export_bom",
    description="Export the bill of materials (part numbers, quantities, locations).",
    handler=_export_bom_handler,
    category="export",
)
