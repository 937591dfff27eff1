"""Write interpreted footprints as KiCad ``.kicad_mod`` files.

Each footprint becomes one file inside a ``<name>.pretty`` library
directory. Pins are written as circular SMD pads centred on the footprint
origin.
"""

from __future__ import annotations

import re
from decimal import Decimal
from pathlib import Path

from ..constants import KICAD_GENERATOR
from ..logging_config import create_logger
from ..schema.footprint import FootprintInfo
from ..sexp import SExp, Symbol

logger = create_logger(__name__)

# KiCad 8 footprint file format
KICAD_MOD_VERSION = 20240108
PAD_LAYERS = ("F.Cu", "F.Paste", "F.Mask")

_UNSAFE_FILENAME = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def _effects() -> SExp:
    return SExp("effects", SExp("font", SExp("size", 1, 1), SExp("thickness", Decimal("0.15"))))


def _property(name: str, value: str, y: Decimal, layer: str) -> SExp:
    return SExp(
        "property",
        name,
        value,
        SExp("at", 0, y),
        SExp("layer", layer),
        _effects(),
    )


def build_footprint(info: FootprintInfo, source_name: str) -> SExp:
    """Build the S-expression tree of one footprint."""
    root = SExp(
        "footprint",
        info.name,
        SExp("version", KICAD_MOD_VERSION),
        SExp("generator", Symbol(KICAD_GENERATOR)),
        SExp("layer", "F.Cu"),
        SExp("descr", f"Automatically generated footprint from {source_name}"),
        SExp("tags", "generated"),
        _property("Reference", "REF**", Decimal(0), "F.SilkS"),
        _property("Value", info.name, Decimal("1.5"), "F.Fab"),
    )
    for pin in info.pins:
        root.append(
            SExp(
                "pad",
                pin.number,
                Symbol("smd"),
                Symbol("circle"),
                SExp("at", pin.x_mm, pin.y_mm),
                SExp("size", pin.radius_mm, pin.radius_mm),
                SExp("layers", *(Symbol(layer) for layer in PAD_LAYERS)),
            )
        )
    return root


def footprint_to_string(info: FootprintInfo, source_name: str) -> str:
    return build_footprint(info, source_name).to_string() + "\n"


def footprint_filename(name: str) -> str:
    """File name for a footprint, with characters unsafe on any OS replaced."""
    return _UNSAFE_FILENAME.sub("_", name) + ".kicad_mod"


def _unique_filename(name: str, taken: set[str]) -> str:
    """``footprint_filename`` with ``_2``, ``_3``... appended on a clash.

    Clashes are compared case-insensitively, as on Windows and macOS.
    """
    filename = footprint_filename(name)
    stem = filename[: -len(".kicad_mod")]
    n = 1
    while filename.casefold() in taken:
        n += 1
        filename = f"{stem}_{n}.kicad_mod"
    if n > 1:
        logger.warning("Footprint %r clashes with an earlier file name, writing %s", name, filename)
    taken.add(filename.casefold())
    return filename


def default_library_dir(source: Path) -> Path:
    """``<stem>.pretty`` next to the source file."""
    return source.parent / f"{source.stem}.pretty"


def export_footprints(
    footprints: dict[str, FootprintInfo],
    output_dir: str | Path,
    source_name: str,
) -> list[Path]:
    """Write every footprint into ``output_dir``, creating it if needed.

    Returns:
        The written file paths, in footprint order. Names that would clash
        after sanitising get a numeric suffix.

    Raises:
        OSError: If the directory or a file cannot be written.
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    taken: set[str] = set()
    for info in footprints.values():
        target = out / _unique_filename(info.name, taken)
        target.write_text(footprint_to_string(info, source_name), encoding="utf-8")
        written.append(target)

    logger.info("Wrote %d footprints to %s", len(written), out)
    return written
