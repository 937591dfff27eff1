"""Turn parsed content records into per-component footprint geometry.

Converts raw pin records into millimetres, repairs missing pin numbers and
centres each component's pins on their own centroid so every footprint is
independent of where the part sat on the board.
"""

from __future__ import annotations

from decimal import Decimal

from ..constants import MM_PER_MIL
from .content import ParsedContent, Pin, Unit
from .description import Description
from .footprint import BoardSummary, FootprintInfo, InterpretedPin


def effective_pin_number(pin: Pin) -> str:
    """Pin number, falling back to the pin name when missing or ``"0"``."""
    if pin.pin_number in ("", "0"):
        return pin.pin_name
    return pin.pin_number


def display_pin_name(pin: Pin, number: str) -> str:
    """Pin name, or the net name when the name only repeats the number."""
    if number != pin.pin_name:
        return pin.pin_name
    return pin.net_name


def _to_mm(value: Decimal, unit: Unit) -> Decimal:
    if unit is Unit.MILS:
        return value * MM_PER_MIL
    return value


def _center(name: str, pins: list[InterpretedPin]) -> FootprintInfo:
    count = Decimal(len(pins))
    mean_x = sum((p.x_mm for p in pins), Decimal(0)) / count
    mean_y = sum((p.y_mm for p in pins), Decimal(0)) / count
    return FootprintInfo(
        name=name,
        pins=tuple(
            InterpretedPin(
                name=p.name,
                number=p.number,
                x_mm=p.x_mm - mean_x,
                y_mm=p.y_mm - mean_y,
                radius_mm=p.radius_mm,
            )
            for p in pins
        ),
    )


def interpret(parsed: ParsedContent) -> dict[str, FootprintInfo]:
    """Group pins by refdes into centred, millimetre-based footprints.

    Returns:
        Footprints keyed by refdes, in the order each refdes first appears.
    """
    groups: dict[str, list[InterpretedPin]] = {}
    for pin in parsed.pins:
        number = effective_pin_number(pin)
        groups.setdefault(pin.refdes, []).append(
            InterpretedPin(
                name=display_pin_name(pin, number),
                number=number,
                x_mm=_to_mm(pin.x, parsed.unit),
                y_mm=_to_mm(pin.y, parsed.unit),
                radius_mm=_to_mm(pin.radius, parsed.unit),
            )
        )

    return {name: _center(name, pins) for name, pins in groups.items() if pins}


def count_nets(parsed: ParsedContent) -> int:
    """Number of distinct non-empty net names across all pins."""
    return len({p.net_name for p in parsed.pins if p.net_name})


def summarize(
    content: ParsedContent,
    description: Description,
    footprints: dict[str, FootprintInfo],
    key_name: str | None = None,
    file_path: str | None = None,
) -> BoardSummary:
    """Build a BoardSummary from the parsed documents of one file."""
    return BoardSummary(
        board_model=description.board_model,
        revision=description.revision,
        extended_board_model=description.extended_board_model,
        extended_revision=description.extended_revision,
        part_number=description.part_number,
        unit=content.unit.value,
        key=key_name or "none",
        symbol_count=len(content.symbols),
        pin_count=len(content.pins),
        testvia_count=len(content.testvias),
        graphic_data_count=len(content.graphic_data),
        classed_graphic_data_count=len(content.classed_graphic_data),
        footprint_count=len(footprints),
        net_count=count_nets(content),
        bom_line_count=len(description.components),
        file_path=file_path,
    )
