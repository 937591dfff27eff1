"""Interpreted footprint models and the board summary."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class InterpretedPin:
    """A footprint pin in millimetres, relative to the footprint centroid."""

    name: str
    number: str
    x_mm: Decimal
    y_mm: Decimal
    radius_mm: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "number": self.number,
            "x_mm": float(self.x_mm),
            "y_mm": float(self.y_mm),
            "radius_mm": float(self.radius_mm),
        }


@dataclass(frozen=True)
class FootprintInfo:
    """The pins of one component, centred on their own mean position."""

    name: str
    pins: tuple[InterpretedPin, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "pin_count": len(self.pins),
            "pins": [p.to_dict() for p in self.pins],
        }


@dataclass(frozen=True)
class BoardSummary:
    """High-level summary of a decoded repair file."""

    board_model: str
    revision: str
    extended_board_model: str
    extended_revision: str
    part_number: str
    unit: str
    key: str  # "none", "fz" or "cae"
    symbol_count: int
    pin_count: int
    testvia_count: int
    graphic_data_count: int
    classed_graphic_data_count: int
    footprint_count: int
    net_count: int
    bom_line_count: int
    file_path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "board_model": self.board_model,
            "revision": self.revision,
            "extended_board_model": self.extended_board_model,
            "extended_revision": self.extended_revision,
            "part_number": self.part_number,
            "unit": self.unit,
            "key": self.key,
            "symbol_count": self.symbol_count,
            "pin_count": self.pin_count,
            "testvia_count": self.testvia_count,
            "graphic_data_count": self.graphic_data_count,
            "classed_graphic_data_count": self.classed_graphic_data_count,
            "footprint_count": self.footprint_count,
            "net_count": self.net_count,
            "bom_line_count": self.bom_line_count,
        }
        if self.file_path:
            d["file_path"] = self.file_path
        return d
