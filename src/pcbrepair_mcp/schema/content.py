"""Typed records of the content document (symbols, pins, vias, graphics)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any


class Unit(Enum):
    """Length unit of every coordinate and radius in a content document."""

    MILS = "mils"
    MILLIMETERS = "mm"


@dataclass(frozen=True)
class Symbol:
    """A placed component symbol."""

    refdes: str  # e.g. "U1"
    insertion_code: int
    sym_name: str
    mirrored: bool
    rotation: int  # degrees

    def to_dict(self) -> dict[str, Any]:
        return {
            "refdes": self.refdes,
            "insertion_code": self.insertion_code,
            "sym_name": self.sym_name,
            "mirrored": self.mirrored,
            "rotation": self.rotation,
        }


@dataclass(frozen=True)
class Pin:
    """A component pin as stored in the file, in document units.

    Also described as a "Net" record. The two names refer to the same row
    shape.
    """

    net_name: str
    refdes: str
    pin_number: str
    pin_name: str
    x: Decimal
    y: Decimal
    test_point: str
    radius: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "net_name": self.net_name,
            "refdes": self.refdes,
            "pin_number": self.pin_number,
            "pin_name": self.pin_name,
            "x": float(self.x),
            "y": float(self.y),
            "test_point": self.test_point,
            "radius": float(self.radius),
        }


@dataclass(frozen=True)
class TestVia:
    """A test via, in document units."""

    __test__ = False  # not a pytest class

    testvia: str
    net_name: str
    refdes: str
    pin_number: str
    pin_name: str
    x: Decimal
    y: Decimal
    test_point: str
    radius: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "testvia": self.testvia,
            "net_name": self.net_name,
            "refdes": self.refdes,
            "pin_number": self.pin_number,
            "pin_name": self.pin_name,
            "x": float(self.x),
            "y": float(self.y),
            "test_point": self.test_point,
            "radius": float(self.radius),
        }


@dataclass(frozen=True)
class GraphicData:
    """A graphic primitive attached to a symbol. Fields are kept raw."""

    graphic_data_name: str
    graphic_data_number: int
    record_tag: str
    graphic_data: tuple[str, ...]  # 9 raw fields
    subclass: str
    sym_name: str
    refdes: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "graphic_data_name": self.graphic_data_name,
            "graphic_data_number": self.graphic_data_number,
            "record_tag": self.record_tag,
            "graphic_data": list(self.graphic_data),
            "subclass": self.subclass,
            "sym_name": self.sym_name,
            "refdes": self.refdes,
        }


@dataclass(frozen=True)
class ClassedGraphicData:
    """A graphic primitive tagged with a class/subclass. Fields are kept raw."""

    class_name: str
    subclass: str
    graphic_data_name: str
    graphic_data_number: int
    record_tag: str
    graphic_data: tuple[str, ...]  # 9 raw fields
    net_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "class": self.class_name,
            "subclass": self.subclass,
            "graphic_data_name": self.graphic_data_name,
            "graphic_data_number": self.graphic_data_number,
            "record_tag": self.record_tag,
            "graphic_data": list(self.graphic_data),
            "net_name": self.net_name,
        }


@dataclass(frozen=True)
class ParsedContent:
    """Every record of a content document, in file order."""

    unit: Unit = Unit.MILS
    symbols: tuple[Symbol, ...] = ()
    pins: tuple[Pin, ...] = ()
    testvias: tuple[TestVia, ...] = ()
    graphic_data: tuple[GraphicData, ...] = ()
    classed_graphic_data: tuple[ClassedGraphicData, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "unit": self.unit.value,
            "symbols": [s.to_dict() for s in self.symbols],
            "pins": [p.to_dict() for p in self.pins],
            "testvias": [v.to_dict() for v in self.testvias],
            "graphic_data": [g.to_dict() for g in self.graphic_data],
            "classed_graphic_data": [g.to_dict() for g in self.classed_graphic_data],
        }
