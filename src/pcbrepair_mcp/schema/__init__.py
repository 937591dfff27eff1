"""Typed data models for repair file contents."""

from .content import (
    ClassedGraphicData,
    GraphicData,
    ParsedContent,
    Pin,
    Symbol,
    TestVia,
    Unit,
)
from .description import Component, Description
from .footprint import BoardSummary, FootprintInfo, InterpretedPin
from .interpret import interpret, summarize

__all__ = [
    "BoardSummary",
    "ClassedGraphicData",
    "Component",
    "Description",
    "FootprintInfo",
    "GraphicData",
    "InterpretedPin",
    "ParsedContent",
    "Pin",
    "Symbol",
    "TestVia",
    "Unit",
    "interpret",
    "summarize",
]
