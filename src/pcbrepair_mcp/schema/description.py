"""Typed data models for the description document (board identity and BOM)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Component:
    """One bill-of-materials line."""

    part_number: str
    description: str
    quantity: int
    location: tuple[str, ...]  # refdes tokens, in file order
    part_number2: str  # alternate part number

    def to_dict(self) -> dict[str, Any]:
        return {
            "part_number": self.part_number,
            "description": self.description,
            "quantity": self.quantity,
            "location": list(self.location),
            "part_number2": self.part_number2,
        }


@dataclass(frozen=True)
class Description:
    """Board identity plus its bill of materials."""

    board_model: str
    revision: str
    extended_board_model: str
    extended_revision: str
    part_number: str
    components: tuple[Component, ...] = ()

    def component_for(self, refdes: str) -> Component | None:
        """Return the BOM line whose location lists ``refdes``, if any."""
        for component in self.components:
            if refdes in component.location:
                return component
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "board_model": self.board_model,
            "revision": self.revision,
            "extended_board_model": self.extended_board_model,
            "extended_revision": self.extended_revision,
            "part_number": self.part_number,
            "components": [c.to_dict() for c in self.components],
        }
