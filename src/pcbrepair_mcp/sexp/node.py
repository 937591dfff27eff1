"""S-expression builder for writing KiCad files.

Nodes are built bottom-up and serialised in KiCad's layout: a list whose
children are all atoms stays on one line, a list with nested lists puts
each nested child on its own indented line.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Union

from ..constants import KICAD_COORD_QUANTUM

AtomValue = Union[str, int, Decimal]


class Symbol(str):
    """An atom written without quotes (keywords such as ``smd`` or ``F.Cu``)."""

    __slots__ = ()


def format_number(value: Decimal | int) -> str:
    """Plain decimal notation, rounded to KiCad resolution, without trailing zeros."""
    if isinstance(value, int):
        return str(value)
    text = format(value.quantize(KICAD_COORD_QUANTUM).normalize(), "f")
    return "0" if text in ("-0", "0") else text


def quote(text: str) -> str:
    """Quote and escape a string atom."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


class SExp:
    """A named S-expression list such as ``(at 1.27 -0.5)``.

    Usage::

        pad = SExp("pad", "1", Symbol("smd"), Symbol("circle"), SExp("at", Decimal("1.27"), 0))
        pad.to_string()  # '(pad "1" smd circle\\n  (at 1.27 0)\\n)'
    """

    __slots__ = ("name", "children")

    def __init__(self, name: str, *children: AtomValue | SExp) -> None:
        self.name = name
        self.children: list[AtomValue | SExp] = list(children)

    def append(self, child: AtomValue | SExp) -> SExp:
        self.children.append(child)
        return self

    @staticmethod
    def _atom(value: AtomValue) -> str:
        if isinstance(value, Symbol):
            return str(value)
        if isinstance(value, str):
            return quote(value)
        return format_number(value)

    def to_string(self, indent: int = 0) -> str:
        head = [self.name]
        nested: list[SExp] = []
        for child in self.children:
            if isinstance(child, SExp):
                nested.append(child)
            elif nested:
                # An atom after a nested list would change meaning if hoisted.
                raise ValueError(f"Atom {child!r} follows a nested list in ({self.name} ...)")
            else:
                head.append(self._atom(child))

        opening = "(" + " ".join(head)
        if not nested:
            return opening + ")"

        pad = "  " * (indent + 1)
        lines = [opening]
        lines.extend(pad + child.to_string(indent + 1) for child in nested)
        return "\n".join(lines) + "\n" + "  " * indent + ")"

    def __repr__(self) -> str:
        return f"SExp(name={self.name!r}, children={len(self.children)})"
