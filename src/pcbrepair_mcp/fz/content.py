"""Parser for the decompressed content document.

The content document is a line-oriented, ``!``-delimited text dialect::

    A!UNIT!mils
    A!REFDES!COMP_INSERTION_CODE!SYM_NAME!SYM_MIRROR!SYM_ROTATE!
    S!U1!1!SOIC8!NO!90!
    A!NET_NAME!REFDES!PIN_NUMBER!PIN_NAME!PIN_X!PIN_Y!TEST_POINT!RADIUS!
    S!GND!U1!4!GND!100,5!200!!12!

``A`` rows are annotations naming the section that follows; ``S`` rows are
data whose meaning depends on the most recent section annotation. The
parser carries that context as an explicit :class:`SectionState`.
"""

from __future__ import annotations

import csv
import io
import re
from collections.abc import Callable, Iterator
from decimal import Decimal, InvalidOperation
from enum import Enum, auto

from ..exceptions import BadDecimalError, BadIntegerError, MalformedRecordError
from ..schema.content import (
    ClassedGraphicData,
    GraphicData,
    ParsedContent,
    Pin,
    Symbol,
    TestVia,
    Unit,
)

U16_MAX = 0xFFFF
U64_MAX = 0xFFFFFFFFFFFFFFFF

_INTEGER_RE = re.compile(r"\+?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


class SectionState(Enum):
    """Which record kind ``S`` rows currently describe."""

    UNKNOWN = auto()
    SYMBOL = auto()
    PIN = auto()
    VIA = auto()  # no record type; rows are dropped
    TEST_VIA = auto()
    GRAPHIC_DATA = auto()
    CLASSED_GRAPHIC_DATA = auto()


SECTION_NAMES: dict[str, SectionState] = {
    "REFDES": SectionState.SYMBOL,
    "NET_NAME": SectionState.PIN,
    "VIAID": SectionState.VIA,
    "TESTVIA": SectionState.TEST_VIA,
    "GRAPHIC_DATA_NAME": SectionState.GRAPHIC_DATA,
    "CLASS": SectionState.CLASSED_GRAPHIC_DATA,
}

# Sub-annotations inside the current section; they leave the state alone.
PASSTHROUGH_SECTIONS = frozenset({"LOGOInfo", "UnDrawSym"})

# Minimum field count of an ``S`` row per state, including the ``S`` tag.
RECORD_ARITY: dict[SectionState, int] = {
    SectionState.SYMBOL: 6,
    SectionState.PIN: 9,
    SectionState.TEST_VIA: 10,
    SectionState.GRAPHIC_DATA: 16,
    SectionState.CLASSED_GRAPHIC_DATA: 16,
}


def parse_integer(text: str, line: int | None = None, maximum: int = U64_MAX) -> int:
    """Parse a strict unsigned base-10 integer no larger than ``maximum``."""
    if not _INTEGER_RE.fullmatch(text):
        raise BadIntegerError(f"Invalid integer {text!r}", line=line, value=text)
    value = int(text)
    if value > maximum:
        raise BadIntegerError(f"Integer {text!r} exceeds {maximum}", line=line, value=text)
    return value


def parse_decimal(text: str, line: int | None = None) -> Decimal:
    """Parse a decimal that may use ``,`` as its decimal separator."""
    normalized = text.replace(",", ".")
    if not _DECIMAL_RE.fullmatch(normalized):
        raise BadDecimalError(f"Invalid decimal {text!r}", line=line, value=text)
    try:
        return Decimal(normalized)
    except InvalidOperation as e:
        raise BadDecimalError(f"Invalid decimal {text!r}", line=line, value=text) from e


def _rows(content: bytes) -> Iterator[tuple[int, list[str]]]:
    """Yield ``(line_number, fields)`` for every non-blank row."""
    text = content.decode("utf-8", errors="replace")
    reader = csv.reader(io.StringIO(text, newline=""), delimiter="!")
    try:
        for fields in reader:
            if fields:
                yield reader.line_num, fields
    except csv.Error as e:
        raise MalformedRecordError(f"Unreadable row: {e}", line=reader.line_num) from e


def _symbol(f: list[str], line: int) -> Symbol:
    return Symbol(
        refdes=f[1],
        insertion_code=parse_integer(f[2], line),
        sym_name=f[3],
        mirrored=f[4] == "YES",
        rotation=parse_integer(f[5], line, maximum=U16_MAX),
    )


def _pin(f: list[str], line: int) -> Pin:
    return Pin(
        net_name=f[1],
        refdes=f[2],
        pin_number=f[3],
        pin_name=f[4],
        x=parse_decimal(f[5], line),
        y=parse_decimal(f[6], line),
        test_point=f[7],
        radius=parse_decimal(f[8], line),
    )


def _testvia(f: list[str], line: int) -> TestVia:
    return TestVia(
        testvia=f[1],
        net_name=f[2],
        refdes=f[3],
        pin_number=f[4],
        pin_name=f[5],
        x=parse_decimal(f[6], line),
        y=parse_decimal(f[7], line),
        test_point=f[8],
        radius=parse_decimal(f[9], line),
    )


def _graphic_data(f: list[str], line: int) -> GraphicData:
    return GraphicData(
        graphic_data_name=f[1],
        graphic_data_number=parse_integer(f[2], line),
        record_tag=f[3],
        graphic_data=tuple(f[4:13]),
        subclass=f[13],
        sym_name=f[14],
        refdes=f[15],
    )


def _classed_graphic_data(f: list[str], line: int) -> ClassedGraphicData:
    return ClassedGraphicData(
        class_name=f[1],
        subclass=f[2],
        graphic_data_name=f[3],
        graphic_data_number=parse_integer(f[4], line),
        record_tag=f[5],
        graphic_data=tuple(f[6:15]),
        net_name=f[15],
    )


_BUILDERS: dict[SectionState, Callable[[list[str], int], object]] = {
    SectionState.SYMBOL: _symbol,
    SectionState.PIN: _pin,
    SectionState.TEST_VIA: _testvia,
    SectionState.GRAPHIC_DATA: _graphic_data,
    SectionState.CLASSED_GRAPHIC_DATA: _classed_graphic_data,
}


def parse_content(content: bytes) -> ParsedContent:
    """Parse a decompressed content document into typed records.

    Args:
        content: The decompressed content bytes.

    Returns:
        The parsed records, in file order.

    Raises:
        MalformedRecordError: If a row is too short for its section.
        BadIntegerError: If an integer field is malformed.
        BadDecimalError: If a coordinate or radius field is malformed.
    """
    state = SectionState.UNKNOWN
    unit = Unit.MILS
    records: dict[SectionState, list[object]] = {s: [] for s in _BUILDERS}

    for line, fields in _rows(content):
        kind = fields[0]
        if kind == "A":
            if len(fields) < 2:
                raise MalformedRecordError("Annotation row without a section name", line=line)
            section = fields[1]
            if section == "UNIT":
                if len(fields) < 3:
                    raise MalformedRecordError("UNIT annotation without a value", line=line)
                unit = Unit.MILS if fields[2] == "mils" else Unit.MILLIMETERS
            elif section in SECTION_NAMES:
                state = SECTION_NAMES[section]
            elif section not in PASSTHROUGH_SECTIONS:
                state = SectionState.UNKNOWN
        elif kind == "S":
            builder = _BUILDERS.get(state)
            if builder is None:
                continue
            arity = RECORD_ARITY[state]
            if len(fields) < arity:
                raise MalformedRecordError(
                    f"{state.name} row has {len(fields)} fields, expected at least {arity}",
                    line=line,
                    section=state.name,
                )
            records[state].append(builder(fields, line))

    return ParsedContent(
        unit=unit,
        symbols=tuple(records[SectionState.SYMBOL]),  # type: ignore[arg-type]
        pins=tuple(records[SectionState.PIN]),  # type: ignore[arg-type]
        testvias=tuple(records[SectionState.TEST_VIA]),  # type: ignore[arg-type]
        graphic_data=tuple(records[SectionState.GRAPHIC_DATA]),  # type: ignore[arg-type]
        classed_graphic_data=tuple(  # type: ignore[arg-type]
            records[SectionState.CLASSED_GRAPHIC_DATA]
        ),
    )
