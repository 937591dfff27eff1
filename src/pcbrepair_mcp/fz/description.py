"""Parser for the decompressed description document.

Line 0 is a ``|``-separated header with the board identity. The rest is a
tab-separated bill of materials whose first two rows (the header line
itself and a column-title row) are skipped::

    X570-A|1.02|X570-A PRIME|1.02A|60MB10E0-MB0A01\\r\\n
    PART NO\\tDESCRIPTION\\tQTY\\tLOCATION\\tPART NO 2\\r\\n
    02G010006320\\tCAP 10UF 6.3V\\t2\\tC1 C2\\t\\r\\n
"""

from __future__ import annotations

import csv
import io

from ..exceptions import MalformedRecordError, MissingHeaderError
from ..schema.description import Component, Description
from .content import parse_integer

HEADER_FIELDS = 5
SKIPPED_TABLE_ROWS = 2
COMPONENT_FIELDS = 5


def parse_description(description: bytes) -> Description:
    """Parse a decompressed description document.

    Raises:
        MissingHeaderError: If the header has fewer than five fields.
        BadIntegerError: If a BOM quantity is not an integer.
    """
    text = description.decode("utf-8", errors="replace")
    header = text.split("\r\n", 1)[0].split("|")
    if len(header) < HEADER_FIELDS:
        raise MissingHeaderError(
            f"Description header has {len(header)} fields, expected {HEADER_FIELDS}",
            line=1,
        )

    reader = csv.reader(io.StringIO(text, newline=""), delimiter="\t")
    components: list[Component] = []
    seen = 0
    try:
        for row in reader:
            if not row:
                continue
            seen += 1
            if seen <= SKIPPED_TABLE_ROWS or len(row) < COMPONENT_FIELDS:
                continue
            components.append(
                Component(
                    part_number=row[0],
                    description=row[1],
                    quantity=parse_integer(row[2], reader.line_num),
                    location=tuple(row[3].split()),
                    part_number2=row[4],
                )
            )
    except csv.Error as e:
        raise MalformedRecordError(f"Unreadable BOM row: {e}", line=reader.line_num) from e

    return Description(
        board_model=header[0],
        revision=header[1],
        extended_board_model=header[2],
        extended_revision=header[3],
        part_number=header[4],
        components=tuple(components),
    )
