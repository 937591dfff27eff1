"""Decode ASUS FZ / ASRock CAE PCB repair files and serve them over MCP.

Core pipeline::

    decoded = decode(raw_bytes)
    content = parse_content(decoded.content)
    description = parse_description(decoded.description)
    footprints = interpret(content)
"""

from .fz import DecodedContainer, RepairFile, decode, parse_content, parse_description
from .schema import interpret

__version__ = "0.1.0"

__all__ = [
    "DecodedContainer",
    "RepairFile",
    "decode",
    "interpret",
    "parse_content",
    "parse_description",
]
