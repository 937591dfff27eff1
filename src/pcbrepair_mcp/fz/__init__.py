"""Decoder and parsers for ASUS FZ and ASRock CAE repair files."""

from .container import DecodedContainer, decode, encode, try_decode
from .content import SectionState, parse_content
from .description import parse_description
from .document import RepairFile

__all__ = [
    "DecodedContainer",
    "RepairFile",
    "SectionState",
    "decode",
    "encode",
    "parse_content",
    "parse_description",
    "try_decode",
]
