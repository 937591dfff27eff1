"""S-expression writer for KiCad file formats."""

from .node import SExp, Symbol, format_number, quote

__all__ = ["SExp", "Symbol", "format_number", "quote"]
