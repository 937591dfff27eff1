"""Tests for the S-expression writer and .kicad_mod export."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from pcbrepair_mcp.export import (
    build_footprint,
    default_library_dir,
    export_footprints,
    footprint_to_string,
)
from pcbrepair_mcp.export.kicad_mod import footprint_filename
from pcbrepair_mcp.fz import parse_content
from pcbrepair_mcp.schema import FootprintInfo, InterpretedPin, interpret
from pcbrepair_mcp.sexp import SExp, Symbol, format_number, quote


def _footprint(name: str = "U1") -> FootprintInfo:
    return FootprintInfo(
        name=name,
        pins=(
            InterpretedPin("GND", "1", Decimal("-2.540"), Decimal("0"), Decimal("0.254")),
            InterpretedPin("VCC", "2", Decimal("2.540"), Decimal("0"), Decimal("0.254")),
        ),
    )


def _children(root: SExp, name: str) -> list[SExp]:
    return [c for c in root.children if isinstance(c, SExp) and c.name == name]


class TestSExp:
    @pytest.mark.parametrize(
        "value,text",
        [
            (Decimal("1.2700"), "1.27"),
            (Decimal("-0.000"), "0"),
            (Decimal("100"), "100"),
            (Decimal("1E+2"), "100"),
            (Decimal("0.1234567"), "0.123457"),
            (Decimal("-0.0000001"), "0"),
            (7, "7"),
        ],
    )
    def test_format_number(self, value: Decimal | int, text: str) -> None:
        assert format_number(value) == text

    def test_quote_escapes(self) -> None:
        assert quote('a "b" \\c') == '"a \\"b\\" \\\\c"'

    def test_atoms_on_one_line(self) -> None:
        node = SExp("at", Decimal("1.5"), Decimal("-2"))
        assert node.to_string() == "(at 1.5 -2)"

    def test_symbol_unquoted(self) -> None:
        node = SExp("layers", Symbol("F.Cu"), "F.Cu")
        assert node.to_string() == '(layers F.Cu "F.Cu")'

    def test_nested_lists_indented(self) -> None:
        node = SExp("pad", "1", Symbol("smd"), SExp("at", 0, 0), SExp("size", 1, 1))
        assert node.to_string() == '(pad "1" smd\n  (at 0 0)\n  (size 1 1)\n)'

    def test_deeper_nesting(self) -> None:
        node = SExp("a", SExp("b", SExp("c", 1)))
        assert node.to_string() == "(a\n  (b\n    (c 1)\n  )\n)"

    def test_atom_after_list_rejected(self) -> None:
        node = SExp("bad", SExp("x", 1), "late")
        with pytest.raises(ValueError, match="follows a nested list"):
            node.to_string()


class TestFootprint:
    def test_header(self) -> None:
        text = footprint_to_string(_footprint(), "x570")
        assert text.startswith('(footprint "U1"\n')
        assert "  (version 20240108)\n" in text
        assert "  (generator pcbrepair_fpextract)\n" in text
        assert '  (layer "F.Cu")\n' in text
        assert '(descr "Automatically generated footprint from x570")' in text
        assert text.endswith(")\n")

    def test_properties(self) -> None:
        root = build_footprint(_footprint(), "x570")
        props = _children(root, "property")
        assert [p.children[:2] for p in props] == [["Reference", "REF**"], ["Value", "U1"]]

    def test_pads(self) -> None:
        root = build_footprint(_footprint(), "x570")
        pads = _children(root, "pad")
        assert len(pads) == 2
        first = pads[0].to_string()
        assert first.startswith('(pad "1" smd circle\n')
        assert "(at -2.54 0)" in first
        assert "(size 0.254 0.254)" in first
        assert "(layers F.Cu F.Paste F.Mask)" in first

    def test_balanced_parentheses(self, sample_content: bytes) -> None:
        for info in interpret(parse_content(sample_content)).values():
            text = footprint_to_string(info, "board")
            assert text.count("(") == text.count(")")


class TestExport:
    def test_filename_sanitised(self) -> None:
        assert footprint_filename("U1") == "U1.kicad_mod"
        assert footprint_filename('J1/A:"x"') == "J1_A__x_.kicad_mod"

    def test_default_library_dir(self, tmp_path: Path) -> None:
        assert default_library_dir(tmp_path / "x570.fz") == tmp_path / "x570.pretty"

    def test_export_writes_one_file_per_footprint(
        self, tmp_path: Path, sample_content: bytes
    ) -> None:
        footprints = interpret(parse_content(sample_content))
        out = tmp_path / "lib" / "board.pretty"
        written = export_footprints(footprints, out, "board")
        assert [p.name for p in written] == ["U1.kicad_mod", "R1.kicad_mod"]
        assert all(p.parent == out for p in written)
        text = (out / "R1.kicad_mod").read_text(encoding="utf-8")
        assert text.startswith('(footprint "R1"')
        assert "(at -1.27 0)" in text

    def test_export_empty(self, tmp_path: Path) -> None:
        assert export_footprints({}, tmp_path / "empty.pretty", "board") == []
        assert (tmp_path / "empty.pretty").is_dir()

    def test_clashing_filenames_get_suffix(self, tmp_path: Path) -> None:
        footprints = {name: _footprint(name) for name in ("U1/A", "U1_A", "u1_a")}
        out = tmp_path / "clash.pretty"
        written = export_footprints(footprints, out, "board")
        assert [p.name for p in written] == [
            "U1_A.kicad_mod",
            "U1_A_2.kicad_mod",
            "u1_a_3.kicad_mod",
        ]
        assert len({p.name.casefold() for p in out.iterdir()}) == 3
        text = (out / "U1_A_2.kicad_mod").read_text(encoding="utf-8")
        assert text.startswith('(footprint "U1_A"')
