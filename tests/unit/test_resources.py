"""Tests for MCP resources."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from pcbrepair_mcp import state
from pcbrepair_mcp.resources.board import (
    board_bom,
    board_components,
    board_summary,
    footprint_detail,
)


@pytest.mark.usefixtures("clean_state")
class TestNotLoaded:
    @pytest.mark.parametrize("render", [board_summary, board_components, board_bom])
    def test_error_payload(self, render: Callable[[], str]) -> None:
        assert "open_repair_file" in json.loads(render())["error"]

    def test_footprint_error_payload(self) -> None:
        assert "error" in json.loads(footprint_detail("U1"))


class TestResources:
    @pytest.fixture(autouse=True)
    def _load(self, clean_state: None, repair_file_path: Path) -> None:
        state.load_file(str(repair_file_path))

    def test_board_summary(self) -> None:
        parsed = json.loads(board_summary())
        assert parsed["board_model"] == "X570-A"
        assert parsed["key"] == "fz"

    def test_board_components(self) -> None:
        parsed = json.loads(board_components())
        assert parsed["count"] == 2
        assert [c["refdes"] for c in parsed["components"]] == ["U1", "R1"]

    def test_board_bom(self) -> None:
        parsed = json.loads(board_bom())
        assert parsed["part_number"] == "60MB10E0-MB0A01"
        assert len(parsed["components"]) == 3

    def test_footprint_detail(self) -> None:
        parsed = json.loads(footprint_detail("R1"))
        assert parsed["name"] == "R1"
        assert [p["number"] for p in parsed["pins"]] == ["1", "2"]

    def test_unknown_footprint(self) -> None:
        assert "No footprint" in json.loads(footprint_detail("Z99"))["error"]
