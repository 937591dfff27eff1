"""Shared fixtures: synthetic content/description documents and containers."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from pcbrepair_mcp.fz import encode

SAMPLE_CONTENT = "\r\n".join(
    [
        "A!UNIT!mils",
        "A!REFDES!COMP_INSERTION_CODE!SYM_NAME!SYM_MIRROR!SYM_ROTATE!",
        "S!U1!1!SOIC8!NO!90!",
        "S!R1!2!R0402!YES!180!",
        "A!NET_NAME!REFDES!PIN_NUMBER!PIN_NAME!PIN_X!PIN_Y!TEST_POINT!RADIUS!",
        "S!GND!U1!1!GND!100!200!!10!",
        "S!VCC!U1!2!VCC!300!200!!10!",
        "S!N1!R1!0!1!1000,5!50!T!8!",
        "S!N2!R1!!2!1100,5!50!!8!",
        "A!VIAID!VIA_X!VIA_Y!",
        "S!100!200!",
        "A!TESTVIA!NET_NAME!REFDES!PIN_NUMBER!PIN_NAME!VIA_X!VIA_Y!TEST_POINT!RADIUS!",
        "S!TV1!GND!U1!1!GND!10!20!T!5!",
        "A!GRAPHIC_DATA_NAME!GRAPHIC_DATA_NUMBER!RECORD_TAG!GRAPHIC_DATA_1!GRAPHIC_DATA_2!"
        "GRAPHIC_DATA_3!GRAPHIC_DATA_4!GRAPHIC_DATA_5!GRAPHIC_DATA_6!GRAPHIC_DATA_7!"
        "GRAPHIC_DATA_8!GRAPHIC_DATA_9!SUBCLASS!SYM_NAME!REFDES!",
        "S!LINE!1!1 0!0!0!100!0!5!!!!!SILKSCREEN_TOP!SOIC8!U1!",
        "A!CLASS!SUBCLASS!GRAPHIC_DATA_NAME!GRAPHIC_DATA_NUMBER!RECORD_TAG!GRAPHIC_DATA_1!"
        "GRAPHIC_DATA_2!GRAPHIC_DATA_3!GRAPHIC_DATA_4!GRAPHIC_DATA_5!GRAPHIC_DATA_6!"
        "GRAPHIC_DATA_7!GRAPHIC_DATA_8!GRAPHIC_DATA_9!NET_NAME!",
        "S!BOARD GEOMETRY!OUTLINE!LINE!1!1 0!0!0!1000!0!10!!!!!!",
        "",
    ]
).encode()

SAMPLE_DESCRIPTION = (
    "X570-A|1.02|X570-A PRIME|1.02A|60MB10E0-MB0A01\r\n"
    "PART NO\tDESCRIPTION\tQTY\tLOCATION\tPART NO 2\r\n"
    "02G010006320\tCAP 10UF 6.3V\t2\tC1 C2\t02G010006321\r\n"
    "03G000000010\tIC SOIC8\t1\tU1\t\r\n"
    "06G000000001\tRES 10K 0402\t1\tR1\t\r\n"
    "\r\n"
).encode()


@pytest.fixture()
def sample_content() -> bytes:
    return SAMPLE_CONTENT


@pytest.fixture()
def sample_description() -> bytes:
    return SAMPLE_DESCRIPTION


@pytest.fixture()
def plain_container() -> bytes:
    return encode(SAMPLE_CONTENT, SAMPLE_DESCRIPTION)


@pytest.fixture()
def repair_file_path(tmp_path: Path) -> Path:
    """A FZ-encrypted sample written to disk."""
    path = tmp_path / "x570.fz"
    path.write_bytes(encode(SAMPLE_CONTENT, SAMPLE_DESCRIPTION, key_name="fz"))
    return path


@pytest.fixture()
def clean_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate module-level server state between tests."""
    from pcbrepair_mcp import security, state
    from pcbrepair_mcp.cache import get_repair_file_cache

    monkeypatch.delenv("PCBREPAIR_TRUSTED_ROOTS", raising=False)
    state.clear()
    security.reset_validator()
    get_repair_file_cache().clear()
    yield
    state.clear()
    security.reset_validator()
    get_repair_file_cache().clear()
