"""Tests for container framing, key trials and the encoder."""

from __future__ import annotations

import struct
import zlib

import pytest

from pcbrepair_mcp.exceptions import (
    ContainerDecodeError,
    CorruptStreamError,
    FramingOutOfBoundsError,
    InvalidMagicError,
    SizeMismatchError,
)
from pcbrepair_mcp.fz import DecodedContainer, container, decode, encode, try_decode
from pcbrepair_mcp.fz.container import KEY_TRIAL_ORDER, locate_description, split_container
from pcbrepair_mcp.fz.crypto import decrypt

CONTENT = b"A!UNIT!mils\r\nA!REFDES!COMP_INSERTION_CODE!SYM_NAME!SYM_MIRROR!SYM_ROTATE!\r\n"
DESCRIPTION = b"X570-A|1.02|X570-A PRIME|1.02A|60MB10E0\r\n"


def _u32(value: int) -> bytes:
    return struct.pack("<I", value)


def _frame(
    content: bytes = CONTENT,
    description: bytes = DESCRIPTION,
    *,
    content_len: int | None = None,
    description_len: int | None = None,
    pointer: int | None = None,
    distance: int | None = None,
    junk: bytes = b"",
    gap: bytes = b"",
) -> bytes:
    """Hand-build a plaintext container, optionally with bad slots."""
    body = _u32(len(content) if content_len is None else content_len)
    body += zlib.compress(content) + junk
    real_pointer = len(body)
    body += _u32(len(description) if description_len is None else description_len)
    body += zlib.compress(description)
    slot = len(body)
    body += _u32(real_pointer if pointer is None else pointer) + gap
    body += _u32(len(body) - slot if distance is None else distance)
    return body


class TestRoundTrip:
    def test_plaintext(self) -> None:
        decoded = decode(encode(CONTENT, DESCRIPTION))
        assert decoded == DecodedContainer(CONTENT, DESCRIPTION, key_name=None)

    @pytest.mark.parametrize("key_name", ["fz", "cae"])
    def test_encrypted(self, key_name: str) -> None:
        decoded = decode(encode(CONTENT, DESCRIPTION, key_name=key_name))
        assert decoded.content == CONTENT
        assert decoded.description == DESCRIPTION
        assert decoded.key_name == key_name

    def test_empty_payloads(self) -> None:
        decoded = decode(encode(b"", b""))
        assert decoded.content == b""
        assert decoded.description == b""

    def test_encoder_writes_distance_four(self) -> None:
        raw = encode(CONTENT, DESCRIPTION)
        assert raw[-4:] == _u32(4)
        pointer = struct.unpack_from("<I", raw, len(raw) - 8)[0]
        assert struct.unpack_from("<I", raw, pointer)[0] == len(DESCRIPTION)

    def test_to_dict(self) -> None:
        decoded = DecodedContainer(b"abc", b"de", key_name="fz")
        assert decoded.to_dict() == {"key": "fz", "content_size": 3, "description_size": 2}
        assert DecodedContainer(b"", b"").to_dict()["key"] == "none"


class TestKeyTrials:
    def test_trial_order(self) -> None:
        assert KEY_TRIAL_ORDER == (None, "fz", "cae")

    def test_cae_file_falls_through_earlier_trials(self) -> None:
        raw = encode(CONTENT, DESCRIPTION, key_name="cae")
        with pytest.raises(InvalidMagicError):
            try_decode(raw, None)
        with pytest.raises(InvalidMagicError):
            try_decode(raw, "fz")
        assert decode(raw).key_name == "cae"

    def test_rejected_key_decrypts_only_the_header(self, monkeypatch: pytest.MonkeyPatch) -> None:
        raw = encode(CONTENT, DESCRIPTION, key_name="cae")
        lengths: list[int] = []

        def spy(data: bytes, expanded_key: tuple[int, ...]) -> bytes:
            lengths.append(len(data))
            return decrypt(data, expanded_key)

        monkeypatch.setattr(container, "decrypt", spy)
        assert decode(raw).key_name == "cae"
        # fz header, cae header, then the full cae buffer
        assert lengths == [5, 5, len(raw)]

    def test_plaintext_wins_without_decryption(self) -> None:
        assert try_decode(_frame(), None).key_name is None

    def test_all_trials_fail_on_short_buffer(self) -> None:
        with pytest.raises(ContainerDecodeError) as exc_info:
            decode(b"\x01\x02\x03")
        attempts = exc_info.value.attempts
        assert [key for key, _ in attempts] == ["none", "fz", "cae"]
        assert all(isinstance(err, InvalidMagicError) for _, err in attempts)

    def test_container_error_to_dict_lists_attempts(self) -> None:
        with pytest.raises(ContainerDecodeError) as exc_info:
            decode(b"")
        d = exc_info.value.to_dict()
        assert d["error_code"] == "CONTAINER_DECODE_ERROR"
        assert [a["key"] for a in d["attempts"]] == ["none", "fz", "cae"]
        assert {a["error_code"] for a in d["attempts"]} == {"INVALID_MAGIC"}


class TestFraming:
    def test_invalid_magic(self) -> None:
        plain = bytearray(_frame())
        plain[4] = 0x00
        with pytest.raises(InvalidMagicError) as exc_info:
            split_container(bytes(plain))
        assert exc_info.value.found == 0

    def test_content_size_mismatch(self) -> None:
        raw = _u32(len(CONTENT) + 1) + encode(CONTENT, DESCRIPTION)[4:]
        with pytest.raises(SizeMismatchError) as exc_info:
            decode(raw)
        err = exc_info.value
        assert err.stream == "content"
        assert err.expected == len(CONTENT) + 1
        assert err.actual == len(CONTENT)

    def test_description_size_mismatch(self) -> None:
        with pytest.raises(SizeMismatchError) as exc_info:
            split_container(_frame(description_len=len(DESCRIPTION) - 1))
        assert exc_info.value.stream == "description"

    def test_trailing_bytes_after_content_stream_ignored(self) -> None:
        decoded = split_container(_frame(junk=b"\xde\xad\xbe\xef" * 3))
        assert decoded.content == CONTENT
        assert decoded.description == DESCRIPTION

    def test_pointer_slot_away_from_trailer(self) -> None:
        plain = _frame(gap=b"\x00" * 8)
        assert plain[-4:] == _u32(12)
        assert split_container(plain).description == DESCRIPTION

    def test_distance_out_of_bounds(self) -> None:
        with pytest.raises(FramingOutOfBoundsError) as exc_info:
            split_container(_frame(distance=0xFFFFFFF0))
        assert exc_info.value.slot == "description pointer"

    def test_pointer_out_of_bounds(self) -> None:
        with pytest.raises(FramingOutOfBoundsError) as exc_info:
            split_container(_frame(pointer=0x7FFFFFFF))
        assert exc_info.value.slot == "description length"

    def test_framing_error_surfaces_from_decode(self) -> None:
        with pytest.raises(FramingOutOfBoundsError):
            decode(_frame(pointer=0x7FFFFFFF))

    def test_locate_description(self) -> None:
        plain = _frame()
        pointer, length = locate_description(plain)
        assert length == len(DESCRIPTION)
        assert plain[pointer + 4] == 0x78

    def test_corrupt_content_stream(self) -> None:
        plain = _u32(10) + b"\x78\x9c" + b"not a deflate stream at all" + _u32(0) + _u32(4)
        with pytest.raises(CorruptStreamError) as exc_info:
            split_container(plain)
        assert exc_info.value.stream == "content"

    def test_truncated_content_stream(self) -> None:
        stream = zlib.compress(CONTENT * 20)
        plain = _u32(len(CONTENT) * 20) + stream[: len(stream) // 2]
        with pytest.raises(CorruptStreamError, match="truncated"):
            split_container(plain)
