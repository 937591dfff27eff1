"""Container framing for ASUS FZ and ASRock CAE repair files.

A plaintext container is laid out as::

    u32le content_len | zlib(content) ... | u32le description_len | zlib(description)
        ... | u32le description_offset | u32le pointer_distance

``pointer_distance`` counts backwards from the start of the final four
bytes to the start of the slot holding ``description_offset``, an absolute
offset of the
description block. Files are stored either as plaintext or encrypted with
one of two fixed RC6 schedules; since the ciphertext carries no marker, each
candidate is tried in turn until the zlib header shows up at offset 4.
"""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass
from typing import Any

from ..exceptions import (
    ContainerDecodeError,
    CorruptStreamError,
    DecodeError,
    FramingOutOfBoundsError,
    InvalidMagicError,
    SizeMismatchError,
)
from .crypto import CAE_EXPANDED_KEY, FZ_EXPANDED_KEY, decrypt, encrypt

ZLIB_MAGIC = 0x78

KEY_SCHEDULES: dict[str, tuple[int, ...]] = {
    "fz": FZ_EXPANDED_KEY,
    "cae": CAE_EXPANDED_KEY,
}

# None is the plaintext trial
KEY_TRIAL_ORDER: tuple[str | None, ...] = (None, "fz", "cae")

_U32 = struct.Struct("<I")
# length prefix plus the zlib magic byte
_HEADER_LEN = 5


@dataclass(frozen=True)
class DecodedContainer:
    """The two decompressed payloads of a repair file."""

    content: bytes
    description: bytes
    key_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key_name or "none",
            "content_size": len(self.content),
            "description_size": len(self.description),
        }


def _read_u32(buf: bytes, offset: int, slot: str) -> int:
    """Read a little-endian u32 at ``offset``, refusing any out-of-range slot."""
    if offset < 0 or offset + 4 > len(buf):
        raise FramingOutOfBoundsError(
            f"{slot} slot at offset {offset} is outside the {len(buf)}-byte buffer",
            slot=slot,
            offset=offset,
            length=len(buf),
        )
    return _U32.unpack_from(buf, offset)[0]


def _decompress(data: bytes, expected: int, stream: str) -> bytes:
    """Inflate a single zlib stream and check it against its declared size."""
    inflater = zlib.decompressobj()
    try:
        out = inflater.decompress(data) + inflater.flush()
    except zlib.error as e:
        raise CorruptStreamError(f"{stream} stream is not valid zlib: {e}", stream=stream) from e
    if not inflater.eof:
        raise CorruptStreamError(f"{stream} stream is truncated", stream=stream)
    if len(out) != expected:
        raise SizeMismatchError(
            f"Decompressed size mismatch in {stream} stream: "
            f"expected {expected} bytes, got {len(out)}",
            stream=stream,
            expected=expected,
            actual=len(out),
        )
    return out


def locate_description(plain: bytes) -> tuple[int, int]:
    """Resolve the description block via the trailing pointer pair.

    Returns:
        ``(description_offset, description_len)``.

    Raises:
        FramingOutOfBoundsError: If either pointer or the length slot falls
            outside the buffer.
    """
    end = len(plain) - 4
    distance = _read_u32(plain, end, "pointer distance")
    pointer = _read_u32(plain, end - distance, "description pointer")
    description_len = _read_u32(plain, pointer, "description length")
    if pointer + 4 > end:
        raise FramingOutOfBoundsError(
            f"Description block at offset {pointer} overlaps the trailing pointer",
            slot="description stream",
            offset=pointer + 4,
            length=len(plain),
        )
    return pointer, description_len


def _check_magic(plain: bytes) -> None:
    if len(plain) <= 4 or plain[4] != ZLIB_MAGIC:
        found = plain[4] if len(plain) > 4 else None
        raise InvalidMagicError("Invalid zlib header at offset 4", found=found)


def split_container(plain: bytes, key_name: str | None = None) -> DecodedContainer:
    """Extract both payloads from a plaintext container buffer."""
    _check_magic(plain)

    content_len = _read_u32(plain, 0, "content length")
    content = _decompress(plain[4:], content_len, "content")

    pointer, description_len = locate_description(plain)
    description = _decompress(plain[pointer + 4 : len(plain) - 4], description_len, "description")

    return DecodedContainer(content=content, description=description, key_name=key_name)


def try_decode(raw: bytes, key_name: str | None) -> DecodedContainer:
    """Run a single decode trial with the named key schedule (or none).

    CFB-8 output at offset ``n`` depends only on the first ``n + 1`` input
    bytes, so the header is decrypted on its own and the full buffer only
    once the zlib magic has been seen.
    """
    if key_name is None:
        plain = bytes(raw)
    else:
        schedule = KEY_SCHEDULES[key_name]
        _check_magic(decrypt(raw[:_HEADER_LEN], schedule))
        plain = decrypt(raw, schedule)
    return split_container(plain, key_name)


def decode(raw: bytes) -> DecodedContainer:
    """Decode a repair file, trying plaintext then each vendor key.

    A trial that gets past the zlib header check but then fails identifies
    the file as damaged rather than unrecognised, so its error is raised in
    preference to the aggregate.

    Raises:
        SizeMismatchError, FramingOutOfBoundsError, CorruptStreamError: From
            the first trial that found a zlib header, if every trial fails.
        ContainerDecodeError: If no trial found a zlib header. ``attempts``
            lists the per-trial errors in trial order.
    """
    attempts: list[tuple[str, DecodeError]] = []
    for key_name in KEY_TRIAL_ORDER:
        try:
            return try_decode(raw, key_name)
        except DecodeError as e:
            attempts.append((key_name or "none", e))

    for _, error in attempts:
        if not isinstance(error, InvalidMagicError):
            raise error

    last_key, last_error = attempts[-1]
    raise ContainerDecodeError(
        f"Unable to decode container (last trial {last_key!r}: {last_error.message})",
        attempts=attempts,
    )


def encode(content: bytes, description: bytes, key_name: str | None = None) -> bytes:
    """Build a container holding ``content`` and ``description``.

    The pointer slot is written directly before the trailing distance word,
    so the distance is always 4.
    """
    body = bytearray(_U32.pack(len(content)))
    body += zlib.compress(content)
    pointer = len(body)
    body += _U32.pack(len(description))
    body += zlib.compress(description)
    body += _U32.pack(pointer)
    body += _U32.pack(4)

    if key_name is None:
        return bytes(body)
    return encrypt(bytes(body), KEY_SCHEDULES[key_name])
