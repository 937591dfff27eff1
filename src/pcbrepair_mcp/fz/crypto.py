"""RC6-32/20 keystream cipher used by ASUS FZ and ASRock CAE files.

The vendor tools run RC6 (32-bit words, 20 rounds, 16-byte key) in 8-bit
cipher-feedback mode with an all-zero initial shift register. Only the
block cipher's encrypt direction is ever needed: CFB decrypts by
re-encrypting the register of recent ciphertext bytes.

The two 44-word round-key schedules below are format constants. The key
schedule algorithm is kept for tests and for building synthetic files.
"""

from __future__ import annotations

import struct
from collections.abc import Sequence

FZ_EXPANDED_KEY: tuple[int, ...] = (
    0x25D8D248, 0xE1502405, 0x56B5D486, 0x69213FE0, 0xA22490EC, 0x01FDD9FA, 0x0681955F, 0x0FAC202D,
    0xDAC9EEB4, 0xF6024ABA, 0xCD8B4CC6, 0x9F307C8E, 0x4AB8FAD7, 0x232F967D, 0x5E8666A3, 0xDE966D4B,
    0xC64BFB1C, 0xEA7FB092, 0x1A751A7E, 0x37E8F0BC, 0x3359C8F3, 0x969AC22B, 0x610F5804, 0xD99D10E6,
    0xC58D54D6, 0x1F9AEA8B, 0x8E388C1A, 0xE4F7D2ED, 0x3E5DA1F6, 0xEDFE818A, 0x7252B016, 0xB503A170,
    0xC4128FB6, 0x2C93CEEB, 0x53539A6E, 0xDACF7668, 0x3AB78E52, 0x8EE9D815, 0x7043F799, 0xC6A05DCF,
    0x727F1DA2, 0x0DFD983B, 0x78C53872, 0x00945692,
)  # fmt: skip

CAE_EXPANDED_KEY: tuple[int, ...] = (
    0x477FA6A2, 0xFB9B5E2B, 0x77BCAC57, 0x2D7CEF8C, 0x69825182, 0xFA231194, 0x96EE6D48, 0x520A9B74,
    0x0619CB60, 0x95918DFB, 0x1C829771, 0x03F6655C, 0xBBA3B302, 0xF3CBCC66, 0xB42E9AC7, 0x417B37DD,
    0x34854B8C, 0xF95A9547, 0x7950401E, 0xC3271F83, 0x0E7C9A6E, 0xCFA7F799, 0x616D9D05, 0x200AC08F,
    0x7CDB242F, 0x30D3BC5E, 0x2983CC29, 0x9DA249C9, 0x7509F015, 0x6632580E, 0x83247F04, 0x6525ED71,
    0x02FA242A, 0x47B12928, 0x7ED51B5D, 0xF69CD51B, 0x66F24C77, 0x042856B9, 0x00E37970, 0x88B6624D,
    0x6826CD76, 0xD2A4C9FE, 0x2EFF487A, 0x09648FAE,
)  # fmt: skip

ROUNDS = 20
LOG_W = 5
BLOCK_SIZE = 16
SCHEDULE_WORDS = 2 * ROUNDS + 4

_MASK32 = 0xFFFFFFFF
_P32 = 0xB7E15163
_Q32 = 0x9E3779B9
_WORDS = struct.Struct("<4I")


def _rotl(value: int, shift: int) -> int:
    shift &= 31
    return ((value << shift) | (value >> (32 - shift))) & _MASK32


def _check_schedule(expanded_key: Sequence[int]) -> None:
    if len(expanded_key) != SCHEDULE_WORDS:
        raise ValueError(
            f"RC6 schedule must have {SCHEDULE_WORDS} words, got {len(expanded_key)}"
        )


def rc6_encrypt_block(block: bytes, expanded_key: Sequence[int]) -> tuple[int, int, int, int]:
    """Encrypt one 16-byte block, returning the four little-endian output words."""
    a, b, c, d = _WORDS.unpack(block)
    s = expanded_key

    b = (b + s[0]) & _MASK32
    d = (d + s[1]) & _MASK32
    for i in range(1, ROUNDS + 1):
        t = _rotl((b * (2 * b + 1)) & _MASK32, LOG_W)
        u = _rotl((d * (2 * d + 1)) & _MASK32, LOG_W)
        a = (_rotl(a ^ t, u) + s[2 * i]) & _MASK32
        c = (_rotl(c ^ u, t) + s[2 * i + 1]) & _MASK32
        a, b, c, d = b, c, d, a
    a = (a + s[2 * ROUNDS + 2]) & _MASK32
    c = (c + s[2 * ROUNDS + 3]) & _MASK32

    return a, b, c, d


def _cfb8(data: bytes, expanded_key: Sequence[int], *, encrypting: bool) -> bytes:
    _check_schedule(expanded_key)
    register = bytearray(BLOCK_SIZE)
    out = bytearray(len(data))
    for i, byte in enumerate(data):
        a = rc6_encrypt_block(bytes(register), expanded_key)[0]
        result = byte ^ (a & 0xFF)
        out[i] = result
        # The register always holds ciphertext, whichever direction we run.
        del register[0]
        register.append(result if encrypting else byte)
    return bytes(out)


def decrypt(data: bytes, expanded_key: Sequence[int]) -> bytes:
    """Decrypt ``data`` with RC6 in CFB-8 mode and a zero IV."""
    return _cfb8(data, expanded_key, encrypting=False)


def encrypt(data: bytes, expanded_key: Sequence[int]) -> bytes:
    """Encrypt ``data`` with RC6 in CFB-8 mode and a zero IV."""
    return _cfb8(data, expanded_key, encrypting=True)


def expand_key(user_key: bytes) -> tuple[int, ...]:
    """Derive the 44-word RC6-32/20 round-key schedule from a 16-byte key."""
    if len(user_key) != 16:
        raise ValueError(f"RC6 user key must be 16 bytes, got {len(user_key)}")

    big_l = list(_WORDS.unpack(user_key))
    big_s = [_P32]
    for _ in range(1, SCHEDULE_WORDS):
        big_s.append((big_s[-1] + _Q32) & _MASK32)

    big_a = big_b = 0
    i = j = 0
    for _ in range(3 * SCHEDULE_WORDS):
        big_a = big_s[i] = _rotl((big_s[i] + big_a + big_b) & _MASK32, 3)
        big_b = big_l[j] = _rotl((big_l[j] + big_a + big_b) & _MASK32, big_a + big_b)
        i = (i + 1) % SCHEDULE_WORDS
        j = (j + 1) % len(big_l)

    return tuple(big_s)
