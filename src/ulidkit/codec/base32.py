"""Crockford base32 codec for 128-bit ULID values.

Encoding always yields 26 uppercase characters. The two highest characters can
only hold 0..7 for values inside 128 bits, so lexicographic order of the output
matches numeric order of the input.

Decoding is case-insensitive and canonicalizes look-alike characters:
``O``/``o`` decode as ``0`` and ``I``/``i``/``L``/``l`` decode as ``1``.
``U``/``u`` and every non-alphabet byte are rejected.
"""

from __future__ import annotations

from typing import Final

from ulidkit.constants import (
    CROCKFORD_BASE32_ALPHABET,
    MAX_TIMESTAMP,
    MAX_ULID,
    RANDOM_BITS,
    ULID_LENGTH,
)
from ulidkit.domain.ulid import Ulid
from ulidkit.errors import InvalidCharError, InvalidLengthError, InvalidTimestampError

INVALID: Final[int] = 0xFF

_MASK: Final[int] = 0b11111
_ALIASES: Final[dict[str, int]] = {"O": 0, "I": 1, "L": 1}
_ENCODE_BYTES: Final[bytes] = CROCKFORD_BASE32_ALPHABET.encode("ascii")


def _build_decode_table() -> tuple[int, ...]:
    table = [INVALID] * 256
    for value, char in enumerate(CROCKFORD_BASE32_ALPHABET):
        table[ord(char)] = value
        table[ord(char.lower())] = value
    for char, value in _ALIASES.items():
        table[ord(char)] = value
        table[ord(char.lower())] = value
    return tuple(table)


# Indexed by byte value; INVALID marks bytes outside the (aliased) alphabet.
DECODE_TABLE: Final[tuple[int, ...]] = _build_decode_table()


def encode(bits: int) -> str:
    """Encode a 128-bit value as 26 Crockford base32 characters."""
    working = _check_bits(bits)
    chars = ["0"] * ULID_LENGTH
    for index in range(ULID_LENGTH - 1, -1, -1):
        chars[index] = CROCKFORD_BASE32_ALPHABET[working & _MASK]
        working >>= 5
    return "".join(chars)


def encode_into(bits: int, dest: bytearray | memoryview) -> memoryview:
    """Write the 26 ASCII characters for ``bits`` into ``dest``.

    Returns a view over the written prefix of ``dest``. Raises
    :class:`InvalidLengthError` if ``dest`` holds fewer than 26 bytes.
    """
    if len(dest) < ULID_LENGTH:
        raise InvalidLengthError(
            f"destination buffer must hold at least {ULID_LENGTH} bytes, got {len(dest)}",
            expected=ULID_LENGTH,
            actual=len(dest),
        )
    working = _check_bits(bits)
    view = memoryview(dest)
    for index in range(ULID_LENGTH - 1, -1, -1):
        view[index] = _ENCODE_BYTES[working & _MASK]
        working >>= 5
    return view[:ULID_LENGTH]


def decode_char(char: str | int) -> int:
    """Return the 5-bit value of a single character or byte."""
    if isinstance(char, int):
        if not 0 <= char <= 0xFF:
            raise ValueError(f"byte value must be in 0..255, got {char}")
        code = char
    else:
        code = _single_ord(char)
    value = DECODE_TABLE[code] if code < len(DECODE_TABLE) else INVALID
    if value == INVALID:
        raise InvalidCharError(chr(code))
    return value


def decode(text: str | bytes | bytearray) -> Ulid:
    """Decode a 26-character ULID string (or ASCII bytes) into a :class:`Ulid`."""
    if not isinstance(text, (str, bytes, bytearray)):
        raise TypeError(f"ulid must be str or bytes, got {type(text).__name__}")
    if len(text) != ULID_LENGTH:
        raise InvalidLengthError(
            f"ulid length must be {ULID_LENGTH}, got {len(text)}",
            expected=ULID_LENGTH,
            actual=len(text),
        )

    codes = map(ord, text) if isinstance(text, str) else text
    bits = 0
    for index, code in enumerate(codes):
        value = DECODE_TABLE[code] if code < len(DECODE_TABLE) else INVALID
        if value == INVALID:
            raise InvalidCharError(chr(code), index)
        bits = (bits << 5) | value

    # 26 characters carry 130 bits; the top two must stay clear.
    timestamp = bits >> RANDOM_BITS
    if timestamp > MAX_TIMESTAMP:
        raise InvalidTimestampError(
            f"ulid timestamp out of range: expected 0..{MAX_TIMESTAMP}, got {timestamp}"
        )
    return Ulid(bits)


def _check_bits(bits: int) -> int:
    if isinstance(bits, bool) or not isinstance(bits, int):
        raise TypeError(f"bits must be an int, got {type(bits).__name__}")
    if not 0 <= bits <= MAX_ULID:
        raise ValueError(f"bits out of range: expected 0..{MAX_ULID}, got {bits}")
    return bits


def _single_ord(char: str) -> int:
    if not isinstance(char, str) or len(char) != 1:
        raise TypeError("decode_char expects a single character or byte value")
    return ord(char)


__all__ = [
    "DECODE_TABLE",
    "INVALID",
    "decode",
    "decode_char",
    "encode",
    "encode_into",
]
