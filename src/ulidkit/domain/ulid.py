"""Immutable ULID value type and its bit-field projections.

Layout of the 128-bit value::

     01AN4Z07BY      79KA1307SR9X4MV3
    |----------|    |----------------|
      timestamp         randomness
       48 bits            80 bits
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Final

from ulidkit.constants import MAX_RANDOM, MAX_ULID, RANDOM_BITS, ULID_BYTES
from ulidkit.errors import InvalidLengthError, InvalidTimestampError

_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass(frozen=True, order=True, slots=True)
class Ulid:
    """A 128-bit ULID. Ordering, equality, and hashing follow ``bits``."""

    bits: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.bits, bool) or not isinstance(self.bits, int):
            raise TypeError(f"ulid bits must be an int, got {type(self.bits).__name__}")
        # Any value inside 128 bits carries a timestamp <= MAX_TIMESTAMP.
        if not 0 <= self.bits <= MAX_ULID:
            raise InvalidTimestampError(
                f"ulid bits out of range: expected 0..{MAX_ULID}, got {self.bits}"
            )

    @property
    def timestamp(self) -> int:
        """Milliseconds since the Unix epoch (top 48 bits)."""
        return self.bits >> RANDOM_BITS

    @property
    def random(self) -> int:
        """Randomness field (bottom 80 bits)."""
        return self.bits & MAX_RANDOM

    @property
    def datetime(self) -> datetime:
        """Timezone-aware UTC datetime for :attr:`timestamp`.

        Raises ``OverflowError`` for timestamps past ``datetime.max``.
        """
        return _EPOCH + timedelta(milliseconds=self.timestamp)

    def binary(self) -> int:
        return self.bits

    def to_bytes(self) -> bytes:
        """Return the 16-byte big-endian representation."""
        return self.bits.to_bytes(ULID_BYTES, "big")

    def encode(self) -> str:
        """Return the canonical 26-character Crockford base32 string."""
        from ulidkit.codec.base32 import encode

        return encode(self.bits)

    @classmethod
    def from_int(cls, value: int) -> Ulid:
        return cls(value)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Ulid:
        raw = bytes(data)
        if len(raw) != ULID_BYTES:
            raise InvalidLengthError(
                f"ulid bytes length must be {ULID_BYTES}, got {len(raw)}",
                expected=ULID_BYTES,
                actual=len(raw),
            )
        return cls(int.from_bytes(raw, "big"))

    @classmethod
    def parse(cls, text: str | bytes | bytearray) -> Ulid:
        """Decode a 26-character string; see :func:`ulidkit.codec.base32.decode`."""
        from ulidkit.codec.base32 import decode

        return decode(text)

    def __int__(self) -> int:
        return self.bits

    def __str__(self) -> str:
        return self.encode()

    def __repr__(self) -> str:
        return f"Ulid({self.encode()!r})"


ZERO: Final[Ulid] = Ulid(0)

__all__ = ["ZERO", "Ulid"]
