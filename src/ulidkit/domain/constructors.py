"""Range-checked constructors that pack (timestamp, random) pairs into a Ulid."""

from __future__ import annotations

from ulidkit.constants import MAX_RANDOM, MAX_TIMESTAMP, RANDOM_BITS
from ulidkit.domain.ulid import Ulid
from ulidkit.errors import InvalidRandomError, InvalidTimestampError
from ulidkit.sources import RandomSource, secure_random_bits


def from_parts(timestamp: int, random: int) -> Ulid:
    """Pack ``timestamp`` (48 bits) and ``random`` (80 bits) into a :class:`Ulid`."""
    _require_int(timestamp, "timestamp")
    _require_int(random, "random")
    if not 0 <= timestamp <= MAX_TIMESTAMP:
        raise InvalidTimestampError(
            f"timestamp out of range: expected 0..{MAX_TIMESTAMP}, got {timestamp}"
        )
    if not 0 <= random <= MAX_RANDOM:
        raise InvalidRandomError(f"random out of range: expected 0..{MAX_RANDOM}, got {random}")
    return Ulid((timestamp << RANDOM_BITS) | random)


def from_timestamp(timestamp: int, *, random_source: RandomSource | None = None) -> Ulid:
    """Build a :class:`Ulid` for ``timestamp`` with a fresh 80-bit random draw."""
    draw = secure_random_bits if random_source is None else random_source
    return from_parts(timestamp, draw())


def _require_int(value: object, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")


__all__ = ["from_parts", "from_timestamp"]
