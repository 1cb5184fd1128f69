"""String-in, string-out ULID helpers and ``<prefix>-<ulid>`` entity IDs."""

from __future__ import annotations

from typing import Final

from ulidkit.codec.base32 import decode
from ulidkit.domain.constructors import from_timestamp
from ulidkit.domain.ulid import Ulid
from ulidkit.sources import RandomSource, wall_clock_ms

PREFIX_SEPARATOR: Final[str] = "-"
SHORT_ID_LENGTH: Final[int] = 8


def generate_ulid(
    *,
    timestamp_ms: int | None = None,
    random_source: RandomSource | None = None,
) -> str:
    """Mint a ULID string with fresh randomness (no same-millisecond ordering).

    Use a :class:`~ulidkit.generation.MonotonicGenerator` when IDs minted in the
    same millisecond must sort in creation order.
    """
    now = wall_clock_ms() if timestamp_ms is None else timestamp_ms
    return from_timestamp(now, random_source=random_source).encode()


def validate_ulid(text: str) -> None:
    decode(text)


def parse_ulid_timestamp_ms(text: str) -> int:
    return decode(text).timestamp


def generate_prefixed_id(
    prefix: str,
    *,
    timestamp_ms: int | None = None,
    random_source: RandomSource | None = None,
) -> str:
    """Mint ``<prefix>-<ulid>``, e.g. ``run-01ARYZ6S41...``."""
    _check_prefix(prefix)
    body = generate_ulid(timestamp_ms=timestamp_ms, random_source=random_source)
    return prefix + PREFIX_SEPARATOR + body


def split_prefixed_id(id_str: str) -> tuple[str, Ulid]:
    """Split ``<prefix>-<ulid>`` into its prefix and decoded :class:`Ulid`."""
    prefix, separator, body = id_str.rpartition(PREFIX_SEPARATOR)
    if not separator:
        raise ValueError(f"{id_str!r} has no {PREFIX_SEPARATOR!r} between prefix and ULID")
    _check_prefix(prefix)
    return prefix, decode(body)


def validate_prefixed_id(id_str: str, expected_prefix: str) -> Ulid:
    """Check that ``id_str`` carries ``expected_prefix`` and return its ULID."""
    prefix, ulid = split_prefixed_id(id_str)
    if prefix != expected_prefix:
        raise ValueError(f"{id_str!r} has prefix {prefix!r}, wanted {expected_prefix!r}")
    return ulid


def short_id(id_str: str) -> str:
    """Trailing characters of an ID for display; for ULIDs these are random bits."""
    if len(id_str) < SHORT_ID_LENGTH:
        raise ValueError(f"{id_str!r} is shorter than {SHORT_ID_LENGTH} characters")
    return id_str[-SHORT_ID_LENGTH:]


def _check_prefix(prefix: str) -> None:
    if not prefix or PREFIX_SEPARATOR in prefix:
        raise ValueError(f"prefix {prefix!r} must be non-empty and free of {PREFIX_SEPARATOR!r}")


__all__ = [
    "PREFIX_SEPARATOR",
    "SHORT_ID_LENGTH",
    "generate_prefixed_id",
    "generate_ulid",
    "parse_ulid_timestamp_ms",
    "short_id",
    "split_prefixed_id",
    "validate_prefixed_id",
    "validate_ulid",
]
