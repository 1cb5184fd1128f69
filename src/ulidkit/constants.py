"""Stable ULID layout constants shared across the codec, constructors, and generators."""

from __future__ import annotations

from typing import Final

# Bit layout: timestamp occupies bits [127:80], randomness bits [79:0].
TIMESTAMP_BITS: Final[int] = 48
RANDOM_BITS: Final[int] = 80
ULID_BITS: Final[int] = TIMESTAMP_BITS + RANDOM_BITS

MAX_TIMESTAMP: Final[int] = (1 << TIMESTAMP_BITS) - 1
MAX_RANDOM: Final[int] = (1 << RANDOM_BITS) - 1
MAX_ULID: Final[int] = (1 << ULID_BITS) - 1

# Text and binary representations.
CROCKFORD_BASE32_ALPHABET: Final[str] = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
ULID_LENGTH: Final[int] = 26
ULID_BYTES: Final[int] = ULID_BITS // 8
RANDOM_BYTES: Final[int] = RANDOM_BITS // 8

# Schema versions for persisted contracts.
CONFIG_SCHEMA_VERSION: Final[int] = 1

__all__ = [
    "CONFIG_SCHEMA_VERSION",
    "CROCKFORD_BASE32_ALPHABET",
    "MAX_RANDOM",
    "MAX_TIMESTAMP",
    "MAX_ULID",
    "RANDOM_BITS",
    "RANDOM_BYTES",
    "TIMESTAMP_BITS",
    "ULID_BITS",
    "ULID_BYTES",
    "ULID_LENGTH",
]
