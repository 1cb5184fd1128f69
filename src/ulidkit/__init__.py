"""
ulidkit — ULID codec and monotonic generation.

A ULID is a 128-bit value: a 48-bit millisecond timestamp followed by 80 bits
of randomness, written as 26 Crockford base32 characters that sort the same
way the integers do.

Importing this package has no side effects (no config loading, no logging
handlers).
"""

from ulidkit.codec.base32 import decode, encode, encode_into
from ulidkit.constants import MAX_RANDOM, MAX_TIMESTAMP, ULID_LENGTH
from ulidkit.domain.constructors import from_parts, from_timestamp
from ulidkit.domain.ulid import Ulid
from ulidkit.errors import (
    InvalidCharError,
    InvalidLengthError,
    InvalidRandomError,
    InvalidTimestampError,
    MonotonicOverflowError,
    UlidError,
)
from ulidkit.generation.monotonic import (
    LockedMonotonicGenerator,
    MonotonicGenerator,
    ThreadLocalGenerator,
)

__version__ = "0.1.0"

__all__ = [
    "InvalidCharError",
    "InvalidLengthError",
    "InvalidRandomError",
    "InvalidTimestampError",
    "LockedMonotonicGenerator",
    "MAX_RANDOM",
    "MAX_TIMESTAMP",
    "MonotonicGenerator",
    "MonotonicOverflowError",
    "ThreadLocalGenerator",
    "ULID_LENGTH",
    "Ulid",
    "UlidError",
    "__version__",
    "decode",
    "encode",
    "encode_into",
    "from_parts",
    "from_timestamp",
]
