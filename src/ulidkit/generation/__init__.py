"""Monotonic ULID generation and sequencing contexts."""

from ulidkit.generation.factory import build_clock, build_generator
from ulidkit.generation.monotonic import (
    LockedMonotonicGenerator,
    MonotonicGenerator,
    SequencingContext,
    ThreadLocalGenerator,
)

__all__ = [
    "LockedMonotonicGenerator",
    "MonotonicGenerator",
    "SequencingContext",
    "ThreadLocalGenerator",
    "build_clock",
    "build_generator",
]
