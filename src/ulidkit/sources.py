"""Clock and random-bit sources consumed by the constructors and generators.

Both kinds of source are plain zero-argument callables so tests and callers can
inject deterministic stand-ins without subclassing anything.
"""

from __future__ import annotations

import secrets
import time
from collections.abc import Callable
from typing import Final

from ulidkit.constants import RANDOM_BYTES

Clock = Callable[[], int]
RandomSource = Callable[[], int]
RandBytes = Callable[[int], bytes]

_NANOS_PER_MILLI: Final[int] = 1_000_000


def wall_clock_ms() -> int:
    """Current Unix time in whole milliseconds."""
    return time.time_ns() // _NANOS_PER_MILLI


class AnchoredMonotonicClock:
    """Millisecond Unix clock that never moves backwards within a process.

    Wall time is sampled once at construction; later readings add the elapsed
    ``time.monotonic_ns`` delta, so NTP steps and manual clock changes do not
    regress the returned value.
    """

    __slots__ = ("_anchor_monotonic_ns", "_anchor_ms", "_monotonic_ns")

    def __init__(
        self,
        *,
        wall_ns: Callable[[], int] = time.time_ns,
        monotonic_ns: Callable[[], int] = time.monotonic_ns,
    ) -> None:
        self._anchor_ms = wall_ns() // _NANOS_PER_MILLI
        self._anchor_monotonic_ns = monotonic_ns()
        self._monotonic_ns = monotonic_ns

    def __call__(self) -> int:
        elapsed_ns = self._monotonic_ns() - self._anchor_monotonic_ns
        return self._anchor_ms + elapsed_ns // _NANOS_PER_MILLI

    @property
    def anchor_ms(self) -> int:
        return self._anchor_ms


def secure_random_bits() -> int:
    """Draw a uniformly distributed 80-bit integer from the OS CSPRNG.

    Composed from a 64-bit and a 16-bit draw that together cover all 80 bits.
    """
    upper = secrets.randbits(64) << 16
    lower = secrets.randbits(16)
    return upper | lower


def random_source_from_bytes(randbytes: RandBytes) -> RandomSource:
    """Adapt a ``randbytes(n) -> bytes`` provider (e.g. ``secrets.token_bytes``)."""

    def draw() -> int:
        raw = randbytes(RANDOM_BYTES)
        if not isinstance(raw, (bytes, bytearray, memoryview)):
            raise ValueError("randbytes must return a bytes-like object")
        as_bytes = bytes(raw)
        if len(as_bytes) != RANDOM_BYTES:
            raise ValueError(f"randbytes must return exactly {RANDOM_BYTES} bytes")
        return int.from_bytes(as_bytes, "big")

    return draw


__all__ = [
    "AnchoredMonotonicClock",
    "Clock",
    "RandBytes",
    "RandomSource",
    "random_source_from_bytes",
    "secure_random_bits",
    "wall_clock_ms",
]
