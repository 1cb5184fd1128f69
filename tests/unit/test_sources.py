"""Unit tests for clock and random sources."""

from __future__ import annotations

import secrets
import time

import pytest

from ulidkit import sources
from ulidkit.constants import MAX_RANDOM, RANDOM_BYTES
from ulidkit.sources import (
    AnchoredMonotonicClock,
    random_source_from_bytes,
    secure_random_bits,
    wall_clock_ms,
)


def test_wall_clock_ms_tracks_time_ns() -> None:
    before = time.time_ns() // 1_000_000
    reading = wall_clock_ms()
    after = time.time_ns() // 1_000_000
    assert before <= reading <= after


def test_anchored_clock_adds_monotonic_elapsed_to_wall_anchor() -> None:
    monotonic = iter([5_000_000, 7_500_000, 6_000_000_000])
    clock = AnchoredMonotonicClock(
        wall_ns=lambda: 1_700_000_000_123_456_789,
        monotonic_ns=lambda: next(monotonic),
    )

    assert clock.anchor_ms == 1_700_000_000_123
    assert clock() == 1_700_000_000_125
    assert clock() == 1_700_000_006_118


def test_anchored_clock_ignores_wall_clock_steps() -> None:
    wall = iter([10_000_000_000, 0])
    clock = AnchoredMonotonicClock(wall_ns=lambda: next(wall), monotonic_ns=lambda: 0)
    assert clock() == 10_000
    assert clock() == 10_000


def test_secure_random_bits_spans_80_bits() -> None:
    draws = [secure_random_bits() for _ in range(256)]
    assert all(0 <= value <= MAX_RANDOM for value in draws)
    assert any(value >> 64 for value in draws)
    assert any(value & 0xFFFF for value in draws)


def test_random_source_from_bytes_reads_big_endian() -> None:
    draw = random_source_from_bytes(lambda size: bytes(range(1, size + 1)))
    assert draw() == int.from_bytes(bytes(range(1, RANDOM_BYTES + 1)), "big")

    assert 0 <= random_source_from_bytes(secrets.token_bytes)() <= MAX_RANDOM


def test_random_source_from_bytes_rejects_bad_providers() -> None:
    with pytest.raises(ValueError, match="exactly 10 bytes"):
        random_source_from_bytes(lambda size: b"\x00" * (size - 1))()
    with pytest.raises(ValueError, match="bytes-like"):
        random_source_from_bytes(lambda size: "0" * size)()  # type: ignore[arg-type, return-value]



def test_module_exports_only_runtime_sources() -> None:
    assert set(sources.__all__) == {
        "AnchoredMonotonicClock",
        "Clock",
        "RandBytes",
        "RandomSource",
        "random_source_from_bytes",
        "secure_random_bits",
        "wall_clock_ms",
    }
