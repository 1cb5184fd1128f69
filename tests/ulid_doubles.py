"""Deterministic clock and random sources for generator tests."""

from __future__ import annotations

import threading
from collections.abc import Sequence

from ulidkit.constants import MAX_RANDOM
from ulidkit.sources import RandomSource


def fixed_random(value: int) -> RandomSource:
    """Random source that always draws ``value``."""
    if not 0 <= value <= MAX_RANDOM:
        raise ValueError(f"{value} is outside 0..MAX_RANDOM")
    return lambda: value


class ScriptedClock:
    """Clock that replays ``readings`` in order, then keeps returning the last one."""

    def __init__(self, readings: Sequence[int]) -> None:
        if not readings:
            raise ValueError("a scripted clock needs at least one reading")
        self._readings = list(readings)
        self._lock = threading.Lock()
        self.calls = 0

    def __call__(self) -> int:
        with self._lock:
            reading = self._readings[min(self.calls, len(self._readings) - 1)]
            self.calls += 1
        return reading
