"""Counters and gauges describing generator activity.

One registry may be shared by any number of generators and threads. Names
follow the Prometheus text convention so a snapshot can be scraped or diffed
as-is.
"""

from __future__ import annotations

import json
import threading
from collections import Counter
from datetime import UTC, datetime
from pathlib import Path
from typing import Final, Literal

GENERATED_TOTAL: Final[str] = "ulid_generated_total"
MONOTONIC_OVERFLOW_TOTAL: Final[str] = "ulid_monotonic_overflow_total"
CLOCK_REGRESSION_TOTAL: Final[str] = "ulid_clock_regression_total"
LAST_TIMESTAMP_MS: Final[str] = "ulid_last_timestamp_ms"

GenerationPath = Literal["fresh", "increment"]


class MetricsRegistry:
    """Thread-safe generator metrics with a deterministic JSON snapshot."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: Counter[str] = Counter()
        self._last_timestamp_ms: int | None = None
        self._since = datetime.now(tz=UTC)

    def record_generated(self, path: GenerationPath, timestamp_ms: int) -> None:
        """Count one minted ULID and remember its timestamp."""
        key = _series(GENERATED_TOTAL, path=path)
        with self._lock:
            self._counts[key] += 1
            self._last_timestamp_ms = timestamp_ms

    def record_overflow(self) -> None:
        with self._lock:
            self._counts[MONOTONIC_OVERFLOW_TOTAL] += 1

    def record_regression(self) -> None:
        with self._lock:
            self._counts[CLOCK_REGRESSION_TOTAL] += 1

    def count(self, name: str, **labels: str) -> int:
        """Current value of counter ``name`` for exactly ``labels``."""
        key = _series(name, **labels)
        with self._lock:
            return self._counts[key]

    @property
    def last_timestamp_ms(self) -> int | None:
        with self._lock:
            return self._last_timestamp_ms

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()
            self._last_timestamp_ms = None
            self._since = datetime.now(tz=UTC)

    def snapshot(self) -> dict[str, object]:
        with self._lock:
            counters = dict(sorted(self._counts.items()))
            last = self._last_timestamp_ms
            since = self._since
        gauges = {} if last is None else {LAST_TIMESTAMP_MS: last}
        return {
            "since": since.isoformat(timespec="seconds"),
            "counters": counters,
            "gauges": gauges,
        }

    def to_json(self, *, indent: int | None = None) -> str:
        return json.dumps(self.snapshot(), sort_keys=True, indent=indent)

    def export_json(self, path: str | Path) -> Path:
        """Write an indented snapshot to ``path``, creating parent directories."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.to_json(indent=2) + "\n", encoding="utf-8")
        return target


def _series(name: str, **labels: str) -> str:
    if not labels:
        return name
    rendered = ",".join(f'{key}="{labels[key]}"' for key in sorted(labels))
    return f"{name}{{{rendered}}}"


__all__ = [
    "CLOCK_REGRESSION_TOTAL",
    "GENERATED_TOTAL",
    "LAST_TIMESTAMP_MS",
    "MONOTONIC_OVERFLOW_TOTAL",
    "GenerationPath",
    "MetricsRegistry",
]
