"""
ulidkit — unit tests for generator metrics

Purpose
- Verify thread-safe recording and deterministic snapshot/export behavior.
"""

from __future__ import annotations

import json
import threading
from typing import TYPE_CHECKING

from ulidkit.observability.metrics import (
    CLOCK_REGRESSION_TOTAL,
    GENERATED_TOTAL,
    LAST_TIMESTAMP_MS,
    MONOTONIC_OVERFLOW_TOTAL,
    MetricsRegistry,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_thread_safe_counter_increments() -> None:
    registry = MetricsRegistry()

    def worker() -> None:
        for ms in range(2000):
            registry.record_generated("fresh", ms)

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert registry.count(GENERATED_TOTAL, path="fresh") == 12_000
    assert registry.count(GENERATED_TOTAL, path="increment") == 0
    assert registry.count(GENERATED_TOTAL) == 0


def test_snapshot_is_deterministic_and_labelled() -> None:
    registry = MetricsRegistry()
    registry.record_generated("increment", 1469918176385)
    registry.record_generated("fresh", 1469918176384)
    registry.record_overflow()
    registry.record_regression()
    registry.record_regression()

    snapshot = registry.snapshot()

    assert snapshot["counters"] == {
        CLOCK_REGRESSION_TOTAL: 2,
        'ulid_generated_total{path="fresh"}': 1,
        'ulid_generated_total{path="increment"}': 1,
        MONOTONIC_OVERFLOW_TOTAL: 1,
    }
    assert list(snapshot["counters"]) == sorted(snapshot["counters"])
    assert snapshot["gauges"] == {LAST_TIMESTAMP_MS: 1469918176384}
    assert registry.to_json() == registry.to_json()


def test_empty_registry_has_no_gauge() -> None:
    registry = MetricsRegistry()

    assert registry.last_timestamp_ms is None
    assert registry.snapshot()["gauges"] == {}


def test_reset_clears_values() -> None:
    registry = MetricsRegistry()
    registry.record_generated("fresh", 5)
    registry.record_overflow()

    registry.reset()

    assert registry.count(GENERATED_TOTAL, path="fresh") == 0
    assert registry.count(MONOTONIC_OVERFLOW_TOTAL) == 0
    assert registry.last_timestamp_ms is None


def test_export_json_writes_file(tmp_path: Path) -> None:
    registry = MetricsRegistry()
    for _ in range(3):
        registry.record_generated("increment", 2)

    out = registry.export_json(tmp_path / "nested" / "metrics.json")

    parsed = json.loads(out.read_text(encoding="utf-8"))
    assert parsed["counters"]['ulid_generated_total{path="increment"}'] == 3
    assert parsed["gauges"][LAST_TIMESTAMP_MS] == 2
    assert parsed["since"].endswith("+00:00")
