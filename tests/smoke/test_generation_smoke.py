"""
ulidkit — end-to-end smoke test

Purpose
- Wire config loading, structured logging, metrics, and a config-built generator together.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

import ulidkit
from ulidkit.config import load_config
from ulidkit.generation import build_generator
from ulidkit.observability import MetricsRegistry, setup_logging
from ulidkit.observability.metrics import GENERATED_TOTAL


@pytest.mark.smoke
def test_configured_generator_mints_sortable_ids_across_threads(tmp_path: Path) -> None:
    config_path = tmp_path / "ulidkit.toml"
    config_path.write_text(
        """
[generator]
clock = "anchored_monotonic"
context = "locked"

[observability]
log_dir = "run-logs"
""".strip(),
        encoding="utf-8",
    )

    config = load_config(config_path, environ={})
    session = setup_logging(config["observability"], logger_name="ulidkit.tests.smoke")
    metrics = MetricsRegistry()
    generator = build_generator(config, metrics=metrics)

    minted: list[ulidkit.Ulid] = []
    minted_lock = threading.Lock()

    def worker() -> None:
        local = [generator.generate() for _ in range(500)]
        with minted_lock:
            minted.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    session.logger.info("minted batch", extra={"count": len(minted), "last": max(minted)})
    session.close()

    assert len(set(minted)) == 2000
    texts = [ulidkit.encode(ulid.bits) for ulid in minted]
    assert sorted(texts) == [ulidkit.encode(ulid.bits) for ulid in sorted(minted)]
    assert all(ulidkit.decode(text) == ulid for text, ulid in zip(texts, minted, strict=True))

    fresh = metrics.count(GENERATED_TOTAL, path="fresh")
    increment = metrics.count(GENERATED_TOTAL, path="increment")
    assert fresh + increment == 2000
    assert fresh >= 1

    log_path = tmp_path / "run-logs" / "ulidkit.jsonl"
    assert session.log_path == log_path.resolve()
    entries = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert entries[-1]["fields"]["count"] == 2000
    assert entries[-1]["fields"]["last"] == str(max(minted))
