"""Build sequencing contexts from an effective ``ulidkit`` config."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from ulidkit.config.schema import CLOCK_CHOICES, CONTEXT_CHOICES, assert_valid_config
from ulidkit.generation.monotonic import (
    LockedMonotonicGenerator,
    MonotonicGenerator,
    SequencingContext,
    ThreadLocalGenerator,
)
from ulidkit.sources import AnchoredMonotonicClock, wall_clock_ms

if TYPE_CHECKING:
    from ulidkit.observability.metrics import MetricsRegistry
    from ulidkit.sources import Clock, RandomSource

logger = logging.getLogger(__name__)


def build_clock(name: str) -> Clock:
    """Return the clock registered under ``name`` (see ``CLOCK_CHOICES``)."""
    if name == "wall":
        return wall_clock_ms
    if name == "anchored_monotonic":
        return AnchoredMonotonicClock()
    raise ValueError(f"unknown clock {name!r}; expected one of: {', '.join(CLOCK_CHOICES)}")


def build_generator(
    config: Mapping[str, object],
    *,
    metrics: MetricsRegistry | None = None,
    random_source: RandomSource | None = None,
    clock: Clock | None = None,
) -> SequencingContext:
    """Create the sequencing context selected by ``generator.context``.

    ``metrics`` is only attached when ``observability.metrics_enabled`` is set.
    An explicit ``clock`` wins over ``generator.clock``.
    """
    validated = assert_valid_config(config)
    generator_cfg = validated["generator"]
    observability_cfg = validated["observability"]

    resolved_clock = clock if clock is not None else build_clock(generator_cfg["clock"])
    attached_metrics = metrics if observability_cfg["metrics_enabled"] else None
    context_name = generator_cfg["context"]

    logger.debug(
        "building ulid generator",
        extra={"context": context_name, "clock": generator_cfg["clock"]},
    )

    if context_name == "thread_local":
        return ThreadLocalGenerator(resolved_clock, random_source, metrics=attached_metrics)
    if context_name == "locked":
        return LockedMonotonicGenerator(resolved_clock, random_source, metrics=attached_metrics)
    if context_name == "single":
        return MonotonicGenerator(resolved_clock, random_source, metrics=attached_metrics)
    raise ValueError(
        f"unknown generator context {context_name!r}; expected one of: {', '.join(CONTEXT_CHOICES)}"
    )


__all__ = ["build_clock", "build_generator"]
