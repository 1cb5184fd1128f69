"""Monotonic ULID sequencing.

A generator owns exactly one ``previous`` slot. Calls that observe the same
millisecond as ``previous`` increment its randomness by one; calls that observe
any other millisecond draw fresh randomness. Three flavours of sequencing
context are provided:

- :class:`MonotonicGenerator`: one slot, no locking. Own one per thread/task.
- :class:`LockedMonotonicGenerator`: one slot behind a ``threading.Lock`` so a
  single instance can be shared across threads.
- :class:`ThreadLocalGenerator`: one lazily created slot per calling thread;
  threads never observe each other's state.

A clock reading earlier than ``previous.timestamp`` is treated like a new
millisecond (fresh draw). That breaks ordering across a clock rollback; it is
logged and counted but not corrected.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Protocol

from ulidkit.constants import MAX_RANDOM
from ulidkit.domain.constructors import from_parts, from_timestamp
from ulidkit.domain.ulid import ZERO, Ulid
from ulidkit.errors import MonotonicOverflowError
from ulidkit.sources import wall_clock_ms

if TYPE_CHECKING:
    from ulidkit.observability.metrics import GenerationPath, MetricsRegistry
    from ulidkit.sources import Clock, RandomSource

logger = logging.getLogger(__name__)


class SequencingContext(Protocol):
    """Anything that mints monotonic ULIDs from a single logical context."""

    @property
    def previous(self) -> Ulid: ...

    def generate(self) -> Ulid: ...

    def generate_str(self) -> str: ...

    def reset(self, previous: Ulid | None = None) -> None: ...


class MonotonicGenerator:
    """Single-context monotonic ULID generator. Not safe to share across threads."""

    def __init__(
        self,
        clock: Clock | None = None,
        random_source: RandomSource | None = None,
        *,
        previous: Ulid | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        self._clock: Clock = wall_clock_ms if clock is None else clock
        self._random_source = random_source
        self._previous = ZERO if previous is None else _require_ulid(previous)
        self._metrics = metrics

    @property
    def previous(self) -> Ulid:
        return self._previous

    def reset(self, previous: Ulid | None = None) -> None:
        """Replace the state slot; ``None`` restores the all-zero initial value."""
        self._previous = ZERO if previous is None else _require_ulid(previous)

    def generate(self) -> Ulid:
        """Mint the next ULID for the current millisecond.

        Raises :class:`MonotonicOverflowError` when ``previous`` already holds
        the maximum randomness for the observed millisecond. The state slot is
        left untouched on any error.
        """
        now = abs(self._clock())
        previous = self._previous
        path: GenerationPath

        if now == previous.timestamp:
            last_random = previous.random
            if last_random == MAX_RANDOM:
                self._record_overflow(now)
                raise MonotonicOverflowError(
                    f"randomness exhausted for timestamp {now}; retry on the next millisecond"
                )
            minted = from_parts(now, last_random + 1)
            path = "increment"
        else:
            if now < previous.timestamp:
                self._record_regression(previous.timestamp, now)
            minted = from_timestamp(now, random_source=self._random_source)
            path = "fresh"

        self._previous = minted
        if self._metrics is not None:
            self._metrics.record_generated(path, now)
        return minted

    def generate_str(self) -> str:
        return self.generate().encode()

    def _record_overflow(self, now: int) -> None:
        logger.warning("ulid monotonic overflow", extra={"timestamp_ms": now})
        if self._metrics is not None:
            self._metrics.record_overflow()

    def _record_regression(self, previous_ms: int, now: int) -> None:
        logger.warning(
            "ulid clock regression observed",
            extra={"previous_timestamp_ms": previous_ms, "observed_timestamp_ms": now},
        )
        if self._metrics is not None:
            self._metrics.record_regression()


class LockedMonotonicGenerator(MonotonicGenerator):
    """Monotonic generator whose state transition is serialized by a lock."""

    def __init__(
        self,
        clock: Clock | None = None,
        random_source: RandomSource | None = None,
        *,
        previous: Ulid | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        super().__init__(clock, random_source, previous=previous, metrics=metrics)
        self._lock = threading.Lock()

    @property
    def previous(self) -> Ulid:
        with self._lock:
            return self._previous

    def reset(self, previous: Ulid | None = None) -> None:
        with self._lock:
            super().reset(previous)

    def generate(self) -> Ulid:
        # The clock is read under the lock so readings and mints stay paired.
        with self._lock:
            return super().generate()


class ThreadLocalGenerator:
    """Sequencing context that keeps one :class:`MonotonicGenerator` per thread."""

    def __init__(
        self,
        clock: Clock | None = None,
        random_source: RandomSource | None = None,
        *,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        self._clock = clock
        self._random_source = random_source
        self._metrics = metrics
        self._local = threading.local()

    @property
    def previous(self) -> Ulid:
        return self._context().previous

    def reset(self, previous: Ulid | None = None) -> None:
        self._context().reset(previous)

    def generate(self) -> Ulid:
        return self._context().generate()

    def generate_str(self) -> str:
        return self._context().generate_str()

    def _context(self) -> MonotonicGenerator:
        generator: MonotonicGenerator | None = getattr(self._local, "generator", None)
        if generator is None:
            generator = MonotonicGenerator(
                self._clock,
                self._random_source,
                metrics=self._metrics,
            )
            self._local.generator = generator
        return generator


def _require_ulid(value: object) -> Ulid:
    if not isinstance(value, Ulid):
        raise TypeError(f"previous must be a Ulid, got {type(value).__name__}")
    return value


__all__ = [
    "LockedMonotonicGenerator",
    "MonotonicGenerator",
    "SequencingContext",
    "ThreadLocalGenerator",
]
