"""JSON-lines logging for ulidkit's own records.

Library modules only call ``logging.getLogger(__name__)``; nothing is wired up
on import. :func:`setup_logging` attaches a queue-backed sink to the
``ulidkit`` logger from an ``[observability]`` config section, so records
emitted on a generator's hot path never wait on file I/O.

A line looks like::

    {"fields":{"observed_timestamp_ms":10,"previous_timestamp_ms":20},
     "level":"WARNING","logger":"ulidkit.generation.monotonic",
     "message":"ulid clock regression observed","ts":"2026-01-01T00:00:00.000+00:00"}
"""

from __future__ import annotations

import json
import logging
import queue
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from typing import Final

LOG_FILENAME: Final[str] = "ulidkit.jsonl"
ROOT_LOGGER_NAME: Final[str] = "ulidkit"

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRS: Final[frozenset[str]] = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
}


class JsonLineFormatter(logging.Formatter):
    """Render one record as a compact, key-sorted JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields = {
            name: _to_json(value)
            for name, value in vars(record).items()
            if name not in _RECORD_ATTRS and not name.startswith("_")
        }
        if fields:
            line["fields"] = fields
        if record.exc_info:
            line["exc"] = self.formatException(record.exc_info)
        return json.dumps(line, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


@dataclass(slots=True)
class LoggingSession:
    """An attached sink; :meth:`close` drains the queue and detaches it."""

    logger: logging.Logger
    log_path: Path
    _handler: QueueHandler
    _listener: QueueListener
    _sinks: tuple[logging.Handler, ...]

    def close(self) -> None:
        if self._handler not in self.logger.handlers:
            return
        self.logger.removeHandler(self._handler)
        # stop() processes everything already queued before returning.
        self._listener.stop()
        for sink in self._sinks:
            sink.close()

    def __enter__(self) -> LoggingSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def setup_logging(
    observability: Mapping[str, object],
    *,
    logger_name: str = ROOT_LOGGER_NAME,
) -> LoggingSession:
    """Send ``logger_name`` records to ``<log_dir>/ulidkit.jsonl`` (and stdout if enabled).

    ``observability`` is the validated ``[observability]`` config section.
    """
    level = logging.getLevelName(str(observability.get("log_level", "INFO")))
    if not isinstance(level, int):
        raise ValueError(f"unsupported log level {observability.get('log_level')!r}")

    log_dir = Path(str(observability.get("log_dir", "logs")))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILENAME

    formatter = JsonLineFormatter()
    sinks: list[logging.Handler] = [logging.FileHandler(log_path, encoding="utf-8")]
    if observability.get("log_to_stdout", False):
        sinks.append(logging.StreamHandler(sys.stdout))
    for sink in sinks:
        sink.setFormatter(formatter)

    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    handler = QueueHandler(records)
    listener = QueueListener(records, *sinks)

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.addHandler(handler)
    listener.start()
    return LoggingSession(logger, log_path, handler, listener, tuple(sinks))


def _to_json(value: object) -> object:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Mapping):
        return {str(key): _to_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json(item) for item in value]
    # Ulid, Path, datetime and friends use their text form.
    return str(value)


__all__ = ["LOG_FILENAME", "JsonLineFormatter", "LoggingSession", "setup_logging"]
