"""Opt-in JSON-lines logging and generator metrics."""

from ulidkit.observability.logging import JsonLineFormatter, LoggingSession, setup_logging
from ulidkit.observability.metrics import MetricsRegistry

__all__ = ["JsonLineFormatter", "LoggingSession", "MetricsRegistry", "setup_logging"]
