"""Telemetry module for logging and feed metrics."""

from spreadwatch.telemetry.logger import AsyncLogger, setup_logging
from spreadwatch.telemetry.metrics import FeedMetrics, LatencyStats


__all__ = [
    "AsyncLogger",
    "FeedMetrics",
    "LatencyStats",
    "setup_logging",
]
