"""
Feed health metrics.

Tracks sampler counters and upstream fetch latencies with
efficient in-memory storage.
"""

import time
from collections import deque
from dataclasses import asdict, dataclass

from spreadwatch.config.constants import LATENCY_WINDOW_SIZE


@dataclass
class LatencyStats:
    """Aggregated fetch latency statistics in milliseconds."""

    min_ms: float = 0.0
    max_ms: float = 0.0
    avg_ms: float = 0.0
    p50_ms: float = 0.0
    p95_ms: float = 0.0
    count: int = 0


class FeedMetrics:
    """
    Collects sampler and upstream metrics.

    Features:
    - Rolling window latency tracking per venue
    - Counter-based event tracking (ticks, inserts, rejects, failures)
    """

    def __init__(self, latency_window_size: int = LATENCY_WINDOW_SIZE) -> None:
        """
        Initialize metrics collector.

        Args:
            latency_window_size: Number of samples to keep for latency stats.
        """
        self._window_size = latency_window_size
        self._latencies: dict[str, deque[float]] = {}
        self._counters: dict[str, int] = {}
        self._start_time = time.monotonic()

    def record_latency(self, venue: str, latency_ms: float) -> None:
        """
        Record an upstream request latency.

        Args:
            venue: Venue name (e.g. "primary", "counter").
            latency_ms: Request duration in milliseconds.
        """
        if venue not in self._latencies:
            self._latencies[venue] = deque(maxlen=self._window_size)

        self._latencies[venue].append(latency_ms)

    def increment_counter(self, name: str, value: int = 1) -> None:
        """
        Increment a counter.

        Args:
            name: Counter name.
            value: Amount to increment.
        """
        self._counters[name] = self._counters.get(name, 0) + value

    def get_counter(self, name: str) -> int:
        """Get counter value."""
        return self._counters.get(name, 0)

    def record_fetch_failure(self, venue: str) -> None:
        """Count a failed upstream request."""
        self.increment_counter(f"fetch_failures.{venue}")

    def get_latency_stats(self, venue: str) -> LatencyStats:
        """
        Get aggregated latency stats for a venue.

        Args:
            venue: Venue name.

        Returns:
            LatencyStats (all zero if no samples).
        """
        samples = self._latencies.get(venue)
        if not samples:
            return LatencyStats()

        sorted_samples = sorted(samples)
        n = len(sorted_samples)

        return LatencyStats(
            min_ms=sorted_samples[0],
            max_ms=sorted_samples[-1],
            avg_ms=sum(sorted_samples) / n,
            p50_ms=sorted_samples[n // 2],
            p95_ms=sorted_samples[min(int(n * 0.95), n - 1)],
            count=n,
        )

    @property
    def uptime_seconds(self) -> float:
        """Seconds since the collector was created."""
        return time.monotonic() - self._start_time

    def summary(self) -> dict[str, object]:
        """Snapshot of all metrics for the status endpoint."""
        return {
            "uptime_seconds": round(self.uptime_seconds, 1),
            "counters": dict(self._counters),
            "latency_ms": {
                venue: asdict(self.get_latency_stats(venue)) for venue in self._latencies
            },
        }

    def reset(self) -> None:
        """Reset all metrics."""
        self._latencies.clear()
        self._counters.clear()
        self._start_time = time.monotonic()
