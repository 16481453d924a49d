"""
Time-windowed sample storage.

Holds the authoritative history of observations for one instrument.
Samples are appended at the tail and expire from the head once they
fall outside the window.
"""

import threading
from collections import deque
from collections.abc import Iterator

from spreadwatch.config.constants import WINDOW_DURATION_MS
from spreadwatch.core.types import Observation


class SampleStore:
    """
    Append-only, time-bounded sequence of observations.

    Features:
    - O(1) append and head eviction (deque)
    - Lazy eviction, performed only on insert
    - Lock-guarded so snapshots never see a half-applied insert
    - Insertion order is chronological order
    """

    __slots__ = ("_samples", "_window_ms", "_lock")

    def __init__(self, window_ms: int = WINDOW_DURATION_MS) -> None:
        """
        Initialize an empty store.

        Args:
            window_ms: Retention window in milliseconds.
        """
        if window_ms <= 0:
            raise ValueError(f"window_ms must be positive, got {window_ms}")

        self._samples: deque[Observation] = deque()
        self._window_ms = window_ms
        self._lock = threading.Lock()

    def insert(self, observation: Observation, now: int | None = None) -> bool:
        """
        Append an observation and evict expired samples.

        Observations with no prices at all are ignored.

        Args:
            observation: Sample to store.
            now: Reference time for eviction in milliseconds.
                Defaults to the observation's own timestamp.

        Returns:
            True if the observation was stored.
        """
        if observation.is_empty:
            return False

        cutoff = (observation.timestamp if now is None else now) - self._window_ms

        with self._lock:
            self._samples.append(observation)
            while self._samples and self._samples[0].timestamp < cutoff:
                self._samples.popleft()

        return True

    def latest(self) -> Observation | None:
        """
        Get the most recently inserted observation.

        Returns:
            Latest observation or None if nothing was ever stored.
        """
        with self._lock:
            return self._samples[-1] if self._samples else None

    def snapshot(self, max_count: int | None = None) -> list[Observation]:
        """
        Get stored observations in chronological order.

        Args:
            max_count: If given, only the most recent max_count samples.

        Returns:
            New list; the store is not modified.
        """
        with self._lock:
            if max_count is None:
                return list(self._samples)
            if max_count <= 0:
                return []
            start = max(len(self._samples) - max_count, 0)
            return [self._samples[i] for i in range(start, len(self._samples))]

    @property
    def window_ms(self) -> int:
        """Retention window in milliseconds."""
        return self._window_ms

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self.snapshot())
