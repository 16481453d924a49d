"""
Periodic spread sampler.

Owns the sample store for one instrument, runs the background fetch
loop, and assembles the read-side view consumed by the dashboard.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from spreadwatch.config.constants import MAX_CHART_POINTS, SAMPLE_INTERVAL_SECONDS
from spreadwatch.core.store import SampleStore
from spreadwatch.core.types import InstrumentPair, Observation, SpreadDirection, StatSummary
from spreadwatch.strategy.spread import spread, spread_percent
from spreadwatch.strategy.stats import compute_stats
from spreadwatch.telemetry.metrics import FeedMetrics
from spreadwatch.utils.time import get_timestamp_ms


logger = logging.getLogger(__name__)


class ObservationSource(Protocol):
    """Anything that can produce an observation for an instrument."""

    async def fetch_observation(
        self, pair: InstrumentPair, now: int | None = None
    ) -> Observation: ...


@dataclass(slots=True, frozen=True)
class DirectionView:
    """Current value and window statistics for one spread direction."""

    direction: SpreadDirection
    current: float | None
    current_pct: float | None
    stats: StatSummary | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "direction": self.direction.value,
            "label": self.direction.label,
            "current": self.current,
            "current_pct": self.current_pct,
            "stats": self.stats.to_dict() if self.stats else None,
        }


@dataclass(slots=True, frozen=True)
class SpreadView:
    """Everything the presentation layer needs for one render."""

    instrument: str
    generated_at: int
    window_ms: int
    latest: Observation | None
    spread_a: DirectionView
    spread_b: DirectionView
    history: list[Observation] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the JSON API."""
        return {
            "instrument": self.instrument,
            "generated_at": self.generated_at,
            "window_ms": self.window_ms,
            "latest": self.latest.to_dict() if self.latest else None,
            "spread_a": self.spread_a.to_dict(),
            "spread_b": self.spread_b.to_dict(),
            "history": [obs.to_dict() for obs in self.history],
        }


@dataclass
class MonitorState:
    """Current state of the sampler."""

    running: bool = False
    ticks: int = 0
    inserted: int = 0
    rejected: int = 0
    errors: int = 0
    last_tick_at: int | None = None


class SpreadMonitor:
    """
    Samples both venues at a fixed cadence and serves spread views.

    The store is written only by `tick()`; reads never mutate it. With
    `refresh_before_read` enabled, every read first performs one extra
    tick so a manual page load always shows fresh prices.
    """

    def __init__(
        self,
        pair: InstrumentPair,
        source: ObservationSource,
        store: SampleStore | None = None,
        sample_interval: float = SAMPLE_INTERVAL_SECONDS,
        max_chart_points: int = MAX_CHART_POINTS,
        refresh_before_read: bool = False,
        metrics: FeedMetrics | None = None,
        clock: Callable[[], int] = get_timestamp_ms,
    ) -> None:
        """
        Initialize the monitor.

        Args:
            pair: Instrument to sample.
            source: Observation source (normally a PriceFetcher).
            store: Sample store (a fresh one with the default window if omitted).
            sample_interval: Seconds between background ticks.
            max_chart_points: Length of the display history.
            refresh_before_read: Tick once before every read.
            metrics: Optional metrics collector.
            clock: Millisecond clock, injectable for tests.
        """
        self._pair = pair
        self._source = source
        self._store = store if store is not None else SampleStore()
        self._sample_interval = sample_interval
        self._max_chart_points = max_chart_points
        self._refresh_before_read = refresh_before_read
        self._metrics = metrics
        self._clock = clock

        self._state = MonitorState()
        self._task: asyncio.Task[None] | None = None
        self._tick_lock = asyncio.Lock()

    async def start(self) -> None:
        """Start the background sampling task."""
        if self._state.running:
            return

        self._state.running = True
        self._task = asyncio.create_task(self._run(), name=f"sampler-{self._pair.name}")
        logger.info(
            f"Sampler started for {self._pair.name} "
            f"(every {self._sample_interval:g}s, window {self._store.window_ms // 1000}s)"
        )

    async def stop(self) -> None:
        """Stop the background sampling task."""
        self._state.running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info(f"Sampler stopped for {self._pair.name}")

    async def _run(self) -> None:
        """Main loop - one tick per interval until stopped."""
        while self._state.running:
            try:
                await self.tick()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self._state.errors += 1
                logger.error(f"Sampler tick failed for {self._pair.name}: {e}")

            await asyncio.sleep(self._sample_interval)

    async def tick(self) -> Observation:
        """
        Fetch one observation and insert it into the store.

        Ticks are serialized and stamped inside the lock, which keeps the
        store in timestamp order when a refresh overlaps the background loop.

        Returns:
            The fetched observation (stored unless it has no prices).
        """
        async with self._tick_lock:
            observation = await self._source.fetch_observation(self._pair, now=self._clock())
            stored = self._store.insert(observation)

        self._state.ticks += 1
        self._state.last_tick_at = observation.timestamp

        if stored:
            self._state.inserted += 1
        else:
            self._state.rejected += 1
            logger.debug(f"Discarded empty observation for {self._pair.name}")

        if self._metrics is not None:
            self._metrics.increment_counter("ticks")
            self._metrics.increment_counter("inserted" if stored else "rejected")

        return observation

    async def read(self, now: int | None = None, refresh: bool | None = None) -> SpreadView:
        """
        Build the current view, optionally refreshing first.

        Args:
            now: Reference time in milliseconds (default: clock after refresh).
            refresh: Override the refresh-before-read policy for this call.

        Returns:
            SpreadView with latest prices, spreads, stats and chart history.
        """
        should_refresh = self._refresh_before_read if refresh is None else refresh
        if should_refresh:
            try:
                await self.tick()
            except Exception as e:
                self._state.errors += 1
                logger.error(f"Refresh before read failed for {self._pair.name}: {e}")

        return self.view(now)

    def view(self, now: int | None = None) -> SpreadView:
        """Build the current view from the store without fetching."""
        now = self._clock() if now is None else now
        observations = self._store.snapshot()
        latest = observations[-1] if observations else None

        return SpreadView(
            instrument=self._pair.name,
            generated_at=now,
            window_ms=self._store.window_ms,
            latest=latest,
            spread_a=self._direction_view(SpreadDirection.A, latest, observations, now),
            spread_b=self._direction_view(SpreadDirection.B, latest, observations, now),
            history=observations[max(len(observations) - self._max_chart_points, 0) :],
        )

    def _direction_view(
        self,
        direction: SpreadDirection,
        latest: Observation | None,
        observations: list[Observation],
        now: int,
    ) -> DirectionView:
        return DirectionView(
            direction=direction,
            current=spread(direction, latest) if latest else None,
            current_pct=spread_percent(direction, latest) if latest else None,
            stats=compute_stats(direction, observations, now, self._store.window_ms),
        )

    @property
    def pair(self) -> InstrumentPair:
        """Monitored instrument."""
        return self._pair

    @property
    def store(self) -> SampleStore:
        """Underlying sample store."""
        return self._store

    @property
    def state(self) -> MonitorState:
        """Get current state."""
        return self._state

    @property
    def refresh_before_read(self) -> bool:
        """Whether reads trigger a fetch first."""
        return self._refresh_before_read
