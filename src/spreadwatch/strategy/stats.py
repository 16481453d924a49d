"""
Rolling-window spread statistics.

Aggregates one spread direction over every observation still inside
the window. Stateless: callers pass the observations and the reference
time explicitly.
"""

import math
from collections.abc import Iterable

from spreadwatch.config.constants import WINDOW_DURATION_MS
from spreadwatch.core.types import Observation, SpreadDirection, StatSummary
from spreadwatch.strategy.spread import spread


def collect_spreads(
    direction: SpreadDirection,
    observations: Iterable[Observation],
    now: int,
    window_ms: int = WINDOW_DURATION_MS,
) -> list[float]:
    """
    Collect defined spread values inside the window.

    The window is re-applied here because the store only evicts on
    insert, so it may still hold samples older than `now - window_ms`.

    Args:
        direction: Spread direction.
        observations: Candidate observations (a SampleStore works).
        now: Reference time in milliseconds.
        window_ms: Window length in milliseconds.

    Returns:
        Finite spread values in chronological order.
    """
    cutoff = now - window_ms
    values: list[float] = []

    for obs in observations:
        if obs.timestamp < cutoff:
            continue
        value = spread(direction, obs)
        if value is None or not math.isfinite(value):
            continue
        values.append(value)

    return values


def compute_stats(
    direction: SpreadDirection,
    observations: Iterable[Observation],
    now: int,
    window_ms: int = WINDOW_DURATION_MS,
) -> StatSummary | None:
    """
    Compute average/max/min/count of a spread direction over the window.

    Args:
        direction: Spread direction.
        observations: Candidate observations (a SampleStore works).
        now: Reference time in milliseconds.
        window_ms: Window length in milliseconds.

    Returns:
        StatSummary, or None when no defined spread is in the window.
    """
    values = collect_spreads(direction, observations, now, window_ms)
    if not values:
        return None

    return StatSummary(
        average=sum(values) / len(values),
        max=max(values),
        min=min(values),
        count=len(values),
    )
