"""Strategy module for spread calculation and window statistics."""

from spreadwatch.strategy.spread import (
    spread,
    spread_a,
    spread_b,
    spread_percent,
    spread_percent_a,
    spread_percent_b,
)
from spreadwatch.strategy.stats import collect_spreads, compute_stats


__all__ = [
    "collect_spreads",
    "compute_stats",
    "spread",
    "spread_a",
    "spread_b",
    "spread_percent",
    "spread_percent_a",
    "spread_percent_b",
]
