"""
Cross-venue spread calculation.

Pure functions deriving the two directional spreads from a single
observation. Missing operands yield None; nothing here raises.
"""

from spreadwatch.core.types import Observation, SpreadDirection
from spreadwatch.utils.math import safe_percent


def spread_a(obs: Observation) -> float | None:
    """
    Long primary / short counter: primary_price - counter_bid.

    Args:
        obs: Observation to evaluate.

    Returns:
        Spread, or None if either price is missing.
    """
    if obs.primary_price is None or obs.counter_bid is None:
        return None
    return obs.primary_price - obs.counter_bid


def spread_b(obs: Observation) -> float | None:
    """
    Long counter / short primary: counter_ask - primary_price.

    Args:
        obs: Observation to evaluate.

    Returns:
        Spread, or None if either price is missing.
    """
    if obs.counter_ask is None or obs.primary_price is None:
        return None
    return obs.counter_ask - obs.primary_price


def spread_percent_a(obs: Observation) -> float | None:
    """Spread A as a percentage of the counter bid; None if the bid is zero."""
    value = spread_a(obs)
    if value is None:
        return None
    # counter_bid is known to be set once spread_a succeeded
    return safe_percent(value, obs.counter_bid)  # type: ignore[arg-type]


def spread_percent_b(obs: Observation) -> float | None:
    """Spread B as a percentage of the primary price; None if the price is zero."""
    value = spread_b(obs)
    if value is None:
        return None
    return safe_percent(value, obs.primary_price)  # type: ignore[arg-type]


_SPREADS = {
    SpreadDirection.A: spread_a,
    SpreadDirection.B: spread_b,
}

_SPREAD_PERCENTS = {
    SpreadDirection.A: spread_percent_a,
    SpreadDirection.B: spread_percent_b,
}


def spread(direction: SpreadDirection, obs: Observation) -> float | None:
    """
    Compute the spread for a direction.

    Args:
        direction: Spread direction (A or B).
        obs: Observation to evaluate.

    Returns:
        Spread value or None.
    """
    return _SPREADS[SpreadDirection(direction)](obs)


def spread_percent(direction: SpreadDirection, obs: Observation) -> float | None:
    """Compute the percentage spread for a direction."""
    return _SPREAD_PERCENTS[SpreadDirection(direction)](obs)
