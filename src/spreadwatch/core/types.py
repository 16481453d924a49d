"""
Type definitions for the spread monitor.

This module contains the dataclasses and enums shared by the sample
store, the spread calculator and the statistics engine. Using slots=True
for memory efficiency and faster attribute access.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final


# =============================================================================
# Enums
# =============================================================================


class SpreadDirection(str, Enum):
    """
    Direction of a cross-venue spread.

    A: long primary / short counter -> primary_price - counter_bid
    B: long counter / short primary -> counter_ask - primary_price
    """

    A = "A"
    B = "B"

    @property
    def label(self) -> str:
        """Human-readable description of the trade the spread represents."""
        if self is SpreadDirection.A:
            return "Long primary / short counter"
        return "Long counter / short primary"


# =============================================================================
# Market Data Types
# =============================================================================


@dataclass(slots=True, frozen=True)
class Observation:
    """
    One timestamped capture of both venues.

    Frozen so stored samples can never be mutated after insertion.
    A value of None means the venue was unavailable for that tick;
    0.0 is a legitimate price.
    """

    timestamp: int
    primary_price: float | None = None
    counter_bid: float | None = None
    counter_ask: float | None = None

    @property
    def is_empty(self) -> bool:
        """True when no venue contributed a price."""
        return (
            self.primary_price is None
            and self.counter_bid is None
            and self.counter_ask is None
        )

    def to_dict(self) -> dict[str, float | int | None]:
        """Serialize for the JSON API."""
        return {
            "timestamp": self.timestamp,
            "primary_price": self.primary_price,
            "counter_bid": self.counter_bid,
            "counter_ask": self.counter_ask,
        }


@dataclass(slots=True, frozen=True)
class StatSummary:
    """Aggregate of one spread direction over the rolling window."""

    average: float
    max: float
    min: float
    count: int

    def to_dict(self) -> dict[str, float | int]:
        """Serialize for the JSON API."""
        return {
            "average": self.average,
            "max": self.max,
            "min": self.min,
            "count": self.count,
        }


# =============================================================================
# Instrument Configuration
# =============================================================================


@dataclass(slots=True, frozen=True)
class InstrumentPair:
    """
    Venue identifiers for one monitored instrument.

    The primary venue addresses markets by numeric id, the counter
    venue by symbol.
    """

    name: str
    primary_market_id: int
    counter_symbol: str


INSTRUMENTS: Final[dict[str, InstrumentPair]] = {
    "BTC": InstrumentPair(name="BTC", primary_market_id=1, counter_symbol="BTC-USD-PERP"),
    "ETH": InstrumentPair(name="ETH", primary_market_id=0, counter_symbol="ETH-USD-PERP"),
}
