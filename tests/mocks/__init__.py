"""Mock implementations for testing."""

from tests.mocks.feed import FakeClock, MockPriceSource
from tests.mocks.venue import HITS, MARKET_IDS, SYMBOLS, create_venue_app


__all__ = [
    "HITS",
    "MARKET_IDS",
    "SYMBOLS",
    "FakeClock",
    "MockPriceSource",
    "create_venue_app",
]
