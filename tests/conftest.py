"""
Pytest configuration and shared fixtures.

Provides reusable test fixtures for all test modules.
"""

import pytest

from spreadwatch.config.settings import Settings
from spreadwatch.core.store import SampleStore
from spreadwatch.core.types import INSTRUMENTS, InstrumentPair, Observation
from tests.mocks.feed import FakeClock, MockPriceSource


# =============================================================================
# Instrument Fixtures
# =============================================================================


@pytest.fixture
def btc_pair() -> InstrumentPair:
    """BTC instrument pair."""
    return INSTRUMENTS["BTC"]


@pytest.fixture
def eth_pair() -> InstrumentPair:
    """ETH instrument pair."""
    return INSTRUMENTS["ETH"]


# =============================================================================
# Observation Fixtures
# =============================================================================


@pytest.fixture
def reference_observations() -> list[Observation]:
    """Two samples whose spreads are A=[2, 2] and B=[2, 1]."""
    return [
        Observation(timestamp=0, primary_price=100.0, counter_bid=98.0, counter_ask=102.0),
        Observation(timestamp=1000, primary_price=105.0, counter_bid=103.0, counter_ask=106.0),
    ]


@pytest.fixture
def full_observation() -> Observation:
    """Observation with every price available."""
    return Observation(timestamp=1000, primary_price=100.0, counter_bid=98.0, counter_ask=102.0)


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def store() -> SampleStore:
    """Empty store with the default 15 minute window."""
    return SampleStore()


@pytest.fixture
def store_populated(
    store: SampleStore, reference_observations: list[Observation]
) -> SampleStore:
    """Store holding the reference observations."""
    for obs in reference_observations:
        store.insert(obs)
    return store


# =============================================================================
# Monitor Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FakeClock:
    """Manually advanced clock."""
    return FakeClock()


@pytest.fixture
def mock_source() -> MockPriceSource:
    """Source returning the same healthy prices every call."""
    return MockPriceSource()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, instruments=["BTC", "ETH"])  # type: ignore[call-arg]
