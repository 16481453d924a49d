"""
Unit tests for SampleStore.

Tests rejection of empty samples, time-based eviction and snapshots.
"""

import threading

import pytest

from spreadwatch.config.constants import WINDOW_DURATION_MS
from spreadwatch.core.store import SampleStore
from spreadwatch.core.types import Observation


class TestSampleStore:
    """Tests for SampleStore."""

    def test_initialization(self, store: SampleStore) -> None:
        """Test empty initialization."""
        assert len(store) == 0
        assert store.latest() is None
        assert store.snapshot() == []
        assert store.window_ms == WINDOW_DURATION_MS

    def test_invalid_window(self) -> None:
        """Test that a non-positive window is rejected."""
        with pytest.raises(ValueError):
            SampleStore(window_ms=0)

    def test_insert(self, store: SampleStore, full_observation: Observation) -> None:
        """Test storing a complete observation."""
        assert store.insert(full_observation) is True

        assert len(store) == 1
        assert store.latest() == full_observation

    def test_insert_empty_is_noop(self, store_populated: SampleStore) -> None:
        """Test that an observation without prices is not stored."""
        before = store_populated.snapshot()

        stored = store_populated.insert(Observation(timestamp=2000))

        assert stored is False
        assert store_populated.snapshot() == before

    def test_insert_partial(self, store: SampleStore) -> None:
        """Test that a single available price is enough to store a sample."""
        assert store.insert(Observation(timestamp=1, counter_ask=50.0))
        assert len(store) == 1

    def test_zero_price_is_not_missing(self, store: SampleStore) -> None:
        """Test that 0.0 counts as a real price."""
        assert store.insert(Observation(timestamp=1, primary_price=0.0))
        assert store.latest() is not None
        assert store.latest().primary_price == 0.0

    def test_eviction(self) -> None:
        """Test that samples older than the window are evicted on insert."""
        store = SampleStore(window_ms=10_000)

        for ts in range(0, 30_000, 1000):
            store.insert(Observation(timestamp=ts, primary_price=float(ts)))
            latest_ts = ts
            assert all(obs.timestamp >= latest_ts - 10_000 for obs in store.snapshot())

        timestamps = [obs.timestamp for obs in store.snapshot()]
        assert timestamps[0] == 19_000
        assert timestamps[-1] == 29_000

    def test_eviction_boundary_is_inclusive(self) -> None:
        """Test that a sample exactly at the window edge is kept."""
        store = SampleStore(window_ms=1000)
        store.insert(Observation(timestamp=0, primary_price=1.0))
        store.insert(Observation(timestamp=1000, primary_price=2.0))

        assert len(store) == 2

        store.insert(Observation(timestamp=1001, primary_price=3.0))

        assert [obs.timestamp for obs in store.snapshot()] == [1000, 1001]

    def test_eviction_with_explicit_now(self) -> None:
        """Test eviction driven by a reference time instead of the sample time."""
        store = SampleStore(window_ms=1000)
        store.insert(Observation(timestamp=0, primary_price=1.0))

        store.insert(Observation(timestamp=100, primary_price=2.0), now=5000)

        assert store.snapshot() == []

    def test_empty_insert_does_not_evict(self) -> None:
        """Test that eviction only happens on accepted inserts."""
        store = SampleStore(window_ms=1000)
        store.insert(Observation(timestamp=0, primary_price=1.0))

        store.insert(Observation(timestamp=10_000))

        assert len(store) == 1

    def test_latest_does_not_evict(self) -> None:
        """Test that reading never removes samples."""
        store = SampleStore(window_ms=1000)
        store.insert(Observation(timestamp=0, primary_price=1.0))

        assert store.latest() is not None
        assert len(store) == 1

    def test_snapshot_order(self, store: SampleStore) -> None:
        """Test that snapshots preserve insertion order, including ties."""
        first = Observation(timestamp=5, primary_price=1.0)
        second = Observation(timestamp=5, primary_price=2.0)
        third = Observation(timestamp=6, primary_price=3.0)

        for obs in (first, second, third):
            store.insert(obs)

        assert store.snapshot() == [first, second, third]
        assert list(store) == [first, second, third]

    def test_snapshot_max_count(self, store: SampleStore) -> None:
        """Test that a capped snapshot returns the most recent samples."""
        observations = [
            Observation(timestamp=i * 1000, primary_price=float(i)) for i in range(25)
        ]
        for obs in observations:
            store.insert(obs)

        recent = store.snapshot(20)

        assert recent == observations[5:]
        assert len(store) == 25

    def test_snapshot_max_count_larger_than_store(
        self, store_populated: SampleStore
    ) -> None:
        """Test capping above the current size."""
        assert len(store_populated.snapshot(20)) == 2

    def test_snapshot_max_count_zero(self, store_populated: SampleStore) -> None:
        """Test a zero cap."""
        assert store_populated.snapshot(0) == []

    def test_snapshot_is_a_copy(self, store_populated: SampleStore) -> None:
        """Test that mutating a snapshot does not touch the store."""
        snapshot = store_populated.snapshot()
        snapshot.clear()

        assert len(store_populated) == 2

    def test_observations_are_immutable(self, full_observation: Observation) -> None:
        """Test that stored observations cannot be modified."""
        with pytest.raises(AttributeError):
            full_observation.primary_price = 1.0  # type: ignore[misc]

    def test_concurrent_insert_and_snapshot(self) -> None:
        """Test that snapshots stay ordered under a concurrent writer."""
        store = SampleStore(window_ms=50)
        errors: list[str] = []

        def writer() -> None:
            for ts in range(5000):
                store.insert(Observation(timestamp=ts, primary_price=float(ts)))

        def reader() -> None:
            for _ in range(500):
                timestamps = [obs.timestamp for obs in store.snapshot()]
                if timestamps != sorted(timestamps):
                    errors.append("out of order")
                if timestamps and timestamps[-1] - timestamps[0] > 50:
                    errors.append("expired sample visible")

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
