"""
Unit tests for application settings.
"""

import pytest
from pydantic import ValidationError

from spreadwatch.config.constants import MAX_CHART_POINTS, SAMPLE_INTERVAL_SECONDS
from spreadwatch.config.settings import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        """Test reference defaults."""
        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.instruments == ["BTC"]
        assert settings.window_ms == 15 * 60 * 1000
        assert settings.sample_interval_seconds == SAMPLE_INTERVAL_SECONDS
        assert settings.max_chart_points == MAX_CHART_POINTS
        assert settings.refresh_before_read is False
        assert settings.default_instrument == "BTC"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test loading values from the environment."""
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("INSTRUMENTS", '["eth", "btc"]')
        monkeypatch.setenv("REFRESH_BEFORE_READ", "true")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.port == 8080
        assert settings.instruments == ["ETH", "BTC"]
        assert settings.default_instrument == "ETH"
        assert settings.refresh_before_read is True

    def test_unknown_instrument(self) -> None:
        """Test rejection of unsupported instruments."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, instruments=["DOGE"])  # type: ignore[call-arg]

    def test_empty_instruments(self) -> None:
        """Test rejection of an empty instrument list."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, instruments=[])  # type: ignore[call-arg]

    def test_duplicate_instruments(self) -> None:
        """Test that duplicates collapse while keeping order."""
        settings = Settings(_env_file=None, instruments=["BTC", "btc", "ETH"])  # type: ignore[call-arg]

        assert settings.instruments == ["BTC", "ETH"]

    def test_base_url_normalized(self) -> None:
        """Test trailing slash removal."""
        settings = Settings(_env_file=None, counter_base_url="http://localhost:1/")  # type: ignore[call-arg]

        assert settings.counter_base_url == "http://localhost:1"

    def test_window_minutes(self) -> None:
        """Test window conversion."""
        settings = Settings(_env_file=None, window_minutes=0.5)  # type: ignore[call-arg]

        assert settings.window_ms == 30_000

    def test_window_below_one_ms(self) -> None:
        """Test that a window truncating to 0 ms fails validation."""
        with pytest.raises(ValidationError, match="shorter than 1 ms"):
            Settings(_env_file=None, window_minutes=0.00001)  # type: ignore[call-arg]

    def test_short_window(self) -> None:
        """Test that short sub-second windows are still accepted."""
        settings = Settings(_env_file=None, window_minutes=0.001)  # type: ignore[call-arg]

        assert settings.window_ms == 60

    def test_invalid_interval(self) -> None:
        """Test bounds validation."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, sample_interval_seconds=0)  # type: ignore[call-arg]
