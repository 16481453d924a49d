"""
Application settings with environment variable support.

Uses Pydantic Settings for type-safe configuration with automatic
environment variable loading and validation.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from spreadwatch.config.constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    LIGHTER_REST_URL,
    MAX_CHART_POINTS,
    PAGE_REFRESH_SECONDS,
    PARADEX_REST_URL,
    SAMPLE_INTERVAL_SECONDS,
    WINDOW_DURATION_MS,
)
from spreadwatch.core.types import INSTRUMENTS
from spreadwatch.utils.time import minutes_to_ms


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    (e.g. ``PORT=8080``, ``INSTRUMENTS='["BTC","ETH"]'``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Server
    # =========================================================================

    host: str = Field(
        default=DEFAULT_HOST,
        description="Interface the dashboard binds to",
    )

    port: int = Field(
        default=DEFAULT_PORT,
        ge=1,
        le=65535,
        description="Dashboard port (hosting platforms set PORT)",
    )

    page_refresh_seconds: float = Field(
        default=PAGE_REFRESH_SECONDS,
        ge=1.0,
        le=300.0,
        description="Browser auto-refresh period for the HTML page",
    )

    # =========================================================================
    # Instruments & Upstreams
    # =========================================================================

    instruments: list[str] = Field(
        default_factory=lambda: ["BTC"],
        description="Instruments to monitor; the first one is served at /",
    )

    primary_base_url: str = Field(
        default=LIGHTER_REST_URL,
        description="Base URL of the last-trade-price venue",
    )

    counter_base_url: str = Field(
        default=PARADEX_REST_URL,
        description="Base URL of the best-bid/ask venue",
    )

    request_timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0.0,
        le=30.0,
        description="Timeout for a single upstream request",
    )

    # =========================================================================
    # Sampling
    # =========================================================================

    sample_interval_seconds: float = Field(
        default=SAMPLE_INTERVAL_SECONDS,
        ge=0.5,
        le=60.0,
        description="Cadence of the background fetch task",
    )

    window_minutes: float = Field(
        default=WINDOW_DURATION_MS / 60_000,
        gt=0.0,
        le=24 * 60,
        description="Length of the rolling statistics window",
    )

    max_chart_points: int = Field(
        default=MAX_CHART_POINTS,
        ge=1,
        le=1000,
        description="Number of recent observations drawn on the chart",
    )

    refresh_before_read: bool = Field(
        default=False,
        description="Fetch a fresh observation before serving each page/API read",
    )

    # =========================================================================
    # Operation Mode
    # =========================================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )

    use_uvloop: bool = Field(
        default=True,
        description="Use uvloop for improved async performance",
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("instruments", mode="after")
    @classmethod
    def validate_instruments(cls, v: list[str]) -> list[str]:
        """Normalize names and reject unknown instruments."""
        names = [name.strip().upper() for name in v]
        if not names:
            raise ValueError("At least one instrument is required")

        unknown = [name for name in names if name not in INSTRUMENTS]
        if unknown:
            raise ValueError(
                f"Unknown instrument(s) {unknown}, expected one of {sorted(INSTRUMENTS)}"
            )

        return list(dict.fromkeys(names))

    @field_validator("primary_base_url", "counter_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoint paths are appended with a leading slash."""
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_window(self) -> "Settings":
        """The store needs a window of at least one whole millisecond."""
        if self.window_ms < 1:
            raise ValueError(
                f"window_minutes={self.window_minutes} is shorter than 1 ms"
            )
        return self

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def window_ms(self) -> int:
        """Statistics window in milliseconds."""
        return minutes_to_ms(self.window_minutes)

    @property
    def default_instrument(self) -> str:
        """Instrument rendered at the root page."""
        return self.instruments[0]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded only once.
    Clear cache with `get_settings.cache_clear()` if needed.
    """
    return Settings()
