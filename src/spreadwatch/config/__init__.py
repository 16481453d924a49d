"""Configuration module for the spread monitor."""

from spreadwatch.config.constants import (
    MAX_CHART_POINTS,
    SAMPLE_INTERVAL_SECONDS,
    WINDOW_DURATION_MS,
)
from spreadwatch.config.settings import Settings, get_settings


__all__ = [
    "Settings",
    "get_settings",
    "MAX_CHART_POINTS",
    "SAMPLE_INTERVAL_SECONDS",
    "WINDOW_DURATION_MS",
]
