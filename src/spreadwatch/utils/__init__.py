"""Utility functions for the spread monitor."""

from spreadwatch.utils.math import (
    format_percent,
    format_price,
    format_signed,
    is_finite_number,
    safe_percent,
)
from spreadwatch.utils.time import (
    format_timestamp_ms,
    get_timestamp_ms,
    minutes_to_ms,
)


__all__ = [
    "format_percent",
    "format_price",
    "format_signed",
    "format_timestamp_ms",
    "get_timestamp_ms",
    "is_finite_number",
    "minutes_to_ms",
    "safe_percent",
]
