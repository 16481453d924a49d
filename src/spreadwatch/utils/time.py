"""
Time utilities.

Sample timestamps are integer milliseconds since the Unix epoch.
"""

import time
from datetime import UTC, datetime


def get_timestamp_ms() -> int:
    """
    Get current timestamp in milliseconds.

    Returns:
        Current Unix timestamp in milliseconds.
    """
    return time.time_ns() // 1_000_000


def minutes_to_ms(minutes: float) -> int:
    """
    Convert minutes to milliseconds.

    Args:
        minutes: Duration in minutes.

    Returns:
        Duration in whole milliseconds.
    """
    return int(minutes * 60_000)


def format_timestamp_ms(timestamp_ms: int, include_date: bool = False) -> str:
    """
    Format a millisecond timestamp for chart labels and the page footer.

    Args:
        timestamp_ms: Timestamp in milliseconds.
        include_date: Whether to include the date portion.

    Returns:
        UTC time string.

    Example:
        >>> format_timestamp_ms(1704067200123)
        '00:00:00'
        >>> format_timestamp_ms(1704067200123, include_date=True)
        '2024-01-01 00:00:00'
    """
    dt = datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)

    if include_date:
        return dt.strftime("%Y-%m-%d %H:%M:%S")
    return dt.strftime("%H:%M:%S")
