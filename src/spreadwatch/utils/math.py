"""
Numeric helpers for spread calculations and display.

Missing values are represented as None throughout; these helpers never
raise on None, zero divisors or non-finite input.
"""

import math

from spreadwatch.config.constants import MISSING_PLACEHOLDER


def is_finite_number(value: object) -> bool:
    """
    Check whether a value is a usable real number.

    bool is rejected even though it subclasses int.

    Args:
        value: Any value.

    Returns:
        True for finite int/float values.
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def safe_percent(numerator: float, denominator: float) -> float | None:
    """
    Express numerator as a percentage of denominator.

    Args:
        numerator: The dividend.
        denominator: The divisor.

    Returns:
        numerator / denominator * 100, or None if denominator is zero
        or the result is not finite.

    Example:
        >>> safe_percent(2.0, 100.0)
        2.0
        >>> safe_percent(2.0, 0.0) is None
        True
    """
    if denominator == 0:
        return None

    result = numerator / denominator * 100.0
    return result if math.isfinite(result) else None


def format_price(value: float | None, decimals: int = 2) -> str:
    """
    Format a price or spread for display.

    Args:
        value: Value to format.
        decimals: Number of decimal places.

    Returns:
        Fixed-point string, or a placeholder for missing values.

    Example:
        >>> format_price(1.239)
        '1.24'
        >>> format_price(None)
        '—'
    """
    if not is_finite_number(value):
        return MISSING_PLACEHOLDER
    return f"{value:.{decimals}f}"


def format_signed(value: float | None, decimals: int = 2) -> str:
    """
    Format a spread with an explicit sign.

    Example:
        >>> format_signed(1.234)
        '+1.23'
        >>> format_signed(-1.234)
        '-1.23'
    """
    if not is_finite_number(value):
        return MISSING_PLACEHOLDER
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.{decimals}f}"


def format_percent(value: float | None, decimals: int = 4) -> str:
    """Format a percentage spread for display."""
    if not is_finite_number(value):
        return MISSING_PLACEHOLDER
    return f"{format_signed(value, decimals)}%"
