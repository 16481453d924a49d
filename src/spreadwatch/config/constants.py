"""
Monitoring constants and configuration values.

This module contains all hardcoded values used throughout the spread monitor.
Values are organized by category for easy maintenance and auditing.
"""

from typing import Final


# =============================================================================
# Venue Endpoints
# =============================================================================

# Primary venue (Lighter): last trade price per market
LIGHTER_REST_URL: Final[str] = "https://mainnet.zklighter.elliot.ai"
ENDPOINT_ORDER_BOOK_DETAILS: Final[str] = "/api/v1/orderBookDetails"

# Counter venue (Paradex perpetuals): best bid / best ask
PARADEX_REST_URL: Final[str] = "https://api.prod.paradex.trade"
ENDPOINT_BBO: Final[str] = "/v1/bbo/{symbol}"


# =============================================================================
# Sampling & Windowing
# =============================================================================

# Length of the statistics window (15 minutes)
WINDOW_DURATION_MS: Final[int] = 15 * 60 * 1000

# Cadence of the background fetch task
SAMPLE_INTERVAL_SECONDS: Final[float] = 3.0

# Display-only history cap for the chart
MAX_CHART_POINTS: Final[int] = 20


# =============================================================================
# HTTP
# =============================================================================

# Upper bound for a single upstream request (connect + read)
DEFAULT_REQUEST_TIMEOUT_SECONDS: Final[float] = 5.0

USER_AGENT: Final[str] = "spreadwatch/1.0"


# =============================================================================
# Dashboard
# =============================================================================

DEFAULT_HOST: Final[str] = "0.0.0.0"
DEFAULT_PORT: Final[int] = 3000

# Browser auto-refresh period for the HTML page
PAGE_REFRESH_SECONDS: Final[float] = 3.0

# Placeholder rendered for missing values
MISSING_PLACEHOLDER: Final[str] = "—"


# =============================================================================
# Logging & Telemetry
# =============================================================================

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Maximum log queue size
MAX_LOG_QUEUE_SIZE: Final[int] = 10_000

# Number of fetch latency samples kept per venue
LATENCY_WINDOW_SIZE: Final[int] = 500
