"""
Async price fetcher for the two upstream venues.

Optimized for a small, steady polling load with:
- A single pooled aiohttp session
- Fast JSON parsing with orjson
- A hard per-request timeout so a stalled upstream never blocks a tick

Upstream failures never escape this module: every public fetch method
returns None for the fields it could not obtain.
"""

import asyncio
import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aiohttp
import orjson
from pydantic import ValidationError

from spreadwatch.config.constants import (
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    ENDPOINT_BBO,
    ENDPOINT_ORDER_BOOK_DETAILS,
    LIGHTER_REST_URL,
    PARADEX_REST_URL,
    USER_AGENT,
)
from spreadwatch.core.types import InstrumentPair, Observation
from spreadwatch.exchange.models import CounterQuote, PrimaryTicker
from spreadwatch.telemetry.metrics import FeedMetrics
from spreadwatch.utils.time import get_timestamp_ms


logger = logging.getLogger(__name__)

VENUE_PRIMARY = "primary"
VENUE_COUNTER = "counter"


class VenueClientError(Exception):
    """Base exception for upstream request errors."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class VenueAPIError(VenueClientError):
    """Exception for non-success HTTP responses."""

    pass


class PriceFetcher:
    """
    Fetches one observation per call from both venues.

    Features:
    - Both venues queried concurrently
    - Single attempt per call, no retries
    - Failures logged, counted and mapped to None
    """

    def __init__(
        self,
        primary_base_url: str = LIGHTER_REST_URL,
        counter_base_url: str = PARADEX_REST_URL,
        timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        metrics: FeedMetrics | None = None,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            primary_base_url: Base URL of the last-trade-price venue.
            counter_base_url: Base URL of the best-bid/ask venue.
            timeout_seconds: Total timeout for each upstream request.
            metrics: Optional metrics collector for latency/failure tracking.
        """
        self._primary_base_url = primary_base_url.rstrip("/")
        self._counter_base_url = counter_base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._metrics = metrics
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=20,
                keepalive_timeout=30,
                enable_cleanup_closed=True,
            )

            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=self._timeout,
                headers={"Accept": "application/json", "User-Agent": USER_AGENT},
            )

        return self._session

    async def close(self) -> None:
        """Close the client session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    @asynccontextmanager
    async def _request_context(self) -> AsyncIterator[aiohttp.ClientSession]:
        """Context manager translating transport errors."""
        session = await self._get_session()
        try:
            yield session
        except aiohttp.ClientError as e:
            raise VenueClientError(f"Network error: {e}") from e
        except TimeoutError as e:
            raise VenueClientError("Request timed out") from e

    async def _request(
        self,
        venue: str,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        GET a JSON document.

        Args:
            venue: Venue name for metrics.
            url: Absolute URL.
            params: Query parameters.

        Returns:
            Decoded JSON body.

        Raises:
            VenueAPIError: On HTTP status >= 400.
            VenueClientError: On network, timeout or decoding errors.
        """
        started = time.perf_counter()

        async with self._request_context() as session:
            async with session.get(url, params=params) as response:
                body = await response.read()

                if self._metrics is not None:
                    self._metrics.record_latency(venue, (time.perf_counter() - started) * 1000)

                if response.status >= 400:
                    raise VenueAPIError(
                        f"HTTP {response.status} from {url}",
                        status=response.status,
                    )

        try:
            return orjson.loads(body)
        except orjson.JSONDecodeError as e:
            raise VenueClientError(f"Invalid JSON response: {e}") from e

    def _record_failure(self, venue: str, pair: InstrumentPair, error: Exception) -> None:
        logger.warning(f"{venue} fetch failed for {pair.name}: {error}")
        if self._metrics is not None:
            self._metrics.record_fetch_failure(venue)

    # =========================================================================
    # Public Fetch Methods
    # =========================================================================

    async def fetch_primary_price(self, pair: InstrumentPair) -> float | None:
        """
        Get the last trade price from the primary venue.

        Args:
            pair: Instrument to fetch.

        Returns:
            Last trade price, or None on any failure.
        """
        url = f"{self._primary_base_url}{ENDPOINT_ORDER_BOOK_DETAILS}"

        try:
            data = await self._request(
                VENUE_PRIMARY, url, params={"market_id": pair.primary_market_id}
            )
            price = PrimaryTicker.model_validate(data).price_for(pair.primary_market_id)
        except (VenueClientError, ValidationError) as e:
            self._record_failure(VENUE_PRIMARY, pair, e)
            return None

        if price is None:
            logger.debug(f"No last trade price in primary payload for {pair.name}")
        return price

    async def fetch_counter_quote(
        self, pair: InstrumentPair
    ) -> tuple[float | None, float | None]:
        """
        Get the best bid and ask from the counter venue.

        Args:
            pair: Instrument to fetch.

        Returns:
            (bid, ask); either side is None when unavailable.
        """
        url = f"{self._counter_base_url}{ENDPOINT_BBO.format(symbol=pair.counter_symbol)}"

        try:
            data = await self._request(VENUE_COUNTER, url)
            quote = CounterQuote.model_validate(data)
        except (VenueClientError, ValidationError) as e:
            self._record_failure(VENUE_COUNTER, pair, e)
            return None, None

        return quote.bid, quote.ask

    async def fetch_observation(
        self,
        pair: InstrumentPair,
        now: int | None = None,
    ) -> Observation:
        """
        Capture both venues for one tick.

        Args:
            pair: Instrument to fetch.
            now: Capture timestamp in milliseconds (default: current time).

        Returns:
            Observation, possibly with some or all prices set to None.
        """
        timestamp = get_timestamp_ms() if now is None else now

        primary_price, (counter_bid, counter_ask) = await asyncio.gather(
            self.fetch_primary_price(pair),
            self.fetch_counter_quote(pair),
        )

        return Observation(
            timestamp=timestamp,
            primary_price=primary_price,
            counter_bid=counter_bid,
            counter_ask=counter_ask,
        )

    async def __aenter__(self) -> "PriceFetcher":
        """Async context manager entry."""
        await self._get_session()
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.close()
