"""Upstream venue integration."""

from spreadwatch.exchange.client import PriceFetcher, VenueAPIError, VenueClientError
from spreadwatch.exchange.models import CounterQuote, OrderBookDetail, PrimaryTicker


__all__ = [
    "CounterQuote",
    "OrderBookDetail",
    "PriceFetcher",
    "PrimaryTicker",
    "VenueAPIError",
    "VenueClientError",
]
