"""
Pydantic models for upstream venue responses.

Price fields are parsed leniently: numeric strings are coerced, and
anything missing, non-numeric or non-finite becomes None instead of
failing the whole payload. A price of 0 is kept as 0.0.
"""

import math
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator


def _to_price(value: Any) -> float | None:
    """Coerce a raw JSON value into a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, int | float | str):
        return None

    try:
        price = float(value)
    except ValueError:
        return None

    return price if math.isfinite(price) else None


class CounterQuote(BaseModel):
    """Best bid/offer from the counter venue (``/v1/bbo/{market}``)."""

    market: str | None = None
    bid: float | None = Field(default=None, validation_alias=AliasChoices("bid", "best_bid"))
    ask: float | None = Field(default=None, validation_alias=AliasChoices("ask", "best_ask"))

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("bid", "ask", mode="before")
    @classmethod
    def parse_price(cls, v: Any) -> float | None:
        return _to_price(v)


class OrderBookDetail(BaseModel):
    """Single market record from the primary venue's order book details."""

    market_id: int | None = None
    symbol: str | None = None
    last_trade_price: float | None = None

    model_config = {"extra": "ignore"}

    @field_validator("last_trade_price", mode="before")
    @classmethod
    def parse_price(cls, v: Any) -> float | None:
        return _to_price(v)


class PrimaryTicker(BaseModel):
    """
    Last trade price from the primary venue.

    Accepts both the ticker shape (``last_trade_price`` at the top level)
    and the order book details shape (a list of per-market records).
    """

    last_trade_price: float | None = None
    order_book_details: list[OrderBookDetail] = Field(default_factory=list)

    model_config = {"extra": "ignore"}

    @field_validator("last_trade_price", mode="before")
    @classmethod
    def parse_price(cls, v: Any) -> float | None:
        return _to_price(v)

    def price_for(self, market_id: int) -> float | None:
        """
        Resolve the last trade price for a market.

        Args:
            market_id: Primary venue market id.

        Returns:
            Last trade price, or None if the payload has none for the market.
        """
        if self.last_trade_price is not None:
            return self.last_trade_price

        for detail in self.order_book_details:
            if detail.market_id == market_id:
                return detail.last_trade_price

        # Records without ids are assumed to belong to the requested market
        for detail in self.order_book_details:
            if detail.market_id is None:
                return detail.last_trade_price

        return None
