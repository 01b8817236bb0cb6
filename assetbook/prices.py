"""
assetbook/prices.py  -  Live price lookup

The rest of the app only knows the PriceLookup protocol: give it a ticker,
get back integer cents or a PriceLookupError. YahooPriceLookup is the real
implementation; tests pass in a fake.
"""

import logging
import math
from typing import Optional, Protocol

import pandas as pd
import yfinance as yf

from assetbook.config import Settings, get_settings
from assetbook.errors import MalformedQuoteError, QuoteTransportError, TickerNotFoundError

logger = logging.getLogger(__name__)


class PriceLookup(Protocol):
    def lookup(self, ticker: str) -> int:
        """Current price of ``ticker`` in cents; raises PriceLookupError."""
        ...


def to_cents(price: float) -> int:
    return int(round(price * 100))


def _last_close(hist: pd.DataFrame) -> Optional[float]:
    """Most recent non-null Close in a yfinance history frame."""
    if "Close" not in hist.columns:
        return None
    closes = hist["Close"].dropna()
    if closes.empty:
        return None
    return float(closes.iloc[-1])


class YahooPriceLookup:
    """One blocking Yahoo Finance round trip per call. No retries, no cache."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.timeout = settings.lookup_timeout
        self.period  = settings.history_period

    def lookup(self, ticker: str) -> int:
        logger.debug("Looking up %s (timeout %.1fs)", ticker, self.timeout)
        try:
            hist = yf.Ticker(ticker).history(period=self.period, timeout=self.timeout)
        except Exception as e:
            raise QuoteTransportError(ticker, str(e) or type(e).__name__) from e

        if hist is None or hist.empty:
            raise TickerNotFoundError(ticker, "no quote data (unknown or delisted symbol?)")

        price = _last_close(hist)
        if price is None:
            raise MalformedQuoteError(ticker, "response has no close price")
        if not math.isfinite(price) or price < 0:
            raise MalformedQuoteError(ticker, f"unusable price {price!r}")

        cents = to_cents(price)
        logger.debug("%s -> %d cents", ticker, cents)
        return cents
