import math

import pandas as pd
import pytest

from assetbook import prices
from assetbook.config import Settings
from assetbook.errors import MalformedQuoteError, QuoteTransportError, TickerNotFoundError
from assetbook.prices import YahooPriceLookup, to_cents


class FakeTicker:
    frame = None
    error = None
    seen = []

    def __init__(self, symbol):
        self.symbol = symbol

    def history(self, **kwargs):
        FakeTicker.seen.append((self.symbol, kwargs))
        if FakeTicker.error is not None:
            raise FakeTicker.error
        return FakeTicker.frame


@pytest.fixture
def ticker(monkeypatch):
    FakeTicker.frame = None
    FakeTicker.error = None
    FakeTicker.seen = []
    monkeypatch.setattr(prices.yf, "Ticker", FakeTicker)
    return FakeTicker


@pytest.fixture
def lookup():
    return YahooPriceLookup(Settings(_env_file=None, lookup_timeout=3, history_period="5d"))


def test_to_cents_rounds():
    assert to_cents(123.456) == 12346
    assert to_cents(412.37) == 41237
    assert to_cents(0) == 0


def test_lookup_returns_last_close_in_cents(ticker, lookup):
    ticker.frame = pd.DataFrame({"Close": [400.0, 412.37, math.nan]})

    assert lookup.lookup("MSFT") == 41237
    assert ticker.seen == [("MSFT", {"period": "5d", "timeout": 3})]


def test_empty_history_means_unknown_ticker(ticker, lookup):
    ticker.frame = pd.DataFrame()

    with pytest.raises(TickerNotFoundError) as exc:
        lookup.lookup("ZZZZ")
    assert exc.value.ticker == "ZZZZ"


def test_missing_or_blank_close_is_malformed(ticker, lookup):
    ticker.frame = pd.DataFrame({"Open": [1.0]})
    with pytest.raises(MalformedQuoteError):
        lookup.lookup("MSFT")

    ticker.frame = pd.DataFrame({"Close": [math.nan, math.nan]})
    with pytest.raises(MalformedQuoteError):
        lookup.lookup("MSFT")


def test_negative_price_is_malformed(ticker, lookup):
    ticker.frame = pd.DataFrame({"Close": [-3.0]})

    with pytest.raises(MalformedQuoteError):
        lookup.lookup("MSFT")


def test_transport_failure_is_wrapped(ticker, lookup):
    ticker.error = TimeoutError("read timed out")

    with pytest.raises(QuoteTransportError) as exc:
        lookup.lookup("MSFT")
    assert "read timed out" in str(exc.value)
    assert isinstance(exc.value.__cause__, TimeoutError)
