import builtins

import pytest

from assetbook.config import Settings
from assetbook.errors import TickerNotFoundError


class FakeLookup:
    """Price source with fixed answers; any ticker it doesn't know fails."""

    def __init__(self, prices=None):
        self.prices = dict(prices or {})
        self.calls = []

    def lookup(self, ticker):
        self.calls.append(ticker)
        if ticker not in self.prices:
            raise TickerNotFoundError(ticker, "no quote data")
        return self.prices[ticker]


@pytest.fixture
def fake_lookup():
    return FakeLookup({"MSFT": 41000, "AAPL": 19000, "SPY": 50000})


@pytest.fixture
def settings(tmp_path):
    return Settings(_env_file=None, default_file=str(tmp_path / "portfolio.json"))


@pytest.fixture
def scripted_input(monkeypatch):
    """Feed prompt answers in order; running out behaves like Ctrl-D."""

    def feed(*lines):
        remaining = list(lines)

        def fake_input(*args):
            if not remaining:
                raise EOFError
            return remaining.pop(0)

        monkeypatch.setattr(builtins, "input", fake_input)
        return remaining

    return feed
