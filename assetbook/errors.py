"""
assetbook/errors.py  -  Error taxonomy

Everything a single command can fail with derives from AssetbookError, so the
command loop has one place to catch, report, and carry on.
"""

from typing import Optional


class AssetbookError(Exception):
    """Base class for every recoverable, user-reportable failure."""


# ── Input ─────────────────────────────────────────────────────────────────────

class InputParseError(AssetbookError):
    """Malformed text typed at an interactive prompt."""


class InvalidTransitionError(AssetbookError):
    """A portfolio operation that the asset's current state does not allow."""


# ── Price lookup ──────────────────────────────────────────────────────────────

class PriceLookupError(AssetbookError):
    """Could not turn a ticker into a current price."""

    def __init__(self, ticker: str, reason: str):
        super().__init__(f"Could not fetch price for {ticker}: {reason}")
        self.ticker = ticker
        self.reason = reason


class TickerNotFoundError(PriceLookupError):
    """The quote source has no data for this symbol."""


class QuoteTransportError(PriceLookupError):
    """The round trip itself failed (network, timeout, upstream error)."""


class MalformedQuoteError(PriceLookupError):
    """A response arrived but carried no usable price."""


# ── Persistence ───────────────────────────────────────────────────────────────

class PersistenceError(AssetbookError):
    """Reading or writing a portfolio file failed."""

    def __init__(self, path: Optional[str], reason: str):
        where = f"{path}: " if path else ""
        super().__init__(f"{where}{reason}")
        self.path = path
        self.reason = reason
