"""
assetbook/portfolio.py  -  The in-memory portfolio

An ordered list of assets. Position is the only identity: duplicate tickers
are allowed and never merged. The command loop owns exactly one Portfolio
and hands it to each command.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from assetbook.errors import InvalidTransitionError, PriceLookupError
from assetbook.models import Asset, Summary, is_sold, summarize
from assetbook.prices import PriceLookup

logger = logging.getLogger(__name__)


@dataclass
class RefreshResult:
    updated: List[str]                          = field(default_factory=list)
    failed:  List[Tuple[str, PriceLookupError]] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.updated) + len(self.failed)


class Portfolio:
    def __init__(self, assets: Optional[List[Asset]] = None):
        self.assets: List[Asset] = list(assets) if assets else []

    def __len__(self) -> int:
        return len(self.assets)

    def __iter__(self) -> Iterator[Asset]:
        return iter(self.assets)

    # ── Mutations ─────────────────────────────────────────────────────────────

    def add(self, asset: Asset) -> None:
        self.assets.append(asset)

    def replace(self, assets: List[Asset]) -> None:
        """Swap in a whole new asset list (used by load)."""
        self.assets = list(assets)

    def _get(self, index: int) -> Asset:
        if not 0 <= index < len(self.assets):
            raise InvalidTransitionError(
                f"Row {index + 1} does not exist (portfolio has {len(self.assets)} assets).")
        return self.assets[index]

    def mark_sold(self, index: int, sell_price_cents: int) -> Asset:
        """Held -> Sold. There is no way back."""
        asset = self._get(index)
        if is_sold(asset):
            raise InvalidTransitionError(
                f"{asset.ticker} (row {index + 1}) is already sold.")
        self.assets[index] = asset.sold_at(sell_price_cents)
        return self.assets[index]

    def remove(self, index: int) -> Asset:
        asset = self._get(index)
        del self.assets[index]
        return asset

    # ── Prices ────────────────────────────────────────────────────────────────

    def refresh_prices(self, lookup: PriceLookup) -> RefreshResult:
        """
        Look up every asset in order. A failure leaves that asset untouched and
        is recorded; it never stops the remaining lookups.
        """
        result = RefreshResult()
        for i, asset in enumerate(self.assets):
            try:
                cents = lookup.lookup(asset.ticker)
            except PriceLookupError as e:
                logger.warning("Refresh failed for %s: %s", asset.ticker, e.reason)
                result.failed.append((asset.ticker, e))
                continue
            self.assets[i] = asset.with_current_price(cents)
            result.updated.append(asset.ticker)
        return result

    # ── Queries ───────────────────────────────────────────────────────────────

    def summary(self) -> Summary:
        return summarize(self.assets)
