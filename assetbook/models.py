"""
assetbook/models.py  -  Pure dataclasses and calculations, no I/O.

An Asset is always in exactly one lifecycle state:

    Held  : not yet sold; market value tracks current_price_cents
    Sold  : disposed of at sell_price_cents; excluded from unrealised P&L

All money is stored as integer cents.
"""

import math
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Union


@dataclass(frozen=True)
class Held:
    current_price_cents: int


@dataclass(frozen=True)
class Sold:
    sell_price_cents:    int
    current_price_cents: int   # last known market price, retained for the file


AssetState = Union[Held, Sold]


@dataclass
class Asset:
    ticker:          str
    buy_price_cents: int         # total cost basis
    state:           AssetState
    quantity:        int = 1

    @property
    def current_price_cents(self) -> int:
        return self.state.current_price_cents

    @property
    def sell_price_cents(self) -> Optional[int]:
        if isinstance(self.state, Sold):
            return self.state.sell_price_cents
        return None

    @property
    def exit_price_cents(self) -> int:
        """The price percent change is measured against: market if held, sale if sold."""
        if isinstance(self.state, Sold):
            return self.state.sell_price_cents
        return self.state.current_price_cents

    def with_current_price(self, cents: int) -> "Asset":
        return replace(self, state=replace(self.state, current_price_cents=cents))

    def sold_at(self, sell_price_cents: int) -> "Asset":
        return replace(self, state=Sold(sell_price_cents=sell_price_cents,
                                        current_price_cents=self.current_price_cents))


def is_sold(asset: Asset) -> bool:
    return isinstance(asset.state, Sold)


def is_held(asset: Asset) -> bool:
    return not is_sold(asset)


def percent_change(old_cents: int, new_cents: int) -> float:
    """
    (new - old) / old * 100 as a float.

    A zero base has no meaningful change; rather than raise, return nan for
    0 -> 0 and a signed infinity otherwise, and let the formatter show N/A.
    """
    if old_cents == 0:
        if new_cents == 0:
            return math.nan
        return math.copysign(math.inf, new_cents)
    return (new_cents - old_cents) / old_cents * 100


def asset_percent_change(asset: Asset) -> float:
    return percent_change(asset.buy_price_cents, asset.exit_price_cents)


def format_money(cents: int) -> str:
    sign = "-" if cents < 0 else ""
    return f"{sign}${abs(cents) / 100:.2f}"


@dataclass(frozen=True)
class Summary:
    net_buy_price:        int
    market_value:         int
    unrealized_gain_loss: int   # net_buy_price - market_value; negative on a gain
    held_count:           int
    sold_count:           int


def summarize(assets: Iterable[Asset]) -> Summary:
    """Totals over held assets only; sold assets are counted but never valued."""
    net_buy = market = 0
    held = sold = 0
    for a in assets:
        if is_sold(a):
            sold += 1
            continue
        held    += 1
        net_buy += a.buy_price_cents * a.quantity
        market  += a.current_price_cents * a.quantity
    return Summary(
        net_buy_price=net_buy,
        market_value=market,
        unrealized_gain_loss=net_buy - market,
        held_count=held,
        sold_count=sold,
    )
