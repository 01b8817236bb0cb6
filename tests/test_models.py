import math

from assetbook.models import (
    Asset, Held, Sold, asset_percent_change, format_money, is_held, is_sold,
    percent_change, summarize,
)


def test_format_money():
    assert format_money(0) == "$0.00"
    assert format_money(12345) == "$123.45"
    assert format_money(5) == "$0.05"
    assert format_money(100000000) == "$1000000.00"


def test_format_money_negative_puts_sign_first():
    assert format_money(-50000) == "-$500.00"


def test_percent_change():
    assert percent_change(100, 150) == 50.0
    assert percent_change(100, 50) == -50.0
    assert percent_change(100, 100) == 0.0


def test_percent_change_from_zero_is_not_finite():
    assert math.isnan(percent_change(0, 0))
    assert percent_change(0, 10) == math.inf


def test_held_and_sold_predicates():
    held = Asset("MSFT", 1000, Held(25000))
    sold = Asset("AAPL", 30000, Sold(40000, 10000000))

    assert is_held(held) and not is_sold(held)
    assert is_sold(sold) and not is_held(sold)
    assert held.sell_price_cents is None
    assert sold.sell_price_cents == 40000
    assert sold.current_price_cents == 10000000


def test_asset_percent_change_uses_sell_price_once_sold():
    held = Asset("MSFT", 1000, Held(25000))
    sold = Asset("AAPL", 30000, Sold(40000, 10000000))

    assert asset_percent_change(held) == 2400.0
    assert round(asset_percent_change(sold), 2) == 33.33


def test_with_current_price_keeps_state():
    held = Asset("MSFT", 1000, Held(25000)).with_current_price(26000)
    sold = Asset("AAPL", 30000, Sold(40000, 100)).with_current_price(200)

    assert held.state == Held(26000)
    assert sold.state == Sold(40000, 200)


def test_summary_counts_only_held_assets():
    assets = [
        Asset("MSFT", 1000, Held(800), quantity=3),
        Asset("AAPL", 30000, Sold(40000, 10000000)),
        Asset("SPY", 5000, Held(4000)),
    ]
    s = summarize(assets)

    assert s.net_buy_price == 1000 * 3 + 5000
    assert s.market_value == 800 * 3 + 4000
    assert s.unrealized_gain_loss == 8000 - 6400
    assert s.held_count == 2
    assert s.sold_count == 1


def test_summary_gain_goes_negative_instead_of_wrapping():
    s = summarize([Asset("MSFT", 1000, Held(25000))])

    assert s.unrealized_gain_loss == -24000
    assert format_money(s.unrealized_gain_loss) == "-$240.00"


def test_selling_removes_current_price_from_summary():
    asset = Asset("MSFT", 1000, Held(25000), quantity=2)
    before = summarize([asset])
    after = summarize([asset.sold_at(30000).with_current_price(99999)])

    assert before.market_value == 50000
    assert after.market_value == 0
    assert after.net_buy_price == 0
    assert after.unrealized_gain_loss == 0


def test_empty_summary():
    s = summarize([])
    assert (s.net_buy_price, s.market_value, s.unrealized_gain_loss) == (0, 0, 0)
