"""
assetbook/display.py
====================
Renders portfolio data in the terminal using the `rich` library.

The *_row() helpers return plain strings so the numbers a table shows can be
checked without rendering it.
"""

import math
from typing import List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from assetbook.models import Asset, Summary, asset_percent_change, format_money, is_held


console = Console()

# ── Palette ─────────────────────────────────────────────────────────────────
GAIN   = "green"
LOSS   = "red"
MUTED  = "grey62"
ACCENT = "steel_blue1"
HEAD   = "bold white"

NOT_SOLD = "N/A (currently held)"
WAS_SOLD = "N/A (sold)"
NO_VALUE = "N/A"


# ── Formatters ───────────────────────────────────────────────────────────────

def _colour(value: float, text: str) -> str:
    if value > 0:  return f"[{GAIN}]{text}[/{GAIN}]"
    if value < 0:  return f"[{LOSS}]{text}[/{LOSS}]"
    return f"[{MUTED}]{text}[/{MUTED}]"

def format_percent(value: float) -> str:
    if not math.isfinite(value):
        return NO_VALUE
    return f"{value:.2f}%"


def _table() -> Table:
    return Table(
        box=box.SIMPLE,
        show_header=True,
        header_style=f"bold {ACCENT}",
        show_edge=False,
        pad_edge=True,
    )


# ── Assets ───────────────────────────────────────────────────────────────────

ASSET_COLUMNS = ["#", "Ticker", "Qty", "Buy Price", "Current Price",
                 "Percent Change", "Sell Price"]


def asset_row(row: int, asset: Asset) -> List[str]:
    held = is_held(asset)
    return [
        str(row),
        asset.ticker,
        str(asset.quantity),
        format_money(asset.buy_price_cents),
        format_money(asset.current_price_cents) if held else WAS_SOLD,
        format_percent(asset_percent_change(asset)),
        NOT_SOLD if held else format_money(asset.sell_price_cents),
    ]


def print_assets(assets: List[Asset]) -> None:
    if not assets:
        console.print(f"\n  [{MUTED}]No assets yet. Type 'new' to add one.[/{MUTED}]\n")
        return

    table = _table()
    for name in ASSET_COLUMNS:
        justify = "left" if name == "Ticker" else "right"
        table.add_column(name, justify=justify, style=HEAD if name == "Ticker" else None)

    for i, asset in enumerate(assets, 1):
        cells = asset_row(i, asset)
        cells[1] = escape(cells[1])
        change = asset_percent_change(asset)
        if math.isfinite(change):
            cells[5] = _colour(change, cells[5])
        table.add_row(*cells)

    console.print(f"\n[{ACCENT}]Assets[/{ACCENT}]")
    console.print(table)


# ── Summary ──────────────────────────────────────────────────────────────────

def summary_rows(summary: Summary) -> List[List[str]]:
    return [
        ["Held assets",          str(summary.held_count)],
        ["Sold assets",          str(summary.sold_count)],
        ["Net buy price",        format_money(summary.net_buy_price)],
        ["Market value",         format_money(summary.market_value)],
        ["Unrealized gain/loss", format_money(summary.unrealized_gain_loss)],
    ]


def print_summary(summary: Summary) -> None:
    table = _table()
    table.add_column("", style=MUTED)
    table.add_column("", justify="right", style=HEAD)
    rows = summary_rows(summary)
    for label, value in rows[:-1]:
        table.add_row(label, value)
    # net buy minus market: a negative figure is money made
    label, value = rows[-1]
    table.add_row(label, _colour(-summary.unrealized_gain_loss, value))

    console.print(f"\n[{ACCENT}]Summary[/{ACCENT}] [{MUTED}](held assets only)[/{MUTED}]")
    console.print(table)


# ── Help ─────────────────────────────────────────────────────────────────────

HELP_ROWS = [
    ("assets",  "List every asset"),
    ("summary", "Totals over held assets"),
    ("new",     "Add an asset (looks up its current price)"),
    ("sell",    "Mark a held asset as sold"),
    ("remove",  "Delete an asset"),
    ("refresh", "Re-fetch current prices for every asset"),
    ("load",    "Replace the portfolio with one read from a file"),
    ("dump",    "Save the portfolio to a file"),
    ("help",    "Show this list"),
    ("exit",    "Quit"),
]


def print_help() -> None:
    table = _table()
    table.add_column("Command", style=HEAD)
    table.add_column("Description", style=MUTED)
    for name, text in HELP_ROWS:
        table.add_row(name, text)
    console.print(table)
