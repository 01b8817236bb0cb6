"""
assetbook/cli.py
================
The interactive command loop.

One line in, one command out: the first word picks a handler from COMMANDS,
the handler reads or changes the portfolio, and control always comes back to
the prompt. Any AssetbookError a handler raises is reported and the loop goes
on; only end of input or Ctrl-C end the process.
"""

import logging
from typing import Callable, Dict, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from assetbook import display, storage
from assetbook.config import Settings, get_settings
from assetbook.errors import AssetbookError
from assetbook.log import setup_logging
from assetbook.models import Asset, Held, Sold, format_money
from assetbook.portfolio import Portfolio
from assetbook.prices import PriceLookup, YahooPriceLookup
from assetbook.validation import (
    parse_cents, parse_quantity, parse_row, parse_sell_price, parse_ticker,
)

console = Console()
logger  = logging.getLogger(__name__)

EXIT_OK           = 0
EXIT_INPUT_CLOSED = 1
EXIT_BAD_CONFIG   = 2
EXIT_INTERRUPTED  = 130

MUTED  = display.MUTED
ACCENT = display.ACCENT


class CLI:
    """Owns the portfolio and the price source; dispatches typed commands."""

    def __init__(self, lookup: Optional[PriceLookup] = None,
                 settings: Optional[Settings] = None):
        self.settings  = settings or get_settings()
        self.lookup    = lookup or YahooPriceLookup(self.settings)
        self.portfolio = Portfolio()

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    def _ask(self, prompt: str, default: Optional[str] = None) -> str:
        if default is None:
            return Prompt.ask(prompt, console=console)
        return Prompt.ask(prompt, default=default, console=console)

    def _ok(self, message: str) -> None:
        console.print(f"[green]✓ {escape(message)}[/green]")

    def _error(self, message: str) -> None:
        console.print(f"[red]{escape(message)}[/red]")

    # -----------------------------------------------------------------------
    # Commands
    # -----------------------------------------------------------------------

    def show_assets(self) -> None:
        display.print_assets(self.portfolio.assets)

    def show_summary(self) -> None:
        display.print_summary(self.portfolio.summary())

    def show_help(self) -> None:
        display.print_help()

    def new_asset(self) -> None:
        """Guided flow: nothing is appended unless every answer parses and the lookup succeeds."""
        console.print(f"\n[{ACCENT}]── New asset ──[/{ACCENT}]")
        ticker   = parse_ticker(self._ask("Ticker"))
        buy      = parse_cents(self._ask("Buy price (cents)"), label="Buy price")
        sell     = parse_sell_price(self._ask("Sell price (cents, or 'held')"))
        quantity = parse_quantity(self._ask("Quantity", default="1"))

        console.print(f"[{MUTED}]Fetching price for {escape(ticker)}...[/{MUTED}]")
        current = self.lookup.lookup(ticker)

        state = Held(current) if sell is None else Sold(sell, current)
        self.portfolio.add(Asset(ticker=ticker, buy_price_cents=buy,
                                 state=state, quantity=quantity))
        logger.info("Added %s x%d at %d cents", ticker, quantity, buy)
        self._ok(f"Added {ticker} (current price {format_money(current)})")

    def sell_asset(self) -> None:
        if not self.portfolio.assets:
            console.print(f"[{MUTED}]No assets to sell.[/{MUTED}]")
            return
        index = parse_row(self._ask("Row number"), len(self.portfolio))
        price = parse_cents(self._ask("Sell price (cents)"), label="Sell price")
        asset = self.portfolio.mark_sold(index, price)
        self._ok(f"{asset.ticker} marked sold at {format_money(price)}")

    def remove_asset(self) -> None:
        if not self.portfolio.assets:
            console.print(f"[{MUTED}]No assets to remove.[/{MUTED}]")
            return
        index  = parse_row(self._ask("Row number to remove"), len(self.portfolio))
        ticker = self.portfolio.assets[index].ticker
        if Confirm.ask(f"[red]Remove row {index + 1} ({escape(ticker)})?[/red]", console=console):
            self.portfolio.remove(index)
            self._ok(f"Removed {ticker}")

    def refresh_prices(self) -> None:
        if not self.portfolio.assets:
            console.print(f"[{MUTED}]No assets to refresh.[/{MUTED}]")
            return
        console.print(f"[{MUTED}]Fetching live prices...[/{MUTED}]")
        result = self.portfolio.refresh_prices(self.lookup)
        for _ticker, err in result.failed:
            self._error(str(err))
        self._ok(f"Refreshed {len(result.updated)} of {result.attempted} assets")

    def load_portfolio(self) -> None:
        path   = self._ask("Load from file", default=self.settings.default_file)
        assets = storage.load_assets(path)
        self.portfolio.replace(assets)
        self._ok(f"Loaded {len(assets)} assets from {path}")

    def dump_portfolio(self) -> None:
        path = self._ask("Save to file", default=self.settings.default_file)
        storage.dump_assets(self.portfolio.assets, path)
        self._ok(f"Saved {len(self.portfolio)} assets to {path}")

    COMMANDS: Dict[str, Callable[["CLI"], None]] = {
        "assets":  show_assets,
        "summary": show_summary,
        "new":     new_asset,
        "sell":    sell_asset,
        "remove":  remove_asset,
        "refresh": refresh_prices,
        "load":    load_portfolio,
        "dump":    dump_portfolio,
        "help":    show_help,
    }
    EXIT_COMMANDS = ("exit", "quit")

    # -----------------------------------------------------------------------
    # Main loop
    # -----------------------------------------------------------------------

    def handle(self, line: str) -> bool:
        """Run one command line. Returns False when the loop should stop."""
        words = line.strip().split()
        if not words:
            return True

        name = words[0].lower()
        if name in self.EXIT_COMMANDS:
            return False

        handler = self.COMMANDS.get(name)
        if handler is None:
            console.print(f"[red]Unknown command: {escape(line.strip())}[/red]  "
                          f"[{MUTED}]Type 'help' for a list.[/{MUTED}]")
            logger.warning("Unknown command %r", line.strip())
            return True

        try:
            handler(self)
        except AssetbookError as e:
            logger.warning("Command %r failed: %s", name, e)
            self._error(str(e))
        return True

    def run(self) -> None:
        console.print(Panel(
            "[bold white]assetbook[/bold white]  [grey62]type 'help' for commands[/grey62]",
            border_style="grey39",
            padding=(0, 2),
        ))
        while self.handle(self._ask(f"[{ACCENT}]assetbook[/{ACCENT}]")):
            pass
        console.print("[cyan]Goodbye![/cyan]")


def main() -> int:
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red]\n{escape(str(e))}")
        return EXIT_BAD_CONFIG

    setup_logging(settings)
    cli = CLI(settings=settings)
    try:
        cli.run()
    except EOFError:
        logger.warning("Input stream closed; exiting")
        console.print("\n[red]Input closed.[/red]")
        return EXIT_INPUT_CLOSED
    except KeyboardInterrupt:
        console.print("\n[red]Interrupted.[/red]")
        return EXIT_INTERRUPTED
    return EXIT_OK
