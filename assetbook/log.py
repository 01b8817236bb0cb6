"""
assetbook/log.py  -  Logging setup

Diagnostics go to stderr through rich's handler so they never interleave with
the tables and prompts the REPL writes to stdout.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from assetbook.config import Settings

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(settings: Settings) -> None:
    handlers = [
        RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True),
    ]
    if settings.log_file:
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )
    # yfinance is chatty at INFO/DEBUG; keep it to real problems
    logging.getLogger("yfinance").setLevel(logging.WARNING)
