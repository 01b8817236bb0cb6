"""
assetbook/storage.py  -  JSON persistence

File layout (UTF-8, indented):

    {"assets": [{"ticker": "MSFT", "buyPriceCents": 1000,
                 "currentPriceCents": 25000, "sellPriceCents": null,
                 "quantity": 1}, ...]}

Older files without "quantity" load with quantity 1. Writes go to a temp file
next to the target and are moved into place, so a failed dump never leaves a
half-written portfolio behind.
"""

import json
import logging
import os
import stat
import tempfile
from typing import Any, Dict, List, Optional

from assetbook.errors import PersistenceError
from assetbook.models import Asset, Held, Sold
from assetbook.validation import validate_document

logger = logging.getLogger(__name__)

_MAX_REPORTED_ERRORS = 5


def _file_mode(path: str) -> int:
    """Mode a dump should leave behind: the existing file's, else what umask allows."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


# ── Conversion ────────────────────────────────────────────────────────────────

def asset_to_record(asset: Asset) -> Dict[str, Any]:
    return {
        "ticker":            asset.ticker,
        "buyPriceCents":     asset.buy_price_cents,
        "currentPriceCents": asset.current_price_cents,
        "sellPriceCents":    asset.sell_price_cents,
        "quantity":          asset.quantity,
    }


def asset_from_record(record: Dict[str, Any]) -> Asset:
    """Build an Asset from a record that already passed validate_asset_record()."""
    current = record["currentPriceCents"]
    sell    = record.get("sellPriceCents")
    state   = Held(current) if sell is None else Sold(sell, current)
    return Asset(
        ticker=record["ticker"],
        buy_price_cents=record["buyPriceCents"],
        state=state,
        quantity=record.get("quantity", 1),
    )


def portfolio_to_document(assets: List[Asset]) -> Dict[str, Any]:
    return {"assets": [asset_to_record(a) for a in assets]}


def portfolio_from_document(doc: Any, path: Optional[str] = None) -> List[Asset]:
    errors = validate_document(doc)
    if errors:
        shown = errors[:_MAX_REPORTED_ERRORS]
        more  = len(errors) - len(shown)
        if more:
            shown.append(f"... and {more} more")
        raise PersistenceError(path, "invalid portfolio file: " + "; ".join(shown))
    return [asset_from_record(r) for r in doc["assets"]]


# ── File I/O ──────────────────────────────────────────────────────────────────

def load_assets(path: str) -> List[Asset]:
    try:
        with open(path, encoding="utf-8") as f:
            doc = json.load(f)
    except FileNotFoundError:
        raise PersistenceError(path, "file not found") from None
    except json.JSONDecodeError as e:
        raise PersistenceError(path, f"not valid JSON ({e})") from e
    except (OSError, UnicodeDecodeError) as e:
        raise PersistenceError(path, f"could not read file ({e})") from e
    except (ValueError, RecursionError) as e:
        # over-long integer literals and pathological nesting
        raise PersistenceError(path, f"not valid JSON ({e})") from e

    assets = portfolio_from_document(doc, path)
    logger.info("Loaded %d assets from %s", len(assets), path)
    return assets


def dump_assets(assets: List[Asset], path: str) -> None:
    try:
        text = json.dumps(portfolio_to_document(assets), indent=2)
    except (TypeError, ValueError) as e:
        raise PersistenceError(path, f"could not serialise portfolio ({e})") from e

    directory = os.path.dirname(os.path.abspath(path))
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=directory,
                                         suffix=".tmp", delete=False) as f:
            tmp_name = f.name
            f.write(text + "\n")
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise PersistenceError(path, f"could not write file ({e})") from e

    logger.info("Wrote %d assets to %s", len(assets), path)
