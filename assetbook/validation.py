"""
assetbook/validation.py  -  Input parsing and record validation

Two kinds of checks live here:
  - parse_*()    : turn one line of typed input into a value, or raise
                   InputParseError with a message fit to show the user
  - validate_*() : inspect a record read from disk and return a list of
                   error strings (empty = valid), so a loader can report
                   every problem in a file at once
"""

from typing import Any, List, Optional

from assetbook.errors import InputParseError

HELD_TOKEN = "held"


# ── Interactive input ─────────────────────────────────────────────────────────

def parse_ticker(raw: str) -> str:
    ticker = raw.strip()
    if not ticker:
        raise InputParseError("Ticker symbol cannot be empty.")
    return ticker


def parse_cents(raw: str, label: str = "Price") -> int:
    text = raw.strip()
    try:
        value = int(text)
    except ValueError:
        raise InputParseError(
            f"{label} '{text}' is not a whole number of cents.") from None
    if value < 0:
        raise InputParseError(f"{label} cannot be negative.")
    return value


def parse_sell_price(raw: str) -> Optional[int]:
    """'held' (exactly) means not sold; anything else must be cents."""
    if raw.strip() == HELD_TOKEN:
        return None
    return parse_cents(raw, label="Sell price")


def parse_quantity(raw: str) -> int:
    text = raw.strip()
    try:
        value = int(text)
    except ValueError:
        raise InputParseError(f"Quantity '{text}' is not a whole number.") from None
    if value <= 0:
        raise InputParseError("Quantity must be greater than zero.")
    return value


def parse_row(raw: str, row_count: int) -> int:
    """1-based row number as shown in the assets table -> 0-based index."""
    text = raw.strip()
    try:
        row = int(text)
    except ValueError:
        raise InputParseError(f"Row '{text}' is not a number.") from None
    if not 1 <= row <= row_count:
        raise InputParseError(
            f"Row {row} is out of range (portfolio has {row_count} assets).")
    return row - 1


# ── Persisted records ─────────────────────────────────────────────────────────

def _is_int(value: Any) -> bool:
    # bool is a subclass of int; true/false in a file is never a price
    return isinstance(value, int) and not isinstance(value, bool)


def _check_cents(record: dict, key: str, where: str, errors: List[str],
                 optional: bool = False) -> None:
    if key not in record or record[key] is None:
        if not optional:
            errors.append(f"{where}: missing '{key}'.")
        return
    value = record[key]
    if not _is_int(value):
        errors.append(f"{where}: '{key}' must be an integer, got {value!r}.")
    elif value < 0:
        errors.append(f"{where}: '{key}' cannot be negative.")


def validate_asset_record(record: Any, index: int) -> List[str]:
    where  = f"asset {index + 1}"
    errors = []

    if not isinstance(record, dict):
        return [f"{where}: expected an object, got {type(record).__name__}."]

    ticker = record.get("ticker")
    if not isinstance(ticker, str):
        errors.append(f"{where}: 'ticker' must be a string.")
    elif not ticker.strip():
        errors.append(f"{where}: 'ticker' cannot be empty.")

    _check_cents(record, "buyPriceCents", where, errors)
    _check_cents(record, "currentPriceCents", where, errors)
    _check_cents(record, "sellPriceCents", where, errors, optional=True)

    if "quantity" in record:
        qty = record["quantity"]
        if not _is_int(qty):
            errors.append(f"{where}: 'quantity' must be an integer, got {qty!r}.")
        elif qty <= 0:
            errors.append(f"{where}: 'quantity' must be greater than zero.")

    return errors


def validate_document(doc: Any) -> List[str]:
    if not isinstance(doc, dict):
        return ["top level must be an object with an 'assets' list."]
    assets = doc.get("assets")
    if not isinstance(assets, list):
        return ["'assets' must be a list."]

    errors = []
    for i, record in enumerate(assets):
        errors.extend(validate_asset_record(record, i))
    return errors
