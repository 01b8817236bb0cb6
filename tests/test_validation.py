import pytest

from assetbook.errors import InputParseError
from assetbook.validation import (
    parse_cents, parse_quantity, parse_row, parse_sell_price, parse_ticker,
    validate_asset_record, validate_document,
)


def test_parse_sell_price_held_means_unsold():
    assert parse_sell_price("held") is None
    assert parse_sell_price("4000") == 4000


@pytest.mark.parametrize("raw", ["abc", "Held", "HELD", "40.00", ""])
def test_parse_sell_price_rejects_anything_else(raw):
    with pytest.raises(InputParseError):
        parse_sell_price(raw)


def test_parse_cents_rejects_negative():
    with pytest.raises(InputParseError) as exc:
        parse_cents("-5", label="Buy price")
    assert "Buy price" in str(exc.value)


def test_parse_ticker_keeps_case_and_strips():
    assert parse_ticker("  brk.b ") == "brk.b"
    with pytest.raises(InputParseError):
        parse_ticker("   ")


@pytest.mark.parametrize("raw", ["0", "-1", "two", "1.5"])
def test_parse_quantity_must_be_positive_int(raw):
    with pytest.raises(InputParseError):
        parse_quantity(raw)


def test_parse_row_is_one_based():
    assert parse_row("1", 3) == 0
    assert parse_row("3", 3) == 2
    with pytest.raises(InputParseError):
        parse_row("4", 3)
    with pytest.raises(InputParseError):
        parse_row("0", 3)


def test_valid_record_has_no_errors():
    record = {"ticker": "MSFT", "buyPriceCents": 1000, "currentPriceCents": 25000,
              "sellPriceCents": None, "quantity": 2}
    assert validate_asset_record(record, 0) == []


def test_legacy_record_without_quantity_or_sell_price_is_valid():
    record = {"ticker": "MSFT", "buyPriceCents": 1000, "currentPriceCents": 25000}
    assert validate_asset_record(record, 0) == []


def test_record_errors_are_all_collected():
    record = {"ticker": "", "buyPriceCents": "10", "currentPriceCents": -1,
              "sellPriceCents": True, "quantity": 0}
    errors = validate_asset_record(record, 4)

    assert len(errors) == 5
    assert all(e.startswith("asset 5:") for e in errors)


def test_document_shape():
    assert validate_document([]) != []
    assert validate_document({"assets": {}}) != []
    assert validate_document({"assets": []}) == []
    assert validate_document({"assets": [1]}) == ["asset 1: expected an object, got int."]
