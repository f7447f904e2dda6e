"""Tests for disclosure record validation."""

from datetime import date

import pytest

from congress_uniqueness.schemas.trade import DisclosureRecord, parse_disclosure_date


class TestParseDisclosureDate:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2024-01-15", date(2024, 1, 15)),
            ("01/15/2024", date(2024, 1, 15)),
            ("01-15-2024", date(2024, 1, 15)),
            ("2024-01-15T00:00:00", date(2024, 1, 15)),
            (date(2024, 1, 15), date(2024, 1, 15)),
            ("", None),
            ("someday", None),
            (None, None),
        ],
    )
    def test_formats(self, value, expected):
        assert parse_disclosure_date(value) == expected


class TestDisclosureRecord:
    def test_aliases_and_field_names(self):
        by_alias = DisclosureRecord.model_validate({"firstName": "Jane", "lastName": "Doe", "assetType": "Stock"})
        by_name = DisclosureRecord(first_name="Jane", last_name="Doe", asset_type="Stock")
        assert by_alias == by_name

    @pytest.mark.parametrize("symbol,expected", [("nvda", "NVDA"), (" aapl ", "AAPL"), ("--", None), ("N/A", None), ("", None), (None, None)])
    def test_symbol_cleaning(self, symbol, expected):
        assert DisclosureRecord(symbol=symbol).symbol == expected

    def test_to_trade(self):
        record = DisclosureRecord(
            first_name="Jane", last_name="Doe", symbol="ACME", asset_type="Stock Option",
            amount="$15,001 - $50,000", transaction_date="2024-01-02", owner="Joint",
        )
        trade = record.to_trade()
        assert trade.symbol == "ACME"
        assert trade.amount.midpoint == 32500.5
        assert trade.transaction_date == date(2024, 1, 2)
        assert trade.owner == "Joint"

    def test_amount_parsing(self):
        assert DisclosureRecord(amount="Spouse/DC Over $1,000,000").to_trade().amount.low == 1000000
        assert DisclosureRecord(amount="not disclosed").to_trade().amount is None
