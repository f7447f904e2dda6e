"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from congress_uniqueness.schemas.member import Trader, TraderHistory
from congress_uniqueness.schemas.trade import DisclosureRecord, Trade
from congress_uniqueness.taxonomy.committee_sectors import CommitteeSectorMap


@pytest.fixture
def sample_senate_disclosure_raw() -> dict:
    """Sample raw record from the FMP senate-latest feed."""
    return {
        "symbol": "LRCX",
        "disclosureDate": "2024-03-01",
        "transactionDate": "2024-02-10",
        "firstName": "Tommy",
        "lastName": "Tuberville",
        "office": "Tommy Tuberville",
        "district": "AL",
        "owner": "Self",
        "assetDescription": "Lam Research Corp",
        "assetType": "Stock",
        "type": "Purchase",
        "amount": "$1,001 - $15,000",
        "comment": "--",
        "link": "https://efdsearch.senate.gov/search/view/ptr/abc/",
    }


@pytest.fixture
def sample_house_disclosure_raw() -> dict:
    """Sample raw record from the FMP house-latest feed."""
    return {
        "symbol": "NVDA",
        "disclosureDate": "2024-01-15",
        "transactionDate": "2024-01-02",
        "firstName": "Nancy",
        "lastName": "Pelosi",
        "office": "Nancy Pelosi",
        "district": "CA11",
        "owner": "Spouse",
        "assetDescription": "NVIDIA Corporation",
        "assetType": "Stock Option",
        "type": "Purchase",
        "amount": "$1,000,001 - $5,000,000",
        "capitalGainsOver200USD": "False",
        "comment": "",
        "link": "https://disclosures-clerk.house.gov/public_disc/ptr-pdfs/2024/20024542.pdf",
    }


@pytest.fixture
def make_record() -> Callable[..., DisclosureRecord]:
    """Factory for disclosure records with sensible defaults."""

    def _make(**overrides: Any) -> DisclosureRecord:
        data: dict[str, Any] = {
            "first_name": "Jane",
            "last_name": "Doe",
            "chamber": "house",
            "symbol": "ACME",
            "asset_description": "Acme Corp",
            "asset_type": "Stock",
            "type": "Purchase",
            "amount": "$1,001 - $15,000",
            "transaction_date": "2024-05-01",
            "owner": "Self",
        }
        data.update(overrides)
        return DisclosureRecord.model_validate(data)

    return _make


@pytest.fixture
def stock_trade() -> Trade:
    return Trade(symbol="ACME", asset_type="Stock", type="Purchase", owner="Self")


@pytest.fixture
def trader() -> Trader:
    return Trader(id="house-jane-doe", first_name="Jane", last_name="Doe", chamber="house")


@pytest.fixture
def empty_history() -> TraderHistory:
    return TraderHistory()


@pytest.fixture
def sector_map() -> CommitteeSectorMap:
    return CommitteeSectorMap.from_entries()


@pytest.fixture
def committee_data() -> dict:
    """Trimmed congress-legislators dataset: two committees, three members."""
    return {
        "committees": [
            {"type": "house", "name": "House Committee on Financial Services", "thomas_id": "HSBA"},
            {"type": "senate", "name": "Senate Committee on Armed Services", "thomas_id": "SSAS"},
        ],
        "membership": {
            "HSBA": [
                {"name": "French Hill", "bioguide": "H001072", "party": "majority"},
                {"name": "Maxine Waters", "bioguide": "W000187", "party": "minority"},
            ],
            "HSBA04": [{"name": "French Hill", "bioguide": "H001072"}],
            "hsba": [{"name": "French Hill", "bioguide": "H001072"}],
            "SSAS": [{"name": "Tommy Tuberville", "bioguide": "T000278"}],
        },
        "legislators": [
            {
                "id": {"bioguide": "H001072"},
                "name": {"first": "James", "last": "Hill", "nickname": "French", "official_full": "French Hill"},
                "terms": [{"type": "rep", "party": "Republican"}],
            },
            {
                "id": {"bioguide": "W000187"},
                "name": {"first": "Maxine", "last": "Waters", "official_full": "Maxine Waters"},
                "terms": [{"type": "rep", "party": "Democrat"}],
            },
            {
                "id": {"bioguide": "T000278"},
                "name": {"first": "Tommy", "last": "Tuberville", "official_full": "Tommy Tuberville"},
                "terms": [{"type": "sen", "party": "Independent"}, {"type": "sen", "party": "Republican"}],
            },
        ],
    }
