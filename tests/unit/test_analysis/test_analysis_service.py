"""Tests for batch analysis orchestration."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from congress_uniqueness.analysis.service import (
    analyze_batch,
    build_traders,
    run_analysis,
)
from congress_uniqueness.ingestion.legislators.committees import CommitteeDirectory
from congress_uniqueness.schemas.market import MarketData
from congress_uniqueness.taxonomy.committee_sectors import CommitteeSectorMap

AS_OF = date(2024, 6, 30)


@pytest.fixture
def directory() -> CommitteeDirectory:
    return CommitteeDirectory(
        {
            "membership": {
                "HSBA": [{"name": "Jane Doe", "bioguide": "D000001"}],
                "HSBA04": [{"name": "Jane Doe", "bioguide": "D000001"}],
            },
            "legislators": [
                {
                    "id": {"bioguide": "D000001"},
                    "name": {"first": "Jane", "last": "Doe"},
                    "terms": [{"party": "Democrat"}],
                }
            ],
        }
    )


@pytest.fixture
def batch(make_record):
    return [
        make_record(
            symbol="SMBK", asset_type="Stock Option", owner="Spouse",
            amount="$250,001 - $500,000", transaction_date="2024-06-10",
        ),
        make_record(symbol="AAPL", amount="$1,001 - $15,000", transaction_date="2024-06-01"),
        make_record(symbol="AAPL", first_name="John", last_name="Roe", transaction_date=None),
        make_record(symbol="AAPL", first_name="Ann", last_name="Poe", transaction_date="2024-05-20"),
        make_record(symbol=None, asset_description="Municipal Bond", transaction_date="2024-06-20"),
    ]


MARKET = {
    "SMBK": MarketData(market_cap=200_000_000, sector="Financial Services", industry="Banks - Regional"),
    "AAPL": MarketData(market_cap=3_000_000_000_000, sector="Technology", industry="Consumer Electronics"),
}


class TestBuildTraders:
    def test_matches_committees_and_party(self, make_record, directory):
        traders = build_traders([make_record(), make_record(first_name="John", last_name="Roe")], directory)
        jane = traders["house-jane-doe"]
        assert jane.committees == ["HSBA", "HSBA04"]
        assert jane.party == "Democrat"
        assert jane.bioguide_id == "D000001"
        assert traders["house-john-roe"].committees == []

    def test_without_directory(self, make_record):
        traders = build_traders([make_record()], None)
        assert traders["house-jane-doe"].committees == []


class TestAnalyzeBatch:
    def test_scores_every_trade(self, batch, directory):
        traders = build_traders(batch, directory)
        report = analyze_batch(batch, MARKET, traders, CommitteeSectorMap.from_entries(), as_of=AS_OF)

        assert report.total_trades_analyzed == 5
        assert len(report.unique_trades) == 5
        assert report.min_score == 0

        smbk = next(r for r in report.unique_trades if r.record.symbol == "SMBK")
        assert smbk.score.factors.market_cap == 100
        assert smbk.score.factors.rarity == 100
        assert smbk.score.factors.committee_relevance == 100
        assert smbk.score.factors.derivative == 100
        assert smbk.score.factors.ownership == 75
        assert smbk.score.explanation.committee_relevance.overlapping_committees[0].committee_id == "HSBA"

        aapl = next(r for r in report.unique_trades if r.record.symbol == "AAPL" and r.trader.last_name == "Doe")
        assert aapl.score.factors.market_cap == 0
        assert aapl.score.explanation.rarity.total_congress_trades == 3
        assert aapl.score.explanation.rarity.unique_traders == 3
        assert aapl.score.explanation.rarity.recent_trades == 2

    def test_symbolless_trade_has_no_pattern(self, batch, directory):
        report = analyze_batch(batch, MARKET, build_traders(batch, directory), None, as_of=AS_OF)
        bond = next(r for r in report.unique_trades if r.record.symbol is None)
        assert bond.score.factors.rarity == 50
        assert bond.score.explanation.rarity is None

    def test_min_score_filter(self, batch, directory):
        report = analyze_batch(
            batch, MARKET, build_traders(batch, directory), CommitteeSectorMap.from_entries(),
            min_score=50, as_of=AS_OF,
        )
        assert [r.record.symbol for r in report.unique_trades] == ["SMBK"]
        assert report.total_trades_analyzed == 5

    def test_sorted_by_date_desc_undated_last(self, batch, directory):
        report = analyze_batch(batch, MARKET, build_traders(batch, directory), None, as_of=AS_OF)
        dates = [r.record.transaction_date for r in report.unique_trades]
        assert dates == [
            date(2024, 6, 20), date(2024, 6, 10), date(2024, 6, 1), date(2024, 5, 20), None,
        ]

    def test_summary(self, batch, directory):
        report = analyze_batch(
            batch, MARKET, build_traders(batch, directory), CommitteeSectorMap.from_entries(), as_of=AS_OF,
        )
        summary = report.summary
        assert summary.top_by_score[0].record.symbol == "SMBK"
        assert summary.by_sector == {"Financial Services": 1}
        jane = next(m for m in summary.by_member if m.name == "Jane Doe")
        assert jane.trade_count == 3

    def test_unknown_trader_gets_placeholder(self, make_record):
        report = analyze_batch([make_record()], {}, {}, None, as_of=AS_OF)
        assert report.unique_trades[0].trader.id == "house-jane-doe"
        assert report.unique_trades[0].trader.committees == []

    def test_empty_batch(self):
        report = analyze_batch([], {}, {}, None)
        assert report.total_trades_analyzed == 0
        assert report.unique_trades == []
        assert report.summary.by_member == []


class TestRunAnalysis:
    @pytest.mark.asyncio
    async def test_resolves_market_data_once_for_all_symbols(self, batch, directory):
        provider = MagicMock()
        provider.get_market_data_batch = AsyncMock(return_value=MARKET)

        report = await run_analysis(batch, directory, provider)

        provider.get_market_data_batch.assert_awaited_once_with(["AAPL", "SMBK"])
        assert report.total_trades_analyzed == 5
        smbk = next(r for r in report.unique_trades if r.record.symbol == "SMBK")
        assert smbk.market_data.sector == "Financial Services"

    @pytest.mark.asyncio
    async def test_without_provider(self, batch):
        report = await run_analysis(batch, None, None, min_score=0)
        assert all(r.score.factors.market_cap == 0 for r in report.unique_trades)
        assert all(r.score.factors.committee_relevance == 0 for r in report.unique_trades)
