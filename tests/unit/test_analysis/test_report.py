"""Tests for plain-text report rendering."""

from datetime import date

from congress_uniqueness.analysis.listing import CommitteeListing, CommitteeMember, SaleEntry, TradeSummary
from congress_uniqueness.analysis.report import (
    format_analysis_report,
    format_committee_list,
    format_sales_report,
    format_trade_list,
    format_trade_report,
)
from congress_uniqueness.analysis.service import analyze_batch, build_traders
from congress_uniqueness.ingestion.legislators.committees import CommitteeDirectory
from congress_uniqueness.schemas.market import MarketData
from congress_uniqueness.taxonomy.committee_sectors import CommitteeSectorMap

AS_OF = date(2024, 6, 30)


def _report(make_record, min_score=0):
    records = [
        make_record(
            symbol="SMBK", asset_type="Call Option", owner="Spouse",
            amount="$250,001 - $500,000", transaction_date="2024-06-10",
        ),
        make_record(symbol="AAPL", transaction_date="2024-06-01"),
    ]
    directory = CommitteeDirectory(
        {
            "membership": {"HSBA": [{"name": "Jane Doe", "bioguide": "D000001"}]},
            "legislators": [
                {"id": {"bioguide": "D000001"}, "name": {"first": "Jane", "last": "Doe"}, "terms": [{"party": "Democrat"}]}
            ],
        }
    )
    market = {"SMBK": MarketData(market_cap=200_000_000, sector="Financial Services", industry="Banks - Regional")}
    return analyze_batch(
        records, market, build_traders(records, directory), CommitteeSectorMap.from_entries(),
        min_score=min_score, as_of=AS_OF,
    )


class TestFormatTradeReport:
    def test_lists_flagged_factors(self, make_record):
        report = _report(make_record)
        smbk = next(r for r in report.unique_trades if r.record.symbol == "SMBK")
        text = format_trade_report(smbk)

        assert text.startswith("SMBK - Acme Corp")
        assert "Jane Doe (house) [Democrat]" in text
        assert "Micro cap: $200M" in text
        assert "Committee relevance: Financial Services, Banks - Regional (HSBA)" in text
        assert "Derivative: Call Option" in text
        assert "Indirect ownership: Spouse" in text

    def test_unflagged_factors_omitted(self, make_record):
        report = _report(make_record)
        aapl = next(r for r in report.unique_trades if r.record.symbol == "AAPL")
        text = format_trade_report(aapl)
        assert "cap:" not in text
        assert "Derivative" not in text
        assert "Indirect ownership" not in text


class TestFormatAnalysisReport:
    def test_sections(self, make_record):
        text = format_analysis_report(_report(make_record), top=5)
        assert "UNIQUE TRADES ANALYSIS REPORT" in text
        assert "Total Trades Analyzed: 2" in text
        assert "TOP 2 UNIQUE TRADES:" in text
        assert "TRADES BY MEMBER:" in text
        assert "Jane Doe: 2 unique trades" in text
        assert "COMMITTEE-RELEVANT TRADES BY SECTOR:" in text
        assert "Financial Services: 1 trades" in text

    def test_top_limit(self, make_record):
        text = format_analysis_report(_report(make_record), top=1)
        assert "TOP 1 UNIQUE TRADES:" in text
        assert "AAPL - " not in text

    def test_no_results(self, make_record):
        text = format_analysis_report(_report(make_record, min_score=101))
        assert "No trades met the uniqueness criteria." in text
        assert "TRADES BY MEMBER:" not in text


class TestTradeList:
    def test_overlap_marked_and_counted(self):
        summaries = [
            TradeSummary(
                trader="French Hill", chamber="house", symbol="SMBK", description="Small Bank Corp",
                type="Purchase", amount="$1,001 - $15,000", date="2024-06-10",
                sector="Financial Services", industry="Banks - Regional",
                trader_committees=["HSBA", "HSBA04", "HSAS", "HSIF"], relevant_committees=["HSBA"],
                has_committee_overlap=True,
            ),
            TradeSummary(
                trader="Jane Doe", chamber="senate", symbol="N/A", description="Unknown",
                type="Sale", amount="N/A", date="N/A",
            ),
        ]
        text = format_trade_list(summaries, {"HSBA": "Financial Services"})

        assert "! SMBK | PURCHASE | $1,001 - $15,000" in text
        assert "French Hill (House) | 2024-06-10" in text
        assert "Committees: Financial Services, HSBA04, HSAS +1 more" in text
        assert "POTENTIAL COMMITTEE RELEVANCE: Financial Services" in text
        assert "Jane Doe (Senate) | N/A" in text
        assert "Showing 2 trades" in text
        assert "1 trades have potential committee relevance" in text

    def test_empty(self):
        assert "No trades found matching the criteria." in format_trade_list([])


class TestSalesReport:
    def test_grouped_by_date_with_labels(self, make_record):
        sales = [
            SaleEntry(
                record=make_record(
                    first_name="Tommy", last_name="Tuberville", chamber="senate", symbol="LMT",
                    asset_description="Lockheed Martin", type="Sale (Full)", transaction_date="2024-06-12",
                ),
                party="R",
            ),
            SaleEntry(
                record=make_record(
                    first_name="Maxine", last_name="Waters", symbol="AAPL", asset_description="Apple Inc",
                    asset_type="Call Option", owner="Spouse", type="Sale", transaction_date="2024-06-12",
                ),
                party="D",
            ),
            SaleEntry(record=make_record(symbol="ACME", asset_description="ACME", type="Sale", transaction_date=None)),
        ]
        text = format_sales_report(sales, generated=date(2024, 6, 30))
        lines = text.splitlines()

        assert "Generated: 2024-06-30" in lines
        assert "Total Sales: 3" in lines
        assert sum(1 for line in lines if line.startswith("-- 2024-06-12")) == 1
        assert any(line.startswith("-- Unknown") for line in lines)
        assert "  LMT    $1,001 - $15,000       Sen. Tommy Tuberville (R)" in lines
        assert "         Lockheed Martin" in lines
        assert "  AAPL   $1,001 - $15,000       Rep. Maxine Waters (D) [Spouse]" in lines
        assert "         Apple Inc (Call Option)" in lines
        # Description equal to the symbol is not repeated
        assert "         ACME" not in lines


class TestCommitteeList:
    def test_sections_and_member_overflow(self):
        committees = [
            CommitteeListing(
                code="HSBA", name="Financial Services", type="house",
                sectors=["Financial Services", "Real Estate"],
                members=[CommitteeMember(name=f"Member {i}", party="majority") for i in range(10)],
            ),
            CommitteeListing(code="SSRA", name="Rules and Administration", type="senate"),
        ]
        text = format_committee_list(committees)

        assert text.index("HOUSE COMMITTEES") < text.index("SENATE COMMITTEES")
        assert "  HSBA   Financial Services" in text
        assert "Sectors: Financial Services, Real Estate" in text
        assert "Members (10):" in text
        assert "Member 0 (majority)" in text
        assert "... and 2 more members" in text
        assert "Sectors: (none mapped)" in text
        assert "Total: 2 committees" in text
