"""Batch analysis: join trades with context, score, and summarize.

Two phases. Aggregation (trading patterns, trader histories, committee
lookup, market data) runs over the whole batch first; every trade is then
scored independently against those precomputed values.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone

from pydantic import BaseModel, Field

from congress_uniqueness.ingestion.legislators.committees import CommitteeDirectory
from congress_uniqueness.ingestion.market.fmp_market_data import FMPMarketDataProvider
from congress_uniqueness.metrics import scoring_latency_seconds, trades_scored_total
from congress_uniqueness.processing.pattern_analyzer import PatternIndex
from congress_uniqueness.processing.trader_history import (
    TraderIdentity,
    build_trader_histories,
    name_based_trader_id,
)
from congress_uniqueness.schemas.market import MarketData
from congress_uniqueness.schemas.member import Trader, TraderHistory
from congress_uniqueness.schemas.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig, UniquenessResult
from congress_uniqueness.schemas.trade import DisclosureRecord
from congress_uniqueness.signals.uniqueness import ScoringInput, score_trades
from congress_uniqueness.taxonomy.committee_sectors import CommitteeSectorMap
from congress_uniqueness.taxonomy.keyword_inference import KeywordSectorResolver

logger = logging.getLogger(__name__)

TOP_BY_SCORE = 20


class TradeReport(BaseModel):
    record: DisclosureRecord
    trader: Trader
    market_data: MarketData | None = None
    score: UniquenessResult


class MemberSummary(BaseModel):
    name: str
    trade_count: int
    average_score: float


class AnalysisSummary(BaseModel):
    top_by_score: list[TradeReport] = Field(default_factory=list)
    by_member: list[MemberSummary] = Field(default_factory=list)
    by_sector: dict[str, int] = Field(default_factory=dict)


class AnalysisReport(BaseModel):
    generated_at: datetime
    total_trades_analyzed: int
    min_score: int
    unique_trades: list[TradeReport]
    summary: AnalysisSummary


def build_sector_map(
    directory: CommitteeDirectory | None, keyword_fallback: bool = False
) -> CommitteeSectorMap:
    """Curated taxonomy, optionally backed by keyword inference over the
    congress-legislators committee descriptions."""
    fallback = None
    if keyword_fallback and directory is not None:
        fallback = KeywordSectorResolver.from_legislators_committees(directory.committees)
    return CommitteeSectorMap.from_entries(fallback=fallback)


def build_traders(
    records: Iterable[DisclosureRecord],
    directory: CommitteeDirectory | None,
    trader_id_fn: TraderIdentity = name_based_trader_id,
) -> dict[str, Trader]:
    """One Trader per identity, with committees and party when the member
    can be matched in the committee directory."""
    traders: dict[str, Trader] = {}
    unmatched = 0
    for record in records:
        trader_id = trader_id_fn(record)
        if trader_id in traders:
            continue

        bioguide = directory.find_member(record.first_name, record.last_name) if directory else None
        if directory is not None and bioguide is None:
            unmatched += 1

        traders[trader_id] = Trader(
            id=trader_id,
            first_name=record.first_name,
            last_name=record.last_name,
            chamber=record.chamber,
            committees=directory.member_committees(bioguide) if bioguide else [],
            party=directory.party(bioguide) if bioguide else None,
            bioguide_id=bioguide,
        )

    if unmatched:
        logger.info("Could not match %d of %d traders to committee data", unmatched, len(traders))
    return traders


def _sort_key_date_desc(report: TradeReport) -> tuple[bool, date]:
    tx_date = report.record.transaction_date
    return (tx_date is not None, tx_date or date.min)


def summarize(reports: list[TradeReport]) -> AnalysisSummary:
    by_member: dict[str, list[int]] = defaultdict(list)
    by_sector: dict[str, int] = defaultdict(int)

    for report in reports:
        by_member[report.trader.display_name].append(report.score.overall_score)
        sector = report.market_data.sector if report.market_data else None
        if report.score.flags.has_committee_relevance and sector:
            by_sector[sector] += 1

    members = [
        MemberSummary(name=name, trade_count=len(scores), average_score=sum(scores) / len(scores))
        for name, scores in by_member.items()
    ]
    members.sort(key=lambda m: (-m.average_score, m.name))

    top = sorted(reports, key=lambda r: r.score.overall_score, reverse=True)[:TOP_BY_SCORE]
    return AnalysisSummary(
        top_by_score=top,
        by_member=members,
        by_sector=dict(sorted(by_sector.items(), key=lambda kv: (-kv[1], kv[0]))),
    )


def analyze_batch(
    records: list[DisclosureRecord],
    market_data: Mapping[str, MarketData],
    traders: Mapping[str, Trader],
    sector_map: CommitteeSectorMap | None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    min_score: int = 0,
    as_of: date | None = None,
    trader_id_fn: TraderIdentity = name_based_trader_id,
) -> AnalysisReport:
    """Score a fully resolved batch. Performs no I/O."""
    patterns = PatternIndex.build(records, as_of=as_of)
    histories = build_trader_histories(records, trader_id_fn)

    inputs: list[ScoringInput] = []
    for record in records:
        trader_id = trader_id_fn(record)
        trader = traders.get(trader_id) or Trader(
            id=trader_id,
            first_name=record.first_name,
            last_name=record.last_name,
            chamber=record.chamber,
        )
        inputs.append(
            ScoringInput(
                trade=record.to_trade(),
                trader=trader,
                trader_history=histories.get(trader_id, TraderHistory()),
                market_data=market_data.get(record.symbol) if record.symbol else None,
                trading_pattern=patterns.get(record.symbol) if record.symbol else None,
            )
        )

    with scoring_latency_seconds.time():
        scored = score_trades(inputs, sector_map, config)
    trades_scored_total.inc(len(scored))

    reports = [
        TradeReport(
            record=record,
            trader=item.trader,
            market_data=market_data.get(record.symbol) if record.symbol else None,
            score=item.result,
        )
        for record, item in zip(records, scored)
        if item.result.overall_score >= min_score
    ]
    reports.sort(key=_sort_key_date_desc, reverse=True)

    logger.info(
        "Scored %d trades, %d at or above %d", len(scored), len(reports), min_score,
    )
    return AnalysisReport(
        generated_at=datetime.now(timezone.utc),
        total_trades_analyzed=len(records),
        min_score=min_score,
        unique_trades=reports,
        summary=summarize(reports),
    )


async def run_analysis(
    records: list[DisclosureRecord],
    directory: CommitteeDirectory | None,
    provider: FMPMarketDataProvider | None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    min_score: int = 0,
    keyword_fallback: bool = False,
) -> AnalysisReport:
    """Resolve external context for a batch, then score it."""
    symbols = sorted({r.symbol for r in records if r.symbol})
    market_data: dict[str, MarketData] = {}
    if provider is not None:
        logger.info("Resolving market data for %d symbols", len(symbols))
        market_data = await provider.get_market_data_batch(symbols)
    else:
        logger.warning("No market data provider; market cap and committee relevance will score 0")

    traders = build_traders(records, directory)
    logger.info("Built profiles for %d congress members", len(traders))

    return analyze_batch(
        records,
        market_data,
        traders,
        build_sector_map(directory, keyword_fallback),
        config=config,
        min_score=min_score,
    )
