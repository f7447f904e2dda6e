"""Uniqueness scoring for congressional trades.

Six factors, each scored 0-100, combined by the configured weights:

- Market cap: smaller companies get less analyst scrutiny
- Conviction: trade size relative to the trader's own average
- Rarity: how seldom congress as a whole trades the symbol
- Committee relevance: trader's committees cover the company's sector/industry
- Derivative: options and similar instruments are timing-sensitive
- Ownership: spouse/child/joint accounts put distance between member and trade

Pure functions only. Missing context never raises; it degrades the factor
to 0 (rarity: 50, since an unseen symbol could well be unique).
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from congress_uniqueness.schemas.market import CongressionalTradingPattern, MarketData
from congress_uniqueness.schemas.member import Trader, TraderHistory
from congress_uniqueness.schemas.scoring import (
    DEFAULT_SCORING_CONFIG,
    CommitteeRelevanceExplanation,
    ConvictionExplanation,
    DerivativeExplanation,
    FactorScores,
    MarketCapCategory,
    MarketCapExplanation,
    OverlappingCommittee,
    OwnershipExplanation,
    RarityCategory,
    RarityExplanation,
    ScoreExplanation,
    ScoreFlags,
    ScoringConfig,
    UniquenessResult,
)
from congress_uniqueness.schemas.trade import Trade
from congress_uniqueness.signals.classifiers import (
    AssetClass,
    OwnerClass,
    classify_asset_type,
    classify_owner,
)
from congress_uniqueness.taxonomy.committee_sectors import Jurisdiction, normalize_committee_id

FLAG_THRESHOLD = 50
NO_PATTERN_RARITY_SCORE = 50


@runtime_checkable
class CommitteeSectorLookup(Protocol):
    def jurisdiction(self, committee_id: str) -> Jurisdiction: ...

    def get_committee_sectors(self, committee_id: str) -> frozenset[str]: ...

    def get_committee_industries(self, committee_id: str) -> frozenset[str]: ...

    def has_overlap(self, committee_id: str, sector: str | None, industry: str | None) -> bool: ...


def _clamp(score: float) -> int:
    return int(max(0, min(100, score)))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ---------- Factor scores ----------

def _market_cap_category(market_cap: float, config: ScoringConfig) -> MarketCapCategory:
    thresholds = config.market_cap
    if market_cap < thresholds.micro:
        return "micro"
    if market_cap < thresholds.small:
        return "small"
    if market_cap < thresholds.mid:
        return "mid"
    return "large"


_MARKET_CAP_SCORES: dict[str, int] = {"micro": 100, "small": 75, "mid": 25, "large": 0}


def _has_market_cap(market_data: MarketData | None) -> bool:
    return market_data is not None and bool(market_data.market_cap) and market_data.market_cap > 0


def score_market_cap(market_data: MarketData | None, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> int:
    """Smaller cap scores higher. No data scores 0."""
    if not _has_market_cap(market_data):
        return 0
    return _MARKET_CAP_SCORES[_market_cap_category(market_data.market_cap, config)]


def _conviction_multiplier(trade: Trade, history: TraderHistory) -> float | None:
    if trade.amount is None:
        return None
    average = history.average_trade_size
    if not average or average <= 0:
        return None
    return trade.amount.midpoint / average


def score_conviction(
    trade: Trade, trader_history: TraderHistory, config: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> int:
    """Larger trade relative to the trader's average scores higher."""
    multiplier = _conviction_multiplier(trade, trader_history)
    if multiplier is None:
        return 0

    bands = config.conviction
    if multiplier >= bands.very_high:
        return 100
    if multiplier >= bands.high:
        return 75
    if multiplier >= bands.moderate:
        return 50
    if multiplier >= bands.baseline:
        return 25
    return 0


def _rarity_category(total_trades: int, config: ScoringConfig) -> RarityCategory:
    bands = config.rarity
    if total_trades <= bands.unique:
        return "unique"
    if total_trades <= bands.rare:
        return "rare"
    if total_trades <= bands.uncommon:
        return "uncommon"
    return "common"


_RARITY_SCORES: dict[str, int] = {"unique": 100, "rare": 75, "uncommon": 50, "common": 0}


def score_rarity(
    pattern: CongressionalTradingPattern | None, config: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> int:
    """Less-traded symbols score higher, with a bonus for few distinct traders."""
    if pattern is None:
        return NO_PATTERN_RARITY_SCORE

    base = _RARITY_SCORES[_rarity_category(pattern.total_trades, config)]

    if pattern.unique_traders == 1:
        bonus = 25
    elif pattern.unique_traders <= 3:
        bonus = 10
    else:
        bonus = 0

    return _clamp(base + bonus)


@dataclass(frozen=True)
class CommitteeOverlap:
    stock_sector: str | None
    stock_industry: str | None
    overlapping_tags: list[str]
    overlapping_committees: list[str]


def _committee_overlap(
    trade: Trade,
    trader: Trader,
    market_data: MarketData | None,
    sector_map: CommitteeSectorLookup | None,
) -> CommitteeOverlap | None:
    """Union the trader's committee coverage and intersect it with the
    stock's sector and industry. None when there is nothing to compare."""
    if sector_map is None or not trade.symbol or not trader.committees or market_data is None:
        return None

    sector = market_data.sector or None
    industry = market_data.industry or None
    if sector is None and industry is None:
        return None

    covered_sectors: set[str] = set()
    covered_industries: set[str] = set()
    overlapping_committees: list[str] = []
    for committee_id in trader.committees:
        covered_sectors.update(sector_map.get_committee_sectors(committee_id))
        covered_industries.update(sector_map.get_committee_industries(committee_id))
        parent = normalize_committee_id(committee_id)
        if sector_map.has_overlap(committee_id, sector, industry) and parent not in overlapping_committees:
            overlapping_committees.append(parent)

    tags: list[str] = []
    if sector is not None and sector in covered_sectors:
        tags.append(sector)
    if industry is not None and industry in covered_industries:
        tags.append(industry)

    return CommitteeOverlap(
        stock_sector=sector,
        stock_industry=industry,
        overlapping_tags=tags,
        overlapping_committees=overlapping_committees,
    )


def score_committee_relevance(
    trade: Trade,
    trader: Trader,
    market_data: MarketData | None,
    sector_map: CommitteeSectorLookup | None,
) -> int:
    """Trading in a sector/industry your committees oversee scores higher."""
    overlap = _committee_overlap(trade, trader, market_data, sector_map)
    if overlap is None or not overlap.overlapping_tags:
        return 0
    if len(overlap.overlapping_tags) >= 2:
        return 100
    return 75


_ASSET_CLASS_SCORES: dict[AssetClass, int] = {
    AssetClass.OPTION: 100,
    AssetClass.WARRANT: 100,
    AssetClass.RIGHT: 100,
    AssetClass.FUTURE: 75,
    AssetClass.OTHER_DERIVATIVE: 75,
    AssetClass.EQUITY: 0,
    AssetClass.UNKNOWN: 0,
}

_OWNER_CLASS_SCORES: dict[OwnerClass, int] = {
    OwnerClass.CHILD: 100,
    OwnerClass.DEPENDENT: 100,
    OwnerClass.SPOUSE: 75,
    OwnerClass.JOINT: 25,
    OwnerClass.SELF: 0,
    OwnerClass.OTHER: 0,
    OwnerClass.UNKNOWN: 0,
}


def score_derivative(asset_class: AssetClass) -> int:
    return _ASSET_CLASS_SCORES[asset_class]


def score_ownership(owner_class: OwnerClass) -> int:
    return _OWNER_CLASS_SCORES[owner_class]


def calculate_overall_score(factors: FactorScores, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> int:
    """Weighted sum of the six factors, rounded half up and clamped to [0, 100]."""
    weights = config.weights
    weighted = (
        factors.market_cap * weights.market_cap
        + factors.conviction * weights.conviction
        + factors.rarity * weights.rarity
        + factors.committee_relevance * weights.committee_relevance
        + factors.derivative * weights.derivative
        + factors.ownership * weights.ownership
    )
    return _clamp(round_half_up(weighted))


# ---------- Explanation ----------

def build_explanation(
    trade: Trade,
    trader: Trader,
    trader_history: TraderHistory,
    market_data: MarketData | None,
    trading_pattern: CongressionalTradingPattern | None,
    sector_map: CommitteeSectorLookup | None,
    asset_class: AssetClass,
    owner_class: OwnerClass,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ScoreExplanation:
    explanation = ScoreExplanation()

    if _has_market_cap(market_data):
        explanation.market_cap = MarketCapExplanation(
            value=market_data.market_cap,
            category=_market_cap_category(market_data.market_cap, config),
        )

    multiplier = _conviction_multiplier(trade, trader_history)
    if multiplier is not None:
        explanation.conviction = ConvictionExplanation(
            trade_size=trade.amount.midpoint,
            average_size=trader_history.average_trade_size,
            multiplier=multiplier,
        )

    if trading_pattern is not None:
        explanation.rarity = RarityExplanation(
            total_congress_trades=trading_pattern.total_trades,
            unique_traders=trading_pattern.unique_traders,
            recent_trades=trading_pattern.recent_trades,
            category=_rarity_category(trading_pattern.total_trades, config),
        )

    overlap = _committee_overlap(trade, trader, market_data, sector_map)
    if overlap is not None:
        explanation.committee_relevance = CommitteeRelevanceExplanation(
            trader_committees=list(trader.committees),
            stock_sector=overlap.stock_sector,
            stock_industry=overlap.stock_industry,
            overlapping_tags=overlap.overlapping_tags,
            overlapping_committees=[
                OverlappingCommittee(
                    committee_id=committee_id,
                    source=sector_map.jurisdiction(committee_id).source.value,
                )
                for committee_id in overlap.overlapping_committees
            ],
        )

    if asset_class is not AssetClass.UNKNOWN:
        explanation.derivative = DerivativeExplanation(
            asset_type=trade.asset_type,
            asset_class=asset_class.value,
            is_derivative=asset_class.is_derivative,
        )

    if owner_class is not OwnerClass.UNKNOWN:
        explanation.ownership = OwnershipExplanation(
            owner=trade.owner,
            owner_class=owner_class.value,
            is_indirect=owner_class.is_indirect,
        )

    return explanation


# ---------- Entry points ----------

def score_trade(
    trade: Trade,
    trader: Trader,
    trader_history: TraderHistory,
    market_data: MarketData | None,
    trading_pattern: CongressionalTradingPattern | None,
    sector_map: CommitteeSectorLookup | None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> UniquenessResult:
    """Score a single trade for uniqueness.

    Args:
        trade: The disclosed transaction.
        trader: The member who filed it, with committee assignments.
        trader_history: The member's trades within the current batch.
        market_data: Snapshot for the symbol, or None if unavailable.
        trading_pattern: Congress-wide pattern for the symbol, or None.
        sector_map: Committee jurisdiction lookup, or None.
        config: Weights and thresholds.

    Returns:
        UniquenessResult with factor scores, explanation, and flags.
    """
    asset_class = classify_asset_type(trade.asset_type)
    owner_class = classify_owner(trade.owner)

    factors = FactorScores(
        market_cap=_clamp(score_market_cap(market_data, config)),
        conviction=_clamp(score_conviction(trade, trader_history, config)),
        rarity=_clamp(score_rarity(trading_pattern, config)),
        committee_relevance=_clamp(score_committee_relevance(trade, trader, market_data, sector_map)),
        derivative=_clamp(score_derivative(asset_class)),
        ownership=_clamp(score_ownership(owner_class)),
    )

    flags = ScoreFlags(
        is_small_cap=factors.market_cap >= FLAG_THRESHOLD,
        is_high_conviction=factors.conviction >= FLAG_THRESHOLD,
        is_rare_stock=factors.rarity >= FLAG_THRESHOLD,
        has_committee_relevance=factors.committee_relevance >= FLAG_THRESHOLD,
        is_derivative=factors.derivative >= FLAG_THRESHOLD,
        is_indirect_ownership=factors.ownership >= FLAG_THRESHOLD,
    )

    explanation = build_explanation(
        trade,
        trader,
        trader_history,
        market_data,
        trading_pattern,
        sector_map,
        asset_class,
        owner_class,
        config,
    )

    return UniquenessResult(
        overall_score=calculate_overall_score(factors, config),
        factors=factors,
        explanation=explanation,
        flags=flags,
    )


@dataclass(frozen=True)
class ScoringInput:
    trade: Trade
    trader: Trader
    trader_history: TraderHistory
    market_data: MarketData | None = None
    trading_pattern: CongressionalTradingPattern | None = None


@dataclass(frozen=True)
class ScoredTrade:
    trade: Trade
    trader: Trader
    result: UniquenessResult


def score_trades(
    inputs: Iterable[ScoringInput],
    sector_map: CommitteeSectorLookup | None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[ScoredTrade]:
    """Score a batch; order of the output matches the input."""
    return [
        ScoredTrade(
            trade=item.trade,
            trader=item.trader,
            result=score_trade(
                item.trade,
                item.trader,
                item.trader_history,
                item.market_data,
                item.trading_pattern,
                sector_map,
                config,
            ),
        )
        for item in inputs
    ]


def filter_top_scores(
    scored: Iterable[ScoredTrade], min_score: int = 50, limit: int = 50
) -> list[ScoredTrade]:
    """Trades at or above min_score, highest first."""
    kept = [s for s in scored if s.result.overall_score >= min_score]
    kept.sort(key=lambda s: s.result.overall_score, reverse=True)
    return kept[:limit]
