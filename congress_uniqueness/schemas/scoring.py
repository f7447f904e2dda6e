"""Configuration and result models for uniqueness scoring."""

from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, Field, model_validator

WEIGHT_TOLERANCE = 1e-6


class FactorWeights(BaseModel):
    """Weight of each factor in the overall score. Must sum to 1."""

    market_cap: float = 0.20
    conviction: float = 0.25
    rarity: float = 0.25
    committee_relevance: float = 0.15
    derivative: float = 0.10
    ownership: float = 0.05

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_sum(self) -> FactorWeights:
        values = self.model_dump().values()
        if any(v < 0 for v in values):
            raise ValueError("factor weights must be non-negative")
        total = math.fsum(values)
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise ValueError(f"factor weights must sum to 1.0, got {total:.6f}")
        return self


class MarketCapThresholds(BaseModel):
    """Market cap bucket boundaries in dollars."""

    micro: float = 300_000_000
    small: float = 2_000_000_000
    mid: float = 10_000_000_000

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_order(self) -> MarketCapThresholds:
        if not (0 < self.micro < self.small < self.mid):
            raise ValueError("market cap thresholds must satisfy 0 < micro < small < mid")
        return self


class ConvictionBands(BaseModel):
    """Multiples of a trader's average trade size."""

    very_high: float = 5.0
    high: float = 2.0
    moderate: float = 1.5
    baseline: float = 1.0

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_order(self) -> ConvictionBands:
        if not (0 < self.baseline <= self.moderate <= self.high <= self.very_high):
            raise ValueError("conviction bands must be ascending and positive")
        return self


class RarityBands(BaseModel):
    """Upper bounds on total congressional trades for each rarity tier."""

    unique: int = 1
    rare: int = 3
    uncommon: int = 10

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_order(self) -> RarityBands:
        if not (0 <= self.unique <= self.rare <= self.uncommon):
            raise ValueError("rarity bands must be ascending")
        return self


class ScoringConfig(BaseModel):
    weights: FactorWeights = Field(default_factory=FactorWeights)
    market_cap: MarketCapThresholds = Field(default_factory=MarketCapThresholds)
    conviction: ConvictionBands = Field(default_factory=ConvictionBands)
    rarity: RarityBands = Field(default_factory=RarityBands)

    model_config = {"frozen": True}


DEFAULT_SCORING_CONFIG = ScoringConfig()


# ---------- Results ----------

MarketCapCategory = Literal["micro", "small", "mid", "large"]
RarityCategory = Literal["unique", "rare", "uncommon", "common"]


class FactorScores(BaseModel):
    market_cap: int = 0
    conviction: int = 0
    rarity: int = 0
    committee_relevance: int = 0
    derivative: int = 0
    ownership: int = 0


class MarketCapExplanation(BaseModel):
    value: float
    category: MarketCapCategory


class ConvictionExplanation(BaseModel):
    trade_size: float
    average_size: float
    multiplier: float


class RarityExplanation(BaseModel):
    total_congress_trades: int
    unique_traders: int
    recent_trades: int
    category: RarityCategory


class OverlappingCommittee(BaseModel):
    committee_id: str
    source: str


class CommitteeRelevanceExplanation(BaseModel):
    trader_committees: list[str]
    stock_sector: str | None = None
    stock_industry: str | None = None
    overlapping_tags: list[str] = Field(default_factory=list)
    overlapping_committees: list[OverlappingCommittee] = Field(default_factory=list)


class DerivativeExplanation(BaseModel):
    asset_type: str
    asset_class: str
    is_derivative: bool


class OwnershipExplanation(BaseModel):
    owner: str
    owner_class: str
    is_indirect: bool


class ScoreExplanation(BaseModel):
    """Per-factor detail, present only when the factor had data."""

    market_cap: MarketCapExplanation | None = None
    conviction: ConvictionExplanation | None = None
    rarity: RarityExplanation | None = None
    committee_relevance: CommitteeRelevanceExplanation | None = None
    derivative: DerivativeExplanation | None = None
    ownership: OwnershipExplanation | None = None


class ScoreFlags(BaseModel):
    is_small_cap: bool = False
    is_high_conviction: bool = False
    is_rare_stock: bool = False
    has_committee_relevance: bool = False
    is_derivative: bool = False
    is_indirect_ownership: bool = False


class UniquenessResult(BaseModel):
    overall_score: int
    factors: FactorScores
    explanation: ScoreExplanation
    flags: ScoreFlags
