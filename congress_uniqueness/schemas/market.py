from __future__ import annotations

from pydantic import BaseModel


class MarketData(BaseModel):
    """Per-symbol market snapshot; every field may be missing."""

    market_cap: float | None = None
    sector: str | None = None
    industry: str | None = None
    average_volume: float | None = None


class CongressionalTradingPattern(BaseModel):
    """How often congress as a whole has traded a symbol in the batch."""

    symbol: str
    total_trades: int = 0
    unique_traders: int = 0
    recent_trades: int = 0

    model_config = {"frozen": True}
