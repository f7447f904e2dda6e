from __future__ import annotations

from pydantic import BaseModel, Field

from congress_uniqueness.schemas.trade import Chamber, Trade


class Trader(BaseModel):
    """A congress member as identified within one analysis batch."""

    id: str
    first_name: str
    last_name: str
    chamber: Chamber
    committees: list[str] = Field(default_factory=list)
    party: str | None = None
    bioguide_id: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class TraderHistory(BaseModel):
    """A trader's trades visible in the current batch."""

    visible_trades: list[Trade] = Field(default_factory=list)
    average_trade_size: float | None = None
    total_trade_count: int = 0
