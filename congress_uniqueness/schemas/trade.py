from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from congress_uniqueness.processing.amounts import parse_amount_range
from congress_uniqueness.schemas.amount import AmountRange

Chamber = Literal["senate", "house"]


def parse_disclosure_date(value: Any) -> date | None:
    """Parse the date formats seen in disclosure feeds; None if unparseable."""
    if value is None or isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    for fmt in ("%Y-%m-%d", "%m/%d/%Y", "%m-%d-%Y"):
        try:
            return datetime.strptime(text[:10], fmt).date()
        except ValueError:
            continue
    return None


class Trade(BaseModel):
    """A single disclosed transaction as the scorer sees it."""

    symbol: str | None = None
    asset_description: str | None = None
    asset_type: str | None = None
    type: str | None = None
    amount: AmountRange | None = None
    transaction_date: date | None = None
    owner: str | None = None

    model_config = {"frozen": True}


class DisclosureRecord(BaseModel):
    """Raw congressional disclosure row from the FMP senate/house feeds."""

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    office: str | None = None
    chamber: Chamber = "house"
    symbol: str | None = None
    asset_description: str | None = Field(default=None, alias="assetDescription")
    asset_type: str | None = Field(default=None, alias="assetType")
    type: str | None = None
    amount: str | None = None
    transaction_date: date | None = Field(default=None, alias="transactionDate")
    disclosure_date: date | None = Field(default=None, alias="disclosureDate")
    owner: str | None = None
    comment: str | None = None
    link: str | None = None

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _blank_name(cls, value: Any) -> str:
        return (value or "").strip()

    @field_validator("symbol", mode="before")
    @classmethod
    def _clean_symbol(cls, value: Any) -> str | None:
        symbol = (value or "").strip().upper()
        if not symbol or symbol in ("--", "N/A"):
            return None
        return symbol

    @field_validator("transaction_date", "disclosure_date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> date | None:
        return parse_disclosure_date(value)

    @property
    def member_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_trade(self) -> Trade:
        return Trade(
            symbol=self.symbol,
            asset_description=self.asset_description,
            asset_type=self.asset_type,
            type=self.type,
            amount=parse_amount_range(self.amount),
            transaction_date=self.transaction_date,
            owner=self.owner,
        )
