"""Browsing views over cached data: recent trades, sales, committees.

These views do not score anything. They join disclosure records with the
committee directory and whatever market data is already cached on disk.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date

from pydantic import BaseModel, Field

from congress_uniqueness.ingestion.legislators.committees import CommitteeDirectory, committee_code
from congress_uniqueness.processing.trade_stats import is_sale, matches_trader_name
from congress_uniqueness.schemas.market import MarketData
from congress_uniqueness.schemas.trade import DisclosureRecord
from congress_uniqueness.taxonomy.committee_sectors import DEFAULT_TAXONOMY, CommitteeSectorMap

DEFAULT_LIST_LIMIT = 50


class TradeSummary(BaseModel):
    trader: str
    chamber: str
    symbol: str
    description: str
    type: str
    amount: str
    date: str
    sector: str | None = None
    industry: str | None = None
    trader_committees: list[str] = Field(default_factory=list)
    relevant_committees: list[str] = Field(default_factory=list)
    has_committee_overlap: bool = False


class SaleEntry(BaseModel):
    record: DisclosureRecord
    party: str = ""


class CommitteeMember(BaseModel):
    name: str
    party: str | None = None
    title: str | None = None


class CommitteeListing(BaseModel):
    code: str
    name: str
    type: str
    sectors: list[str] = Field(default_factory=list)
    members: list[CommitteeMember] = Field(default_factory=list)


def party_abbreviation(party: str | None) -> str:
    if not party:
        return ""
    if party == "Republican":
        return "R"
    if party == "Democrat":
        return "D"
    return party[0]


def sort_by_date_desc(records: Iterable[DisclosureRecord]) -> list[DisclosureRecord]:
    """Newest first; undated trades go last."""
    return sorted(
        records,
        key=lambda r: (r.transaction_date is not None, r.transaction_date or date.min),
        reverse=True,
    )


def _member_party(record: DisclosureRecord, directory: CommitteeDirectory | None) -> str | None:
    if directory is None:
        return None
    bioguide = directory.find_member(record.first_name, record.last_name)
    return directory.party(bioguide) if bioguide else None


def list_trades(
    records: Iterable[DisclosureRecord],
    directory: CommitteeDirectory | None,
    sector_map: CommitteeSectorMap,
    market_data: Mapping[str, MarketData] | None = None,
    chamber: str | None = None,
    trader: str | None = None,
    symbol: str | None = None,
    relevant_only: bool = False,
    limit: int = DEFAULT_LIST_LIMIT,
) -> list[TradeSummary]:
    """Recent trades, newest first, with the trader's committee overlap.

    Sector and industry come from cached market data only, so a symbol that
    was never looked up has no committee overlap.
    """
    market_data = market_data or {}
    summaries: list[TradeSummary] = []

    for record in sort_by_date_desc(records):
        if len(summaries) >= limit:
            break
        if chamber and record.chamber != chamber.lower():
            continue
        if trader and not matches_trader_name(record, trader):
            continue
        if symbol and record.symbol != symbol.upper():
            continue

        data = market_data.get(record.symbol) if record.symbol else None
        sector = data.sector if data else None
        industry = data.industry if data else None

        committees: list[str] = []
        if directory is not None and record.last_name:
            bioguide = directory.find_member(record.first_name, record.last_name)
            if bioguide:
                committees = directory.member_committees(bioguide)

        relevant = [j.committee_id for j in sector_map.check_committee_relevance(committees, sector, industry)]
        if relevant_only and not relevant:
            continue

        summaries.append(
            TradeSummary(
                trader=record.member_name,
                chamber=record.chamber,
                symbol=record.symbol or "N/A",
                description=record.asset_description or "Unknown",
                type=record.type or "Unknown",
                amount=record.amount or "N/A",
                date=record.transaction_date.isoformat() if record.transaction_date else "N/A",
                sector=sector,
                industry=industry,
                trader_committees=committees,
                relevant_committees=relevant,
                has_committee_overlap=bool(relevant),
            )
        )
    return summaries


def list_sales(
    records: Iterable[DisclosureRecord], directory: CommitteeDirectory | None
) -> list[SaleEntry]:
    """Sales only, newest first, each with the member's party abbreviation."""
    return [
        SaleEntry(record=record, party=party_abbreviation(_member_party(record, directory)))
        for record in sort_by_date_desc(r for r in records if is_sale(r))
    ]


def _committee_type(committee: dict, code: str) -> str:
    declared = (committee.get("type") or "").lower()
    if declared:
        return declared
    return {"S": "senate", "H": "house", "J": "joint"}.get(code[:1].upper(), "unknown")


def list_committees(
    directory: CommitteeDirectory | None,
    sector_map: CommitteeSectorMap,
    chamber: str | None = None,
    sector: str | None = None,
) -> list[CommitteeListing]:
    """Committees with mapped sectors and members, sorted by chamber then name.

    Without fetched committee data the curated table is listed, without
    members.
    """
    listings: list[CommitteeListing] = []
    if directory is not None and directory.committees:
        for committee in directory.committees:
            code = committee_code(committee)
            if not code:
                continue
            listings.append(
                CommitteeListing(
                    code=code,
                    name=committee.get("name") or code,
                    type=_committee_type(committee, code),
                    sectors=sorted(sector_map.get_committee_sectors(code)),
                    members=[
                        CommitteeMember(name=m.get("name", ""), party=m.get("party"), title=m.get("title"))
                        for m in directory.committee_members(code)
                    ],
                )
            )
    else:
        for entry in DEFAULT_TAXONOMY:
            listings.append(
                CommitteeListing(
                    code=entry.committee_id,
                    name=entry.committee_name,
                    type=_committee_type({}, entry.committee_id),
                    sectors=sorted(entry.sectors),
                )
            )

    if chamber:
        listings = [c for c in listings if c.type == chamber.lower()]
    if sector:
        needle = sector.lower()
        listings = [c for c in listings if any(needle in s.lower() for s in c.sectors)]
    return sorted(listings, key=lambda c: (c.type, c.name))
