"""Batch statistics and filters over disclosure records."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from congress_uniqueness.schemas.trade import DisclosureRecord


@dataclass(frozen=True)
class TradeStats:
    total: int
    purchases: int
    sales: int
    unique_symbols: int
    unique_traders: int
    by_type: dict[str, int] = field(default_factory=dict)


def is_sale(record: DisclosureRecord) -> bool:
    return "sale" in (record.type or "").lower()


def is_purchase(record: DisclosureRecord) -> bool:
    return "purchase" in (record.type or "").lower()


def get_trade_stats(records: Iterable[DisclosureRecord]) -> TradeStats:
    by_type: Counter[str] = Counter()
    symbols: set[str] = set()
    traders: set[str] = set()
    total = purchases = sales = 0

    for record in records:
        total += 1
        by_type[(record.type or "unknown").lower()] += 1
        if is_purchase(record):
            purchases += 1
        if is_sale(record):
            sales += 1
        if record.symbol:
            symbols.add(record.symbol)
        if record.member_name:
            traders.add(record.member_name)

    return TradeStats(
        total=total,
        purchases=purchases,
        sales=sales,
        unique_symbols=len(symbols),
        unique_traders=len(traders),
        by_type=dict(by_type),
    )


def get_unique_traders(records: Iterable[DisclosureRecord]) -> list[tuple[str, int]]:
    """(name, trade count) pairs, most active first."""
    counts = Counter(r.member_name for r in records if r.member_name)
    return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))


def filter_by_date(
    records: Iterable[DisclosureRecord], start: date | None = None, end: date | None = None
) -> list[DisclosureRecord]:
    """Trades within [start, end]; undated trades are dropped."""
    return [
        r
        for r in records
        if r.transaction_date is not None
        and (start is None or r.transaction_date >= start)
        and (end is None or r.transaction_date <= end)
    ]


def filter_by_symbol(records: Iterable[DisclosureRecord], symbols: Iterable[str]) -> list[DisclosureRecord]:
    wanted = {s.upper() for s in symbols}
    return [r for r in records if r.symbol and r.symbol.upper() in wanted]


def filter_by_trader(
    records: Iterable[DisclosureRecord], first_name: str | None = None, last_name: str | None = None
) -> list[DisclosureRecord]:
    """Exact, case-insensitive match on whichever name parts are given."""
    return [
        r
        for r in records
        if (not first_name or r.first_name.lower() == first_name.lower())
        and (not last_name or r.last_name.lower() == last_name.lower())
    ]


def matches_trader_name(record: DisclosureRecord, query: str) -> bool:
    """Case-insensitive substring match on the full name."""
    return query.lower() in record.member_name.lower()
