"""Congressional trading-pattern analysis.

Aggregates how often congress as a whole trades each symbol within a batch
of disclosures. Works entirely from in-memory trade data.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from congress_uniqueness.schemas.market import CongressionalTradingPattern
from congress_uniqueness.schemas.trade import DisclosureRecord

logger = logging.getLogger(__name__)

RECENT_WINDOW_DAYS = 90


@dataclass(frozen=True)
class PatternStats:
    total_symbols: int
    unique_symbols: int
    rare_symbols: int
    common_symbols: int


class PatternIndex:
    """Per-symbol trade counts, distinct traders, and recent activity."""

    def __init__(self, patterns: dict[str, CongressionalTradingPattern]) -> None:
        self._patterns = patterns

    @classmethod
    def build(
        cls, records: Iterable[DisclosureRecord], as_of: date | None = None
    ) -> PatternIndex:
        """Aggregate a full batch. The recent window is anchored to ``as_of``
        (today by default), not to the latest trade in the batch."""
        as_of = as_of or date.today()
        cutoff = as_of - timedelta(days=RECENT_WINDOW_DAYS)

        by_symbol: dict[str, list[DisclosureRecord]] = defaultdict(list)
        for record in records:
            if not record.symbol:
                continue
            by_symbol[record.symbol.upper()].append(record)

        patterns: dict[str, CongressionalTradingPattern] = {}
        for symbol, symbol_records in by_symbol.items():
            traders = {
                (r.first_name.strip().lower(), r.last_name.strip().lower())
                for r in symbol_records
            }
            recent = sum(
                1
                for r in symbol_records
                if r.transaction_date is not None and r.transaction_date >= cutoff
            )
            patterns[symbol] = CongressionalTradingPattern(
                symbol=symbol,
                total_trades=len(symbol_records),
                unique_traders=len(traders),
                recent_trades=recent,
            )

        logger.info("Built trading patterns for %d symbols", len(patterns))
        return cls(patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and symbol.upper() in self._patterns

    def get(self, symbol: str) -> CongressionalTradingPattern:
        """Pattern for a symbol; zero-valued (never None) when unseen."""
        upper = symbol.upper()
        return self._patterns.get(upper) or CongressionalTradingPattern(symbol=upper)

    def get_batch(self, symbols: Iterable[str]) -> dict[str, CongressionalTradingPattern]:
        return {symbol: self.get(symbol) for symbol in symbols}

    def stats(self) -> PatternStats:
        unique = rare = common = 0
        for pattern in self._patterns.values():
            if pattern.total_trades == 1:
                unique += 1
            elif pattern.total_trades <= 3:
                rare += 1
            else:
                common += 1
        return PatternStats(
            total_symbols=len(self._patterns),
            unique_symbols=unique,
            rare_symbols=rare,
            common_symbols=common,
        )

    def rarest(self, limit: int = 20) -> list[CongressionalTradingPattern]:
        """Least-traded symbols first; ties broken alphabetically."""
        ordered = sorted(self._patterns.values(), key=lambda p: (p.total_trades, p.symbol))
        return ordered[:limit]
