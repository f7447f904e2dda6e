"""Trader identity and per-trader history within a batch.

Disclosure feeds carry no stable member ID, so traders are identified by
chamber plus normalized first/last name. Name collisions and nickname
variants are an accepted limitation; the identity function is a seam that a
stable-ID source can replace without touching the scorer.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from typing import Protocol

from congress_uniqueness.processing.amounts import parse_amount_range
from congress_uniqueness.schemas.member import TraderHistory
from congress_uniqueness.schemas.trade import DisclosureRecord

logger = logging.getLogger(__name__)


class TraderIdentity(Protocol):
    def __call__(self, record: DisclosureRecord) -> str: ...


def name_based_trader_id(record: DisclosureRecord) -> str:
    first = record.first_name.lower().strip()
    last = record.last_name.lower().strip()
    return f"{record.chamber}-{first}-{last}"


def build_trader_histories(
    records: Iterable[DisclosureRecord],
    trader_id_fn: TraderIdentity = name_based_trader_id,
) -> dict[str, TraderHistory]:
    """Group a batch by trader and compute average trade size.

    The average covers only trades with a parseable amount; the count
    covers every trade.
    """
    grouped: dict[str, list[DisclosureRecord]] = defaultdict(list)
    for record in records:
        grouped[trader_id_fn(record)].append(record)

    histories: dict[str, TraderHistory] = {}
    for trader_id, trader_records in grouped.items():
        midpoints = []
        for record in trader_records:
            amount = parse_amount_range(record.amount)
            if amount is not None:
                midpoints.append(amount.midpoint)

        average = sum(midpoints) / len(midpoints) if midpoints else None
        histories[trader_id] = TraderHistory(
            visible_trades=[r.to_trade() for r in trader_records],
            average_trade_size=average,
            total_trade_count=len(trader_records),
        )

    logger.info("Built trade histories for %d traders", len(histories))
    return histories
