"""Keyword-based jurisdiction inference for committees without a curated entry.

Committee names and jurisdiction text from the congress-legislators dataset
are matched against sector keywords. The result is much less reliable than
the curated table, so every jurisdiction produced here is tagged
KEYWORD_INFERRED and is only used when the curated table has no entry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from congress_uniqueness.taxonomy.committee_sectors import (
    Jurisdiction,
    JurisdictionSource,
    normalize_committee_id,
)

logger = logging.getLogger(__name__)

# FMP sector -> keywords that suggest jurisdiction over it
SECTOR_KEYWORDS: dict[str, list[str]] = {
    "Technology": ["technology", "science", "cyber", "digital", "internet", "computer", "innovation"],
    "Healthcare": ["health", "medical", "medicare", "medicaid", "hospital", "drug", "pharmaceutical"],
    "Financial Services": ["banking", "finance", "financial", "insurance", "securities", "monetary"],
    "Energy": ["energy", "oil", "gas", "nuclear", "petroleum"],
    "Utilities": ["utilities", "electric", "power", "water", "public works"],
    "Industrials": ["armed", "military", "defense", "infrastructure", "transportation", "aviation", "railroad", "maritime"],
    "Consumer Cyclical": ["consumer", "retail", "commerce"],
    "Consumer Defensive": ["agriculture", "food", "nutrition", "farm"],
    "Basic Materials": ["mining", "materials", "natural resources", "forestry"],
    "Real Estate": ["housing", "real estate", "urban", "property"],
    "Communication Services": ["telecommunications", "communications", "broadcast", "spectrum", "media"],
}


def infer_sectors(text: str) -> frozenset[str]:
    """Sectors whose keywords occur in the given committee text."""
    lowered = text.lower()
    return frozenset(
        sector
        for sector, keywords in SECTOR_KEYWORDS.items()
        if any(keyword in lowered for keyword in keywords)
    )


@dataclass(frozen=True)
class CommitteeDescription:
    committee_id: str
    name: str
    jurisdiction: str = ""


class KeywordSectorResolver:
    """Fallback resolver built from committee names and jurisdiction text."""

    def __init__(self, committees: Iterable[CommitteeDescription]) -> None:
        self._inferred: dict[str, Jurisdiction] = {}
        for committee in committees:
            key = normalize_committee_id(committee.committee_id)
            if not key or key in self._inferred:
                continue
            sectors = infer_sectors(f"{committee.name} {committee.jurisdiction}")
            self._inferred[key] = Jurisdiction(
                committee_id=key,
                sectors=sectors,
                source=JurisdictionSource.KEYWORD_INFERRED,
            )
        logger.debug("Inferred jurisdictions for %d committees", len(self._inferred))

    @classmethod
    def from_legislators_committees(cls, committees: Iterable[Mapping]) -> KeywordSectorResolver:
        """Build from raw ``committees-current.json`` entries."""
        descriptions = []
        for raw in committees:
            committee_id = (
                raw.get("thomas_id")
                or raw.get("house_committee_id")
                or raw.get("senate_committee_id")
            )
            if not committee_id:
                continue
            descriptions.append(
                CommitteeDescription(
                    committee_id=committee_id,
                    name=raw.get("name", ""),
                    jurisdiction=raw.get("jurisdiction") or "",
                )
            )
        return cls(descriptions)

    def resolve(self, committee_id: str) -> Jurisdiction | None:
        return self._inferred.get(normalize_committee_id(committee_id))
