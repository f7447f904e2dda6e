"""Committee-to-sector jurisdiction map.

Maps congressional committees to the FMP sectors and industries they
legislate or oversee, so a trade in a company under a member's committee
jurisdiction can be detected.

FMP sectors: Basic Materials, Communication Services, Consumer Cyclical,
Consumer Defensive, Energy, Financial Services, Healthcare, Industrials,
Real Estate, Technology, Utilities.

Procedural or very broad committees (Appropriations, Budget, Rules, ...)
deliberately map to empty sets.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol


class JurisdictionSource(str, Enum):
    CURATED = "curated"
    KEYWORD_INFERRED = "keyword_inferred"
    NONE = "none"


@dataclass(frozen=True)
class CommitteeTaxonomyEntry:
    committee_id: str
    committee_name: str
    sectors: frozenset[str] = frozenset()
    industries: frozenset[str] = frozenset()


@dataclass(frozen=True)
class Jurisdiction:
    """Sectors and industries resolved for one committee, with provenance."""

    committee_id: str
    sectors: frozenset[str] = frozenset()
    industries: frozenset[str] = frozenset()
    source: JurisdictionSource = JurisdictionSource.NONE

    def overlaps(self, sector: str | None, industry: str | None) -> bool:
        return bool(
            (sector and sector in self.sectors)
            or (industry and industry in self.industries)
        )


def _entry(committee_id: str, name: str, sectors: Iterable[str] = (), industries: Iterable[str] = ()) -> CommitteeTaxonomyEntry:
    return CommitteeTaxonomyEntry(committee_id, name, frozenset(sectors), frozenset(industries))


_FINANCE_INDUSTRIES = (
    "Banks - Regional",
    "Banks - Diversified",
    "Banks",
    "Financial - Credit Services",
    "Asset Management",
    "Financial - Capital Markets",
    "Insurance - Diversified",
    "Insurance - Property & Casualty",
    "Insurance - Life",
    "Financial - Data & Stock Exchanges",
    "Financial - Mortgages",
)

SENATE_COMMITTEES: tuple[CommitteeTaxonomyEntry, ...] = (
    _entry(
        "SSAF", "Agriculture, Nutrition, and Forestry",
        ["Consumer Defensive", "Basic Materials"],
        [
            "Agricultural Farm Products",
            "Agricultural Inputs",
            "Packaged Foods",
            "Food Distribution",
            "Beverages - Non-Alcoholic",
            "Food Confectioners",
        ],
    ),
    _entry("SSAP", "Appropriations"),
    _entry(
        "SSAS", "Armed Services",
        ["Industrials"],
        ["Aerospace & Defense", "Security & Protection Services"],
    ),
    _entry(
        "SSBK", "Banking, Housing, and Urban Affairs",
        ["Financial Services", "Real Estate"],
        [
            *_FINANCE_INDUSTRIES,
            "Real Estate - Development",
            "Real Estate - Services",
            "REIT - Diversified",
            "REIT - Residential",
        ],
    ),
    _entry("SSBU", "Budget"),
    _entry(
        "SSCM", "Commerce, Science, and Transportation",
        ["Technology", "Communication Services", "Industrials"],
        [
            "Internet Content & Information",
            "Software - Infrastructure",
            "Software - Application",
            "Semiconductors",
            "Consumer Electronics",
            "Communication Equipment",
            "Telecommunications Services",
            "Broadcasting",
            "Entertainment",
            "Airlines, Airports & Air Services",
            "Railroads",
            "Trucking",
            "Marine Shipping",
        ],
    ),
    _entry(
        "SSEG", "Energy and Natural Resources",
        ["Energy", "Utilities", "Basic Materials"],
        [
            "Oil & Gas Exploration & Production",
            "Oil & Gas Integrated",
            "Oil & Gas Midstream",
            "Oil & Gas Refining & Marketing",
            "Oil & Gas Equipment & Services",
            "Uranium",
            "Regulated Electric",
            "Renewable Utilities",
            "Independent Power Producers",
            "Solar",
            "Coal",
        ],
    ),
    _entry(
        "SSEV", "Environment and Public Works",
        ["Utilities", "Industrials", "Basic Materials"],
        [
            "Waste Management",
            "Engineering & Construction",
            "Construction Materials",
            "Chemicals - Specialty",
            "Environmental Services",
        ],
    ),
    _entry(
        "SSFI", "Finance",
        ["Healthcare", "Financial Services"],
        [
            "Medical - Healthcare Plans",
            "Medical - Pharmaceuticals",
            "Medical - Care Facilities",
            "Insurance - Diversified",
        ],
    ),
    _entry("SSFR", "Foreign Relations", [], ["Aerospace & Defense"]),
    _entry(
        "SSHR", "Health, Education, Labor, and Pensions",
        ["Healthcare"],
        [
            "Drug Manufacturers - General",
            "Drug Manufacturers - Specialty & Generic",
            "Biotechnology",
            "Medical - Devices",
            "Medical - Instruments & Supplies",
            "Medical - Diagnostics & Research",
            "Medical - Healthcare Plans",
            "Medical - Care Facilities",
            "Education & Training Services",
        ],
    ),
    _entry(
        "SSGA", "Homeland Security and Governmental Affairs",
        ["Technology", "Industrials"],
        [
            "Information Technology Services",
            "Software - Infrastructure",
            "Security & Protection Services",
            "Aerospace & Defense",
        ],
    ),
    _entry(
        "SLIN", "Select Committee on Intelligence",
        [],
        ["Aerospace & Defense", "Information Technology Services", "Software - Infrastructure"],
    ),
    _entry(
        "SSJU", "Judiciary",
        ["Technology", "Communication Services"],
        ["Internet Content & Information", "Software - Application"],
    ),
    _entry("SSRA", "Rules and Administration"),
    _entry("SSSB", "Small Business and Entrepreneurship"),
    _entry(
        "SSVA", "Veterans' Affairs",
        ["Healthcare"],
        [
            "Medical - Healthcare Plans",
            "Medical - Care Facilities",
            "Drug Manufacturers - Specialty & Generic",
        ],
    ),
)

HOUSE_COMMITTEES: tuple[CommitteeTaxonomyEntry, ...] = (
    _entry(
        "HSAG", "Agriculture",
        ["Consumer Defensive", "Basic Materials"],
        [
            "Agricultural Farm Products",
            "Agricultural Inputs",
            "Packaged Foods",
            "Food Distribution",
        ],
    ),
    _entry("HSAP", "Appropriations"),
    _entry(
        "HSAS", "Armed Services",
        ["Industrials"],
        ["Aerospace & Defense", "Security & Protection Services"],
    ),
    _entry(
        "HSBA", "Financial Services",
        ["Financial Services", "Real Estate"],
        [*_FINANCE_INDUSTRIES, "REIT - Diversified"],
    ),
    _entry("HSBU", "Budget"),
    _entry(
        "HSED", "Education and the Workforce",
        ["Healthcare"],
        [
            "Education & Training Services",
            "Staffing & Employment Services",
            "Medical - Healthcare Plans",
        ],
    ),
    _entry(
        "HSIF", "Energy and Commerce",
        ["Energy", "Healthcare", "Technology", "Communication Services"],
        [
            "Oil & Gas Exploration & Production",
            "Oil & Gas Integrated",
            "Regulated Electric",
            "Drug Manufacturers - General",
            "Biotechnology",
            "Medical - Devices",
            "Telecommunications Services",
            "Internet Content & Information",
            "Broadcasting",
        ],
    ),
    _entry("HSFA", "Foreign Affairs", [], ["Aerospace & Defense"]),
    _entry("HSHA", "House Administration"),
    _entry(
        "HSHM", "Homeland Security",
        ["Technology", "Industrials"],
        [
            "Information Technology Services",
            "Security & Protection Services",
            "Aerospace & Defense",
        ],
    ),
    _entry(
        "HSII", "Natural Resources",
        ["Energy", "Basic Materials"],
        [
            "Oil & Gas Exploration & Production",
            "Other Precious Metals",
            "Gold",
            "Silver",
            "Copper",
            "Coal",
        ],
    ),
    _entry(
        "HLIG", "Permanent Select Committee on Intelligence",
        [],
        ["Aerospace & Defense", "Information Technology Services", "Software - Infrastructure"],
    ),
    _entry(
        "HSJU", "Judiciary",
        ["Technology", "Communication Services"],
        ["Internet Content & Information", "Software - Application"],
    ),
    _entry("HSGO", "Oversight and Accountability"),
    _entry(
        "HSPW", "Transportation and Infrastructure",
        ["Industrials"],
        [
            "Airlines, Airports & Air Services",
            "Railroads",
            "Trucking",
            "Marine Shipping",
            "Engineering & Construction",
            "Construction Materials",
        ],
    ),
    _entry("HSRU", "Rules"),
    _entry("HSSM", "Small Business"),
    _entry(
        "HSSY", "Science, Space, and Technology",
        ["Technology", "Industrials"],
        ["Aerospace & Defense", "Semiconductors", "Software - Infrastructure"],
    ),
    _entry(
        "HSVR", "Veterans' Affairs",
        ["Healthcare"],
        ["Medical - Healthcare Plans", "Medical - Care Facilities"],
    ),
    _entry(
        "HSWM", "Ways and Means",
        ["Healthcare", "Financial Services"],
        ["Medical - Healthcare Plans", "Insurance - Diversified"],
    ),
)

DEFAULT_TAXONOMY: tuple[CommitteeTaxonomyEntry, ...] = SENATE_COMMITTEES + HOUSE_COMMITTEES


def normalize_committee_id(committee_id: str) -> str:
    """Reduce committee and subcommittee codes to the four-letter parent code.

    ``hsba00`` and ``HSBA04`` both resolve to ``HSBA``.
    """
    return (committee_id or "").strip().upper()[:4]


class FallbackResolver(Protocol):
    """Infers a jurisdiction for committees missing from the curated table."""

    def resolve(self, committee_id: str) -> Jurisdiction | None: ...


@dataclass(frozen=True)
class CommitteeSectorMap:
    """Immutable committee → sector/industry lookup passed into the scorer.

    Curated entries always win. When a fallback resolver is supplied it is
    consulted only for committee IDs absent from the curated table, and the
    returned jurisdiction keeps its KEYWORD_INFERRED provenance.
    """

    entries: dict[str, CommitteeTaxonomyEntry] = field(default_factory=dict)
    fallback: FallbackResolver | None = None

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[CommitteeTaxonomyEntry] = DEFAULT_TAXONOMY,
        fallback: FallbackResolver | None = None,
    ) -> CommitteeSectorMap:
        table: dict[str, CommitteeTaxonomyEntry] = {}
        for entry in entries:
            table[normalize_committee_id(entry.committee_id)] = entry
        return cls(entries=table, fallback=fallback)

    def jurisdiction(self, committee_id: str) -> Jurisdiction:
        key = normalize_committee_id(committee_id)
        entry = self.entries.get(key)
        if entry is not None:
            return Jurisdiction(
                committee_id=key,
                sectors=entry.sectors,
                industries=entry.industries,
                source=JurisdictionSource.CURATED,
            )
        if self.fallback is not None:
            inferred = self.fallback.resolve(committee_id)
            if inferred is not None:
                return inferred
        return Jurisdiction(committee_id=key)

    def get_committee_sectors(self, committee_id: str) -> frozenset[str]:
        return self.jurisdiction(committee_id).sectors

    def get_committee_industries(self, committee_id: str) -> frozenset[str]:
        return self.jurisdiction(committee_id).industries

    def has_overlap(self, committee_id: str, sector: str | None, industry: str | None) -> bool:
        """True if the committee covers the sector OR the industry."""
        return self.jurisdiction(committee_id).overlaps(sector, industry)

    def committee_name(self, committee_id: str) -> str | None:
        entry = self.entries.get(normalize_committee_id(committee_id))
        return entry.committee_name if entry else None

    def committees_with_jurisdiction(
        self, sector: str | None, industry: str | None
    ) -> list[CommitteeTaxonomyEntry]:
        """All curated committees covering a sector or industry."""
        return [
            entry
            for entry in self.entries.values()
            if (sector and sector in entry.sectors) or (industry and industry in entry.industries)
        ]

    def check_committee_relevance(
        self, committee_ids: Iterable[str], sector: str | None, industry: str | None
    ) -> list[Jurisdiction]:
        """Jurisdictions of the given committees that individually overlap."""
        overlapping: list[Jurisdiction] = []
        seen: set[str] = set()
        for committee_id in committee_ids:
            jurisdiction = self.jurisdiction(committee_id)
            if jurisdiction.committee_id in seen:
                continue
            seen.add(jurisdiction.committee_id)
            if jurisdiction.overlaps(sector, industry):
                overlapping.append(jurisdiction)
        return overlapping
