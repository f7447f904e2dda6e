"""Committee membership from the public congress-legislators dataset.

Files (JSON mirrors of the YAML sources):
  - committees-current.json            committee names and jurisdiction text
  - committee-membership-current.json  committee thomas_id -> member list
  - legislators-current.json           names, bioguide IDs, party by term

Disclosure feeds identify members by name only, so members are matched to
bioguide IDs by name: exact match on first/last (or nickname) first, then a
fuzzy match on the full name.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections import defaultdict
from typing import Any

import httpx
from thefuzz import fuzz

from congress_uniqueness.config import settings
from congress_uniqueness.errors import ProviderError
from congress_uniqueness.ingestion.base import BaseCollector, describe_http_error
from congress_uniqueness.storage import JsonStore

logger = logging.getLogger(__name__)

COMMITTEES_FILE = "committees-current.json"
MEMBERSHIP_FILE = "committee-membership-current.json"
LEGISLATORS_FILE = "legislators-current.json"
COMMITTEE_DATA_FILE = "committee-data.json"

FUZZY_MIN_SCORE = 90

_HONORIFICS = re.compile(r"\b(hon|mr|mrs|ms|dr|jr|sr|ii|iii|iv)\b\.?", re.IGNORECASE)


def normalize_person_name(name: str) -> str:
    normalized = _HONORIFICS.sub(" ", (name or "").lower())
    normalized = re.sub(r"[^\w\s]", " ", normalized)
    return re.sub(r"\s+", " ", normalized).strip()


class LegislatorsCollector(BaseCollector):
    source_name = "congress_legislators"

    async def collect(self) -> dict[str, Any]:
        base = settings.legislators_base_url
        try:
            committees, membership, legislators = await asyncio.gather(
                self.fetch_json(f"{base}/{COMMITTEES_FILE}"),
                self.fetch_json(f"{base}/{MEMBERSHIP_FILE}"),
                self.fetch_json(f"{base}/{LEGISLATORS_FILE}"),
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"congress-legislators download failed: {describe_http_error(e)}") from e
        data = {
            "committees": committees if isinstance(committees, list) else [],
            "membership": membership if isinstance(membership, dict) else {},
            "legislators": legislators if isinstance(legislators, list) else [],
        }
        assignments = sum(len(members) for members in data["membership"].values())
        logger.info(
            "[%s] %d committees, %d assignments, %d legislators",
            self.source_name, len(data["committees"]), assignments, len(data["legislators"]),
        )
        return data

    async def run(self, store: JsonStore | None = None) -> dict[str, Any]:
        data = await self.collect()
        (store or JsonStore()).save(COMMITTEE_DATA_FILE, data)
        return data


class CommitteeDirectory:
    """Lookup of member committees and party, keyed by bioguide ID."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.committees: list[dict[str, Any]] = data.get("committees") or []
        self._member_committees: dict[str, list[str]] = defaultdict(list)
        self._names: dict[str, str] = {}  # normalized full name -> bioguide
        self._by_first_last: dict[tuple[str, str], str] = {}
        self._party: dict[str, str] = {}
        self._membership: dict[str, list[dict[str, Any]]] = {}

        for committee_id, members in (data.get("membership") or {}).items():
            self._membership.setdefault(committee_id.upper(), members)
            for member in members:
                bioguide = member.get("bioguide")
                if not bioguide:
                    continue
                if committee_id.upper() not in self._member_committees[bioguide]:
                    self._member_committees[bioguide].append(committee_id.upper())
                if member.get("name"):
                    self._names.setdefault(normalize_person_name(member["name"]), bioguide)

        for legislator in data.get("legislators") or []:
            bioguide = (legislator.get("id") or {}).get("bioguide")
            if not bioguide:
                continue
            name = legislator.get("name") or {}
            last = normalize_person_name(name.get("last", ""))
            for first in (name.get("first"), name.get("nickname")):
                if first and last:
                    self._by_first_last.setdefault((normalize_person_name(first), last), bioguide)
            if name.get("official_full"):
                self._names.setdefault(normalize_person_name(name["official_full"]), bioguide)
            terms = legislator.get("terms") or []
            if terms and terms[-1].get("party"):
                self._party[bioguide] = terms[-1]["party"]

    def find_member(self, first_name: str, last_name: str) -> str | None:
        """Resolve a disclosure name to a bioguide ID, or None."""
        first = normalize_person_name(first_name)
        last = normalize_person_name(last_name)
        if not last:
            return None

        exact = self._by_first_last.get((first, last))
        if exact:
            return exact

        full = f"{first} {last}".strip()
        if full in self._names:
            return self._names[full]

        best_score = 0
        best_id = None
        for known_name, bioguide in self._names.items():
            if last not in known_name.split():
                continue
            score = fuzz.token_sort_ratio(full, known_name)
            if score > best_score:
                best_score, best_id = score, bioguide

        if best_score >= FUZZY_MIN_SCORE:
            return best_id
        return None

    def member_committees(self, bioguide_id: str) -> list[str]:
        return list(self._member_committees.get(bioguide_id, []))

    def party(self, bioguide_id: str) -> str | None:
        return self._party.get(bioguide_id)

    def committee_members(self, committee_id: str) -> list[dict[str, Any]]:
        """Raw membership rows (name, party, title, rank) for a committee code."""
        return list(self._membership.get(committee_id.upper(), []))


def committee_code(committee: dict[str, Any]) -> str | None:
    return (
        committee.get("thomas_id")
        or committee.get("house_committee_id")
        or committee.get("senate_committee_id")
    )
