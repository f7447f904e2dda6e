"""Tests for the committee-sector jurisdiction map."""

import pytest

from congress_uniqueness.taxonomy.committee_sectors import (
    DEFAULT_TAXONOMY,
    CommitteeSectorMap,
    Jurisdiction,
    JurisdictionSource,
    normalize_committee_id,
)


class TestNormalizeCommitteeId:
    @pytest.mark.parametrize(
        "raw,expected",
        [("HSBA", "HSBA"), ("hsba00", "HSBA"), ("HSBA04", "HSBA"), (" ssbk ", "SSBK"), ("", "")],
    )
    def test_parent_code(self, raw, expected):
        assert normalize_committee_id(raw) == expected


class TestCommitteeSectorMap:
    def test_curated_sectors_and_industries(self, sector_map):
        assert "Financial Services" in sector_map.get_committee_sectors("SSBK")
        assert "Banks - Regional" in sector_map.get_committee_industries("HSBA")
        assert sector_map.get_committee_sectors("HSSY") == frozenset({"Technology", "Industrials"})

    def test_unknown_committee_is_empty(self, sector_map):
        assert sector_map.get_committee_sectors("ZZZZ") == frozenset()
        assert sector_map.get_committee_industries("ZZZZ") == frozenset()
        assert sector_map.jurisdiction("ZZZZ").source is JurisdictionSource.NONE

    @pytest.mark.parametrize("committee_id", ["SSAP", "HSAP", "SSBU", "HSRU", "SSRA"])
    def test_procedural_committees_map_to_empty_sets(self, sector_map, committee_id):
        jurisdiction = sector_map.jurisdiction(committee_id)
        assert jurisdiction.source is JurisdictionSource.CURATED
        assert jurisdiction.sectors == frozenset()
        assert jurisdiction.industries == frozenset()

    def test_has_overlap_is_sector_or_industry(self, sector_map):
        assert sector_map.has_overlap("HSBA", "Financial Services", None)
        assert sector_map.has_overlap("HSBA", None, "Banks - Regional")
        assert sector_map.has_overlap("HSBA", "Energy", "Banks - Regional")
        assert not sector_map.has_overlap("HSBA", "Energy", "Solar")
        assert not sector_map.has_overlap("HSBA", None, None)

    def test_subcommittee_lookup(self, sector_map):
        assert sector_map.get_committee_sectors("hsba04") == sector_map.get_committee_sectors("HSBA")

    def test_committee_name(self, sector_map):
        assert sector_map.committee_name("SSBK") == "Banking, Housing, and Urban Affairs"
        assert sector_map.committee_name("ZZZZ") is None

    def test_committees_with_jurisdiction(self, sector_map):
        ids = {entry.committee_id for entry in sector_map.committees_with_jurisdiction("Financial Services", None)}
        assert {"SSBK", "HSBA", "SSFI", "HSWM"} <= ids
        assert "HSRU" not in ids

    def test_check_committee_relevance_deduplicates(self, sector_map):
        overlapping = sector_map.check_committee_relevance(
            ["HSBA", "HSBA04", "HSRU", "HSSY"], "Technology", "Banks - Regional"
        )
        assert [j.committee_id for j in overlapping] == ["HSBA", "HSSY"]

    def test_fallback_only_for_uncurated(self):
        class _Resolver:
            calls: list = []

            def resolve(self, committee_id):
                self.calls.append(committee_id)
                return Jurisdiction(
                    committee_id="HSZZ",
                    sectors=frozenset({"Energy"}),
                    source=JurisdictionSource.KEYWORD_INFERRED,
                )

        resolver = _Resolver()
        sector_map = CommitteeSectorMap.from_entries(fallback=resolver)

        assert sector_map.jurisdiction("HSBA").source is JurisdictionSource.CURATED
        assert resolver.calls == []
        inferred = sector_map.jurisdiction("HSZZ")
        assert inferred.source is JurisdictionSource.KEYWORD_INFERRED
        assert inferred.sectors == frozenset({"Energy"})

    def test_default_taxonomy_ids_are_unique(self):
        ids = [entry.committee_id for entry in DEFAULT_TAXONOMY]
        assert len(ids) == len(set(ids))
        assert all(len(i) == 4 for i in ids)
