"""Tests for asset-type and owner classification."""

import pytest

from congress_uniqueness.signals.classifiers import (
    AssetClass,
    OwnerClass,
    classify_asset_type,
    classify_owner,
)


class TestClassifyAssetType:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Stock Option", AssetClass.OPTION),
            ("Call Options", AssetClass.OPTION),
            ("Warrant", AssetClass.WARRANT),
            ("Rights", AssetClass.RIGHT),
            ("Commodity Futures", AssetClass.FUTURE),
            ("Other Derivative", AssetClass.OTHER_DERIVATIVE),
            ("Stock", AssetClass.EQUITY),
            ("Common Stock", AssetClass.EQUITY),
            ("Corporate Bond", AssetClass.EQUITY),
            ("", AssetClass.UNKNOWN),
            ("   ", AssetClass.UNKNOWN),
            (None, AssetClass.UNKNOWN),
        ],
    )
    def test_classification(self, text, expected):
        assert classify_asset_type(text) is expected

    def test_is_derivative(self):
        assert AssetClass.OPTION.is_derivative
        assert AssetClass.OTHER_DERIVATIVE.is_derivative
        assert not AssetClass.EQUITY.is_derivative
        assert not AssetClass.UNKNOWN.is_derivative


class TestClassifyOwner:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Self", OwnerClass.SELF),
            ("SELF", OwnerClass.SELF),
            ("Spouse", OwnerClass.SPOUSE),
            ("Joint", OwnerClass.JOINT),
            ("Child", OwnerClass.CHILD),
            ("Dependent", OwnerClass.DEPENDENT),
            ("Dependent Child", OwnerClass.CHILD),
            ("Trust", OwnerClass.OTHER),
            ("", OwnerClass.UNKNOWN),
            (None, OwnerClass.UNKNOWN),
        ],
    )
    def test_classification(self, text, expected):
        assert classify_owner(text) is expected

    def test_is_indirect(self):
        assert OwnerClass.SPOUSE.is_indirect
        assert OwnerClass.JOINT.is_indirect
        assert not OwnerClass.SELF.is_indirect
        assert not OwnerClass.OTHER.is_indirect
