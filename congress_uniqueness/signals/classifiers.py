"""Free-text classification of disclosure asset types and owners.

Disclosures report asset type and owner as uncontrolled text. Each trade is
classified once into a closed enum, and the scorer works from the enum.
"""

from __future__ import annotations

from enum import Enum


class AssetClass(str, Enum):
    EQUITY = "equity"
    OPTION = "option"
    WARRANT = "warrant"
    RIGHT = "right"
    FUTURE = "future"
    OTHER_DERIVATIVE = "other_derivative"
    UNKNOWN = "unknown"

    @property
    def is_derivative(self) -> bool:
        return self not in (AssetClass.EQUITY, AssetClass.UNKNOWN)


class OwnerClass(str, Enum):
    SELF = "self"
    SPOUSE = "spouse"
    CHILD = "child"
    DEPENDENT = "dependent"
    JOINT = "joint"
    OTHER = "other"
    UNKNOWN = "unknown"

    @property
    def is_indirect(self) -> bool:
        return self in (OwnerClass.SPOUSE, OwnerClass.CHILD, OwnerClass.DEPENDENT, OwnerClass.JOINT)


# Checked in order; first match wins
_ASSET_KEYWORDS: tuple[tuple[str, AssetClass], ...] = (
    ("option", AssetClass.OPTION),
    ("warrant", AssetClass.WARRANT),
    ("right", AssetClass.RIGHT),
    ("future", AssetClass.FUTURE),
    ("derivative", AssetClass.OTHER_DERIVATIVE),
)

_OWNER_KEYWORDS: tuple[tuple[str, OwnerClass], ...] = (
    ("child", OwnerClass.CHILD),
    ("dependent", OwnerClass.DEPENDENT),
    ("spouse", OwnerClass.SPOUSE),
    ("joint", OwnerClass.JOINT),
    ("self", OwnerClass.SELF),
)


def classify_asset_type(asset_type: str | None) -> AssetClass:
    if not asset_type or not asset_type.strip():
        return AssetClass.UNKNOWN
    lowered = asset_type.lower()
    for keyword, asset_class in _ASSET_KEYWORDS:
        if keyword in lowered:
            return asset_class
    return AssetClass.EQUITY


def classify_owner(owner: str | None) -> OwnerClass:
    if not owner or not owner.strip():
        return OwnerClass.UNKNOWN
    lowered = owner.lower()
    for keyword, owner_class in _OWNER_KEYWORDS:
        if keyword in lowered:
            return owner_class
    return OwnerClass.OTHER
