"""Parsing of disclosure amount ranges."""

from __future__ import annotations

import re

from congress_uniqueness.schemas.amount import AmountRange

_INTEGER = re.compile(r"\d+")


def parse_amount_range(amount: str | None) -> AmountRange | None:
    """Parse an amount string such as ``"$15,001 - $50,000"``.

    Currency symbols and thousands separators are stripped, then every
    embedded integer is extracted in order. One integer gives a degenerate
    range, two or more use the first two. Returns None when nothing numeric
    is present.
    """
    if not amount:
        return None

    cleaned = amount.replace("$", "").replace(",", "")
    numbers = _INTEGER.findall(cleaned)
    if not numbers:
        return None

    if len(numbers) == 1:
        value = int(numbers[0])
        return AmountRange(low=value, high=value)

    return AmountRange(low=int(numbers[0]), high=int(numbers[1]))
