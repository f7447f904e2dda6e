from __future__ import annotations

from pydantic import BaseModel


class AmountRange(BaseModel):
    """Bucketed dollar range reported on a disclosure, e.g. $15,001 - $50,000."""

    low: int
    high: int

    model_config = {"frozen": True}

    @property
    def midpoint(self) -> float:
        return (self.low + self.high) / 2
