"""Collector for Financial Modeling Prep congressional trading disclosures."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from congress_uniqueness.config import settings
from congress_uniqueness.errors import ApiKeyMissingError, ProviderError
from congress_uniqueness.ingestion.base import BaseCollector, RateLimiter, describe_http_error
from congress_uniqueness.metrics import trades_fetched_total
from congress_uniqueness.schemas.trade import Chamber, DisclosureRecord

logger = logging.getLogger(__name__)

LATEST_ENDPOINTS: dict[str, str] = {
    "senate": "/stable/senate-latest",
    "house": "/stable/house-latest",
}


class FMPTradesCollector(BaseCollector):
    source_name = "fmp_trades"
    rate_limiter = RateLimiter(max_calls=5, period_seconds=1.0)

    def __init__(self, api_key: str | None = None, **kwargs: Any) -> None:
        api_key = api_key if api_key is not None else settings.fmp_api_key
        if not api_key:
            raise ApiKeyMissingError("FMP")
        super().__init__(**kwargs)
        self.api_key = api_key

    async def collect(self, chamber: Chamber) -> list[dict[str, Any]]:
        url = f"{settings.fmp_base_url}{LATEST_ENDPOINTS[chamber]}"
        try:
            data = await self.fetch_json(url, params={"apikey": self.api_key})
        except httpx.HTTPError as e:
            raise ProviderError(f"FMP {chamber} trades request failed: {describe_http_error(e)}") from e
        # FMP reports errors as {"Error Message": ...} with a 200 status
        if isinstance(data, dict) and "Error Message" in data:
            raise ProviderError(f"FMP API error: {data['Error Message']}")
        if not isinstance(data, list):
            logger.error("Unexpected response format from FMP %s feed", chamber)
            return []
        return data

    def transform(self, raw: dict[str, Any], chamber: Chamber) -> DisclosureRecord | None:
        """Validate one raw row; None if it is not a usable disclosure."""
        try:
            record = DisclosureRecord.model_validate({**raw, "chamber": chamber})
        except ValidationError:
            logger.debug("[%s] Skipping invalid record: %s", self.source_name, raw)
            return None
        if not record.member_name:
            return None
        return record

    async def run(self, chamber: Chamber) -> list[DisclosureRecord]:
        """Execute the collect -> transform pipeline for one chamber."""
        logger.info("[%s] Fetching %s trades", self.source_name, chamber)
        raw_records = await self.collect(chamber)

        records = []
        for raw in raw_records:
            record = self.transform(raw, chamber)
            if record is not None:
                records.append(record)

        trades_fetched_total.labels(chamber=chamber).inc(len(records))
        logger.info(
            "[%s] %s: kept %d of %d records",
            self.source_name, chamber, len(records), len(raw_records),
        )
        return records

    async def fetch_all(self) -> dict[str, list[DisclosureRecord]]:
        senate, house = await asyncio.gather(self.run("senate"), self.run("house"))
        return {"senate": senate, "house": house}
