"""Market data provider backed by the FMP company profile endpoint.

The profile endpoint is used (rather than quote) because it carries sector
and industry alongside market cap and average volume. Results are cached on
disk for ``settings.market_data_ttl_days``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
from pydantic import ValidationError

from congress_uniqueness.config import settings
from congress_uniqueness.errors import ApiKeyMissingError
from congress_uniqueness.ingestion.base import BaseCollector
from congress_uniqueness.metrics import market_data_lookups_total
from congress_uniqueness.schemas.market import MarketData
from congress_uniqueness.storage import JsonStore

logger = logging.getLogger(__name__)

CACHE_FILE = "market-data-cache.json"
PROFILE_ENDPOINT = "/stable/profile"


def _as_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_profile(payload: Any) -> MarketData | None:
    """Map an FMP profile response (list or object) to MarketData."""
    if isinstance(payload, list):
        payload = payload[0] if payload else None
    if not isinstance(payload, dict):
        return None
    return MarketData(
        market_cap=_as_number(payload.get("marketCap") or payload.get("mktCap")),
        sector=payload.get("sector") or None,
        industry=payload.get("industry") or None,
        average_volume=_as_number(payload.get("averageVolume") or payload.get("volAvg")),
    )


def _parse_cache_entry(entry: Any) -> tuple[datetime, MarketData] | None:
    """(fetched_at, data) for a cache entry; None if it is malformed."""
    try:
        fetched_at = datetime.fromisoformat(entry["fetchedAt"])
        data = MarketData.model_validate(entry["data"])
    except (KeyError, TypeError, ValueError, ValidationError):
        return None
    if fetched_at.tzinfo is None:
        fetched_at = fetched_at.replace(tzinfo=timezone.utc)
    return fetched_at, data


def load_cached_market_data(store: JsonStore) -> dict[str, MarketData]:
    """Every readable cache entry regardless of age, for offline commands."""
    stored = store.load(CACHE_FILE)
    if stored is None or not isinstance(stored.data, dict):
        return {}
    results = {}
    for symbol, entry in stored.data.items():
        parsed = _parse_cache_entry(entry)
        if parsed is not None:
            results[symbol] = parsed[1]
    return results


class FMPMarketDataProvider(BaseCollector):
    source_name = "fmp_profile"
    retry_delay = 1.0

    def __init__(self, api_key: str | None = None, store: JsonStore | None = None, **kwargs: Any) -> None:
        api_key = api_key if api_key is not None else settings.fmp_api_key
        if not api_key:
            raise ApiKeyMissingError("FMP")
        super().__init__(**kwargs)
        self.api_key = api_key
        self.store = store or JsonStore()
        self.ttl = timedelta(days=settings.market_data_ttl_days)
        self.unavailable: set[str] = set()
        self._cache: dict[str, dict[str, Any]] = {}

    def load_cache(self) -> None:
        stored = self.store.load(CACHE_FILE)
        if stored and isinstance(stored.data, dict):
            self._cache = stored.data
            logger.info("Loaded %d cached market data entries", len(self._cache))

    def save_cache(self) -> None:
        self.store.save(CACHE_FILE, self._cache)

    def _cached(self, symbol: str) -> MarketData | None:
        entry = self._cache.get(symbol)
        if not entry:
            return None
        parsed = _parse_cache_entry(entry)
        if parsed is None:
            return None
        fetched_at, data = parsed
        if datetime.now(timezone.utc) - fetched_at >= self.ttl:
            return None
        return data

    async def fetch_symbol(self, symbol: str) -> MarketData | None:
        """Fetch one symbol; None when FMP has no usable data for it."""
        url = f"{settings.fmp_base_url}{PROFILE_ENDPOINT}"
        try:
            payload = await self.fetch_json(url, params={"symbol": symbol, "apikey": self.api_key})
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 402:
                # Not available on the current plan; skip for the rest of the run
                self.unavailable.add(symbol)
                market_data_lookups_total.labels(outcome="unavailable").inc()
                return None
            logger.warning("Market data fetch failed for %s: HTTP %d", symbol, e.response.status_code)
            market_data_lookups_total.labels(outcome="failed").inc()
            return None
        except httpx.RequestError as e:
            logger.warning("Market data fetch failed for %s: %s", symbol, e)
            market_data_lookups_total.labels(outcome="failed").inc()
            return None

        data = parse_profile(payload)
        market_data_lookups_total.labels(outcome="fetched" if data else "failed").inc()
        return data

    async def get_market_data_batch(self, symbols: Iterable[str]) -> dict[str, MarketData]:
        """Resolve market data for every symbol; absent symbols mean no data."""
        self.load_cache()
        results: dict[str, MarketData] = {}
        to_fetch: list[str] = []

        for symbol in dict.fromkeys(s.upper() for s in symbols if s):
            cached = self._cached(symbol)
            if cached is not None:
                results[symbol] = cached
                market_data_lookups_total.labels(outcome="cache_hit").inc()
            elif symbol not in self.unavailable:
                to_fetch.append(symbol)

        logger.info("Market data cache: %d hits, %d to fetch", len(results), len(to_fetch))

        successful = 0
        for i, symbol in enumerate(to_fetch, start=1):
            if i > 1:
                await asyncio.sleep(settings.request_delay_seconds)
            data = await self.fetch_symbol(symbol)
            if data is not None:
                results[symbol] = data
                self._cache[symbol] = {
                    "fetchedAt": datetime.now(timezone.utc).isoformat(),
                    "data": data.model_dump(),
                }
                successful += 1
            if i % 20 == 0:
                logger.info("Progress: %d/%d (%d successful)", i, len(to_fetch), successful)

        if to_fetch:
            self.save_cache()
            logger.info("Fetched market data for %d/%d symbols", successful, len(to_fetch))
        if self.unavailable:
            logger.info("%d symbols unavailable on the current FMP plan", len(self.unavailable))
        return results
