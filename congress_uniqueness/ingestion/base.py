from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import httpx

from congress_uniqueness.config import settings

logger = logging.getLogger(__name__)


class RateLimiter:
    """Token bucket rate limiter for API calls."""

    def __init__(self, max_calls: int, period_seconds: float) -> None:
        self.max_calls = max_calls
        self.period = period_seconds
        self.calls: list[float] = []

    async def acquire(self) -> None:
        now = time.monotonic()
        self.calls = [t for t in self.calls if now - t < self.period]
        if len(self.calls) >= self.max_calls:
            sleep_time = self.period - (now - self.calls[0])
            logger.debug("Rate limit hit, sleeping %.1fs", sleep_time)
            await asyncio.sleep(sleep_time)
        self.calls.append(time.monotonic())


class BaseCollector:
    """Shared HTTP plumbing for all data providers.

    Subclasses call fetch_json(), which applies rate limiting and retries
    with backoff on 429s and transport errors.
    """

    source_name: str = "unknown"
    rate_limiter: RateLimiter | None = None
    retry_delay: float = 2.0

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self.client = client or httpx.AsyncClient(timeout=settings.http_timeout_seconds)
        self.max_retries = settings.max_retries

    async def close(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> BaseCollector:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def fetch_json(self, url: str, **kwargs: Any) -> Any:
        """Fetch JSON from a URL with rate limiting and retry logic."""
        for attempt in range(1, self.max_retries + 1):
            try:
                if self.rate_limiter:
                    await self.rate_limiter.acquire()
                response = await self.client.get(url, **kwargs)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as e:
                if e.response.status_code == 429 and attempt < self.max_retries:
                    wait = self.retry_delay * 2 ** attempt
                    logger.warning("429 rate limited on %s, waiting %.1fs", url, wait)
                    await asyncio.sleep(wait)
                    continue
                if attempt == self.max_retries or e.response.status_code < 500:
                    logger.error("HTTP %d on %s after %d attempts", e.response.status_code, url, attempt)
                    raise
                await asyncio.sleep(self.retry_delay * attempt)
            except httpx.RequestError as e:
                if attempt == self.max_retries:
                    logger.error("Request failed for %s after %d attempts: %s", url, attempt, e)
                    raise
                await asyncio.sleep(self.retry_delay * attempt)
        return None


def describe_http_error(error: httpx.HTTPError) -> str:
    """Short description without the request URL, which can carry the API key."""
    if isinstance(error, httpx.HTTPStatusError):
        return f"HTTP {error.response.status_code}"
    return type(error).__name__
