"""Prometheus metrics for analysis runs."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# ---------- Counters ----------

trades_fetched_total = Counter(
    "trades_fetched_total",
    "Total number of trade disclosures fetched",
    ["chamber"],
)

trades_scored_total = Counter(
    "trades_scored_total",
    "Total number of trades scored for uniqueness",
)

market_data_lookups_total = Counter(
    "market_data_lookups_total",
    "Market data lookups by outcome",
    ["outcome"],  # cache_hit, fetched, unavailable, failed
)

# ---------- Histograms ----------

scoring_latency_seconds = Histogram(
    "scoring_latency_seconds",
    "Time to score a full batch of trades",
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)
