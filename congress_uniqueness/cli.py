"""Command-line entry point.

Run: python -m congress_uniqueness <command> [options]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from typing import Any

from congress_uniqueness.analysis.listing import DEFAULT_LIST_LIMIT, list_committees, list_sales, list_trades
from congress_uniqueness.analysis.report import (
    format_analysis_report,
    format_committee_list,
    format_sales_report,
    format_trade_list,
)
from congress_uniqueness.analysis.service import AnalysisReport, build_sector_map, run_analysis
from congress_uniqueness.config import settings
from congress_uniqueness.errors import DataNotFoundError, ProviderError
from congress_uniqueness.ingestion.legislators.committees import (
    COMMITTEE_DATA_FILE,
    CommitteeDirectory,
    LegislatorsCollector,
)
from congress_uniqueness.ingestion.market.fmp_market_data import FMPMarketDataProvider, load_cached_market_data
from congress_uniqueness.ingestion.trades.fmp_client import FMPTradesCollector
from congress_uniqueness.logging_config import generate_run_id, run_id_var, setup_logging
from congress_uniqueness.processing.trade_stats import get_trade_stats
from congress_uniqueness.schemas.trade import DisclosureRecord
from congress_uniqueness.storage import JsonStore, format_duration

logger = logging.getLogger(__name__)

TRADES_FILE = "trades.json"
REPORT_BASE_NAME = "unique-trades"


# ---------- Data loading ----------

def load_trades(store: JsonStore) -> list[DisclosureRecord]:
    stored = store.load(TRADES_FILE)
    if stored is None or not isinstance(stored.data, dict):
        raise DataNotFoundError("trade data", "Run 'fetch-trades' first.")
    records = []
    for chamber in ("senate", "house"):
        for raw in stored.data.get(chamber, []):
            records.append(DisclosureRecord.model_validate({**raw, "chamber": chamber}))
    return records


def load_directory(store: JsonStore) -> CommitteeDirectory | None:
    stored = store.load(COMMITTEE_DATA_FILE)
    if stored is None or not isinstance(stored.data, dict):
        return None
    return CommitteeDirectory(stored.data)


async def fetch_trades(store: JsonStore) -> int:
    async with FMPTradesCollector() as collector:
        by_chamber = await collector.fetch_all()
    payload = {
        chamber: [r.model_dump(mode="json", by_alias=True, exclude={"chamber"}) for r in records]
        for chamber, records in by_chamber.items()
    }
    store.save(TRADES_FILE, payload)
    total = sum(len(records) for records in by_chamber.values())
    logger.info("Saved %d trades (%d senate, %d house)", total, len(by_chamber["senate"]), len(by_chamber["house"]))
    return total


async def fetch_committees(store: JsonStore) -> None:
    async with LegislatorsCollector() as collector:
        await collector.run(store)


def _committee_data_is_stale(store: JsonStore) -> bool:
    stored = store.load(COMMITTEE_DATA_FILE)
    if stored is None:
        return True
    return stored.age_seconds > settings.committee_data_max_age_hours * 3600


async def analyze(store: JsonStore, args: argparse.Namespace) -> AnalysisReport:
    records = load_trades(store)
    directory = load_directory(store)
    if directory is None:
        logger.warning("No committee data found; run 'fetch-committees' to enable committee relevance")

    provider = None
    if args.offline:
        logger.info("Offline mode: skipping market data")
    elif not settings.fmp_api_key:
        logger.warning("FMP API key not configured, scoring without market data")
    else:
        provider = FMPMarketDataProvider(store=store)

    try:
        report = await run_analysis(
            records,
            directory,
            provider,
            min_score=args.min_score,
            keyword_fallback=args.keyword_fallback or settings.keyword_fallback,
        )
    finally:
        if provider is not None:
            await provider.close()

    path = JsonStore(settings.reports_dir).save_report(REPORT_BASE_NAME, report.model_dump(mode="json"))
    logger.info("Report saved to %s", path)
    return report


def _print_report(report: AnalysisReport, args: argparse.Namespace) -> None:
    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        print(format_analysis_report(report, top=args.top))


# ---------- Commands ----------

async def cmd_fetch_trades(args: argparse.Namespace, store: JsonStore) -> None:
    await fetch_trades(store)


async def cmd_fetch_committees(args: argparse.Namespace, store: JsonStore) -> None:
    await fetch_committees(store)


async def cmd_analyze(args: argparse.Namespace, store: JsonStore) -> None:
    _print_report(await analyze(store, args), args)


async def cmd_run(args: argparse.Namespace, store: JsonStore) -> None:
    if args.skip_committees:
        logger.info("Skipping committee fetch (--skip-committees)")
    elif _committee_data_is_stale(store):
        await fetch_committees(store)
    else:
        logger.info("Committee data is fresh, using cache")

    if args.skip_trades:
        logger.info("Skipping trade fetch (--skip-trades)")
    else:
        await fetch_trades(store)

    _print_report(await analyze(store, args), args)


async def cmd_status(args: argparse.Namespace, store: JsonStore) -> None:
    for label, filename in (("Trades", TRADES_FILE), ("Committees", COMMITTEE_DATA_FILE)):
        stored = store.load(filename)
        if stored is None:
            print(f"{label}: not fetched")
        else:
            print(f"{label}: fetched {format_duration(stored.age_seconds)} ago ({stored.fetched_at.isoformat()})")

    try:
        stats = get_trade_stats(load_trades(store))
    except DataNotFoundError:
        pass
    else:
        print(
            f"  {stats.total} trades ({stats.purchases} purchases, {stats.sales} sales), "
            f"{stats.unique_symbols} symbols, {stats.unique_traders} traders"
        )

    latest = JsonStore(settings.reports_dir).latest_report(REPORT_BASE_NAME)
    print(f"Latest report: {latest or 'none'}")
    print(f"FMP API key: {'configured' if settings.fmp_api_key else 'missing'}")


async def cmd_list_trades(args: argparse.Namespace, store: JsonStore) -> None:
    records = load_trades(store)
    directory = load_directory(store)
    if directory is None:
        logger.warning("No committee data found; run 'fetch-committees' for committee overlap")

    sector_map = build_sector_map(directory)
    summaries = list_trades(
        records,
        directory,
        sector_map,
        market_data=load_cached_market_data(store),
        chamber=args.chamber,
        trader=args.trader,
        symbol=args.symbol,
        relevant_only=args.relevant_only,
        limit=args.limit,
    )
    if args.json:
        print(json.dumps([s.model_dump(mode="json") for s in summaries], indent=2))
        return

    names = {}
    if directory is not None:
        names = {c["thomas_id"]: c["name"] for c in directory.committees if c.get("thomas_id") and c.get("name")}
    print(format_trade_list(summaries, names))


async def cmd_report_sales(args: argparse.Namespace, store: JsonStore) -> None:
    sales = list_sales(load_trades(store), load_directory(store))
    print(format_sales_report(sales, generated=date.today()))


async def cmd_list_committees(args: argparse.Namespace, store: JsonStore) -> None:
    directory = load_directory(store)
    if directory is None:
        logger.info("No committee data found; listing the curated jurisdiction table")
    committees = list_committees(directory, build_sector_map(directory), chamber=args.chamber, sector=args.sector)
    if args.json:
        print(json.dumps([c.model_dump(mode="json") for c in committees], indent=2))
    else:
        print(format_committee_list(committees))


COMMANDS: dict[str, Any] = {
    "fetch-trades": cmd_fetch_trades,
    "fetch-committees": cmd_fetch_committees,
    "analyze": cmd_analyze,
    "run": cmd_run,
    "status": cmd_status,
    "list-trades": cmd_list_trades,
    "report-sales": cmd_report_sales,
    "list-committees": cmd_list_committees,
}


def _add_analysis_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--min-score", type=int, default=settings.min_uniqueness_score,
                        help="Minimum uniqueness score to include")
    parser.add_argument("--top", type=int, default=10, help="Show top N results")
    parser.add_argument("--json", action="store_true", help="Output raw JSON")
    parser.add_argument("--offline", action="store_true", help="Score without fetching market data")
    parser.add_argument("--keyword-fallback", action="store_true",
                        help="Infer jurisdictions for committees missing from the curated table")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="congress-uniqueness",
        description="Score congressional stock trades for uniqueness",
    )
    parser.add_argument("--log-level", default=settings.log_level)
    parser.add_argument("--plain-logs", action="store_true", help="Human-readable instead of JSON logs")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("fetch-trades", help="Fetch latest Senate and House trades from FMP")
    sub.add_parser("fetch-committees", help="Fetch committee membership from congress-legislators")
    _add_analysis_options(sub.add_parser("analyze", help="Score cached trades"))

    run = sub.add_parser("run", help="Fetch data and analyze")
    run.add_argument("--skip-committees", action="store_true")
    run.add_argument("--skip-trades", action="store_true")
    _add_analysis_options(run)

    sub.add_parser("status", help="Show cached data status")

    trades = sub.add_parser("list-trades", help="Show recent trades with committee overlap")
    trades.add_argument("--chamber", choices=("senate", "house"))
    trades.add_argument("--trader", help="Filter by trader name (substring)")
    trades.add_argument("--symbol", help="Filter by stock symbol")
    trades.add_argument("--relevant-only", action="store_true", help="Only trades with committee overlap")
    trades.add_argument("--limit", type=int, default=DEFAULT_LIST_LIMIT)
    trades.add_argument("--json", action="store_true", help="Output raw JSON")

    sub.add_parser("report-sales", help="Show all sales grouped by date")

    committees = sub.add_parser("list-committees", help="Show committees with sectors and members")
    committees.add_argument("--chamber", choices=("senate", "house", "joint"))
    committees.add_argument("--sector", help="Filter by sector (substring)")
    committees.add_argument("--json", action="store_true", help="Output raw JSON")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, json_output=settings.log_json and not args.plain_logs)
    run_id_var.set(generate_run_id())

    store = JsonStore(settings.data_dir)
    try:
        asyncio.run(COMMANDS[args.command](args, store))
    except ProviderError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
