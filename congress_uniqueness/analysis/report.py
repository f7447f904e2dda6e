"""Plain-text rendering of analysis reports."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date

from congress_uniqueness.analysis.listing import CommitteeListing, SaleEntry, TradeSummary
from congress_uniqueness.analysis.service import AnalysisReport, TradeReport

RULE = "=" * 60


def _millions(value: float) -> str:
    return f"${value / 1_000_000:,.0f}M"


def format_trade_report(report: TradeReport) -> str:
    record = report.record
    score = report.score
    explanation = score.explanation

    lines = [
        f"{record.symbol or 'N/A'} - {record.asset_description or 'Unknown'}",
        f"   Trader: {report.trader.display_name} ({record.chamber})"
        + (f" [{report.trader.party}]" if report.trader.party else ""),
        f"   Type: {record.type or 'N/A'} | Amount: {record.amount or 'N/A'} | Owner: {record.owner or 'N/A'}",
        f"   Date: {record.transaction_date.isoformat() if record.transaction_date else 'N/A'}",
        f"   Score: {score.overall_score}/100",
        "   Factors:",
    ]

    if explanation.market_cap and score.flags.is_small_cap:
        lines.append(f"     - {explanation.market_cap.category.title()} cap: {_millions(explanation.market_cap.value)}")
    if explanation.conviction and score.flags.is_high_conviction:
        lines.append(f"     - High conviction: {explanation.conviction.multiplier:.1f}x typical trade")
    if explanation.rarity and score.flags.is_rare_stock:
        lines.append(
            f"     - Rare stock: {explanation.rarity.total_congress_trades} congressional trades "
            f"by {explanation.rarity.unique_traders} member(s)"
        )
    if explanation.committee_relevance and score.flags.has_committee_relevance:
        relevance = explanation.committee_relevance
        committees = ", ".join(c.committee_id for c in relevance.overlapping_committees)
        lines.append(f"     - Committee relevance: {', '.join(relevance.overlapping_tags)} ({committees})")
    if explanation.derivative and score.flags.is_derivative:
        lines.append(f"     - Derivative: {explanation.derivative.asset_type}")
    if explanation.ownership and score.flags.is_indirect_ownership:
        lines.append(f"     - Indirect ownership: {explanation.ownership.owner}")

    return "\n".join(lines)


def format_analysis_report(report: AnalysisReport, top: int = 10) -> str:
    lines = [
        RULE,
        "UNIQUE TRADES ANALYSIS REPORT",
        RULE,
        f"Generated: {report.generated_at.isoformat()}",
        f"Total Trades Analyzed: {report.total_trades_analyzed}",
        f"Unique Trades Found: {len(report.unique_trades)} (score >= {report.min_score})",
    ]

    top_trades = report.summary.top_by_score[:top]
    if top_trades:
        lines.append(f"\nTOP {len(top_trades)} UNIQUE TRADES:\n")
        for trade_report in top_trades:
            lines.append(format_trade_report(trade_report))
            lines.append("")
    else:
        lines.append("\n   No trades met the uniqueness criteria.")
        lines.append("   Try lowering --min-score.")

    if report.summary.by_member:
        lines.append("\nTRADES BY MEMBER:\n")
        for member in report.summary.by_member[:10]:
            lines.append(
                f"   {member.name}: {member.trade_count} unique trades "
                f"(avg score: {member.average_score:.1f})"
            )

    if report.summary.by_sector:
        lines.append("\nCOMMITTEE-RELEVANT TRADES BY SECTOR:\n")
        for sector, count in report.summary.by_sector.items():
            lines.append(f"   {sector}: {count} trades")

    lines.append(RULE)
    return "\n".join(lines)


# ---------- Browsing views ----------

_CHAMBER_LABELS = {"senate": ("Senate", "Sen"), "house": ("House", "Rep")}


def _cell(text: str, width: int) -> str:
    if len(text) > width:
        return text[: width - 3] + "..."
    return text


def format_trade_list(
    summaries: list[TradeSummary], committee_names: Mapping[str, str] | None = None
) -> str:
    committee_names = committee_names or {}
    lines = [RULE, "RECENT CONGRESSIONAL TRADES", RULE]
    if not summaries:
        lines.append("\n   No trades found matching the criteria.")
        return "\n".join(lines)

    for summary in summaries:
        marker = "!" if summary.has_committee_overlap else " "
        chamber = _CHAMBER_LABELS.get(summary.chamber, (summary.chamber, ""))[0]
        lines.append("")
        lines.append(f"{marker} {summary.symbol} | {summary.type.upper()} | {summary.amount}")
        lines.append(f"   {_cell(summary.description, 70)}")
        lines.append(f"   {summary.trader} ({chamber}) | {summary.date}")
        if summary.sector or summary.industry:
            lines.append(f"   Sector: {summary.sector or 'N/A'} / {summary.industry or 'N/A'}")
        if summary.trader_committees:
            shown = ", ".join(committee_names.get(c, c) for c in summary.trader_committees[:3])
            extra = len(summary.trader_committees) - 3
            lines.append(f"   Committees: {shown}" + (f" +{extra} more" if extra > 0 else ""))
        if summary.has_committee_overlap:
            relevant = ", ".join(committee_names.get(c, c) for c in summary.relevant_committees)
            lines.append(f"   POTENTIAL COMMITTEE RELEVANCE: {relevant}")

    relevant_count = sum(1 for s in summaries if s.has_committee_overlap)
    lines.append("")
    lines.append(RULE)
    lines.append(f"Showing {len(summaries)} trades")
    if relevant_count:
        lines.append(f"{relevant_count} trades have potential committee relevance")
    lines.append(RULE)
    return "\n".join(lines)


def format_sales_line(entry: SaleEntry) -> list[str]:
    record = entry.record
    symbol = record.symbol or "N/A"
    amount = record.amount or "N/A"
    chamber = _CHAMBER_LABELS.get(record.chamber, ("", "Rep"))[1]
    party = f" ({entry.party})" if entry.party else ""
    owner = f" [{record.owner}]" if record.owner and record.owner != "Self" else ""

    lines = [f"  {symbol:<6} {amount:<22} {chamber}. {record.member_name}{party}{owner}"]
    description = record.asset_description or ""
    if description and description != symbol:
        asset_type = record.asset_type or ""
        type_label = f" ({asset_type})" if asset_type and asset_type != "Stock" else ""
        lines.append(f"         {description}{type_label}")
    return lines


def format_sales_report(sales: list[SaleEntry], generated: date) -> str:
    lines = [
        RULE,
        "CONGRESSIONAL SALES REPORT",
        RULE,
        f"Generated: {generated.isoformat()}",
        f"Total Sales: {len(sales)}",
        RULE,
    ]
    current = None
    for entry in sales:
        tx_date = entry.record.transaction_date
        heading = tx_date.isoformat() if tx_date else "Unknown"
        if heading != current:
            lines.append("")
            lines.append(f"-- {heading} " + "-" * 40)
            current = heading
        lines.extend(format_sales_line(entry))
    lines.append("")
    lines.append(RULE)
    return "\n".join(lines)


def format_committee_list(committees: list[CommitteeListing], max_members: int = 8) -> str:
    lines = [RULE, "CONGRESSIONAL COMMITTEES", RULE]
    current_type = None
    for committee in committees:
        if committee.type != current_type:
            current_type = committee.type
            lines.append("")
            lines.append(f"{current_type.upper()} COMMITTEES")
            lines.append("-" * len(RULE))
        lines.append(f"  {committee.code:<6} {committee.name}")
        lines.append(f"         Sectors: {', '.join(committee.sectors) or '(none mapped)'}")
        if committee.members:
            lines.append(f"         Members ({len(committee.members)}):")
            for member in committee.members[:max_members]:
                party = f" ({member.party})" if member.party else ""
                title = f" - {member.title}" if member.title else ""
                lines.append(f"           {member.name}{party}{title}")
            if len(committee.members) > max_members:
                lines.append(f"           ... and {len(committee.members) - max_members} more members")
    lines.append("")
    lines.append(RULE)
    lines.append(f"Total: {len(committees)} committees")
    lines.append(RULE)
    return "\n".join(lines)
