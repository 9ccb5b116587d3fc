"""CLI for summarising a trading journal export.

Usage:
    python scripts/journal_report.py trades.csv
    python scripts/journal_report.py trades.json --breakdown instrument_type
    python scripts/journal_report.py trades.csv --month 2024-01
    python scripts/journal_report.py trades.csv --json
"""

import argparse
import json
import logging
import sys

from app.services.journal.aggregation import aggregate_by, aggregate_by_month
from app.services.journal.loader import load_trades
from app.services.journal.metrics import compute_journal_stats
from app.services.journal.result import JournalStats, MonthDetail
from app.services.journal.trade_calendar import monthly_detail, yearly_overview


def format_report(stats: JournalStats) -> str:
    """Format journal statistics as a readable console report."""
    lines = []
    sep = "=" * 68

    lines.append(sep)
    lines.append("  Trading Journal Report")
    lines.append(sep)

    lines.append("  TRADES")
    lines.append(
        f"  Total: {stats.total_trades}   "
        f"Win Rate: {stats.win_rate_pct:.1f}% "
        f"({stats.winning_trades}W / {stats.losing_trades}L, {stats.breakeven_trades} breakeven)"
    )
    lines.append(
        f"  Max Consecutive:        {stats.max_consecutive_wins} wins, "
        f"{stats.max_consecutive_losses} losses"
    )
    lines.append(f"  Win/Loss Ratio:         {stats.win_loss_ratio:.2f}")
    lines.append("")

    lines.append("  P&L")
    pnl_sign = "+" if stats.total_pnl >= 0 else ""
    lines.append(f"  Total P&L:              {pnl_sign}{stats.total_pnl:,.2f}")
    lines.append(f"  Expectancy:             {stats.expectancy:,.2f}")
    lines.append(f"  Profit Factor:          {stats.profit_factor:.2f}")
    lines.append(f"  Avg Win:                {stats.average_win:>10,.2f}")
    lines.append(f"  Avg Loss:               {stats.average_loss:>10,.2f}")
    lines.append(f"  Largest Win:            {stats.largest_win:>10,.2f}")
    lines.append(f"  Largest Loss:           {stats.largest_loss:>10,.2f}")
    lines.append("")

    lines.append("  RISK")
    lines.append(f"  Sharpe Ratio:           {stats.sharpe_ratio:.2f}")
    lines.append(f"  Volatility:             {stats.volatility:,.2f}")
    lines.append(f"  VaR (95%):              {stats.value_at_risk_95:,.2f}")
    lines.append(
        f"  Max Drawdown:           -{stats.max_drawdown_pct:.2f}% ({stats.max_drawdown_amount:,.2f})"
    )
    lines.append("")

    lines.append("  HOLD TIME (days)")
    lines.append(
        f"  Longest: {stats.longest_hold_days}   Shortest: {stats.shortest_hold_days}   "
        f"Average: {stats.average_hold_days:.1f}"
    )
    lines.append(sep)
    return "\n".join(lines)


def format_month(detail: MonthDetail) -> str:
    """Daily P&L table for one month. Days without trades are skipped."""
    lines = [f"  {detail.month_name}", f"  {'Day':>4} {'Trades':>7} {'P&L':>12} {'Win%':>6}"]
    for cell in detail.daily_data:
        if cell.trade_count == 0:
            continue
        lines.append(f"  {cell.day:>4} {cell.trade_count:>7} {cell.pnl:>+12,.2f} {cell.win_rate:>6.1f}")
    s = detail.summary
    lines.append(
        f"  Total {s.total_trades} trades, {s.total_pnl:+,.2f} "
        f"({s.win_rate:.1f}% win, avg {s.average_pnl:+,.2f})"
    )
    return "\n".join(lines)


def format_years(trades) -> str:
    """Yearly month-grid as P&L per month."""
    header = "  Year " + " ".join(f"{m:>9}" for m in range(1, 13)) + f" {'Total':>10}"
    lines = [header]
    for row in yearly_overview(trades):
        cells = " ".join(f"{m.pnl:>+9,.0f}" if m else f"{'-':>9}" for m in row.months)
        lines.append(f"  {row.year} {cells} {row.total.pnl:>+10,.0f}")
    return "\n".join(lines)


def build_json(trades, stats: JournalStats, args: argparse.Namespace, detail: MonthDetail | None) -> dict:
    """Statistics plus whichever optional sections were requested."""
    output = {"stats": stats.to_dict()}
    if args.breakdown == "month":
        output["breakdown"] = [b.to_dict() for b in aggregate_by_month(trades)]
    elif args.breakdown:
        output["breakdown"] = [g.to_dict() for g in aggregate_by(trades, args.breakdown)]
    if args.calendar:
        output["calendar"] = [r.to_dict() for r in yearly_overview(trades)]
    if args.month:
        output["month"] = detail.to_dict() if detail else None
    return output


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(
        description="Trading journal statistics from a CSV or JSON trade export"
    )
    parser.add_argument("path", help="Trade export (.csv or .json)")
    parser.add_argument(
        "--breakdown",
        choices=["instrument_type", "direction", "symbol", "month"],
        help="Also print P&L grouped by this field",
    )
    parser.add_argument(
        "--month",
        help="Also print the daily calendar for a month (YYYY-MM)",
    )
    parser.add_argument(
        "--calendar", action="store_true",
        help="Also print the yearly month grid",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Output statistics (and any requested sections) as JSON",
    )
    args = parser.parse_args()

    try:
        trades = load_trades(args.path)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    stats = compute_journal_stats(trades)

    detail = None
    if args.month:
        try:
            year, month = (int(p) for p in args.month.split("-", 1))
        except ValueError:
            print(f"Error: --month must be YYYY-MM, got {args.month!r}", file=sys.stderr)
            sys.exit(1)
        # YYYY-MM months are 1-12, the calendar takes 0-11
        detail = monthly_detail(trades, year, month - 1)

    if args.json:
        print(json.dumps(build_json(trades, stats, args, detail), indent=2))
        return

    print(format_report(stats))

    if args.breakdown == "month":
        print("\n  BY MONTH")
        for b in aggregate_by_month(trades):
            print(f"  {b.name:<10} {b.trades:>5} trades {b.total_pnl:>+12,.2f} {b.win_rate:>6.1f}%")
    elif args.breakdown:
        print(f"\n  BY {args.breakdown.upper()}")
        for g in aggregate_by(trades, args.breakdown):
            print(f"  {g.name:<12} {g.trades:>5} trades {g.total_pnl:>+12,.2f} {g.win_rate:>6.1f}%")

    if args.calendar:
        print()
        print(format_years(trades))

    if args.month:
        print()
        print(format_month(detail) if detail else f"  No closed trades in {args.month}")


if __name__ == "__main__":
    main()
