"""Per-trade chart series: cumulative P&L curve and running win rate."""

from collections.abc import Iterable

from app.services.journal.filters import filter_with_pnl, sort_by_exit
from app.services.journal.records import TradeRecord
from app.services.journal.result import EquityPoint, WinRatePoint


def equity_curve(trades: Iterable[TradeRecord]) -> list[EquityPoint]:
    """Cumulative P&L after each closed trade, in exit order.

    Only closed trades with both a P&L and an exit time are plotted.
    """
    timed = [t for t in filter_with_pnl(trades) if t.exit_time is not None]

    points = []
    cumulative = 0.0
    for t in sort_by_exit(timed):
        cumulative += t.pnl
        points.append(
            EquityPoint(
                date=t.exit_time.date(),
                pnl=t.pnl,
                cumulative_pnl=cumulative,
                trade_id=t.id,
            )
        )
    return points


def running_win_rate(trades: Iterable[TradeRecord]) -> list[WinRatePoint]:
    """Win rate over the first n closed trades, for every n, in exit order."""
    points = []
    wins = 0
    for n, t in enumerate(sort_by_exit(filter_with_pnl(trades)), start=1):
        if t.is_winning:
            wins += 1
        points.append(
            WinRatePoint(
                trade=n,
                date=t.exit_time.date() if t.exit_time else None,
                win_rate=round(wins / n * 100, 2),
                total_trades=n,
                wins=wins,
            )
        )
    return points
