"""Period performance: metrics per day/week/month/quarter/year of entry date."""

import calendar
import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from app.services.journal.filters import filter_closed
from app.services.journal.records import TradeRecord
from app.services.journal.result import OverallStats, PerformanceReport, PeriodMetrics

logger = logging.getLogger(__name__)

PERIOD_TYPES = ("daily", "weekly", "monthly", "quarterly", "yearly")
DEFAULT_PERIOD_COUNT = 12


def _add_months(d: date, months: int) -> date:
    total = d.year * 12 + (d.month - 1) + months
    year, month = divmod(total, 12)
    day = min(d.day, calendar.monthrange(year, month + 1)[1])
    return date(year, month + 1, day)


def _period_end(start: date, period_type: str) -> date:
    """Last day of the period beginning at `start`."""
    if period_type == "weekly":
        return start + timedelta(days=6)
    if period_type == "monthly":
        return _add_months(start.replace(day=1), 1) - timedelta(days=1)
    if period_type == "quarterly":
        return _add_months(start.replace(day=1), 3) - timedelta(days=1)
    if period_type == "yearly":
        return date(start.year, 12, 31)
    return start


def generate_periods(start: date, end: date, period_type: str) -> list[tuple[date, date]]:
    """Contiguous (start, end) periods covering start..end.

    Monthly, quarterly and yearly periods snap to calendar boundaries after
    the first one. Unknown period types are treated as daily.
    """
    if period_type not in PERIOD_TYPES:
        logger.debug("Unknown period type %r, using daily", period_type)
        period_type = "daily"

    periods = []
    current = start
    while current <= end:
        period_end = _period_end(current, period_type)
        periods.append((current, period_end))
        current = period_end + timedelta(days=1)
    return periods


def current_period_bounds(period_type: str, now: datetime | None = None) -> tuple[date, date]:
    """The period containing `now`. Weeks start on Monday."""
    today = (now or datetime.now()).date()
    if period_type == "daily":
        return today, today
    if period_type == "weekly":
        start = today - timedelta(days=today.weekday())
        return start, start + timedelta(days=6)
    start = today.replace(day=1)
    return start, _period_end(start, "monthly")


def period_metrics(trades: Iterable[TradeRecord], start: date, end: date) -> PeriodMetrics:
    """Metrics for closed trades whose entry date falls in [start, end]."""
    in_period = [
        t for t in filter_closed(trades)
        if t.entry_time is not None and start <= t.entry_time.date() <= end
    ]
    metrics = PeriodMetrics(period_start=start, period_end=end)
    if not in_period:
        return metrics

    pnls = [t.pnl for t in in_period]
    win_pnls = [t.pnl for t in in_period if t.is_winning]
    loss_pnls = [p for p in pnls if p < 0]

    metrics.total_trades = len(in_period)
    metrics.winning_trades = len(win_pnls)
    metrics.losing_trades = len(in_period) - len(win_pnls)
    metrics.win_rate = len(win_pnls) / len(in_period) * 100
    metrics.total_pnl = sum(pnls)
    metrics.average_win = sum(win_pnls) / len(win_pnls) if win_pnls else 0.0
    metrics.average_loss = sum(loss_pnls) / len(loss_pnls) if loss_pnls else 0.0
    metrics.largest_win = max(win_pnls) if win_pnls else 0.0
    metrics.largest_loss = min(loss_pnls) if loss_pnls else 0.0

    gross_profit = sum(win_pnls)
    gross_loss = abs(sum(loss_pnls))
    metrics.profit_factor = gross_profit / gross_loss if gross_loss > 0 else gross_profit
    metrics.risk_reward_ratio = (
        abs(metrics.average_win / metrics.average_loss) if metrics.average_loss else 0.0
    )

    # Drawdown amount in entry order
    cumulative = 0.0
    peak = 0.0
    for t in sorted(in_period, key=lambda t: t.entry_time.replace(tzinfo=None)):
        cumulative += t.pnl
        peak = max(peak, cumulative)
        metrics.max_drawdown = max(metrics.max_drawdown, peak - cumulative)

    durations = []
    for t in in_period:
        if t.exit_time is None:
            continue
        try:
            durations.append((t.exit_time - t.entry_time).total_seconds() / 3600)
        except TypeError:
            continue
    if durations:
        metrics.total_trading_time_hours = sum(durations)
        metrics.average_trade_duration_hours = sum(durations) / len(durations)

    return metrics


def overall_stats(trades: Iterable[TradeRecord]) -> OverallStats:
    """All-time totals across closed trades."""
    closed = filter_closed(trades)
    if not closed:
        return OverallStats()
    winning = sum(1 for t in closed if t.is_winning)
    total = sum(t.pnl for t in closed)
    return OverallStats(
        total_trades=len(closed),
        winning_trades=winning,
        losing_trades=len(closed) - winning,
        win_rate=winning / len(closed) * 100,
        total_pnl=total,
        average_pnl=total / len(closed),
    )


def performance_report(
    trades: Iterable[TradeRecord],
    period_type: str = "monthly",
    start: date | None = None,
    end: date | None = None,
    now: datetime | None = None,
    period_count: int = DEFAULT_PERIOD_COUNT,
) -> PerformanceReport:
    """Period series (most recent first), current period and overall stats.

    Without an explicit start, the series covers the last `period_count`
    periods ending at `end` (or today).
    """
    trades = list(trades)
    now = now or datetime.now()
    end = end or now.date()
    if period_type not in PERIOD_TYPES:
        period_type = "daily"

    if start is None:
        start = _lookback_start(end, period_type, period_count)

    periods = [period_metrics(trades, s, e) for s, e in generate_periods(start, end, period_type)]
    periods.reverse()

    current_start, current_end = current_period_bounds(period_type, now)
    return PerformanceReport(
        period_type=period_type,
        periods=periods[:period_count] if period_count else periods,
        current_period=period_metrics(trades, current_start, current_end),
        overall=overall_stats(trades),
    )


def _lookback_start(end: date, period_type: str, count: int) -> date:
    count = max(count, 1)
    if period_type == "weekly":
        return end - timedelta(days=7 * count - 1)
    if period_type == "monthly":
        return _add_months(end.replace(day=1), -(count - 1))
    if period_type == "quarterly":
        return _add_months(end.replace(day=1), -3 * (count - 1))
    if period_type == "yearly":
        return date(end.year - (count - 1), 1, 1)
    return end - timedelta(days=count - 1)
