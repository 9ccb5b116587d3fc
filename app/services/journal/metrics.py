"""Compute performance metrics from journal trades.

Every public function takes the raw trade list, keeps closed trades only,
and returns 0 when nothing is left. No function returns NaN or Infinity.
"""

import math
from collections.abc import Iterable

from app.services.journal.filters import filter_closed, filter_closed_with_exit, sort_by_exit
from app.services.journal.records import TradeRecord
from app.services.journal.result import JournalStats

VAR_CONFIDENCE = 0.95
SECONDS_PER_DAY = 86400


def compute_journal_stats(trades: Iterable[TradeRecord]) -> JournalStats:
    """Compute all metrics for a journal in one pass over the closed set."""
    closed = filter_closed(trades)
    trade_stats = _compute_trade_stats(closed)
    dd_pct, dd_amount = _compute_max_drawdown(closed)
    hold = _hold_days(closed)

    return JournalStats(
        total_trades=trade_stats["total_trades"],
        winning_trades=trade_stats["winning_trades"],
        losing_trades=trade_stats["losing_trades"],
        breakeven_trades=trade_stats["breakeven_trades"],
        win_rate_pct=win_rate(closed),
        total_pnl=total_pnl(closed),
        expectancy=expectancy(closed),
        profit_factor=profit_factor(closed),
        largest_win=largest_win(closed),
        largest_loss=largest_loss(closed),
        average_win=average_win(closed),
        average_loss=average_loss(closed),
        win_loss_ratio=win_loss_ratio(closed),
        sharpe_ratio=sharpe_ratio(closed),
        volatility=volatility(closed),
        value_at_risk_95=value_at_risk(closed),
        max_drawdown_pct=dd_pct,
        max_drawdown_amount=dd_amount,
        max_consecutive_wins=trade_stats["max_consecutive_wins"],
        max_consecutive_losses=trade_stats["max_consecutive_losses"],
        longest_hold_days=max(hold) if hold else 0,
        shortest_hold_days=min(hold) if hold else 0,
        average_hold_days=_finite(sum(hold) / len(hold)) if hold else 0.0,
    )


def total_pnl(trades: Iterable[TradeRecord]) -> float:
    return _finite(sum(_pnls(trades)))


def win_rate(trades: Iterable[TradeRecord]) -> float:
    """Winning trades as a percentage of closed trades."""
    closed = filter_closed(trades)
    if not closed:
        return 0.0
    wins = sum(1 for t in closed if t.is_winning)
    return wins / len(closed) * 100


def sharpe_ratio(trades: Iterable[TradeRecord]) -> float:
    """Per-trade Sharpe: mean P&L over population stddev. Risk-free rate = 0."""
    pnls = _pnls(trades)
    if not pnls:
        return 0.0
    std = _population_std(pnls)
    if std == 0:
        return 0.0
    return _finite(_mean(pnls) / std)


def max_drawdown(trades: Iterable[TradeRecord]) -> float:
    """Largest peak-to-trough fall of cumulative P&L, as % of the peak."""
    return _compute_max_drawdown(filter_closed(trades))[0]


def max_drawdown_amount(trades: Iterable[TradeRecord]) -> float:
    """Absolute size of the drawdown reported by max_drawdown."""
    return _compute_max_drawdown(filter_closed(trades))[1]


def profit_factor(trades: Iterable[TradeRecord]) -> float:
    """Gross profit / gross loss. With no losses, the gross profit itself."""
    pnls = _pnls(trades)
    gross_profit = sum(p for p in pnls if p > 0)
    gross_loss = abs(sum(p for p in pnls if p < 0))
    if gross_loss == 0:
        return _finite(gross_profit)
    return _finite(gross_profit / gross_loss)


def expectancy(trades: Iterable[TradeRecord]) -> float:
    """Expected P&L per trade."""
    pnls = _pnls(trades)
    return _finite(_mean(pnls)) if pnls else 0.0


def volatility(trades: Iterable[TradeRecord]) -> float:
    """Population standard deviation of P&L."""
    pnls = _pnls(trades)
    return _finite(_population_std(pnls)) if pnls else 0.0


def value_at_risk(trades: Iterable[TradeRecord], confidence: float = VAR_CONFIDENCE) -> float:
    """Historical VaR: the P&L at the (1 - confidence) quantile, as a magnitude."""
    pnls = sorted(_pnls(trades))
    if not pnls:
        return 0.0
    index = math.floor(len(pnls) * round(1 - confidence, 10))
    index = min(max(index, 0), len(pnls) - 1)
    return _finite(abs(pnls[index]))


def largest_win(trades: Iterable[TradeRecord]) -> float:
    wins = [p for p in _pnls(trades) if p > 0]
    return _finite(max(wins)) if wins else 0.0


def largest_loss(trades: Iterable[TradeRecord]) -> float:
    """Largest loss as a positive magnitude."""
    losses = [abs(p) for p in _pnls(trades) if p < 0]
    return _finite(max(losses)) if losses else 0.0


def average_win(trades: Iterable[TradeRecord]) -> float:
    wins = [p for p in _pnls(trades) if p > 0]
    return _finite(_mean(wins)) if wins else 0.0


def average_loss(trades: Iterable[TradeRecord]) -> float:
    """Mean loss as a positive magnitude."""
    losses = [abs(p) for p in _pnls(trades) if p < 0]
    return _finite(_mean(losses)) if losses else 0.0


def consecutive_wins(trades: Iterable[TradeRecord]) -> int:
    """Longest winning streak, in the order trades were supplied."""
    return _compute_streaks(filter_closed(trades))[0]


def consecutive_losses(trades: Iterable[TradeRecord]) -> int:
    """Longest non-winning streak, in the order trades were supplied."""
    return _compute_streaks(filter_closed(trades))[1]


def win_loss_ratio(trades: Iterable[TradeRecord]) -> float:
    """Winning count / losing count. With no losers, the winning count."""
    closed = filter_closed(trades)
    wins = sum(1 for t in closed if t.is_winning)
    losses = len(closed) - wins
    if losses == 0:
        return float(wins)
    return wins / losses


def longest_hold_days(trades: Iterable[TradeRecord]) -> float:
    hold = _hold_days(trades)
    return max(hold) if hold else 0


def shortest_hold_days(trades: Iterable[TradeRecord]) -> float:
    hold = _hold_days(trades)
    return min(hold) if hold else 0


def average_hold_days(trades: Iterable[TradeRecord]) -> float:
    hold = _hold_days(trades)
    return _finite(sum(hold) / len(hold)) if hold else 0.0


def _pnls(trades: Iterable[TradeRecord]) -> list[float]:
    return [t.pnl for t in filter_closed(trades)]


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


def _population_std(values: list[float]) -> float:
    mean = _mean(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


def _finite(value: float) -> float:
    """Clamp NaN/Infinity (from pathological inputs) to 0."""
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return value


def _compute_max_drawdown(closed: list[TradeRecord]) -> tuple[float, float]:
    """Max drawdown as (percentage, amount) over exit-time ordered cumulative P&L.

    The curve starts at 0 and percentages are only measured once the
    running peak is positive.
    """
    if not closed:
        return 0.0, 0.0

    cumulative = 0.0
    peak = 0.0
    max_dd_pct = 0.0
    max_dd_amount = 0.0

    for t in sort_by_exit(closed):
        cumulative += t.pnl
        if cumulative > peak:
            peak = cumulative

        if peak > 0:
            dd_amount = peak - cumulative
            dd_pct = dd_amount / peak * 100

            if dd_pct > max_dd_pct:
                max_dd_pct = dd_pct
                max_dd_amount = dd_amount

    return _finite(max_dd_pct), _finite(max_dd_amount)


def _compute_streaks(closed: list[TradeRecord]) -> tuple[int, int]:
    max_wins = 0
    max_losses = 0
    current_wins = 0
    current_losses = 0

    for t in closed:
        if t.is_winning:
            current_wins += 1
            current_losses = 0
            max_wins = max(max_wins, current_wins)
        else:
            current_losses += 1
            current_wins = 0
            max_losses = max(max_losses, current_losses)

    return max_wins, max_losses


def _compute_trade_stats(closed: list[TradeRecord]) -> dict:
    """Counts and streaks."""
    if not closed:
        return {
            "total_trades": 0,
            "winning_trades": 0,
            "losing_trades": 0,
            "breakeven_trades": 0,
            "max_consecutive_wins": 0,
            "max_consecutive_losses": 0,
        }

    wins = [t for t in closed if t.is_winning]
    max_wins, max_losses = _compute_streaks(closed)

    return {
        "total_trades": len(closed),
        "winning_trades": len(wins),
        "losing_trades": len(closed) - len(wins),
        "breakeven_trades": sum(1 for t in closed if t.pnl == 0),
        "max_consecutive_wins": max_wins,
        "max_consecutive_losses": max_losses,
    }


def _hold_days(trades: Iterable[TradeRecord]) -> list[int]:
    """Whole days held per trade, rounded up."""
    days = []
    for t in filter_closed_with_exit(trades):
        try:
            seconds = (t.exit_time - t.entry_time).total_seconds()
        except TypeError:
            # naive vs aware timestamps
            continue
        if seconds < 0:
            # exit recorded before entry
            continue
        days.append(math.ceil(seconds / SECONDS_PER_DAY))
    return days
