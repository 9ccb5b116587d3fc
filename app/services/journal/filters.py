"""Trade selection helpers. All pure, all order-preserving."""

from collections.abc import Iterable

from app.services.journal.records import TradeRecord


def filter_closed(trades: Iterable[TradeRecord]) -> list[TradeRecord]:
    """Closed trades only. Open and cancelled trades never reach a statistic."""
    return [t for t in trades if t.is_closed]


def filter_with_pnl(trades: Iterable[TradeRecord]) -> list[TradeRecord]:
    """Closed trades that have a recorded P&L."""
    return [t for t in trades if t.is_closed and t.pnl_amount is not None]


def filter_closed_with_exit(trades: Iterable[TradeRecord]) -> list[TradeRecord]:
    """Closed trades with both timestamps, for hold-time statistics."""
    return [
        t for t in trades
        if t.is_closed and t.entry_time is not None and t.exit_time is not None
    ]


def sort_by_exit(trades: Iterable[TradeRecord]) -> list[TradeRecord]:
    """Stable ascending sort by exit time. Trades without one go last."""
    trades = list(trades)
    timed = [t for t in trades if t.exit_time is not None]
    untimed = [t for t in trades if t.exit_time is None]
    # Naive and aware timestamps can't be compared directly
    timed.sort(key=lambda t: _sort_key(t.exit_time))
    return timed + untimed


def _sort_key(ts):
    if ts.tzinfo is not None:
        ts = ts.replace(tzinfo=None) - ts.utcoffset()
    return ts
