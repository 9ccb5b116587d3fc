"""Group trades by a field or by exit month, and count them for distribution charts."""

import calendar
import logging
from collections.abc import Iterable
from dataclasses import fields

from app.services.journal.filters import filter_closed
from app.services.journal.records import TradeRecord
from app.services.journal.result import CategoryStats, MonthBucket, TradeDistribution

logger = logging.getLogger(__name__)

_TRADE_FIELDS = frozenset(f.name for f in fields(TradeRecord))

UNKNOWN = "unknown"


def aggregate_by(trades: Iterable[TradeRecord], key: str) -> list[CategoryStats]:
    """Total P&L and win rate per distinct value of `key`.

    Trades with an empty value for `key` are left out. Groups come back in
    order of first appearance.
    """
    if key not in _TRADE_FIELDS:
        logger.debug("aggregate_by: unknown field %r", key)
        return []

    groups: dict[str, CategoryStats] = {}
    for t in filter_closed(trades):
        value = getattr(t, key)
        if not value:
            continue
        name = str(value)
        group = groups.get(name)
        if group is None:
            group = groups[name] = CategoryStats(name=name)
        group.total_pnl += t.pnl
        group.trades += 1
        if t.is_winning:
            group.wins += 1

    for group in groups.values():
        group.win_rate = group.wins / group.trades * 100 if group.trades else 0.0

    return list(groups.values())


def aggregate_by_month(trades: Iterable[TradeRecord]) -> list[MonthBucket]:
    """P&L, trade count and win rate per exit month, oldest first.

    `month` is the 0-11 month index. Breakeven trades count as losses.
    """
    buckets: dict[tuple[int, int], MonthBucket] = {}
    for t in filter_closed(trades):
        if t.exit_time is None:
            continue
        key = (t.exit_time.year, t.exit_time.month - 1)
        bucket = buckets.get(key)
        if bucket is None:
            year, month = key
            bucket = buckets[key] = MonthBucket(
                name=f"{calendar.month_abbr[month + 1]} {year}",
                year=year,
                month=month,
            )
        bucket.total_pnl += t.pnl
        bucket.trades += 1
        if t.is_winning:
            bucket.wins += 1
        else:
            bucket.losses += 1

    for bucket in buckets.values():
        bucket.win_rate = bucket.wins / bucket.trades * 100

    return [buckets[k] for k in sorted(buckets)]


def trade_distribution(trades: Iterable[TradeRecord]) -> TradeDistribution:
    """Counts of every trade (open and cancelled included) by type, direction and status.

    `results` splits only the closed trades into winning and losing.
    """
    dist = TradeDistribution()
    for t in trades:
        _bump(dist.instrument_type, t.instrument_type)
        _bump(dist.direction, t.direction)
        _bump(dist.status, t.status)
        if t.is_closed:
            dist.results["winning" if t.is_winning else "losing"] += 1
    return dist


def _bump(counts: dict[str, int], value) -> None:
    name = str(value) if value else UNKNOWN
    counts[name] = counts.get(name, 0) + 1
