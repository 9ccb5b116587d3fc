"""Calendar views of closed trades: multi-year month grid and month detail.

Trades are bucketed by the calendar date of their exit timestamp, as
recorded (no timezone conversion). Months are passed as a 0-11 index,
matching the position of a month in a `YearRow.months` list.
"""

import calendar
import copy
import hashlib
import logging
from collections import OrderedDict
from collections.abc import Iterable

from app.services.journal.filters import filter_closed
from app.services.journal.records import TradeRecord
from app.services.journal.result import (
    DayCell,
    MonthCell,
    MonthDetail,
    MonthSummary,
    YearRow,
)

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 128


def yearly_overview(trades: Iterable[TradeRecord]) -> list[YearRow]:
    """Month-by-month P&L grid per year, most recent year first.

    Only years with at least one closed trade appear.
    """
    cells: dict[int, list[MonthCell | None]] = {}

    for t in filter_closed(trades):
        if t.exit_time is None:
            continue
        months = cells.setdefault(t.exit_time.year, [None] * 12)
        idx = t.exit_time.month - 1
        cell = months[idx]
        if cell is None:
            cell = months[idx] = MonthCell()
        cell.pnl += t.pnl
        cell.trades += 1
        if t.is_winning:
            cell.wins += 1

    rows = []
    for year in sorted(cells, reverse=True):
        months = cells[year]
        total = MonthCell()
        for cell in months:
            if cell is None:
                continue
            cell.win_rate = _win_rate(cell.wins, cell.trades)
            total.pnl += cell.pnl
            total.trades += cell.trades
            total.wins += cell.wins
        total.win_rate = _win_rate(total.wins, total.trades)
        rows.append(YearRow(year=year, months=months, total=total))

    return rows


def monthly_detail(
    trades: Iterable[TradeRecord],
    year: int,
    month: int,
    cache: "MonthlyCalendarCache | None" = None,
) -> MonthDetail | None:
    """Daily P&L for one month (0 = January). None if no trades closed in it."""
    if not 0 <= month <= 11:
        return None

    closed = filter_closed(trades)
    key = None
    if cache is not None:
        key = (year, month, trade_set_fingerprint(closed))
        cached = cache.get(key)
        if cached is not None:
            return cached

    detail = _build_month_detail(closed, year, month)
    if cache is not None and detail is not None:
        cache.put(key, detail)
    return detail


def daily_trade_details(
    trades: Iterable[TradeRecord],
    year: int,
    month: int,
    day: int,
) -> list[TradeRecord]:
    """Closed trades that exited on an exact day (month 0 = January)."""
    return [
        t for t in filter_closed(trades)
        if t.exit_time is not None
        and (t.exit_time.year, t.exit_time.month - 1, t.exit_time.day) == (year, month, day)
    ]


def trade_set_fingerprint(trades: Iterable[TradeRecord]) -> str:
    """Content hash of the fields that feed the calendar views."""
    digest = hashlib.sha256()
    for t in trades:
        exit_time = t.exit_time.isoformat() if t.exit_time is not None else ""
        digest.update(f"{t.id}|{t.status}|{t.pnl!r}|{exit_time}\n".encode())
    return digest.hexdigest()


def _build_month_detail(closed: list[TradeRecord], year: int, month: int) -> MonthDetail | None:
    in_month = [
        t for t in closed
        if t.exit_time is not None
        and t.exit_time.year == year
        and t.exit_time.month == month + 1
    ]
    if not in_month:
        return None

    days_in_month = calendar.monthrange(year, month + 1)[1]
    daily = [DayCell(day=d) for d in range(1, days_in_month + 1)]
    wins_by_day = [0] * days_in_month

    for t in in_month:
        idx = t.exit_time.day - 1
        daily[idx].pnl += t.pnl
        daily[idx].trade_count += 1
        if t.is_winning:
            wins_by_day[idx] += 1

    for cell, wins in zip(daily, wins_by_day):
        cell.win_rate = _win_rate(wins, cell.trade_count)

    total_pnl = sum(t.pnl for t in in_month)
    winning = sum(1 for t in in_month if t.is_winning)
    summary = MonthSummary(
        total_pnl=total_pnl,
        total_trades=len(in_month),
        win_rate=_win_rate(winning, len(in_month)),
        winning_trades=winning,
        losing_trades=len(in_month) - winning,
        average_pnl=total_pnl / len(in_month),
    )

    return MonthDetail(
        year=year,
        month=month,
        month_name=f"{calendar.month_name[month + 1]} {year}",
        daily_data=daily,
        summary=summary,
    )


def _win_rate(wins: int, total: int) -> float:
    return wins / total * 100 if total else 0.0


class MonthlyCalendarCache:
    """Bounded LRU of month details keyed by (year, month, trade-set hash)."""

    def __init__(self, maxsize: int = DEFAULT_CACHE_SIZE) -> None:
        self.maxsize = max(1, maxsize)
        self._entries: OrderedDict[tuple, MonthDetail] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: tuple) -> MonthDetail | None:
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            logger.debug("Month cache miss %s-%02d", key[0], key[1])
            return None
        self._entries.move_to_end(key)
        self.hits += 1
        logger.debug("Month cache hit %s-%02d", key[0], key[1])
        return copy.deepcopy(entry)

    def put(self, key: tuple, detail: MonthDetail) -> None:
        self._entries[key] = copy.deepcopy(detail)
        self._entries.move_to_end(key)
        while len(self._entries) > self.maxsize:
            self._entries.popitem(last=False)

    def invalidate(self) -> None:
        """Drop every cached month."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: tuple) -> bool:
        return key in self._entries


class JournalCalendar:
    """Calendar views over a journal, owning the month-detail cache."""

    def __init__(self, cache_size: int = DEFAULT_CACHE_SIZE) -> None:
        self.cache = MonthlyCalendarCache(cache_size)

    def yearly_overview(self, trades: Iterable[TradeRecord]) -> list[YearRow]:
        return yearly_overview(trades)

    def monthly_detail(self, trades: Iterable[TradeRecord], year: int, month: int) -> MonthDetail | None:
        return monthly_detail(trades, year, month, cache=self.cache)

    def daily_trade_details(
        self, trades: Iterable[TradeRecord], year: int, month: int, day: int
    ) -> list[TradeRecord]:
        return daily_trade_details(trades, year, month, day)

    def invalidate(self) -> None:
        self.cache.invalidate()
        logger.info("Month calendar cache cleared")
