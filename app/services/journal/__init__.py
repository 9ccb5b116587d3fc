"""Trading journal analytics.

Pure read-side statistics over journal trades: scalar metrics, breakdowns
by field and month, chart series, calendar grids and period performance.
"""

from app.services.journal.metrics import compute_journal_stats
from app.services.journal.records import TradeRecord
from app.services.journal.result import JournalStats
from app.services.journal.trade_calendar import JournalCalendar, MonthlyCalendarCache

__all__ = [
    "JournalCalendar",
    "JournalStats",
    "MonthlyCalendarCache",
    "TradeRecord",
    "compute_journal_stats",
]
