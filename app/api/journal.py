"""Trading journal analytics routes: stats, breakdowns, calendar and performance.

The journal's trade store lives elsewhere; callers post the trades they
already hold and get the derived figures back.
"""

import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from app.api.auth import require_admin_key
from app.config import settings
from app.services.journal.aggregation import aggregate_by, aggregate_by_month, trade_distribution
from app.services.journal.metrics import compute_journal_stats
from app.services.journal.periods import PERIOD_TYPES, performance_report
from app.services.journal.pnl import resolve_close
from app.services.journal.records import TradeRecord
from app.services.journal.series import equity_curve, running_win_rate
from app.services.journal.trade_calendar import JournalCalendar

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/trading-journal", tags=["trading-journal"])

# Module-level calendar singleton (owns the month-detail cache)
_calendar = JournalCalendar(cache_size=settings.calendar_cache_size)

BREAKDOWN_FIELDS = ("instrument_type", "direction", "symbol")

Number = float | str | None
Timestamp = datetime | str | None


class TradePayload(BaseModel):
    """A journal trade as returned by GET /api/trading-journal/trades."""

    id: int | str | None = None
    symbol: str = ""
    instrument_type: str | None = None
    direction: str | None = None
    status: str = "open"
    entry_price: Number = None
    entry_time: Timestamp = None
    exit_price: Number = None
    exit_time: Timestamp = None
    pnl_amount: Number = None
    pnl_percentage: Number = None
    position_size: Number = None
    strategy_id: int | None = None
    category_id: int | None = None
    notes: str | None = None

    def to_record(self) -> TradeRecord:
        return TradeRecord.from_dict(self.model_dump())


class TradeListRequest(BaseModel):
    """Request body carrying the trades to analyse."""

    trades: list[TradePayload] = Field(default_factory=list)

    def records(self) -> list[TradeRecord]:
        return [t.to_record() for t in self.trades]


class ClosePreviewRequest(BaseModel):
    """Request body for previewing the P&L of closing a trade."""

    direction: str = Field(..., description="long or short")
    entry_price: float = Field(..., gt=0)
    exit_price: float = Field(..., ge=0)
    position_size: float = Field(..., gt=0)
    pnl_amount: float | None = None
    pnl_percentage: float | None = None


@router.post("/stats")
async def get_stats(req: TradeListRequest):
    """Scalar performance metrics over the closed trades."""
    stats = compute_journal_stats(req.records())
    return stats.to_dict()


@router.post("/breakdown/{field}")
async def get_breakdown(field: str, req: TradeListRequest):
    """P&L and win rate grouped by instrument type, direction, symbol or exit month."""
    trades = req.records()
    if field == "month":
        buckets = aggregate_by_month(trades)
        return {"field": field, "groups": [b.to_dict() for b in buckets]}

    if field not in BREAKDOWN_FIELDS:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown breakdown field '{field}'. Use one of: {', '.join(BREAKDOWN_FIELDS)}, month",
        )
    groups = aggregate_by(trades, field)
    return {"field": field, "groups": [g.to_dict() for g in groups]}


@router.post("/calendar")
async def get_yearly_calendar(req: TradeListRequest):
    """Month-by-month P&L grid for every year with closed trades."""
    rows = _calendar.yearly_overview(req.records())
    return {"years": [r.to_dict() for r in rows]}


@router.post("/calendar/{year}/{month}")
async def get_month_calendar(year: int, month: int, req: TradeListRequest):
    """Daily P&L grid for one month (0 = January, 11 = December)."""
    detail = _calendar.monthly_detail(req.records(), year, month)
    if detail is None:
        raise HTTPException(status_code=404, detail=f"No closed trades in {year}-{month + 1:02d}")
    return detail.to_dict()


@router.post("/calendar/{year}/{month}/{day}")
async def get_day_trades(year: int, month: int, day: int, req: TradeListRequest):
    """Closed trades that exited on one day (month 0 = January)."""
    trades = _calendar.daily_trade_details(req.records(), year, month, day)
    return {
        "date": f"{year:04d}-{month + 1:02d}-{day:02d}",
        "trades": [t.to_dict() for t in trades],
        "count": len(trades),
    }


@router.delete("/calendar/cache", dependencies=[Depends(require_admin_key)])
async def clear_calendar_cache():
    """Drop cached month details."""
    cleared = len(_calendar.cache)
    _calendar.invalidate()
    return {"cleared": cleared}


@router.post("/performance")
async def get_performance(
    req: TradeListRequest,
    period_type: str = Query("monthly", description="daily, weekly, monthly, quarterly, yearly"),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    """Per-period metrics, the current period and overall stats."""
    if period_type not in PERIOD_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown period_type '{period_type}'. Use one of: {', '.join(PERIOD_TYPES)}",
        )
    report = performance_report(
        req.records(),
        period_type=period_type,
        start=start_date,
        end=end_date,
        period_count=settings.performance_periods,
    )
    return report.to_dict()


@router.post("/pnl")
async def preview_close_pnl(req: ClosePreviewRequest):
    """P&L a trade would book if closed at the given exit price."""
    try:
        result = resolve_close(
            req.direction,
            req.entry_price,
            req.exit_price,
            req.position_size,
            pnl_amount=req.pnl_amount,
            pnl_percentage=req.pnl_percentage,
        )
    except ValueError as e:
        logger.warning("Close preview rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "pnl_amount": round(result.pnl_amount, 6),
        "pnl_percentage": round(result.pnl_percentage, 4),
        "is_winning": result.is_winning,
    }


@router.post("/series")
async def get_series(req: TradeListRequest):
    """Per-trade chart series: cumulative P&L and running win rate, in exit order."""
    trades = req.records()
    return {
        "equity_curve": [p.to_dict() for p in equity_curve(trades)],
        "win_rate": [p.to_dict() for p in running_win_rate(trades)],
    }


@router.post("/distribution")
async def get_distribution(req: TradeListRequest):
    """Trade counts by instrument type, direction, status and result."""
    return trade_distribution(req.records()).to_dict()
