"""Analytics result data structures. Money in the trade's settlement currency."""

from dataclasses import asdict, dataclass, field
from datetime import date


@dataclass
class JournalStats:
    """Every scalar metric for a set of journal trades."""

    # Counts
    total_trades: int
    winning_trades: int
    losing_trades: int
    breakeven_trades: int
    win_rate_pct: float

    # P&L
    total_pnl: float
    expectancy: float
    profit_factor: float
    largest_win: float
    largest_loss: float
    average_win: float
    average_loss: float
    win_loss_ratio: float

    # Risk
    sharpe_ratio: float
    volatility: float
    value_at_risk_95: float
    max_drawdown_pct: float
    max_drawdown_amount: float

    # Streaks
    max_consecutive_wins: int
    max_consecutive_losses: int

    # Hold time (days)
    longest_hold_days: float
    shortest_hold_days: float
    average_hold_days: float

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict for API response."""
        return {
            "total_trades": self.total_trades,
            "winning_trades": self.winning_trades,
            "losing_trades": self.losing_trades,
            "breakeven_trades": self.breakeven_trades,
            "win_rate_pct": round(self.win_rate_pct, 1),
            "total_pnl": round(self.total_pnl, 2),
            "expectancy": round(self.expectancy, 2),
            "profit_factor": round(self.profit_factor, 2),
            "largest_win": round(self.largest_win, 2),
            "largest_loss": round(self.largest_loss, 2),
            "average_win": round(self.average_win, 2),
            "average_loss": round(self.average_loss, 2),
            "win_loss_ratio": round(self.win_loss_ratio, 2),
            "sharpe_ratio": round(self.sharpe_ratio, 2),
            "volatility": round(self.volatility, 2),
            "value_at_risk_95": round(self.value_at_risk_95, 2),
            "max_drawdown_pct": round(self.max_drawdown_pct, 2),
            "max_drawdown_amount": round(self.max_drawdown_amount, 2),
            "max_consecutive_wins": self.max_consecutive_wins,
            "max_consecutive_losses": self.max_consecutive_losses,
            "longest_hold_days": self.longest_hold_days,
            "shortest_hold_days": self.shortest_hold_days,
            "average_hold_days": round(self.average_hold_days, 1),
        }


@dataclass
class CategoryStats:
    """P&L and win rate for one value of a grouping field."""

    name: str
    total_pnl: float = 0.0
    trades: int = 0
    wins: int = 0
    win_rate: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class MonthBucket:
    """P&L and win rate for one exit month. Label is display-only; sort on year/month."""

    name: str  # "Jan 2024"
    year: int
    month: int  # 0-11
    total_pnl: float = 0.0
    trades: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class TradeDistribution:
    """Trade counts by instrument type, direction, status and result."""

    instrument_type: dict[str, int] = field(default_factory=dict)
    direction: dict[str, int] = field(default_factory=dict)
    status: dict[str, int] = field(default_factory=dict)
    results: dict[str, int] = field(default_factory=lambda: {"winning": 0, "losing": 0})

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class EquityPoint:
    """One closed trade on the cumulative P&L curve."""

    date: date
    pnl: float
    cumulative_pnl: float
    trade_id: int | str | None = None

    def to_dict(self) -> dict:
        d = asdict(self)
        d["date"] = self.date.isoformat()
        return d


@dataclass
class WinRatePoint:
    """Running win rate after the n-th closed trade."""

    trade: int
    date: date | None
    win_rate: float
    total_trades: int
    wins: int

    def to_dict(self) -> dict:
        d = asdict(self)
        d["date"] = self.date.isoformat() if self.date else None
        return d


@dataclass
class MonthCell:
    """One month of the yearly calendar grid."""

    pnl: float = 0.0
    win_rate: float = 0.0
    trades: int = 0
    wins: int = 0


@dataclass
class YearRow:
    """A year of the overview grid: twelve month cells (None = no trades)."""

    year: int
    months: list[MonthCell | None]
    total: MonthCell

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "months": [asdict(m) if m is not None else None for m in self.months],
            "total": asdict(self.total),
        }


@dataclass
class DayCell:
    """One calendar day of a month detail view."""

    day: int
    pnl: float = 0.0
    win_rate: float = 0.0
    trade_count: int = 0


@dataclass
class MonthSummary:
    total_pnl: float
    total_trades: int
    win_rate: float
    winning_trades: int
    losing_trades: int
    average_pnl: float


@dataclass
class MonthDetail:
    """Daily breakdown of a single month."""

    year: int
    month: int  # 0-11
    month_name: str  # "January 2024"
    daily_data: list[DayCell]
    summary: MonthSummary

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "month_name": self.month_name,
            "daily_data": [asdict(d) for d in self.daily_data],
            "summary": asdict(self.summary),
        }


@dataclass
class PeriodMetrics:
    """Performance over one reporting period (day, week, month, ...)."""

    period_start: date
    period_end: date
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: float = 0.0
    total_pnl: float = 0.0
    average_win: float = 0.0
    average_loss: float = 0.0
    largest_win: float = 0.0
    largest_loss: float = 0.0
    profit_factor: float = 0.0
    risk_reward_ratio: float = 0.0
    max_drawdown: float = 0.0
    average_trade_duration_hours: float = 0.0
    total_trading_time_hours: float = 0.0

    def to_dict(self) -> dict:
        d = asdict(self)
        d["period_start"] = self.period_start.isoformat()
        d["period_end"] = self.period_end.isoformat()
        return d


@dataclass
class OverallStats:
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: float = 0.0
    total_pnl: float = 0.0
    average_pnl: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class PerformanceReport:
    """Period series plus the current period and all-time figures."""

    period_type: str
    periods: list[PeriodMetrics] = field(default_factory=list)
    current_period: PeriodMetrics | None = None
    overall: OverallStats = field(default_factory=OverallStats)

    def to_dict(self) -> dict:
        return {
            "period_type": self.period_type,
            "performance_metrics": [p.to_dict() for p in self.periods],
            "current_period": self.current_period.to_dict() if self.current_period else None,
            "overall_stats": self.overall.to_dict(),
        }
