"""Trade journal record, the read-side view of a journal trade.

Rows arrive from the journal REST API or a CSV export with loosely typed
values (decimal strings, nulls, ISO timestamps). Everything is normalised
here so the analytics functions can assume clean floats and datetimes.
"""

import logging
import math
from dataclasses import dataclass, fields
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

logger = logging.getLogger(__name__)

STATUS_OPEN = "open"
STATUS_CLOSED = "closed"
STATUS_CANCELLED = "cancelled"


def safe_number(value: Any) -> float:
    """Coerce a numeric-ish value to a finite float. Anything else is 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return 0.0
            num = float(Decimal(value))
        else:
            num = float(value)
    except (TypeError, ValueError, InvalidOperation):
        return 0.0
    if math.isnan(num) or math.isinf(num):
        return 0.0
    return num


def _optional_number(value: Any) -> float | None:
    """Like safe_number, but absent values stay absent."""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return safe_number(value)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a datetime, date or ISO-8601 string. Unparseable input -> None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            logger.debug("Unparseable timestamp %r", value)
            return None
    # pandas.Timestamp and friends
    to_pydatetime = getattr(value, "to_pydatetime", None)
    if to_pydatetime is not None:
        try:
            return to_pydatetime()
        except (TypeError, ValueError):
            return None
    return None


def is_winning_pnl(pnl: float) -> bool:
    """Winning means strictly positive P&L. Breakeven is not a win."""
    return pnl > 0


@dataclass
class TradeRecord:
    """A journal trade. Exit fields are None until the trade is closed."""

    id: int | str | None = None
    symbol: str = ""
    instrument_type: str | None = None  # stock, forex, crypto, commodity, index, option, future
    direction: str | None = None  # long, short
    status: str = STATUS_OPEN  # open, closed, cancelled
    entry_price: float = 0.0
    entry_time: datetime | None = None
    exit_price: float | None = None
    exit_time: datetime | None = None
    pnl_amount: float | None = None
    pnl_percentage: float | None = None
    is_winning: bool | None = None
    position_size: float | None = None
    strategy_id: int | None = None
    category_id: int | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        # is_winning is derived from the P&L whenever one is recorded
        if self.pnl_amount is not None:
            self.is_winning = is_winning_pnl(safe_number(self.pnl_amount))
        else:
            self.is_winning = None

    @property
    def pnl(self) -> float:
        return safe_number(self.pnl_amount)

    @property
    def is_closed(self) -> bool:
        return self.status == STATUS_CLOSED

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TradeRecord":
        """Build a record from an API or CSV row, ignoring unknown keys."""
        status = data.get("status") or STATUS_OPEN
        return cls(
            id=_clean_scalar(data.get("id")),
            symbol=str(_clean_scalar(data.get("symbol")) or ""),
            instrument_type=_clean_text(data.get("instrument_type")),
            direction=_clean_text(data.get("direction")),
            status=str(status).strip().lower(),
            entry_price=safe_number(data.get("entry_price")),
            entry_time=parse_timestamp(_clean_scalar(data.get("entry_time"))),
            exit_price=_optional_number(data.get("exit_price")),
            exit_time=parse_timestamp(_clean_scalar(data.get("exit_time"))),
            pnl_amount=_optional_number(data.get("pnl_amount")),
            pnl_percentage=_optional_number(data.get("pnl_percentage")),
            position_size=_optional_number(data.get("position_size")),
            strategy_id=_clean_scalar(data.get("strategy_id")),
            category_id=_clean_scalar(data.get("category_id")),
            notes=_clean_text(data.get("notes")),
        )

    def to_dict(self) -> dict:
        """Serialize to a JSON-safe dict."""
        d = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            d[f.name] = value
        return d


def _clean_scalar(value: Any) -> Any:
    """NaN cells (pandas) become None."""
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def _clean_text(value: Any) -> str | None:
    value = _clean_scalar(value)
    if value is None:
        return None
    text = str(value).strip()
    return text or None
