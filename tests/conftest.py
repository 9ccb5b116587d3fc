"""Shared test fixtures."""

from datetime import datetime

import pytest

from app.services.journal.records import TradeRecord
from app.services.journal.trade_calendar import JournalCalendar


def _make_trade(**kwargs) -> TradeRecord:
    """Closed winning EURUSD long unless told otherwise."""
    defaults = {
        "id": 1,
        "symbol": "EURUSD",
        "instrument_type": "forex",
        "direction": "long",
        "status": "closed",
        "entry_price": 1.1000,
        "entry_time": datetime(2024, 1, 2, 9, 0),
        "exit_price": 1.1050,
        "exit_time": datetime(2024, 1, 5, 15, 0),
        "pnl_amount": 100.0,
        "pnl_percentage": 0.45,
    }
    defaults.update(kwargs)
    return TradeRecord(**defaults)


@pytest.fixture
def make_trade():
    """Factory for test trades with sensible defaults."""
    return _make_trade


@pytest.fixture
def win_then_loss() -> list[TradeRecord]:
    """+100 on 5 Jan 2024 followed by -40 on 20 Jan 2024."""
    return [
        _make_trade(id=1, pnl_amount=100.0, exit_time=datetime(2024, 1, 5, 15, 0)),
        _make_trade(
            id=2,
            direction="short",
            pnl_amount=-40.0,
            entry_time=datetime(2024, 1, 18, 9, 0),
            exit_time=datetime(2024, 1, 20, 10, 0),
        ),
    ]


@pytest.fixture
def calendar() -> JournalCalendar:
    """Fresh calendar (and empty month cache) for each test."""
    return JournalCalendar(cache_size=8)
