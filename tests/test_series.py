"""Tests for the per-trade chart series."""

from datetime import date, datetime, timezone

import pytest

from app.services.journal.series import equity_curve, running_win_rate


class TestEquityCurve:
    def test_cumulative_in_exit_order(self, make_trade):
        trades = [
            make_trade(id=1, exit_time=datetime(2024, 1, 20), pnl_amount=-40.0),
            make_trade(id=2, exit_time=datetime(2024, 1, 5), pnl_amount=100.0),
            make_trade(id=3, exit_time=datetime(2024, 2, 1), pnl_amount=15.5),
        ]
        curve = equity_curve(trades)
        assert [p.trade_id for p in curve] == [2, 1, 3]
        assert [p.cumulative_pnl for p in curve] == pytest.approx([100, 60, 75.5])
        assert curve[0].date == date(2024, 1, 5)

    def test_last_point_equals_total(self, win_then_loss):
        assert equity_curve(win_then_loss)[-1].cumulative_pnl == 60

    def test_skips_open_unpriced_and_untimed(self, make_trade):
        trades = [
            make_trade(id=1, status="open", pnl_amount=None, exit_time=None),
            make_trade(id=2, pnl_amount=None),
            make_trade(id=3, exit_time=None),
            make_trade(id=4, pnl_amount=25.0),
        ]
        assert [p.trade_id for p in equity_curve(trades)] == [4]

    def test_mixed_naive_and_aware_exit_times(self, make_trade):
        trades = [
            make_trade(id=1, exit_time=datetime(2024, 1, 5, 12, tzinfo=timezone.utc)),
            make_trade(id=2, exit_time=datetime(2024, 1, 5, 9)),
        ]
        assert [p.trade_id for p in equity_curve(trades)] == [2, 1]

    def test_to_dict(self, win_then_loss):
        assert equity_curve(win_then_loss)[1].to_dict() == {
            "date": "2024-01-20",
            "pnl": -40.0,
            "cumulative_pnl": 60.0,
            "trade_id": 2,
        }

    def test_empty(self):
        assert equity_curve([]) == []


class TestRunningWinRate:
    def test_running_rate(self, make_trade):
        trades = [
            make_trade(id=1, exit_time=datetime(2024, 1, 1), pnl_amount=10.0),
            make_trade(id=2, exit_time=datetime(2024, 1, 2), pnl_amount=-5.0),
            make_trade(id=3, exit_time=datetime(2024, 1, 3), pnl_amount=0.0),
            make_trade(id=4, exit_time=datetime(2024, 1, 4), pnl_amount=7.0),
        ]
        series = running_win_rate(trades)
        assert [p.trade for p in series] == [1, 2, 3, 4]
        assert [p.wins for p in series] == [1, 1, 1, 2]
        assert [p.win_rate for p in series] == [100.0, 50.0, 33.33, 50.0]
        assert series[-1].total_trades == 4

    def test_sorted_by_exit(self, make_trade):
        trades = [
            make_trade(id=1, exit_time=datetime(2024, 1, 9), pnl_amount=10.0),
            make_trade(id=2, exit_time=datetime(2024, 1, 2), pnl_amount=-5.0),
        ]
        assert [p.win_rate for p in running_win_rate(trades)] == [0.0, 50.0]

    def test_trades_without_pnl_skipped(self, make_trade):
        trades = [make_trade(id=1, pnl_amount=None), make_trade(id=2, status="open", pnl_amount=None)]
        assert running_win_rate(trades) == []

    def test_to_dict(self, win_then_loss):
        assert running_win_rate(win_then_loss)[0].to_dict() == {
            "trade": 1,
            "date": "2024-01-05",
            "win_rate": 100.0,
            "total_trades": 1,
            "wins": 1,
        }
