"""Tests for field and month breakdowns."""

from datetime import datetime

import pytest

from app.services.journal.aggregation import aggregate_by, aggregate_by_month, trade_distribution
from app.services.journal.filters import filter_closed


class TestAggregateBy:
    def test_direction_partitions_closed_trades(self, make_trade):
        trades = [
            make_trade(id=1, direction="long", pnl_amount=100.0),
            make_trade(id=2, direction="short", pnl_amount=-40.0),
            make_trade(id=3, direction="long", pnl_amount=-10.0),
            make_trade(id=4, direction=None, pnl_amount=5.0),
            make_trade(id=5, direction="short", status="open", pnl_amount=None),
        ]
        groups = aggregate_by(trades, "direction")
        with_direction = [t for t in filter_closed(trades) if t.direction]
        assert sum(g.trades for g in groups) == len(with_direction)

    def test_totals_and_win_rate(self, make_trade):
        trades = [
            make_trade(id=1, instrument_type="forex", pnl_amount=100.0),
            make_trade(id=2, instrument_type="crypto", pnl_amount=-40.0),
            make_trade(id=3, instrument_type="forex", pnl_amount=-20.0),
            make_trade(id=4, instrument_type="forex", pnl_amount=30.0),
        ]
        groups = {g.name: g for g in aggregate_by(trades, "instrument_type")}
        assert groups["forex"].total_pnl == pytest.approx(110)
        assert groups["forex"].trades == 3
        assert groups["forex"].win_rate == pytest.approx(200 / 3)
        assert groups["crypto"].win_rate == 0

    def test_first_occurrence_order(self, make_trade):
        trades = [
            make_trade(id=1, instrument_type="stock"),
            make_trade(id=2, instrument_type="crypto"),
            make_trade(id=3, instrument_type="stock"),
            make_trade(id=4, instrument_type="forex"),
        ]
        assert [g.name for g in aggregate_by(trades, "instrument_type")] == ["stock", "crypto", "forex"]

    def test_empty_values_skipped(self, make_trade):
        trades = [make_trade(id=1, instrument_type=""), make_trade(id=2, instrument_type=None)]
        assert aggregate_by(trades, "instrument_type") == []

    def test_unknown_field_returns_empty(self, make_trade):
        assert aggregate_by([make_trade()], "not_a_field") == []

    def test_open_trades_excluded(self, make_trade):
        trades = [make_trade(status="open", pnl_amount=None)]
        assert aggregate_by(trades, "direction") == []


class TestAggregateByMonth:
    def test_sorted_by_year_and_month(self, make_trade):
        trades = [
            make_trade(id=1, exit_time=datetime(2024, 2, 10), pnl_amount=10.0),
            make_trade(id=2, exit_time=datetime(2023, 12, 31), pnl_amount=-5.0),
            make_trade(id=3, exit_time=datetime(2024, 1, 15), pnl_amount=20.0),
            make_trade(id=4, exit_time=datetime(2024, 2, 11), pnl_amount=30.0),
        ]
        buckets = aggregate_by_month(trades)
        assert [b.name for b in buckets] == ["Dec 2023", "Jan 2024", "Feb 2024"]
        assert [(b.year, b.month) for b in buckets] == [(2023, 11), (2024, 0), (2024, 1)]
        assert buckets[2].total_pnl == 40
        assert buckets[2].trades == 2

    def test_trades_without_exit_time_skipped(self, make_trade):
        trades = [make_trade(exit_time=None)]
        assert aggregate_by_month(trades) == []

    def test_to_dict(self, make_trade):
        bucket = aggregate_by_month([make_trade(exit_time=datetime(2024, 1, 5), pnl_amount=60.0)])[0]
        assert bucket.to_dict() == {
            "name": "Jan 2024",
            "year": 2024,
            "month": 0,
            "total_pnl": 60.0,
            "trades": 1,
            "wins": 1,
            "losses": 0,
            "win_rate": 100.0,
        }

    def test_wins_losses_and_win_rate(self, make_trade):
        trades = [
            make_trade(id=1, exit_time=datetime(2024, 3, 1), pnl_amount=50.0),
            make_trade(id=2, exit_time=datetime(2024, 3, 2), pnl_amount=-20.0),
            make_trade(id=3, exit_time=datetime(2024, 3, 3), pnl_amount=0.0),
            make_trade(id=4, exit_time=datetime(2024, 3, 4), pnl_amount=10.0),
        ]
        bucket = aggregate_by_month(trades)[0]
        assert (bucket.wins, bucket.losses, bucket.trades) == (2, 2, 4)
        assert bucket.win_rate == 50


class TestTradeDistribution:
    def test_counts_every_status(self, make_trade):
        trades = [
            make_trade(id=1, instrument_type="forex", direction="long", pnl_amount=100.0),
            make_trade(id=2, instrument_type="crypto", direction="short", pnl_amount=-40.0),
            make_trade(id=3, instrument_type="forex", direction="long", status="open", pnl_amount=None),
            make_trade(id=4, instrument_type="stock", direction="short", status="cancelled", pnl_amount=None),
        ]
        dist = trade_distribution(trades)
        assert dist.instrument_type == {"forex": 2, "crypto": 1, "stock": 1}
        assert dist.direction == {"long": 2, "short": 2}
        assert dist.status == {"closed": 2, "open": 1, "cancelled": 1}

    def test_results_count_closed_only(self, make_trade):
        trades = [
            make_trade(id=1, pnl_amount=100.0),
            make_trade(id=2, pnl_amount=0.0),
            make_trade(id=3, status="open", pnl_amount=None),
        ]
        assert trade_distribution(trades).results == {"winning": 1, "losing": 1}

    def test_missing_values_grouped_as_unknown(self, make_trade):
        dist = trade_distribution([make_trade(instrument_type=None, direction="")])
        assert dist.instrument_type == {"unknown": 1}
        assert dist.direction == {"unknown": 1}

    def test_empty(self):
        assert trade_distribution([]).to_dict() == {
            "instrument_type": {},
            "direction": {},
            "status": {},
            "results": {"winning": 0, "losing": 0},
        }
