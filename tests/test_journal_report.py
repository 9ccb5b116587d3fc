"""Tests for the journal report CLI."""

import json
import sys
from unittest.mock import patch

import pytest

from scripts import journal_report

TRADES = [
    {
        "id": 1, "symbol": "EURUSD", "instrument_type": "forex", "direction": "long",
        "status": "closed", "entry_price": 1.1, "entry_time": "2024-01-02T09:00:00",
        "exit_price": 1.105, "exit_time": "2024-01-05T15:00:00", "pnl_amount": 100,
    },
    {
        "id": 2, "symbol": "BTCUSD", "instrument_type": "crypto", "direction": "short",
        "status": "closed", "entry_price": 42000, "entry_time": "2024-01-18T09:00:00",
        "exit_price": 42500, "exit_time": "2024-01-20T10:00:00", "pnl_amount": -40,
    },
]


@pytest.fixture
def export(tmp_path):
    path = tmp_path / "trades.json"
    path.write_text(json.dumps(TRADES))
    return str(path)


def run(capsys, *argv) -> str:
    with patch.object(sys, "argv", ["journal_report.py", *argv]):
        journal_report.main()
    return capsys.readouterr().out


class TestJsonOutput:
    def test_stats_only(self, capsys, export):
        output = json.loads(run(capsys, export, "--json"))
        assert set(output) == {"stats"}
        assert output["stats"]["total_pnl"] == 60

    def test_requested_sections_included(self, capsys, export):
        output = json.loads(
            run(capsys, export, "--json", "--breakdown", "direction", "--calendar", "--month", "2024-01")
        )
        assert [g["name"] for g in output["breakdown"]] == ["long", "short"]
        assert output["calendar"][0]["year"] == 2024
        assert output["month"]["month_name"] == "January 2024"
        assert output["month"]["summary"]["total_pnl"] == 60

    def test_month_breakdown(self, capsys, export):
        output = json.loads(run(capsys, export, "--json", "--breakdown", "month"))
        assert output["breakdown"][0]["name"] == "Jan 2024"

    def test_empty_month_is_null(self, capsys, export):
        output = json.loads(run(capsys, export, "--json", "--month", "2024-02"))
        assert output["month"] is None


class TestConsoleOutput:
    def test_month_uses_calendar_month_number(self, capsys, export):
        out = run(capsys, export, "--month", "2024-01")
        assert "January 2024" in out

    def test_bad_month_exits(self, capsys, export):
        with pytest.raises(SystemExit):
            run(capsys, export, "--month", "January")
