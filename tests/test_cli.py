"""
Tests for the CSV program store and CLI commands.
"""

from argparse import Namespace
from datetime import date
from unittest.mock import MagicMock, patch

import pytest

import cli
from engine.models import Program


@pytest.fixture(autouse=True)
def csv_path(tmp_path, monkeypatch):
    path = tmp_path / "programs.csv"
    monkeypatch.setattr(cli, "CSV_PATH", path)
    return path


def trip_args(**overrides):
    values = dict(
        origin="LHR",
        destination="HND",
        depart="2026-11-01",
        return_date="2026-11-15",
        cabin="business",
        passengers=1,
        type="flight",
    )
    values.update(overrides)
    return Namespace(**values)


class TestProgramStore:
    """Tests for the CSV program store."""

    def test_missing_file_is_empty(self):
        assert cli.load_programs() == []

    def test_save_and_load(self):
        programs = [
            Program("Chase Ultimate Rewards", "card", balance=100000),
            Program("World of Hyatt", "hotel", balance=40000, expiry=date(2027, 3, 1)),
        ]

        cli.save_programs(programs)

        assert cli.load_programs() == programs

    def test_add_program_replaces_same_name(self, capsys):
        cli.cmd_add_program(Namespace(name="Chase Ultimate Rewards", type="card", balance=1000, expiry=None))
        cli.cmd_add_program(Namespace(name="Chase Ultimate Rewards", type="card", balance=2000, expiry=None))

        programs = cli.load_programs()
        assert [(p.name, p.balance) for p in programs] == [("Chase Ultimate Rewards", 2000)]
        assert "Program updated: Chase Ultimate Rewards" in capsys.readouterr().out

    def test_add_program_invalid_type_exits(self):
        with pytest.raises(SystemExit):
            cli.cmd_add_program(Namespace(name="X", type="bank", balance=1, expiry=None))

    def test_remove_unknown_program_exits(self):
        with pytest.raises(SystemExit):
            cli.cmd_remove_program(Namespace(name="Nobody"))


class TestSearch:
    """Tests for the search command."""

    def test_search_prints_ranked_options(self, capsys):
        """
        LHR-HND business round trip with Chase points on file.

        Expected: Virgin Atlantic via Chase listed first with booking steps.
        """
        # Arrange
        cli.save_programs([Program("Chase Ultimate Rewards", "card", balance=100000)])

        # Act
        cli.cmd_search(trip_args())

        # Assert
        out = capsys.readouterr().out
        assert "1. Virgin Atlantic Flying Club via Chase Ultimate Rewards [SWEET SPOT]" in out
        assert "90,000 pts + $600 fees" in out
        assert "--- How to book ---" in out

    def test_search_without_programs(self, capsys):
        cli.cmd_search(trip_args())
        assert "Please add your loyalty program accounts" in capsys.readouterr().out

    def test_bad_date_exits(self):
        with pytest.raises(SystemExit):
            cli.cmd_search(trip_args(depart="11/01/2026"))


class TestInsight:
    """Tests for the insight command."""

    def test_posts_query_and_programs(self, capsys):
        cli.save_programs([Program("Chase Ultimate Rewards", "card", balance=100000)])
        response = MagicMock(status_code=200)
        response.json.return_value = {"summary": "Book ANA via Virgin.", "is_fallback": False}

        with patch("cli.requests.post", return_value=response) as mock_post:
            cli.cmd_insight(trip_args(url="http://api.test/api/get-ai-reasoning", timeout=5))

        payload = mock_post.call_args.kwargs["json"]
        assert payload["query"]["origin"] == "LHR"
        assert payload["query"]["return_date"] == "2026-11-15"
        assert payload["programs"][0]["balance"] == 100000
        assert "Book ANA via Virgin." in capsys.readouterr().out

    def test_error_response_exits(self):
        response = MagicMock(status_code=429)
        response.json.return_value = {"error": {"code": "RATE_LIMITED", "message": "Too many"}}

        with patch("cli.requests.post", return_value=response):
            with pytest.raises(SystemExit):
                cli.cmd_insight(trip_args(url="http://api.test", timeout=5))
