"""
Tests for display formatting helpers.
"""

import math
from datetime import date, datetime

import pytest

from engine.formatting import (
    format_cents_per_point,
    format_cpp,
    format_currency,
    format_date,
    format_points,
    format_value_with_rating,
)


class TestCurrency:
    """Tests for format_currency."""

    def test_whole_dollars_by_default(self):
        assert format_currency(1234.5) == "$1,235"
        assert format_currency(0) == "$0"

    def test_show_cents(self):
        assert format_currency(1234.5, show_cents=True) == "$1,234.50"

    def test_fraction_digit_range(self):
        assert format_currency(12.5, minimum_fraction_digits=0, maximum_fraction_digits=2) == "$12.5"
        assert format_currency(12, minimum_fraction_digits=1, maximum_fraction_digits=2) == "$12.0"

    def test_negative(self):
        assert format_currency(-25) == "-$25"

    def test_other_currencies(self):
        assert format_currency(300, currency="GBP") == "£300"
        assert format_currency(1500, currency="sgd") == "S$1,500"
        assert format_currency(10, currency="CHF") == "CHF 10"

    @pytest.mark.parametrize("value", [None, math.nan, math.inf, "12"])
    def test_not_available(self, value):
        assert format_currency(value) == "N/A"


class TestPointsAndValue:
    """Tests for point and cents-per-point formatting."""

    def test_points(self):
        assert format_points(90000) == "90,000"
        assert format_points(1234.6) == "1,235"
        assert format_points(None) == "N/A"

    def test_cpp(self):
        assert format_cpp(2.333) == "2.3¢"
        assert format_cpp(2) == "2.0¢"
        assert format_cpp(math.inf) == "N/A"

    def test_cents_per_point(self):
        assert format_cents_per_point(1.25) == "1.3 cents per point"
        assert format_cents_per_point(None) == "N/A"

    def test_value_with_rating(self):
        assert format_value_with_rating(2.6) == {
            "formatted": "2.6¢/pt",
            "rating": "excellent",
            "description": "Excellent value",
        }
        assert format_value_with_rating(None)["rating"] == "unknown"
        assert format_value_with_rating(None)["formatted"] == "N/A"


class TestDates:
    """Tests for format_date."""

    def test_date_and_string(self):
        assert format_date(date(2026, 10, 17)) == "Oct 17, 2026"
        assert format_date("2026-11-01") == "Nov 1, 2026"
        assert format_date(datetime(2026, 11, 1, 23, 30)) == "Nov 1, 2026"

    def test_missing(self):
        assert format_date(None) == "N/A"
        assert format_date("") == "N/A"

    def test_invalid(self):
        assert format_date("not a date") == "Invalid date"
        assert format_date("2026-13-45") == "Invalid date"
