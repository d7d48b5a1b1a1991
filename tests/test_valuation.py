"""
Tests for value-per-point, adjustments, ratings and the enhanced value breakdown.
"""

import math

import pytest

from engine.models import RedemptionOption
from engine.valuation import apply_adjustments, enhanced_value, rate_value, value_per_point


def option(program="World of Hyatt", program_type="hotel", cpp=2.3, transfer_from=None):
    return RedemptionOption(
        program=program,
        program_type=program_type,
        points_required=210000,
        fees=0,
        cash_value=4900,
        user_balance=300000,
        has_enough_points=True,
        transfer_from=transfer_from,
        cents_per_point=cpp,
    )


class TestValuePerPoint:
    """Tests for value_per_point."""

    def test_basic(self):
        # (800 - 100) / 30000 x 100 = 2.33
        assert value_per_point(700, 30000) == 2.3

    def test_non_positive_net_value_is_zero(self):
        assert value_per_point(0, 1000) == 0.0
        assert value_per_point(-250, 1000) == 0.0

    @pytest.mark.parametrize("net, points", [
        (100, 0),
        (100, -5),
        (math.nan, 1000),
        (math.inf, 1000),
        (100, math.inf),
        (None, 1000),
    ])
    def test_degenerate_inputs_are_none(self, net, points):
        assert value_per_point(net, points) is None


class TestAdjustments:
    """Tests for the ordered adjustment pipeline."""

    def test_no_adjustments(self):
        assert apply_adjustments(2.3) == 2.3

    def test_all_adjustments_stack(self):
        """
        Sweet spot, round trip and instant transfer multiply together.

        Expected: 2.0 x 1.2 x 1.05 x 1.05 = 2.646 -> 2.6
        """
        assert apply_adjustments(2.0, sweet_spot=True, round_trip=True, instant_transfer=True) == 2.6

    def test_single_adjustment(self):
        assert apply_adjustments(1.0, sweet_spot=True) == 1.2
        assert apply_adjustments(10.0, round_trip=True) == 10.5

    def test_zero_stays_zero(self):
        assert apply_adjustments(0.0, sweet_spot=True, round_trip=True, instant_transfer=True) == 0.0

    def test_unknown_stays_unknown(self):
        assert apply_adjustments(None, sweet_spot=True) is None

    def test_config_override(self):
        config = {"sweet_spot_multiplier": 2.0}
        assert apply_adjustments(1.5, sweet_spot=True, config=config) == 3.0


class TestRating:
    """Tests for rating buckets."""

    @pytest.mark.parametrize("cpp, rating", [
        (0, "poor"),
        (0.59, "poor"),
        (0.6, "average"),
        (0.99, "average"),
        (1.0, "good"),
        (1.49, "good"),
        (1.5, "great"),
        (2.49, "great"),
        (2.5, "excellent"),
        (15.5, "excellent"),
    ])
    def test_buckets(self, cpp, rating):
        assert rate_value(cpp) == rating

    @pytest.mark.parametrize("cpp", [None, -0.1, math.nan, math.inf])
    def test_unknown(self, cpp):
        assert rate_value(cpp) == "unknown"


class TestEnhancedValue:
    """Tests for the opportunity-cost breakdown."""

    def test_direct_hotel_option(self):
        # Hotel earning rate 0.1 x Hyatt adjustment 0.8 = 0.08
        breakdown = enhanced_value(option())

        assert breakdown["opportunity_cost"] == 0.08
        assert breakdown["true_cents_per_point"] == 2.2
        assert breakdown["rating"] == "great"

    def test_transfer_option_uses_card_cost(self):
        # Card earning rate 0.2 x Chase adjustment 1.5 = 0.3
        breakdown = enhanced_value(option(
            program="Virgin Atlantic Flying Club",
            program_type="airline",
            cpp=15.5,
            transfer_from="Chase Ultimate Rewards",
        ))

        assert breakdown["opportunity_cost"] == 0.3
        assert breakdown["true_cents_per_point"] == 15.2

    def test_never_negative(self):
        breakdown = enhanced_value(option(cpp=0.0))
        assert breakdown["true_cents_per_point"] == 0.0

    def test_unknown_value(self):
        breakdown = enhanced_value(option(cpp=None))
        assert breakdown["true_cents_per_point"] is None
        assert breakdown["rating"] == "unknown"
