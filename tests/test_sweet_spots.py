"""
Tests for sweet spot matching and annotation.
"""

from dataclasses import FrozenInstanceError

import pytest

from engine.models import RedemptionOption, RouteMatcher, RouteOption, TripRequest
from engine.sweet_spots import annotate, get_sweet_spot, match_route, match_sweet_spot


def flight(origin, destination, cabin):
    return TripRequest(origin=origin, destination=destination, depart_date="2026-11-01", cabin=cabin)


def option(program, transfer_from=None):
    return RedemptionOption(
        program=program,
        program_type="airline",
        points_required=90000,
        fees=600,
        cash_value=11160,
        user_balance=100000,
        has_enough_points=True,
        transfer_from=transfer_from,
    )


class TestRouteMatcher:
    """Tests for the shared route predicate."""

    def test_none_matches_anything(self):
        assert match_route(None, "JFK", "LHR") is True

    def test_multi_city_never_matches(self):
        assert match_route(RouteMatcher(multi_city=True), "JFK", "HND") is False

    def test_code_sets(self):
        route = RouteMatcher(origins=frozenset({"JFK", "LHR"}), destinations=frozenset({"HND"}))
        assert match_route(route, "LHR", "HND") is True
        assert match_route(route, "HND", "LHR") is False
        assert match_route(route, "JFK", "NRT") is False

    def test_empty_set_matches_any_airport(self):
        route = RouteMatcher(destinations=frozenset({"HKG"}))
        assert match_route(route, "ANY", "HKG") is True


class TestMatchSweetSpot:
    """Tests for match_sweet_spot over the built-in definitions."""

    def test_ana_via_virgin(self):
        spot = match_sweet_spot(flight("LHR", "HND", "business"))
        assert spot is not None
        assert spot.id == "ANA_PREMIUM_VS"
        assert spot.book_via == "Virgin Atlantic Flying Club"

    def test_cabin_must_match(self):
        assert match_sweet_spot(flight("LHR", "HND", "economy")) is None

    def test_cabin_case_insensitive(self):
        assert match_sweet_spot(flight("JFK", "NRT", "First")).id == "ANA_PREMIUM_VS"

    def test_cathay_via_alaska(self):
        assert match_sweet_spot(flight("BOS", "HKG", "business")).id == "CX_PREMIUM_AS"

    def test_route_outside_sets(self):
        assert match_sweet_spot(flight("HND", "LHR", "business")) is None
        assert match_sweet_spot(flight("JFK", "CDG", "first")) is None

    def test_hotel_luxury(self):
        trip = TripRequest(
            destination="TYO",
            depart_date="2026-11-01",
            return_date="2026-11-08",
            cabin="luxury",
            search_type="hotel",
        )
        assert match_sweet_spot(trip).id == "HYATT_LUXURY"

    def test_hotel_category_outside_list(self):
        trip = TripRequest(depart_date="2026-11-01", cabin="Category 2", search_type="hotel")
        assert match_sweet_spot(trip) is None

    def test_lookup_by_id(self):
        assert get_sweet_spot("ANA_RTW").route.multi_city is True
        assert get_sweet_spot("NOPE") is None

    def test_definitions_are_immutable(self):
        spot = get_sweet_spot("ANA_PREMIUM_VS")
        assert ("Business (West US / Europe)", "90,000 round-trip") in spot.points_required
        assert spot.route_options[0] == RouteOption("New York (JFK)", "Tokyo (HND/NRT)", "Boeing 777-300ER", "Daily")
        with pytest.raises(FrozenInstanceError):
            spot.route_options[0].aircraft = "Boeing 787-9"
        with pytest.raises(TypeError):
            spot.points_required[0] = ("Business", "1 pt")


class TestAnnotate:
    """Tests for annotate."""

    def test_flags_only_eligible_sources(self):
        """
        The ANA via Virgin spot lists Amex, Chase and Citi as sources.

        Expected: Chase -> Virgin is flagged; Capital One -> Virgin and a
        direct American booking are left alone.
        """
        spot = get_sweet_spot("ANA_PREMIUM_VS")
        chase = option("Virgin Atlantic Flying Club", "Chase Ultimate Rewards")
        capital_one = option("Virgin Atlantic Flying Club", "Capital One Miles")
        direct = option("American Airlines AAdvantage")
        options = [chase, capital_one, direct]

        flagged = annotate(options, spot)

        assert flagged == [chase]
        assert chase.is_sweet_spot is True
        assert chase.sweet_spot_details is spot
        assert f"Sweet spot: {spot.name}" in chase.notes
        assert capital_one.is_sweet_spot is False
        assert direct.sweet_spot_details is None
        assert options == [chase, capital_one, direct]

    def test_direct_booking_outside_sources(self):
        spot = get_sweet_spot("HYATT_LUXURY")
        hyatt = option("World of Hyatt")
        assert annotate([hyatt], spot) == []

    def test_annotate_twice_does_not_duplicate_notes(self):
        spot = get_sweet_spot("ANA_PREMIUM_VS")
        chase = option("Virgin Atlantic Flying Club", "Chase Ultimate Rewards")
        annotate([chase], spot)
        annotate([chase], spot)
        assert len(chase.notes) == 1

    def test_no_spot(self):
        assert annotate([option("Virgin Atlantic Flying Club")], None) == []
