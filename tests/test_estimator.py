"""
Tests for distance and retail-value estimation.
"""

import pytest

from engine.estimator import distance_bucket, estimate_distance, estimate_retail_value, nightly_rate, nights_between
from engine.models import TripRequest


def flight(origin, destination, cabin="economy", depart="2026-11-01", ret=None, passengers=1):
    return TripRequest(
        origin=origin,
        destination=destination,
        depart_date=depart,
        return_date=ret,
        cabin=cabin,
        passengers=passengers,
    )


def hotel(cabin, depart="2026-11-01", ret="2026-11-08", rooms=1):
    return TripRequest(
        destination="TYO",
        depart_date=depart,
        return_date=ret,
        cabin=cabin,
        passengers=rooms,
        search_type="hotel",
    )


class TestDistance:
    """Tests for estimate_distance and distance_bucket."""

    def test_known_pair_either_direction(self):
        assert estimate_distance("JFK", "LHR") == 3451
        assert estimate_distance("LHR", "JFK") == 3451

    def test_region_pair_fallback(self):
        # MIA (NA) to CDG (EU) is not in the known-pairs table
        assert estimate_distance("MIA", "CDG") == 4500
        assert estimate_distance("SIN", "JFK") == 6500

    def test_same_region(self):
        assert estimate_distance("JFK", "ATL") == 1500
        assert estimate_distance("SYD", "MEL") == 500

    def test_unknown_airports(self):
        # Both unknown airports classify as 'Other'
        assert estimate_distance("XXX", "YYY") == 500
        # EU to Oceania has no pair constant
        assert estimate_distance("LHR", "SYD") == 3000

    @pytest.mark.parametrize("distance, bucket", [
        (0, "short"),
        (999, "short"),
        (1000, "medium"),
        (2999, "medium"),
        (3000, "long"),
        (5999, "long"),
        (6000, "ultraLong"),
        (9000, "ultraLong"),
    ])
    def test_bucket_boundaries(self, distance, bucket):
        assert distance_bucket(distance) == bucket


class TestFlightRetailValue:
    """Tests for flight retail value estimation."""

    def test_exact_route_one_way(self):
        """
        Known route and cabin, one-way, one passenger.

        Expected: table value unchanged.
        """
        assert estimate_retail_value(flight("JFK", "LHR")) == 800

    def test_exact_route_reverse_direction(self):
        assert estimate_retail_value(flight("HND", "LHR", cabin="business")) == 6200

    def test_round_trip_and_passengers(self):
        """
        Round trip applies the 1.8 factor, then passengers multiply.

        Expected: 3500 x 1.8 x 2 = 12600.
        """
        trip = flight("LHR", "JFK", cabin="business", ret="2026-11-10", passengers=2)
        assert estimate_retail_value(trip) == 12600

    def test_distance_heuristic(self):
        """
        Unknown route: MIA-CDG is 4500 mi (long), economy base 1000 x seasonal 1.2.
        """
        assert estimate_retail_value(flight("MIA", "CDG")) == 1200

    def test_cabin_is_case_insensitive(self):
        assert estimate_retail_value(flight("JFK", "LHR", cabin="Business")) == 3500

    def test_unknown_cabin_uses_economy_prices(self):
        # short haul economy: 200 x 1.2
        assert estimate_retail_value(flight("JFK", "ATL", cabin="lounge")) == round(500 * 1.2)

    def test_config_overrides_round_trip_factor(self):
        trip = flight("JFK", "LHR", ret="2026-11-10")
        assert estimate_retail_value(trip, config={"round_trip_factor": 2.0}) == 1600


class TestHotelRetailValue:
    """Tests for hotel retail value estimation."""

    def test_luxury_alias(self):
        # luxury -> Category 7 at $700/night, 7 nights
        assert estimate_retail_value(hotel("luxury")) == 4900

    def test_category_rooms_and_nights(self):
        trip = hotel("Category 2", ret="2026-11-04", rooms=2)
        assert estimate_retail_value(trip) == 150 * 3 * 2

    def test_unknown_category_uses_average(self):
        assert nightly_rate("Treehouse") == 400
        assert estimate_retail_value(hotel("Treehouse", ret="2026-11-02")) == 400

    def test_zero_nights_is_zero(self):
        trip = hotel("luxury", ret="2026-11-01")
        assert nights_between(trip) == 0
        assert estimate_retail_value(trip) == 0

    def test_missing_checkout_is_zero(self):
        assert estimate_retail_value(hotel("luxury", ret=None)) == 0
