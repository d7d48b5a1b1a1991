"""
Tests for award chart lookups and the points/fee heuristics.
"""

from engine import awards
from engine.awards import estimate_fees, estimate_points_required, hotel_points_per_night, resolve_award
from engine.models import TripRequest
from engine.reference import ReferenceData


def flight(origin, destination, cabin="economy", ret=None, passengers=1):
    return TripRequest(
        origin=origin,
        destination=destination,
        depart_date="2026-11-01",
        return_date=ret,
        cabin=cabin,
        passengers=passengers,
    )


def hotel(cabin, ret="2026-11-08", rooms=1):
    return TripRequest(
        destination="TYO",
        depart_date="2026-11-01",
        return_date=ret,
        cabin=cabin,
        passengers=rooms,
        search_type="hotel",
    )


class TestFlightCharts:
    """Tests for the flight chart path."""

    def test_round_trip_sums_both_legs(self):
        """
        Virgin Atlantic LHR-HND business round trip.

        Expected: 45,000 each way; fees 300 each way.
        """
        quote = resolve_award("Virgin Atlantic Flying Club", flight("LHR", "HND", "business", ret="2026-11-15"))

        assert quote.points == 90000
        assert quote.fees == 600
        assert quote.source == "chart"

    def test_one_way(self):
        quote = resolve_award("American Airlines AAdvantage", flight("JFK", "LHR"))
        assert quote.points == 30000
        assert quote.fees == 100

    def test_reverse_route_key(self):
        # Only JFK-FRA is charted; FRA-JFK uses it as a reciprocal fare
        quote = resolve_award("United MileagePlus", flight("FRA", "JFK"))
        assert quote.points == 30000
        assert quote.fees == 50

    def test_return_leg_falls_back_to_outbound(self):
        quote = resolve_award("United MileagePlus", flight("JFK", "FRA", ret="2026-11-10"))
        assert quote.points == 60000
        assert quote.fees == 100

    def test_directional_fees(self):
        # LHR departures carry higher taxes than the inbound leg
        quote = resolve_award("Virgin Atlantic Flying Club", flight("JFK", "LHR", ret="2026-11-10"))
        assert quote.points == 15000 + 20000
        assert quote.fees == 150 + 350

    def test_passengers_scale_points_and_fees(self):
        quote = resolve_award("American Airlines AAdvantage", flight("JFK", "LHR", passengers=3))
        assert quote.points == 90000
        assert quote.fees == 300

    def test_zero_fee_uses_fee_heuristic(self):
        """
        Delta JFK-CDG has a chart entry but no fee table.

        Expected: NA-EU distance 4500 mi -> $40 per passenger per direction.
        """
        quote = resolve_award("Delta SkyMiles", flight("JFK", "CDG"))
        assert quote.points == 30000
        assert quote.fees == 40

    def test_minimum_fee_synthesized(self):
        """
        Fee heuristic configured to zero while the trip has retail value.

        Expected: $25 per passenger per direction.
        """
        reference = ReferenceData(
            award_charts={"Test Air": {"AAA-BBB": {"economy": 10000}}},
            retail_values={"AAA-BBB": {"economy": 300}},
        )
        config = {**awards.DEFAULT_CONFIG, "base_fee": 0, "long_haul_fee": 0, "ultra_long_haul_fee": 0}

        quote = resolve_award("Test Air", flight("AAA", "BBB", ret="2026-11-10", passengers=2), reference, config)

        assert quote.points == 40000
        assert quote.fees == 100


class TestHeuristics:
    """Tests for the fallback chain when charts have no entry."""

    def test_unknown_program_still_priced(self):
        quote = resolve_award("Mystery Rewards Club", flight("JFK", "LHR"))

        assert quote.source == "heuristic"
        assert isinstance(quote.points, int)
        assert quote.points > 0
        # JFK-LHR: 3451 mi -> $40, plus $150 Heathrow surcharge
        assert quote.fees == 190

    def test_points_use_program_multiplier(self):
        """
        British Airways economy: 1.2 cpp x 0.7 multiplier on an $800 fare.
        """
        points = estimate_points_required("British Airways Executive Club", flight("JFK", "LHR"), 800)
        assert abs(points - round(80000 / 0.84)) <= 1

    def test_points_capped_by_value_floor(self):
        # A tiny multiplier would imply far more points than a 0.5 cpp floor allows
        reference = ReferenceData(program_value_multipliers={"Cheap Air": 0.1})
        points = estimate_points_required("Cheap Air", flight("JFK", "LHR"), 800, reference)
        assert points == round(80000 / 0.5)

    def test_no_retail_value_gives_none(self):
        assert estimate_points_required("Delta SkyMiles", flight("JFK", "LHR"), 0) is None

    def test_fee_multiplier_and_cap(self):
        # BA: (40 + 150) x 4.0 = 760, capped at half of the $800 fare
        assert estimate_fees("British Airways Executive Club", flight("JFK", "LHR")) == 400

    def test_fees_without_cap_when_no_retail(self):
        assert estimate_fees("British Airways Executive Club", flight("JFK", "LHR"), retail_value=0) == 760


class TestHotelAwards:
    """Tests for hotel award pricing."""

    def test_hyatt_luxury_week(self):
        """
        World of Hyatt, luxury (Category 7), 7 nights, 1 room.

        Expected: 30,000 x 7 with no fees.
        """
        quote = resolve_award("World of Hyatt", hotel("luxury"))
        assert quote.points == 210000
        assert quote.fees == 0

    def test_exact_category_and_rooms(self):
        quote = resolve_award("World of Hyatt", hotel("Category 3", ret="2026-11-03", rooms=2))
        assert quote.points == 12000 * 2 * 2

    def test_fifth_night_free(self):
        # Marriott average 80,000 per night; 5 nights charged as 4
        quote = resolve_award("Marriott Bonvoy", hotel("standard", ret="2026-11-06"))
        assert quote.points == 80000 * 4

    def test_missing_checkout_counts_one_night(self):
        quote = resolve_award("World of Hyatt", hotel("Category 1", ret=None))
        assert quote.points == 5000

    def test_unknown_category_without_average(self):
        assert hotel_points_per_night("World of Hyatt", "Treehouse") is None
        assert hotel_points_per_night("Marriott Bonvoy", "Treehouse") == 80000

    def test_uncharted_hotel_program_uses_heuristic(self):
        quote = resolve_award("Hilton Honors", hotel("luxury", ret="2026-11-03"))
        assert quote.source == "heuristic"
        assert quote.points > 0
        assert quote.fees == 0
