"""
Award data resolution.

Looks up points and fees for a program on a trip from the award charts and fee
tables, falling back to heuristics when a program, route or cabin is missing.
Missing data never raises; it only changes the quote's source to 'heuristic'.
"""

import logging
from collections.abc import Mapping
from typing import Optional

from engine.estimator import estimate_distance, estimate_retail_value, nights_between
from engine.models import AwardQuote, TripRequest
from engine.reference import ReferenceData, load_reference_data


logger = logging.getLogger(__name__)


DEFAULT_CONFIG = {
    # Points heuristic
    "minimum_cents_per_point": 0.5,
    # Fee heuristic, per passenger per direction
    "base_fee": 20,
    "long_haul_fee": 40,
    "ultra_long_haul_fee": 60,
    "long_haul_fee_min_distance": 3000,
    "ultra_long_haul_fee_min_distance": 6000,
    "max_fee_share_of_retail": 0.5,
    # Synthesized when a chart fee and the heuristic both come out at zero
    "minimum_fee_per_direction": 25,
    "free_night_every": 5,
}


def resolve_award(program_name: str, trip: TripRequest, reference: ReferenceData = None,
                  config: dict = None, retail_value: float = None) -> AwardQuote:
    """
    Points and fees required to book the trip with a program.

    Args:
        program_name: Program the award is booked with
        trip: TripRequest to price
        reference: Optional ReferenceData (defaults to the built-in tables)
        config: Optional config dict (uses defaults if not provided)
        retail_value: Precomputed retail value for the trip, if already known

    Returns:
        AwardQuote with total points and fees for all passengers and directions
    """
    reference = reference or load_reference_data()
    if config is None:
        config = DEFAULT_CONFIG
    if retail_value is None:
        retail_value = estimate_retail_value(trip, reference)

    if trip.search_type == "hotel":
        return _resolve_hotel(program_name, trip, reference, config, retail_value)
    return _resolve_flight(program_name, trip, reference, config, retail_value)


def _resolve_hotel(program_name, trip, reference, config, retail_value) -> AwardQuote:
    nights = max(1, nights_between(trip))
    per_night = hotel_points_per_night(program_name, trip.cabin, reference)

    if per_night is None:
        logger.debug("No award chart for hotel program %s; using points heuristic", program_name)
        points = estimate_points_required(program_name, trip, retail_value, reference, config)
        return AwardQuote(points=points, fees=0, source="heuristic")

    payable_nights = nights
    if program_name in reference.fifth_night_free_programs:
        payable_nights = nights - nights // config.get("free_night_every", 5)

    flat_fee = reference.fee_tables.get(program_name, 0)
    if not isinstance(flat_fee, (int, float)):
        flat_fee = 0

    return AwardQuote(
        points=per_night * trip.passengers * payable_nights,
        fees=flat_fee * trip.passengers * nights,
    )


def hotel_points_per_night(program_name: str, category: str, reference: ReferenceData = None) -> Optional[int]:
    """
    Per-night points for a hotel category: exact key, then tier alias, then 'Average'.

    Returns None when the program has no chart or no matching key.
    """
    reference = reference or load_reference_data()
    chart = reference.award_charts.get(program_name)
    if not isinstance(chart, Mapping):
        return None

    keys = [category]
    alias = reference.hotel_category_aliases.get((category or "").lower())
    if alias:
        keys.append(alias)
    keys.append("Average")

    for key in keys:
        value = chart.get(key)
        if isinstance(value, (int, float)) and value > 0:
            return value
    return None


def _leg_lookup(table, program_name: str, route_key: str, cabin: str):
    by_route = table.get(program_name)
    if not isinstance(by_route, Mapping):
        return None
    by_cabin = by_route.get(route_key)
    if not isinstance(by_cabin, Mapping):
        return None
    return by_cabin.get(cabin)


def _resolve_flight(program_name, trip, reference, config, retail_value) -> AwardQuote:
    cabin = trip.cabin_key
    outbound_key = f"{trip.origin}-{trip.destination}"
    return_key = f"{trip.destination}-{trip.origin}"

    # Outbound: exact route, then the reverse route as a reciprocal fare
    leg_key = outbound_key
    outbound_points = _leg_lookup(reference.award_charts, program_name, outbound_key, cabin)
    if outbound_points is None:
        leg_key = return_key
        outbound_points = _leg_lookup(reference.award_charts, program_name, return_key, cabin)

    if outbound_points is None:
        logger.debug("No award chart entry for %s on %s (%s); using heuristics", program_name, outbound_key, cabin)
        return AwardQuote(
            points=estimate_points_required(program_name, trip, retail_value, reference, config),
            fees=estimate_fees(program_name, trip, reference, config, retail_value),
            source="heuristic",
        )

    outbound_fees = _leg_lookup(reference.fee_tables, program_name, leg_key, cabin) or 0
    points = outbound_points * trip.passengers
    fees = outbound_fees * trip.passengers
    directions = 1

    if trip.is_round_trip:
        directions = 2
        return_points = _leg_lookup(reference.award_charts, program_name, return_key, cabin)
        return_fees = _leg_lookup(reference.fee_tables, program_name, return_key, cabin)
        points += (return_points if return_points is not None else outbound_points) * trip.passengers
        fees += (return_fees if return_fees is not None else outbound_fees) * trip.passengers

    if fees == 0:
        fees = estimate_fees(program_name, trip, reference, config, retail_value)
        if fees == 0 and retail_value > 0:
            fees = config.get("minimum_fee_per_direction", 25) * trip.passengers * directions

    return AwardQuote(points=int(points), fees=round(fees))


def estimate_points_required(program_name: str, trip: TripRequest, retail_value: float,
                             reference: ReferenceData = None, config: dict = None) -> Optional[int]:
    """
    Estimate total points for a trip from its retail value.

    points = retail value in cents / (base cpp for program type and cabin x program multiplier),
    never more than the points implied by the minimum cents-per-point floor.

    Returns:
        Total points for the trip, or None when there is no retail value to anchor on
    """
    reference = reference or load_reference_data()
    if config is None:
        config = DEFAULT_CONFIG

    if not retail_value or retail_value <= 0:
        return None

    program_type = reference.program_type(program_name)
    base_values = reference.base_value_per_point.get(program_type)
    if isinstance(base_values, Mapping):
        fallback = "standard" if program_type == "hotel" else "economy"
        base_cpp = base_values.get(trip.cabin_key) or base_values.get(fallback) or 1.0
    else:
        base_cpp = base_values or 1.0

    adjusted_cpp = base_cpp * reference.program_value_multipliers.get(program_name, 1.0)
    points = round(retail_value * 100 / adjusted_cpp)

    floor_cpp = config.get("minimum_cents_per_point", 0.5)
    return min(points, round(retail_value * 100 / floor_cpp))


def estimate_fees(program_name: str, trip: TripRequest, reference: ReferenceData = None,
                  config: dict = None, retail_value: float = None) -> float:
    """
    Estimate total award taxes and fees for all passengers and directions.

    Per passenger per direction the fee grows with distance, picks up airport
    surcharges, and is scaled by the program's fee multiplier. The total is
    capped at a share of the retail value when that value is positive.
    """
    reference = reference or load_reference_data()
    if config is None:
        config = DEFAULT_CONFIG
    if retail_value is None:
        retail_value = estimate_retail_value(trip, reference)

    distance = estimate_distance(trip.origin, trip.destination, reference)
    fee = config.get("base_fee", 20)
    if distance > config.get("long_haul_fee_min_distance", 3000):
        fee = config.get("long_haul_fee", 40)
    if distance > config.get("ultra_long_haul_fee_min_distance", 6000):
        fee = config.get("ultra_long_haul_fee", 60)

    for airport in (trip.origin, trip.destination):
        fee += reference.airport_surcharges.get(airport, 0)

    directions = 2 if trip.is_round_trip else 1
    total = fee * reference.program_fee_multipliers.get(program_name, 1.0) * trip.passengers * directions

    if retail_value > 0:
        total = min(total, retail_value * config.get("max_fee_share_of_retail", 0.5))

    return round(total)
