"""
Distance and retail-value estimation.

Retail value is the estimated cash price of the whole trip (all passengers,
both directions) and is the basis for every value-per-point figure.
"""

import logging
from typing import Optional

from engine.models import TripRequest
from engine.reference import ReferenceData, load_reference_data


logger = logging.getLogger(__name__)


DEFAULT_CONFIG = {
    "seasonal_factor": 1.2,
    "round_trip_factor": 1.8,
    "default_nightly_rate": 400,
    # Distance bucket upper bounds in miles
    "short_haul_max": 1000,
    "medium_haul_max": 3000,
    "long_haul_max": 6000,
}


def nights_between(trip: TripRequest) -> int:
    """Calendar nights between check-in and check-out (0 when either is missing)."""
    if trip.depart_date is None or trip.return_date is None:
        return 0
    return (trip.return_date - trip.depart_date).days


def estimate_distance(origin: str, destination: str, reference: ReferenceData = None) -> int:
    """
    Estimate flight distance in miles.

    Known pairs are looked up in either direction; otherwise both airports are
    classified into regions and a fixed region-pair mileage is returned.
    """
    reference = reference or load_reference_data()
    origin = (origin or "").upper()
    destination = (destination or "").upper()

    known = reference.common_distances.get(f"{origin}-{destination}")
    if known is None:
        known = reference.common_distances.get(f"{destination}-{origin}")
    if known is not None:
        return known

    origin_region = reference.region_of(origin)
    destination_region = reference.region_of(destination)

    if origin_region == destination_region:
        return reference.intra_region_distances.get(origin_region, 500)

    return reference.inter_region_distances.get(frozenset({origin_region, destination_region}), 3000)


def distance_bucket(distance: float, config: dict = None) -> str:
    """Classify a distance as 'short', 'medium', 'long' or 'ultraLong'."""
    if config is None:
        config = DEFAULT_CONFIG

    if distance < config.get("short_haul_max", 1000):
        return "short"
    if distance < config.get("medium_haul_max", 3000):
        return "medium"
    if distance < config.get("long_haul_max", 6000):
        return "long"
    return "ultraLong"


def nightly_rate(category: str, reference: ReferenceData = None, config: dict = None) -> float:
    """
    Cash price of one room night for a hotel category key.

    The key is tried as given, then through the tier aliases, then the
    'Average' rate.
    """
    reference = reference or load_reference_data()
    if config is None:
        config = DEFAULT_CONFIG

    rates = reference.hotel_nightly_rates
    for key in _category_keys(category, reference):
        if key in rates:
            return rates[key]
    return config.get("default_nightly_rate", 400)


def _category_keys(category: str, reference: ReferenceData) -> list:
    keys = [category]
    alias = reference.hotel_category_aliases.get((category or "").lower())
    if alias:
        keys.append(alias)
    keys.append("Average")
    return keys


def route_retail_value(origin: str, destination: str, cabin: str,
                       reference: ReferenceData = None) -> Optional[float]:
    """Exact per-passenger one-way retail value for a route, checking both directions."""
    reference = reference or load_reference_data()
    for key in (f"{origin}-{destination}", f"{destination}-{origin}"):
        by_cabin = reference.retail_values.get(key)
        if by_cabin is not None and by_cabin.get(cabin) is not None:
            return by_cabin[cabin]
    return None


def estimate_retail_value(trip: TripRequest, reference: ReferenceData = None, config: dict = None) -> float:
    """
    Estimate the total cash value of a trip for all passengers.

    Hotel: nightly rate x rooms x nights.
    Flight: known route value, else distance-bucket base price x seasonal factor;
    then x round-trip factor (when round trip) x passengers.

    Returns:
        Whole currency units; 0 when no value can be estimated
    """
    reference = reference or load_reference_data()
    if config is None:
        config = DEFAULT_CONFIG

    if trip.search_type == "hotel":
        nights = nights_between(trip)
        if nights <= 0:
            return 0
        return round(nightly_rate(trip.cabin, reference, config) * trip.passengers * nights)

    cabin = trip.cabin_key
    value = route_retail_value(trip.origin, trip.destination, cabin, reference)

    if value is None:
        logger.debug("No retail value for %s-%s (%s); estimating from distance", trip.origin, trip.destination, cabin)
        prices = reference.base_price_ranges.get(cabin) or reference.base_price_ranges.get("economy", {})
        bucket = distance_bucket(estimate_distance(trip.origin, trip.destination, reference), config)
        value = prices.get(bucket, 0) * config.get("seasonal_factor", 1.2)

    if trip.is_round_trip:
        value *= config.get("round_trip_factor", 1.8)

    return round(value * trip.passengers)
