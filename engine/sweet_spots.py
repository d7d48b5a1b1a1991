"""
Sweet spot matching and annotation.
"""

from typing import Iterable, Optional

from engine.models import RedemptionOption, RouteMatcher, SweetSpot, TripRequest
from engine.reference import ReferenceData, load_reference_data


# Sweet spots are typed by what they book; flight searches book airline awards
SPOT_TYPE_FOR_SEARCH = {
    "flight": "airline",
    "hotel": "hotel",
}


def match_route(route: Optional[RouteMatcher], origin: str, destination: str) -> bool:
    """
    Evaluate a structured route predicate against an origin/destination pair.

    None matches any trip. A multi-city route never matches a simple
    origin/destination search. An empty code set matches any airport.
    """
    if route is None:
        return True
    if route.multi_city:
        return False
    if route.origins and origin not in route.origins:
        return False
    if route.destinations and destination not in route.destinations:
        return False
    return True


def matches_trip(spot: SweetSpot, trip: TripRequest) -> bool:
    if spot.type != SPOT_TYPE_FOR_SEARCH.get(trip.search_type):
        return False
    if trip.cabin_key not in {cabin.lower() for cabin in spot.cabin}:
        return False
    return match_route(spot.route, trip.origin, trip.destination)


def match_sweet_spot(trip: TripRequest, reference: ReferenceData = None) -> Optional[SweetSpot]:
    """First sweet spot whose type, cabin and route all fit the trip, else None."""
    reference = reference or load_reference_data()
    for spot in reference.sweet_spots:
        if matches_trip(spot, trip):
            return spot
    return None


def get_sweet_spot(spot_id: str, reference: ReferenceData = None) -> Optional[SweetSpot]:
    reference = reference or load_reference_data()
    for spot in reference.sweet_spots:
        if spot.id == spot_id:
            return spot
    return None


def annotate(options: Iterable[RedemptionOption], spot: Optional[SweetSpot]) -> list:
    """
    Flag options that book the sweet spot through an eligible points source.

    An option qualifies when its program is the spot's booking program and its
    points source (the transfer card, or the program itself for direct
    bookings) is one of the spot's transfer sources. Annotation only adds
    flags and notes; it never removes or reorders options.

    Returns:
        The options that were flagged
    """
    flagged = []
    if spot is None:
        return flagged

    for option in options:
        if option.program != spot.book_via:
            continue
        if option.points_source not in spot.transfer_sources:
            continue
        option.is_sweet_spot = True
        option.sweet_spot_details = spot
        note = f"Sweet spot: {spot.name}"
        if note not in option.notes:
            option.notes.append(note)
        flagged.append(option)
    return flagged
