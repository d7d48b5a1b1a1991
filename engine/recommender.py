"""
Redemption recommendation engine.
Orchestrates award pricing, transfer expansion, valuation, sweet spot
annotation and ranking for one trip and a traveler's programs.
"""

import logging
from typing import List

from engine import awards, estimator, ranking, valuation
from engine.awards import resolve_award
from engine.booking import booking_steps
from engine.estimator import estimate_retail_value
from engine.models import Program, RedemptionOption, RedemptionResult, TripRequest
from engine.ranking import rank
from engine.reference import ReferenceData, load_reference_data
from engine.sweet_spots import annotate, match_sweet_spot
from engine.transfers import expand_transfers, is_instant
from engine.valuation import apply_adjustments, enhanced_value, rate_value, value_per_point


logger = logging.getLogger(__name__)


NO_PROGRAMS_MESSAGE = "Please add your loyalty program accounts to see redemption options."
INCOMPLETE_TRIP_MESSAGE = "Please enter your travel dates and destination to see redemption options."

# Program types that can book each search type directly
DIRECT_TYPE_FOR_SEARCH = {
    "flight": "airline",
    "hotel": "hotel",
}

# One flat dict; every stage reads only the keys it knows
DEFAULT_CONFIG = {
    **estimator.DEFAULT_CONFIG,
    **awards.DEFAULT_CONFIG,
    **valuation.DEFAULT_CONFIG,
    **ranking.DEFAULT_CONFIG,
}


def recommend(
    trip: TripRequest,
    programs: List[Program],
    reference: ReferenceData = None,
    config: dict = None
) -> RedemptionResult:
    """
    Find and rank every way to pay for a trip with the traveler's points.

    Args:
        trip: TripRequest to price
        programs: The traveler's Program accounts
        reference: Optional ReferenceData (defaults to the built-in tables)
        config: Optional overrides merged over DEFAULT_CONFIG

    Returns:
        RedemptionResult with the best option (with booking steps) and ranked
        alternatives, or best=None and a message when nothing can be priced
    """
    reference = reference or load_reference_data()
    merged = DEFAULT_CONFIG.copy()
    if config:
        merged.update(config)
    config = merged

    if not programs:
        return RedemptionResult(best=None, alternatives=[], message=NO_PROGRAMS_MESSAGE)

    if not _is_complete(trip):
        return RedemptionResult(best=None, alternatives=[], message=INCOMPLETE_TRIP_MESSAGE)

    retail_value = estimate_retail_value(trip, reference, config)
    options = build_candidates(trip, programs, reference, config, retail_value)

    for option in options:
        option.base_cents_per_point = value_per_point(option.cash_value - option.fees, option.points_required)

    spot = match_sweet_spot(trip, reference)
    if spot is not None:
        flagged = annotate(options, spot)
        logger.debug("Sweet spot %s matched; %d option(s) flagged", spot.id, len(flagged))

    round_trip = trip.search_type == "flight" and trip.is_round_trip
    for option in options:
        option.cents_per_point = apply_adjustments(
            option.base_cents_per_point,
            sweet_spot=option.is_sweet_spot,
            round_trip=round_trip,
            instant_transfer=option.is_transfer_option and is_instant(option.transfer_time),
            config=config,
        )
        option.value_rating = rate_value(option.cents_per_point)
        option.true_cents_per_point = enhanced_value(option, reference)["true_cents_per_point"]

    result = rank(options, trip, config)
    if result.best is not None:
        result.best.booking_steps = booking_steps(result.best, trip)

    logger.info(
        "Priced %s %s-%s (%s): %d option(s)",
        trip.search_type, trip.origin, trip.destination, trip.cabin, len(result.ranked),
    )
    return result


def _is_complete(trip: TripRequest) -> bool:
    if trip.depart_date is None or not trip.destination:
        return False
    if trip.search_type == "flight":
        return bool(trip.origin)
    # Hotels are priced per night
    return trip.return_date is not None


def build_candidates(trip: TripRequest, programs: List[Program], reference: ReferenceData,
                     config: dict, retail_value: float) -> List[RedemptionOption]:
    """
    Direct options for airline/hotel programs plus transfer options.

    Card programs book only through their partners. Airline and hotel programs
    book directly when they match the search type, and also transfer out when
    they have partners (Marriott Bonvoy to airlines). Programs with no balance
    contribute nothing. Candidates keep program order, with each program's
    transfer options in partner order after its direct option.
    """
    direct_type = DIRECT_TYPE_FOR_SEARCH.get(trip.search_type)
    options = []

    for program in programs:
        if program.balance <= 0:
            continue

        if program.type == direct_type:
            quote = resolve_award(program.name, trip, reference, config, retail_value)
            if quote.points is None or quote.points <= 0:
                logger.warning("Could not price %s for %s-%s", program.name, trip.origin, trip.destination)
            else:
                options.append(RedemptionOption(
                    program=program.name,
                    program_type=program.type,
                    points_required=quote.points,
                    fees=quote.fees,
                    cash_value=retail_value,
                    user_balance=program.balance,
                    has_enough_points=program.balance >= quote.points,
                    expiry=program.expiry,
                ))

        options.extend(expand_transfers(program, trip, reference, config, retail_value))

    return options
