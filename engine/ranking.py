"""
Ranking and selection of redemption options.

Affordable options always rank ahead of unaffordable ones; within each group
options are ordered by value per point, highest first. The sort is stable, so
ties keep the order in which candidates were built.
"""

from typing import Iterable, List, Optional

from engine.formatting import format_cpp, format_currency, format_date, format_points
from engine.models import RedemptionOption, RedemptionResult, TripRequest
from engine.transfers import transfer_days


DEFAULT_CONFIG = {
    "good_value_cpp": 1.5,
    "below_average_share": 0.9,
    "extra_points_share": 1.2,
    "high_fee_share": 1.5,
    "slow_transfer_days": 2,
}

NO_OPTIONS_MESSAGE = "No redemption options found. Try adding more programs or adjusting your trip details."


def _sort_key(option: RedemptionOption):
    return (not option.has_enough_points, -(option.cents_per_point or 0))


def sort_options(options: Iterable[RedemptionOption]) -> List[RedemptionOption]:
    return sorted(options, key=_sort_key)


def rank(options: Iterable[RedemptionOption], trip: TripRequest = None, config: dict = None) -> RedemptionResult:
    """
    Order options and split them into best and alternatives.

    The best option gets absolute pros and cons; every alternative is
    described relative to the best option.

    Args:
        options: Candidate RedemptionOption objects
        trip: TripRequest, used for date-dependent cons (points expiring before travel)
        config: Optional config dict (uses defaults if not provided)

    Returns:
        RedemptionResult; best is None with a message when there are no options
    """
    if config is None:
        config = DEFAULT_CONFIG

    ordered = sort_options(options)
    if not ordered:
        return RedemptionResult(best=None, alternatives=[], message=NO_OPTIONS_MESSAGE)

    best, alternatives = ordered[0], ordered[1:]

    best.pros = pros_for_option(best, config=config)
    best.cons = cons_for_option(best, trip=trip, config=config)
    for alternative in alternatives:
        alternative.pros = pros_for_option(alternative, best, config)
        alternative.cons = cons_for_option(alternative, best, trip, config)

    return RedemptionResult(best=best, alternatives=alternatives)


def pros_for_option(option: RedemptionOption, baseline: Optional[RedemptionOption] = None,
                    config: dict = None) -> List[str]:
    """Pros, absolute when baseline is None, otherwise relative to baseline."""
    if config is None:
        config = DEFAULT_CONFIG

    pros = []
    cpp = option.cents_per_point or 0

    if baseline is None:
        if cpp > config.get("good_value_cpp", 1.5):
            pros.append(f"Good value at {format_cpp(cpp)} per point")
    else:
        baseline_cpp = baseline.cents_per_point or 0
        if cpp > baseline_cpp:
            pros.append(f"Better value per point ({format_cpp(cpp)} vs {format_cpp(baseline_cpp)})")
        if option.points_required < baseline.points_required:
            pros.append(
                f"Requires fewer points ({format_points(option.points_required)} "
                f"vs {format_points(baseline.points_required)})"
            )
        if option.fees < baseline.fees:
            pros.append(f"Lower fees ({format_currency(option.fees)} vs {format_currency(baseline.fees)})")

    if option.is_sweet_spot:
        pros.append(f"Known sweet spot for {option.program} program")

    return pros


def cons_for_option(option: RedemptionOption, baseline: Optional[RedemptionOption] = None,
                    trip: TripRequest = None, config: dict = None) -> List[str]:
    """Cons for an option; comparative cons need a baseline."""
    if config is None:
        config = DEFAULT_CONFIG

    cons = []
    cpp = option.cents_per_point or 0

    if baseline is not None:
        if cpp < (baseline.cents_per_point or 0) * config.get("below_average_share", 0.9):
            cons.append(f"Below-average value at {format_cpp(cpp)} per point")
        if option.points_required > baseline.points_required * config.get("extra_points_share", 1.2):
            extra = option.points_required - baseline.points_required
            cons.append(f"Requires {format_points(extra)} more points than the best option")
        if option.fees > baseline.fees * config.get("high_fee_share", 1.5):
            cons.append(f"High fees ({format_currency(option.fees)})")

    if option.is_transfer_option:
        days = transfer_days(option.transfer_time)
        if days is not None and days > config.get("slow_transfer_days", 2):
            cons.append(f"Slow transfers ({option.transfer_time})")

    if not option.has_enough_points:
        short = option.points_required - option.user_balance
        cons.append(f"Not enough points: {format_points(short)} more needed in {option.points_source}")

    if trip is not None and option.expiry and trip.depart_date and option.expiry < trip.depart_date:
        cons.append(f"Points expire {format_date(option.expiry)}, before your departure")

    return cons
