"""
Value-per-point calculation, contextual adjustments and rating buckets.
"""

import math
from typing import Optional

from engine.models import RedemptionOption
from engine.reference import ReferenceData, load_reference_data


DEFAULT_CONFIG = {
    # Applied in this order: sweet spot, round trip, instant transfer
    "sweet_spot_multiplier": 1.2,
    "round_trip_multiplier": 1.05,
    "instant_transfer_multiplier": 1.05,
}

# Inclusive lower bounds, checked from the top down
RATING_BUCKETS = (
    (2.5, "excellent"),
    (1.5, "great"),
    (1.0, "good"),
    (0.6, "average"),
    (0.0, "poor"),
)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def value_per_point(net_value: float, points: float) -> Optional[float]:
    """
    Cents of value per point: (net value / points) x 100, rounded to 0.1.

    Returns:
        0.0 when net value is not positive; None when either input is
        non-finite or points is not positive
    """
    if not _is_number(net_value) or not _is_number(points) or points <= 0:
        return None
    if net_value <= 0:
        return 0.0
    return round(net_value / points * 100, 1)


def apply_adjustments(base_cpp: Optional[float], sweet_spot: bool = False, round_trip: bool = False,
                      instant_transfer: bool = False, config: dict = None) -> Optional[float]:
    """
    Apply the contextual multipliers to a base value per point.

    Order is fixed: sweet spot, then round trip, then instant transfer. The
    result is rounded to 0.1 once, after all multipliers.
    """
    if config is None:
        config = DEFAULT_CONFIG
    if not _is_number(base_cpp):
        return None

    value = base_cpp
    if sweet_spot:
        value *= config.get("sweet_spot_multiplier", 1.2)
    if round_trip:
        value *= config.get("round_trip_multiplier", 1.05)
    if instant_transfer:
        value *= config.get("instant_transfer_multiplier", 1.05)
    return round(value, 1)


def rate_value(cents_per_point: Optional[float]) -> str:
    """Map a value per point onto poor/average/good/great/excellent, or 'unknown'."""
    if not _is_number(cents_per_point) or cents_per_point < 0:
        return "unknown"
    for lower_bound, rating in RATING_BUCKETS:
        if cents_per_point >= lower_bound:
            return rating
    return "unknown"


def enhanced_value(option: RedemptionOption, reference: ReferenceData = None) -> dict:
    """
    Opportunity-cost breakdown for an option.

    The "true" value per point subtracts what the points would otherwise earn
    back: the earning rate for the points source's type, scaled by a
    per-program adjustment (flexible currencies are worth more unspent).

    Returns:
        Dict with keys:
            - base_cents_per_point: value before contextual adjustments
            - opportunity_cost: cents per point given up by redeeming
            - true_cents_per_point: adjusted value, never negative (None if unknown)
            - rating: rating of the true value
    """
    reference = reference or load_reference_data()

    source = option.points_source
    source_type = reference.program_type(source) if option.transfer_from else option.program_type
    earning_rate = reference.earning_rates.get(source_type, 0.1)
    opportunity_cost = round(earning_rate * reference.opportunity_cost_adjustments.get(source, 1.0), 2)

    base = option.cents_per_point
    if not _is_number(base):
        true_value = None
    else:
        true_value = round(max(0.0, base - opportunity_cost), 1)

    return {
        "base_cents_per_point": option.base_cents_per_point,
        "opportunity_cost": opportunity_cost,
        "true_cents_per_point": true_value,
        "rating": rate_value(true_value),
    }
