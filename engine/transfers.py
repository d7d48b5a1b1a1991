"""
Transfer partner lookups and transfer expansion.

A card program can move points into airline and hotel partners at a fixed
ratio. Expansion prices the trip with every partner of a held card and keeps
the paths the card balance can actually cover.
"""

import logging
import math
import re
from fractions import Fraction
from typing import List, Optional

from engine.awards import resolve_award
from engine.estimator import estimate_retail_value
from engine.models import Program, RedemptionOption, TransferPartner, TripRequest
from engine.reference import ReferenceData, load_reference_data


logger = logging.getLogger(__name__)


# Partner type that can book each search type
PARTNER_TYPE_FOR_SEARCH = {
    "flight": "airline",
    "hotel": "hotel",
}


def get_transfer_partners(program_name: str, reference: ReferenceData = None) -> List[TransferPartner]:
    """Partners a program can transfer points to (empty for unknown programs)."""
    reference = reference or load_reference_data()
    return list(reference.transfer_partners.get(program_name, ()))


def get_transfer_options(program_name: str, reference: ReferenceData = None) -> List[dict]:
    """
    Reverse lookup: every program that can transfer points into program_name.

    Returns:
        List of dicts with keys: program, ratio, ratio_display, transfer_time,
        ratio_note, bonus_note
    """
    reference = reference or load_reference_data()
    options = []
    for source, partners in reference.transfer_partners.items():
        for partner in partners:
            if partner.name != program_name:
                continue
            options.append({
                "program": source,
                "ratio": partner.ratio,
                "ratio_display": format_ratio(partner.ratio),
                "transfer_time": partner.transfer_time,
                "ratio_note": partner.ratio_note,
                "bonus_note": partner.bonus_note,
            })
    return options


def format_ratio(ratio: Fraction) -> str:
    """Render a transfer ratio as 'source:partner' points (1/3 -> '3:1', 2 -> '1:2')."""
    ratio = Fraction(ratio)
    return f"{ratio.denominator}:{ratio.numerator}"


def transfer_days(transfer_time: Optional[str]) -> Optional[int]:
    """
    Upper bound, in days, of a transfer time description.

    'Instant' is 0; '1-2 days' is 2; text without a number is unknown (None).
    """
    if not transfer_time:
        return None
    text = transfer_time.strip().lower()
    if text == "instant":
        return 0
    numbers = [int(n) for n in re.findall(r"\d+", text)]
    if not numbers:
        return None
    return max(numbers)


def is_instant(transfer_time: Optional[str]) -> bool:
    return transfer_days(transfer_time) == 0


def card_points_needed(partner_points: int, ratio: Fraction) -> int:
    """Card points to transfer so the partner receives at least partner_points."""
    return math.ceil(Fraction(partner_points) / Fraction(ratio))


def expand_transfers(card_program: Program, trip: TripRequest, reference: ReferenceData = None,
                     config: dict = None, retail_value: float = None) -> List[RedemptionOption]:
    """
    Build transfer-path options for one held card program.

    Each partner that can book this search type is priced with its own award
    data. An option is emitted only when the card balance covers the transfer;
    its program is the partner and its balance is the card's.

    Args:
        card_program: The held card Program
        trip: TripRequest being priced
        reference: Optional ReferenceData (defaults to the built-in tables)
        config: Optional award-resolution config passed through to resolve_award
        retail_value: Precomputed retail value for the trip, if already known

    Returns:
        List of RedemptionOption with transfer fields set, in partner order
    """
    reference = reference or load_reference_data()
    if retail_value is None:
        retail_value = estimate_retail_value(trip, reference)

    wanted_type = PARTNER_TYPE_FOR_SEARCH.get(trip.search_type)
    options = []

    for partner in get_transfer_partners(card_program.name, reference):
        if partner.type != wanted_type:
            continue

        quote = resolve_award(partner.name, trip, reference, config, retail_value)
        if quote.points is None or quote.points <= 0:
            logger.debug("Skipping %s -> %s: no award price", card_program.name, partner.name)
            continue

        needed = card_points_needed(quote.points, partner.ratio)
        if card_program.balance < needed:
            continue

        notes = [f"Transfer from {card_program.name} ({format_ratio(partner.ratio)} ratio)"]
        if partner.ratio_note:
            notes.append(partner.ratio_note)
        if partner.bonus_note:
            notes.append(partner.bonus_note)

        options.append(RedemptionOption(
            program=partner.name,
            program_type=partner.type,
            points_required=needed,
            fees=quote.fees,
            cash_value=retail_value,
            user_balance=card_program.balance,
            has_enough_points=card_program.balance >= needed,
            transfer_from=card_program.name,
            transfer_ratio=partner.ratio,
            transfer_time=partner.transfer_time,
            notes=notes,
            expiry=card_program.expiry,
        ))

    return options
