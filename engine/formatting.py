"""
Display formatting for redemption results.

Every formatter returns "N/A" for None or non-finite input instead of raising.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

from engine.models import parse_date
from engine.valuation import rate_value


NOT_AVAILABLE = "N/A"

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "SGD": "S$",
}

RATING_DESCRIPTIONS = {
    "excellent": "Excellent value",
    "great": "Great value",
    "good": "Good value",
    "average": "Average value",
    "poor": "Poor value",
    "unknown": "Unknown value",
}


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _round_half_up(value: float, digits: int) -> Decimal:
    quantum = Decimal(1).scaleb(-digits)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def format_currency(value, currency: str = "USD", minimum_fraction_digits: int = 0,
                    maximum_fraction_digits: int = 0, show_cents: bool = False) -> str:
    """
    Format an amount of money, e.g. 1234.5 -> "$1,235".

    show_cents forces exactly two decimal places. Negative amounts get a
    leading minus sign before the symbol.
    """
    if not _is_number(value):
        return NOT_AVAILABLE
    if value < 0:
        return "-" + format_currency(abs(value), currency, minimum_fraction_digits,
                                     maximum_fraction_digits, show_cents)

    if show_cents:
        minimum_fraction_digits = maximum_fraction_digits = 2
    maximum_fraction_digits = max(maximum_fraction_digits, minimum_fraction_digits)

    text = f"{_round_half_up(value, maximum_fraction_digits):,.{maximum_fraction_digits}f}"
    if maximum_fraction_digits > minimum_fraction_digits:
        whole, _, fraction = text.partition(".")
        fraction = fraction.rstrip("0").ljust(minimum_fraction_digits, "0")
        text = f"{whole}.{fraction}" if fraction else whole

    symbol = CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")
    return f"{symbol}{text}"


def format_points(value) -> str:
    """Thousands-separated point count, e.g. 90000 -> "90,000"."""
    if not _is_number(value):
        return NOT_AVAILABLE
    return f"{int(_round_half_up(value, 0)):,}"


def format_date(value) -> str:
    """Format a date as "Oct 17, 2026"; unparseable strings give "Invalid date"."""
    if value is None or value == "":
        return NOT_AVAILABLE
    try:
        parsed = parse_date(value)
    except (TypeError, ValueError):
        return "Invalid date"
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def format_cpp(value) -> str:
    """Short cents-per-point label, e.g. "1.8¢"."""
    if not _is_number(value):
        return NOT_AVAILABLE
    return f"{_round_half_up(value, 1)}¢"


def format_cents_per_point(value) -> str:
    if not _is_number(value):
        return NOT_AVAILABLE
    return f"{_round_half_up(value, 1)} cents per point"


def format_value_with_rating(value) -> dict:
    """
    Value per point with its rating bucket for display.

    Returns:
        Dict with keys: formatted, rating, description
    """
    rating = rate_value(value)
    if rating == "unknown":
        return {"formatted": NOT_AVAILABLE, "rating": rating, "description": RATING_DESCRIPTIONS[rating]}
    return {
        "formatted": f"{_round_half_up(value, 1)}¢/pt",
        "rating": rating,
        "description": RATING_DESCRIPTIONS[rating],
    }
