"""
Static reference tables for award pricing, fees, retail values, transfer
partners and sweet spots.

Tables are wrapped in a read-only ReferenceData container that is built once
and passed to every engine component. Tests can construct their own
ReferenceData with synthetic tables.
"""

from dataclasses import dataclass, field, fields
from fractions import Fraction
from types import MappingProxyType
from typing import Mapping, Optional

from engine.models import RouteMatcher, SweetSpot, TransferPartner


# Points per passenger, one-way. Hotel programs map a category key to points per night.
AWARD_CHARTS = {
    "Virgin Atlantic Flying Club": {
        # ANA partner rates
        "LHR-HND": {"economy": 30000, "premium": 55000, "business": 45000, "first": 60000},
        "HND-LHR": {"economy": 30000, "premium": 55000, "business": 45000, "first": 60000},
        # Virgin Atlantic own metal
        "JFK-LHR": {"economy": 15000, "premium": 27500, "business": 47500, "first": 85000},
        "LHR-JFK": {"economy": 20000, "premium": 35000, "business": 57500, "first": 95000},
        "JFK-HND": {"economy": None, "premium": None, "business": 45000, "first": 60000},
        "HND-JFK": {"economy": None, "premium": None, "business": 45000, "first": 60000},
        "ORD-HND": {"economy": None, "premium": None, "business": 47500, "first": 62500},
        "HND-ORD": {"economy": None, "premium": None, "business": 47500, "first": 62500},
        "LAX-HND": {"economy": None, "premium": None, "business": 45000, "first": 60000},
        "HND-LAX": {"economy": None, "premium": None, "business": 45000, "first": 60000},
        "SFO-NRT": {"economy": None, "premium": None, "business": 45000, "first": 60000},
        "NRT-SFO": {"economy": None, "premium": None, "business": 45000, "first": 60000},
    },
    "American Airlines AAdvantage": {
        "JFK-LHR": {"economy": 30000, "premium": 50000, "business": 57500, "first": 85000},
        "LHR-JFK": {"economy": 30000, "premium": 50000, "business": 57500, "first": 85000},
        "DFW-HND": {"economy": 35000, "premium": None, "business": 60000, "first": 80000},
        "HND-DFW": {"economy": 35000, "premium": None, "business": 60000, "first": 80000},
        "LAX-HKG": {"economy": 35000, "premium": None, "business": 70000, "first": 110000},
        "HKG-LAX": {"economy": 35000, "premium": None, "business": 70000, "first": 110000},
    },
    "United MileagePlus": {
        "JFK-FRA": {"economy": 30000, "premium": 55000, "business": 70000, "first": 110000},
    },
    "Delta SkyMiles": {
        "JFK-CDG": {"economy": 30000, "premium": 55000, "business": 85000, "first": None},
    },
    "Alaska Airlines Mileage Plan": {
        "LAX-HKG": {"economy": 30000, "premium": None, "business": 50000, "first": 70000},
        "HKG-LAX": {"economy": 30000, "premium": None, "business": 50000, "first": 70000},
        "SFO-HKG": {"economy": 30000, "premium": None, "business": 50000, "first": 70000},
        "HKG-SFO": {"economy": 30000, "premium": None, "business": 50000, "first": 70000},
        "JFK-HKG": {"economy": 30000, "premium": None, "business": 50000, "first": 70000},
        "HKG-JFK": {"economy": 30000, "premium": None, "business": 50000, "first": 70000},
        "ORD-HKG": {"economy": 30000, "premium": None, "business": 50000, "first": 70000},
        "HKG-ORD": {"economy": 30000, "premium": None, "business": 50000, "first": 70000},
    },
    "World of Hyatt": {
        "Category 1": 5000, "Category 2": 8000, "Category 3": 12000, "Category 4": 15000,
        "Category 5": 20000, "Category 6": 25000, "Category 7": 30000, "Category 8": 40000,
    },
    "Marriott Bonvoy": {
        # Dynamic pricing; a single average stands in for the chart
        "Average": 80000,
    },
}

# Fees per passenger, per direction. Hotel programs carry one flat nightly fee.
FEE_TABLES = {
    "Virgin Atlantic Flying Club": {
        "LHR-HND": {"economy": 200, "premium": 250, "business": 300, "first": 350},
        "HND-LHR": {"economy": 200, "premium": 250, "business": 300, "first": 350},
        "JFK-LHR": {"economy": 150, "premium": 200, "business": 250, "first": 300},
        "LHR-JFK": {"economy": 350, "premium": 450, "business": 550, "first": 650},
        "JFK-HND": {"economy": 50, "premium": 50, "business": 50, "first": 50},
        "HND-JFK": {"economy": 50, "premium": 50, "business": 50, "first": 50},
    },
    "American Airlines AAdvantage": {
        "JFK-LHR": {"economy": 100, "premium": 150, "business": 200, "first": 250},
        "LHR-JFK": {"economy": 300, "premium": 400, "business": 500, "first": 600},
        "LAX-HKG": {"economy": 50, "premium": 50, "business": 50, "first": 50},
        "HKG-LAX": {"economy": 50, "premium": 50, "business": 50, "first": 50},
    },
    "United MileagePlus": {
        "JFK-FRA": {"economy": 50, "premium": 100, "business": 150, "first": 800},
    },
    "Alaska Airlines Mileage Plan": {
        "LAX-HKG": {"economy": 50, "premium": 50, "business": 50, "first": 50},
        "HKG-LAX": {"economy": 50, "premium": 50, "business": 50, "first": 50},
    },
    "World of Hyatt": 0,
    "Marriott Bonvoy": 0,
}

# Estimated cash price per passenger for a flight route and cabin.
RETAIL_VALUES = {
    "LHR-HND": {"economy": 1500, "premium": 3000, "business": 6200, "first": 12000},
    "JFK-LHR": {"economy": 800, "premium": 1500, "business": 3500, "first": 7000},
    "LHR-JFK": {"economy": 800, "premium": 1500, "business": 3500, "first": 7000},
    "JFK-CDG": {"economy": 700, "premium": 1400, "business": 3000, "first": None},
    "JFK-HND": {"economy": 1000, "premium": 2500, "business": 5000, "first": 10000},
    "LAX-HKG": {"economy": 1200, "premium": 2800, "business": 6000, "first": 10000},
    "ORD-HND": {"economy": 1100, "premium": 2600, "business": 5500, "first": 11000},
}

# Cash price per room night by hotel category.
HOTEL_NIGHTLY_RATES = {
    "Category 1": 100, "Category 2": 150, "Category 3": 200, "Category 4": 250,
    "Category 5": 350, "Category 6": 500, "Category 7": 700, "Category 8": 1000,
    "Average": 400,
}

# Hotel tier names accepted in the cabin field, mapped onto chart categories.
HOTEL_CATEGORY_ALIASES = {
    "standard": "Category 4",
    "premium": "Category 6",
    "luxury": "Category 7",
}

# Base cash price per passenger, one-way, by cabin and distance bucket.
BASE_PRICE_RANGES = {
    "economy": {"short": 200, "medium": 500, "long": 1000, "ultraLong": 1500},
    "premium": {"short": 400, "medium": 900, "long": 1800, "ultraLong": 2800},
    "business": {"short": 800, "medium": 2500, "long": 4500, "ultraLong": 7000},
    "first": {"short": 1500, "medium": 4500, "long": 8000, "ultraLong": 12000},
}

# Base value per point, in cents, for the points heuristic.
BASE_VALUE_PER_POINT = {
    "airline": {"economy": 1.2, "premium": 1.5, "business": 1.8, "first": 2.2},
    "hotel": {"standard": 0.7, "premium": 0.9, "luxury": 1.1},
    "card": 1.7,
}

PROGRAM_VALUE_MULTIPLIERS = {
    # Airlines
    "United MileagePlus": 1.0,
    "American Airlines AAdvantage": 1.1,
    "Delta SkyMiles": 0.9,
    "Alaska Airlines Mileage Plan": 1.3,
    "British Airways Executive Club": 0.7,
    "Air Canada Aeroplan": 1.2,
    "ANA Mileage Club": 1.4,
    "Virgin Atlantic Flying Club": 1.3,
    "Singapore KrisFlyer": 1.2,
    "Air France-KLM Flying Blue": 1.0,
    # Hotels
    "Marriott Bonvoy": 0.8,
    "Hilton Honors": 0.5,
    "World of Hyatt": 1.7,
    "IHG One Rewards": 0.6,
    # Credit cards
    "American Express Membership Rewards": 1.1,
    "Chase Ultimate Rewards": 1.1,
    "Citi ThankYou Rewards": 1.0,
    "Capital One Miles": 1.0,
}

# Programs whose award taxes run well above the norm.
PROGRAM_FEE_MULTIPLIERS = {
    "British Airways Executive Club": 4.0,
    "Virgin Atlantic Flying Club": 3.0,
}

# Departure taxes added per passenger per direction when the airport is an endpoint.
AIRPORT_SURCHARGES = {
    "LHR": 150,
}

FIFTH_NIGHT_FREE_PROGRAMS = frozenset({"Marriott Bonvoy", "Hilton Honors", "IHG One Rewards"})

KNOWN_PROGRAM_TYPES = {
    "American Airlines AAdvantage": "airline",
    "United MileagePlus": "airline",
    "Delta SkyMiles": "airline",
    "Southwest Rapid Rewards": "airline",
    "Alaska Airlines Mileage Plan": "airline",
    "British Airways Executive Club": "airline",
    "Air Canada Aeroplan": "airline",
    "ANA Mileage Club": "airline",
    "Singapore KrisFlyer": "airline",
    "Air France-KLM Flying Blue": "airline",
    "Virgin Atlantic Flying Club": "airline",
    "Emirates Skywards": "airline",
    "Etihad Guest": "airline",
    "Marriott Bonvoy": "hotel",
    "Hilton Honors": "hotel",
    "World of Hyatt": "hotel",
    "IHG One Rewards": "hotel",
    "Wyndham Rewards": "hotel",
    "Choice Privileges": "hotel",
    "American Express Membership Rewards": "card",
    "Chase Ultimate Rewards": "card",
    "Citi ThankYou Rewards": "card",
    "Capital One Miles": "card",
}

# Great-circle mileage for frequently searched pairs (either direction).
COMMON_DISTANCES = {
    "JFK-LHR": 3451,
    "LAX-NRT": 5451,
    "SFO-HKG": 6927,
    "ORD-FRA": 4340,
    "LHR-HND": 5962,
    "JFK-HND": 6745,
    "LAX-HND": 5500,
}

AIRPORT_REGIONS = {
    "NA": ("JFK", "LAX", "ORD", "SFO", "MIA", "ATL", "DFW", "BOS", "YYZ", "YVR", "YUL"),
    "EU": ("LHR", "LGW", "CDG", "ORY", "AMS", "FRA", "MUC", "ZRH", "VIE", "CPH", "ARN", "MAD", "BCN", "FCO", "IST"),
    "Asia": ("HND", "NRT", "KIX", "SIN", "HKG", "BKK", "ICN", "PEK", "PKX"),
    "ME": ("DXB",),
    "OC": ("SYD", "MEL"),
    "AF": ("JNB",),
}

# Mileage between region pairs; same-region trips use INTRA_REGION_DISTANCES.
INTER_REGION_DISTANCES = {
    frozenset({"NA", "EU"}): 4500,
    frozenset({"NA", "Asia"}): 6500,
    frozenset({"EU", "Asia"}): 5500,
    frozenset({"NA", "OC"}): 7500,
}
INTRA_REGION_DISTANCES = {"NA": 1500, "EU": 1500, "Asia": 1500}

# Opportunity cost inputs for the enhanced value breakdown (cents per point).
EARNING_RATES = {"airline": 0.1, "hotel": 0.1, "card": 0.2}
OPPORTUNITY_COST_ADJUSTMENTS = {
    "Chase Ultimate Rewards": 1.5,
    "American Express Membership Rewards": 1.5,
    "Citi ThankYou Rewards": 1.25,
    "Capital One Miles": 1.25,
    "World of Hyatt": 0.8,
    "Marriott Bonvoy": 1.0,
    "Hilton Honors": 0.8,
}


TRANSFER_PARTNERS = {
    "American Express Membership Rewards": (
        TransferPartner("Air Canada Aeroplan", "airline", Fraction(1), "Instant"),
        TransferPartner("ANA Mileage Club", "airline", Fraction(1), "2-3 days"),
        TransferPartner("British Airways Executive Club", "airline", Fraction(1), "1-2 days"),
        TransferPartner("Delta SkyMiles", "airline", Fraction(1), "Instant"),
        TransferPartner("Emirates Skywards", "airline", Fraction(1), "1-2 days"),
        TransferPartner("Etihad Guest", "airline", Fraction(1), "1-3 days"),
        TransferPartner("Air France-KLM Flying Blue", "airline", Fraction(1), "Instant"),
        TransferPartner("Singapore KrisFlyer", "airline", Fraction(1), "1-2 days"),
        TransferPartner("Virgin Atlantic Flying Club", "airline", Fraction(1), "Instant"),
        TransferPartner(
            "Marriott Bonvoy", "hotel", Fraction(1), "1-2 days",
            ratio_note="Ratio varies by card (often 3:1 or special rates)",
        ),
        TransferPartner(
            "Hilton Honors", "hotel", Fraction(2), "1-2 days",
            ratio_note="1:2 transfer ratio (1000 Amex -> 2000 Hilton)",
        ),
    ),
    "Chase Ultimate Rewards": (
        TransferPartner("United MileagePlus", "airline", Fraction(1), "Instant"),
        TransferPartner("Southwest Rapid Rewards", "airline", Fraction(1), "Instant"),
        TransferPartner("British Airways Executive Club", "airline", Fraction(1), "Instant"),
        TransferPartner("Air France-KLM Flying Blue", "airline", Fraction(1), "Instant"),
        TransferPartner("Singapore KrisFlyer", "airline", Fraction(1), "1-2 days"),
        TransferPartner("Virgin Atlantic Flying Club", "airline", Fraction(1), "Instant"),
        TransferPartner("World of Hyatt", "hotel", Fraction(1), "Instant"),
        TransferPartner("Marriott Bonvoy", "hotel", Fraction(1), "1 day"),
        TransferPartner(
            "IHG One Rewards", "hotel", Fraction(1), "Instant",
            ratio_note="1:1 transfer ratio (1000 Chase -> 1000 IHG)",
        ),
    ),
    "Citi ThankYou Rewards": (
        TransferPartner("Air France-KLM Flying Blue", "airline", Fraction(1), "Instant"),
        TransferPartner("Etihad Guest", "airline", Fraction(1), "1-3 days"),
        TransferPartner("Singapore KrisFlyer", "airline", Fraction(1), "1-2 days"),
        TransferPartner("Virgin Atlantic Flying Club", "airline", Fraction(1), "Instant"),
    ),
    "Capital One Miles": (
        TransferPartner("Air Canada Aeroplan", "airline", Fraction(1), "Instant"),
        TransferPartner("Air France-KLM Flying Blue", "airline", Fraction(1), "Instant"),
        TransferPartner("British Airways Executive Club", "airline", Fraction(1), "1 day"),
        TransferPartner("Emirates Skywards", "airline", Fraction(1), "Instant"),
        TransferPartner("Singapore KrisFlyer", "airline", Fraction(1), "1-2 days"),
        TransferPartner("Virgin Atlantic Flying Club", "airline", Fraction(1), "Instant"),
    ),
    # Marriott points move to airlines at 3:1
    "Marriott Bonvoy": (
        TransferPartner(
            "Alaska Airlines Mileage Plan", "airline", Fraction(1, 3), "2 days",
            bonus_note="5,000 bonus miles for every 60,000 points transferred",
        ),
        TransferPartner(
            "American Airlines AAdvantage", "airline", Fraction(1, 3), "2 days",
            bonus_note="5,000 bonus miles for every 60,000 points transferred",
        ),
        TransferPartner(
            "United MileagePlus", "airline", Fraction(1, 3), "3 days",
            bonus_note="5,000 bonus miles for every 60,000 points transferred, plus 10k bonus for every 60k to UA",
        ),
    ),
}


_US_GATEWAYS = frozenset({"JFK", "LAX", "SFO", "ORD", "BOS"})

SWEET_SPOTS = (
    SweetSpot(
        id="ANA_RTW",
        name="ANA First/Business Round the World",
        description="Multi-stop award allowing up to 8 stopovers booked directly with ANA.",
        type="airline",
        cabin=("economy", "premium", "business", "first"),
        route=RouteMatcher(multi_city=True, label="Round the World (Multi-City)"),
        points_required={
            "Economy": "75,000 - 120,000 pts",
            "Business": "100,000 - 200,000 pts",
            "First": "180,000 - 300,000 pts",
        },
        book_via="ANA Mileage Club",
        transfer_sources=("American Express Membership Rewards", "Marriott Bonvoy"),
        value_per_point="4-10¢",
        search_window="Search up to 355 days in advance when ANA releases partner space. Requires calling ANA.",
        search_tools=("ANA website (for own flights)", "Star Alliance tools (United.com, AirCanada.com)", "ExpertFlyer"),
        call_instructions="Call ANA Mileage Club at 1-800-235-9262 to book complex multi-city or partner awards.",
        booking_link="https://www.ana.co.jp/en/us/amc/partner-flight-awards/",
        pro_tips=(
            "Maximize value by including multiple long-haul segments",
            "Award space is limited, flexibility is key",
            "Calculated based on total distance, not per segment",
            "Requires phone booking",
        ),
        warnings=(
            "Complex booking rules",
            "Availability is highly competitive in premium cabins",
            "Fuel surcharges may apply depending on carrier",
        ),
        is_complex_multi_city=True,
    ),
    SweetSpot(
        id="ANA_PREMIUM_VS",
        name="ANA Premium Cabins via Virgin Atlantic",
        description="Exceptional value for ANA premium cabins between US/Europe and Japan using Virgin points.",
        type="airline",
        cabin=("business", "first"),
        route=RouteMatcher(
            origins=_US_GATEWAYS - {"BOS"} | {"LHR"},
            destinations=frozenset({"HND", "NRT"}),
            label="US/Europe to Japan",
        ),
        points_required={
            "Business (West US / Europe)": "90,000 round-trip",
            "Business (East US)": "95,000 round-trip",
            "First (West US / Europe)": "110,000 round-trip",
            "First (East US)": "120,000 round-trip",
        },
        book_via="Virgin Atlantic Flying Club",
        transfer_sources=("American Express Membership Rewards", "Chase Ultimate Rewards", "Citi ThankYou Rewards"),
        value_per_point="4-8¢",
        search_window="Search up to 355 days in advance when ANA releases space. Book via phone.",
        search_tools=("United.com (for ANA space)", "ANA website", "ExpertFlyer (paid)"),
        call_instructions="Call Virgin Atlantic Flying Club at 1-800-365-9500 to book ANA partner awards.",
        booking_link="https://www.virginatlantic.com/us/en/flying-club/partners/airlines/all-nippon-airways.html",
        route_options=(
            {"origin": "New York (JFK)", "destination": "Tokyo (HND/NRT)", "aircraft": "Boeing 777-300ER", "frequency": "Daily"},
            {"origin": "Chicago (ORD)", "destination": "Tokyo (HND)", "aircraft": "Boeing 777-300ER", "frequency": "Daily"},
            {"origin": "Los Angeles (LAX)", "destination": "Tokyo (HND/NRT)", "aircraft": "Boeing 777-300ER / 787-9", "frequency": "Daily"},
            {"origin": "San Francisco (SFO)", "destination": "Tokyo (NRT)", "aircraft": "Boeing 777-300ER", "frequency": "Daily"},
            {"origin": "London (LHR)", "destination": "Tokyo (HND)", "aircraft": "Boeing 777-300ER", "frequency": "Daily"},
        ),
        pro_tips=(
            "Round-trip bookings are required when booking ANA through Virgin Atlantic.",
            "No fuel surcharges apply to ANA awards booked with Virgin points.",
            "Transfer times from Amex, Chase, Citi to Virgin are usually instant.",
            "Search for 'Saver' level award space on partner sites like United.com.",
            "Availability is competitive, book as soon as space is released (355 days out).",
        ),
        warnings=(
            "Requires phone booking with Virgin Atlantic.",
            "Virgin Atlantic agents may not see all available ANA space - be polite and persistent.",
            "Award space disappears very quickly, especially First Class.",
        ),
        valuation_rationale=(
            "The cash price for ANA premium cabins is extremely high, while Virgin Atlantic requires "
            "significantly fewer points than most other programs for the same flights, with minimal taxes/fees."
        ),
        is_round_trip_priced=True,
    ),
    SweetSpot(
        id="CX_PREMIUM_AS",
        name="Cathay Pacific Premium Cabins via Alaska",
        description=(
            "Excellent value for Cathay Pacific Business/First Class to Asia using Alaska miles, "
            "including a free stopover in Hong Kong."
        ),
        type="airline",
        cabin=("business", "first"),
        route=RouteMatcher(
            origins=_US_GATEWAYS,
            destinations=frozenset({"HKG", "SIN", "BKK", "NRT"}),
            label="US to Asia",
        ),
        points_required={
            "Business (US to Asia)": "50,000 one-way",
            "First (US to Asia)": "70,000 one-way",
            "Business (US to Australia/NZ via HKG)": "60,000 one-way",
            "First (US to Australia/NZ via HKG)": "80,000 one-way",
        },
        book_via="Alaska Airlines Mileage Plan",
        transfer_sources=("Marriott Bonvoy",),
        value_per_point="3-6¢",
        search_window="Book 10-11 months in advance or 1-2 weeks before departure (last-minute releases).",
        search_tools=("British Airways website", "Qantas website", "ExpertFlyer (paid)"),
        call_instructions="Call Alaska Airlines Mileage Plan at 1-800-252-7522 to book Cathay Pacific partner awards.",
        booking_link="https://www.alaskaair.com/content/mileage-plan/how-to-use/award-charts#partners",
        route_options=(
            {"origin": "New York (JFK)", "destination": "Hong Kong (HKG)", "aircraft": "Boeing 777-300ER", "frequency": "Daily"},
            {"origin": "Los Angeles (LAX)", "destination": "Hong Kong (HKG)", "aircraft": "Boeing 777-300ER / Airbus A350", "frequency": "Daily"},
            {"origin": "San Francisco (SFO)", "destination": "Hong Kong (HKG)", "aircraft": "Boeing 777-300ER", "frequency": "Daily"},
            {"origin": "Boston (BOS)", "destination": "Hong Kong (HKG)", "aircraft": "Airbus A350", "frequency": "Daily"},
            {"origin": "Chicago (ORD)", "destination": "Hong Kong (HKG)", "aircraft": "Boeing 777-300ER", "frequency": "Daily"},
        ),
        pro_tips=(
            "Alaska allows one FREE stopover in Hong Kong even on a one-way award!",
            "You can continue to Southeast Asia, Australia, or New Zealand on the same award for a slightly higher rate.",
            "Search for Oneworld partner space on BA.com or Qantas.com, then call Alaska to book.",
            "Availability is competitive, especially for First Class.",
        ),
        warnings=(
            "Requires phone booking with Alaska Airlines.",
            "Marriott Bonvoy is the only major transferable currency partner for Alaska (3:1 ratio).",
        ),
        valuation_rationale=(
            "Low point cost for premium cabins, an included free stopover in Hong Kong, and low taxes/fees."
        ),
        is_one_way_priced=True,
    ),
    SweetSpot(
        id="HYATT_LUXURY",
        name="Hyatt Luxury Property Redemptions",
        description="High value redemptions at top-tier Hyatt properties (Category 7 & 8) like Park Hyatt or Alila.",
        type="hotel",
        cabin=("luxury", "standard", "premium", "category 7", "category 8"),
        route=None,
        points_required={
            "Category 1": "5,000 pts / night", "Category 2": "8,000 pts / night",
            "Category 3": "12,000 pts / night", "Category 4": "15,000 pts / night",
            "Category 5": "20,000 pts / night", "Category 6": "25,000 pts / night",
            "Category 7": "30,000 pts / night", "Category 8": "40,000 pts / night",
        },
        book_via="World of Hyatt",
        transfer_sources=("Chase Ultimate Rewards",),
        value_per_point="2-5¢+",
        search_window="Book up to 13 months in advance when the calendar opens.",
        search_tools=("Hyatt.com",),
        call_instructions="Most bookings can be done online. Call Hyatt reservations for complex needs.",
        booking_link="https://www.hyatt.com/redeem",
        pro_tips=(
            "World of Hyatt points are highly valuable, often exceeding 2 cents per point.",
            "Chase Ultimate Rewards is the only major 1:1 transfer partner.",
            "Look for Category 7 and 8 properties for the highest potential value.",
            "Availability for standard rooms at top properties is limited.",
        ),
        warnings=(
            "Avoid transferring points to Hyatt unless you have a specific high-value redemption in mind.",
            "Cash & Points redemptions can sometimes offer good value too.",
            "Hotel award nights generally do not include resort fees or destination fees.",
        ),
        valuation_rationale=(
            "Higher-category Hyatt properties carry very high cash prices while the points cost stays relatively low."
        ),
    ),
)


def _freeze(value):
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


@dataclass(frozen=True)
class ReferenceData:
    """
    Read-only bundle of every table the engine consults.

    Any table left out when constructing a ReferenceData is empty, so tests can
    supply only what they exercise.
    """
    award_charts: Mapping = field(default_factory=dict)
    fee_tables: Mapping = field(default_factory=dict)
    retail_values: Mapping = field(default_factory=dict)
    hotel_nightly_rates: Mapping = field(default_factory=dict)
    hotel_category_aliases: Mapping = field(default_factory=dict)
    base_price_ranges: Mapping = field(default_factory=lambda: BASE_PRICE_RANGES)
    base_value_per_point: Mapping = field(default_factory=lambda: BASE_VALUE_PER_POINT)
    program_value_multipliers: Mapping = field(default_factory=dict)
    program_fee_multipliers: Mapping = field(default_factory=dict)
    airport_surcharges: Mapping = field(default_factory=dict)
    fifth_night_free_programs: frozenset = frozenset()
    known_program_types: Mapping = field(default_factory=dict)
    common_distances: Mapping = field(default_factory=dict)
    airport_regions: Mapping = field(default_factory=dict)
    inter_region_distances: Mapping = field(default_factory=dict)
    intra_region_distances: Mapping = field(default_factory=dict)
    earning_rates: Mapping = field(default_factory=lambda: EARNING_RATES)
    opportunity_cost_adjustments: Mapping = field(default_factory=dict)
    transfer_partners: Mapping = field(default_factory=dict)
    sweet_spots: tuple = ()

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, _freeze(getattr(self, f.name)))

    def program_type(self, program_name: str) -> str:
        """
        Classify a program by name: known table first, then keywords.

        Unrecognized names default to 'card' (flexible points).
        """
        known = self.known_program_types.get(program_name)
        if known:
            return known
        if any(word in program_name for word in ("Airlines", "Airways", "Flying", "Miles", "Sky", "Aeroplan")):
            return "airline"
        if any(word in program_name for word in ("Hyatt", "Marriott", "Hilton", "IHG", "Hotels", "Resorts", "Bonvoy", "Honors")):
            return "hotel"
        return "card"

    def region_of(self, airport: str) -> str:
        for region, airports in self.airport_regions.items():
            if airport in airports:
                return region
        return "Other"


_DEFAULT_REFERENCE: Optional[ReferenceData] = None


def load_reference_data() -> ReferenceData:
    """Return the process-wide default ReferenceData, building it on first use."""
    global _DEFAULT_REFERENCE
    if _DEFAULT_REFERENCE is None:
        _DEFAULT_REFERENCE = ReferenceData(
            award_charts=AWARD_CHARTS,
            fee_tables=FEE_TABLES,
            retail_values=RETAIL_VALUES,
            hotel_nightly_rates=HOTEL_NIGHTLY_RATES,
            hotel_category_aliases=HOTEL_CATEGORY_ALIASES,
            base_price_ranges=BASE_PRICE_RANGES,
            base_value_per_point=BASE_VALUE_PER_POINT,
            program_value_multipliers=PROGRAM_VALUE_MULTIPLIERS,
            program_fee_multipliers=PROGRAM_FEE_MULTIPLIERS,
            airport_surcharges=AIRPORT_SURCHARGES,
            fifth_night_free_programs=FIFTH_NIGHT_FREE_PROGRAMS,
            known_program_types=KNOWN_PROGRAM_TYPES,
            common_distances=COMMON_DISTANCES,
            airport_regions=AIRPORT_REGIONS,
            inter_region_distances=INTER_REGION_DISTANCES,
            intra_region_distances=INTRA_REGION_DISTANCES,
            earning_rates=EARNING_RATES,
            opportunity_cost_adjustments=OPPORTUNITY_COST_ADJUSTMENTS,
            transfer_partners=TRANSFER_PARTNERS,
            sweet_spots=SWEET_SPOTS,
        )
    return _DEFAULT_REFERENCE
