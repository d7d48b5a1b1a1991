"""
Data models for the Redemption Optimizer engine.
All models are dataclasses for simplicity and type safety.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from fractions import Fraction
from typing import Optional, Union


PROGRAM_TYPES = ("airline", "hotel", "card")
SEARCH_TYPES = ("flight", "hotel")
CABINS = ("economy", "premium", "business", "first")

DateLike = Union[date, datetime, str, None]


def parse_date(value: DateLike) -> Optional[date]:
    """
    Coerce a date, datetime or ISO string into a calendar date.

    Time-of-day is dropped so that comparisons are by date only.

    Raises:
        ValueError: If a string is not a valid ISO date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return date.fromisoformat(text[:10])


@dataclass
class Program:
    """
    A loyalty account held by the traveler.

    Fields:
    - name: canonical program name (e.g. "Chase Ultimate Rewards")
    - type: 'airline' | 'hotel' | 'card'
    - balance: points on file (non-negative)
    - expiry: optional date the points expire
    """
    name: str
    type: str  # 'airline' | 'hotel' | 'card'
    balance: int = 0
    expiry: Optional[date] = None

    def __post_init__(self):
        if self.type not in PROGRAM_TYPES:
            raise ValueError(f"Invalid program type: {self.type}. Must be one of {', '.join(PROGRAM_TYPES)}.")
        self.balance = max(0, int(self.balance or 0))
        self.expiry = parse_date(self.expiry)


@dataclass
class UserPreferences:
    """Advisory traveler preferences. Not enforced by the engine's filtering."""
    direct_only: bool = False
    preferred_airlines: list[str] = field(default_factory=list)
    avoided_airlines: list[str] = field(default_factory=list)
    goal: Optional[str] = None


@dataclass
class TripRequest:
    """
    A trip to price with points.

    Fields:
    - origin / destination: IATA-style codes (upper-cased on construction)
    - depart_date / return_date: calendar dates; return_date is optional
    - cabin: 'economy' | 'premium' | 'business' | 'first', or a hotel category key
    - passengers: travelers (or rooms for hotel searches)
    - search_type: 'flight' | 'hotel'
    """
    origin: str = ""
    destination: str = ""
    depart_date: Optional[date] = None
    return_date: Optional[date] = None
    cabin: str = "economy"
    passengers: int = 1
    search_type: str = "flight"
    user_preferences: Optional[UserPreferences] = None

    def __post_init__(self):
        if self.search_type not in SEARCH_TYPES:
            raise ValueError(f"Invalid search type: {self.search_type}. Must be 'flight' or 'hotel'.")
        if int(self.passengers) < 1:
            raise ValueError(f"Passengers must be at least 1. Got: {self.passengers}")
        self.passengers = int(self.passengers)
        self.origin = (self.origin or "").strip().upper()
        self.destination = (self.destination or "").strip().upper()
        self.cabin = (self.cabin or "economy").strip()
        self.depart_date = parse_date(self.depart_date)
        self.return_date = parse_date(self.return_date)

    @property
    def cabin_key(self) -> str:
        return self.cabin.lower()

    @property
    def is_round_trip(self) -> bool:
        return is_round_trip(self)


def is_round_trip(trip: TripRequest) -> bool:
    """A trip is round-trip only when return_date is strictly after depart_date."""
    if trip.return_date is None or trip.depart_date is None:
        return False
    return trip.return_date > trip.depart_date


@dataclass(frozen=True)
class TransferPartner:
    """
    A transfer edge from a card program to a partner program.

    ratio is partner points received per 1 card point (Fraction(1, 3) for a 3:1 transfer).
    """
    name: str
    type: str  # 'airline' | 'hotel'
    ratio: Fraction = Fraction(1)
    transfer_time: str = "Instant"
    ratio_note: Optional[str] = None
    bonus_note: Optional[str] = None


@dataclass(frozen=True)
class RouteMatcher:
    """
    Structured route predicate for a sweet spot.

    An empty code set matches any airport on that side. multi_city routes never
    match a simple origin/destination search.
    """
    origins: frozenset = frozenset()
    destinations: frozenset = frozenset()
    multi_city: bool = False
    label: str = ""


@dataclass(frozen=True)
class RouteOption:
    origin: str
    destination: str
    aircraft: str = ""
    frequency: str = ""


@dataclass(frozen=True)
class SweetSpot:
    """A known high-value redemption and the guidance needed to book it."""
    id: str
    name: str
    description: str
    type: str  # 'airline' | 'hotel'
    cabin: tuple
    route: Optional[RouteMatcher]
    points_required: tuple  # (tier, points) pairs; a mapping is accepted
    book_via: str
    transfer_sources: tuple
    value_per_point: str = ""
    search_window: str = ""
    search_tools: tuple = ()
    call_instructions: str = ""
    booking_link: str = ""
    route_options: tuple = ()
    pro_tips: tuple = ()
    warnings: tuple = ()
    valuation_rationale: str = ""
    is_round_trip_priced: bool = False
    is_one_way_priced: bool = False
    is_complex_multi_city: bool = False

    def __post_init__(self):
        if isinstance(self.points_required, Mapping):
            object.__setattr__(self, "points_required", tuple(self.points_required.items()))
        object.__setattr__(self, "route_options", tuple(
            option if isinstance(option, RouteOption) else RouteOption(**option)
            for option in self.route_options
        ))


@dataclass
class AwardQuote:
    """Points and fees the resolver found (or estimated) for one program."""
    points: Optional[int]
    fees: float
    source: str = "chart"  # 'chart' | 'heuristic'


@dataclass
class BookingStep:
    title: str
    instructions: list[str]


@dataclass
class RedemptionOption:
    """
    One way to pay for the trip with points. All fields exist from construction
    and are filled in by successive pipeline stages.
    """
    program: str
    program_type: str
    points_required: int
    fees: float
    cash_value: float
    user_balance: int
    has_enough_points: bool
    transfer_from: Optional[str] = None
    transfer_ratio: Optional[Fraction] = None
    transfer_time: Optional[str] = None
    base_cents_per_point: Optional[float] = None
    cents_per_point: Optional[float] = None
    true_cents_per_point: Optional[float] = None
    value_rating: str = "unknown"
    is_sweet_spot: bool = False
    sweet_spot_details: Optional[SweetSpot] = None
    pros: list[str] = field(default_factory=list)
    cons: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    booking_steps: list[BookingStep] = field(default_factory=list)
    expiry: Optional[date] = None

    @property
    def is_transfer_option(self) -> bool:
        return self.transfer_from is not None

    @property
    def points_source(self) -> str:
        """The program whose balance is actually spent."""
        return self.transfer_from or self.program


@dataclass
class RedemptionResult:
    """
    The ranked output for one search.

    Fields:
    - best: the top option, or None when nothing could be priced
    - alternatives: remaining options in rank order
    - message: explanation when best is None
    """
    best: Optional[RedemptionOption]
    alternatives: list[RedemptionOption] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def ranked(self) -> list[RedemptionOption]:
        return ([self.best] if self.best else []) + list(self.alternatives)
