"""
Redemption search schemas - DTOs between the HTTP layer and the engine.

Engine dataclasses stay the single source of truth for the numbers; these
models only validate input and shape the JSON the clients read.
"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.loyalty_program import LoyaltyProgramBase
from engine.formatting import format_currency, format_points, format_value_with_rating
from engine.models import RedemptionOption, RedemptionResult, TripRequest
from engine.transfers import format_ratio


class TripRequestSchema(BaseModel):
    """Trip to price. Dates are optional so incomplete searches still get a message back."""
    origin: str = ""
    destination: str = ""
    depart_date: Optional[date] = None
    return_date: Optional[date] = None
    cabin: str = "economy"
    passengers: int = Field(1, ge=1, le=9)
    search_type: Literal["flight", "hotel"] = "flight"

    @field_validator("origin", "destination")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return (v or "").strip().upper()

    def to_engine(self) -> TripRequest:
        return TripRequest(
            origin=self.origin,
            destination=self.destination,
            depart_date=self.depart_date,
            return_date=self.return_date,
            cabin=self.cabin,
            passengers=self.passengers,
            search_type=self.search_type,
        )


class ProgramSchema(LoyaltyProgramBase):
    pass


class SearchRequest(BaseModel):
    trip: TripRequestSchema
    # None means "use the stored programs"
    programs: Optional[list[ProgramSchema]] = None


class RouteOptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    origin: str
    destination: str
    aircraft: str = ""
    frequency: str = ""


class SweetSpotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    description: str
    type: str
    cabin: list[str]
    book_via: str
    transfer_sources: list[str]
    points_required: dict[str, str]
    value_per_point: str = ""
    search_window: str = ""
    search_tools: list[str] = []
    call_instructions: str = ""
    booking_link: str = ""
    route_options: list[RouteOptionResponse] = []
    pro_tips: list[str] = []
    warnings: list[str] = []
    valuation_rationale: str = ""

    @field_validator("points_required", mode="before")
    @classmethod
    def tiers_to_dict(cls, v):
        return dict(v)


class BookingStepResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    title: str
    instructions: list[str]


class ValueDisplay(BaseModel):
    formatted: str
    rating: str
    description: str


class OptionResponse(BaseModel):
    program: str
    program_type: str
    points_required: int
    fees: float
    cash_value: float
    user_balance: int
    has_enough_points: bool
    transfer_from: Optional[str] = None
    transfer_ratio: Optional[str] = None
    transfer_time: Optional[str] = None
    base_cents_per_point: Optional[float] = None
    cents_per_point: Optional[float] = None
    true_cents_per_point: Optional[float] = None
    value_rating: str = "unknown"
    is_sweet_spot: bool = False
    sweet_spot_details: Optional[SweetSpotResponse] = None
    pros: list[str] = []
    cons: list[str] = []
    notes: list[str] = []
    booking_steps: list[BookingStepResponse] = []
    expiry: Optional[date] = None

    # Display strings for clients that don't format numbers themselves
    formatted_points: str = ""
    formatted_fees: str = ""
    formatted_cash_value: str = ""
    value_display: Optional[ValueDisplay] = None

    @classmethod
    def from_option(cls, option: RedemptionOption) -> "OptionResponse":
        spot = option.sweet_spot_details
        return cls(
            program=option.program,
            program_type=option.program_type,
            points_required=option.points_required,
            fees=option.fees,
            cash_value=option.cash_value,
            user_balance=option.user_balance,
            has_enough_points=option.has_enough_points,
            transfer_from=option.transfer_from,
            transfer_ratio=format_ratio(option.transfer_ratio) if option.transfer_ratio is not None else None,
            transfer_time=option.transfer_time,
            base_cents_per_point=option.base_cents_per_point,
            cents_per_point=option.cents_per_point,
            true_cents_per_point=option.true_cents_per_point,
            value_rating=option.value_rating,
            is_sweet_spot=option.is_sweet_spot,
            sweet_spot_details=SweetSpotResponse.model_validate(spot) if spot is not None else None,
            pros=list(option.pros),
            cons=list(option.cons),
            notes=list(option.notes),
            booking_steps=[BookingStepResponse.model_validate(step) for step in option.booking_steps],
            expiry=option.expiry,
            formatted_points=format_points(option.points_required),
            formatted_fees=format_currency(option.fees),
            formatted_cash_value=format_currency(option.cash_value),
            value_display=ValueDisplay(**format_value_with_rating(option.cents_per_point)),
        )


class SearchResponse(BaseModel):
    best: Optional[OptionResponse] = None
    alternatives: list[OptionResponse] = []
    message: Optional[str] = None

    @classmethod
    def from_result(cls, result: RedemptionResult) -> "SearchResponse":
        return cls(
            best=OptionResponse.from_option(result.best) if result.best is not None else None,
            alternatives=[OptionResponse.from_option(o) for o in result.alternatives],
            message=result.message,
        )


class LastSearchResponse(BaseModel):
    trip: TripRequestSchema
    searched_at: datetime


class TransferPartnerResponse(BaseModel):
    name: str
    type: str
    ratio: str
    transfer_time: str
    ratio_note: Optional[str] = None
    bonus_note: Optional[str] = None


class TransferOptionResponse(BaseModel):
    program: str
    ratio: str
    transfer_time: str
    ratio_note: Optional[str] = None
    bonus_note: Optional[str] = None
