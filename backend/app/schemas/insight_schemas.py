"""
AI reasoning schemas - request/response DTOs for the summary endpoint.

The endpoint only narrates a search; valuation numbers always come from the
engine, so the request carries the same trip and program shapes the search
endpoint accepts.
"""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.redemption_schemas import ProgramSchema, TripRequestSchema


class AIQuery(BaseModel):
    origin: str = Field(..., description="Origin airport code")
    destination: str = Field(..., description="Destination airport or city code")
    depart_date: Optional[date] = None
    return_date: Optional[date] = None
    cabin: str = "economy"
    passengers: int = Field(1, ge=1, le=9)
    search_type: Literal["flight", "hotel"] = "flight"

    @field_validator("origin", "destination")
    @classmethod
    def require_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("Origin and destination required")
        return v

    def to_trip(self) -> TripRequestSchema:
        return TripRequestSchema(**self.model_dump())


class AIReasoningRequest(BaseModel):
    query: AIQuery
    programs: list[ProgramSchema]

    model_config = {"json_schema_extra": {"examples": [{
        "query": {"origin": "LHR", "destination": "HND", "depart_date": "2026-11-01",
                  "return_date": "2026-11-15", "cabin": "business"},
        "programs": [{"name": "Chase Ultimate Rewards", "type": "card", "balance": 100000}],
    }]}}


class AIReasoningResponse(BaseModel):
    summary: str
    model_used: str = Field(..., description="LLM model name, or template_* when the fallback was used")
    is_fallback: bool = False
    generation_time_ms: int = 0
