"""
Redemption routes - engine search plus the reference lookups the UI uses.

Endpoints:
- POST /api/v1/redemptions/search - rank every way to pay for a trip
- GET  /api/v1/redemptions/last-search - the last trip searched
- GET  /api/v1/transfer-partners/{program} - where a program's points can go
- GET  /api/v1/transfer-options/{program} - which programs can feed a program
- GET  /api/v1/sweet-spots - the sweet spot matching a trip, if any
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends

from app.dependencies.services import get_redemption_service
from app.schemas.redemption_schemas import (
    LastSearchResponse,
    SearchRequest,
    SearchResponse,
    SweetSpotResponse,
    TransferOptionResponse,
    TransferPartnerResponse,
    TripRequestSchema,
)
from app.services.redemption_service import RedemptionService

router = APIRouter(
    prefix="/api/v1",
    tags=["redemptions"]
)


@router.post("/redemptions/search", response_model=SearchResponse)
def search_redemptions(request: SearchRequest, service: RedemptionService = Depends(get_redemption_service)):
    """
    Price and rank redemption options for a trip.

    When `programs` is omitted the stored programs are used. An incomplete
    trip or an empty program list returns `best: null` with a message.
    """
    return service.search(request)


@router.get("/redemptions/last-search", response_model=LastSearchResponse)
def get_last_search(service: RedemptionService = Depends(get_redemption_service)):
    return service.last_search()


@router.get("/transfer-partners/{program}", response_model=List[TransferPartnerResponse])
def list_transfer_partners(program: str, service: RedemptionService = Depends(get_redemption_service)):
    return service.transfer_partners(program)


@router.get("/transfer-options/{program}", response_model=List[TransferOptionResponse])
def list_transfer_options(program: str, service: RedemptionService = Depends(get_redemption_service)):
    return service.transfer_options(program)


@router.get("/sweet-spots", response_model=Optional[SweetSpotResponse])
def find_sweet_spot(
    origin: str = "",
    destination: str = "",
    cabin: str = "economy",
    search_type: Literal["flight", "hotel"] = "flight",
    service: RedemptionService = Depends(get_redemption_service),
):
    trip = TripRequestSchema(origin=origin, destination=destination, cabin=cabin, search_type=search_type)
    return service.sweet_spot(trip)
