import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.schemas.redemption_schemas import (
    LastSearchResponse,
    SearchRequest,
    SearchResponse,
    SweetSpotResponse,
    TransferOptionResponse,
    TransferPartnerResponse,
    TripRequestSchema,
)
from app.services import data_service
from app.services.errors import ServiceError
from app.services.program_service import ProgramService
from engine.models import Program, TripRequest
from engine.recommender import recommend
from engine.sweet_spots import match_sweet_spot
from engine.transfers import format_ratio, get_transfer_options, get_transfer_partners

logger = logging.getLogger(__name__)


class RedemptionService:
    """Runs engine searches for the API and remembers the last trip searched."""

    def __init__(self, db: Session):
        self.db = db
        self.program_service = ProgramService(db)

    def search(self, request: SearchRequest) -> SearchResponse:
        trip = self._to_engine_trip(request.trip)
        if request.programs is None:
            programs = self.program_service.engine_programs()
        else:
            programs = [program.to_engine() for program in request.programs]

        result = self.run(trip, programs)
        data_service.save_last_search(request.trip.model_dump(mode="json"))
        return SearchResponse.from_result(result)

    def run(self, trip: TripRequest, programs: List[Program]):
        logger.debug("Searching %s-%s with %d program(s)", trip.origin, trip.destination, len(programs))
        return recommend(trip, programs)

    def last_search(self) -> LastSearchResponse:
        record = data_service.get_last_search()
        if not record:
            raise ServiceError(404, "NOT_FOUND", "No search yet.", {})
        return LastSearchResponse(**record)

    def transfer_partners(self, program_name: str) -> List[TransferPartnerResponse]:
        return [
            TransferPartnerResponse(
                name=partner.name,
                type=partner.type,
                ratio=format_ratio(partner.ratio),
                transfer_time=partner.transfer_time,
                ratio_note=partner.ratio_note,
                bonus_note=partner.bonus_note,
            )
            for partner in get_transfer_partners(program_name)
        ]

    def transfer_options(self, program_name: str) -> List[TransferOptionResponse]:
        return [
            TransferOptionResponse(
                program=option["program"],
                ratio=option["ratio_display"],
                transfer_time=option["transfer_time"],
                ratio_note=option["ratio_note"],
                bonus_note=option["bonus_note"],
            )
            for option in get_transfer_options(program_name)
        ]

    def sweet_spot(self, trip: TripRequestSchema) -> Optional[SweetSpotResponse]:
        spot = match_sweet_spot(self._to_engine_trip(trip))
        return SweetSpotResponse.model_validate(spot) if spot is not None else None

    @staticmethod
    def _to_engine_trip(trip: TripRequestSchema) -> TripRequest:
        try:
            return trip.to_engine()
        except ValueError as exc:
            raise ServiceError(400, "VALIDATION_ERROR", "Invalid trip.", {"reason": str(exc)})
