"""Loyalty program store routes (the traveler's point balances)."""

from fastapi import APIRouter, Depends, Response, status

from app.dependencies.services import get_program_service
from app.models.loyalty_program import (
    LoyaltyProgramCreate,
    LoyaltyProgramListResponse,
    LoyaltyProgramResponse,
    LoyaltyProgramUpdate,
)
from app.services.program_service import ProgramService

router = APIRouter(
    prefix="/api/v1/programs",
    tags=["programs"]
)


@router.get("", response_model=LoyaltyProgramListResponse)
def list_programs(service: ProgramService = Depends(get_program_service)):
    return {"programs": service.list_programs()}


@router.post("", response_model=LoyaltyProgramResponse, status_code=status.HTTP_201_CREATED)
def create_program(payload: LoyaltyProgramCreate, service: ProgramService = Depends(get_program_service)):
    return service.create_program(payload)


@router.put("/{program_id}", response_model=LoyaltyProgramResponse)
def update_program(
    program_id: int,
    payload: LoyaltyProgramUpdate,
    service: ProgramService = Depends(get_program_service),
):
    return service.update_program(program_id, payload)


@router.delete("/{program_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_program(program_id: int, service: ProgramService = Depends(get_program_service)):
    service.delete_program(program_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
