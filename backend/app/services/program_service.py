import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.loyalty_program import LoyaltyProgram, LoyaltyProgramCreate, LoyaltyProgramUpdate
from app.services.errors import ServiceError
from engine.models import Program

logger = logging.getLogger(__name__)


class ProgramService:
    """CRUD over the traveler's loyalty program accounts."""

    def __init__(self, db: Session):
        self.db = db

    def list_programs(self) -> List[LoyaltyProgram]:
        return self.db.query(LoyaltyProgram).order_by(LoyaltyProgram.id).all()

    def get_program(self, program_id: int) -> LoyaltyProgram:
        program = self.db.query(LoyaltyProgram).filter(LoyaltyProgram.id == program_id).first()
        if not program:
            raise ServiceError(404, "NOT_FOUND", "Program not found.", {"id": program_id})
        return program

    def create_program(self, payload: LoyaltyProgramCreate) -> LoyaltyProgram:
        existing = self.db.query(LoyaltyProgram).filter(LoyaltyProgram.name == payload.name).first()
        if existing:
            raise ServiceError(409, "PROGRAM_EXISTS", "Program already added.", {"name": payload.name})

        program = LoyaltyProgram(
            name=payload.name,
            type=payload.type,
            balance=payload.balance,
            expiry=payload.expiry,
        )
        try:
            self.db.add(program)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ServiceError(409, "PROGRAM_EXISTS", "Program already added.", {"name": payload.name})

        self.db.refresh(program)
        logger.info("Added program %s (%s)", program.name, program.type.value)
        return program

    def update_program(self, program_id: int, payload: LoyaltyProgramUpdate) -> LoyaltyProgram:
        program = self.get_program(program_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(program, key, value)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ServiceError(400, "VALIDATION_ERROR", "Invalid program update.", {"id": program_id})
        self.db.refresh(program)
        return program

    def delete_program(self, program_id: int) -> None:
        program = self.get_program(program_id)
        self.db.delete(program)
        self.db.commit()
        logger.info("Removed program %s", program.name)

    def engine_programs(self) -> List[Program]:
        return [program.to_engine() for program in self.list_programs()]
