from datetime import date
from enum import Enum as PyEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy import Column, Date, Enum as SAEnum, Integer, String

from app.db.db import Base
from engine.models import Program


class ProgramType(str, PyEnum):
    airline = "airline"
    hotel = "hotel"
    card = "card"


class LoyaltyProgram(Base):
    __tablename__ = "loyalty_programs"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), unique=True, nullable=False, index=True)
    type = Column(SAEnum(ProgramType), nullable=False)
    balance = Column(Integer, nullable=False, default=0)
    expiry = Column(Date, nullable=True)

    def to_engine(self) -> Program:
        return Program(
            name=self.name,
            type=ProgramType(self.type).value,
            balance=self.balance or 0,
            expiry=self.expiry,
        )


# Pydantic Models for Request/Response Validation
class LoyaltyProgramBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    name: str = Field(..., min_length=1, max_length=120)
    type: ProgramType
    balance: int = Field(0, ge=0)
    expiry: Optional[date] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    def to_engine(self) -> Program:
        return Program(name=self.name, type=self.type.value, balance=self.balance, expiry=self.expiry)


class LoyaltyProgramCreate(LoyaltyProgramBase):
    pass


class LoyaltyProgramUpdate(BaseModel):
    balance: Optional[int] = Field(None, ge=0)
    expiry: Optional[date] = None
    type: Optional[ProgramType] = None

    @field_validator("balance", "type")
    @classmethod
    def reject_null(cls, v):
        # Omit a field to leave it unchanged; only expiry can be cleared
        if v is None:
            raise ValueError("must not be null")
        return v


class LoyaltyProgramResponse(LoyaltyProgramBase):
    id: int


class LoyaltyProgramListResponse(BaseModel):
    programs: list[LoyaltyProgramResponse]
