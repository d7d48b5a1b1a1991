from .loyalty_program import (
    LoyaltyProgram,
    LoyaltyProgramCreate,
    LoyaltyProgramUpdate,
    LoyaltyProgramResponse,
    LoyaltyProgramListResponse,
    ProgramType,
)

__all__ = [
    "LoyaltyProgram",
    "LoyaltyProgramCreate",
    "LoyaltyProgramUpdate",
    "LoyaltyProgramResponse",
    "LoyaltyProgramListResponse",
    "ProgramType",
]
