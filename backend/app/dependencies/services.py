import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.dependencies.db import get_db
from app.services.errors import ServiceError
from app.services.insight_service import InsightService
from app.services.program_service import ProgramService
from app.services.rate_limiter import ai_rate_limiter
from app.services.redemption_service import RedemptionService

logger = logging.getLogger(__name__)


def get_program_service(db: Session = Depends(get_db)) -> ProgramService:
    return ProgramService(db)

def get_redemption_service(db: Session = Depends(get_db)) -> RedemptionService:
    return RedemptionService(db)

def get_insight_service() -> InsightService:
    return InsightService()

def enforce_ai_rate_limit(request: Request) -> None:
    # Keyed by client address; TestClient reports "testclient"
    client_key = request.client.host if request.client else "unknown"
    allowed, retry_after = ai_rate_limiter.check(client_key)
    if not allowed:
        logger.warning("Rate limit hit for %s; retry after %ss", client_key, retry_after)
        raise ServiceError(
            429,
            "RATE_LIMITED",
            "Too many AI reasoning requests. Try again later.",
            {"retry_after_seconds": retry_after},
        )
