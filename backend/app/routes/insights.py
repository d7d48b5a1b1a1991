"""
AI reasoning route.

POST /api/get-ai-reasoning takes {query, programs} and returns a short
summary of the search. Rate-limited per client.
"""

from fastapi import APIRouter, Depends

from app.dependencies.services import enforce_ai_rate_limit, get_insight_service
from app.schemas.insight_schemas import AIReasoningRequest, AIReasoningResponse
from app.services.insight_service import InsightService

router = APIRouter(
    prefix="/api",
    tags=["insights"]
)


@router.post(
    "/get-ai-reasoning",
    response_model=AIReasoningResponse,
    dependencies=[Depends(enforce_ai_rate_limit)],
)
def get_ai_reasoning(
    request: AIReasoningRequest,
    service: InsightService = Depends(get_insight_service),
) -> AIReasoningResponse:
    """
    Summarize the best redemption for a query and program list.

    Uses the LLM when configured; otherwise (or on any LLM failure) returns a
    template summary with is_fallback=True. Never 500s because of the LLM.
    """
    return service.generate_summary(request)
