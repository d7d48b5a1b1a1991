"""
Insight Service - natural language summaries of a redemption search.

The engine prices and ranks the options; this service only narrates them:
1. Run the engine on the query and programs (ground truth)
2. Ask the LLM for a short summary built from those numbers
3. Fall back to a template summary when the LLM is unavailable

Nothing here feeds back into valuation.
"""

import logging
import os
import time
from typing import Optional

from openai import OpenAI, APIError, APITimeoutError

from app.schemas.insight_schemas import AIReasoningRequest, AIReasoningResponse
from app.services.env import number_from_env
from engine.formatting import format_cpp, format_currency, format_points
from engine.models import RedemptionOption, RedemptionResult
from engine.recommender import recommend

logger = logging.getLogger(__name__)


class LLMConfig:
    """LLM settings from the environment; malformed numbers fall back to defaults."""
    MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")
    TEMPERATURE = number_from_env("LLM_TEMPERATURE", 0.3, float, minimum=0.0)
    MAX_TOKENS = number_from_env("LLM_MAX_TOKENS", 200, minimum=1)
    TIMEOUT_SECONDS = number_from_env("LLM_TIMEOUT", 5.0, float, minimum=0.1)
    MAX_RETRIES = number_from_env("LLM_MAX_RETRIES", 1, minimum=0)


def build_openai_client(api_key: Optional[str]) -> Optional[OpenAI]:
    """OpenAI client for api_key, or None (template summaries only)."""
    if not api_key:
        logger.warning("OPENAI_API_KEY not set; AI reasoning will return template summaries")
        return None
    try:
        client = OpenAI(api_key=api_key, timeout=LLMConfig.TIMEOUT_SECONDS, max_retries=LLMConfig.MAX_RETRIES)
    except Exception as e:
        logger.warning("Could not create OpenAI client (%s); using template summaries", e)
        return None
    logger.info("OpenAI client ready (model: %s)", LLMConfig.MODEL)
    return client


openai_client = build_openai_client(os.getenv("OPENAI_API_KEY"))


SYSTEM_PROMPT = (
    "You are a travel rewards advisor. Summarize award redemption options in "
    "plain English using only the numbers provided."
)


# =============================================================================
# Insight Service
# =============================================================================

class InsightService:
    """
    Service for summarizing redemption searches.

    Usage:
        service = InsightService()
        response = service.generate_summary(request)
    """

    def generate_summary(self, request: AIReasoningRequest) -> AIReasoningResponse:
        start_time = time.time()

        trip = request.query.to_trip().to_engine()
        programs = [program.to_engine() for program in request.programs]
        result = recommend(trip, programs)

        prompt = self._build_prompt(request, result)
        summary, model_used, is_fallback = self._try_llm_generation(prompt, request, result)

        return AIReasoningResponse(
            summary=summary,
            model_used=model_used,
            is_fallback=is_fallback,
            generation_time_ms=int((time.time() - start_time) * 1000),
        )

    def _build_prompt(self, request: AIReasoningRequest, result: RedemptionResult) -> str:
        query = request.query
        lines = [
            f"Trip: {query.origin} to {query.destination}, {query.cabin}, "
            f"{query.passengers} traveler(s), {query.search_type} search.",
        ]
        if query.depart_date:
            lines.append(f"Departing {query.depart_date.isoformat()}"
                         + (f", returning {query.return_date.isoformat()}." if query.return_date else "."))

        if result.best is None:
            lines.append(f"No options could be priced: {result.message}")
        else:
            lines.append("Ranked options (best first):")
            for i, option in enumerate(result.ranked, 1):
                lines.append(f"{i}. {self._describe(option)}")

        lines.append(
            "In 2-3 sentences, explain which option to book and why, mentioning "
            "any sweet spot and whether the traveler has enough points."
        )
        return "\n".join(lines)

    def _try_llm_generation(
        self,
        prompt: str,
        request: AIReasoningRequest,
        result: RedemptionResult
    ) -> tuple[str, str, bool]:
        """
        Attempt LLM call with graceful fallback to template.

        Returns:
            Tuple of (summary_text, model_used, is_fallback)
        """
        if not openai_client:
            logger.debug("OpenAI client not available, using template fallback")
            return self._generate_template_fallback(request, result), "template", True

        try:
            response = openai_client.chat.completions.create(
                model=LLMConfig.MODEL,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt}
                ],
                temperature=LLMConfig.TEMPERATURE,
                max_tokens=LLMConfig.MAX_TOKENS
            )

            summary = (response.choices[0].message.content or "").strip()
            if not summary:
                logger.warning("LLM returned empty summary, using template fallback")
                return self._generate_template_fallback(request, result), "template_empty", True
            logger.info("LLM summary from %s", LLMConfig.MODEL)
            return summary, LLMConfig.MODEL, False

        except APITimeoutError:
            logger.warning("OpenAI timed out after %ss; template summary", LLMConfig.TIMEOUT_SECONDS)
            return self._generate_template_fallback(request, result), "template_timeout", True

        except APIError as e:
            logger.error("OpenAI API error (%s); template summary", e)
            return self._generate_template_fallback(request, result), "template_error", True

        except Exception:
            logger.exception("Unexpected error from the LLM call; template summary")
            return self._generate_template_fallback(request, result), "template_exception", True

    def _generate_template_fallback(self, request: AIReasoningRequest, result: RedemptionResult) -> str:
        """Factual summary built only from the engine result."""
        query = request.query
        best = result.best
        if best is None:
            return f"No redemption options found for {query.origin} to {query.destination}. {result.message}"

        summary = f"Best option for {query.origin} to {query.destination}: {self._describe(best)}."
        if best.is_sweet_spot and best.sweet_spot_details is not None:
            summary += f" This is a known sweet spot ({best.sweet_spot_details.name})."
        if not best.has_enough_points:
            summary += " You don't have enough points for it yet."

        count = len(result.alternatives)
        if count:
            summary += f" {count} alternative{'s' if count != 1 else ''} compared."
        return summary

    @staticmethod
    def _describe(option: RedemptionOption) -> str:
        via = f" (transfer from {option.transfer_from})" if option.transfer_from else ""
        value = format_cpp(option.cents_per_point)
        text = (
            f"{option.program}{via} for {format_points(option.points_required)} points "
            f"plus {format_currency(option.fees)} in fees, worth {format_currency(option.cash_value)} "
            f"({value} per point, {option.value_rating} value)"
        )
        return text
