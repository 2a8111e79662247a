"""Service layer for LLM-generated insights.

Implements both generation flows:
    1. generate_personalized(): tool-call insights for a benchmark contact
    2. generate_partner()     : JSON-mode insights for a partner portfolio

Provider failures never escape this service: every call resolves to either
validated content or the matching fallback, and the outcome records which.
No FastAPI or httpx imports belong here.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from leadership_benchmark.core.insights import (
    FALLBACK_PERSONALIZED_INSIGHTS,
    PARTNER_SYSTEM_PROMPT,
    PERSONALIZED_SYSTEM_PROMPT,
    PERSONALIZED_TOOL_NAME,
    Fallback,
    FallbackReason,
    InsightOutcome,
    LLMProviderError,
    PartnerInsights,
    PersonalizedInsights,
    build_partner_prompt,
    build_personalized_prompt,
    fallback_partner_insights,
    parse_partner_insights,
    parse_personalized_insights,
    personalized_tool_schema,
    portfolio_stats,
    request_insights,
)
from leadership_benchmark.core.interfaces import ILLMGateway
from leadership_benchmark.core.progress import (
    INSIGHT_GENERATION_SCHEDULE,
    ProgressState,
    run_with_progress,
)
from leadership_benchmark.observability import get_logger

logger = get_logger(__name__)

_PERSONALIZED_MAX_TOKENS: int = 2000
_PARTNER_TEMPERATURE: float = 0.7


@dataclass(frozen=True)
class PartnerInsightsResult:
    """Partner insights plus the metadata returned as ``_meta``.

    Attributes:
        insights: One to five insight strings.
        validated: True when the provider output passed schema validation.
        model: Model that was asked.
        token_usage: Provider-reported usage, empty when no response arrived.
        processing_time_ms: Wall time of the whole request.
        session_id: Caller-supplied correlation id, if any.
        fallback_reason: Why fallback content was used, or None.
    """

    insights: list[str]
    validated: bool
    model: str
    token_usage: dict[str, Any] = field(default_factory=dict)
    processing_time_ms: int = 0
    session_id: str | None = None
    fallback_reason: FallbackReason | None = None


class InsightService:
    """Generates personalized and partner insights with guaranteed fallback.

    Depends on two gateway instances injected at construction time; they may
    point at different providers and models.
    """

    def __init__(
        self,
        personalized_gateway: ILLMGateway,
        partner_gateway: ILLMGateway,
        timeout_seconds: float,
        partner_max_tokens: int = 800,
    ) -> None:
        """Initialise the service.

        Args:
            personalized_gateway: Gateway used for the tool-call flow.
            partner_gateway: Gateway used for portfolio insights.
            timeout_seconds: Upper bound applied to every provider call.
            partner_max_tokens: Completion budget for portfolio insights.
        """
        self._personalized = personalized_gateway
        self._partner = partner_gateway
        self._timeout = timeout_seconds
        self._partner_max_tokens = partner_max_tokens

    async def generate_personalized(
        self,
        answers: dict[str, str],
        contact: dict[str, Any],
        deep_profile: dict[str, Any] | None = None,
        on_progress: Callable[[ProgressState], None] | None = None,
    ) -> InsightOutcome[PersonalizedInsights]:
        """Generate personalized insights for a benchmark contact.

        Args:
            answers: Benchmark answers keyed by question id.
            contact: Contact details.
            deep_profile: Optional deep profile answers.
            on_progress: Receives cosmetic progress on the insight generation
                schedule until the request resolves.

        Returns:
            Ok with validated insights, or Fallback with the fixed payload.
        """
        prompt = build_personalized_prompt(answers, contact, deep_profile)
        logger.info(
            "Generating personalized insights",
            company_name=contact.get("company_name"),
            has_deep_profile=deep_profile is not None,
        )

        async def _call() -> str:
            completion = await self._personalized.complete(
                messages=[
                    {"role": "system", "content": PERSONALIZED_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=_PERSONALIZED_MAX_TOKENS,
                tools=[personalized_tool_schema()],
                tool_choice={"type": "function", "function": {"name": PERSONALIZED_TOOL_NAME}},
            )
            if not completion.tool_arguments:
                raise LLMProviderError("No tool call in response")
            logger.info(
                "Personalized insights received",
                model=completion.model,
                token_usage=completion.usage,
            )
            return completion.tool_arguments

        request = request_insights(
            _call,
            parse_personalized_insights,
            FALLBACK_PERSONALIZED_INSIGHTS,
            self._timeout,
        )
        if on_progress is None:
            return await request
        return await run_with_progress(INSIGHT_GENERATION_SCHEDULE, request, on_progress)

    async def generate_partner(
        self,
        intake: dict[str, Any],
        portfolio_items: list[dict[str, Any]],
        session_id: str | None = None,
    ) -> PartnerInsightsResult:
        """Generate narrative insights for a scored partner portfolio.

        Args:
            intake: Intake answers (firm_name, partner_type, objectives, urgency_window).
            portfolio_items: Scored rows with name, sector, cognitive_risk_score
                and recommendation.
            session_id: Optional correlation id echoed back in the metadata.

        Returns:
            PartnerInsightsResult; insights are never empty.
        """
        started = time.monotonic()
        stats = portfolio_stats(portfolio_items)
        prompt = build_partner_prompt(intake, stats)
        token_usage: dict[str, Any] = {}

        logger.info(
            "Generating partner insights",
            firm_name=intake.get("firm_name"),
            portfolio_size=stats.total_companies,
            session_id=session_id,
        )

        async def _call() -> str:
            nonlocal token_usage
            completion = await self._partner.complete(
                messages=[
                    {"role": "system", "content": PARTNER_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=self._partner_max_tokens,
                temperature=_PARTNER_TEMPERATURE,
            )
            token_usage = completion.usage
            if not completion.content:
                raise LLMProviderError("Empty completion content")
            return completion.content

        outcome = await request_insights(
            _call,
            parse_partner_insights,
            fallback_partner_insights(stats),
            self._timeout,
        )
        insights: PartnerInsights = outcome.value
        processing_time_ms = int((time.monotonic() - started) * 1000)

        logger.info(
            "Partner insights complete",
            validated=not outcome.is_fallback,
            processing_time_ms=processing_time_ms,
            session_id=session_id,
        )

        return PartnerInsightsResult(
            insights=insights.insights,
            validated=not outcome.is_fallback,
            model=self._partner.model,
            token_usage=token_usage,
            processing_time_ms=processing_time_ms,
            session_id=session_id,
            fallback_reason=outcome.reason if isinstance(outcome, Fallback) else None,
        )
