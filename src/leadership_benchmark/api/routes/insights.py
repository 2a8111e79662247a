"""FastAPI router for LLM-generated insights.

The generation endpoints always answer 200 with schema-valid content:
provider failures resolve to fallback content inside InsightService, and the
response says which path was taken. The loading-screen progress schedules are
published alongside them.

API prefix: /api/v1/insights
"""

from fastapi import APIRouter, Depends

from leadership_benchmark.adapters.llm_gateway import ChatCompletionsGateway
from leadership_benchmark.api.rate_limit import insights_rate_limit
from leadership_benchmark.api.schemas.insights import (
    InsightMetaSchema,
    PartnerInsightsRequest,
    PartnerInsightsResponse,
    PersonalizedInsightsRequest,
    PersonalizedInsightsResponse,
    ProgressScheduleSchema,
    ProgressSchedulesResponse,
)
from leadership_benchmark.core.insights import Fallback
from leadership_benchmark.core.progress import (
    INSIGHT_GENERATION_SCHEDULE,
    PHASE_ANALYZING,
    PHASE_FINALIZING,
    PHASE_GENERATING,
    PROMPT_LIBRARY_SCHEDULE,
    ProgressSchedule,
)
from leadership_benchmark.core.services.insight_service import InsightService
from leadership_benchmark.observability import get_logger
from leadership_benchmark.settings import Settings, get_settings

logger = get_logger(__name__)

router = APIRouter(
    prefix="/insights",
    tags=["Insights"],
    dependencies=[Depends(insights_rate_limit)],
)


# ---------------------------------------------------------------------------
# Dependency factory
# ---------------------------------------------------------------------------


def get_insight_service(settings: Settings = Depends(get_settings)) -> InsightService:
    """Build InsightService with one gateway per provider.

    Args:
        settings: Service settings.

    Returns:
        Configured InsightService instance.
    """
    return InsightService(
        personalized_gateway=ChatCompletionsGateway(
            url=settings.llm_gateway_url,
            api_key=settings.llm_api_key,
            model=settings.llm_model,
        ),
        partner_gateway=ChatCompletionsGateway(
            url=settings.partner_llm_url,
            api_key=settings.partner_llm_api_key,
            model=settings.partner_llm_model,
        ),
        timeout_seconds=settings.insight_timeout_seconds,
        partner_max_tokens=settings.partner_llm_max_tokens,
    )


# ---------------------------------------------------------------------------
# Insight endpoints
# ---------------------------------------------------------------------------


@router.post(
    "/personalized",
    response_model=PersonalizedInsightsResponse,
    summary="Generate personalized leadership insights",
)
async def personalized_insights(
    body: PersonalizedInsightsRequest,
    service: InsightService = Depends(get_insight_service),
) -> PersonalizedInsightsResponse:
    """Generate growth readiness, stage, focus and a 90-day roadmap.

    When the provider fails, times out or returns content that fails
    validation, the fixed fallback insights are returned with
    ``validated=false`` and the reason.
    """
    outcome = await service.generate_personalized(
        answers=body.assessment_data,
        contact=body.contact_data.model_dump(),
        deep_profile=(
            body.deep_profile_data.model_dump() if body.deep_profile_data is not None else None
        ),
    )

    return PersonalizedInsightsResponse(
        personalized_insights=outcome.value,
        validated=not outcome.is_fallback,
        fallback_reason=outcome.reason if isinstance(outcome, Fallback) else None,
    )


@router.post(
    "/partner",
    response_model=PartnerInsightsResponse,
    summary="Generate narrative insights for a partner portfolio",
)
async def partner_insights(
    body: PartnerInsightsRequest,
    service: InsightService = Depends(get_insight_service),
) -> PartnerInsightsResponse:
    """Generate up to five insights about which portfolio teams need help first."""
    result = await service.generate_partner(
        intake=body.intake_data.model_dump(),
        portfolio_items=[item.model_dump() for item in body.portfolio_items],
        session_id=body.session_id,
    )

    return PartnerInsightsResponse(
        insights=result.insights,
        meta=InsightMetaSchema(
            validated=result.validated,
            model=result.model,
            token_usage=result.token_usage,
            processing_time_ms=result.processing_time_ms,
            session_id=result.session_id,
            fallback_reason=result.fallback_reason,
        ),
    )


def _schedule_schema(schedule: ProgressSchedule) -> ProgressScheduleSchema:
    return ProgressScheduleSchema(
        start=schedule.start,
        interval_seconds=schedule.interval_seconds,
        increments=list(schedule.increments),
        generating_at=schedule.generating_at,
        finalizing_at=schedule.finalizing_at,
        phases=[PHASE_ANALYZING, PHASE_GENERATING, PHASE_FINALIZING],
    )


@router.get(
    "/progress-schedules",
    response_model=ProgressSchedulesResponse,
    summary="Loading-screen progress schedules",
)
async def progress_schedules() -> ProgressSchedulesResponse:
    """Return the cosmetic progress schedules; clients show 100 only once the request resolves."""
    return ProgressSchedulesResponse(
        insight_generation=_schedule_schema(INSIGHT_GENERATION_SCHEDULE),
        prompt_library=_schedule_schema(PROMPT_LIBRARY_SCHEDULE),
    )
