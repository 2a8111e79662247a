"""FastAPI router for the partner portfolio assessment.

All routes are thin: they parse inputs, build dependencies, delegate to
PartnerService and InsightService, and serialise responses.

API prefix: /api/v1/partners
Auth: None; plans are reachable by id, or publicly by share slug.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from leadership_benchmark.adapters.repositories.partner_repository import (
    PartnerIntakeRepository,
    PartnerPlanRepository,
    PortfolioItemRepository,
)
from leadership_benchmark.api.rate_limit import partners_rate_limit
from leadership_benchmark.api.routes.insights import get_insight_service
from leadership_benchmark.api.schemas.partners import (
    CreatePlanResponse,
    IntakeEstimateResponse,
    PartnerIntakeRequest,
    PartnerIntakeResponse,
    PartnerPlanResponse,
    PlanInsightsMeta,
    PortfolioPreviewResponse,
    PortfolioRequest,
    PortfolioSubmitResponse,
    PortfolioSummarySchema,
    ScoredItemSchema,
    ShareLinkRequest,
    ShareLinkResponse,
)
from leadership_benchmark.core.intake import (
    OBJECTIVE_OPTIONS,
    PARTNER_TYPES,
    URGENCY_WINDOWS,
    estimate_sprint_candidates,
    parse_pipeline_names,
    urgency_label,
    validate_intake,
)
from leadership_benchmark.core.partner_flow import scoring_progress
from leadership_benchmark.core.portfolio import (
    FIELD_OPTIONS,
    ScoredPortfolioItem,
    is_complete,
    live_preview,
    summarize_portfolio,
)
from leadership_benchmark.core.services.insight_service import InsightService
from leadership_benchmark.core.services.partner_service import (
    IncompletePortfolioError,
    IntakeValidationError,
    InvalidPlanIdError,
    PartnerIntakeNotFoundError,
    PartnerPlanNotFoundError,
    PartnerService,
    scored_item_to_dict,
)
from leadership_benchmark.database import get_db_session
from leadership_benchmark.observability import get_logger
from leadership_benchmark.settings import Settings, get_settings

logger = get_logger(__name__)

router = APIRouter(
    prefix="/partners",
    tags=["Partner Portfolio"],
    dependencies=[Depends(partners_rate_limit)],
)


# ---------------------------------------------------------------------------
# Dependency factory
# ---------------------------------------------------------------------------


def get_partner_service(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> PartnerService:
    """Build PartnerService with injected repository dependencies.

    Args:
        session: Async SQLAlchemy session from the database pool.
        settings: Service settings.

    Returns:
        Configured PartnerService instance.
    """
    return PartnerService(
        intake_repository=PartnerIntakeRepository(session),
        item_repository=PortfolioItemRepository(session),
        plan_repository=PartnerPlanRepository(session),
        public_base_url=settings.public_base_url,
    )


def _summary_schema(scored: list[ScoredPortfolioItem]) -> PortfolioSummarySchema:
    summary = summarize_portfolio(scored)
    return PortfolioSummarySchema(
        total_companies=summary.total_companies,
        average_risk_score=summary.average_risk_score,
        recommendation_counts={bucket.value: count for bucket, count in summary.counts.items()},
        top_candidates=[
            ScoredItemSchema(**scored_item_to_dict(entry)) for entry in summary.top_risk_candidates
        ],
    )


def _scored_schemas(scored: list[ScoredPortfolioItem]) -> list[ScoredItemSchema]:
    return [ScoredItemSchema(**scored_item_to_dict(entry)) for entry in scored]


# ---------------------------------------------------------------------------
# Intake
# ---------------------------------------------------------------------------


@router.get("/form-options", summary="Option catalogues for the intake and portfolio forms")
async def partner_form_options() -> dict[str, list[str] | dict[str, list[str]]]:
    """Return intake dropdowns and the eight portfolio rating scales."""
    return {
        "partner_types": list(PARTNER_TYPES),
        "objectives": list(OBJECTIVE_OPTIONS),
        "urgency_windows": list(URGENCY_WINDOWS),
        "portfolio_fields": {name: list(options) for name, options in FIELD_OPTIONS.items()},
    }


@router.post(
    "/intakes/estimate",
    response_model=IntakeEstimateResponse,
    summary="Live estimate for a partially filled intake form",
)
async def estimate_intake(body: PartnerIntakeRequest) -> IntakeEstimateResponse:
    """Parse pipeline names, estimate sprint candidates and validate the form."""
    intake = body.to_intake()
    validation = validate_intake(intake)
    return IntakeEstimateResponse(
        pipeline_names=parse_pipeline_names(intake.pipeline_names),
        sprint_candidates=estimate_sprint_candidates(intake),
        urgency_label=urgency_label(intake.urgency_window),
        errors=dict(validation.errors),
        is_valid=validation.is_valid,
    )


@router.post(
    "/intakes",
    response_model=PartnerIntakeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit the partner intake form",
)
async def submit_intake(
    body: PartnerIntakeRequest,
    service: PartnerService = Depends(get_partner_service),
) -> PartnerIntakeResponse:
    """Validate and store an intake; field errors are returned together as 422."""
    intake = body.to_intake()
    try:
        record = await service.submit_intake(intake)
    except IntakeValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"errors": exc.errors},
        ) from exc

    return PartnerIntakeResponse(
        id=record.id,
        firm_name=record.firm_name,
        partner_type=record.partner_type,
        pipeline_count=record.pipeline_count,
        urgency_window=record.urgency_window,
        created_at=record.created_at,
        sprint_candidates=estimate_sprint_candidates(intake),
        urgency_label=urgency_label(intake.urgency_window),
    )


# ---------------------------------------------------------------------------
# Portfolio
# ---------------------------------------------------------------------------


@router.post(
    "/portfolio/preview",
    response_model=PortfolioPreviewResponse,
    summary="Score complete portfolio rows without storing them",
)
async def preview_portfolio(body: PortfolioRequest) -> PortfolioPreviewResponse:
    """Score every complete row as it is filled in; incomplete rows are listed."""
    items = [entry.to_item() for entry in body.items]
    scored = live_preview(items)
    return PortfolioPreviewResponse(
        items=_scored_schemas(scored),
        incomplete_rows=[index for index, item in enumerate(items) if not is_complete(item)],
        progress_percentage=scoring_progress(tuple(items)),
        summary=_summary_schema(scored),
    )


@router.post(
    "/intakes/{intake_id}/portfolio",
    response_model=PortfolioSubmitResponse,
    summary="Score and store the portfolio companies of an intake",
)
async def submit_portfolio(
    body: PortfolioRequest,
    intake_id: uuid.UUID = Path(..., description="Partner intake UUID"),
    service: PartnerService = Depends(get_partner_service),
) -> PortfolioSubmitResponse:
    """Replace the stored portfolio of an intake with the submitted rows."""
    try:
        scored = await service.submit_portfolio(
            intake_id, [entry.to_item() for entry in body.items]
        )
    except PartnerIntakeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except IncompletePortfolioError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": str(exc), "incomplete_rows": exc.incomplete_rows},
        ) from exc

    return PortfolioSubmitResponse(
        intake_id=intake_id,
        items=_scored_schemas(scored),
        summary=_summary_schema(scored),
    )


# ---------------------------------------------------------------------------
# Plans and share links
# ---------------------------------------------------------------------------


@router.post(
    "/intakes/{intake_id}/plan",
    response_model=CreatePlanResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a plan with narrative insights",
)
async def create_plan(
    intake_id: uuid.UUID = Path(..., description="Partner intake UUID"),
    service: PartnerService = Depends(get_partner_service),
    insight_service: InsightService = Depends(get_insight_service),
) -> CreatePlanResponse:
    """Generate portfolio insights and snapshot everything as a plan.

    Insight generation falls back to deterministic content, so a provider
    outage never blocks plan creation.
    """
    try:
        created = await service.create_plan_with_insights(intake_id, insight_service)
    except PartnerIntakeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except IncompletePortfolioError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    insights = created.insights
    return CreatePlanResponse(
        plan=PartnerPlanResponse.model_validate(created.plan),
        insights_meta=PlanInsightsMeta(
            validated=insights.validated,
            model=insights.model,
            fallback_reason=insights.fallback_reason.value if insights.fallback_reason else None,
        ),
    )


@router.get(
    "/plans/{plan_id}",
    response_model=PartnerPlanResponse,
    summary="Retrieve a plan by id",
)
async def get_plan(
    plan_id: uuid.UUID = Path(..., description="Partner plan UUID"),
    service: PartnerService = Depends(get_partner_service),
) -> PartnerPlanResponse:
    """Return a stored plan."""
    try:
        plan = await service.get_plan(plan_id)
    except PartnerPlanNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return PartnerPlanResponse.model_validate(plan)


@router.post(
    "/share-link",
    response_model=ShareLinkResponse,
    summary="Publish a plan under an opaque share slug",
)
async def create_share_link(
    body: ShareLinkRequest,
    service: PartnerService = Depends(get_partner_service),
) -> ShareLinkResponse:
    """Return the plan's share slug and public URL, issuing one if needed."""
    try:
        link = await service.create_share_link(body.plan_id)
    except InvalidPlanIdError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except PartnerPlanNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    return ShareLinkResponse(**link)


@router.get(
    "/plans/shared/{share_slug}",
    response_model=PartnerPlanResponse,
    summary="Retrieve a shared plan",
)
async def get_shared_plan(
    share_slug: str = Path(..., max_length=64, description="Share slug"),
    service: PartnerService = Depends(get_partner_service),
) -> PartnerPlanResponse:
    """Return the read-only plan published under a share slug."""
    try:
        plan = await service.get_shared_plan(share_slug)
    except PartnerPlanNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return PartnerPlanResponse.model_validate(plan)
