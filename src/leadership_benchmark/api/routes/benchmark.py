"""FastAPI router for the leadership benchmark funnel.

All routes are thin and stateless: they parse inputs, call the pure scoring
functions and serialise responses. No business logic lives here.

API prefix: /api/v1/benchmark
Auth: None; this is an anonymous self-service flow.
"""

import dataclasses

from fastapi import APIRouter, Depends, HTTPException, status

from leadership_benchmark.api.rate_limit import scoring_rate_limit
from leadership_benchmark.api.schemas.benchmark import (
    AnswersRequest,
    ComparisonRequest,
    ComparisonResponse,
    ContactSchema,
    ContactValidationResponse,
    DeepProfileSchema,
    DeepProfileStepConfig,
    DeepProfileValidationResponse,
    DimensionSchema,
    ExecutiveReadinessResponse,
    FormOptionsResponse,
    FreeTextAssessmentRequest,
    LeadPriorityRequest,
    LeadPriorityResponse,
    LeadScoreRequest,
    LeadScoreResponse,
    LiteracyResponse,
    ProgressResponse,
    QuestionListResponse,
    QuestionSchema,
    RebalanceRequest,
    RebalanceResponse,
    ScoreResponse,
    ServiceRecommendationSchema,
)
from leadership_benchmark.core.benchmark_flow import (
    BenchmarkFlowState,
    answer_question,
    progress,
)
from leadership_benchmark.core.comparison import derive_comparison
from leadership_benchmark.core.contact import ContactOutcome, submit_contact
from leadership_benchmark.core.deep_profile import (
    ALLOCATION_MAX_TOTAL,
    ALLOCATION_MIN_TOTAL,
    AUTO_ADVANCE_STEPS,
    DEEP_PROFILE_STEPS,
    is_complete,
    is_step_valid,
    rebalance,
)
from leadership_benchmark.core.qualification import (
    EngagementInput,
    QualificationInput,
    calculate_lead_priority,
    calculate_lead_score,
)
from leadership_benchmark.core.questions import (
    BENCHMARK_QUESTIONS,
    BIGGEST_CHALLENGE_OPTIONS,
    COMMUNICATION_STYLE_OPTIONS,
    COMPANY_SIZE_OPTIONS,
    DELEGATE_TASK_OPTIONS,
    INFORMATION_NEEDS_OPTIONS,
    LIKERT_OPTIONS,
    PRIMARY_FOCUS_OPTIONS,
    REQUIRED_DELEGATE_TASKS,
    STAKEHOLDER_OPTIONS,
    THINKING_PROCESS_OPTIONS,
    TIMELINE_OPTIONS,
    TRANSFORMATION_GOAL_OPTIONS,
    WORK_BREAKDOWN_FIELDS,
)
from leadership_benchmark.core.readiness import assess_executive_readiness, assess_literacy
from leadership_benchmark.core.scoring import benchmark_score, leadership_tier
from leadership_benchmark.observability import get_logger
from leadership_benchmark.settings import Settings, get_settings

logger = get_logger(__name__)

router = APIRouter(
    prefix="/benchmark",
    tags=["Leadership Benchmark"],
    dependencies=[Depends(scoring_rate_limit)],
)


# ---------------------------------------------------------------------------
# Benchmark statements, score and progress
# ---------------------------------------------------------------------------


@router.get(
    "/questions",
    response_model=QuestionListResponse,
    summary="List the six benchmark statements",
)
async def list_questions() -> QuestionListResponse:
    """Return the benchmark statements in presentation order."""
    return QuestionListResponse(
        questions=[
            QuestionSchema(question_id=q.question_id, text=q.text, phase=q.phase)
            for q in BENCHMARK_QUESTIONS
        ],
        answer_options=list(LIKERT_OPTIONS),
        total_questions=len(BENCHMARK_QUESTIONS),
    )


@router.post(
    "/score",
    response_model=ScoreResponse,
    summary="Score benchmark answers and assign a tier",
)
async def score_answers(body: AnswersRequest) -> ScoreResponse:
    """Sum the leading values of the answers and look up the tier.

    Answers without a leading integer contribute nothing; the tier table
    uses the 25/19/13 cutoffs.
    """
    score = benchmark_score(body.answers)
    tier = leadership_tier(score)

    logger.info("Benchmark scored", score=score, tier=tier.label)

    return ScoreResponse(
        score=score,
        tier=tier.label,
        min_score=tier.min_score,
        message=tier.message,
        growth_readiness=tier.growth_readiness,
        stage=tier.stage,
        sub_scores=dict(tier.sub_scores),
    )


@router.post(
    "/progress",
    response_model=ProgressResponse,
    summary="Progress through the benchmark statements",
)
async def benchmark_progress(body: AnswersRequest) -> ProgressResponse:
    """Replay the answers in statement order and report progress."""
    state = BenchmarkFlowState()
    for question in BENCHMARK_QUESTIONS:
        value = body.answers.get(question.question_id)
        if value is None:
            break
        state = answer_question(state, question.question_id, value)

    figures = progress(state)
    current = state.current_question
    return ProgressResponse(
        completed_answers=figures.completed_answers,
        total_questions=figures.total_questions,
        progress_percentage=figures.progress_percentage,
        estimated_minutes_remaining=figures.estimated_minutes_remaining,
        is_complete=state.is_complete,
        next_question_id=current.question_id if current else None,
    )


@router.post(
    "/comparison",
    response_model=ComparisonResponse,
    summary="Derive the six leadership comparison dimensions",
)
async def leadership_comparison(body: ComparisonRequest) -> ComparisonResponse:
    """Classify each dimension from the answers and the optional deep profile."""
    profile = body.deep_profile.to_profile() if body.deep_profile else None
    comparison = derive_comparison(body.answers, profile)
    return ComparisonResponse(
        dimensions=[DimensionSchema(**dataclasses.asdict(d)) for d in comparison.dimensions],
        overall_maturity=comparison.overall_maturity,
    )


# ---------------------------------------------------------------------------
# Keyword-bag assessment variants
# ---------------------------------------------------------------------------


@router.post(
    "/literacy",
    response_model=LiteracyResponse,
    summary="Score the AI literacy assessment",
)
async def literacy_assessment(body: FreeTextAssessmentRequest) -> LiteracyResponse:
    """Score free-text answers on the four literacy dimensions."""
    result = assess_literacy(body.answers, body.industry)
    return LiteracyResponse(**dataclasses.asdict(result))


@router.post(
    "/executive-readiness",
    response_model=ExecutiveReadinessResponse,
    summary="Score the executive readiness assessment",
)
async def executive_readiness_assessment(
    body: FreeTextAssessmentRequest,
) -> ExecutiveReadinessResponse:
    """Score free-text answers on the four readiness dimensions."""
    result = assess_executive_readiness(body.answers, body.industry)
    return ExecutiveReadinessResponse(**dataclasses.asdict(result))


# ---------------------------------------------------------------------------
# Contact capture and lead scoring
# ---------------------------------------------------------------------------


@router.post(
    "/contact/validate",
    response_model=ContactValidationResponse,
    summary="Validate the contact form",
)
async def validate_contact_form(body: ContactSchema) -> ContactValidationResponse:
    """Return field errors, or whether the role routes to the disqualified branch."""
    submission = submit_contact(body.to_details())
    if submission.outcome is ContactOutcome.DISQUALIFIED:
        logger.info("Contact disqualified by role", role_title=body.role_title)
    return ContactValidationResponse(
        outcome=submission.outcome.value,
        errors=dict(submission.errors),
    )


@router.post(
    "/lead-priority",
    response_model=LeadPriorityResponse,
    summary="Rank a benchmark contact into an A, B or C tier",
)
async def lead_priority(body: LeadPriorityRequest) -> LeadPriorityResponse:
    """Compute lead priority points from the contact and benchmark score."""
    score = benchmark_score(body.answers)
    priority = calculate_lead_priority(body.contact.to_details(), score)
    return LeadPriorityResponse(**dataclasses.asdict(priority), benchmark_score=score)


@router.post(
    "/lead-score",
    response_model=LeadScoreResponse,
    summary="Compute the lead qualification score",
)
async def lead_score(body: LeadScoreRequest) -> LeadScoreResponse:
    """Score a conversational-assessment lead and recommend services."""
    qualification = body.qualification.model_dump()
    qualification["primary_pain_points"] = tuple(qualification["primary_pain_points"])
    result = calculate_lead_score(
        QualificationInput(**qualification),
        EngagementInput(**body.engagement.model_dump()),
    )

    logger.info(
        "Lead scored",
        overall=result.overall,
        recommendations=len(result.recommendations),
    )

    return LeadScoreResponse(
        overall=result.overall,
        qualification=result.qualification,
        readiness=result.readiness,
        engagement=result.engagement,
        recommendations=[
            ServiceRecommendationSchema(**dataclasses.asdict(rec))
            for rec in result.recommendations
        ],
    )


# ---------------------------------------------------------------------------
# Deep profile helpers
# ---------------------------------------------------------------------------


@router.post(
    "/deep-profile/rebalance",
    response_model=RebalanceResponse,
    summary="Move one work-breakdown slider",
)
async def rebalance_work_breakdown(body: RebalanceRequest) -> RebalanceResponse:
    """Set one allocation and redistribute the remainder proportionally.

    The total may land on 99 or 101 after rounding; the 95-105 band still
    counts as valid.
    """
    try:
        breakdown = rebalance(body.work_breakdown, body.changed_field, body.value)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown allocation field: {body.changed_field}",
        ) from exc

    total = sum(breakdown.values())
    return RebalanceResponse(
        work_breakdown=breakdown,
        total=total,
        is_valid=ALLOCATION_MIN_TOTAL <= total <= ALLOCATION_MAX_TOTAL,
    )


@router.post(
    "/deep-profile/validate",
    response_model=DeepProfileValidationResponse,
    summary="Check which deep profile steps are complete",
)
async def validate_deep_profile(body: DeepProfileSchema) -> DeepProfileValidationResponse:
    """Evaluate every step's validity rule against the submitted answers."""
    profile = body.to_profile()
    return DeepProfileValidationResponse(
        step_validity={
            step: is_step_valid(step, profile) for step in range(1, DEEP_PROFILE_STEPS + 1)
        },
        is_complete=is_complete(profile),
    )


@router.get(
    "/form-options",
    response_model=FormOptionsResponse,
    summary="Option catalogues for the contact form and deep profile",
)
async def form_options(settings: Settings = Depends(get_settings)) -> FormOptionsResponse:
    """Return dropdown and multi-select options plus the wizard pacing."""
    return FormOptionsResponse(
        contact={
            "company_size": list(COMPANY_SIZE_OPTIONS),
            "primary_focus": list(PRIMARY_FOCUS_OPTIONS),
            "timeline": list(TIMELINE_OPTIONS),
        },
        deep_profile={
            "thinking_process": dict(THINKING_PROCESS_OPTIONS),
            "communication_style": dict(COMMUNICATION_STYLE_OPTIONS),
            "work_breakdown": list(WORK_BREAKDOWN_FIELDS),
            "information_needs": list(INFORMATION_NEEDS_OPTIONS),
            "transformation_goal": dict(TRANSFORMATION_GOAL_OPTIONS),
            "delegate_tasks": list(DELEGATE_TASK_OPTIONS),
            "biggest_challenge": dict(BIGGEST_CHALLENGE_OPTIONS),
            "stakeholders": list(STAKEHOLDER_OPTIONS),
        },
        deep_profile_steps=DeepProfileStepConfig(
            total_steps=DEEP_PROFILE_STEPS,
            auto_advance_steps=sorted(AUTO_ADVANCE_STEPS),
            auto_advance_delay_seconds=settings.auto_advance_delay_seconds,
            required_delegate_tasks=REQUIRED_DELEGATE_TASKS,
        ),
    )
