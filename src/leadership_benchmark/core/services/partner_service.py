"""Service layer orchestrating the partner portfolio assessment.

Implements the partner flow:
    1. submit_intake()     : validates and stores the intake form
    2. submit_portfolio()  : scores and stores the portfolio companies
    3. create_plan()       : snapshots intake, scores and summary as a plan;
       create_plan_with_insights() generates the narrative first
    4. create_share_link() : publishes a plan under an opaque slug
    5. get_shared_plan()   : read-only lookup by slug

All database access goes through repository interfaces.
"""

import dataclasses
import uuid
from typing import Any

from leadership_benchmark.core.interfaces import (
    IPartnerIntakeRepository,
    IPartnerPlanRepository,
    IPortfolioItemRepository,
)
from leadership_benchmark.core.intake import (
    PartnerIntake,
    estimate_sprint_candidates,
    validate_intake,
)
from leadership_benchmark.core.portfolio import (
    CATEGORICAL_FIELDS,
    PortfolioItem,
    ScoredPortfolioItem,
    is_complete,
    score_portfolio,
    summarize_portfolio,
)
from leadership_benchmark.core.services.insight_service import InsightService, PartnerInsightsResult
from leadership_benchmark.observability import get_logger

logger = get_logger(__name__)


class PartnerIntakeNotFoundError(Exception):
    """Raised when the requested intake does not exist."""


class PartnerPlanNotFoundError(Exception):
    """Raised when no plan matches the requested id or share slug."""


class InvalidPlanIdError(Exception):
    """Raised when a plan id is not a valid UUID."""


class IncompletePortfolioError(Exception):
    """Raised when a portfolio is empty or has rows with missing inputs."""

    def __init__(self, message: str, incomplete_rows: list[int] | None = None) -> None:
        super().__init__(message)
        self.incomplete_rows = incomplete_rows or []


class IntakeValidationError(Exception):
    """Raised when the intake form has field errors."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("Intake validation failed")
        self.errors = errors


@dataclasses.dataclass(frozen=True)
class PlanWithInsights:
    """A created plan and the insight result stored with it."""

    plan: Any
    insights: PartnerInsightsResult


def scored_item_to_dict(scored: ScoredPortfolioItem) -> dict[str, Any]:
    """Flatten a scored item into the row shape stored and returned by the API."""
    return {
        **dataclasses.asdict(scored.item),
        "cognitive_risk_score": scored.cognitive_risk_score,
        "capital_at_risk": scored.capital_at_risk,
        "cognitive_readiness": scored.cognitive_readiness,
        "fit_score": scored.fit_score,
        "recommendation": scored.recommendation.value,
        "risk_flags": list(scored.risk_flags),
    }


def _record_to_item(record: Any) -> PortfolioItem:
    return PortfolioItem(
        name=record.name,
        stage=record.stage or "",
        **{name: getattr(record, name) or "" for name in CATEGORICAL_FIELDS},
    )


def parse_plan_id(plan_id: str) -> uuid.UUID:
    """Parse a plan id, rejecting anything that is not a canonical UUID.

    Raises:
        InvalidPlanIdError: If ``plan_id`` is not a UUID.
    """
    try:
        return uuid.UUID(plan_id)
    except (ValueError, AttributeError, TypeError) as exc:
        raise InvalidPlanIdError("Invalid plan_id format. Must be a valid UUID.") from exc


class PartnerService:
    """Orchestrates partner intake, portfolio scoring and plan sharing."""

    def __init__(
        self,
        intake_repository: IPartnerIntakeRepository,
        item_repository: IPortfolioItemRepository,
        plan_repository: IPartnerPlanRepository,
        public_base_url: str,
    ) -> None:
        """Initialise the service with repository dependencies.

        Args:
            intake_repository: Repository for intake forms.
            item_repository: Repository for scored portfolio companies.
            plan_repository: Repository for computed plans.
            public_base_url: Base URL used to build share links.
        """
        self._intakes = intake_repository
        self._items = item_repository
        self._plans = plan_repository
        self._public_base_url = public_base_url.rstrip("/")

    async def submit_intake(self, intake: PartnerIntake) -> Any:
        """Validate and store an intake form.

        Args:
            intake: Intake answers.

        Returns:
            The created intake record.

        Raises:
            IntakeValidationError: If any field is invalid.
        """
        validation = validate_intake(intake)
        if not validation.is_valid:
            raise IntakeValidationError(validation.errors)

        record = await self._intakes.create(
            firm_name=intake.firm_name.strip(),
            partner_type=intake.partner_type or None,
            objectives=list(intake.objectives),
            pipeline_count=intake.pipeline_count,
            pipeline_names=intake.pipeline_names,
            urgency_window=intake.urgency_window,
            consent=intake.consent,
            contact_name=intake.contact_name or None,
            contact_email=intake.contact_email or None,
        )
        logger.info(
            "Partner intake stored",
            intake_id=str(record.id),
            pipeline_count=intake.pipeline_count,
            sprint_candidates=estimate_sprint_candidates(intake),
        )
        return record

    async def get_intake(self, intake_id: uuid.UUID) -> Any:
        """Return an intake.

        Raises:
            PartnerIntakeNotFoundError: If the intake does not exist.
        """
        record = await self._intakes.get_by_id(intake_id)
        if record is None:
            raise PartnerIntakeNotFoundError(f"Intake {intake_id} not found.")
        return record

    async def submit_portfolio(
        self,
        intake_id: uuid.UUID,
        items: list[PortfolioItem],
    ) -> list[ScoredPortfolioItem]:
        """Score and store the portfolio companies of an intake.

        Resubmitting replaces the previously stored companies.

        Args:
            intake_id: Owning intake.
            items: Companies in entry order; every row must be complete.

        Returns:
            The scored companies in entry order.

        Raises:
            PartnerIntakeNotFoundError: If the intake does not exist.
            IncompletePortfolioError: If the list is empty or a row is incomplete.
        """
        await self.get_intake(intake_id)

        if not items:
            raise IncompletePortfolioError("Add at least one portfolio company.")
        incomplete = [index for index, item in enumerate(items) if not is_complete(item)]
        if incomplete:
            raise IncompletePortfolioError(
                "Every portfolio company needs a name and all eight ratings.",
                incomplete_rows=incomplete,
            )

        scored = score_portfolio(items)
        await self._items.replace_for_intake(
            intake_id, [scored_item_to_dict(entry) for entry in scored]
        )
        logger.info(
            "Portfolio scored",
            intake_id=str(intake_id),
            companies=len(scored),
        )
        return scored

    async def list_scored_items(self, intake_id: uuid.UUID) -> list[ScoredPortfolioItem]:
        """Rescore the stored portfolio of an intake.

        Scores are recomputed from the stored inputs so callers always see
        the current scoring rules.

        Raises:
            PartnerIntakeNotFoundError: If the intake does not exist.
        """
        _, scored = await self._load_portfolio(intake_id)
        return scored

    async def create_plan(self, intake_id: uuid.UUID, insights: list[str] | None = None) -> Any:
        """Snapshot an intake and its scored portfolio as a plan.

        Args:
            intake_id: Intake to build the plan from.
            insights: Narrative insights to store with the plan.

        Returns:
            The created plan record.

        Raises:
            PartnerIntakeNotFoundError: If the intake does not exist.
            IncompletePortfolioError: If no portfolio has been submitted.
        """
        intake, scored = await self._load_plan_inputs(intake_id)
        return await self._snapshot_plan(intake_id, intake, scored, insights or [])

    async def create_plan_with_insights(
        self,
        intake_id: uuid.UUID,
        insight_service: InsightService,
    ) -> PlanWithInsights:
        """Generate portfolio insights, then snapshot them with the plan.

        Insight generation resolves to fallback content on provider failure,
        so a provider outage never blocks plan creation.

        Args:
            intake_id: Intake to build the plan from.
            insight_service: Generator for the portfolio narrative.

        Returns:
            The created plan and the insight result it was built with.

        Raises:
            PartnerIntakeNotFoundError: If the intake does not exist.
            IncompletePortfolioError: If no portfolio has been submitted.
        """
        intake, scored = await self._load_plan_inputs(intake_id)
        insights = await insight_service.generate_partner(
            intake={
                "firm_name": intake.firm_name,
                "partner_type": intake.partner_type,
                "objectives": list(intake.objectives_json or []),
                "urgency_window": intake.urgency_window,
            },
            portfolio_items=[scored_item_to_dict(entry) for entry in scored],
        )
        plan = await self._snapshot_plan(intake_id, intake, scored, insights.insights)
        return PlanWithInsights(plan=plan, insights=insights)

    async def _load_portfolio(self, intake_id: uuid.UUID) -> tuple[Any, list[ScoredPortfolioItem]]:
        intake = await self.get_intake(intake_id)
        records = await self._items.list_by_intake(intake_id)
        return intake, score_portfolio(_record_to_item(record) for record in records)

    async def _load_plan_inputs(self, intake_id: uuid.UUID) -> tuple[Any, list[ScoredPortfolioItem]]:
        intake, scored = await self._load_portfolio(intake_id)
        if not scored:
            raise IncompletePortfolioError("Submit the portfolio before creating a plan.")
        return intake, scored

    async def _snapshot_plan(
        self,
        intake_id: uuid.UUID,
        intake: Any,
        scored: list[ScoredPortfolioItem],
        insights: list[str],
    ) -> Any:
        summary = summarize_portfolio(scored)
        sprint_candidates = estimate_sprint_candidates(
            PartnerIntake(
                objectives=tuple(intake.objectives_json or ()),
                pipeline_count=intake.pipeline_count,
                urgency_window=intake.urgency_window,
            )
        )

        plan = await self._plans.create(
            intake_id,
            {
                "firm_name": intake.firm_name,
                "objectives_json": list(intake.objectives_json or []),
                "urgency_window": intake.urgency_window,
                "pipeline_count": intake.pipeline_count,
                "total_companies": summary.total_companies,
                "average_risk_score": summary.average_risk_score,
                "sprint_candidates": sprint_candidates,
                "recommendation_counts_json": {
                    bucket.value: count for bucket, count in summary.counts.items()
                },
                "top_candidates_json": [
                    scored_item_to_dict(entry) for entry in summary.top_risk_candidates
                ],
                "scored_items_json": [scored_item_to_dict(entry) for entry in scored],
                "insights_json": list(insights),
            },
        )
        logger.info(
            "Partner plan created",
            plan_id=str(plan.id),
            intake_id=str(intake_id),
            total_companies=summary.total_companies,
            average_risk_score=summary.average_risk_score,
        )
        return plan

    async def get_plan(self, plan_id: uuid.UUID) -> Any:
        """Return a plan by id.

        Raises:
            PartnerPlanNotFoundError: If the plan does not exist.
        """
        plan = await self._plans.get_by_id(plan_id)
        if plan is None:
            raise PartnerPlanNotFoundError("Plan not found")
        return plan

    async def create_share_link(self, plan_id: str) -> dict[str, str]:
        """Publish a plan under an opaque share slug.

        Repeated calls return the slug issued the first time.

        Args:
            plan_id: Plan id as received from the client.

        Returns:
            Dict with share_slug and share_url.

        Raises:
            InvalidPlanIdError: If plan_id is not a UUID.
            PartnerPlanNotFoundError: If the plan does not exist.
        """
        plan_uuid = parse_plan_id(plan_id)
        plan = await self.get_plan(plan_uuid)

        share_slug = plan.share_slug
        if not share_slug:
            share_slug = str(uuid.uuid4())
            await self._plans.set_share_slug(plan_uuid, share_slug)
            logger.info("Share link created", plan_id=str(plan_uuid)[:8])

        return {
            "share_slug": share_slug,
            "share_url": f"{self._public_base_url}/partners/plan/{share_slug}",
        }

    async def get_shared_plan(self, share_slug: str) -> Any:
        """Return the plan published under ``share_slug``.

        Raises:
            PartnerPlanNotFoundError: If no plan uses this slug.
        """
        plan = await self._plans.get_by_share_slug(share_slug)
        if plan is None:
            raise PartnerPlanNotFoundError("Plan not found")
        return plan
