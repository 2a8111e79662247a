"""Unit tests for PartnerService.

Repositories are AsyncMocks returning SimpleNamespace records, so no
database is needed.
"""

import dataclasses
import uuid
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

import pytest

from leadership_benchmark.core.intake import (
    OBJECTIVE_OPTIONS,
    PartnerIntake,
    estimate_sprint_candidates,
)
from leadership_benchmark.core.portfolio import PortfolioItem, Recommendation
from leadership_benchmark.core.services.insight_service import PartnerInsightsResult
from leadership_benchmark.core.services.partner_service import (
    IncompletePortfolioError,
    IntakeValidationError,
    InvalidPlanIdError,
    PartnerIntakeNotFoundError,
    PartnerPlanNotFoundError,
    PartnerService,
    parse_plan_id,
)

INTAKE_ID = uuid.UUID("7d0e4c1a-2b3f-4a5d-9e8c-112233445566")
PLAN_ID = uuid.UUID("9a8b7c6d-5e4f-4321-8765-abcdefabcdef")

HYPERTRAIN = PortfolioItem(
    name="Hypertrain",
    sector="Technology",
    stage="Series A",
    hype_vs_discipline="All Hype - No Framework",
    mental_scaffolding="None - Flying Blind",
    decision_quality="Poor - No Rigor",
    vendor_resistance="Zero - Believes Everything",
    pressure_intensity="Critical - Panic Mode",
    sponsor_thinking="Weak - Unclear",
    upgrade_willingness="Resistant - Defensive",
)

STEADYWORKS = PortfolioItem(
    name="Steadyworks",
    sector="Manufacturing",
    stage="Growth",
    hype_vs_discipline="Discipline Dominant",
    mental_scaffolding="Strong - Clear Frameworks",
    decision_quality="Strong - Systematic",
    vendor_resistance="High - Deeply Skeptical",
    pressure_intensity="Low - No Urgency",
    sponsor_thinking="Excellent - Sophisticated",
    upgrade_willingness="Eager - Hungry",
)


@pytest.fixture()
def intake() -> PartnerIntake:
    """A complete, valid intake."""
    return PartnerIntake(
        firm_name="  Harbor Ventures ",
        partner_type="VC/PE Firm",
        objectives=OBJECTIVE_OPTIONS[:2],
        pipeline_count=5,
        pipeline_names="Acme, Globex, Initech, Umbrella, Hooli",
        urgency_window="0-30 days",
        consent=True,
    )


@pytest.fixture()
def intake_record(intake: PartnerIntake) -> SimpleNamespace:
    """Stored intake as returned by the repository."""
    return SimpleNamespace(
        id=INTAKE_ID,
        firm_name="Harbor Ventures",
        partner_type=intake.partner_type,
        objectives_json=list(intake.objectives),
        pipeline_count=intake.pipeline_count,
        urgency_window=intake.urgency_window,
    )


@pytest.fixture()
def repositories(intake_record: SimpleNamespace) -> SimpleNamespace:
    """Intake, item and plan repositories with a single stored intake."""
    intakes = AsyncMock()
    intakes.create.return_value = intake_record
    intakes.get_by_id.side_effect = lambda intake_id: (
        intake_record if intake_id == INTAKE_ID else None
    )

    items = AsyncMock()
    items.list_by_intake.return_value = [
        SimpleNamespace(**dataclasses.asdict(HYPERTRAIN)),
        SimpleNamespace(**dataclasses.asdict(STEADYWORKS)),
    ]

    plans = AsyncMock()
    plans.create.side_effect = lambda intake_id, plan: SimpleNamespace(
        id=PLAN_ID, intake_id=intake_id, share_slug=None, **plan
    )
    return SimpleNamespace(intakes=intakes, items=items, plans=plans)


@pytest.fixture()
def service(repositories: SimpleNamespace) -> PartnerService:
    """PartnerService wired to the mock repositories."""
    return PartnerService(
        intake_repository=repositories.intakes,
        item_repository=repositories.items,
        plan_repository=repositories.plans,
        public_base_url="https://benchmark.example/",
    )


# ---------------------------------------------------------------------------
# Intake
# ---------------------------------------------------------------------------


class TestSubmitIntake:
    """Verify intake validation and storage."""

    @pytest.mark.asyncio()
    async def test_valid_intake_is_stored(
        self,
        service: PartnerService,
        repositories: SimpleNamespace,
        intake: PartnerIntake,
    ) -> None:
        """The firm name is trimmed and blank contact fields become None."""
        record = await service.submit_intake(intake)

        assert record.id == INTAKE_ID
        kwargs = repositories.intakes.create.call_args.kwargs
        assert kwargs["firm_name"] == "Harbor Ventures"
        assert kwargs["objectives"] == list(OBJECTIVE_OPTIONS[:2])
        assert kwargs["contact_name"] is None
        assert kwargs["contact_email"] is None

    @pytest.mark.asyncio()
    async def test_invalid_intake_raises_with_field_errors(
        self,
        service: PartnerService,
        repositories: SimpleNamespace,
        intake: PartnerIntake,
    ) -> None:
        """Nothing is stored when validation fails."""
        with pytest.raises(IntakeValidationError) as exc_info:
            await service.submit_intake(dataclasses.replace(intake, consent=False, firm_name=""))

        assert set(exc_info.value.errors) == {"consent", "firm_name"}
        repositories.intakes.create.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_unknown_intake_raises(self, service: PartnerService) -> None:
        """Lookups of unknown ids raise not-found."""
        with pytest.raises(PartnerIntakeNotFoundError):
            await service.get_intake(uuid.uuid4())


# ---------------------------------------------------------------------------
# Portfolio
# ---------------------------------------------------------------------------


class TestSubmitPortfolio:
    """Verify portfolio completeness checks and scoring."""

    @pytest.mark.asyncio()
    async def test_complete_portfolio_is_scored_and_replaced(
        self,
        service: PartnerService,
        repositories: SimpleNamespace,
    ) -> None:
        """Rows are scored in entry order and stored as flat dicts."""
        scored = await service.submit_portfolio(INTAKE_ID, [HYPERTRAIN, STEADYWORKS])

        assert [s.recommendation for s in scored] == [Recommendation.CRITICAL, Recommendation.LOW]
        intake_id, rows = repositories.items.replace_for_intake.call_args.args
        assert intake_id == INTAKE_ID
        assert rows[0]["name"] == "Hypertrain"
        assert rows[0]["recommendation"] == "Critical - Immediate Intervention"
        assert rows[0]["cognitive_risk_score"] == 100
        assert isinstance(rows[0]["risk_flags"], list)

    @pytest.mark.asyncio()
    async def test_empty_portfolio_is_rejected(self, service: PartnerService) -> None:
        """At least one company is required."""
        with pytest.raises(IncompletePortfolioError) as exc_info:
            await service.submit_portfolio(INTAKE_ID, [])
        assert exc_info.value.incomplete_rows == []

    @pytest.mark.asyncio()
    async def test_incomplete_rows_are_reported(
        self,
        service: PartnerService,
        repositories: SimpleNamespace,
    ) -> None:
        """Indexes of rows with missing ratings are returned."""
        partial = dataclasses.replace(STEADYWORKS, vendor_resistance="")

        with pytest.raises(IncompletePortfolioError) as exc_info:
            await service.submit_portfolio(INTAKE_ID, [HYPERTRAIN, partial])

        assert exc_info.value.incomplete_rows == [1]
        repositories.items.replace_for_intake.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_unknown_intake_is_rejected(self, service: PartnerService) -> None:
        """The intake must exist before its portfolio is stored."""
        with pytest.raises(PartnerIntakeNotFoundError):
            await service.submit_portfolio(uuid.uuid4(), [HYPERTRAIN])


# ---------------------------------------------------------------------------
# Plans and sharing
# ---------------------------------------------------------------------------


class TestCreatePlan:
    """Verify the plan snapshot."""

    @pytest.mark.asyncio()
    async def test_plan_snapshot(
        self,
        service: PartnerService,
        repositories: SimpleNamespace,
        intake: PartnerIntake,
    ) -> None:
        """The plan carries the summary, the scored rows and the insights."""
        plan = await service.create_plan(INTAKE_ID, ["Talk to Hypertrain first."])

        assert plan.id == PLAN_ID
        _, snapshot = repositories.plans.create.call_args.args
        assert snapshot["firm_name"] == "Harbor Ventures"
        assert snapshot["total_companies"] == 2
        assert snapshot["average_risk_score"] == 50
        assert snapshot["sprint_candidates"] == estimate_sprint_candidates(intake)
        assert snapshot["recommendation_counts_json"] == {
            "Critical - Immediate Intervention": 1,
            "High Risk - Scaffolding Required": 0,
            "Medium Risk - Decision Support": 0,
            "Low Risk - Monitor": 1,
        }
        assert [c["name"] for c in snapshot["top_candidates_json"]] == ["Hypertrain"]
        assert len(snapshot["scored_items_json"]) == 2
        assert snapshot["insights_json"] == ["Talk to Hypertrain first."]

    @pytest.mark.asyncio()
    async def test_plan_requires_portfolio(
        self,
        service: PartnerService,
        repositories: SimpleNamespace,
    ) -> None:
        """A plan cannot be built before the portfolio is submitted."""
        repositories.items.list_by_intake.return_value = []

        with pytest.raises(IncompletePortfolioError):
            await service.create_plan(INTAKE_ID)
        repositories.plans.create.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_plan_with_insights_loads_portfolio_once(
        self,
        service: PartnerService,
        repositories: SimpleNamespace,
    ) -> None:
        """Insights are generated from the stored rows and snapshotted with the plan."""
        insight_service = AsyncMock()
        insight_service.generate_partner.return_value = PartnerInsightsResult(
            insights=["Talk to Hypertrain first."], validated=True, model="partner-model"
        )

        created = await service.create_plan_with_insights(INTAKE_ID, insight_service)

        assert created.plan.id == PLAN_ID
        assert created.insights.model == "partner-model"
        repositories.intakes.get_by_id.assert_awaited_once_with(INTAKE_ID)
        repositories.items.list_by_intake.assert_awaited_once_with(INTAKE_ID)
        kwargs = insight_service.generate_partner.call_args.kwargs
        assert kwargs["intake"]["firm_name"] == "Harbor Ventures"
        assert kwargs["intake"]["partner_type"] == "VC/PE Firm"
        assert [row["name"] for row in kwargs["portfolio_items"]] == ["Hypertrain", "Steadyworks"]
        _, snapshot = repositories.plans.create.call_args.args
        assert snapshot["insights_json"] == ["Talk to Hypertrain first."]

    @pytest.mark.asyncio()
    async def test_no_insights_without_portfolio(
        self,
        service: PartnerService,
        repositories: SimpleNamespace,
    ) -> None:
        """The provider is not asked when there is nothing to plan."""
        repositories.items.list_by_intake.return_value = []
        insight_service = AsyncMock()

        with pytest.raises(IncompletePortfolioError):
            await service.create_plan_with_insights(INTAKE_ID, insight_service)
        insight_service.generate_partner.assert_not_awaited()
        repositories.plans.create.assert_not_awaited()


class TestShareLinks:
    """Verify share slug issuance and lookup."""

    @pytest.mark.asyncio()
    async def test_first_share_issues_slug(
        self,
        service: PartnerService,
        repositories: SimpleNamespace,
    ) -> None:
        """A new UUID slug is stored and the URL has no double slash."""
        repositories.plans.get_by_id.return_value = SimpleNamespace(id=PLAN_ID, share_slug=None)

        link = await service.create_share_link(str(PLAN_ID))

        uuid.UUID(link["share_slug"])
        assert link["share_url"] == f"https://benchmark.example/partners/plan/{link['share_slug']}"
        repositories.plans.set_share_slug.assert_awaited_once_with(PLAN_ID, link["share_slug"])

    @pytest.mark.asyncio()
    async def test_existing_slug_is_reused(
        self,
        service: PartnerService,
        repositories: SimpleNamespace,
    ) -> None:
        """Sharing twice returns the same link."""
        repositories.plans.get_by_id.return_value = SimpleNamespace(
            id=PLAN_ID, share_slug="existing-slug"
        )

        link = await service.create_share_link(str(PLAN_ID))

        assert link["share_slug"] == "existing-slug"
        repositories.plans.set_share_slug.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_invalid_plan_id_is_rejected(self, service: PartnerService) -> None:
        """Non-UUID ids never reach the repository."""
        with pytest.raises(InvalidPlanIdError):
            await service.create_share_link("not-a-uuid")

    @pytest.mark.asyncio()
    async def test_missing_plan_raises(
        self,
        service: PartnerService,
        repositories: SimpleNamespace,
    ) -> None:
        """Unknown plans and slugs raise not-found."""
        repositories.plans.get_by_id.return_value = None
        repositories.plans.get_by_share_slug.return_value = None

        with pytest.raises(PartnerPlanNotFoundError):
            await service.create_share_link(str(PLAN_ID))
        with pytest.raises(PartnerPlanNotFoundError):
            await service.get_shared_plan("missing")

    @pytest.mark.asyncio()
    async def test_shared_plan_lookup(
        self,
        service: PartnerService,
        repositories: SimpleNamespace,
    ) -> None:
        """A known slug returns its plan."""
        plan: Any = SimpleNamespace(id=PLAN_ID, share_slug="abc")
        repositories.plans.get_by_share_slug.return_value = plan

        assert await service.get_shared_plan("abc") is plan


@pytest.mark.parametrize("value", ["", "123", "zzzzzzzz-zzzz-zzzz-zzzz-zzzzzzzzzzzz"])
def test_parse_plan_id_rejects_non_uuids(value: str) -> None:
    """Only UUID strings are accepted."""
    with pytest.raises(InvalidPlanIdError):
        parse_plan_id(value)
