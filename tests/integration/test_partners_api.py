"""Integration tests for the partner portfolio API.

PartnerService is built on AsyncMock repositories returning mock
records, and the insight service on fake gateways, so the whole flow from
intake to shared plan runs without a database or provider.
"""

import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import status
from httpx import AsyncClient

from leadership_benchmark.api.routes.insights import get_insight_service
from leadership_benchmark.api.routes.partners import get_partner_service
from leadership_benchmark.core.intake import OBJECTIVE_OPTIONS
from leadership_benchmark.core.services.insight_service import InsightService
from leadership_benchmark.core.services.partner_service import PartnerService
from leadership_benchmark.main import app

_PREFIX = "/api/v1/partners"
_INTAKE_ID = uuid.UUID("bbbbbbbb-bbbb-4bbb-8bbb-bbbbbbbbbbbb")
_PLAN_ID = uuid.UUID("cccccccc-cccc-4ccc-8ccc-cccccccccccc")
_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

_INTAKE_REQUEST: dict[str, Any] = {
    "firm_name": "Harbor Ventures",
    "partner_type": "VC/PE Firm",
    "objectives": list(OBJECTIVE_OPTIONS[:2]),
    "pipeline_count": 3,
    "pipeline_names": "Hypertrain, Steadyworks, Midline",
    "urgency_window": "0-30 days",
    "consent": True,
}

_HYPERTRAIN: dict[str, str] = {
    "name": "Hypertrain",
    "sector": "Technology",
    "stage": "Series A",
    "hype_vs_discipline": "All Hype - No Framework",
    "mental_scaffolding": "None - Flying Blind",
    "decision_quality": "Poor - No Rigor",
    "vendor_resistance": "Zero - Believes Everything",
    "pressure_intensity": "Critical - Panic Mode",
    "sponsor_thinking": "Weak - Unclear",
    "upgrade_willingness": "Resistant - Defensive",
}

_STEADYWORKS: dict[str, str] = {
    "name": "Steadyworks",
    "sector": "Manufacturing",
    "stage": "Growth",
    "hype_vs_discipline": "Discipline Dominant",
    "mental_scaffolding": "Strong - Clear Frameworks",
    "decision_quality": "Strong - Systematic",
    "vendor_resistance": "High - Deeply Skeptical",
    "pressure_intensity": "Low - No Urgency",
    "sponsor_thinking": "Excellent - Sophisticated",
    "upgrade_willingness": "Eager - Hungry",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _intake_record() -> MagicMock:
    """Build a mock PartnerIntakeRecord ORM-like object."""
    record = MagicMock()
    record.id = _INTAKE_ID
    record.firm_name = _INTAKE_REQUEST["firm_name"]
    record.partner_type = _INTAKE_REQUEST["partner_type"]
    record.objectives_json = _INTAKE_REQUEST["objectives"]
    record.pipeline_count = _INTAKE_REQUEST["pipeline_count"]
    record.urgency_window = _INTAKE_REQUEST["urgency_window"]
    record.created_at = _NOW
    return record


def _plan_record(intake_id: uuid.UUID, plan: dict[str, Any]) -> SimpleNamespace:
    """Build a plan record with the attributes PartnerPlanResponse reads."""
    return SimpleNamespace(
        id=_PLAN_ID, intake_id=intake_id, share_slug=None, created_at=_NOW, **plan
    )


@pytest.fixture()
def repositories() -> MagicMock:
    """Mock repositories holding one intake and a two-company portfolio."""
    repos = MagicMock()
    repos.intakes = AsyncMock()
    repos.intakes.create.return_value = _intake_record()
    repos.intakes.get_by_id.side_effect = lambda intake_id: (
        _intake_record() if intake_id == _INTAKE_ID else None
    )

    repos.items = AsyncMock()
    repos.items.list_by_intake.return_value = [
        SimpleNamespace(**_HYPERTRAIN),
        SimpleNamespace(**_STEADYWORKS),
    ]

    repos.plans = AsyncMock()
    repos.plans.create.side_effect = _plan_record
    return repos


@pytest.fixture()
def partner_overrides(
    repositories: MagicMock,
    gateway_factory: Callable[..., AsyncMock],
) -> MagicMock:
    """Install PartnerService and InsightService overrides."""
    app.dependency_overrides[get_partner_service] = lambda: PartnerService(
        intake_repository=repositories.intakes,
        item_repository=repositories.items,
        plan_repository=repositories.plans,
        public_base_url="https://benchmark.example",
    )
    app.dependency_overrides[get_insight_service] = lambda: InsightService(
        personalized_gateway=gateway_factory(),
        partner_gateway=gateway_factory(
            content='{"insights": ["Call Hypertrain this week."]}', model="partner-model"
        ),
        timeout_seconds=5.0,
    )
    return repositories


# ---------------------------------------------------------------------------
# Intake
# ---------------------------------------------------------------------------


class TestIntakeEndpoints:
    """Intake estimate and submission."""

    @pytest.mark.asyncio()
    async def test_estimate_parses_names(self, client: AsyncClient) -> None:
        """The live estimate needs no persistence."""
        response = await client.post(f"{_PREFIX}/intakes/estimate", json=_INTAKE_REQUEST)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["pipeline_names"] == ["Hypertrain", "Steadyworks", "Midline"]
        assert data["urgency_label"] == "Immediate"
        assert data["is_valid"] is True
        assert 0 <= data["sprint_candidates"] <= 3

    @pytest.mark.asyncio()
    async def test_submit_intake_created(
        self,
        client: AsyncClient,
        partner_overrides: MagicMock,
    ) -> None:
        """A valid intake is stored and echoed back."""
        response = await client.post(f"{_PREFIX}/intakes", json=_INTAKE_REQUEST)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["id"] == str(_INTAKE_ID)
        assert data["firm_name"] == "Harbor Ventures"
        partner_overrides.intakes.create.assert_awaited_once()

    @pytest.mark.asyncio()
    async def test_invalid_intake_returns_field_errors(
        self,
        client: AsyncClient,
        partner_overrides: MagicMock,
    ) -> None:
        """All field errors are returned together."""
        response = await client.post(f"{_PREFIX}/intakes", json={"firm_name": "Harbor"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        errors = response.json()["detail"]["errors"]
        assert {"objectives", "pipeline_count", "consent"} <= set(errors)
        partner_overrides.intakes.create.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_form_options(self, client: AsyncClient) -> None:
        """Eight rating scales are published with the intake dropdowns."""
        response = await client.get(f"{_PREFIX}/form-options")

        data = response.json()
        assert "VC/PE Firm" in data["partner_types"]
        assert len(data["portfolio_fields"]) == 8


# ---------------------------------------------------------------------------
# Portfolio
# ---------------------------------------------------------------------------


class TestPortfolioEndpoints:
    """Portfolio preview and submission."""

    @pytest.mark.asyncio()
    async def test_preview_scores_complete_rows_only(self, client: AsyncClient) -> None:
        """Incomplete rows are listed rather than scored."""
        response = await client.post(
            f"{_PREFIX}/portfolio/preview",
            json={"items": [_HYPERTRAIN, {"name": "Half done", "sector": "Retail"}]},
        )

        data = response.json()
        assert [item["name"] for item in data["items"]] == ["Hypertrain"]
        assert data["incomplete_rows"] == [1]
        assert data["progress_percentage"] == 56
        assert data["summary"]["average_risk_score"] == 100

    @pytest.mark.asyncio()
    async def test_submit_portfolio(
        self,
        client: AsyncClient,
        partner_overrides: MagicMock,
    ) -> None:
        """Complete rows are scored and stored."""
        response = await client.post(
            f"{_PREFIX}/intakes/{_INTAKE_ID}/portfolio",
            json={"items": [_HYPERTRAIN, _STEADYWORKS]},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["summary"]["total_companies"] == 2
        assert data["summary"]["average_risk_score"] == 50
        assert data["items"][0]["recommendation"] == "Critical - Immediate Intervention"
        partner_overrides.items.replace_for_intake.assert_awaited_once()

    @pytest.mark.asyncio()
    async def test_incomplete_portfolio_is_422(
        self,
        client: AsyncClient,
        partner_overrides: MagicMock,
    ) -> None:
        """Incomplete rows are reported by index."""
        response = await client.post(
            f"{_PREFIX}/intakes/{_INTAKE_ID}/portfolio",
            json={"items": [_HYPERTRAIN, {"name": "Half done"}]},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"]["incomplete_rows"] == [1]

    @pytest.mark.asyncio()
    async def test_unknown_intake_is_404(
        self,
        client: AsyncClient,
        partner_overrides: MagicMock,
    ) -> None:
        """Portfolios attach to an existing intake."""
        response = await client.post(
            f"{_PREFIX}/intakes/{uuid.uuid4()}/portfolio",
            json={"items": [_HYPERTRAIN]},
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


# ---------------------------------------------------------------------------
# Plans and sharing
# ---------------------------------------------------------------------------


class TestPlanEndpoints:
    """Plan creation, retrieval and share links."""

    @pytest.mark.asyncio()
    async def test_create_plan_with_insights(
        self,
        client: AsyncClient,
        partner_overrides: MagicMock,
    ) -> None:
        """The plan stores the generated insights and reports how they were made."""
        response = await client.post(f"{_PREFIX}/intakes/{_INTAKE_ID}/plan")

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        plan = data["plan"]
        assert plan["id"] == str(_PLAN_ID)
        assert plan["firm_name"] == "Harbor Ventures"
        assert plan["total_companies"] == 2
        assert plan["insights"] == ["Call Hypertrain this week."]
        assert plan["recommendation_counts"]["Critical - Immediate Intervention"] == 1
        assert [c["name"] for c in plan["top_candidates"]] == ["Hypertrain"]
        assert data["insights_meta"] == {
            "validated": True,
            "model": "partner-model",
            "fallback_reason": None,
        }
        partner_overrides.intakes.get_by_id.assert_awaited_once_with(_INTAKE_ID)
        partner_overrides.items.list_by_intake.assert_awaited_once_with(_INTAKE_ID)

    @pytest.mark.asyncio()
    async def test_plan_without_portfolio_is_422(
        self,
        client: AsyncClient,
        partner_overrides: MagicMock,
    ) -> None:
        """A portfolio must be submitted first."""
        partner_overrides.items.list_by_intake.return_value = []

        response = await client.post(f"{_PREFIX}/intakes/{_INTAKE_ID}/plan")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        partner_overrides.plans.create.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_share_link_and_shared_plan(
        self,
        client: AsyncClient,
        partner_overrides: MagicMock,
    ) -> None:
        """A share link is issued and the plan is readable by slug."""
        stored = _plan_record(
            _INTAKE_ID,
            {
                "firm_name": "Harbor Ventures",
                "objectives_json": [],
                "urgency_window": "0-30 days",
                "pipeline_count": 3,
                "total_companies": 1,
                "average_risk_score": 100,
                "sprint_candidates": 1,
                "recommendation_counts_json": {"Critical - Immediate Intervention": 1},
                "top_candidates_json": [],
                "scored_items_json": [],
                "insights_json": ["Call Hypertrain this week."],
            },
        )
        partner_overrides.plans.get_by_id.return_value = stored
        partner_overrides.plans.get_by_share_slug.return_value = stored

        share = await client.post(f"{_PREFIX}/share-link", json={"plan_id": str(_PLAN_ID)})

        assert share.status_code == status.HTTP_200_OK
        slug = share.json()["share_slug"]
        assert share.json()["share_url"] == f"https://benchmark.example/partners/plan/{slug}"

        shared = await client.get(f"{_PREFIX}/plans/shared/{slug}")
        assert shared.status_code == status.HTTP_200_OK
        assert shared.json()["insights"] == ["Call Hypertrain this week."]

    @pytest.mark.asyncio()
    async def test_share_link_rejects_bad_id(
        self,
        client: AsyncClient,
        partner_overrides: MagicMock,
    ) -> None:
        """Non-UUID plan ids are a 400."""
        response = await client.post(f"{_PREFIX}/share-link", json={"plan_id": "plan-1"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio()
    async def test_missing_plan_is_404(
        self,
        client: AsyncClient,
        partner_overrides: MagicMock,
    ) -> None:
        """Unknown plan ids and slugs are 404."""
        partner_overrides.plans.get_by_id.return_value = None
        partner_overrides.plans.get_by_share_slug.return_value = None

        assert (await client.get(f"{_PREFIX}/plans/{uuid.uuid4()}")).status_code == 404
        assert (await client.get(f"{_PREFIX}/plans/shared/nope")).status_code == 404
