"""Pydantic request/response schemas for the partner portfolio API.

All API inputs and outputs are typed Pydantic v2 models. Plan responses are
built straight from ORM records with ``from_attributes``.
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from leadership_benchmark.core.intake import MAX_SPRINT_CANDIDATES, PartnerIntake
from leadership_benchmark.core.portfolio import PortfolioItem


# ---------------------------------------------------------------------------
# Intake
# ---------------------------------------------------------------------------


class PartnerIntakeRequest(BaseModel):
    """Partner intake form.

    Field rules are enforced by the intake validator so every problem is
    reported at once as a field-level error map.
    """

    firm_name: str = Field(default="", max_length=255)
    partner_type: str = Field(default="", max_length=100)
    objectives: list[str] = Field(default_factory=list)
    pipeline_count: int = 0
    pipeline_names: str = Field(default="", max_length=2000)
    urgency_window: str = ""
    consent: bool = False
    contact_name: str = Field(default="", max_length=255)
    contact_email: str = Field(default="", max_length=320)

    def to_intake(self) -> PartnerIntake:
        """Convert to the core PartnerIntake."""
        return PartnerIntake(
            firm_name=self.firm_name,
            partner_type=self.partner_type,
            objectives=tuple(self.objectives),
            pipeline_count=self.pipeline_count,
            pipeline_names=self.pipeline_names,
            urgency_window=self.urgency_window,
            consent=self.consent,
            contact_name=self.contact_name,
            contact_email=self.contact_email,
        )


class IntakeEstimateResponse(BaseModel):
    """Live figures shown while the intake form is filled in.

    Attributes:
        pipeline_names: Parsed pipeline names, at most ten.
        sprint_candidates: Estimated number of sprint candidates (0-10).
        urgency_label: Immediate, High, Medium, Low or Unknown.
        errors: Field-level validation messages.
        is_valid: True when the form can be submitted.
    """

    pipeline_names: list[str]
    sprint_candidates: int = Field(..., ge=0, le=MAX_SPRINT_CANDIDATES)
    urgency_label: str
    errors: dict[str, str]
    is_valid: bool


class PartnerIntakeResponse(BaseModel):
    """A stored intake with its live estimate."""

    id: uuid.UUID
    firm_name: str
    partner_type: str | None
    pipeline_count: int
    urgency_window: str
    created_at: datetime
    sprint_candidates: int
    urgency_label: str


# ---------------------------------------------------------------------------
# Portfolio
# ---------------------------------------------------------------------------


class PortfolioItemSchema(BaseModel):
    """One portfolio company and its eight categorical ratings."""

    name: str = Field(default="", max_length=255)
    sector: str = ""
    stage: str = ""
    hype_vs_discipline: str = ""
    mental_scaffolding: str = ""
    decision_quality: str = ""
    vendor_resistance: str = ""
    pressure_intensity: str = ""
    sponsor_thinking: str = ""
    upgrade_willingness: str = ""

    def to_item(self) -> PortfolioItem:
        """Convert to the core PortfolioItem."""
        return PortfolioItem(**self.model_dump())


class PortfolioRequest(BaseModel):
    """Portfolio companies in entry order."""

    items: list[PortfolioItemSchema] = Field(default_factory=list, max_length=100)


class ScoredItemSchema(PortfolioItemSchema):
    """A portfolio company with its computed scores."""

    cognitive_risk_score: int
    capital_at_risk: int
    cognitive_readiness: int
    fit_score: int
    recommendation: str
    risk_flags: list[str]


class PortfolioSummarySchema(BaseModel):
    """Portfolio-level figures."""

    total_companies: int
    average_risk_score: int
    recommendation_counts: dict[str, int]
    top_candidates: list[ScoredItemSchema]


class PortfolioPreviewResponse(BaseModel):
    """Scores for every complete row, plus the summary over them.

    Attributes:
        items: Scored complete rows in entry order.
        incomplete_rows: Indexes of rows still missing inputs.
        progress_percentage: Share of the categorical inputs filled in, 0-100.
        summary: Summary over the scored rows.
    """

    items: list[ScoredItemSchema]
    incomplete_rows: list[int]
    progress_percentage: int
    summary: PortfolioSummarySchema


class PortfolioSubmitResponse(BaseModel):
    """Stored and scored portfolio."""

    intake_id: uuid.UUID
    items: list[ScoredItemSchema]
    summary: PortfolioSummarySchema


# ---------------------------------------------------------------------------
# Plans and share links
# ---------------------------------------------------------------------------


class PartnerPlanResponse(BaseModel):
    """A computed partner plan."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID
    intake_id: uuid.UUID
    firm_name: str
    objectives: list[str] = Field(validation_alias="objectives_json")
    urgency_window: str
    pipeline_count: int
    total_companies: int
    average_risk_score: int
    sprint_candidates: int
    recommendation_counts: dict[str, int] = Field(validation_alias="recommendation_counts_json")
    top_candidates: list[dict[str, Any]] = Field(validation_alias="top_candidates_json")
    scored_items: list[dict[str, Any]] = Field(validation_alias="scored_items_json")
    insights: list[str] = Field(validation_alias="insights_json")
    created_at: datetime


class PlanInsightsMeta(BaseModel):
    """How the plan insights were produced."""

    validated: bool
    model: str
    fallback_reason: str | None = None


class CreatePlanResponse(BaseModel):
    """A new plan plus insight metadata."""

    plan: PartnerPlanResponse
    insights_meta: PlanInsightsMeta


class ShareLinkRequest(BaseModel):
    """Share-link request; the id is validated by the service."""

    plan_id: str = Field(..., max_length=64)


class ShareLinkResponse(BaseModel):
    """Opaque slug and the public URL built from it."""

    share_slug: str
    share_url: str
