"""Pydantic request/response schemas for the insight endpoints.

Field names follow the funnel client's camelCase payloads; snake_case names
are accepted as well.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from leadership_benchmark.api.schemas.benchmark import ContactSchema, DeepProfileSchema
from leadership_benchmark.core.insights import FallbackReason, PersonalizedInsights


class _CamelSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Personalized insights
# ---------------------------------------------------------------------------


class PersonalizedInsightsRequest(_CamelSchema):
    """Benchmark answers, contact details and the optional deep profile.

    Attributes:
        assessment_data: Benchmark answers keyed by question id.
        contact_data: Contact details from the contact form.
        deep_profile_data: Deep profile answers, when completed.
    """

    assessment_data: dict[str, str] = Field(default_factory=dict)
    contact_data: ContactSchema = Field(default_factory=ContactSchema)
    deep_profile_data: DeepProfileSchema | None = None


class PersonalizedInsightsResponse(_CamelSchema):
    """Generated or fallback insights.

    Attributes:
        personalized_insights: Schema-valid insights in either case.
        validated: True when the provider output passed validation.
        fallback_reason: Why fallback content was returned, or None.
    """

    personalized_insights: PersonalizedInsights
    validated: bool
    fallback_reason: FallbackReason | None = None


# ---------------------------------------------------------------------------
# Partner insights
# ---------------------------------------------------------------------------


class PartnerIntakeData(_CamelSchema):
    """The intake fields used by the partner prompt."""

    firm_name: str = ""
    partner_type: str = ""
    objectives: list[str] = Field(default_factory=list)
    urgency_window: str = ""


class ScoredItemData(_CamelSchema):
    """A scored portfolio company as held by the client."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    name: str = ""
    sector: str = ""
    cognitive_risk_score: float = 0
    recommendation: str = ""


class PartnerInsightsRequest(_CamelSchema):
    """Intake and scored portfolio for narrative insights."""

    intake_data: PartnerIntakeData = Field(default_factory=PartnerIntakeData)
    portfolio_items: list[ScoredItemData] = Field(default_factory=list)
    session_id: str | None = Field(default=None, max_length=128)


class InsightMetaSchema(_CamelSchema):
    """Generation metadata returned as ``_meta``."""

    validated: bool
    model: str
    token_usage: dict[str, Any] = Field(default_factory=dict)
    processing_time_ms: int
    session_id: str | None = None
    fallback_reason: FallbackReason | None = None


class PartnerInsightsResponse(BaseModel):
    """Narrative insights for a partner portfolio."""

    model_config = ConfigDict(populate_by_name=True)

    insights: list[str]
    meta: InsightMetaSchema = Field(..., alias="_meta")


# ---------------------------------------------------------------------------
# Progress schedules
# ---------------------------------------------------------------------------


class ProgressScheduleSchema(_CamelSchema):
    """Tick schedule the client animates while a generation request runs.

    Attributes:
        start: Initial percentage.
        interval_seconds: Time between ticks.
        increments: (upper bound, step) pairs applied in order.
        generating_at: Percentage at which the phase becomes 'generating'.
        finalizing_at: Percentage at which the phase becomes 'finalizing'.
        phases: Phase labels in display order.
    """

    start: int
    interval_seconds: float
    increments: list[tuple[int, int]]
    generating_at: int
    finalizing_at: int
    phases: list[str]


class ProgressSchedulesResponse(_CamelSchema):
    """Schedules for the insight generation and prompt library loaders."""

    insight_generation: ProgressScheduleSchema
    prompt_library: ProgressScheduleSchema
