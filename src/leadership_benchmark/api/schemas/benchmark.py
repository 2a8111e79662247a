"""Pydantic request/response schemas for the leadership benchmark API.

Covers the scored funnel steps that need no persistence: the six benchmark
statements, the keyword-bag variants, contact capture, lead scoring and the
deep profile helpers.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from leadership_benchmark.core.contact import ContactDetails
from leadership_benchmark.core.deep_profile import (
    ALLOCATION_TOTAL,
    DEFAULT_TIME_WASTE,
    DeepProfile,
)
from leadership_benchmark.core.questions import WORK_BREAKDOWN_FIELDS


# ---------------------------------------------------------------------------
# Shared value objects
# ---------------------------------------------------------------------------


class AnswersRequest(BaseModel):
    """A set of answers keyed by question id.

    Attributes:
        answers: Answer strings such as "4 - Agree", or free text for the
            keyword-bag variants.
    """

    answers: dict[str, str] = Field(default_factory=dict)


class ContactSchema(BaseModel):
    """Contact details captured after the benchmark."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    full_name: str = ""
    company_name: str = ""
    email: str = ""
    role_title: str = ""
    company_size: str = ""
    primary_focus: str = ""
    timeline: str = ""
    consent_to_insights: bool = False
    industry: str = ""

    def to_details(self) -> ContactDetails:
        """Convert to the core ContactDetails."""
        return ContactDetails(**self.model_dump(exclude={"industry"}))


class DeepProfileSchema(BaseModel):
    """Deep profile answers as sent by the questionnaire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    thinking_process: str = ""
    communication_style: list[str] = Field(default_factory=list)
    work_breakdown: dict[str, int] = Field(
        default_factory=lambda: {name: 20 for name in WORK_BREAKDOWN_FIELDS}
    )
    information_needs: list[str] = Field(default_factory=list)
    transformation_goal: str = ""
    time_waste: int = Field(default=DEFAULT_TIME_WASTE, ge=0, le=100)
    time_waste_examples: str = ""
    delegate_tasks: list[str] = Field(default_factory=list)
    biggest_challenge: str = ""
    stakeholders: list[str] = Field(default_factory=list)

    def to_profile(self) -> DeepProfile:
        """Convert to the immutable core DeepProfile."""
        return DeepProfile(
            thinking_process=self.thinking_process,
            communication_style=tuple(self.communication_style),
            work_breakdown=dict(self.work_breakdown),
            information_needs=tuple(self.information_needs),
            transformation_goal=self.transformation_goal,
            time_waste=self.time_waste,
            time_waste_examples=self.time_waste_examples,
            delegate_tasks=tuple(self.delegate_tasks),
            biggest_challenge=self.biggest_challenge,
            stakeholders=tuple(self.stakeholders),
        )


# ---------------------------------------------------------------------------
# Benchmark statements and score
# ---------------------------------------------------------------------------


class QuestionSchema(BaseModel):
    """A single benchmark statement."""

    question_id: str
    text: str
    phase: str


class QuestionListResponse(BaseModel):
    """The benchmark statements and their answer scale."""

    questions: list[QuestionSchema]
    answer_options: list[str]
    total_questions: int


class ScoreResponse(BaseModel):
    """Benchmark score and tier.

    Attributes:
        score: Sum of the six statement values (6-30 when complete).
        tier: Tier label, e.g. 'AI-Confident Leader'.
        min_score: Lowest score of the tier.
        message: One-line tier message.
        growth_readiness: Growth readiness label for the tier.
        stage: Short stage name.
        sub_scores: Illustrative sub-scores carried by the tier.
    """

    score: int
    tier: str
    min_score: int
    message: str
    growth_readiness: str
    stage: str
    sub_scores: dict[str, int]


class ProgressResponse(BaseModel):
    """Progress through the benchmark statements."""

    completed_answers: int
    total_questions: int
    progress_percentage: float
    estimated_minutes_remaining: int
    is_complete: bool
    next_question_id: str | None = None


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


class ComparisonRequest(BaseModel):
    """Benchmark answers plus the optional deep profile."""

    answers: dict[str, str] = Field(default_factory=dict)
    deep_profile: DeepProfileSchema | None = None


class DimensionSchema(BaseModel):
    """One leadership comparison dimension."""

    dimension: str
    level: str
    reasoning: str


class ComparisonResponse(BaseModel):
    """Six leadership dimensions and the overall maturity label."""

    dimensions: list[DimensionSchema]
    overall_maturity: str


# ---------------------------------------------------------------------------
# Keyword-bag variants
# ---------------------------------------------------------------------------


class FreeTextAssessmentRequest(BaseModel):
    """Free-text answers for the literacy and readiness assessments."""

    answers: dict[str, str] = Field(default_factory=dict)
    industry: str | None = Field(default=None, max_length=100)


class LiteracyResponse(BaseModel):
    """AI literacy assessment result."""

    dimension_scores: dict[str, int]
    overall_score: int
    level: str
    summary: str
    growth_potential: str
    industry_benchmark: int
    insight_ids: list[str]


class ExecutiveReadinessResponse(BaseModel):
    """Executive readiness assessment result."""

    readiness_matrix: dict[str, int]
    overall_score: int
    competitive_position: str
    executive_summary: str
    industry_benchmark: int


# ---------------------------------------------------------------------------
# Contact capture and lead scoring
# ---------------------------------------------------------------------------


class ContactValidationResponse(BaseModel):
    """Outcome of the contact form.

    Attributes:
        outcome: invalid, disqualified or accepted.
        errors: Field-level messages, empty unless the outcome is invalid.
    """

    outcome: str
    errors: dict[str, str]


class LeadPriorityRequest(BaseModel):
    """Contact details plus the benchmark answers used for the score bonus."""

    contact: ContactSchema
    answers: dict[str, str] = Field(default_factory=dict)


class LeadPriorityResponse(BaseModel):
    """A, B or C lead priority."""

    tier: str
    label: str
    emoji: str
    color: str
    description: str
    recommended_action: str
    points: int
    benchmark_score: int


class QualificationSchema(BaseModel):
    """Qualification answers from the conversational assessment."""

    budget_range: str | None = None
    timeline_urgency: str | None = None
    decision_authority: str | None = None
    organization_size: str | None = None
    ai_maturity_level: str | None = None
    primary_pain_points: list[str] = Field(default_factory=list)
    industry_vertical: str | None = None
    team_readiness: str | None = None
    implementation_complexity: str | None = None


class EngagementSchema(BaseModel):
    """Session engagement signals."""

    session_duration_seconds: float = Field(default=0.0, ge=0)
    message_count: int = Field(default=0, ge=0)
    topics_explored: int = Field(default=0, ge=0)


class LeadScoreRequest(BaseModel):
    """Inputs to the lead qualification score."""

    qualification: QualificationSchema = Field(default_factory=QualificationSchema)
    engagement: EngagementSchema = Field(default_factory=EngagementSchema)


class ServiceRecommendationSchema(BaseModel):
    """A recommended follow-up service."""

    type: str
    title: str
    description: str
    priority: str
    reasoning: str
    next_steps: list[str]


class LeadScoreResponse(BaseModel):
    """Lead qualification score and recommendations."""

    overall: int
    qualification: dict[str, int]
    readiness: dict[str, int]
    engagement: float
    recommendations: list[ServiceRecommendationSchema]


# ---------------------------------------------------------------------------
# Deep profile helpers
# ---------------------------------------------------------------------------


class RebalanceRequest(BaseModel):
    """Move one work-breakdown slider."""

    work_breakdown: dict[str, int]
    changed_field: str
    value: int = Field(..., ge=0, le=ALLOCATION_TOTAL)


class RebalanceResponse(BaseModel):
    """The rebalanced work breakdown."""

    work_breakdown: dict[str, int]
    total: int
    is_valid: bool


class DeepProfileValidationResponse(BaseModel):
    """Per-step validity of a deep profile."""

    step_validity: dict[int, bool]
    is_complete: bool


class DeepProfileStepConfig(BaseModel):
    """Wizard pacing for the deep profile questionnaire."""

    total_steps: int
    auto_advance_steps: list[int]
    auto_advance_delay_seconds: float
    required_delegate_tasks: int


class FormOptionsResponse(BaseModel):
    """Option catalogues for the contact form and the deep profile."""

    contact: dict[str, list[str]]
    deep_profile: dict[str, dict[str, str] | list[str]]
    deep_profile_steps: DeepProfileStepConfig
