"""LLM-generated insight payloads and the fallback-on-failure orchestration.

Two payloads are generated:

``PersonalizedInsights``
    Growth readiness, leadership stage, key focus and a three-item roadmap for
    a benchmark contact, produced through a forced tool call.

``PartnerInsights``
    One to five short narrative insights for a partner portfolio, produced as
    a JSON-mode completion.

Every provider call goes through ``request_insights``, which returns either
``Ok(value)`` or ``Fallback(value, reason)``. A fallback always carries
schema-valid content, so callers render both variants the same way and only
inspect ``reason`` for logging and metrics.
"""

import asyncio
import enum
import json
import re
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from leadership_benchmark.core.scoring import round_half_up
from leadership_benchmark.observability import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

PERSONALIZED_TOOL_NAME: str = "generate_personalized_insights"

MAX_TITLE_LENGTH: int = 25
_TRUNCATED_TITLE_LENGTH: int = 22
_MIN_WORD_BOUNDARY: int = 12

_METRIC_CLEANUP_THRESHOLD: int = 20
_METRIC_PATTERN: re.Pattern[str] = re.compile(r"\d+[-–]?\d*%|\$\d+[KMB]?|\d+x", re.IGNORECASE)

_JSON_FENCE_PATTERN: re.Pattern[str] = re.compile(r"```json\s*([\s\S]*?)\s*```")
_ANY_FENCE_PATTERN: re.Pattern[str] = re.compile(r"```\s*([\s\S]*?)\s*```")

GrowthLevel = Literal["High", "Medium-High", "Medium", "Developing"]
StageName = Literal["Orchestrator", "Confident", "Aware", "Emerging"]
FocusCategory = Literal[
    "Team Alignment",
    "Process Automation",
    "Strategic Planning",
    "Communication",
    "Decision Making",
    "Change Management",
    "Innovation Culture",
    "Data Strategy",
]
LeadershipDimensionName = Literal[
    "AI Fluency",
    "Delegation Mastery",
    "Strategic Vision",
    "Decision Agility",
    "Impact Orientation",
    "Change Leadership",
]


# ---------------------------------------------------------------------------
# Provider errors
# ---------------------------------------------------------------------------


class LLMGatewayError(Exception):
    """Base class for failures talking to an LLM provider."""


class LLMNotConfiguredError(LLMGatewayError):
    """No API key is configured for the provider."""


class LLMTransportError(LLMGatewayError):
    """The request never produced an HTTP response."""


class LLMProviderError(LLMGatewayError):
    """The provider answered with an error status or an unusable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# ---------------------------------------------------------------------------
# Outcome
# ---------------------------------------------------------------------------


class FallbackReason(str, enum.Enum):
    """Why generated content was replaced by fallback content."""

    TIMEOUT = "timeout"
    TRANSPORT_ERROR = "transport_error"
    PROVIDER_ERROR = "provider_error"
    INVALID_PAYLOAD = "invalid_payload"
    SCHEMA_VIOLATION = "schema_violation"
    NOT_CONFIGURED = "not_configured"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Generated content that passed validation."""

    value: T

    @property
    def is_fallback(self) -> bool:
        return False


@dataclass(frozen=True)
class Fallback(Generic[T]):
    """Fallback content plus the reason generation was abandoned."""

    value: T
    reason: FallbackReason
    detail: str = ""

    @property
    def is_fallback(self) -> bool:
        return True


InsightOutcome = Ok[T] | Fallback[T]


# ---------------------------------------------------------------------------
# Personalized insights schema
# ---------------------------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GrowthReadiness(_CamelModel):
    """Revenue-acceleration readiness card."""

    level: GrowthLevel
    preview: str = Field(..., min_length=1)
    details: str = Field(..., min_length=1)


class LeadershipStage(_CamelModel):
    """Current stage card with the action that reaches the next stage."""

    stage: StageName
    preview: str = Field(..., min_length=1)
    details: str = Field(..., min_length=1)


class KeyFocus(_CamelModel):
    """Primary focus area card."""

    category: FocusCategory
    preview: str = Field(..., min_length=1)
    details: str = Field(..., min_length=1)


class RoadmapInitiative(_CamelModel):
    """One 90-day roadmap initiative.

    Titles longer than 25 characters are truncated at a word boundary and
    long growth metrics are reduced to their leading number.
    """

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    based_on: list[str] = Field(default_factory=list)
    impact: str
    timeline: str
    growth_metric: str
    scale_ups_dimensions: list[LeadershipDimensionName] = Field(..., min_length=1, max_length=2)

    @field_validator("title")
    @classmethod
    def _truncate_title(cls, value: str) -> str:
        return truncate_title(value)

    @field_validator("growth_metric")
    @classmethod
    def _clean_metric(cls, value: str) -> str:
        return clean_growth_metric(value)


class PersonalizedInsights(_CamelModel):
    """Complete personalized insight payload."""

    growth_readiness: GrowthReadiness
    leadership_stage: LeadershipStage
    key_focus: KeyFocus
    roadmap_initiatives: list[RoadmapInitiative] = Field(..., min_length=1, max_length=3)


class PartnerInsights(BaseModel):
    """Narrative insights for a partner portfolio."""

    insights: list[str] = Field(..., min_length=1, max_length=5)


def truncate_title(title: str) -> str:
    """Shorten an initiative title that exceeds 25 characters.

    The first 22 characters are kept and, when the last space in them falls
    after index 12, the cut moves back to that space.

    Args:
        title: Title as generated.

    Returns:
        The title, shortened when needed.
    """
    if len(title) <= MAX_TITLE_LENGTH:
        return title
    logger.warning("Roadmap title too long", title=title)
    truncated = title[:_TRUNCATED_TITLE_LENGTH].strip()
    last_space = truncated.rfind(" ")
    if last_space > _MIN_WORD_BOUNDARY:
        truncated = truncated[:last_space]
    return truncated


def clean_growth_metric(metric: str) -> str:
    """Keep only the leading metric ('15-20%', '$2M', '3x') of a long string."""
    if len(metric) <= _METRIC_CLEANUP_THRESHOLD:
        return metric
    match = _METRIC_PATTERN.search(metric)
    return match.group(0) if match else metric


def strip_json_fences(content: str) -> str:
    """Return the body of a ```json fenced block, or the content unchanged."""
    match = _JSON_FENCE_PATTERN.search(content) or _ANY_FENCE_PATTERN.search(content)
    return match.group(1) if match else content


def parse_personalized_insights(raw_arguments: str) -> PersonalizedInsights:
    """Parse tool-call arguments into a validated payload.

    Raises:
        json.JSONDecodeError: If the arguments are not JSON.
        ValidationError: If the JSON does not match the schema.
    """
    return PersonalizedInsights.model_validate(json.loads(raw_arguments))


def parse_partner_insights(content: str) -> PartnerInsights:
    """Parse a JSON-mode completion, tolerating markdown fences.

    Raises:
        json.JSONDecodeError: If the content is not JSON.
        ValidationError: If the JSON does not match the schema.
    """
    return PartnerInsights.model_validate(json.loads(strip_json_fences(content)))


# ---------------------------------------------------------------------------
# Fallback content
# ---------------------------------------------------------------------------

FALLBACK_PERSONALIZED_INSIGHTS = PersonalizedInsights(
    growth_readiness=GrowthReadiness(
        level="Medium",
        preview="Focus on high-impact AI use cases",
        details=(
            "Based on your assessment, identify specific AI use cases that align with your "
            "strategic priorities and drive measurable outcomes."
        ),
    ),
    leadership_stage=LeadershipStage(
        stage="Aware",
        preview="Build AI champion network",
        details=(
            "Create a cross-functional AI champion network to accelerate adoption and drive "
            "organizational change across teams."
        ),
    ),
    key_focus=KeyFocus(
        category="Strategic Planning",
        preview="Integrate AI into core processes",
        details=(
            "Develop a roadmap for integrating AI into your core business processes to drive "
            "measurable outcomes and competitive advantage."
        ),
    ),
    roadmap_initiatives=[
        RoadmapInitiative(
            title="AI Pilot Program",
            description=(
                "Launch a focused pilot program in your highest-impact area to demonstrate ROI "
                "and build organizational confidence."
            ),
            based_on=["Assessment responses", "Current maturity level"],
            impact="15-20% efficiency gain in target area",
            timeline="30-45 days",
            growth_metric="15-20%",
            scale_ups_dimensions=["Delegation Mastery", "Impact Orientation"],
        ),
        RoadmapInitiative(
            title="Leadership AI Fluency",
            description=(
                "Develop executive-level AI literacy through hands-on experimentation with "
                "business-relevant use cases."
            ),
            based_on=["Leadership assessment scores"],
            impact="Enhanced strategic decision-making capability",
            timeline="60-90 days",
            growth_metric="25-35%",
            scale_ups_dimensions=["AI Fluency", "Strategic Vision"],
        ),
        RoadmapInitiative(
            title="AI Culture Building",
            description=(
                "Create an organizational framework for AI adoption including guidelines, "
                "training, and success metrics."
            ),
            based_on=["Organizational readiness assessment"],
            impact="Accelerated team adoption and innovation",
            timeline="90-120 days",
            growth_metric="30-40%",
            scale_ups_dimensions=["Change Leadership"],
        ),
    ],
)


@dataclass(frozen=True)
class PortfolioStats:
    """Portfolio figures shared by the partner prompt and its fallback."""

    average_risk_score: int
    sectors: str
    top_candidates: list[dict[str, Any]]
    total_companies: int


_URGENT_RECOMMENDATIONS: frozenset[str] = frozenset(
    {"Critical - Immediate Intervention", "High Risk - Scaffolding Required"}
)


def portfolio_stats(items: Sequence[dict[str, Any]]) -> PortfolioStats:
    """Summarise scored portfolio rows for prompting.

    Args:
        items: Scored rows with ``name``, ``sector``, ``cognitive_risk_score``
            and ``recommendation`` keys.

    Returns:
        PortfolioStats; sectors default to 'Various' and the average to 0.
    """
    top = [item for item in items if item.get("recommendation") in _URGENT_RECOMMENDATIONS][:5]
    sectors: list[str] = []
    for item in items:
        sector = item.get("sector")
        if sector and sector not in sectors:
            sectors.append(sector)
    total = len(items)
    average = (
        round_half_up(sum(_as_number(item.get("cognitive_risk_score")) for item in items) / total)
        if total
        else 0
    )
    return PortfolioStats(
        average_risk_score=average,
        sectors=", ".join(sectors) or "Various",
        top_candidates=top,
        total_companies=total,
    )


def _as_number(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def fallback_partner_insights(stats: PortfolioStats) -> PartnerInsights:
    """Build deterministic partner insights from the portfolio statistics."""
    risk_profile = (
        "several teams at risk" if stats.average_risk_score >= 50 else "a manageable risk profile"
    )
    first = stats.top_candidates[0].get("name") if stats.top_candidates else None
    return PartnerInsights(
        insights=[
            f"You've got {risk_profile} across {stats.sectors}. The main issue: they're excited "
            "about AI but don't know how to tell good ideas from bad ones.",
            f"{len(stats.top_candidates)} teams are most likely to waste money because they'll "
            'believe vendor promises or buy something just to "do AI". They need help asking '
            "better questions first.",
            f"Start with {first or 'your highest-risk team'} - they're most likely to blow budget "
            "in the next 30 days. Talk to them before they sign a contract.",
        ]
    )


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

PERSONALIZED_SYSTEM_PROMPT: str = (
    "You are an executive AI leadership coach. Generate personalized insights based on "
    "assessment data. Be direct, actionable, and quantitative. Use clear templates for preview "
    "text and save detailed personalization for the details section."
)

PARTNER_SYSTEM_PROMPT: str = (
    "You help investors spot which companies will waste money on AI. Write in plain English like "
    "you're talking to a friend. Be specific and direct. No jargon, no consultant-speak. Return "
    "valid JSON only - no markdown, no code blocks."
)


def _question_label(key: str) -> str:
    """'business_acceleration' or 'businessAcceleration' -> 'Business Acceleration'."""
    spaced = re.sub(r"(?<!^)([A-Z])", r" \1", key).replace("_", " ")
    return " ".join(word[:1].upper() + word[1:] for word in spaced.split())


def _leading_score(value: str) -> int:
    match = re.match(r"^(\d+)", value)
    return int(match.group(1)) if match else 0


def build_personalized_prompt(
    answers: dict[str, str],
    contact: dict[str, Any],
    deep_profile: dict[str, Any] | None,
) -> str:
    """Render the user prompt for personalized insights.

    Args:
        answers: Benchmark answers keyed by question id.
        contact: Contact details (snake_case keys).
        deep_profile: Optional deep profile answers (snake_case keys).

    Returns:
        Prompt text.
    """
    total = sum(_leading_score(value) for value in answers.values())
    breakdown = "\n".join(
        f'- {_question_label(key)}: {_leading_score(value)}/5 - "{value}"'
        for key, value in answers.items()
    )
    lines = [
        "EXECUTIVE PROFILE:",
        f"- Name: {contact.get('full_name', '')}",
        f"- Role: {contact.get('role_title') or 'Executive'} at {contact.get('company_name', '')}",
        f"- Company Size: {contact.get('company_size') or 'Not specified'}",
        f"- Industry: {contact.get('industry') or 'Not specified'}",
        f"- Primary Focus: {contact.get('primary_focus') or 'Not specified'}",
        f"- Timeline: {contact.get('timeline') or 'Not specified'}",
        f"- Overall Leadership Score: {total}/30",
        "",
        "ASSESSMENT RESPONSES:",
        breakdown,
    ]

    if deep_profile:
        work = ", ".join(
            f"{name}: {value}%" for name, value in (deep_profile.get("work_breakdown") or {}).items()
        )
        lines += [
            "",
            "DEEP WORK PROFILE:",
            f"- Thinking Process: {deep_profile.get('thinking_process', '')}",
            f"- Communication Style: {', '.join(deep_profile.get('communication_style', []))}",
            f"- Work Time Breakdown: {work}",
            f"- Information Needs: {', '.join(deep_profile.get('information_needs', []))}",
            f"- Transformation Goal: {deep_profile.get('transformation_goal', '')}",
            f"- Non-Critical Task Time: {deep_profile.get('time_waste', '')}%",
            f'- Specific Time Waste Examples: "{deep_profile.get("time_waste_examples", "")}"',
            f"- Top 3 Delegation Priorities: {', '.join(deep_profile.get('delegate_tasks', []))}",
            f"- Biggest Communication Challenge: {deep_profile.get('biggest_challenge', '')}",
            f"- Key Stakeholders: {', '.join(deep_profile.get('stakeholders', []))}",
        ]

    lines += [
        "",
        "TASK: Generate personalized AI leadership insights that:",
        "1. GROWTH READINESS: reference their score, time waste percentage and examples to show "
        "revenue acceleration potential. Preview template: 'Score {X}/30 - {level} revenue "
        "potential' (max 50 chars).",
        "2. LEADERSHIP STAGE: tell them exactly what score reaches the next tier and one concrete "
        "action to get there. Preview template: 'Reach {next_stage}: Focus on {specific_area}'.",
        "3. KEY FOCUS: pick ONE category matching their stated challenge or transformation goal. "
        "Preview template: 'Focus on {category} to unlock {quantified_benefit}'.",
        "4. 90-DAY ROADMAP: exactly 3 initiatives, each referencing specific profile data, with a "
        "quantified impact, a timeline matching theirs, and 1-2 leadership dimensions from: AI "
        "Fluency, Delegation Mastery, Strategic Vision, Decision Agility, Impact Orientation, "
        "Change Leadership.",
        "",
        "ROADMAP TITLE RULES: 18-25 characters, clear at a glance, no abbreviations "
        "(like 'Comm.', 'Fin.', 'Mgmt').",
        "",
        "Write in executive-level, punchy language. Every word must add value. Be SPECIFIC using "
        "their actual data, words, and numbers.",
    ]
    return "\n".join(lines)


def personalized_tool_schema() -> dict[str, Any]:
    """Function-calling definition that forces the personalized payload shape."""
    card = {
        "preview": {"type": "string", "maxLength": 50},
        "details": {"type": "string", "maxLength": 120},
    }
    return {
        "type": "function",
        "function": {
            "name": PERSONALIZED_TOOL_NAME,
            "description": (
                "Generate personalized AI leadership insights based on executive assessment data"
            ),
            "parameters": {
                "type": "object",
                "properties": {
                    "growthReadiness": {
                        "type": "object",
                        "properties": {
                            "level": {
                                "type": "string",
                                "enum": ["High", "Medium-High", "Medium", "Developing"],
                            },
                            **card,
                        },
                        "required": ["level", "preview", "details"],
                    },
                    "leadershipStage": {
                        "type": "object",
                        "properties": {
                            "stage": {
                                "type": "string",
                                "enum": ["Orchestrator", "Confident", "Aware", "Emerging"],
                            },
                            **card,
                        },
                        "required": ["stage", "preview", "details"],
                    },
                    "keyFocus": {
                        "type": "object",
                        "properties": {
                            "category": {
                                "type": "string",
                                "enum": list(FocusCategory.__args__),
                            },
                            **card,
                        },
                        "required": ["category", "preview", "details"],
                    },
                    "roadmapInitiatives": {
                        "type": "array",
                        "minItems": 3,
                        "maxItems": 3,
                        "items": {
                            "type": "object",
                            "properties": {
                                "title": {"type": "string", "maxLength": MAX_TITLE_LENGTH},
                                "description": {"type": "string", "maxLength": 180},
                                "basedOn": {
                                    "type": "array",
                                    "items": {"type": "string", "maxLength": 50},
                                    "maxItems": 3,
                                },
                                "impact": {"type": "string", "maxLength": 40},
                                "timeline": {"type": "string", "maxLength": 20},
                                "growthMetric": {"type": "string", "maxLength": 15},
                                "scaleUpsDimensions": {
                                    "type": "array",
                                    "items": {
                                        "type": "string",
                                        "enum": list(LeadershipDimensionName.__args__),
                                    },
                                    "minItems": 1,
                                    "maxItems": 2,
                                },
                            },
                            "required": [
                                "title",
                                "description",
                                "basedOn",
                                "impact",
                                "timeline",
                                "growthMetric",
                                "scaleUpsDimensions",
                            ],
                        },
                    },
                },
                "required": ["growthReadiness", "leadershipStage", "keyFocus", "roadmapInitiatives"],
                "additionalProperties": False,
            },
        },
    }


def build_partner_prompt(intake: dict[str, Any], stats: PortfolioStats) -> str:
    """Render the user prompt for partner portfolio insights."""
    objectives = intake.get("objectives") or []
    concerns = ", ".join(objectives) if objectives else "Teams wasting AI budget"
    if stats.top_candidates:
        candidates = "\n".join(
            f"{index}. {item.get('name')} ({item.get('sector') or 'Unknown'}) - Risk Score: "
            f"{item.get('cognitive_risk_score')}/100, Status: {item.get('recommendation')}"
            for index, item in enumerate(stats.top_candidates, start=1)
        )
    else:
        candidates = "No critical risk companies identified"

    return (
        "You're helping a partner figure out which companies in their portfolio are about to "
        "waste money on bad AI decisions.\n\n"
        "Partner Context:\n"
        f"- Firm: {intake.get('firm_name') or 'Partner'}\n"
        f"- Type: {intake.get('partner_type') or 'Investment Firm'}\n"
        f"- Portfolio Sectors: {stats.sectors}\n"
        f"- Companies Assessed: {stats.total_companies}\n"
        f"- Average Risk Score: {stats.average_risk_score}/100 (higher = more likely to waste money)\n"
        f"- Timeline: {intake.get('urgency_window') or 'Next 90 days'}\n"
        f"- Main Concerns: {concerns}\n\n"
        f"Companies Most Likely to Waste Money:\n{candidates}\n\n"
        "Write 3 short, direct insights (2-3 sentences each) that:\n"
        "1. Tell them which teams will blow money fast and why\n"
        "2. Point out specific thinking problems you see (like believing vendor hype, or panic "
        "buying)\n"
        "3. Suggest who to talk to first and what to say\n\n"
        "Be specific - reference the actual data. Focus on preventing waste, not on technology.\n\n"
        "IMPORTANT: Return ONLY valid JSON with no markdown formatting:\n"
        '{"insights": ["Insight 1 text here", "Insight 2 text here", "Insight 3 text here"]}'
    )


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


async def request_insights(
    call: Callable[[], Awaitable[str]],
    parse: Callable[[str], T],
    fallback: T,
    timeout_seconds: float,
) -> InsightOutcome[T]:
    """Run one provider call and fall back on any provider or payload failure.

    Args:
        call: Performs the provider request and returns the raw payload text.
        parse: Turns the payload text into the validated result.
        fallback: Schema-valid content used when anything goes wrong.
        timeout_seconds: Upper bound on the provider call.

    Returns:
        ``Ok`` with the parsed payload, or ``Fallback`` with the reason.
    """
    try:
        raw = await asyncio.wait_for(call(), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        return _fall_back(fallback, FallbackReason.TIMEOUT, f"no response after {timeout_seconds}s")
    except LLMNotConfiguredError as exc:
        return _fall_back(fallback, FallbackReason.NOT_CONFIGURED, str(exc))
    except LLMTransportError as exc:
        return _fall_back(fallback, FallbackReason.TRANSPORT_ERROR, str(exc))
    except LLMProviderError as exc:
        return _fall_back(fallback, FallbackReason.PROVIDER_ERROR, str(exc))

    try:
        value = parse(raw)
    except ValidationError as exc:
        return _fall_back(fallback, FallbackReason.SCHEMA_VIOLATION, str(exc))
    except ValueError as exc:
        return _fall_back(fallback, FallbackReason.INVALID_PAYLOAD, str(exc))

    return Ok(value)


def _fall_back(fallback: T, reason: FallbackReason, detail: str) -> Fallback[T]:
    logger.warning("Insight generation fell back", reason=reason.value, detail=detail)
    return Fallback(value=fallback, reason=reason, detail=detail)
