"""Lead scoring for the sales team.

Two independent scorers:

``calculate_lead_priority``
    Ranks a benchmark contact into an A/B/C tier from their role, company
    size, timeline, primary focus, and benchmark score (0-110 points).

``calculate_lead_score``
    Scores a conversational-assessment lead on qualification (budget,
    authority, need, timeline), readiness (AI maturity, team readiness,
    organization size), and engagement, and recommends follow-up services.
"""

from dataclasses import dataclass, field, replace

from leadership_benchmark.core.contact import ContactDetails
from leadership_benchmark.core.scoring import round_half_up

# ---------------------------------------------------------------------------
# Lead priority (benchmark contacts)
# ---------------------------------------------------------------------------

_ROLE_POINTS: list[tuple[tuple[str, ...], int]] = [
    (("ceo", "founder", "chief"), 30),
    (("vp", "director", "head of"), 20),
    (("manager", "lead"), 10),
]

_COMPANY_SIZE_POINTS: dict[str, int] = {
    "1000+": 25,
    "501-1000": 25,
    "201-500": 20,
    "51-200": 15,
    "11-50": 10,
}
_COMPANY_SIZE_DEFAULT_POINTS: int = 5

# Matched as substrings of the timeline label, in order
_TIMELINE_POINTS: list[tuple[str, int]] = [
    ("Immediate", 25),
    ("Short-term", 20),
    ("Medium-term", 15),
    ("Long-term", 10),
]
_TIMELINE_DEFAULT_POINTS: int = 5

_FOCUS_POINTS: dict[str, int] = {
    "Strategy & Vision": 20,
    "Competitive Advantage": 20,
    "Product Innovation": 15,
    "Process Automation": 15,
}
_FOCUS_DEFAULT_POINTS: int = 10

_BENCHMARK_BONUS: list[tuple[int, int]] = [(25, 10), (20, 5)]


@dataclass(frozen=True)
class LeadPriority:
    """A/B/C lead tier with display and follow-up guidance."""

    tier: str
    label: str
    emoji: str
    color: str
    description: str
    recommended_action: str
    points: int = 0


_PRIORITY_TIERS: list[tuple[int, LeadPriority]] = [
    (
        75,
        LeadPriority(
            tier="A",
            label="HIGH-PRIORITY EXECUTIVE",
            emoji="🔥",
            color="#dc2626",
            description="C-level executive at scale-stage company with immediate timeline",
            recommended_action=(
                "Schedule executive briefing within 24 hours. "
                "High-value strategic advisory opportunity."
            ),
        ),
    ),
    (
        50,
        LeadPriority(
            tier="B",
            label="QUALIFIED LEAD",
            emoji="⭐",
            color="#f59e0b",
            description="Decision-maker or influencer with clear AI focus and reasonable timeline",
            recommended_action=(
                "Follow up within 48-72 hours. Strong potential for advisory engagement."
            ),
        ),
    ),
    (
        0,
        LeadPriority(
            tier="C",
            label="NURTURE PROSPECT",
            emoji="📊",
            color="#6b7280",
            description="Early-stage interest or longer timeline. Educational nurture recommended.",
            recommended_action=(
                "Add to nurture sequence. Provide educational content and check back in 30-60 days."
            ),
        ),
    ),
]


def lead_priority_points(contact: ContactDetails, benchmark_score: int) -> int:
    """Sum the lead priority points for a contact.

    Args:
        contact: Captured contact details.
        benchmark_score: Leadership benchmark score (0-30).

    Returns:
        Points in 0-110.
    """
    points = 0

    role = contact.role_title.lower()
    for keywords, role_points in _ROLE_POINTS:
        if any(keyword in role for keyword in keywords):
            points += role_points
            break

    points += _COMPANY_SIZE_POINTS.get(contact.company_size, _COMPANY_SIZE_DEFAULT_POINTS)

    for marker, timeline_points in _TIMELINE_POINTS:
        if marker in contact.timeline:
            points += timeline_points
            break
    else:
        points += _TIMELINE_DEFAULT_POINTS

    points += _FOCUS_POINTS.get(contact.primary_focus, _FOCUS_DEFAULT_POINTS)

    for threshold, bonus in _BENCHMARK_BONUS:
        if benchmark_score >= threshold:
            points += bonus
            break

    return points


def calculate_lead_priority(contact: ContactDetails, benchmark_score: int) -> LeadPriority:
    """Rank a benchmark contact into an A, B or C tier.

    Thresholds: 75+ -> A, 50-74 -> B, else C.

    Args:
        contact: Captured contact details.
        benchmark_score: Leadership benchmark score (0-30).

    Returns:
        The LeadPriority for the contact, carrying the point total.
    """
    points = lead_priority_points(contact, benchmark_score)
    for threshold, priority in _PRIORITY_TIERS:
        if points >= threshold:
            return replace(priority, points=points)
    return replace(_PRIORITY_TIERS[-1][1], points=points)


# ---------------------------------------------------------------------------
# Lead qualification score (conversational assessment leads)
# ---------------------------------------------------------------------------

BUDGET_POINTS: dict[str, int] = {
    "enterprise_100k+": 25,
    "medium_25k-100k": 20,
    "small_10k-25k": 15,
    "startup_5k-10k": 10,
    "limited_under_5k": 5,
}
AUTHORITY_POINTS: dict[str, int] = {
    "full": 25,
    "shared": 20,
    "influencer": 15,
    "researcher": 10,
}
TIMELINE_URGENCY_POINTS: dict[str, int] = {
    "immediate": 25,
    "within_3_months": 20,
    "within_6_months": 15,
    "exploring": 10,
}
AI_MATURITY_POINTS: dict[str, int] = {
    # Intermediate organisations are ready to implement
    "intermediate": 20,
    "beginner": 15,
    "advanced": 10,
}
TEAM_READINESS_POINTS: dict[str, int] = {"high": 15, "medium": 10, "low": 5}
ORGANIZATION_SIZE_POINTS: dict[str, int] = {
    "enterprise": 15,
    "medium": 12,
    "small": 10,
    "startup": 8,
}

_NEED_POINTS_PER_PAIN_POINT: int = 5
_NEED_MAX_POINTS: int = 25
_ENGAGEMENT_MAX_POINTS: float = 30.0

_PRIORITY_ORDER: dict[str, int] = {"high": 3, "medium": 2, "low": 1}


@dataclass(frozen=True)
class QualificationInput:
    """Qualification answers gathered during the conversational assessment."""

    budget_range: str | None = None
    timeline_urgency: str | None = None
    decision_authority: str | None = None
    organization_size: str | None = None
    ai_maturity_level: str | None = None
    primary_pain_points: tuple[str, ...] = ()
    industry_vertical: str | None = None
    team_readiness: str | None = None
    implementation_complexity: str | None = None


@dataclass(frozen=True)
class EngagementInput:
    """Engagement signals from the session."""

    session_duration_seconds: float = 0.0
    message_count: int = 0
    topics_explored: int = 0


@dataclass(frozen=True)
class ServiceRecommendation:
    """A recommended follow-up service."""

    type: str
    title: str
    description: str
    priority: str
    reasoning: str
    next_steps: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LeadScore:
    """Composite lead score and its parts."""

    overall: int
    qualification: dict[str, int]
    readiness: dict[str, int]
    engagement: float
    recommendations: list[ServiceRecommendation] = field(default_factory=list)


def engagement_points(engagement: EngagementInput) -> float:
    """2 points per minute, 0.5 per message, 2 per topic, capped at 30."""
    raw = (
        engagement.session_duration_seconds / 60 * 2
        + engagement.message_count * 0.5
        + engagement.topics_explored * 2
    )
    return min(raw, _ENGAGEMENT_MAX_POINTS)


def _recommend_services(
    qualification: QualificationInput,
    overall: float,
    qualification_subtotal: int,
    engagement: float,
) -> list[ServiceRecommendation]:
    recommendations: list[ServiceRecommendation] = []

    if overall >= 80 and qualification.timeline_urgency == "immediate":
        recommendations.append(
            ServiceRecommendation(
                type="consultation",
                title="Executive AI Strategy Session",
                description="One-on-one strategic consultation to create your AI implementation roadmap",
                priority="high",
                reasoning=(
                    "High qualification score with immediate timeline indicates readiness "
                    "for strategic engagement"
                ),
                next_steps=[
                    "Schedule 60-minute strategy session",
                    "Prepare AI readiness assessment",
                    "Develop custom implementation timeline",
                ],
            )
        )

    if overall >= 60 and qualification.timeline_urgency in ("immediate", "within_3_months"):
        recommendations.append(
            ServiceRecommendation(
                type="workshop",
                title="AI Leadership Workshop",
                description=(
                    "Interactive workshop for leadership teams to develop AI strategy and capabilities"
                ),
                priority="high" if overall >= 75 else "medium",
                reasoning="Good qualification with near-term timeline suits structured learning approach",
                next_steps=[
                    "Book workshop for leadership team",
                    "Customize content for your industry",
                    "Include hands-on AI tool exploration",
                ],
            )
        )

    if qualification.ai_maturity_level == "beginner" and qualification_subtotal >= 50:
        recommendations.append(
            ServiceRecommendation(
                type="assessment",
                title="AI Readiness Assessment",
                description=(
                    "Comprehensive evaluation of your organization's AI readiness and opportunity areas"
                ),
                priority="medium",
                reasoning="Strong business case but needs foundational AI education",
                next_steps=[
                    "Complete detailed AI readiness evaluation",
                    "Receive customized opportunity report",
                    "Plan phased AI adoption approach",
                ],
            )
        )

    if qualification.implementation_complexity == "complex" and overall >= 70:
        recommendations.append(
            ServiceRecommendation(
                type="implementation",
                title="AI Implementation Partnership",
                description="End-to-end AI implementation support with ongoing guidance",
                priority="high",
                reasoning="Complex needs with strong qualifications warrant comprehensive support",
                next_steps=[
                    "Design implementation roadmap",
                    "Establish success metrics",
                    "Begin with pilot project",
                ],
            )
        )

    if engagement >= 15 and not recommendations:
        recommendations.append(
            ServiceRecommendation(
                type="consultation",
                title="AI Opportunity Discovery Call",
                description="Complimentary session to explore AI opportunities for your organization",
                priority="medium",
                reasoning="Good engagement level indicates genuine interest worth exploring",
                next_steps=[
                    "Schedule 30-minute discovery call",
                    "Explore specific use cases",
                    "Identify next steps for AI adoption",
                ],
            )
        )

    return sorted(recommendations, key=lambda r: _PRIORITY_ORDER[r.priority], reverse=True)


def calculate_lead_score(
    qualification: QualificationInput,
    engagement: EngagementInput,
) -> LeadScore:
    """Score a lead and recommend follow-up services.

    Unknown or missing categorical answers contribute 0 points.

    Args:
        qualification: Qualification answers.
        engagement: Session engagement signals.

    Returns:
        LeadScore with the rounded overall score and its parts.
    """
    parts = {
        "budget": BUDGET_POINTS.get(qualification.budget_range or "", 0),
        "authority": AUTHORITY_POINTS.get(qualification.decision_authority or "", 0),
        "need": min(
            len(qualification.primary_pain_points) * _NEED_POINTS_PER_PAIN_POINT,
            _NEED_MAX_POINTS,
        ),
        "timeline": TIMELINE_URGENCY_POINTS.get(qualification.timeline_urgency or "", 0),
    }
    readiness = {
        "ai_maturity": AI_MATURITY_POINTS.get(qualification.ai_maturity_level or "", 0),
        "team_readiness": TEAM_READINESS_POINTS.get(qualification.team_readiness or "", 0),
        "organization_size": ORGANIZATION_SIZE_POINTS.get(
            qualification.organization_size or "", 0
        ),
    }
    engagement_score = engagement_points(engagement)
    qualification_subtotal = sum(parts.values())
    overall = qualification_subtotal + sum(readiness.values()) + engagement_score

    return LeadScore(
        overall=round_half_up(overall),
        qualification=parts,
        readiness=readiness,
        engagement=engagement_score,
        recommendations=_recommend_services(
            qualification, overall, qualification_subtotal, engagement_score
        ),
    )
