"""Leadership comparison derived from benchmark scores and the deep profile.

Six independent dimension rules each read one to three benchmark values plus
optional deep-profile signals and pick one of four maturity levels with a
canned reasoning line. The overall maturity sentence averages the levels
(1-4) and re-thresholds the mean. Nothing here is persisted; the comparison is
recomputed from whatever answers and profile are current.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from leadership_benchmark.core.deep_profile import DeepProfile
from leadership_benchmark.core.scoring import extract_scores, threshold_label

LEVEL_FOUNDATIONS: str = "Building Foundations"
LEVEL_EXPLORER: str = "Active Explorer"
LEVEL_PRACTITIONER: str = "Confident Practitioner"
LEVEL_PIONEER: str = "AI Pioneer"

LEVEL_ORDER: dict[str, int] = {
    LEVEL_FOUNDATIONS: 1,
    LEVEL_EXPLORER: 2,
    LEVEL_PRACTITIONER: 3,
    LEVEL_PIONEER: 4,
}

_OVERALL_MATURITY: list[tuple[float, str]] = [
    (3.5, "AI Pioneer - Top 10% of AI-fluent leaders"),
    (2.5, "Confident Practitioner - In top 25% of executives"),
    (1.5, "Active Explorer - Ahead of 50-60% of executives"),
]
_OVERALL_FOUNDATIONS: str = "Building Foundations - Developing core AI leadership skills"

# Information needs that indicate a data-driven decision style. The first two
# are the labels used by earlier questionnaire revisions.
DATA_INFORMATION_NEEDS: frozenset[str] = frozenset(
    {
        "Market trends and competitive analysis",
        "Real-time business metrics and KPIs",
        "Market data and competitive intelligence",
        "Historical performance and patterns",
    }
)

_DEFAULT_TIME_WASTE: int = 50


@dataclass(frozen=True)
class LeadershipDimension:
    """One qualitative judgement in the comparison.

    Attributes:
        dimension: Dimension name (e.g. 'AI Fluency').
        level: One of the four maturity levels.
        reasoning: Canned explanation for the chosen level.
    """

    dimension: str
    level: str
    reasoning: str


@dataclass(frozen=True)
class LeadershipComparison:
    """The six dimension judgements plus the aggregate maturity sentence."""

    dimensions: list[LeadershipDimension]
    overall_maturity: str


_DimensionRule = Callable[[dict[str, int], DeepProfile | None], LeadershipDimension]


def _ai_fluency(scores: dict[str, int], profile: DeepProfile | None) -> LeadershipDimension:
    value = scores["industry_impact"]
    has_information_needs = bool(profile and profile.information_needs)

    if value == 5:
        level, reasoning = (
            LEVEL_PIONEER,
            "You articulate AI's impact with exceptional clarity and can educate others on industry transformation",
        )
    elif value >= 4:
        level, reasoning = (
            LEVEL_PRACTITIONER,
            "You have strong AI fluency and can confidently discuss its business implications",
        )
    elif value == 3 or has_information_needs:
        level, reasoning = (
            LEVEL_EXPLORER,
            "You're actively building your AI vocabulary and understanding of its potential",
        )
    else:
        level, reasoning = (
            LEVEL_FOUNDATIONS,
            "You're in the early stages of developing your AI fluency - a great place to start",
        )
    return LeadershipDimension("AI Fluency", level, reasoning)


def _delegation_mastery(
    scores: dict[str, int], profile: DeepProfile | None
) -> LeadershipDimension:
    value = scores["business_acceleration"]
    time_waste = profile.time_waste if profile and profile.time_waste else _DEFAULT_TIME_WASTE
    has_delegation_plan = bool(profile and profile.delegate_tasks)

    if value == 5 and time_waste < 20 and has_delegation_plan:
        level, reasoning = (
            LEVEL_PIONEER,
            "You excel at strategic delegation and have freed up significant time for high-impact work",
        )
    elif value >= 4 and time_waste < 40:
        level, reasoning = (
            LEVEL_PRACTITIONER,
            "You're actively delegating tasks to AI and reclaiming valuable time for strategic priorities",
        )
    elif value == 3 or has_delegation_plan:
        level, reasoning = (
            LEVEL_EXPLORER,
            "You're identifying what to delegate - keep experimenting to find your time-saving wins",
        )
    else:
        level, reasoning = (
            LEVEL_FOUNDATIONS,
            "You have significant opportunity to free up your time by delegating routine tasks to AI",
        )
    return LeadershipDimension("Delegation Mastery", level, reasoning)


def _strategic_vision(
    scores: dict[str, int], profile: DeepProfile | None
) -> LeadershipDimension:
    average = (scores["kpi_connection"] + scores["external_positioning"]) / 2
    has_transformation_goal = bool(profile and profile.transformation_goal)

    if average >= 4.5 and has_transformation_goal:
        level, reasoning = (
            LEVEL_PIONEER,
            "You translate AI capabilities into clear business value and inspire others with your vision",
        )
    elif average >= 4:
        level, reasoning = (
            LEVEL_PRACTITIONER,
            "You consistently connect AI initiatives to measurable outcomes and strategic goals",
        )
    elif average >= 3:
        level, reasoning = (
            LEVEL_EXPLORER,
            "You're learning to bridge AI capabilities with business impact - keep making those connections",
        )
    else:
        level, reasoning = (
            LEVEL_FOUNDATIONS,
            "You have opportunity to strengthen the link between AI adoption and business results",
        )
    return LeadershipDimension("Strategic Vision", level, reasoning)


def _decision_agility(
    scores: dict[str, int], profile: DeepProfile | None
) -> LeadershipDimension:
    value = scores["industry_impact"]
    has_data_needs = bool(
        profile and DATA_INFORMATION_NEEDS.intersection(profile.information_needs)
    )
    thinking = (profile.thinking_process or "").lower() if profile else ""
    is_analytical = "data" in thinking or "analytic" in thinking

    if value == 5 and has_data_needs:
        level, reasoning = (
            LEVEL_PIONEER,
            "You make informed decisions rapidly using AI-powered intelligence and real-time data",
        )
    elif value >= 4 or (value == 3 and is_analytical):
        level, reasoning = (
            LEVEL_PRACTITIONER,
            "You leverage data effectively to accelerate your decision-making process",
        )
    elif value == 3 or has_data_needs:
        level, reasoning = (
            LEVEL_EXPLORER,
            "You're building your decision-making speed by improving your access to insights",
        )
    else:
        level, reasoning = (
            LEVEL_FOUNDATIONS,
            "You can accelerate your decision velocity by leveraging AI-powered intelligence tools",
        )
    return LeadershipDimension("Decision Agility", level, reasoning)


def _impact_orientation(
    scores: dict[str, int], profile: DeepProfile | None
) -> LeadershipDimension:
    value = scores["kpi_connection"]
    strategic_work = 0
    if profile is not None:
        strategic_work = profile.work_breakdown.get("planning", 0) + profile.work_breakdown.get(
            "decisions", 0
        )

    if value == 5 and strategic_work >= 40:
        level, reasoning = (
            LEVEL_PIONEER,
            "You rigorously track outcomes and spend most of your time on high-impact strategic work",
        )
    elif value >= 4 or (value == 3 and strategic_work >= 30):
        level, reasoning = (
            LEVEL_PRACTITIONER,
            "You actively measure results and maintain focus on work that drives meaningful outcomes",
        )
    elif value == 3 or strategic_work >= 20:
        level, reasoning = (
            LEVEL_EXPLORER,
            "You're developing your measurement discipline and prioritizing impact-driven activities",
        )
    else:
        level, reasoning = (
            LEVEL_FOUNDATIONS,
            "You have opportunity to strengthen your focus on tracking and achieving measurable results",
        )
    return LeadershipDimension("Impact Orientation", level, reasoning)


def _change_leadership(
    scores: dict[str, int], profile: DeepProfile | None
) -> LeadershipDimension:
    average = (
        scores["coaching_champions"] + scores["team_alignment"] + scores["external_positioning"]
    ) / 3

    if average >= 4.5:
        level, reasoning = (
            LEVEL_PIONEER,
            "You're recognized as an AI champion and effectively inspire others to embrace transformation",
        )
    elif average >= 4:
        level, reasoning = (
            LEVEL_PRACTITIONER,
            "You actively cultivate AI adoption and empower your team to explore new capabilities",
        )
    elif average >= 3:
        level, reasoning = (
            LEVEL_EXPLORER,
            "You're growing your influence as a change agent and building support for AI initiatives",
        )
    else:
        level, reasoning = (
            LEVEL_FOUNDATIONS,
            "You're starting to develop your voice and confidence as an AI transformation leader",
        )
    return LeadershipDimension("Change Leadership", level, reasoning)


_DIMENSION_RULES: tuple[_DimensionRule, ...] = (
    _ai_fluency,
    _delegation_mastery,
    _strategic_vision,
    _decision_agility,
    _impact_orientation,
    _change_leadership,
)


def overall_maturity(dimensions: list[LeadershipDimension]) -> str:
    """Average the dimension levels (1-4) and re-threshold the mean.

    Args:
        dimensions: Dimension judgements to aggregate.

    Returns:
        Human-readable maturity sentence. An empty list yields the
        foundations sentence.
    """
    if not dimensions:
        return _OVERALL_FOUNDATIONS
    average = sum(LEVEL_ORDER[d.level] for d in dimensions) / len(dimensions)
    return threshold_label(average, _OVERALL_MATURITY, _OVERALL_FOUNDATIONS)


def derive_comparison(
    answers: Mapping[str, str],
    profile: DeepProfile | None = None,
) -> LeadershipComparison:
    """Derive the six-dimension leadership comparison.

    Args:
        answers: Benchmark answer set keyed by question id.
        profile: Optional completed deep profile.

    Returns:
        LeadershipComparison with dimensions in fixed display order.
    """
    scores = extract_scores(answers)
    dimensions = [rule(scores, profile) for rule in _DIMENSION_RULES]
    return LeadershipComparison(dimensions=dimensions, overall_maturity=overall_maturity(dimensions))
