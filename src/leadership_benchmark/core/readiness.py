"""Keyword-bag assessment variants: AI literacy and executive readiness.

Both variants score four dimensions with ``KeywordScorer`` rule tables,
average them into an overall 0-100 score, and classify the result with the
80/60/40 threshold ladder. Answers are free text collected by the
conversational assessment.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from leadership_benchmark.core.scoring import (
    KeywordRule,
    KeywordScorer,
    join_answers,
    round_half_up,
    threshold_label,
)

# ---------------------------------------------------------------------------
# AI literacy
# ---------------------------------------------------------------------------

LITERACY_SCORERS: tuple[KeywordScorer, ...] = (
    KeywordScorer(
        name="fundamentals",
        base=30,
        rules=(
            KeywordRule(("machine learning", "ml"), 20),
            KeywordRule(("neural network", "algorithm"), 15),
            KeywordRule(("data", "training"), 10),
            KeywordRule(("model", "prediction"), 10),
            KeywordRule(("no idea", "never heard"), -20),
            KeywordRule(("confused", "don't understand"), -15),
        ),
    ),
    KeywordScorer(
        name="practical_application",
        base=25,
        rules=(
            KeywordRule(("chatgpt", "claude"), 25),
            KeywordRule(("copilot", "notion ai"), 20),
            KeywordRule(("midjourney", "dall-e"), 15),
            KeywordRule(("daily", "regularly"), 15),
            KeywordRule(("never used", "no experience"), -20),
        ),
    ),
    KeywordScorer(
        name="ethical_understanding",
        base=35,
        rules=(
            KeywordRule(("bias", "fairness"), 25),
            KeywordRule(("privacy", "data protection"), 20),
            KeywordRule(("transparency", "explainable"), 15),
            KeywordRule(("responsible", "ethical"), 10),
            KeywordRule(("doesn't matter", "not important"), -25),
        ),
    ),
    KeywordScorer(
        name="strategic_thinking",
        base=40,
        rules=(
            KeywordRule(("efficiency", "automation"), 20),
            KeywordRule(("competitive", "advantage"), 20),
            KeywordRule(("workflow", "process"), 15),
            KeywordRule(("future", "long-term"), 10),
            KeywordRule(("just use it", "quick fix"), -10),
        ),
    ),
)

_LITERACY_LEVELS: list[tuple[float, str]] = [
    (80, "Advanced"),
    (60, "Proficient"),
    (40, "Developing"),
]

_LITERACY_SUMMARIES: dict[str, str] = {
    "Advanced": (
        "You demonstrate advanced AI literacy with strong understanding across all key "
        "areas. You're well-positioned to lead AI initiatives and mentor others. Focus on "
        "staying current with emerging technologies and helping your organization develop "
        "AI capabilities."
    ),
    "Proficient": (
        "You show solid AI literacy with good foundational knowledge and practical "
        "experience. With targeted learning in specific areas, you can become an AI "
        "champion in your organization. Focus on building deeper expertise and expanding "
        "your tool proficiency."
    ),
    "Developing": (
        "You have developing AI literacy with some understanding of basic concepts. "
        "There's significant opportunity to improve through structured learning and "
        "hands-on practice. Focus on building fundamentals and gaining practical "
        "experience with AI tools."
    ),
    "Beginner": (
        "You're at the beginning of your AI literacy journey. This is a great starting "
        "point! Focus on learning AI fundamentals, exploring basic tools, and "
        "understanding how AI can benefit your work. With consistent effort, you'll see "
        "rapid improvement."
    ),
}

_LITERACY_BENCHMARKS: dict[str, int] = {
    "technology": 65,
    "financial": 55,
    "healthcare": 45,
    "education": 50,
    "marketing": 55,
    "consulting": 60,
    "default": 50,
}

_HIGH_GROWTH_KEYWORDS: tuple[str, ...] = ("eager", "excited", "learning", "experimenting")


@dataclass(frozen=True)
class LiteracyResult:
    """Outcome of the AI literacy assessment.

    Attributes:
        dimension_scores: 0-100 score per literacy dimension.
        overall_score: Rounded mean of the dimension scores.
        level: Beginner, Developing, Proficient or Advanced.
        summary: Narrative for the level.
        growth_potential: 'high' or 'medium'.
        industry_benchmark: Typical literacy score for the industry.
        insight_ids: Identifiers of triggered learning recommendations.
    """

    dimension_scores: dict[str, int]
    overall_score: int
    level: str
    summary: str
    growth_potential: str
    industry_benchmark: int
    insight_ids: list[str] = field(default_factory=list)


def _growth_potential(score: int, text: str) -> str:
    if any(keyword in text for keyword in _HIGH_GROWTH_KEYWORDS):
        return "high"
    if score < 60 and "interested" in text:
        return "medium"
    # Lower scores leave more room to grow
    return "high" if score < 40 else "medium"


def _literacy_insight_ids(scores: dict[str, int], text: str) -> list[str]:
    insight_ids: list[str] = []
    if scores["fundamentals"] < 50:
        insight_ids.append("lp-ai-basics")
    if scores["practical_application"] < 60:
        insight_ids.append("qw-tool-practice")
    if scores["ethical_understanding"] < 70:
        insight_ids.append("sg-ethics")
    if scores["strategic_thinking"] > 60:
        insight_ids.append("rt-advanced-tools")
    if "explain" in text or "teach" in text:
        insight_ids.append("lp-ai-communication")
    return insight_ids


def assess_literacy(answers: Mapping[str, str], industry: str | None = None) -> LiteracyResult:
    """Score the AI literacy assessment.

    Args:
        answers: Mapping of question id to free-text answer.
        industry: Optional industry key for the benchmark lookup.

    Returns:
        A LiteracyResult. Never raises; empty answers yield base scores.
    """
    text = join_answers(answers)
    scores = {scorer.name: scorer.score(answers) for scorer in LITERACY_SCORERS}
    overall = round_half_up(sum(scores.values()) / len(scores))
    level = threshold_label(overall, _LITERACY_LEVELS, "Beginner")
    benchmark_key = (industry or "default").lower()

    return LiteracyResult(
        dimension_scores=scores,
        overall_score=overall,
        level=level,
        summary=_LITERACY_SUMMARIES[level],
        growth_potential=_growth_potential(overall, text),
        industry_benchmark=_LITERACY_BENCHMARKS.get(
            benchmark_key, _LITERACY_BENCHMARKS["default"]
        ),
        insight_ids=_literacy_insight_ids(scores, text),
    )


# ---------------------------------------------------------------------------
# Executive readiness
# ---------------------------------------------------------------------------

READINESS_SCORERS: tuple[KeywordScorer, ...] = (
    KeywordScorer(
        name="business",
        base=50,
        rules=(
            KeywordRule(("budget", "investment"), 20),
            KeywordRule(("ceo", "founder", "president"), 15),
            KeywordRule(("immediate", "urgent"), 10),
            KeywordRule(("strategic", "competitive"), 10),
            KeywordRule(("no budget", "tight budget"), -20),
            KeywordRule(("over a year", "no timeline"), -15),
        ),
    ),
    KeywordScorer(
        name="technical",
        base=40,
        rules=(
            KeywordRule(("using ai", "ai tools"), 25),
            KeywordRule(("chatgpt", "claude"), 15),
            KeywordRule(("integrated ai", "ai throughout"), 30),
            KeywordRule(("cloud", "saas"), 10),
            KeywordRule(("no ai", "none at all"), -20),
        ),
    ),
    KeywordScorer(
        name="organizational",
        base=45,
        rules=(
            KeywordRule(("ready to try", "experimenting"), 25),
            KeywordRule(("curious", "interested"), 15),
            KeywordRule(("skeptical", "resistant"), -20),
            KeywordRule(("make final decisions", "influence decisions"), 15),
            KeywordRule(("implement what others decide",), -10),
        ),
    ),
    KeywordScorer(
        name="strategic",
        base=50,
        rules=(
            KeywordRule(("automate", "efficiency"), 15),
            KeywordRule(("competitive", "advantage"), 20),
            KeywordRule(("growth", "scale"), 15),
            KeywordRule(("hands-on", "experimentation"), 10),
            KeywordRule(("reports", "slow to adopt"), -10),
        ),
    ),
)

_COMPETITIVE_POSITIONS: list[tuple[float, str]] = [
    (80, "leader"),
    (60, "advanced"),
    (40, "developing"),
]

_READINESS_SUMMARIES: dict[str, str] = {
    "leader": (
        "Your organization demonstrates exceptional AI readiness with strong leadership "
        "buy-in and technical capabilities. You're positioned to achieve significant "
        "competitive advantages through strategic AI implementation, with potential for "
        "25-40% operational efficiency gains and market leadership positioning within "
        "12-18 months."
    ),
    "advanced": (
        "Your organization shows solid AI readiness with good foundational elements in "
        "place. With focused implementation of our recommended quick wins and strategic "
        "initiatives, you can expect 15-30% efficiency improvements and strong ROI within "
        "6-12 months. Key focus areas include strengthening technical infrastructure and "
        "change management processes."
    ),
    "developing": (
        "Your organization is in the early stages of AI readiness with significant "
        "opportunities for improvement. By addressing foundational gaps and implementing "
        "our phased approach, you can achieve 10-20% efficiency gains within 6-9 months. "
        "Priority focus on organizational readiness and basic AI tool adoption will set "
        "the stage for future strategic initiatives."
    ),
    "lagging": (
        "Your organization requires foundational development in AI readiness across "
        "multiple dimensions. Our recommended approach focuses on risk mitigation, basic "
        "capability building, and cultural preparation. With proper investment in "
        "infrastructure and change management, you can expect initial 5-15% efficiency "
        "gains within 9-12 months while building toward strategic AI capabilities."
    ),
}

_READINESS_BENCHMARKS: dict[str, int] = {
    "technology": 75,
    "financial": 70,
    "healthcare": 55,
    "manufacturing": 50,
    "retail": 60,
    "consulting": 65,
    "default": 58,
}


@dataclass(frozen=True)
class ReadinessResult:
    """Outcome of the executive readiness assessment.

    Attributes:
        readiness_matrix: 0-100 score per readiness dimension.
        overall_score: Rounded mean of the matrix.
        competitive_position: leader, advanced, developing or lagging.
        executive_summary: Narrative for the position band.
        industry_benchmark: Typical readiness score for the industry.
    """

    readiness_matrix: dict[str, int]
    overall_score: int
    competitive_position: str
    executive_summary: str
    industry_benchmark: int


def assess_executive_readiness(
    answers: Mapping[str, str],
    industry: str | None = None,
) -> ReadinessResult:
    """Score the executive readiness assessment.

    Args:
        answers: Mapping of question id to free-text answer.
        industry: Optional industry key for the benchmark lookup.

    Returns:
        A ReadinessResult. Never raises; empty answers yield base scores.
    """
    matrix = {scorer.name: scorer.score(answers) for scorer in READINESS_SCORERS}
    overall = round_half_up(sum(matrix.values()) / len(matrix))
    position = threshold_label(overall, _COMPETITIVE_POSITIONS, "lagging")
    benchmark_key = (industry or "default").lower()

    return ReadinessResult(
        readiness_matrix=matrix,
        overall_score=overall,
        competitive_position=position,
        executive_summary=_READINESS_SUMMARIES[position],
        industry_benchmark=_READINESS_BENCHMARKS.get(
            benchmark_key, _READINESS_BENCHMARKS["default"]
        ),
    )
