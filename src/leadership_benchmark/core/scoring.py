"""Deterministic scoring primitives for the benchmark assessments.

Two scoring algorithms live here:

1. Sum scoring. Each answer string such as "4 - Agree" contributes its
   leading integer; answers without one contribute nothing. The 6-statement
   leadership benchmark therefore scores 6-30 when fully answered, and the
   total maps to one of four leadership tiers by fixed descending thresholds.

2. Keyword-bag scoring. A fixed base score is adjusted by point deltas for
   every rule whose keywords appear (case-insensitive substring) in the
   concatenation of all free-text answers, then clamped to 0-100. Rules are
   data (``KeywordRule``) so they can be tuned and tested without touching
   control flow. Concrete rule tables live in ``core/readiness.py``.

Scoring never raises: malformed or missing input simply does not contribute.
This module is independent of the database layer.
"""

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from leadership_benchmark.core.questions import BENCHMARK_QUESTION_IDS
from leadership_benchmark.observability import get_logger

logger = get_logger(__name__)

_LEADING_INT: re.Pattern[str] = re.compile(r"^(\d+)")

ANSWER_MIN_VALUE: int = 1
ANSWER_MAX_VALUE: int = 5

SCORE_MIN: int = 0
SCORE_MAX: int = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def parse_answer_value(answer: str | None) -> int | None:
    """Extract the leading integer of an answer string.

    Args:
        answer: Raw answer such as "4 - Agree" or "5-Strongly Agree".

    Returns:
        The parsed integer, or None when the answer has no leading digits.
    """
    if not answer:
        return None
    match = _LEADING_INT.match(answer)
    if match is None:
        return None
    return int(match.group(1))


def sum_score(
    answers: Mapping[str, str],
    min_value: int = ANSWER_MIN_VALUE,
    max_value: int = ANSWER_MAX_VALUE,
) -> int:
    """Sum the leading integers of all answers.

    Values that do not parse, or that parse outside ``[min_value, max_value]``,
    are skipped rather than raising, so an answer set of N entries can never
    total more than ``N * max_value``.

    Args:
        answers: Mapping of question id to answer string.
        min_value: Smallest accepted answer value.
        max_value: Largest accepted answer value.

    Returns:
        The bounded sum; 0 for an empty answer set.
    """
    total = 0
    for question_id, answer in answers.items():
        value = parse_answer_value(answer)
        if value is None:
            continue
        if not (min_value <= value <= max_value):
            logger.debug(
                "Answer value out of range skipped",
                question_id=question_id,
                value=value,
            )
            continue
        total += value
    return total


def extract_scores(
    answers: Mapping[str, str],
    question_ids: Iterable[str] = BENCHMARK_QUESTION_IDS,
) -> dict[str, int]:
    """Parse the answer value for each named question.

    Args:
        answers: Mapping of question id to answer string.
        question_ids: Questions to extract. Defaults to the benchmark set.

    Returns:
        Mapping of question id to its value, 0 when missing or malformed.
    """
    scores: dict[str, int] = {}
    for question_id in question_ids:
        value = parse_answer_value(answers.get(question_id))
        if value is None or not (ANSWER_MIN_VALUE <= value <= ANSWER_MAX_VALUE):
            value = 0
        scores[question_id] = value
    return scores


def benchmark_score(answers: Mapping[str, str]) -> int:
    """Score the leadership benchmark.

    Only the six benchmark question ids count, so extra keys in the answer
    mapping cannot push the total past the 30-point tier table.

    Args:
        answers: Mapping of question id to answer string.

    Returns:
        Integer score in 0-30 (6-30 when every statement is answered).
    """
    relevant = {qid: answers[qid] for qid in BENCHMARK_QUESTION_IDS if qid in answers}
    return sum_score(relevant)


# ---------------------------------------------------------------------------
# Leadership tiers (30-point scale)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LeadershipTier:
    """One band of the 30-point leadership tier table.

    Attributes:
        label: Tier label shown to the respondent.
        min_score: Inclusive lower bound.
        message: One-line coaching message.
        growth_readiness: Growth readiness level used by fallback insights.
        stage: Leadership stage used by fallback insights.
        sub_scores: Display sub-scores attached to notification payloads.
    """

    label: str
    min_score: int
    message: str
    growth_readiness: str
    stage: str
    sub_scores: dict[str, int] = field(default_factory=dict)


LEADERSHIP_TIERS: list[LeadershipTier] = [
    LeadershipTier(
        label="AI-Orchestrator",
        min_score=25,
        message="You're setting the pace. Now amplify by formalizing AI across teams.",
        growth_readiness="High",
        stage="Orchestrator",
        sub_scores={
            "industryImpact": 95,
            "businessAcceleration": 90,
            "teamAlignment": 85,
            "externalPositioning": 88,
        },
    ),
    LeadershipTier(
        label="AI-Confident Leader",
        min_score=19,
        message="You're using AI as a thinking partner; next, scale culture and growth ops.",
        growth_readiness="Medium-High",
        stage="Confident",
        sub_scores={
            "industryImpact": 80,
            "businessAcceleration": 75,
            "teamAlignment": 70,
            "externalPositioning": 72,
        },
    ),
    LeadershipTier(
        label="AI-Aware Leader",
        min_score=13,
        message="You're talking the talk; time to embed literacy into revenue strategy.",
        growth_readiness="Medium",
        stage="Aware",
        sub_scores={
            "industryImpact": 65,
            "businessAcceleration": 60,
            "teamAlignment": 55,
            "externalPositioning": 58,
        },
    ),
    LeadershipTier(
        label="AI-Emerging Leader",
        min_score=SCORE_MIN,
        message="You're at risk of being disrupted. Literacy is your missing link.",
        growth_readiness="Developing",
        stage="Emerging",
        sub_scores={
            "industryImpact": 45,
            "businessAcceleration": 40,
            "teamAlignment": 35,
            "externalPositioning": 38,
        },
    ),
]


def leadership_tier(score: int) -> LeadershipTier:
    """Map a benchmark score to its leadership tier.

    Thresholds (inclusive lower bound, first match wins):
        25+   -> AI-Orchestrator
        19-24 -> AI-Confident Leader
        13-18 -> AI-Aware Leader
        else  -> AI-Emerging Leader

    Args:
        score: Benchmark score.

    Returns:
        The matching LeadershipTier. Negative scores map to the lowest tier.
    """
    for tier in LEADERSHIP_TIERS:
        if score >= tier.min_score:
            return tier
    return LEADERSHIP_TIERS[-1]


def threshold_label(score: float, thresholds: list[tuple[float, str]], default: str) -> str:
    """Return the label of the first threshold the score meets.

    Args:
        score: Value to classify.
        thresholds: (inclusive lower bound, label) pairs in descending order.
        default: Label when no threshold is met.

    Returns:
        The matching label.
    """
    for lower_bound, label in thresholds:
        if score >= lower_bound:
            return label
    return default


# ---------------------------------------------------------------------------
# Keyword-bag scoring
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeywordRule:
    """Adds ``delta`` when any keyword occurs in the joined answers.

    Attributes:
        keywords: Lowercase substrings; any one match triggers the rule.
        delta: Signed point adjustment.
    """

    keywords: tuple[str, ...]
    delta: int

    def matches(self, text: str) -> bool:
        """Return True when any keyword is a substring of ``text``."""
        return any(keyword in text for keyword in self.keywords)


def join_answers(answers: Mapping[str, str]) -> str:
    """Concatenate all answer values into one lowercase string."""
    return " ".join(str(value) for value in answers.values()).lower()


@dataclass(frozen=True)
class KeywordScorer:
    """A base score adjusted by additive keyword rules, clamped to 0-100.

    Attributes:
        name: Dimension name the scorer produces.
        base: Starting score before any rule applies.
        rules: Additive rules; evaluation order does not affect the result.
    """

    name: str
    base: int
    rules: tuple[KeywordRule, ...]

    def score(self, answers: Mapping[str, str]) -> int:
        """Score the answers.

        Args:
            answers: Mapping of question id to free-text answer.

        Returns:
            Clamped score in 0-100. An empty answer set yields the base score.
        """
        text = join_answers(answers)
        raw = self.base + sum(rule.delta for rule in self.rules if rule.matches(text))
        return max(SCORE_MIN, min(SCORE_MAX, raw))
