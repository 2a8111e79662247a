"""Partner portfolio cognitive-risk scoring.

Each portfolio company is rated on eight categorical inputs: its sector plus
seven cognitive dimensions. Every cognitive answer adds a fixed number of
risk points (unrecognised answers add a neutral mid-range value); the total
is clamped to 0-100 and the fit score is its inverse.

    hype_vs_discipline    0-25     mental_scaffolding    0-25
    decision_quality      0-20     vendor_resistance     0-15
    pressure_intensity    0-15     sponsor_thinking      0-10
    upgrade_willingness   0-5      sector                neutral

High AI activity combined with weak cognitive scaffolding means high waste
risk. The recommendation bucket combines the risk score with capital at risk,
which is driven by pressure intensity (urgency) and hype. Scoring is pure:
identical input always yields identical output, which the live preview
relies on when it rescores every complete row on each change.
"""

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field

from leadership_benchmark.core.scoring import round_half_up

SECTOR_OPTIONS: tuple[str, ...] = (
    "Technology",
    "Healthcare",
    "Finance",
    "Manufacturing",
    "Retail",
    "Professional Services",
    "Other",
)

COGNITIVE_FIELDS: tuple[str, ...] = (
    "hype_vs_discipline",
    "mental_scaffolding",
    "decision_quality",
    "vendor_resistance",
    "pressure_intensity",
    "sponsor_thinking",
    "upgrade_willingness",
)

CATEGORICAL_FIELDS: tuple[str, ...] = ("sector", *COGNITIVE_FIELDS)

# field -> (answer -> risk points, points for an unrecognised answer)
_RISK_POINTS: dict[str, tuple[dict[str, int], int]] = {
    "hype_vs_discipline": (
        {
            "All Hype - No Framework": 25,
            "Hype Dominant": 18,
            "Balanced": 8,
            "Discipline Dominant": 0,
        },
        12,
    ),
    "mental_scaffolding": (
        {
            "None - Flying Blind": 25,
            "Weak - Fragile Models": 18,
            "Moderate - Some Structure": 10,
            "Strong - Clear Frameworks": 0,
        },
        15,
    ),
    "decision_quality": (
        {
            "Poor - No Rigor": 20,
            "Weak - Ad Hoc": 15,
            "Moderate - Inconsistent": 8,
            "Strong - Systematic": 0,
        },
        12,
    ),
    "vendor_resistance": (
        {
            "Zero - Believes Everything": 15,
            "Low - Easily Swayed": 10,
            "Moderate - Questions Some": 5,
            "High - Deeply Skeptical": 0,
        },
        8,
    ),
    "pressure_intensity": (
        {
            "Low - No Urgency": 0,
            "Medium - Some Pressure": 5,
            "High - Real Urgency": 10,
            "Critical - Panic Mode": 15,
        },
        5,
    ),
    "sponsor_thinking": (
        {
            "Weak - Unclear": 10,
            "Basic - Surface Level": 7,
            "Good - Some Depth": 3,
            "Excellent - Sophisticated": 0,
        },
        6,
    ),
    "upgrade_willingness": (
        {
            "Resistant - Defensive": 5,
            "Reluctant - Skeptical": 3,
            "Open - Curious": 1,
            "Eager - Hungry": 0,
        },
        2,
    ),
}

FIELD_OPTIONS: dict[str, tuple[str, ...]] = {
    "sector": SECTOR_OPTIONS,
    **{name: tuple(points) for name, (points, _) in _RISK_POINTS.items()},
}

# Capital at risk
_PRESSURE_CAPITAL: dict[str, int] = {
    "Critical - Panic Mode": 50,
    "High - Real Urgency": 35,
    "Medium - Some Pressure": 20,
}
_PRESSURE_CAPITAL_DEFAULT: int = 10
_HYPE_CAPITAL: dict[str, int] = {
    "All Hype - No Framework": 50,
    "Hype Dominant": 35,
    "Balanced": 15,
}
_HYPE_CAPITAL_DEFAULT: int = 5

# Cognitive readiness
_SCAFFOLDING_READINESS: dict[str, int] = {
    "Strong - Clear Frameworks": 50,
    "Moderate - Some Structure": 35,
    "Weak - Fragile Models": 15,
}
_SCAFFOLDING_READINESS_DEFAULT: int = 0
_QUALITY_READINESS: dict[str, int] = {
    "Strong - Systematic": 50,
    "Moderate - Inconsistent": 30,
    "Weak - Ad Hoc": 15,
}
_QUALITY_READINESS_DEFAULT: int = 5

_TOP_CANDIDATES: int = 5


class Recommendation(str, enum.Enum):
    """Recommendation buckets, most to least urgent."""

    CRITICAL = "Critical - Immediate Intervention"
    HIGH = "High Risk - Scaffolding Required"
    MEDIUM = "Medium Risk - Decision Support"
    LOW = "Low Risk - Monitor"


# field -> answer -> flag
_SINGLE_FIELD_FLAGS: dict[str, dict[str, str]] = {
    "hype_vs_discipline": {"All Hype - No Framework": "No decision framework - pure hype cycle"},
    "mental_scaffolding": {"None - Flying Blind": "Zero mental scaffolding - high waste risk"},
    "vendor_resistance": {"Zero - Believes Everything": "No vendor skepticism - easy target"},
    "pressure_intensity": {"Critical - Panic Mode": "Panic mode - will make bad decisions"},
    "sponsor_thinking": {"Weak - Unclear": "Sponsor lacks cognitive clarity"},
    "upgrade_willingness": {"Resistant - Defensive": "Resistant to learning - poor fit"},
}

_URGENT_PRESSURE: frozenset[str] = frozenset({"High - Real Urgency", "Critical - Panic Mode"})
_SHALLOW_SPONSOR: frozenset[str] = frozenset({"Weak - Unclear", "Basic - Surface Level"})
_HYPE_LED: frozenset[str] = frozenset({"All Hype - No Framework", "Hype Dominant"})
_CREDULOUS: frozenset[str] = frozenset({"Zero - Believes Everything", "Low - Easily Swayed"})

PRESSURE_WITHOUT_SPONSOR_FLAG: str = "Urgent pressure without a clear sponsor - spend will drift"
HYPE_WITHOUT_SKEPTICISM_FLAG: str = "Hype-led and vendor-credulous - prime target for vendor theatre"


@dataclass(frozen=True)
class PortfolioItem:
    """One portfolio company as entered by the partner."""

    name: str
    sector: str = ""
    stage: str = ""
    hype_vs_discipline: str = ""
    mental_scaffolding: str = ""
    decision_quality: str = ""
    vendor_resistance: str = ""
    pressure_intensity: str = ""
    sponsor_thinking: str = ""
    upgrade_willingness: str = ""


@dataclass(frozen=True)
class ScoredPortfolioItem:
    """A portfolio item with its derived scores.

    Attributes:
        item: The scored input.
        cognitive_risk_score: 0-100, higher means more waste risk.
        capital_at_risk: 0-100 from pressure and hype.
        cognitive_readiness: 0-100 from scaffolding and decision quality.
        fit_score: 100 minus the cognitive risk score.
        recommendation: Recommendation bucket.
        risk_flags: Human-readable warnings.
    """

    item: PortfolioItem
    cognitive_risk_score: int
    capital_at_risk: int
    cognitive_readiness: int
    fit_score: int
    recommendation: Recommendation
    risk_flags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PortfolioSummary:
    """Aggregate view over a scored portfolio."""

    total_companies: int
    average_risk_score: int
    counts: dict[Recommendation, int]
    top_risk_candidates: list[ScoredPortfolioItem]


def is_complete(item: PortfolioItem) -> bool:
    """True when the name and all eight categorical inputs are filled in."""
    return bool(item.name.strip()) and all(
        getattr(item, name).strip() for name in CATEGORICAL_FIELDS
    )


def cognitive_risk_score(item: PortfolioItem) -> int:
    """Sum the per-field risk points, clamped to 0-100."""
    total = 0
    for name in COGNITIVE_FIELDS:
        points, unknown = _RISK_POINTS[name]
        total += points.get(getattr(item, name), unknown)
    return max(0, min(100, total))


def capital_at_risk(item: PortfolioItem) -> int:
    """Capital exposure from pressure intensity plus hype, capped at 100."""
    pressure = _PRESSURE_CAPITAL.get(item.pressure_intensity, _PRESSURE_CAPITAL_DEFAULT)
    hype = _HYPE_CAPITAL.get(item.hype_vs_discipline, _HYPE_CAPITAL_DEFAULT)
    return min(100, pressure + hype)


def cognitive_readiness(item: PortfolioItem) -> int:
    """Readiness from mental scaffolding plus decision quality, capped at 100."""
    scaffolding = _SCAFFOLDING_READINESS.get(item.mental_scaffolding, _SCAFFOLDING_READINESS_DEFAULT)
    quality = _QUALITY_READINESS.get(item.decision_quality, _QUALITY_READINESS_DEFAULT)
    return min(100, scaffolding + quality)


def recommend(risk_score: int, capital: int) -> Recommendation:
    """Pick the recommendation bucket.

    Args:
        risk_score: Cognitive risk score (0-100).
        capital: Capital at risk (0-100).

    Returns:
        The first matching bucket, checked from most to least urgent.
    """
    if risk_score >= 70 and capital >= 60:
        return Recommendation.CRITICAL
    if risk_score >= 60 or capital >= 70:
        return Recommendation.HIGH
    if risk_score >= 40 or capital >= 40:
        return Recommendation.MEDIUM
    return Recommendation.LOW


def risk_flags(item: PortfolioItem) -> list[str]:
    """Return warnings for risky answers and contradictory combinations."""
    flags = [
        flags_by_answer[getattr(item, name)]
        for name, flags_by_answer in _SINGLE_FIELD_FLAGS.items()
        if getattr(item, name) in flags_by_answer
    ]
    if item.pressure_intensity in _URGENT_PRESSURE and item.sponsor_thinking in _SHALLOW_SPONSOR:
        flags.append(PRESSURE_WITHOUT_SPONSOR_FLAG)
    if item.hype_vs_discipline in _HYPE_LED and item.vendor_resistance in _CREDULOUS:
        flags.append(HYPE_WITHOUT_SKEPTICISM_FLAG)
    return flags


def score_item(item: PortfolioItem) -> ScoredPortfolioItem:
    """Score a single portfolio company.

    Args:
        item: Portfolio company to score.

    Returns:
        ScoredPortfolioItem with all derived values.
    """
    risk = cognitive_risk_score(item)
    capital = capital_at_risk(item)
    return ScoredPortfolioItem(
        item=item,
        cognitive_risk_score=risk,
        capital_at_risk=capital,
        cognitive_readiness=cognitive_readiness(item),
        fit_score=100 - risk,
        recommendation=recommend(risk, capital),
        risk_flags=risk_flags(item),
    )


def score_portfolio(items: Iterable[PortfolioItem]) -> list[ScoredPortfolioItem]:
    """Score every item, preserving input order."""
    return [score_item(item) for item in items]


def live_preview(items: Iterable[PortfolioItem]) -> list[ScoredPortfolioItem]:
    """Score only the complete rows, as shown while the partner is typing."""
    return [score_item(item) for item in items if is_complete(item)]


def summarize_portfolio(scored: list[ScoredPortfolioItem]) -> PortfolioSummary:
    """Aggregate a scored portfolio.

    Args:
        scored: Scored items.

    Returns:
        PortfolioSummary with per-bucket counts, the rounded mean risk, and
        up to five critical/high-risk companies sorted by risk descending.
    """
    counts = {bucket: 0 for bucket in Recommendation}
    for entry in scored:
        counts[entry.recommendation] += 1

    average = (
        round_half_up(sum(e.cognitive_risk_score for e in scored) / len(scored)) if scored else 0
    )
    urgent = [
        e for e in scored if e.recommendation in (Recommendation.CRITICAL, Recommendation.HIGH)
    ]
    urgent.sort(key=lambda e: e.cognitive_risk_score, reverse=True)

    return PortfolioSummary(
        total_companies=len(scored),
        average_risk_score=average,
        counts=counts,
        top_risk_candidates=urgent[:_TOP_CANDIDATES],
    )
