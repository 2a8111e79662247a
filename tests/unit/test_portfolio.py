"""Unit tests for partner portfolio cognitive-risk scoring."""

from dataclasses import replace

import pytest

from leadership_benchmark.core.portfolio import (
    CATEGORICAL_FIELDS,
    FIELD_OPTIONS,
    HYPE_WITHOUT_SKEPTICISM_FLAG,
    PRESSURE_WITHOUT_SPONSOR_FLAG,
    PortfolioItem,
    Recommendation,
    is_complete,
    live_preview,
    recommend,
    score_item,
    score_portfolio,
    summarize_portfolio,
)


@pytest.fixture()
def riskiest() -> PortfolioItem:
    """Worst answer on every cognitive dimension."""
    return PortfolioItem(
        name="Hypertrain",
        sector="Technology",
        stage="Series A",
        hype_vs_discipline="All Hype - No Framework",
        mental_scaffolding="None - Flying Blind",
        decision_quality="Poor - No Rigor",
        vendor_resistance="Zero - Believes Everything",
        pressure_intensity="Critical - Panic Mode",
        sponsor_thinking="Weak - Unclear",
        upgrade_willingness="Resistant - Defensive",
    )


@pytest.fixture()
def safest() -> PortfolioItem:
    """Best answer on every cognitive dimension."""
    return PortfolioItem(
        name="Steadyworks",
        sector="Manufacturing",
        stage="Growth",
        hype_vs_discipline="Discipline Dominant",
        mental_scaffolding="Strong - Clear Frameworks",
        decision_quality="Strong - Systematic",
        vendor_resistance="High - Deeply Skeptical",
        pressure_intensity="Low - No Urgency",
        sponsor_thinking="Excellent - Sophisticated",
        upgrade_willingness="Eager - Hungry",
    )


@pytest.fixture()
def moderate() -> PortfolioItem:
    """Middle-of-the-road answers."""
    return PortfolioItem(
        name="Midline",
        sector="Retail",
        stage="Seed",
        hype_vs_discipline="Balanced",
        mental_scaffolding="Moderate - Some Structure",
        decision_quality="Moderate - Inconsistent",
        vendor_resistance="Moderate - Questions Some",
        pressure_intensity="Medium - Some Pressure",
        sponsor_thinking="Good - Some Depth",
        upgrade_willingness="Open - Curious",
    )


class TestScoreItem:
    """Verify per-company scores, buckets and flags."""

    def test_riskiest_company_is_critical(self, riskiest: PortfolioItem) -> None:
        """Raw points of 115 are clamped to 100."""
        scored = score_item(riskiest)

        assert scored.cognitive_risk_score == 100
        assert scored.fit_score == 0
        assert scored.capital_at_risk == 100
        assert scored.cognitive_readiness == 5
        assert scored.recommendation is Recommendation.CRITICAL
        assert len(scored.risk_flags) == 8
        assert PRESSURE_WITHOUT_SPONSOR_FLAG in scored.risk_flags
        assert HYPE_WITHOUT_SKEPTICISM_FLAG in scored.risk_flags

    def test_safest_company_is_low_risk(self, safest: PortfolioItem) -> None:
        """Zero risk points, maximum readiness, no flags."""
        scored = score_item(safest)

        assert scored.cognitive_risk_score == 0
        assert scored.fit_score == 100
        assert scored.capital_at_risk == 15
        assert scored.cognitive_readiness == 100
        assert scored.recommendation is Recommendation.LOW
        assert scored.risk_flags == []

    def test_moderate_company(self, moderate: PortfolioItem) -> None:
        """8 + 10 + 8 + 5 + 5 + 3 + 1 = 40 lands in decision support."""
        scored = score_item(moderate)

        assert scored.cognitive_risk_score == 40
        assert scored.capital_at_risk == 35
        assert scored.cognitive_readiness == 65
        assert scored.recommendation is Recommendation.MEDIUM

    def test_unrecognised_answers_add_neutral_points(self) -> None:
        """Free text outside the catalogues scores mid-range, not zero."""
        item = PortfolioItem(name="Mystery", **{f: "n/a" for f in CATEGORICAL_FIELDS})
        scored = score_item(item)

        assert scored.cognitive_risk_score == 60
        assert scored.recommendation is Recommendation.HIGH

    def test_sector_does_not_change_risk(self, moderate: PortfolioItem) -> None:
        """Sector is informational only."""
        other = replace(moderate, sector="Healthcare")
        assert score_item(other).cognitive_risk_score == score_item(moderate).cognitive_risk_score

    def test_scoring_is_deterministic(self, riskiest: PortfolioItem) -> None:
        """Identical input gives identical output."""
        assert score_item(riskiest) == score_item(riskiest)


class TestRecommend:
    """Verify bucket boundaries on risk and capital."""

    @pytest.mark.parametrize(
        ("risk", "capital", "expected"),
        [
            (70, 60, Recommendation.CRITICAL),
            (70, 59, Recommendation.HIGH),
            (60, 0, Recommendation.HIGH),
            (10, 70, Recommendation.HIGH),
            (40, 0, Recommendation.MEDIUM),
            (0, 40, Recommendation.MEDIUM),
            (39, 39, Recommendation.LOW),
        ],
    )
    def test_boundaries(self, risk: int, capital: int, expected: Recommendation) -> None:
        """Buckets are checked from most to least urgent."""
        assert recommend(risk, capital) is expected


class TestCompleteness:
    """Verify row completeness and the live preview."""

    def test_complete_row(self, moderate: PortfolioItem) -> None:
        """Name plus all eight inputs."""
        assert is_complete(moderate)

    @pytest.mark.parametrize("missing", ["name", *CATEGORICAL_FIELDS])
    def test_any_blank_field_is_incomplete(self, moderate: PortfolioItem, missing: str) -> None:
        """A single blank input keeps the row out of the preview."""
        assert not is_complete(replace(moderate, **{missing: " "}))

    def test_stage_is_optional(self, moderate: PortfolioItem) -> None:
        """Stage is informational and not required."""
        assert is_complete(replace(moderate, stage=""))

    def test_live_preview_scores_complete_rows_only(
        self,
        moderate: PortfolioItem,
        safest: PortfolioItem,
    ) -> None:
        """Incomplete rows are skipped; complete rows keep their order."""
        rows = [moderate, replace(moderate, sector=""), safest]
        preview = live_preview(rows)
        assert [entry.item.name for entry in preview] == ["Midline", "Steadyworks"]

    def test_field_options_cover_every_input(self) -> None:
        """The form exposes a scale for each categorical input."""
        assert set(FIELD_OPTIONS) == set(CATEGORICAL_FIELDS)
        assert all(len(options) >= 4 for options in FIELD_OPTIONS.values())


class TestSummarizePortfolio:
    """Verify portfolio aggregation."""

    def test_summary(
        self,
        riskiest: PortfolioItem,
        moderate: PortfolioItem,
    ) -> None:
        """Mean risk is rounded half-up; top candidates are critical/high only."""
        unknown = PortfolioItem(name="Mystery", **{f: "n/a" for f in CATEGORICAL_FIELDS})
        scored = score_portfolio([moderate, riskiest, unknown])

        summary = summarize_portfolio(scored)

        assert summary.total_companies == 3
        # (40 + 100 + 60) / 3 = 66.67
        assert summary.average_risk_score == 67
        assert summary.counts == {
            Recommendation.CRITICAL: 1,
            Recommendation.HIGH: 1,
            Recommendation.MEDIUM: 1,
            Recommendation.LOW: 0,
        }
        assert [e.item.name for e in summary.top_risk_candidates] == ["Hypertrain", "Mystery"]

    def test_top_candidates_capped_at_five(self, riskiest: PortfolioItem) -> None:
        """At most five companies are highlighted."""
        items = [replace(riskiest, name=f"Co {n}") for n in range(7)]
        summary = summarize_portfolio(score_portfolio(items))
        assert len(summary.top_risk_candidates) == 5

    def test_empty_portfolio(self) -> None:
        """An empty portfolio averages to 0 with all buckets present."""
        summary = summarize_portfolio([])
        assert summary.total_companies == 0
        assert summary.average_risk_score == 0
        assert set(summary.counts) == set(Recommendation)
        assert summary.top_risk_candidates == []
