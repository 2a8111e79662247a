"""Unit tests for the AI literacy and executive readiness variants."""

from leadership_benchmark.core.readiness import (
    LITERACY_SCORERS,
    READINESS_SCORERS,
    assess_executive_readiness,
    assess_literacy,
)


class TestAssessLiteracy:
    """Verify literacy scoring, levels and triggered insights."""

    def test_empty_answers_yield_base_scores(self) -> None:
        """Bases 30/25/35/40 average to 32.5, which rounds half-up to 33."""
        result = assess_literacy({})

        assert result.dimension_scores == {
            "fundamentals": 30,
            "practical_application": 25,
            "ethical_understanding": 35,
            "strategic_thinking": 40,
        }
        assert result.overall_score == 33
        assert result.level == "Beginner"
        assert result.growth_potential == "high"
        assert result.industry_benchmark == 50
        assert result.insight_ids == ["lp-ai-basics", "qw-tool-practice", "sg-ethics"]

    def test_rich_answers_reach_advanced(self) -> None:
        """Strong keyword coverage lifts every dimension and the level."""
        answers = {
            "q1": "I use machine learning models and neural network algorithms trained on data",
            "q2": "I use ChatGPT and Claude daily, plus Copilot",
            "q3": "Bias, privacy, transparency and responsible use all matter",
            "q4": "Efficiency and competitive advantage through workflow automation for the long-term future",
        }

        result = assess_literacy(answers, industry="Technology")

        assert result.dimension_scores == {
            "fundamentals": 85,
            "practical_application": 85,
            "ethical_understanding": 100,
            "strategic_thinking": 100,
        }
        assert result.overall_score == 93
        assert result.level == "Advanced"
        assert result.industry_benchmark == 65
        assert result.insight_ids == ["rt-advanced-tools"]
        # "learning" is a high-growth signal
        assert result.growth_potential == "high"

    def test_negative_keywords_lower_scores(self) -> None:
        """Admitting no experience reduces the practical score."""
        result = assess_literacy({"q1": "I have never used any of these tools"})
        assert result.dimension_scores["practical_application"] == 5

    def test_teaching_intent_adds_communication_insight(self) -> None:
        """Mentioning teaching others triggers the communication pathway."""
        result = assess_literacy({"q1": "I want to teach my team"})
        assert "lp-ai-communication" in result.insight_ids

    def test_unknown_industry_uses_default_benchmark(self) -> None:
        """Industries outside the table fall back to the default figure."""
        assert assess_literacy({}, industry="Aerospace").industry_benchmark == 50

    def test_scores_stay_within_bounds(self) -> None:
        """Every dimension is clamped to 0-100."""
        answers = {"q1": "no idea, never heard, confused, don't understand, never used"}
        result = assess_literacy(answers)
        assert all(0 <= score <= 100 for score in result.dimension_scores.values())
        assert len(result.dimension_scores) == len(LITERACY_SCORERS)


class TestAssessExecutiveReadiness:
    """Verify the readiness matrix and competitive position."""

    def test_empty_answers_are_developing(self) -> None:
        """Bases 50/40/45/50 average to 46.25, which rounds to 46."""
        result = assess_executive_readiness({})

        assert result.readiness_matrix == {
            "business": 50,
            "technical": 40,
            "organizational": 45,
            "strategic": 50,
        }
        assert result.overall_score == 46
        assert result.competitive_position == "developing"
        assert result.industry_benchmark == 58
        assert "early stages" in result.executive_summary

    def test_strong_answers_reach_leader(self) -> None:
        """Budget, integrated tooling and decision authority lead the field."""
        answers = {
            "budget": "We have budget approved by the CEO, urgent and strategic",
            "tech": "Integrated AI throughout, using AI tools like ChatGPT in the cloud",
            "org": "Ready to try, curious, and I make final decisions",
            "strategy": "Automate for competitive advantage and growth, hands-on",
        }

        result = assess_executive_readiness(answers, industry="retail")

        assert result.readiness_matrix == {
            "business": 100,
            "technical": 100,
            "organizational": 100,
            "strategic": 100,
        }
        assert result.overall_score == 100
        assert result.competitive_position == "leader"
        assert result.industry_benchmark == 60

    def test_resistance_lowers_organizational_score(self) -> None:
        """Skeptical teams score below the organizational base."""
        result = assess_executive_readiness({"org": "The team is skeptical"})
        assert result.readiness_matrix["organizational"] == 25

    def test_lagging_position_below_40(self) -> None:
        """Negative signals across the board push below the lowest rung."""
        answers = {
            "q1": "no budget and no timeline",
            "q2": "no ai in use",
            "q3": "skeptical, we implement what others decide",
            "q4": "slow to adopt",
        }
        result = assess_executive_readiness(answers)

        # "no budget" also contains "budget", so both business rules apply
        assert result.readiness_matrix == {
            "business": 35,
            "technical": 20,
            "organizational": 15,
            "strategic": 40,
        }
        assert result.overall_score == 28
        assert result.competitive_position == "lagging"
        assert len(result.readiness_matrix) == len(READINESS_SCORERS)
