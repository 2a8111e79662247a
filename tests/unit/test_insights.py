"""Unit tests for insight payloads, prompts and the fallback orchestration.

Tests cover:
- Title truncation and growth-metric cleanup on roadmap initiatives
- JSON fence stripping and payload parsing
- Fallback content validity and the partner statistics it is built from
- request_insights: Ok on success, Fallback with the right reason otherwise
"""

import asyncio
import json
from typing import Any

import pytest

from leadership_benchmark.core.insights import (
    FALLBACK_PERSONALIZED_INSIGHTS,
    PERSONALIZED_TOOL_NAME,
    Fallback,
    FallbackReason,
    LLMNotConfiguredError,
    LLMProviderError,
    LLMTransportError,
    Ok,
    PartnerInsights,
    PersonalizedInsights,
    build_partner_prompt,
    build_personalized_prompt,
    clean_growth_metric,
    fallback_partner_insights,
    parse_partner_insights,
    parse_personalized_insights,
    personalized_tool_schema,
    portfolio_stats,
    request_insights,
    strip_json_fences,
    truncate_title,
)

PARTNER_FALLBACK = PartnerInsights(insights=["fallback insight"])


# ---------------------------------------------------------------------------
# Field cleanup
# ---------------------------------------------------------------------------


class TestTruncateTitle:
    """Verify the 25-character title rule."""

    def test_short_title_unchanged(self) -> None:
        """Titles up to 25 characters pass through."""
        assert truncate_title("AI Pilot Program") == "AI Pilot Program"
        assert truncate_title("x" * 25) == "x" * 25

    def test_long_title_cut_at_word_boundary(self) -> None:
        """The cut moves back to the last space after index 12."""
        assert truncate_title("Executive Delegation Blueprint") == "Executive Delegation"

    def test_long_title_without_late_space_is_hard_cut(self) -> None:
        """A space at or before index 12 is ignored; 22 characters are kept."""
        assert truncate_title("Go Hyperautomationalizingx") == "Go Hyperautomationaliz"

    def test_validator_applies_on_parse(self, personalized_payload: dict[str, Any]) -> None:
        """The model truncates titles as it validates them."""
        payload = personalized_payload
        payload["roadmapInitiatives"][0]["title"] = "Executive Delegation Blueprint"
        parsed = parse_personalized_insights(json.dumps(payload))
        assert parsed.roadmap_initiatives[0].title == "Executive Delegation"


class TestCleanGrowthMetric:
    """Verify long growth metrics are reduced to their number."""

    @pytest.mark.parametrize(
        ("metric", "expected"),
        [
            ("25%", "25%"),
            ("15-20% revenue growth in Q3 pipeline", "15-20%"),
            ("$2M incremental annual revenue run-rate", "$2M"),
            ("Roughly 3x faster turnaround on board decks", "3x"),
            ("Significant improvement across all teams", "Significant improvement across all teams"),
        ],
    )
    def test_cleanup(self, metric: str, expected: str) -> None:
        """Strings over 20 characters keep only the first metric found."""
        assert clean_growth_metric(metric) == expected


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParsing:
    """Verify fence stripping and schema validation."""

    def test_strip_json_fence(self) -> None:
        """```json fences are removed."""
        assert strip_json_fences('```json\n{"insights": ["a"]}\n```') == '{"insights": ["a"]}'

    def test_strip_plain_fence(self) -> None:
        """Bare ``` fences are removed too."""
        assert strip_json_fences('```\n{"insights": ["a"]}\n```') == '{"insights": ["a"]}'

    def test_unfenced_content_unchanged(self) -> None:
        """Plain JSON passes through."""
        assert strip_json_fences('{"insights": ["a"]}') == '{"insights": ["a"]}'

    def test_parse_partner_insights_with_fence(self) -> None:
        """JSON-mode output wrapped in markdown still parses."""
        parsed = parse_partner_insights('```json\n{"insights": ["one", "two"]}\n```')
        assert parsed.insights == ["one", "two"]

    def test_parse_personalized_insights(self, personalized_payload: dict[str, Any]) -> None:
        """camelCase tool arguments populate the snake_case model."""
        parsed = parse_personalized_insights(json.dumps(personalized_payload))
        assert parsed.growth_readiness.level == "High"
        assert parsed.roadmap_initiatives[0].scale_ups_dimensions == ["Strategic Vision"]

    def test_unknown_dimension_is_rejected(self, personalized_payload: dict[str, Any]) -> None:
        """Roadmap dimensions must be one of the six comparison dimensions."""
        payload = personalized_payload
        payload["roadmapInitiatives"][0]["scaleUpsDimensions"] = ["Vibes"]
        with pytest.raises(ValueError):
            parse_personalized_insights(json.dumps(payload))

    def test_fallback_payload_is_schema_valid(self) -> None:
        """The fixed fallback round-trips through the schema."""
        dumped = FALLBACK_PERSONALIZED_INSIGHTS.model_dump(by_alias=True)
        assert PersonalizedInsights.model_validate(dumped) == FALLBACK_PERSONALIZED_INSIGHTS
        assert len(FALLBACK_PERSONALIZED_INSIGHTS.roadmap_initiatives) == 3
        assert all(
            item.scale_ups_dimensions for item in FALLBACK_PERSONALIZED_INSIGHTS.roadmap_initiatives
        )


# ---------------------------------------------------------------------------
# Partner statistics and fallback
# ---------------------------------------------------------------------------


class TestPortfolioStats:
    """Verify the statistics shared by the partner prompt and fallback."""

    @pytest.fixture()
    def rows(self) -> list[dict[str, Any]]:
        """Three scored rows; one has a missing score."""
        return [
            {
                "name": "Hypertrain",
                "sector": "Technology",
                "cognitive_risk_score": 80,
                "recommendation": "Critical - Immediate Intervention",
            },
            {
                "name": "Ledgerly",
                "sector": "Finance",
                "cognitive_risk_score": "60",
                "recommendation": "High Risk - Scaffolding Required",
            },
            {
                "name": "Steadyworks",
                "sector": "Technology",
                "cognitive_risk_score": None,
                "recommendation": "Low Risk - Monitor",
            },
        ]

    def test_stats(self, rows: list[dict[str, Any]]) -> None:
        """Unparseable scores count as 0; sectors are de-duplicated in order."""
        stats = portfolio_stats(rows)

        assert stats.total_companies == 3
        assert stats.average_risk_score == 47
        assert stats.sectors == "Technology, Finance"
        assert [c["name"] for c in stats.top_candidates] == ["Hypertrain", "Ledgerly"]

    def test_fallback_names_first_candidate(self, rows: list[dict[str, Any]]) -> None:
        """Deterministic insights reference the portfolio's own figures."""
        insights = fallback_partner_insights(portfolio_stats(rows)).insights

        assert len(insights) == 3
        assert "a manageable risk profile across Technology, Finance" in insights[0]
        assert insights[1].startswith("2 teams")
        assert insights[2].startswith("Start with Hypertrain")

    def test_fallback_for_empty_portfolio(self) -> None:
        """An empty portfolio still yields three insights."""
        stats = portfolio_stats([])
        insights = fallback_partner_insights(stats).insights

        assert stats.sectors == "Various"
        assert stats.average_risk_score == 0
        assert insights[2].startswith("Start with your highest-risk team")

    def test_partner_prompt(self, rows: list[dict[str, Any]]) -> None:
        """The prompt lists firm context and the urgent companies."""
        prompt = build_partner_prompt(
            {"firm_name": "Harbor Ventures", "objectives": ["Risk mitigation"]},
            portfolio_stats(rows),
        )
        assert "- Firm: Harbor Ventures" in prompt
        assert "- Main Concerns: Risk mitigation" in prompt
        assert "1. Hypertrain (Technology) - Risk Score: 80/100" in prompt
        assert "Steadyworks" not in prompt

    def test_partner_prompt_without_candidates(self) -> None:
        """Defaults fill in missing intake fields."""
        prompt = build_partner_prompt({}, portfolio_stats([]))
        assert "No critical risk companies identified" in prompt
        assert "- Type: Investment Firm" in prompt


# ---------------------------------------------------------------------------
# Personalized prompt and tool schema
# ---------------------------------------------------------------------------


class TestPersonalizedPrompt:
    """Verify the personalized prompt and the forced tool definition."""

    def test_prompt_reports_total_and_labels(self, top_answers: dict[str, str]) -> None:
        """Answers are summed and labelled in title case."""
        prompt = build_personalized_prompt(
            top_answers, {"full_name": "Dana Whitfield", "company_name": "Northwind"}, None
        )
        assert "- Overall Leadership Score: 30/30" in prompt
        assert '- Industry Impact: 5/5 - "5 - Strongly Agree"' in prompt
        assert "- Role: Executive at Northwind" in prompt
        assert "DEEP WORK PROFILE" not in prompt

    def test_prompt_includes_deep_profile(self, top_answers: dict[str, str]) -> None:
        """A deep profile adds its own section."""
        prompt = build_personalized_prompt(
            top_answers,
            {"full_name": "Dana"},
            {"work_breakdown": {"writing": 40, "planning": 60}, "delegate_tasks": ["Email"]},
        )
        assert "DEEP WORK PROFILE:" in prompt
        assert "- Work Time Breakdown: writing: 40%, planning: 60%" in prompt
        assert "- Top 3 Delegation Priorities: Email" in prompt

    def test_camel_case_keys_are_labelled(self) -> None:
        """Question ids sent in camelCase are labelled like snake_case ones."""
        prompt = build_personalized_prompt({"businessAcceleration": "4 - Agree"}, {}, None)
        assert "- Business Acceleration: 4/5" in prompt

    def test_tool_schema(self) -> None:
        """The tool forces all four sections."""
        schema = personalized_tool_schema()
        assert schema["function"]["name"] == PERSONALIZED_TOOL_NAME
        parameters = schema["function"]["parameters"]
        assert parameters["required"] == [
            "growthReadiness",
            "leadershipStage",
            "keyFocus",
            "roadmapInitiatives",
        ]
        dimensions = parameters["properties"]["roadmapInitiatives"]["items"]["properties"][
            "scaleUpsDimensions"
        ]["items"]["enum"]
        assert len(dimensions) == 6


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


class TestRequestInsights:
    """Verify Ok/Fallback outcomes for every failure class."""

    @pytest.mark.asyncio()
    async def test_valid_payload_is_ok(self) -> None:
        """A parseable, schema-valid payload is returned as Ok."""

        async def _call() -> str:
            return '{"insights": ["a", "b", "c"]}'

        outcome = await request_insights(_call, parse_partner_insights, PARTNER_FALLBACK, 1.0)

        assert isinstance(outcome, Ok)
        assert not outcome.is_fallback
        assert outcome.value.insights == ["a", "b", "c"]

    @pytest.mark.asyncio()
    @pytest.mark.parametrize(
        ("error", "reason"),
        [
            (LLMNotConfiguredError("no key"), FallbackReason.NOT_CONFIGURED),
            (LLMTransportError("connection refused"), FallbackReason.TRANSPORT_ERROR),
            (LLMProviderError("HTTP 500", status_code=500), FallbackReason.PROVIDER_ERROR),
        ],
    )
    async def test_provider_errors_fall_back(
        self,
        error: Exception,
        reason: FallbackReason,
    ) -> None:
        """Each provider failure maps to its own reason."""

        async def _call() -> str:
            raise error

        outcome = await request_insights(_call, parse_partner_insights, PARTNER_FALLBACK, 1.0)

        assert isinstance(outcome, Fallback)
        assert outcome.reason is reason
        assert outcome.value is PARTNER_FALLBACK

    @pytest.mark.asyncio()
    async def test_timeout_falls_back(self) -> None:
        """A slow provider is abandoned after the timeout."""

        async def _call() -> str:
            await asyncio.sleep(1)
            return '{"insights": ["late"]}'

        outcome = await request_insights(_call, parse_partner_insights, PARTNER_FALLBACK, 0.01)

        assert isinstance(outcome, Fallback)
        assert outcome.reason is FallbackReason.TIMEOUT

    @pytest.mark.asyncio()
    @pytest.mark.parametrize(
        ("raw", "reason"),
        [
            ("definitely not json", FallbackReason.INVALID_PAYLOAD),
            ('{"insights": []}', FallbackReason.SCHEMA_VIOLATION),
            ('{"insights": ["1", "2", "3", "4", "5", "6"]}', FallbackReason.SCHEMA_VIOLATION),
        ],
    )
    async def test_bad_payloads_fall_back(self, raw: str, reason: FallbackReason) -> None:
        """Unparseable JSON and schema violations are told apart."""

        async def _call() -> str:
            return raw

        outcome = await request_insights(_call, parse_partner_insights, PARTNER_FALLBACK, 1.0)

        assert isinstance(outcome, Fallback)
        assert outcome.reason is reason

    @pytest.mark.asyncio()
    async def test_unexpected_errors_propagate(self) -> None:
        """Programming errors are not hidden behind fallback content."""

        async def _call() -> str:
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError, match="bug"):
            await request_insights(_call, parse_partner_insights, PARTNER_FALLBACK, 1.0)
