"""Test fixtures for the AI Leadership Growth Benchmark service.

Provides shared answer sets, fake LLM gateways and an async HTTP client
with the per-IP rate limiters disabled.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from leadership_benchmark.api.rate_limit import (
    insights_rate_limit,
    notifications_rate_limit,
    partners_rate_limit,
    scoring_rate_limit,
)
from leadership_benchmark.core.interfaces import ChatCompletion
from leadership_benchmark.core.questions import BENCHMARK_QUESTION_IDS, LIKERT_OPTIONS
from leadership_benchmark.main import app


# ---------------------------------------------------------------------------
# Answer sets
# ---------------------------------------------------------------------------


def _uniform_answers(value: int) -> dict[str, str]:
    option = LIKERT_OPTIONS[value - 1]
    return {qid: option for qid in BENCHMARK_QUESTION_IDS}


@pytest.fixture()
def answers_factory() -> Callable[[int], dict[str, str]]:
    """Factory for uniform benchmark answers, e.g. 4 -> "4 - Agree" everywhere."""
    return _uniform_answers


@pytest.fixture()
def top_answers() -> dict[str, str]:
    """Every statement answered '5 - Strongly Agree' (score 30)."""
    return _uniform_answers(5)


@pytest.fixture()
def bottom_answers() -> dict[str, str]:
    """Every statement answered '1 - Strongly Disagree' (score 6)."""
    return _uniform_answers(1)


@pytest.fixture()
def contact_payload() -> dict[str, Any]:
    """A qualified executive contact as sent by the funnel client."""
    return {
        "fullName": "Dana Whitfield",
        "companyName": "Northwind Logistics",
        "email": "dana@northwind.example",
        "roleTitle": "Chief Operating Officer",
        "companySize": "201-500",
        "primaryFocus": "Strategy & Vision",
        "timeline": "Immediate (0-3 months)",
        "consentToInsights": True,
    }


@pytest.fixture()
def personalized_payload() -> dict[str, Any]:
    """A valid camelCase personalized-insights tool-call payload."""
    return {
        "growthReadiness": {
            "level": "High",
            "preview": "Score 27/30 - High revenue potential",
            "details": "Your 30% time waste on status decks is the fastest lever.",
        },
        "leadershipStage": {
            "stage": "Orchestrator",
            "preview": "Stay Orchestrator: Focus on coaching",
            "details": "Formalise your champion network this quarter.",
        },
        "keyFocus": {
            "category": "Team Alignment",
            "preview": "Focus on Team Alignment to unlock 20% speed",
            "details": "Your board narrative and team narrative diverge.",
        },
        "roadmapInitiatives": [
            {
                "title": "Board Narrative Sprint",
                "description": "Rebuild the quarterly board narrative around AI-led growth.",
                "basedOn": ["External positioning score"],
                "impact": "Sharper investor story",
                "timeline": "30 days",
                "growthMetric": "15%",
                "scaleUpsDimensions": ["Strategic Vision"],
            }
        ],
    }


# ---------------------------------------------------------------------------
# LLM gateway fakes
# ---------------------------------------------------------------------------


def _make_gateway(
    content: str | None = None,
    tool_arguments: str | None = None,
    side_effect: BaseException | None = None,
    model: str = "test-model",
) -> AsyncMock:
    """Build an ILLMGateway stand-in returning one fixed completion.

    Args:
        content: Message content of the completion.
        tool_arguments: Raw JSON arguments of the first tool call.
        side_effect: Exception raised by complete() instead of returning.
        model: Value of the gateway's model property.

    Returns:
        AsyncMock with ``complete`` and ``model`` configured.
    """
    gateway = AsyncMock()
    gateway.model = model
    if side_effect is not None:
        gateway.complete.side_effect = side_effect
    else:
        gateway.complete.return_value = ChatCompletion(
            model=model,
            content=content,
            tool_arguments=tool_arguments,
            usage={"prompt_tokens": 120, "completion_tokens": 80, "total_tokens": 200},
        )
    return gateway


@pytest.fixture()
def gateway_factory() -> Callable[..., AsyncMock]:
    """Factory for fake chat-completions gateways; see ``_make_gateway``."""
    return _make_gateway


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture()
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async test client with rate limiting disabled.

    Tests add their own service overrides to ``app.dependency_overrides``
    before issuing requests; all overrides are cleared afterwards.
    """
    for limiter in (
        scoring_rate_limit,
        insights_rate_limit,
        notifications_rate_limit,
        partners_rate_limit,
    ):
        app.dependency_overrides[limiter] = lambda: None

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()
