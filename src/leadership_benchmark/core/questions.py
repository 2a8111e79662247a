"""Question banks and option catalogues for the benchmark flows.

Contains the six-statement AI Leadership Growth Benchmark, the option lists
offered by the 10-step deep profile, and the contact-capture dropdowns.
Option values are stored exactly as they are presented to respondents because
several scoring rules match on them verbatim.

Benchmark categories:
    industry_impact       : explaining AI's growth impact on the industry
    business_acceleration : knowing which areas AI-first workflows accelerate
    team_alignment        : a shared AI growth narrative in leadership
    external_positioning  : AI in investor and market positioning
    kpi_connection        : tying AI adoption to KPIs
    coaching_champions    : coaching emerging AI champions
"""

from dataclasses import dataclass

BENCHMARK_PHASE: str = "Leadership Growth"


@dataclass(frozen=True)
class BenchmarkQuestion:
    """A single Likert statement in the leadership benchmark.

    Attributes:
        question_id: Stable identifier, also used as the category key.
        text: Statement presented to the respondent.
        phase: Display phase the statement belongs to.
    """

    question_id: str
    text: str
    phase: str = BENCHMARK_PHASE


LIKERT_OPTIONS: tuple[str, ...] = (
    "1 - Strongly Disagree",
    "2 - Disagree",
    "3 - Neutral",
    "4 - Agree",
    "5 - Strongly Agree",
)

BENCHMARK_QUESTIONS: list[BenchmarkQuestion] = [
    BenchmarkQuestion(
        question_id="industry_impact",
        text="I can clearly explain AI's impact on our industry in growth terms.",
    ),
    BenchmarkQuestion(
        question_id="business_acceleration",
        text="I know which areas of our business can be accelerated by AI-first workflows.",
    ),
    BenchmarkQuestion(
        question_id="team_alignment",
        text="My leadership team shares a common AI growth narrative.",
    ),
    BenchmarkQuestion(
        question_id="external_positioning",
        text="AI is part of our external positioning (investors, market).",
    ),
    BenchmarkQuestion(
        question_id="kpi_connection",
        text="I connect AI adoption directly to KPIs (margin, speed, risk-adjusted growth).",
    ),
    BenchmarkQuestion(
        question_id="coaching_champions",
        text="I actively coach emerging AI champions in my org.",
    ),
]

BENCHMARK_QUESTIONS_BY_ID: dict[str, BenchmarkQuestion] = {
    q.question_id: q for q in BENCHMARK_QUESTIONS
}

BENCHMARK_QUESTION_IDS: list[str] = [q.question_id for q in BENCHMARK_QUESTIONS]

# ---------------------------------------------------------------------------
# Deep profile option catalogues (value -> label)
# ---------------------------------------------------------------------------

THINKING_PROCESS_OPTIONS: dict[str, str] = {
    "verbal": "Talking it through out loud with others",
    "internal": "Quiet reflection and internal processing",
    "written": "Writing and sketching out ideas",
    "visual": "Visual mapping and diagrams",
    "pattern": "Data analysis and pattern recognition",
}

COMMUNICATION_STYLE_OPTIONS: dict[str, str] = {
    "direct": "Direct and to the point",
    "storytelling": "Storytelling with context",
    "data_driven": "Data-driven with evidence",
    "collaborative": "Collaborative and consultative",
    "visionary": "Visionary and inspirational",
}

WORK_BREAKDOWN_FIELDS: tuple[str, ...] = (
    "writing",
    "presentations",
    "planning",
    "decisions",
    "coaching",
)

INFORMATION_NEEDS_OPTIONS: tuple[str, ...] = (
    "Market data and competitive intelligence",
    "Financial models and ROI analysis",
    "Team input and diverse perspectives",
    "Industry trends and case studies",
    "Historical performance and patterns",
)

TRANSFORMATION_GOAL_OPTIONS: dict[str, str] = {
    "focus": "Free up time to focus on strategy",
    "articulate": "Articulate my vision more clearly",
    "speed": "Make faster, better-informed decisions",
    "quality": "Raise the quality of my outputs",
    "communicate": "Communicate more persuasively",
}

DELEGATE_TASK_OPTIONS: tuple[str, ...] = (
    "Email drafting and responses",
    "Meeting preparation and summaries",
    "Report and document creation",
    "Research and market analysis",
    "Presentation development",
    "Data analysis and insights",
    "Strategic planning documents",
    "Team communications",
)

BIGGEST_CHALLENGE_OPTIONS: dict[str, str] = {
    "simplify": "Simplifying complex ideas",
    "tailor": "Tailoring messages to different audiences",
    "tone": "Getting the tone right",
    "structure": "Structuring my thinking",
    "brevity": "Being concise",
    "persuade": "Persuading stakeholders",
}

STAKEHOLDER_OPTIONS: tuple[str, ...] = (
    "Board of directors",
    "Investors",
    "Executive team",
    "Direct reports",
    "Customers",
    "Partners and vendors",
)

REQUIRED_DELEGATE_TASKS: int = 3

# ---------------------------------------------------------------------------
# Contact-capture dropdowns
# ---------------------------------------------------------------------------

COMPANY_SIZE_OPTIONS: tuple[str, ...] = (
    "1-10",
    "11-50",
    "51-200",
    "201-500",
    "501-1000",
    "1000+",
)

PRIMARY_FOCUS_OPTIONS: tuple[str, ...] = (
    "Strategy & Vision",
    "Competitive Advantage",
    "Product Innovation",
    "Process Automation",
    "Team Development",
    "Customer Experience",
)

TIMELINE_OPTIONS: tuple[str, ...] = (
    "Immediate (0-3 months)",
    "Short-term (3-6 months)",
    "Medium-term (6-12 months)",
    "Long-term (12+ months)",
)
