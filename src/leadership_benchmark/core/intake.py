"""Partner intake form: validation, pipeline parsing, and sprint estimate."""

from dataclasses import dataclass, field

from leadership_benchmark.core.scoring import round_half_up

PARTNER_TYPES: tuple[str, ...] = (
    "Consulting Firm",
    "System Integrator",
    "Technology Vendor",
    "VC/PE Firm",
    "Accelerator/Incubator",
    "Advisory Network",
)

OBJECTIVE_OPTIONS: tuple[str, ...] = (
    "De-risk AI capital allocation",
    "Prevent vendor theatre in portfolio",
    "Identify cognitive readiness gaps",
    "Upgrade decision quality across portfolio",
    "Surface leadership thinking patterns",
    "Risk mitigation",
)

URGENCY_WINDOWS: tuple[str, ...] = ("0-30 days", "31-60 days", "61-90 days", "90+ days")

_URGENCY_MULTIPLIERS: dict[str, float] = {
    "0-30 days": 1.5,
    "31-60 days": 1.2,
    "61-90 days": 1.0,
}
_DEFAULT_URGENCY_MULTIPLIER: float = 0.5

_URGENCY_LABELS: dict[str, str] = {
    "0-30 days": "Immediate",
    "31-60 days": "High",
    "61-90 days": "Medium",
    "90+ days": "Low",
}

MIN_PIPELINE_COUNT: int = 1
MAX_PIPELINE_COUNT: int = 10
MAX_SPRINT_CANDIDATES: int = 10


@dataclass(frozen=True)
class PartnerIntake:
    """Partner intake answers.

    Attributes:
        firm_name: Partner firm name.
        partner_type: One of PARTNER_TYPES.
        objectives: Selected engagement goals.
        pipeline_count: Number of portfolio companies to assess (1-10).
        pipeline_names: Comma-separated company names as typed.
        urgency_window: One of URGENCY_WINDOWS.
        consent: Partner agreed to the engagement terms.
        contact_name: Optional contact person.
        contact_email: Optional contact email.
    """

    firm_name: str = ""
    partner_type: str = ""
    objectives: tuple[str, ...] = ()
    pipeline_count: int = 0
    pipeline_names: str = ""
    urgency_window: str = ""
    consent: bool = False
    contact_name: str = ""
    contact_email: str = ""


@dataclass(frozen=True)
class IntakeValidation:
    """Field errors for an intake; ``is_valid`` when there are none."""

    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """True when no field has an error."""
        return not self.errors


def validate_intake(intake: PartnerIntake) -> IntakeValidation:
    """Validate the intake form.

    Args:
        intake: Submitted intake answers.

    Returns:
        IntakeValidation with one message per invalid field.
    """
    errors: dict[str, str] = {}
    if not intake.firm_name.strip():
        errors["firm_name"] = "Firm name is required"
    if not intake.objectives:
        errors["objectives"] = "Select at least one goal"
    if not (MIN_PIPELINE_COUNT <= intake.pipeline_count <= MAX_PIPELINE_COUNT):
        errors["pipeline_count"] = "Must be between 1 and 10"
    if not intake.pipeline_names.strip():
        errors["pipeline_names"] = "Company names are required"
    if not intake.urgency_window:
        errors["urgency_window"] = "Timeline is required"
    if not intake.consent:
        errors["consent"] = "Consent is required"
    return IntakeValidation(errors=errors)


def parse_pipeline_names(raw: str) -> list[str]:
    """Split comma-separated company names.

    Args:
        raw: Names as typed, e.g. "Acme, Globex,,Initech".

    Returns:
        Trimmed, non-empty names, at most MAX_PIPELINE_COUNT of them.
    """
    names = [name.strip() for name in raw.split(",")]
    return [name for name in names if name][:MAX_PIPELINE_COUNT]


def urgency_multiplier(urgency_window: str) -> float:
    """Multiplier applied to the sprint estimate for an urgency window."""
    return _URGENCY_MULTIPLIERS.get(urgency_window, _DEFAULT_URGENCY_MULTIPLIER)


def urgency_label(urgency_window: str) -> str:
    """Human label for an urgency window; 'Unknown' when unrecognised."""
    return _URGENCY_LABELS.get(urgency_window, "Unknown")


def estimate_sprint_candidates(intake: PartnerIntake) -> int:
    """Estimate how many portfolio companies are ready for a sprint.

    ``(objectives * 0.3 + min(pipeline, 10) * 0.4) * urgency multiplier``,
    rounded and clamped to 0-10.

    Args:
        intake: Intake answers.

    Returns:
        Estimated candidate count.
    """
    base = len(intake.objectives) * 0.3 + min(intake.pipeline_count, MAX_PIPELINE_COUNT) * 0.4
    estimate = round_half_up(base * urgency_multiplier(intake.urgency_window))
    return max(0, min(MAX_SPRINT_CANDIDATES, estimate))
