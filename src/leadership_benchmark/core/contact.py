"""Contact capture: field validation and the disqualification rule.

Submitting the contact form has three outcomes:
    invalid       field errors are returned and block submission
    disqualified  the role matches the blocklist; the caller shows the
                  alternate branch instead of continuing the funnel
    accepted      the contact proceeds to insight generation
"""

import enum
import re
from dataclasses import dataclass, field

_EMAIL_PATTERN: re.Pattern[str] = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

DISQUALIFYING_ROLE_TERMS: tuple[str, ...] = (
    "student",
    "unemployed",
    "job seeker",
    "looking for work",
)

_REQUIRED_TEXT_FIELDS: dict[str, str] = {
    "full_name": "Full name is required",
    "company_name": "Company name is required",
    "email": "Email is required",
    "role_title": "Role/title is required",
    "company_size": "Company size is required",
    "primary_focus": "Primary focus is required",
    "timeline": "Timeline is required",
}

INVALID_EMAIL_MESSAGE: str = "Please enter a valid email address"
CONSENT_REQUIRED_MESSAGE: str = "You must consent to receiving personalized insights"


@dataclass(frozen=True)
class ContactDetails:
    """Contact details captured after the benchmark."""

    full_name: str = ""
    company_name: str = ""
    email: str = ""
    role_title: str = ""
    company_size: str = ""
    primary_focus: str = ""
    timeline: str = ""
    consent_to_insights: bool = False


class ContactOutcome(str, enum.Enum):
    """Result of submitting the contact form."""

    INVALID = "invalid"
    DISQUALIFIED = "disqualified"
    ACCEPTED = "accepted"


@dataclass(frozen=True)
class ContactSubmission:
    """Outcome plus any field errors."""

    outcome: ContactOutcome
    errors: dict[str, str] = field(default_factory=dict)


def is_valid_email(email: str) -> bool:
    """Return True when ``email`` looks like name@domain.tld."""
    return _EMAIL_PATTERN.fullmatch(email) is not None


def validate_contact(details: ContactDetails) -> dict[str, str]:
    """Validate every field of the contact form.

    Args:
        details: Submitted contact details.

    Returns:
        Mapping of field name to error message; empty when valid.
    """
    errors: dict[str, str] = {}
    for field_name, message in _REQUIRED_TEXT_FIELDS.items():
        if not getattr(details, field_name).strip():
            errors[field_name] = message

    if "email" not in errors and not is_valid_email(details.email):
        errors["email"] = INVALID_EMAIL_MESSAGE

    if not details.consent_to_insights:
        errors["consent_to_insights"] = CONSENT_REQUIRED_MESSAGE

    return errors


def is_disqualified(role_title: str) -> bool:
    """Return True when the role contains a blocklisted term (case-insensitive)."""
    role = role_title.lower()
    return any(term in role for term in DISQUALIFYING_ROLE_TERMS)


def submit_contact(details: ContactDetails) -> ContactSubmission:
    """Validate the form, then apply the disqualification rule.

    Args:
        details: Submitted contact details.

    Returns:
        ContactSubmission describing which branch the funnel should take.
    """
    errors = validate_contact(details)
    if errors:
        return ContactSubmission(outcome=ContactOutcome.INVALID, errors=errors)
    if is_disqualified(details.role_title):
        return ContactSubmission(outcome=ContactOutcome.DISQUALIFIED)
    return ContactSubmission(outcome=ContactOutcome.ACCEPTED)
