"""Lead notification emails for the sales team.

Three notifications are sent:
    contact_form_submission : a benchmark contact passed the contact form
    deep_profile_completed  : the same contact finished the deep profile
    advisory_sprint         : an executive asked for the 90-minute session

Each email carries the benchmark score and tier, the lead priority, the six
comparison dimensions and the raw answers. Delivery failures are returned to
the caller as an unsuccessful EmailResult; the funnel treats them as
non-fatal.
"""

import enum
import html
from collections.abc import Mapping

from leadership_benchmark.core.comparison import LeadershipComparison, derive_comparison
from leadership_benchmark.core.contact import ContactDetails
from leadership_benchmark.core.deep_profile import DeepProfile
from leadership_benchmark.core.interfaces import EmailResult, IEmailSender
from leadership_benchmark.core.qualification import LeadPriority, calculate_lead_priority
from leadership_benchmark.core.questions import BENCHMARK_QUESTIONS
from leadership_benchmark.core.scoring import LeadershipTier, benchmark_score, leadership_tier
from leadership_benchmark.observability import get_logger

logger = get_logger(__name__)

ADVISORY_SPRINT_TITLE: str = "AI Advisory Sprint - 90 Min Leadership Session"
ANONYMOUS_SPRINT_SUBJECT: str = (
    "🎯 ANONYMOUS AI LEADERSHIP BENCHMARK - Executive Advisory Interest"
)


class NotificationType(str, enum.Enum):
    """Which funnel event triggered the email."""

    CONTACT_FORM_SUBMISSION = "contact_form_submission"
    DEEP_PROFILE_COMPLETED = "deep_profile_completed"
    ADVISORY_SPRINT = "advisory_sprint"


_SUBJECT_PREFIX: dict[NotificationType, str] = {
    NotificationType.CONTACT_FORM_SUBMISSION: "New Benchmark Contact",
    NotificationType.DEEP_PROFILE_COMPLETED: "Deep Profile Completed",
    NotificationType.ADVISORY_SPRINT: "Advisory Sprint Request",
}


class NotificationService:
    """Builds and sends lead notification emails."""

    def __init__(self, email_sender: IEmailSender, recipients: list[str]) -> None:
        """Initialise the service.

        Args:
            email_sender: Email delivery implementation.
            recipients: Sales-team addresses that receive every notification.
        """
        self._sender = email_sender
        self._recipients = recipients

    async def send_contact_notification(
        self,
        notification_type: NotificationType,
        contact: ContactDetails,
        answers: Mapping[str, str],
        deep_profile: DeepProfile | None = None,
        session_id: str | None = None,
    ) -> EmailResult:
        """Notify the sales team about a captured contact.

        Args:
            notification_type: Contact-form or deep-profile event.
            contact: Captured contact details.
            answers: Benchmark answers keyed by question id.
            deep_profile: Deep profile answers, when completed.
            session_id: Funnel session id for cross-referencing.

        Returns:
            EmailResult from the email sender.
        """
        score = benchmark_score(answers)
        tier = leadership_tier(score)
        priority = calculate_lead_priority(contact, score)
        comparison = derive_comparison(answers, deep_profile)

        subject = (
            f"{priority.emoji} {_SUBJECT_PREFIX[notification_type]}: "
            f"{contact.full_name} from {contact.company_name} ({tier.label}, {score}/30)"
        )
        body = "".join(
            [
                _priority_section(priority),
                _contact_section(contact),
                _score_section(score, tier),
                _comparison_section(comparison),
                _answers_section(answers),
                _deep_profile_section(deep_profile) if deep_profile is not None else "",
                _footer(session_id),
            ]
        )
        return await self._send(notification_type, subject, body, score=score)

    async def send_advisory_sprint_notification(
        self,
        answers: Mapping[str, str],
        contact: ContactDetails | None = None,
        session_id: str | None = None,
    ) -> EmailResult:
        """Notify the sales team that an executive wants an advisory sprint.

        Without contact details the request is anonymous: the executive books
        through the calendar link and the email only carries the results.

        Args:
            answers: Benchmark answers keyed by question id.
            contact: Contact details, or None for an anonymous request.
            session_id: Funnel session id for cross-referencing.

        Returns:
            EmailResult from the email sender.
        """
        score = benchmark_score(answers)
        tier = leadership_tier(score)
        comparison = derive_comparison(answers)

        sections: list[str] = []
        if contact is None:
            subject = ANONYMOUS_SPRINT_SUBJECT
        else:
            priority = calculate_lead_priority(contact, score)
            subject = f"{priority.emoji} {priority.label}: {contact.full_name} from {contact.company_name}"
            sections += [_priority_section(priority), _contact_section(contact)]

        sections += [
            f"<p><strong>Requested:</strong> {html.escape(ADVISORY_SPRINT_TITLE)}</p>",
            _score_section(score, tier),
            _sub_scores_section(tier),
            _comparison_section(comparison),
            _answers_section(answers),
            _footer(session_id),
        ]
        return await self._send(
            NotificationType.ADVISORY_SPRINT,
            subject,
            "".join(sections),
            score=score,
        )

    async def _send(
        self,
        notification_type: NotificationType,
        subject: str,
        body: str,
        score: int,
    ) -> EmailResult:
        result = await self._sender.send(self._recipients, subject, _document(body))
        if result.success:
            logger.info(
                "Notification sent",
                notification_type=notification_type.value,
                message_id=result.message_id,
                score=score,
            )
        else:
            logger.warning(
                "Notification failed",
                notification_type=notification_type.value,
                error=result.error,
            )
        return result


# ---------------------------------------------------------------------------
# HTML sections
# ---------------------------------------------------------------------------


def _document(body: str) -> str:
    return (
        "<!DOCTYPE html><html><body style=\"font-family: Arial, sans-serif; color: #374151;\">"
        "<div style=\"max-width: 640px; margin: 0 auto; padding: 20px;\">"
        f"{body}</div></body></html>"
    )


def _priority_section(priority: LeadPriority) -> str:
    return (
        f"<div style=\"border-left: 4px solid {priority.color}; padding: 12px; margin-bottom: 16px;\">"
        f"<h2 style=\"margin: 0;\">{priority.emoji} Tier {priority.tier}: "
        f"{html.escape(priority.label)} ({priority.points} pts)</h2>"
        f"<p>{html.escape(priority.description)}</p>"
        f"<p><strong>Recommended action:</strong> {html.escape(priority.recommended_action)}</p>"
        "</div>"
    )


def _contact_section(contact: ContactDetails) -> str:
    rows = [
        ("Name", contact.full_name),
        ("Email", contact.email),
        ("Company", contact.company_name),
        ("Role", contact.role_title),
        ("Company size", contact.company_size),
        ("Primary focus", contact.primary_focus),
        ("Timeline", contact.timeline),
    ]
    return _table("Contact", rows)


def _score_section(score: int, tier: LeadershipTier) -> str:
    return (
        "<h3>AI Leadership Growth Benchmark</h3>"
        f"<p style=\"font-size: 28px; margin: 0;\"><strong>{score}/30</strong></p>"
        f"<p><strong>{html.escape(tier.label)}</strong>: {html.escape(tier.message)}</p>"
    )


def _sub_scores_section(tier: LeadershipTier) -> str:
    return _table("Growth sub-scores", [(name, str(value)) for name, value in tier.sub_scores.items()])


def _comparison_section(comparison: LeadershipComparison) -> str:
    rows = [(d.dimension, f"{d.level} - {d.reasoning}") for d in comparison.dimensions]
    return _table("Leadership comparison", rows) + (
        f"<p><em>{html.escape(comparison.overall_maturity)}</em></p>"
    )


def _answers_section(answers: Mapping[str, str]) -> str:
    rows = [(q.text, answers[q.question_id]) for q in BENCHMARK_QUESTIONS if answers.get(q.question_id)]
    if not rows:
        return "<p><em>No assessment responses captured</em></p>"
    return _table("Responses", rows)


def _deep_profile_section(profile: DeepProfile) -> str:
    work = ", ".join(f"{name}: {value}%" for name, value in profile.work_breakdown.items())
    rows = [
        ("Thinking process", profile.thinking_process),
        ("Communication style", ", ".join(profile.communication_style)),
        ("Work breakdown", work),
        ("Information needs", ", ".join(profile.information_needs)),
        ("Transformation goal", profile.transformation_goal),
        ("Non-critical task time", f"{profile.time_waste}%"),
        ("Time waste examples", profile.time_waste_examples),
        ("Delegation priorities", ", ".join(profile.delegate_tasks)),
        ("Biggest challenge", profile.biggest_challenge),
        ("Stakeholders", ", ".join(profile.stakeholders)),
    ]
    return _table("Deep profile", rows)


def _footer(session_id: str | None) -> str:
    return (
        "<p style=\"color: #6b7280; font-size: 12px;\">"
        "This notification is from the AI Leadership Growth Benchmark platform."
        f"{'<br>Session: ' + html.escape(session_id) if session_id else ''}</p>"
    )


def _table(title: str, rows: list[tuple[str, str]]) -> str:
    cells = "".join(
        f"<tr><td style=\"padding: 4px 8px; font-weight: bold;\">{html.escape(label)}</td>"
        f"<td style=\"padding: 4px 8px;\">{html.escape(value or '-')}</td></tr>"
        for label, value in rows
    )
    return f"<h3>{html.escape(title)}</h3><table>{cells}</table>"
