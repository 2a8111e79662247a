"""Email delivery through Resend.

The Resend SDK is synchronous, so sends run in a worker thread to keep the
event loop free.
"""

import asyncio
from typing import Any

import resend

from leadership_benchmark.core.interfaces import EmailResult
from leadership_benchmark.observability import get_logger

logger = get_logger(__name__)


class ResendEmailSender:
    """Sends HTML emails with the Resend API."""

    def __init__(self, api_key: str, from_email: str) -> None:
        """Initialise the sender.

        Args:
            api_key: Resend API key; empty disables delivery.
            from_email: Sender, e.g. 'Name <no-reply@example.com>'.
        """
        self.api_key = api_key
        self.from_email = from_email
        if not self.api_key:
            logger.warning("Resend API key not set - email delivery disabled")

    async def send(self, to: list[str], subject: str, html: str) -> EmailResult:
        """Send one email.

        Args:
            to: Recipient addresses.
            subject: Subject line.
            html: HTML body.

        Returns:
            EmailResult indicating success or failure.
        """
        if not self.api_key:
            return EmailResult(
                success=False,
                error="Email delivery not configured (missing API key)",
            )

        params: dict[str, Any] = {
            "from": self.from_email,
            "to": to,
            "subject": subject,
            "html": html,
        }

        try:
            response = await asyncio.to_thread(self._send_sync, params)
        except Exception as exc:
            logger.error("Email delivery failed", error=str(exc), subject=subject)
            return EmailResult(success=False, error=str(exc))

        message_id = response.get("id") if isinstance(response, dict) else None
        logger.info("Email sent", message_id=message_id, recipients=len(to))
        return EmailResult(success=True, message_id=message_id)

    def _send_sync(self, params: dict[str, Any]) -> Any:
        resend.api_key = self.api_key
        return resend.Emails.send(params)
