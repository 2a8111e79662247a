"""Abstract interfaces (Protocol classes) for the benchmark service.

Services depend on these interfaces, not concrete implementations, so they
can be exercised with mocks. Concrete implementations live in ``adapters/``.

The small result dataclasses returned across these seams are defined here
too, so the core never imports from the adapters layer.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

# ---------------------------------------------------------------------------
# Provider results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChatCompletion:
    """The parts of a chat-completions response the services use.

    Attributes:
        model: Model that produced the completion.
        content: Assistant message text, if any.
        tool_arguments: Arguments of the first tool call, if any.
        usage: Token usage as reported by the provider.
    """

    model: str
    content: str | None = None
    tool_arguments: str | None = None
    usage: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EmailResult:
    """Outcome of one email send."""

    success: bool
    message_id: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one spreadsheet append."""

    success: bool
    sheet_name: str
    rows_appended: int = 0
    error: str | None = None


# ---------------------------------------------------------------------------
# External providers
# ---------------------------------------------------------------------------


@runtime_checkable
class ILLMGateway(Protocol):
    """OpenAI-compatible chat-completions endpoint."""

    @property
    def model(self) -> str:
        """Model requested by this gateway."""
        ...

    async def complete(
        self,
        messages: list[dict[str, str]],
        max_tokens: int,
        tools: list[dict[str, Any]] | None = None,
        tool_choice: dict[str, Any] | None = None,
        temperature: float | None = None,
    ) -> ChatCompletion:
        """Run one chat completion.

        Raises:
            LLMNotConfiguredError: If no API key is configured.
            LLMTransportError: If the request fails before a response.
            LLMProviderError: If the provider returns an error status.
        """
        ...


@runtime_checkable
class IEmailSender(Protocol):
    """Transactional email delivery."""

    async def send(self, to: list[str], subject: str, html: str) -> EmailResult:
        """Send one HTML email. Never raises; failures are reported in the result."""
        ...


@runtime_checkable
class ISheetsClient(Protocol):
    """Append-only spreadsheet sink."""

    async def append_rows(
        self,
        sheet_name: str,
        headers: list[str],
        rows: list[list[Any]],
    ) -> SyncResult:
        """Append rows to a tab, writing the header row first if the tab is empty."""
        ...


# ---------------------------------------------------------------------------
# Partner repositories
# ---------------------------------------------------------------------------


@runtime_checkable
class IPartnerIntakeRepository(Protocol):
    """Persistence for partner intake forms."""

    async def create(
        self,
        firm_name: str,
        partner_type: str | None,
        objectives: list[str],
        pipeline_count: int,
        pipeline_names: str,
        urgency_window: str,
        consent: bool,
        contact_name: str | None,
        contact_email: str | None,
    ) -> Any:
        """Insert an intake and return the created record."""
        ...

    async def get_by_id(self, intake_id: uuid.UUID) -> Any | None:
        """Return the intake or None."""
        ...


@runtime_checkable
class IPortfolioItemRepository(Protocol):
    """Persistence for scored portfolio companies."""

    async def replace_for_intake(
        self,
        intake_id: uuid.UUID,
        items: list[dict[str, Any]],
    ) -> list[Any]:
        """Replace every item of an intake with the given scored rows."""
        ...

    async def list_by_intake(self, intake_id: uuid.UUID) -> list[Any]:
        """Return the intake's items in entry order."""
        ...


@runtime_checkable
class IPartnerPlanRepository(Protocol):
    """Persistence for computed partner plans."""

    async def create(self, intake_id: uuid.UUID, plan: dict[str, Any]) -> Any:
        """Insert a plan and return the created record."""
        ...

    async def get_by_id(self, plan_id: uuid.UUID) -> Any | None:
        """Return the plan or None."""
        ...

    async def get_by_share_slug(self, share_slug: str) -> Any | None:
        """Return the plan published under ``share_slug`` or None."""
        ...

    async def set_share_slug(self, plan_id: uuid.UUID, share_slug: str) -> Any:
        """Store the share slug on a plan and return the updated record."""
        ...
