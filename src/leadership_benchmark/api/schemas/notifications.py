"""Pydantic request/response schemas for lead notifications and spreadsheet sync."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from leadership_benchmark.api.schemas.benchmark import ContactSchema, DeepProfileSchema
from leadership_benchmark.core.services.notification_service import NotificationType
from leadership_benchmark.core.services.sync_service import SyncType


class _CamelSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactNotificationRequest(_CamelSchema):
    """A captured benchmark contact.

    Attributes:
        type: contact_form_submission or deep_profile_completed.
        contact_data: Contact details.
        assessment_data: Benchmark answers keyed by question id.
        deep_profile_data: Deep profile answers, required for deep_profile_completed.
        session_id: Funnel session id for cross-referencing.
    """

    type: NotificationType = NotificationType.CONTACT_FORM_SUBMISSION
    contact_data: ContactSchema
    assessment_data: dict[str, str] = Field(default_factory=dict)
    deep_profile_data: DeepProfileSchema | None = None
    session_id: str | None = Field(default=None, max_length=128)


class AdvisorySprintRequest(_CamelSchema):
    """An advisory sprint request; contact details are optional."""

    assessment_data: dict[str, str] = Field(default_factory=dict)
    contact_data: ContactSchema | None = None
    session_id: str | None = Field(default=None, max_length=128)


class NotificationResponse(_CamelSchema):
    """Delivery outcome: ``{success, emailId}`` or ``{success: false, error}``."""

    success: bool
    email_id: str | None = None
    error: str | None = None


class SyncRequest(BaseModel):
    """Records to append to the reporting spreadsheet."""

    type: SyncType
    data: dict[str, Any] | list[dict[str, Any]]

    def records(self) -> list[dict[str, Any]]:
        """The payload as a list of records."""
        return self.data if isinstance(self.data, list) else [self.data]


class SyncAcceptedResponse(BaseModel):
    """Acknowledgement that the sync was queued."""

    accepted: bool = True
    sheet_name: str
    records: int
