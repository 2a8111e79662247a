"""FastAPI router for lead notification emails and spreadsheet sync.

Email delivery is awaited so the caller learns the outcome; a failed send is
reported as ``{success: false, error}`` with HTTP 502 and the funnel carries
on. Spreadsheet sync is queued as a background task and acknowledged with 202.

API prefix: /api/v1/notifications
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from leadership_benchmark.adapters.email_sender import ResendEmailSender
from leadership_benchmark.adapters.sheets_client import SheetsClient
from leadership_benchmark.api.rate_limit import notifications_rate_limit
from leadership_benchmark.api.schemas.notifications import (
    AdvisorySprintRequest,
    ContactNotificationRequest,
    NotificationResponse,
    SyncAcceptedResponse,
    SyncRequest,
)
from leadership_benchmark.core.interfaces import EmailResult
from leadership_benchmark.core.services.notification_service import (
    NotificationService,
    NotificationType,
)
from leadership_benchmark.core.services.sync_service import SHEET_NAMES, SyncService
from leadership_benchmark.observability import get_logger
from leadership_benchmark.settings import Settings, get_settings

logger = get_logger(__name__)

router = APIRouter(
    prefix="/notifications",
    tags=["Notifications"],
    dependencies=[Depends(notifications_rate_limit)],
)


# ---------------------------------------------------------------------------
# Dependency factories
# ---------------------------------------------------------------------------


def get_notification_service(settings: Settings = Depends(get_settings)) -> NotificationService:
    """Build NotificationService with the Resend sender.

    Args:
        settings: Service settings.

    Returns:
        Configured NotificationService instance.
    """
    return NotificationService(
        email_sender=ResendEmailSender(
            api_key=settings.resend_api_key,
            from_email=settings.email_from,
        ),
        recipients=list(settings.notification_recipients),
    )


def get_sync_service(settings: Settings = Depends(get_settings)) -> SyncService:
    """Build SyncService with the Google Sheets client.

    Args:
        settings: Service settings.

    Returns:
        Configured SyncService instance.
    """
    return SyncService(
        sheets_client=SheetsClient(
            api_url=settings.sheets_api_url,
            spreadsheet_id=settings.sheets_spreadsheet_id,
            access_token=settings.sheets_access_token,
        )
    )


def _email_response(result: EmailResult) -> NotificationResponse | JSONResponse:
    if result.success:
        return NotificationResponse(success=True, email_id=result.message_id)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=NotificationResponse(success=False, error=result.error).model_dump(
            by_alias=True, exclude_none=True
        ),
    )


# ---------------------------------------------------------------------------
# Email notifications
# ---------------------------------------------------------------------------


@router.post(
    "/contact",
    response_model=NotificationResponse,
    response_model_exclude_none=True,
    summary="Notify the sales team about a captured benchmark contact",
)
async def notify_contact(
    body: ContactNotificationRequest,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationResponse | JSONResponse:
    """Send the contact-form or deep-profile notification email.

    The email carries the lead priority, contact details, benchmark score and
    tier, the six comparison dimensions and the raw answers.
    """
    if body.type is NotificationType.ADVISORY_SPRINT:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Use /notifications/advisory-sprint for advisory sprint requests.",
        )
    if body.type is NotificationType.DEEP_PROFILE_COMPLETED and body.deep_profile_data is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="deepProfileData is required for deep_profile_completed notifications.",
        )

    result = await service.send_contact_notification(
        notification_type=body.type,
        contact=body.contact_data.to_details(),
        answers=body.assessment_data,
        deep_profile=(
            body.deep_profile_data.to_profile() if body.deep_profile_data is not None else None
        ),
        session_id=body.session_id,
    )
    return _email_response(result)


@router.post(
    "/advisory-sprint",
    response_model=NotificationResponse,
    response_model_exclude_none=True,
    summary="Notify the sales team about an advisory sprint request",
)
async def notify_advisory_sprint(
    body: AdvisorySprintRequest,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationResponse | JSONResponse:
    """Send the advisory sprint email; anonymous when no contact is supplied."""
    result = await service.send_advisory_sprint_notification(
        answers=body.assessment_data,
        contact=body.contact_data.to_details() if body.contact_data is not None else None,
        session_id=body.session_id,
    )
    return _email_response(result)


# ---------------------------------------------------------------------------
# Spreadsheet sync
# ---------------------------------------------------------------------------


@router.post(
    "/sync",
    response_model=SyncAcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Append funnel records to the reporting spreadsheet",
)
async def sync_records(
    body: SyncRequest,
    background_tasks: BackgroundTasks,
    service: SyncService = Depends(get_sync_service),
) -> SyncAcceptedResponse:
    """Queue the append; the outcome is logged, not returned."""
    records = body.records()
    background_tasks.add_task(service.sync, body.type, records)

    logger.info("Sheet sync queued", sync_type=body.type.value, records=len(records))

    return SyncAcceptedResponse(sheet_name=SHEET_NAMES[body.type], records=len(records))
