"""Spreadsheet sync for bookings, analytics and lead scores.

Callers fire a sync and ignore the response; the service therefore never
raises for provider failures and reports them in the returned SyncResult.
"""

import enum
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from leadership_benchmark.core.interfaces import ISheetsClient, SyncResult
from leadership_benchmark.observability import get_logger

logger = get_logger(__name__)


class SyncType(str, enum.Enum):
    """Which tab a sync request targets."""

    BOOKING = "booking"
    ANALYTICS = "analytics"
    LEAD_SCORES = "lead_scores"


SHEET_NAMES: dict[SyncType, str] = {
    SyncType.BOOKING: "Bookings",
    SyncType.ANALYTICS: "Analytics",
    SyncType.LEAD_SCORES: "Lead Scores",
}


def _quality(score: Any, high: str, medium: str, low: str) -> str:
    value = _number(score)
    if value >= 70:
        return high
    if value >= 50:
        return medium
    return low


def _number(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _minutes(seconds: Any) -> int:
    return int(_number(seconds) / 60 + 0.5)


def _short_id(value: Any) -> str:
    return str(value)[:8] if value else "N/A"


_Column = tuple[str, Callable[[dict[str, Any]], Any]]

# header -> cell extractor, per tab
_COLUMNS: dict[SyncType, list[_Column]] = {
    SyncType.BOOKING: [
        ("Lead ID", lambda r: _short_id(r.get("id"))),
        ("Date Created", lambda r: r.get("created_at", "")),
        ("Source", lambda r: r.get("source") or "AI Leadership Growth Benchmark"),
        ("Full Name", lambda r: r.get("contact_name", "")),
        ("Email", lambda r: r.get("contact_email", "")),
        ("Company", lambda r: r.get("company_name", "")),
        ("Role/Title", lambda r: r.get("role", "")),
        ("Phone", lambda r: r.get("phone") or ""),
        ("AI Readiness Score", lambda r: r.get("lead_score") or 0),
        ("Leadership Tier", lambda r: r.get("leadership_tier", "")),
        ("Lead Priority", lambda r: r.get("lead_priority", "")),
        ("Lead Quality Score", lambda r: _quality(r.get("lead_score"), "High", "Medium", "Low")),
        ("Recommended Service Type", lambda r: r.get("service_type", "")),
        ("Booking Request Status", lambda r: r.get("status", "pending")),
        ("Follow-up Priority", lambda r: r.get("priority") or "medium"),
        ("Notes", lambda r: r.get("notes", "")),
    ],
    SyncType.ANALYTICS: [
        ("Date", lambda r: r.get("created_at", "")),
        ("Conversion Type", lambda r: r.get("conversion_type", "")),
        ("Service Type", lambda r: r.get("service_type") or ""),
        ("Lead Score", lambda r: r.get("lead_score") or 0),
        ("Session Duration (min)", lambda r: _minutes(r.get("session_duration"))),
        ("Messages Exchanged", lambda r: r.get("messages_exchanged") or 0),
        ("Topics Explored", lambda r: r.get("topics_explored") or 0),
        ("Insights Generated", lambda r: r.get("insights_generated") or 0),
        ("Conversion Value", lambda r: r.get("conversion_value") or 0),
        ("Source Channel", lambda r: r.get("source_channel") or "benchmark"),
    ],
    SyncType.LEAD_SCORES: [
        ("Date", lambda r: r.get("created_at", "")),
        ("Session ID", lambda r: _short_id(r.get("session_id"))),
        ("Total AI Readiness Score", lambda r: r.get("total_score") or 0),
        ("Engagement Score", lambda r: r.get("engagement_score") or 0),
        ("Business Readiness Score", lambda r: r.get("business_readiness_score") or 0),
        ("Implementation Readiness", lambda r: r.get("implementation_readiness") or 0),
        ("Company", lambda r: r.get("company_name", "")),
        ("Industry", lambda r: r.get("industry", "")),
        ("Company Size", lambda r: r.get("company_size", "")),
        (
            "Lead Quality",
            lambda r: _quality(
                r.get("total_score"), "High Priority", "Medium Priority", "Low Priority"
            ),
        ),
        ("Qualification Notes", lambda r: r.get("qualification_notes") or ""),
    ],
}


def sheet_headers(sync_type: SyncType) -> list[str]:
    """Column headers for a tab."""
    return [header for header, _ in _COLUMNS[sync_type]]


def format_rows(sync_type: SyncType, records: list[dict[str, Any]]) -> list[list[Any]]:
    """Flatten records into rows in header order.

    Args:
        sync_type: Target tab.
        records: Source records; missing keys become empty cells or zeros.

    Returns:
        One row per record.
    """
    columns = _COLUMNS[sync_type]
    return [[extract(record) for _, extract in columns] for record in records]


class SyncService:
    """Appends funnel records to the reporting spreadsheet."""

    def __init__(self, sheets_client: ISheetsClient) -> None:
        self._sheets = sheets_client

    async def sync(self, sync_type: SyncType, records: list[dict[str, Any]]) -> SyncResult:
        """Append records to the tab for ``sync_type``.

        Args:
            sync_type: booking, analytics or lead_scores.
            records: Records to append. Each record without ``created_at``
                is stamped with the current UTC time.

        Returns:
            SyncResult; an empty batch succeeds without calling the provider.
        """
        sheet_name = SHEET_NAMES[sync_type]
        if not records:
            return SyncResult(success=True, sheet_name=sheet_name, rows_appended=0)

        now = datetime.now(tz=timezone.utc).isoformat()
        stamped = [{"created_at": now, **record} for record in records]
        rows = format_rows(sync_type, stamped)

        result = await self._sheets.append_rows(sheet_name, sheet_headers(sync_type), rows)
        if result.success:
            logger.info("Sheet sync complete", sheet_name=sheet_name, rows=result.rows_appended)
        else:
            logger.warning("Sheet sync failed", sheet_name=sheet_name, error=result.error)
        return result
