"""Google Sheets values API client (append-only)."""

from typing import Any
from urllib.parse import quote

import httpx

from leadership_benchmark.core.interfaces import SyncResult
from leadership_benchmark.observability import get_logger

logger = get_logger(__name__)


class SheetsClient:
    """Appends rows to tabs of a single spreadsheet.

    The header row is written the first time a tab is found empty. Failures
    are reported in the SyncResult rather than raised.
    """

    def __init__(
        self,
        api_url: str,
        spreadsheet_id: str,
        access_token: str,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        """Initialise the client.

        Args:
            api_url: Values API base, e.g. https://sheets.googleapis.com/v4/spreadsheets.
            spreadsheet_id: Target spreadsheet.
            access_token: OAuth bearer token; empty disables sync.
            http_client: Shared client; a short-lived one is used per call if omitted.
            timeout_seconds: Timeout for short-lived clients.
        """
        self._base = f"{api_url.rstrip('/')}/{spreadsheet_id}/values"
        self._configured = bool(spreadsheet_id and access_token)
        self._headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }
        self._http_client = http_client
        self._timeout = timeout_seconds

    async def append_rows(
        self,
        sheet_name: str,
        headers: list[str],
        rows: list[list[Any]],
    ) -> SyncResult:
        """Append rows to ``sheet_name``.

        Args:
            sheet_name: Tab name.
            headers: Header row written when the tab is empty.
            rows: Rows to append.

        Returns:
            SyncResult with the number of appended rows.
        """
        if not self._configured:
            return SyncResult(
                success=False,
                sheet_name=sheet_name,
                error="Spreadsheet sync not configured",
            )

        try:
            if self._http_client is not None:
                return await self._append(self._http_client, sheet_name, headers, rows)
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                return await self._append(client, sheet_name, headers, rows)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Sheet append failed", sheet_name=sheet_name, error=str(exc))
            return SyncResult(success=False, sheet_name=sheet_name, error=str(exc))

    async def _append(
        self,
        client: httpx.AsyncClient,
        sheet_name: str,
        headers: list[str],
        rows: list[list[Any]],
    ) -> SyncResult:
        tab = quote(sheet_name)

        header_response = await client.get(f"{self._base}/{tab}!1:1", headers=self._headers)
        header_response.raise_for_status()
        header_body = header_response.json()
        if not isinstance(header_body, dict):
            raise ValueError(f"Unexpected header range response for {sheet_name}")
        if not header_body.get("values"):
            put = await client.put(
                f"{self._base}/{tab}!A1",
                params={"valueInputOption": "RAW"},
                json={"values": [headers]},
                headers=self._headers,
            )
            put.raise_for_status()
            logger.info("Sheet headers written", sheet_name=sheet_name)

        append = await client.post(
            f"{self._base}/{tab}!A1:append",
            params={"valueInputOption": "RAW", "insertDataOption": "INSERT_ROWS"},
            json={"values": rows},
            headers=self._headers,
        )
        append.raise_for_status()
        return SyncResult(success=True, sheet_name=sheet_name, rows_appended=len(rows))
