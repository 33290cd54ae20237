"""Google Sheets implementation of the workbook handles."""

import logging
import time
from collections.abc import Sequence

from google.auth.credentials import Credentials
from googleapiclient.errors import HttpError

from .config import SheetNotFoundError, WorkbookNotFoundError
from .google_api import build_sheets_service

logger = logging.getLogger(__name__)

RETRY_STATUSES = {429, 500, 502, 503, 504}


def _grid_range(sheet_id: int, row: int, column: int, width: int) -> dict:
    """Convert 1-indexed coordinates to a half-open API GridRange."""
    return {
        "sheetId": sheet_id,
        "startRowIndex": row - 1,
        "endRowIndex": row,
        "startColumnIndex": column - 1,
        "endColumnIndex": column - 1 + width,
    }


def update_cells_request(
    sheet_id: int, row: int, column: int, values: Sequence[str]
) -> dict:
    return {
        "updateCells": {
            "range": _grid_range(sheet_id, row, column, len(values)),
            "rows": [
                {
                    "values": [
                        {"userEnteredValue": {"stringValue": value}}
                        for value in values
                    ]
                }
            ],
            "fields": "userEnteredValue",
        }
    }


def bold_request(sheet_id: int, row: int, column: int, width: int) -> dict:
    return {
        "repeatCell": {
            "range": _grid_range(sheet_id, row, column, width),
            "cell": {"userEnteredFormat": {"textFormat": {"bold": True}}},
            "fields": "userEnteredFormat.textFormat.bold",
        }
    }


class GoogleSheet:
    """A single tab of a Google spreadsheet, addressed by its numeric id."""

    def __init__(self, workbook: "GoogleWorkbook", title: str, sheet_id: int):
        self.workbook = workbook
        self.title = title
        self.sheet_id = sheet_id

    def write_header(self, row: int, column: int, values: Sequence[str]) -> None:
        """Write values and bold them in one batchUpdate, which applies atomically."""
        self.workbook.batch_update(
            [
                update_cells_request(self.sheet_id, row, column, values),
                bold_request(self.sheet_id, row, column, len(values)),
            ],
            "write header",
        )


class GoogleWorkbook:
    def __init__(
        self, service: "GoogleSheetsService", workbook_id: str, metadata: dict
    ):
        self.service = service
        self.workbook_id = workbook_id
        self.title = metadata.get("properties", {}).get("title", "Unknown")
        self._sheet_ids = {
            sheet["properties"]["title"]: sheet["properties"]["sheetId"]
            for sheet in metadata.get("sheets", [])
        }

    def sheet(self, name: str) -> GoogleSheet:
        if name not in self._sheet_ids:
            raise SheetNotFoundError(name)
        return GoogleSheet(self, name, self._sheet_ids[name])

    def batch_update(self, requests: list[dict], action: str) -> dict:
        return self.service.execute_with_retry(
            self.service.service.spreadsheets().batchUpdate(
                spreadsheetId=self.workbook_id, body={"requests": requests}
            ),
            action,
        )


class GoogleSheetsService:
    """Workbook gateway backed by the Google Sheets API."""

    max_attempts = 3

    def __init__(self, credentials: Credentials, service=None):
        self.service = service or build_sheets_service(credentials)

    def execute_with_retry(self, request, action: str) -> dict:
        """Execute a Sheets request with retry/backoff on rate limits."""
        attempt = 1
        while True:
            try:
                return request.execute()
            except HttpError as e:
                status = getattr(e.resp, "status", None)
                if status not in RETRY_STATUSES or attempt >= self.max_attempts:
                    raise
                backoff = 0.5 * (2 ** (attempt - 1))
                logger.warning(
                    f"Failed to {action} (HTTP {status}), retrying in {backoff}s"
                )
                time.sleep(backoff)
                attempt += 1

    def open(self, workbook_id: str) -> GoogleWorkbook:
        try:
            metadata = self.execute_with_retry(
                self.service.spreadsheets().get(
                    spreadsheetId=workbook_id,
                    fields="properties.title,sheets.properties(sheetId,title)",
                ),
                "load spreadsheet",
            )
        except HttpError as e:
            if getattr(e.resp, "status", None) == 404:
                raise WorkbookNotFoundError(workbook_id) from e
            raise
        return GoogleWorkbook(self, workbook_id, metadata)
