"""Append one summary row per processed CV to a Google Sheet."""

from typing import Any, Dict, List, Optional

from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

from cv_intake.config import SHEET_RANGE, SPREADSHEET_ID
from cv_intake.errors import ConfigurationError, SheetsError
from cv_intake.schemas.extracted_record import ExtractedRecord
from cv_intake.services.google_client import build_service
from cv_intake.utils.logger import get_logger

logger = get_logger(__name__)

# Column order of the sheet; do not reorder without migrating existing rows.
SHEET_FIELDS: tuple = (
    "name",
    "email",
    "phone",
    "summary",
    "projects",
    "experience",
    "education",
    "achievements",
    "references",
)


def build_sheet_row(record: ExtractedRecord) -> List[str]:
    """Map the record to SHEET_FIELDS order; missing values become empty cells."""
    return [record.get(field) or "" for field in SHEET_FIELDS]


class SheetsService:
    """Thin wrapper around spreadsheets.values.append."""

    def __init__(
        self,
        service: Optional[Resource] = None,
        spreadsheet_id: Optional[str] = None,
        sheet_range: str = SHEET_RANGE,
    ) -> None:
        self._service = service
        self.spreadsheet_id = spreadsheet_id if spreadsheet_id is not None else SPREADSHEET_ID
        self.sheet_range = sheet_range

    @property
    def service(self) -> Resource:
        if self._service is None:
            self._service = build_service("sheets", "v4")
        return self._service

    def append_row(self, record: ExtractedRecord) -> Dict[str, Any]:
        """Append the record as a new row (RAW values, INSERT_ROWS). Returns the API response."""
        if not self.spreadsheet_id:
            raise ConfigurationError("SPREADSHEET_ID is not set")
        body = {"values": [build_sheet_row(record)]}
        try:
            response = (
                self.service.spreadsheets()
                .values()
                .append(
                    spreadsheetId=self.spreadsheet_id,
                    range=self.sheet_range,
                    valueInputOption="RAW",
                    insertDataOption="INSERT_ROWS",
                    body=body,
                )
                .execute()
            )
        except (HttpError, GoogleAuthError, OSError) as e:
            logger.error("Google Sheets append failed: %s", e)
            raise SheetsError(f"Google Sheets append failed: {e}") from e
        logger.info("Sheet updated: %s", response.get("updates", {}).get("updatedRange", ""))
        return response
