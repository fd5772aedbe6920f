"""Service exports."""

from .drive_service import DriveService
from .email_service import EmailScheduler, build_review_email, send_email
from .notify_service import build_payload, send_payload
from .sheets_service import SHEET_FIELDS, SheetsService, build_sheet_row

__all__ = [
    "DriveService",
    "SheetsService",
    "SHEET_FIELDS",
    "build_sheet_row",
    "build_payload",
    "send_payload",
    "EmailScheduler",
    "build_review_email",
    "send_email",
]
