"""Configuration loaded from environment variables."""

import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env


def _parse_datetime(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 datetime from env; empty or invalid values give None."""
    value = (value or "").strip()
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


# HTTP server
PORT: int = int(os.getenv("PORT", "5000"))
CORS_ORIGIN: str = os.getenv("CORS_ORIGIN", "http://localhost:5173")
MAX_UPLOAD_MB: float = float(os.getenv("MAX_UPLOAD_MB", "10"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Google service account – key file path only, never the key itself
GOOGLE_SERVICE_ACCOUNT_FILE: str = os.getenv("GOOGLE_SERVICE_ACCOUNT_FILE", "service_account.json")
GOOGLE_SCOPES: list = [
    "https://www.googleapis.com/auth/drive.file",
    "https://www.googleapis.com/auth/spreadsheets",
]
DRIVE_FOLDER_ID: str = os.getenv("DRIVE_FOLDER_ID", "")
SPREADSHEET_ID: str = os.getenv("SPREADSHEET_ID", "")
SHEET_RANGE: str = os.getenv("SHEET_RANGE", "Sheet1!A1")

# Outbound notification API
EXTERNAL_API_URL: str = os.getenv("EXTERNAL_API_URL", "")
CANDIDATE_EMAIL_HEADER: str = os.getenv("CANDIDATE_EMAIL_HEADER", "")
PAYLOAD_STATUS: str = os.getenv("PAYLOAD_STATUS", "prod")
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

# Follow-up email (SMTP; console output when no SMTP user is set)
SMTP_HOST: str = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER: str = os.getenv("SMTP_USER", "")
SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")
FROM_EMAIL: str = os.getenv("FROM_EMAIL", SMTP_USER or "no-reply@localhost")
COMPANY_NAME: str = os.getenv("COMPANY_NAME", "Company")

# Fixed send time wins; otherwise send EMAIL_DELAY_MINUTES after upload
EMAIL_SEND_AT: Optional[datetime] = _parse_datetime(os.getenv("EMAIL_SEND_AT", ""))
EMAIL_DELAY_MINUTES: float = float(os.getenv("EMAIL_DELAY_MINUTES", "60"))
