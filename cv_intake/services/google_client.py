"""Service-account credentials and API client construction for Google Drive and Sheets."""

from pathlib import Path
from typing import Optional

from google.oauth2 import service_account
from googleapiclient.discovery import Resource, build

from cv_intake.config import GOOGLE_SCOPES, GOOGLE_SERVICE_ACCOUNT_FILE
from cv_intake.errors import ConfigurationError
from cv_intake.utils.logger import get_logger

logger = get_logger(__name__)


def load_credentials(key_file: Optional[str] = None) -> service_account.Credentials:
    """Load service-account credentials scoped for Drive file access and Sheets."""
    path = Path(key_file or GOOGLE_SERVICE_ACCOUNT_FILE)
    if not path.exists():
        raise ConfigurationError(f"Service account file not found: {path}")
    credentials = service_account.Credentials.from_service_account_file(str(path), scopes=GOOGLE_SCOPES)
    logger.info("Loaded service account credentials from %s", path)
    return credentials


def build_service(api: str, version: str, key_file: Optional[str] = None) -> Resource:
    """Build a googleapiclient resource, e.g. build_service("drive", "v3")."""
    return build(api, version, credentials=load_credentials(key_file), cache_discovery=False)
