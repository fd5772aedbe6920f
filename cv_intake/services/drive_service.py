"""Google Drive storage for original CV files."""

from io import BytesIO
from typing import Optional

from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from cv_intake.config import DRIVE_FOLDER_ID
from cv_intake.errors import StorageError
from cv_intake.schemas.uploaded_file import UploadedFile
from cv_intake.services.google_client import build_service
from cv_intake.utils.logger import get_logger

logger = get_logger(__name__)


class DriveService:
    """Uploads files to one Drive folder and shares them read-only with anyone holding the link."""

    def __init__(self, service: Optional[Resource] = None, folder_id: Optional[str] = None) -> None:
        self._service = service
        self.folder_id = folder_id if folder_id is not None else DRIVE_FOLDER_ID

    @property
    def service(self) -> Resource:
        if self._service is None:
            self._service = build_service("drive", "v3")
        return self._service

    def upload_file(self, file_bytes: bytes, filename: str, mime_type: str) -> UploadedFile:
        """
        Create the file in the configured folder, make it public (reader, anyone)
        and return its id with the web view/content links.
        Raises StorageError if any Drive call fails.
        """
        metadata = {"name": filename}
        if self.folder_id:
            metadata["parents"] = [self.folder_id]
        media = MediaIoBaseUpload(BytesIO(file_bytes), mimetype=mime_type or "application/octet-stream")
        try:
            created = self.service.files().create(body=metadata, media_body=media, fields="id").execute()
            file_id = created["id"]
            logger.info("Uploaded %s to Google Drive as %s", filename, file_id)

            self.service.permissions().create(
                fileId=file_id,
                body={"role": "reader", "type": "anyone"},
            ).execute()

            info = self.service.files().get(fileId=file_id, fields="id, webViewLink, webContentLink").execute()
        except (HttpError, GoogleAuthError, OSError) as e:
            logger.error("Google Drive upload failed for %s: %s", filename, e)
            raise StorageError(f"Google Drive upload failed: {e}") from e

        uploaded = UploadedFile(
            file_id=file_id,
            web_view_link=info.get("webViewLink") or "",
            web_content_link=info.get("webContentLink") or "",
        )
        logger.info("Public link: %s", uploaded.web_view_link)
        return uploaded
