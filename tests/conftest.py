"""Pytest configuration and shared fixtures."""

from io import BytesIO
from typing import List
from unittest.mock import Mock

import pytest
from docx import Document
from fastapi.testclient import TestClient

from cv_intake.app import app
from cv_intake.schemas.uploaded_file import UploadedFile
from cv_intake.services.drive_service import DriveService
from cv_intake.services.email_service import EmailScheduler
from cv_intake.services.sheets_service import SheetsService

SAMPLE_CV_TEXT = (
    "Jane Doe\n"
    "jane@example.com\n"
    "Summary: Loves systems.\n"
    "Projects\n"
    "Built a cache."
)


def make_docx(lines: List[str]) -> bytes:
    """Build an in-memory DOCX with one paragraph per line."""
    doc = Document()
    for line in lines:
        doc.add_paragraph(line)
    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture
def sample_cv_text() -> str:
    return SAMPLE_CV_TEXT


@pytest.fixture
def docx_factory():
    return make_docx


@pytest.fixture
def sample_docx_bytes() -> bytes:
    return make_docx(SAMPLE_CV_TEXT.split("\n"))


@pytest.fixture
def test_client() -> TestClient:
    """Create FastAPI test client.

    Returns:
        TestClient: FastAPI test client instance
    """
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_app_state():
    """Ensure dependency overrides and the last-upload slot are reset between tests."""
    app.dependency_overrides = {}
    app.state.last_upload = None
    yield
    app.dependency_overrides = {}
    app.state.last_upload = None


@pytest.fixture
def mock_drive_service() -> Mock:
    service = Mock(spec=DriveService)
    service.upload_file.return_value = UploadedFile(
        file_id="drive-file-1",
        web_view_link="https://drive.google.com/file/d/drive-file-1/view",
        web_content_link="https://drive.google.com/uc?id=drive-file-1",
    )
    return service


@pytest.fixture
def mock_sheets_service() -> Mock:
    service = Mock(spec=SheetsService)
    service.append_row.return_value = {
        "spreadsheetId": "sheet-1",
        "updates": {"updatedRange": "Sheet1!A2:I2", "updatedRows": 1},
    }
    return service


@pytest.fixture
def mock_scheduler() -> Mock:
    return Mock(spec=EmailScheduler)
