"""
CV Pipeline API – FastAPI entrypoint.
Routing and orchestration only; decoding, extraction and external calls live
in cv_pipeline and services.
"""

import asyncio
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from cv_intake.config import CORS_ORIGIN, MAX_UPLOAD_MB, PORT
from cv_intake.cv_pipeline.section_extractor import extract
from cv_intake.cv_pipeline.text_extractor import extract_text_from_file, is_supported_file
from cv_intake.errors import ConfigurationError, CVPipelineError
from cv_intake.schemas.cv_payload import CVPayload
from cv_intake.schemas.extracted_record import ExtractedRecord, is_error
from cv_intake.services.drive_service import DriveService
from cv_intake.services.email_service import EmailScheduler
from cv_intake.services.notify_service import build_payload, send_payload
from cv_intake.services.sheets_service import SheetsService
from cv_intake.utils.logger import get_logger

logger = get_logger(__name__)

PayloadSender = Callable[[CVPayload], Awaitable[Dict[str, Any]]]


@lru_cache(maxsize=1)
def get_drive_service() -> DriveService:
    return DriveService()


@lru_cache(maxsize=1)
def get_sheets_service() -> SheetsService:
    return SheetsService()


@lru_cache(maxsize=1)
def get_email_scheduler() -> EmailScheduler:
    return EmailScheduler()


def get_payload_sender() -> PayloadSender:
    return send_payload


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Reset upload state on startup; drop unsent emails on shutdown."""
    app.state.last_upload = None
    logger.info("CV Pipeline API starting")
    yield
    get_email_scheduler().cancel_all()
    logger.info("CV Pipeline API stopped")


app = FastAPI(title="CV Pipeline API", lifespan=lifespan)
app.state.last_upload = None
app.add_middleware(
    CORSMiddleware,
    allow_origins=[CORS_ORIGIN],
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=True,
)


@app.exception_handler(CVPipelineError)
async def pipeline_error_handler(request: Request, exc: CVPipelineError) -> JSONResponse:
    status = 500 if isinstance(exc, ConfigurationError) else 502
    logger.error("%s failed: %s", request.url.path, exc)
    return JSONResponse(status_code=status, content={"error": type(exc).__name__, "details": str(exc)})


@app.get("/", response_class=PlainTextResponse)
async def index() -> str:
    return "Welcome to the CV Pipeline API"


@app.post("/upload")
async def upload(
    file: Optional[UploadFile] = File(None),
    drive: DriveService = Depends(get_drive_service),
    sheets: SheetsService = Depends(get_sheets_service),
    sender: PayloadSender = Depends(get_payload_sender),
    scheduler: EmailScheduler = Depends(get_email_scheduler),
):
    """Decode, extract, store, forward, append to the sheet and schedule the follow-up email."""
    if file is None or not file.filename:
        return PlainTextResponse("No files were uploaded.", status_code=400)
    filename = file.filename
    if not is_supported_file(filename):
        return PlainTextResponse("Unsupported file format", status_code=400)

    max_bytes = int(MAX_UPLOAD_MB * 1024 * 1024)
    too_large = f"File too large (max {MAX_UPLOAD_MB} MB)"
    if file.size is not None and file.size > max_bytes:
        return PlainTextResponse(too_large, status_code=413)
    # Reads at most one byte past the limit when the size is unknown.
    file_bytes = await file.read(max_bytes + 1)
    if len(file_bytes) > max_bytes:
        return PlainTextResponse(too_large, status_code=413)
    size_mb = len(file_bytes) / (1024 * 1024)
    logger.info("Received %s (%.2f MB)", filename, size_mb)

    text = await asyncio.to_thread(extract_text_from_file, file_bytes, filename)
    if text is None:
        return JSONResponse(status_code=422, content={"error": "Could not extract text from file"})
    app.state.last_upload = (filename, file_bytes)
    logger.debug("Full extracted text: %s", text)

    result = extract(text)
    # Downstream calls still run on an extraction error, with empty fields.
    record = ExtractedRecord() if is_error(result) else result
    logger.info("Extracted data: %s", result.as_flat_dict())

    uploaded = await asyncio.to_thread(
        drive.upload_file, file_bytes, filename, file.content_type or "application/octet-stream"
    )
    external_result = await sender(build_payload(record, uploaded.web_view_link))
    sheet_response = await asyncio.to_thread(sheets.append_row, record)

    if record.email:
        scheduler.schedule(record.email, record.name)

    return {
        "message": "File processed successfully",
        "fileId": uploaded.file_id,
        "extractedData": result.as_flat_dict(),
        "externalResult": external_result,
        "sheetResponse": sheet_response,
        "downloadablePublicLink": uploaded.web_view_link,
    }


@app.get("/cv")
async def last_cv():
    """Re-run extraction on the most recently uploaded file."""
    last = app.state.last_upload
    if last is None:
        return JSONResponse(status_code=500, content={"error": "No CV has been uploaded yet"})
    filename, file_bytes = last
    text = await asyncio.to_thread(extract_text_from_file, file_bytes, filename)
    if text is None:
        return JSONResponse(status_code=500, content={"error": f"Could not extract text from {filename}"})
    return extract(text).as_flat_dict()


def main() -> None:
    import uvicorn

    uvicorn.run("cv_intake.app:app", host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    main()
