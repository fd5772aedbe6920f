"""Schema exports."""

from .cv_payload import CVData, CVPayload, PayloadMetadata, PersonalInfo
from .extracted_record import ExtractedRecord, ExtractionError, ExtractionResult, is_error
from .uploaded_file import UploadedFile

__all__ = [
    "ExtractedRecord",
    "ExtractionError",
    "ExtractionResult",
    "is_error",
    "CVPayload",
    "CVData",
    "PayloadMetadata",
    "PersonalInfo",
    "UploadedFile",
]
