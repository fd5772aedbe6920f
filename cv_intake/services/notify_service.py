"""Outbound CV notification API: payload mapping and a single-attempt POST."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from cv_intake.config import (
    CANDIDATE_EMAIL_HEADER,
    EXTERNAL_API_URL,
    HTTP_TIMEOUT_SECONDS,
    PAYLOAD_STATUS,
)
from cv_intake.schemas.cv_payload import CVData, CVPayload, PayloadMetadata, PersonalInfo
from cv_intake.schemas.extracted_record import ExtractedRecord
from cv_intake.utils.logger import get_logger

logger = get_logger(__name__)

EXTERNAL_API_ERROR = "External API call failed"


def _as_list(value: Optional[str]) -> List[str]:
    return [value] if value else []


def build_payload(
    record: ExtractedRecord,
    public_link: str,
    now: Optional[datetime] = None,
    status: str = PAYLOAD_STATUS,
) -> CVPayload:
    """Map an extracted record and the Drive public link to the API payload."""
    now = now or datetime.now(timezone.utc)
    name = record.name or ""
    email = record.email or ""
    return CVPayload(
        cv_data=CVData(
            personal_info=PersonalInfo(name=name, email=email, phone=record.phone or ""),
            education=_as_list(record.get("education")),
            qualifications=_as_list(record.get("qualifications")),
            projects=_as_list(record.get("projects")),
            cv_public_link=public_link or "",
        ),
        metadata=PayloadMetadata(
            applicant_name=name,
            email=email,
            status=status,
            cv_processed=True,
            processed_timestamp=now.isoformat(),
        ),
    )


async def send_payload(
    payload: CVPayload,
    url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """
    POST the payload once. Returns the decoded response body, or an
    {"error", "details"} dict on failure; never raises.
    """
    url = url or EXTERNAL_API_URL
    if not url:
        logger.error("EXTERNAL_API_URL is not set")
        return {"error": EXTERNAL_API_ERROR, "details": "EXTERNAL_API_URL is not set"}

    headers = {"Content-Type": "application/json"}
    if CANDIDATE_EMAIL_HEADER:
        headers["X-Candidate-Email"] = CANDIDATE_EMAIL_HEADER

    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS, transport=transport) as client:
            response = await client.post(url, json=payload.model_dump(), headers=headers)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error("External API HTTP error: %s %s", e.response.status_code, e.response.text)
        return {"error": EXTERNAL_API_ERROR, "details": str(e)}
    except httpx.HTTPError as e:
        logger.error("Error sending payload to external endpoint: %s", e)
        return {"error": EXTERNAL_API_ERROR, "details": str(e)}

    try:
        result = response.json()
    except ValueError:
        result = {"response": response.text}
    logger.info("External API response: %s", result)
    return result
