import asyncio
import json
from datetime import datetime, timezone

import httpx

from cv_intake.cv_pipeline.section_extractor import extract
from cv_intake.schemas.extracted_record import ExtractedRecord
from cv_intake.services import notify_service
from cv_intake.services.notify_service import EXTERNAL_API_ERROR, build_payload, send_payload

API_URL = "https://notify.example.com/cv"
PUBLIC_LINK = "https://drive.google.com/file/d/abc/view"


class TestBuildPayload:

    def test_maps_record_fields(self):
        record = extract("Jane Doe\n+1 555 0100\nEducation\nMIT\nProjects\nCache")
        now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

        payload = build_payload(record, PUBLIC_LINK, now=now).model_dump()

        assert payload["cv_data"] == {
            "personal_info": {"name": "Jane Doe", "email": "", "phone": "+1 555 0100"},
            "education": ["MIT"],
            "qualifications": [],
            "projects": ["Cache"],
            "cv_public_link": PUBLIC_LINK,
        }
        assert payload["metadata"] == {
            "applicant_name": "Jane Doe",
            "email": "",
            "status": "prod",
            "cv_processed": True,
            "processed_timestamp": "2026-03-01T12:00:00+00:00",
        }

    def test_empty_record_gives_empty_lists(self):
        payload = build_payload(ExtractedRecord(), "")

        assert payload.cv_data.education == []
        assert payload.cv_data.projects == []
        assert payload.cv_data.personal_info.name == ""
        assert payload.metadata.processed_timestamp


class TestSendPayload:

    def _payload(self):
        return build_payload(extract("Jane\njane@example.com\nEducation\nMIT"), PUBLIC_LINK)

    def test_posts_json_once(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"received": True})

        result = asyncio.run(send_payload(self._payload(), url=API_URL, transport=httpx.MockTransport(handler)))

        assert result == {"received": True}
        assert len(calls) == 1
        body = json.loads(calls[0].content)
        assert body["cv_data"]["personal_info"]["email"] == "jane@example.com"
        assert body["cv_data"]["education"] == ["MIT"]
        assert calls[0].headers["content-type"] == "application/json"

    def test_candidate_header_when_configured(self, monkeypatch):
        monkeypatch.setattr(notify_service, "CANDIDATE_EMAIL_HEADER", "dev@example.com")
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["header"] = request.headers.get("x-candidate-email")
            return httpx.Response(200, json={})

        asyncio.run(send_payload(self._payload(), url=API_URL, transport=httpx.MockTransport(handler)))

        assert seen["header"] == "dev@example.com"

    def test_http_error_is_captured(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, text="unavailable")

        result = asyncio.run(send_payload(self._payload(), url=API_URL, transport=httpx.MockTransport(handler)))

        assert result["error"] == EXTERNAL_API_ERROR
        assert "503" in result["details"]
        assert len(calls) == 1

    def test_connection_error_is_captured(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = asyncio.run(send_payload(self._payload(), url=API_URL, transport=httpx.MockTransport(handler)))

        assert result == {"error": EXTERNAL_API_ERROR, "details": "connection refused"}

    def test_non_json_response(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="ok")

        result = asyncio.run(send_payload(self._payload(), url=API_URL, transport=httpx.MockTransport(handler)))

        assert result == {"response": "ok"}

    def test_missing_url(self, monkeypatch):
        monkeypatch.setattr(notify_service, "EXTERNAL_API_URL", "")

        result = asyncio.run(send_payload(self._payload()))

        assert result["error"] == EXTERNAL_API_ERROR
        assert "EXTERNAL_API_URL" in result["details"]
