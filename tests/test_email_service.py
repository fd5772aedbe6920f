import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, Mock

from cv_intake.services import email_service
from cv_intake.services.email_service import (
    REVIEW_SUBJECT,
    EmailResult,
    EmailScheduler,
    build_review_email,
    default_send_time,
    send_email,
)


class TestReviewEmail:

    def test_build_review_email(self):
        msg = build_review_email("jane@example.com", "Jane Doe")

        assert msg["To"] == "jane@example.com"
        assert msg["Subject"] == REVIEW_SUBJECT
        assert msg.get_content().startswith("Dear Jane Doe,")
        assert "currently under review" in msg.get_content()

    def test_name_fallback(self):
        msg = build_review_email("jane@example.com", None)

        assert msg.get_content().startswith("Dear Applicant,")

    def test_console_provider_without_smtp_user(self, monkeypatch):
        monkeypatch.setattr(email_service, "SMTP_USER", "")
        smtp = Mock()
        monkeypatch.setattr(email_service.smtplib, "SMTP", smtp)

        result = send_email(build_review_email("jane@example.com"))

        assert result.success
        smtp.assert_not_called()

    def test_smtp_provider(self, monkeypatch):
        monkeypatch.setattr(email_service, "SMTP_USER", "sender@example.com")
        smtp = MagicMock()
        monkeypatch.setattr(email_service.smtplib, "SMTP", smtp)

        result = send_email(build_review_email("jane@example.com"))

        assert result.success
        server = smtp.return_value.__enter__.return_value
        server.starttls.assert_called_once()
        server.login.assert_called_once()
        server.send_message.assert_called_once()

    def test_smtp_failure_is_reported(self, monkeypatch):
        monkeypatch.setattr(email_service, "SMTP_USER", "sender@example.com")
        monkeypatch.setattr(email_service.smtplib, "SMTP", Mock(side_effect=OSError("no route")))

        result = send_email(build_review_email("jane@example.com"))

        assert not result.success
        assert result.error == "no route"

    def test_default_send_time_uses_delay(self, monkeypatch):
        monkeypatch.setattr(email_service, "EMAIL_SEND_AT", None)
        monkeypatch.setattr(email_service, "EMAIL_DELAY_MINUTES", 30)
        now = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)

        assert default_send_time(now) == now + timedelta(minutes=30)

    def test_default_send_time_prefers_fixed_time(self, monkeypatch):
        fixed = datetime(2026, 2, 2, 14, 45, tzinfo=timezone.utc)
        monkeypatch.setattr(email_service, "EMAIL_SEND_AT", fixed)

        assert default_send_time() == fixed


class TestEmailScheduler:

    def test_sends_at_scheduled_time(self):
        sender = Mock(return_value=EmailResult(success=True))
        scheduler = EmailScheduler(sender=sender)

        async def run():
            send_at = datetime.now(timezone.utc) + timedelta(milliseconds=50)
            task = scheduler.schedule("jane@example.com", "Jane", send_at=send_at)
            assert task is not None
            assert scheduler.pending == 1
            return await task

        result = asyncio.run(run())

        assert result.success
        sender.assert_called_once()
        assert sender.call_args.args[0]["To"] == "jane@example.com"
        assert scheduler.pending == 0

    def test_past_time_is_not_scheduled(self):
        sender = Mock()
        scheduler = EmailScheduler(sender=sender)

        async def run():
            return scheduler.schedule("jane@example.com", "Jane", send_at=datetime(2020, 1, 1, tzinfo=timezone.utc))

        assert asyncio.run(run()) is None
        sender.assert_not_called()

    def test_missing_address_is_not_scheduled(self):
        scheduler = EmailScheduler(sender=Mock())

        async def run():
            return scheduler.schedule("", "Jane")

        assert asyncio.run(run()) is None

    def test_cancel_all(self):
        sender = Mock()
        scheduler = EmailScheduler(sender=sender)

        async def run():
            task = scheduler.schedule("jane@example.com", send_at=datetime.now(timezone.utc) + timedelta(hours=1))
            scheduler.cancel_all()
            await asyncio.sleep(0)
            return task

        task = asyncio.run(run())

        assert task.cancelled()
        assert scheduler.pending == 0
        sender.assert_not_called()
