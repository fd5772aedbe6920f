"""
Follow-up email to candidates: "Your CV is Under Review".

Sends over SMTP (STARTTLS) when SMTP_USER is configured, otherwise prints
the message to the log. Emails are scheduled as asyncio tasks on the
running server loop and are lost if the process exits first.
"""

import asyncio
import smtplib
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from email.message import EmailMessage
from typing import Optional, Set

from cv_intake.config import (
    COMPANY_NAME,
    EMAIL_DELAY_MINUTES,
    EMAIL_SEND_AT,
    FROM_EMAIL,
    SMTP_HOST,
    SMTP_PASSWORD,
    SMTP_PORT,
    SMTP_USER,
)
from cv_intake.utils.logger import get_logger

logger = get_logger(__name__)

REVIEW_SUBJECT = "Your CV is Under Review"


@dataclass
class EmailResult:
    success: bool
    error: Optional[str] = None


def build_review_email(to_email: str, name: Optional[str] = None) -> EmailMessage:
    """Build the plain-text review notice addressed to the candidate."""
    msg = EmailMessage()
    msg["Subject"] = REVIEW_SUBJECT
    msg["From"] = FROM_EMAIL
    msg["To"] = to_email
    msg.set_content(
        f"Dear {name or 'Applicant'},\n\n"
        "Thank you for submitting your CV. We wanted to let you know that your CV is "
        "currently under review. We will get back to you soon with more information.\n\n"
        f"Best regards,\n{COMPANY_NAME}\n"
    )
    return msg


def send_email_smtp(msg: EmailMessage) -> EmailResult:
    """Send using SMTP with STARTTLS and login."""
    try:
        with smtplib.SMTP(SMTP_HOST, SMTP_PORT) as server:
            server.starttls()
            server.login(SMTP_USER, SMTP_PASSWORD)
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error("Error sending email to %s: %s", msg["To"], e)
        return EmailResult(success=False, error=str(e))
    logger.info("Email sent successfully to %s", msg["To"])
    return EmailResult(success=True)


def send_email_console(msg: EmailMessage) -> EmailResult:
    """Log the email instead of sending it (no SMTP credentials)."""
    logger.info("EMAIL (console mode) to=%s subject=%s\n%s", msg["To"], msg["Subject"], msg.get_content())
    return EmailResult(success=True)


def send_email(msg: EmailMessage) -> EmailResult:
    if SMTP_USER:
        return send_email_smtp(msg)
    return send_email_console(msg)


def default_send_time(now: Optional[datetime] = None) -> datetime:
    """EMAIL_SEND_AT if configured, else now + EMAIL_DELAY_MINUTES (UTC)."""
    if EMAIL_SEND_AT is not None:
        return EMAIL_SEND_AT
    now = now or datetime.now(timezone.utc)
    return now + timedelta(minutes=EMAIL_DELAY_MINUTES)


def _as_aware(dt: datetime) -> datetime:
    # Naive datetimes are treated as local time.
    return dt if dt.tzinfo is not None else dt.astimezone()


class EmailScheduler:
    """Schedules one-shot review emails on the running event loop."""

    def __init__(self, sender=send_email) -> None:
        self._sender = sender
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def schedule(
        self,
        to_email: str,
        name: Optional[str] = None,
        send_at: Optional[datetime] = None,
    ) -> Optional[asyncio.Task]:
        """
        Schedule the review email for send_at. Returns the task, or None when
        there is no address or send_at is not in the future.
        Must be called from within a running event loop.
        """
        if not to_email:
            return None
        send_at = _as_aware(send_at or default_send_time())
        delay = (send_at - datetime.now(timezone.utc)).total_seconds()
        if delay <= 0:
            logger.error("Scheduled date %s is in the past; email to %s not scheduled", send_at.isoformat(), to_email)
            return None

        msg = build_review_email(to_email, name)
        task = asyncio.get_running_loop().create_task(self._send_later(msg, delay))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.info("Email to %s scheduled for %s", to_email, send_at.isoformat())
        return task

    async def _send_later(self, msg: EmailMessage, delay: float) -> EmailResult:
        await asyncio.sleep(delay)
        logger.info("Scheduler triggered for %s", msg["To"])
        return await asyncio.to_thread(self._sender, msg)

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
