"""Transactional email: welcome and password-reset messages over SMTP."""

from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from pathlib import Path
from typing import Protocol
from urllib.parse import urlencode

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.core.config import Settings

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
_ENV = Environment(
    loader=FileSystemLoader(_TEMPLATE_DIR),
    autoescape=select_autoescape(["html", "xml"]),
)


class EmailDeliveryError(Exception):
    """Raised when the mail server rejects, times out, or cannot be reached."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


@dataclass(frozen=True)
class OutgoingEmail:
    to: str
    subject: str
    html: str
    text: str | None = None


class EmailSender(Protocol):
    """send() returns on success and raises EmailDeliveryError on failure."""

    def send(self, message: OutgoingEmail) -> None: ...


class SmtpEmailSender:
    """Deliver over SMTP with STARTTLS and a fixed socket timeout."""

    def __init__(
        self,
        *,
        host: str,
        port: int,
        username: str,
        password: str,
        from_address: str,
        timeout: float = 10.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_address = from_address
        self.timeout = timeout

    def send(self, message: OutgoingEmail) -> None:
        mail = EmailMessage()
        mail["Subject"] = message.subject
        mail["To"] = message.to
        mail["From"] = self.from_address
        mail.set_content(message.text or "This message contains HTML content.")
        mail.add_alternative(message.html, subtype="html")
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls()
                server.login(self.username, self.password)
                server.send_message(mail)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                "Email delivery failed",
                extra={"smtp_host": self.host, "subject": message.subject, "reason": str(e)[:200]},
            )
            raise EmailDeliveryError("Failed to send email", cause=e) from e
        logger.info("Email sent", extra={"subject": message.subject})


class DisabledEmailSender:
    """Used when SMTP credentials are not configured: log and skip."""

    def send(self, message: OutgoingEmail) -> None:
        logger.warning(
            "Email service not configured - skipping email send",
            extra={"subject": message.subject},
        )


def build_email_sender(settings: Settings) -> EmailSender:
    if not settings.smtp_configured or settings.SMTP_USER is None or settings.SMTP_PASS is None:
        return DisabledEmailSender()
    from_email = settings.SMTP_FROM_EMAIL or settings.SMTP_USER
    return SmtpEmailSender(
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USER,
        password=settings.SMTP_PASS.get_secret_value(),
        from_address=f'"{settings.SMTP_FROM_NAME}" <{from_email}>',
        timeout=settings.SMTP_TIMEOUT_SEC,
    )


def build_welcome_email(to: str, name: str, site_name: str = "Our Platform") -> OutgoingEmail:
    html = _ENV.get_template("welcome_email.html").render(name=name, site_name=site_name)
    return OutgoingEmail(
        to=to,
        subject=f"Welcome to {site_name}!",
        html=html,
        text=(
            f"Hi {name}, Thank you for registering with us! "
            "Your account has been successfully created."
        ),
    )


def build_reset_url(frontend_url: str, token: str) -> str:
    return f"{frontend_url.rstrip('/')}/reset-password?{urlencode({'token': token})}"


def build_password_reset_email(
    to: str, name: str, reset_url: str, expires_minutes: int = 60
) -> OutgoingEmail:
    html = _ENV.get_template("password_reset_email.html").render(
        name=name, reset_url=reset_url, expires_minutes=expires_minutes
    )
    return OutgoingEmail(
        to=to,
        subject="Password Reset Request",
        html=html,
        text=(
            f"Hi {name}, Click this link to reset your password: {reset_url}. "
            f"This link expires in {expires_minutes} minutes."
        ),
    )
