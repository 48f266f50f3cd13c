"""SMTP delivery of contact messages.

smtplib is blocking, so each delivery runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import smtplib
from collections.abc import Callable
from email.message import EmailMessage
from email.utils import formataddr

from contact.domain.value_objects import ContactMessage
from contact.ports.notifier import ContactDeliveryError
from infrastructure.settings import SmtpSettings

SmtpFactory = Callable[[SmtpSettings], smtplib.SMTP]

SENDER_NAME = "Rasman Music Contact Form"


def default_smtp_factory(settings: SmtpSettings) -> smtplib.SMTP:
    if settings.use_ssl:
        return smtplib.SMTP_SSL(
            settings.host, settings.port, timeout=settings.timeout_seconds
        )
    return smtplib.SMTP(settings.host, settings.port, timeout=settings.timeout_seconds)


def build_email(message: ContactMessage, settings: SmtpSettings) -> EmailMessage:
    """Render a contact message as a plain-text email to the site owner."""
    email = EmailMessage()
    email["From"] = formataddr((SENDER_NAME, settings.sender))
    email["To"] = settings.contact_recipient
    email["Reply-To"] = formataddr((message.name, message.email))
    email["Subject"] = f"Contact form: {message.subject}"
    email.set_content(
        f"Name: {message.name}\n"
        f"Email: {message.email}\n"
        f"Subject: {message.subject}\n"
        "\n"
        f"{message.body}\n"
    )
    return email


class SmtpContactNotifier:
    """ContactNotifier backed by an SMTP server."""

    def __init__(
        self,
        settings: SmtpSettings,
        smtp_factory: SmtpFactory = default_smtp_factory,
    ):
        self._settings = settings
        self._smtp_factory = smtp_factory

    async def send(self, message: ContactMessage) -> None:
        email = build_email(message, self._settings)
        try:
            await asyncio.to_thread(self._deliver, email)
        except (smtplib.SMTPException, OSError) as e:
            raise ContactDeliveryError(f"SMTP delivery failed: {e}") from e

    def _deliver(self, email: EmailMessage) -> None:
        with self._smtp_factory(self._settings) as smtp:
            if not self._settings.use_ssl:
                smtp.ehlo()
                if smtp.has_extn("starttls"):
                    smtp.starttls()
            if self._settings.user:
                smtp.login(
                    self._settings.user, self._settings.password.get_secret_value()
                )
            smtp.send_message(email)
