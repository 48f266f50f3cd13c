"""Dependency injection for the contact form."""

from typing import Annotated

from fastapi import Depends

from contact.application.services import ContactService
from contact.infrastructure.smtp_notifier import SmtpContactNotifier
from contact.ports.notifier import ContactNotifier
from infrastructure.settings import get_smtp_settings


def get_contact_notifier() -> ContactNotifier:
    """Get the SMTP-backed contact notifier."""
    return SmtpContactNotifier(get_smtp_settings())


def get_contact_service(
    notifier: Annotated[ContactNotifier, Depends(get_contact_notifier)],
) -> ContactService:
    """Get ContactService instance."""
    return ContactService(notifier=notifier)
