"""Outbound port for delivering contact messages."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from contact.domain.value_objects import ContactMessage


class ContactDeliveryError(Exception):
    """Raised when a contact message could not be handed to the mail server."""


@runtime_checkable
class ContactNotifier(Protocol):
    """Delivers contact messages to the site owner."""

    async def send(self, message: ContactMessage) -> None:
        """Deliver a message.

        Raises:
            ContactDeliveryError: If delivery fails
        """
        ...
