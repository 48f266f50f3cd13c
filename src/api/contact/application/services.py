"""Application service for the contact form."""

from __future__ import annotations

from contact.application.observability import ContactProbe, DefaultContactProbe
from contact.domain.value_objects import ContactMessage
from contact.ports.notifier import ContactDeliveryError, ContactNotifier


class ContactService:
    """Forwards contact form submissions to the site owner."""

    def __init__(self, notifier: ContactNotifier, probe: ContactProbe | None = None):
        self._notifier = notifier
        self._probe = probe or DefaultContactProbe()

    async def submit(self, message: ContactMessage) -> None:
        """Deliver a contact message.

        Raises:
            ContactDeliveryError: If the notifier could not deliver it
        """
        try:
            await self._notifier.send(message)
        except ContactDeliveryError as e:
            self._probe.delivery_failed(subject=message.subject, error=str(e))
            raise

        self._probe.message_sent(subject=message.subject)
