"""Domain probes for the contact form."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ContactProbe(Protocol):
    """Domain probe for contact message delivery."""

    def message_sent(self, subject: str) -> None:
        """Record that a contact message was delivered."""
        ...

    def delivery_failed(self, subject: str, error: str) -> None:
        """Record that a contact message could not be delivered."""
        ...

    def with_context(self, context: ObservationContext) -> ContactProbe:
        ...


class DefaultContactProbe:
    """Default implementation using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultContactProbe:
        return DefaultContactProbe(logger=self._logger, context=context)

    def message_sent(self, subject: str) -> None:
        self._logger.info(
            "contact_message_sent",
            subject=subject,
            **self._get_context_kwargs(),
        )

    def delivery_failed(self, subject: str, error: str) -> None:
        self._logger.error(
            "contact_message_delivery_failed",
            subject=subject,
            error=error,
            **self._get_context_kwargs(),
        )
