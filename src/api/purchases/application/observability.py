"""Domain probes for the Purchases application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PurchaseServiceProbe(Protocol):
    """Domain probe for purchase history reads."""

    def purchases_listed(
        self, user_id: str, page: int, returned: int, total: int
    ) -> None:
        """Record that a page of a user's purchases was served."""
        ...

    def request_failed(self, error: Exception) -> None:
        """Record that purchases could not be read from the database."""
        ...

    def with_context(self, context: ObservationContext) -> PurchaseServiceProbe:
        ...


class DefaultPurchaseServiceProbe:
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

    def with_context(self, context: ObservationContext) -> DefaultPurchaseServiceProbe:
        return DefaultPurchaseServiceProbe(logger=self._logger, context=context)

    def purchases_listed(
        self, user_id: str, page: int, returned: int, total: int
    ) -> None:
        self._logger.debug(
            "purchases_listed",
            user_id=user_id,
            page=page,
            returned=returned,
            total=total,
            **self._get_context_kwargs(),
        )

    def request_failed(self, error: Exception) -> None:
        self._logger.error(
            "purchases_request_failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
