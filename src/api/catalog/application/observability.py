"""Domain probes for the Catalog application layer.

Following Domain Oriented Observability pattern.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CatalogServiceProbe(Protocol):
    """Domain probe for catalog service operations."""

    def listing_served(self, kind: str, page: int, returned: int, total: int) -> None:
        """Record that a page of songs or albums was served."""
        ...

    def item_created(self, kind: str, item_id: str, title: str) -> None:
        """Record that a song or album was created."""
        ...

    def item_updated(self, kind: str, item_id: str, fields: list[str]) -> None:
        """Record that a song or album was updated."""
        ...

    def item_deleted(self, kind: str, item_id: str, cascaded_songs: int = 0) -> None:
        """Record that a song or album was deleted."""
        ...

    def item_not_found(self, kind: str, item_id: str) -> None:
        """Record that an operation addressed a missing song or album."""
        ...

    def request_failed(self, operation: str, error: Exception) -> None:
        """Record that a catalog request ended in a database failure."""
        ...

    def with_context(self, context: ObservationContext) -> CatalogServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCatalogServiceProbe:
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

    def with_context(self, context: ObservationContext) -> DefaultCatalogServiceProbe:
        return DefaultCatalogServiceProbe(logger=self._logger, context=context)

    def listing_served(self, kind: str, page: int, returned: int, total: int) -> None:
        self._logger.debug(
            "catalog_listing_served",
            kind=kind,
            page=page,
            returned=returned,
            total=total,
            **self._get_context_kwargs(),
        )

    def item_created(self, kind: str, item_id: str, title: str) -> None:
        self._logger.info(
            "catalog_item_created",
            kind=kind,
            item_id=item_id,
            title=title,
            **self._get_context_kwargs(),
        )

    def item_updated(self, kind: str, item_id: str, fields: list[str]) -> None:
        self._logger.info(
            "catalog_item_updated",
            kind=kind,
            item_id=item_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def item_deleted(self, kind: str, item_id: str, cascaded_songs: int = 0) -> None:
        self._logger.info(
            "catalog_item_deleted",
            kind=kind,
            item_id=item_id,
            cascaded_songs=cascaded_songs,
            **self._get_context_kwargs(),
        )

    def item_not_found(self, kind: str, item_id: str) -> None:
        self._logger.warning(
            "catalog_item_not_found",
            kind=kind,
            item_id=item_id,
            **self._get_context_kwargs(),
        )

    def request_failed(self, operation: str, error: Exception) -> None:
        self._logger.error(
            "catalog_request_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
