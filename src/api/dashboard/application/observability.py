"""Domain probes for the dashboard application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DashboardServiceProbe(Protocol):
    """Domain probe for dashboard summary assembly."""

    def summary_built(
        self,
        total_songs: int,
        total_albums: int,
        total_users: int,
        activity_items: int,
    ) -> None:
        """Record that a dashboard summary was assembled."""
        ...

    def request_failed(self, error: Exception) -> None:
        """Record that the dashboard could not be built from the database."""
        ...

    def with_context(self, context: ObservationContext) -> DashboardServiceProbe:
        ...


class DefaultDashboardServiceProbe:
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

    def with_context(self, context: ObservationContext) -> DefaultDashboardServiceProbe:
        return DefaultDashboardServiceProbe(logger=self._logger, context=context)

    def summary_built(
        self,
        total_songs: int,
        total_albums: int,
        total_users: int,
        activity_items: int,
    ) -> None:
        self._logger.debug(
            "dashboard_summary_built",
            total_songs=total_songs,
            total_albums=total_albums,
            total_users=total_users,
            activity_items=activity_items,
            **self._get_context_kwargs(),
        )

    def request_failed(self, error: Exception) -> None:
        self._logger.error(
            "dashboard_request_failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
