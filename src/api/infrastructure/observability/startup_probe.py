"""Probe for application lifecycle events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Events raised by the application lifespan."""

    def application_started(self, version: str, database: str) -> None:
        """Settings loaded and the connection cache installed.

        ``database`` is the redacted URI; no connection has been made yet.
        """
        ...

    def application_stopped(self) -> None:
        """Shutdown finished and the database client, if any, was closed."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        ...


class DefaultStartupProbe:
    """StartupProbe that writes structlog events."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_started(self, version: str, database: str) -> None:
        self._logger.info(
            "application_started",
            version=version,
            database=database,
            **self._get_context_kwargs(),
        )

    def application_stopped(self) -> None:
        self._logger.info("application_stopped", **self._get_context_kwargs())
