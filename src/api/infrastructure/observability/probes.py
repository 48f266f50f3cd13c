"""Probes for the shared MongoDB connection.

The connection cache reports what happens to the process-wide client through
these probes instead of calling a logger directly, so tests can assert on
events rather than on log output.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ConnectionProbe(Protocol):
    """Lifecycle events of the shared database client.

    ``target`` is always the redacted URI; credentials never reach a probe.
    """

    def connection_attempt_started(self, target: str) -> None:
        """A caller found no client and no attempt in flight."""
        ...

    def pending_attempt_joined(self, target: str) -> None:
        """A caller is waiting on an attempt another caller started."""
        ...

    def connection_established(self, target: str) -> None:
        """The server answered ping; the client is now cached."""
        ...

    def connection_failed(self, target: str, error: Exception) -> None:
        """The attempt failed; every waiter receives the same error."""
        ...

    def connection_closed(self, target: str) -> None:
        """The cached client was closed at shutdown."""
        ...

    def health_check_failed(self, target: str, error: Exception) -> None:
        """The health endpoint could not reach or ping the server."""
        ...

    def with_context(self, context: ObservationContext) -> ConnectionProbe:
        ...


class DefaultConnectionProbe:
    """ConnectionProbe that writes structlog events."""

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

    def with_context(self, context: ObservationContext) -> DefaultConnectionProbe:
        return DefaultConnectionProbe(logger=self._logger, context=context)

    def connection_attempt_started(self, target: str) -> None:
        self._logger.info(
            "database_connection_attempt_started",
            target=target,
            **self._get_context_kwargs(),
        )

    def pending_attempt_joined(self, target: str) -> None:
        self._logger.debug(
            "database_connection_attempt_joined",
            target=target,
            **self._get_context_kwargs(),
        )

    def connection_established(self, target: str) -> None:
        self._logger.info(
            "database_connection_established",
            target=target,
            **self._get_context_kwargs(),
        )

    def connection_failed(self, target: str, error: Exception) -> None:
        self._logger.error(
            "database_connection_failed",
            target=target,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def connection_closed(self, target: str) -> None:
        self._logger.info(
            "database_connection_closed",
            target=target,
            **self._get_context_kwargs(),
        )

    def health_check_failed(self, target: str, error: Exception) -> None:
        self._logger.warning(
            "database_health_check_failed",
            target=target,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
