"""Process-wide cache for the shared database client.

The cache owns one client handle for the lifetime of the application. It
connects lazily on first use, shares a single in-flight attempt between all
concurrent callers, and resets after a failed attempt so a later call can
retry. Once connected it never reconnects on its own.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from infrastructure.database.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    DatabaseError,
)
from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)
from infrastructure.settings import redact_uri

ClientT = TypeVar("ClientT")

Connector = Callable[[str], Awaitable[ClientT]]


class ConnectionCache(Generic[ClientT]):
    """Single-flight, connect-once holder for a database client.

    States are unconnected, connecting and connected. A failed attempt moves
    back to unconnected; connected is terminal.

    Example:
        cache = ConnectionCache(settings.uri, connector=MongoConnector(settings))
        client = await cache.acquire()
    """

    def __init__(
        self,
        target: str,
        connector: Connector[ClientT],
        probe: ConnectionProbe | None = None,
    ):
        """Initialize the cache without connecting.

        Args:
            target: Connection URI, resolved once at startup
            connector: Coroutine function that opens a live client for a URI
            probe: Optional observability probe

        Raises:
            ConfigurationError: If the target is empty.
        """
        if not target or not target.strip():
            raise ConfigurationError("Database connection target must not be empty")

        self._target = target
        self._display_target = redact_uri(target)
        self._connector = connector
        self._probe = probe or DefaultConnectionProbe()
        self._connection: ClientT | None = None
        self._pending: asyncio.Task[ClientT] | None = None

    @property
    def connection(self) -> ClientT | None:
        """The live client, or None before the first successful connect."""
        return self._connection

    @property
    def display_target(self) -> str:
        """The connection URI with credentials removed, safe to log."""
        return self._display_target

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    @property
    def is_connecting(self) -> bool:
        return self._pending is not None

    async def acquire(self) -> ClientT:
        """Return the shared client, connecting on first use.

        Concurrent callers arriving while an attempt is in flight wait on that
        same attempt. Cancelling one waiter does not cancel the attempt.

        Returns:
            The live client handle.

        Raises:
            DatabaseConnectionError: If the attempt this caller waited on failed.
        """
        if self._connection is not None:
            return self._connection

        if self._pending is None:
            self._probe.connection_attempt_started(target=self._display_target)
            self._pending = asyncio.create_task(self._connect())
            self._pending.add_done_callback(_mark_exception_retrieved)
        else:
            self._probe.pending_attempt_joined(target=self._display_target)

        return await asyncio.shield(self._pending)

    async def settle(self) -> ClientT | None:
        """Wait for any in-flight attempt, then return the live client or None.

        Used at shutdown so a client produced by a late attempt is still
        closed. A failed attempt has already been reported through the probe.
        """
        pending = self._pending
        if pending is not None:
            try:
                await asyncio.shield(pending)
            except DatabaseError:
                return None
        return self._connection

    async def _connect(self) -> ClientT:
        """Run one connection attempt and record its outcome."""
        try:
            connection = await self._connector(self._target)
            self._connection = connection
        except DatabaseError as e:
            self._probe.connection_failed(target=self._display_target, error=e)
            raise
        except Exception as e:
            self._probe.connection_failed(target=self._display_target, error=e)
            raise DatabaseConnectionError(f"Failed to connect to database: {e}") from e
        finally:
            self._pending = None

        self._probe.connection_established(target=self._display_target)
        return connection


def _mark_exception_retrieved(task: asyncio.Task) -> None:
    # The failure is already reported through the probe, even if no waiter is left.
    if not task.cancelled():
        task.exception()
