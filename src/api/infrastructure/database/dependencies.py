"""Database dependency injection for FastAPI.

The connection cache is created once in the application lifespan and kept on
``app.state``, outside any route module, so it lives as long as the process
serves requests. Handlers receive it through ``Depends``.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from motor.motor_asyncio import AsyncIOMotorClient

from infrastructure.database.connection import MongoConnector
from infrastructure.database.connection_cache import ConnectionCache
from infrastructure.observability import ConnectionProbe, DefaultConnectionProbe
from infrastructure.settings import MongoSettings, redact_uri

MongoConnectionCache = ConnectionCache[AsyncIOMotorClient]


def create_connection_cache(
    settings: MongoSettings,
    probe: ConnectionProbe | None = None,
) -> MongoConnectionCache:
    """Build the process-wide MongoDB connection cache (does not connect).

    Args:
        settings: MongoDB settings, already validated

    Returns:
        A cache in the unconnected state
    """
    return ConnectionCache(
        settings.uri,
        connector=MongoConnector(settings),
        probe=probe,
    )


def install_connection_cache(app: FastAPI, cache: MongoConnectionCache) -> None:
    """Anchor the cache on the application object."""
    app.state.connection_cache = cache


def get_connection_cache(request: Request) -> MongoConnectionCache:
    """Provide the application-scoped connection cache (FastAPI dependency).

    Raises:
        RuntimeError: If the lifespan did not install a cache.
    """
    cache = getattr(request.app.state, "connection_cache", None)
    if cache is None:
        raise RuntimeError("Connection cache not initialized")
    return cache


def get_connection_probe() -> ConnectionProbe:
    """Get the probe for connection lifecycle and health check events."""
    return DefaultConnectionProbe()


async def close_database_connection(
    cache: MongoConnectionCache,
    settings: MongoSettings,
    probe: ConnectionProbe | None = None,
) -> None:
    """Close the live client at application shutdown.

    An attempt still in flight is awaited first, so the client it produces
    is closed as well.
    """
    client = await cache.settle()
    if client is None:
        return

    client.close()
    (probe or DefaultConnectionProbe()).connection_closed(
        target=redact_uri(settings.uri)
    )
