"""MongoDB client creation for the connection cache.

The connector opens a Motor client and confirms the server is reachable
before handing the client out, so operations are never queued against a
server that is down.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConfigurationError as PyMongoConfigurationError
from pymongo.errors import PyMongoError

from infrastructure.database.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
)

if TYPE_CHECKING:
    from infrastructure.settings import MongoSettings

ClientFactory = Callable[..., AsyncIOMotorClient]


class MongoConnector:
    """Opens a live Motor client for a connection URI.

    Instances are passed to ConnectionCache as its connector.
    """

    def __init__(
        self,
        settings: MongoSettings,
        client_factory: ClientFactory = AsyncIOMotorClient,
    ):
        """Initialize the connector.

        Args:
            settings: MongoDB settings (timeouts, app name)
            client_factory: Callable building the client (patched in tests)
        """
        self._settings = settings
        self._client_factory = client_factory

    def client_options(self) -> dict[str, Any]:
        """Keyword options passed to the Motor client."""
        return {
            "serverSelectionTimeoutMS": self._settings.server_selection_timeout_ms,
            "appname": self._settings.app_name,
            "uuidRepresentation": "standard",
            "tz_aware": True,
        }

    async def __call__(self, uri: str) -> AsyncIOMotorClient:
        """Create a client and verify it with a ping.

        Args:
            uri: MongoDB connection URI

        Returns:
            A client whose server answered a ping.

        Raises:
            ConfigurationError: If the driver rejects the URI or options.
            DatabaseConnectionError: If the server cannot be reached.
        """
        try:
            client = self._client_factory(uri, **self.client_options())
        except PyMongoConfigurationError as e:
            raise ConfigurationError(f"Invalid MongoDB configuration: {e}") from e

        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            client.close()
            raise DatabaseConnectionError(f"Failed to connect to MongoDB: {e}") from e

        return client


def get_database(
    client: AsyncIOMotorClient, settings: MongoSettings
) -> AsyncIOMotorDatabase:
    """Return the database named in the URI, falling back to settings."""
    return client.get_default_database(default=settings.database)
