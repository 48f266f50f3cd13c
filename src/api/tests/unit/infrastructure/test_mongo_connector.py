"""Unit tests for the Motor-backed connector."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import ConfigurationError as PyMongoConfigurationError
from pymongo.errors import ServerSelectionTimeoutError

from infrastructure.database.connection import MongoConnector, get_database
from infrastructure.database.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
)


class TestMongoConnector:
    def test_client_options_come_from_settings(self, mongo_settings) -> None:
        connector = MongoConnector(mongo_settings)

        options = connector.client_options()

        assert options["serverSelectionTimeoutMS"] == 500
        assert options["appname"] == "rasman-music-api"
        assert options["tz_aware"] is True

    @pytest.mark.asyncio
    async def test_returns_client_after_successful_ping(
        self, mongo_settings, mock_motor_client
    ) -> None:
        factory = MagicMock(return_value=mock_motor_client)
        connector = MongoConnector(mongo_settings, client_factory=factory)

        client = await connector(mongo_settings.uri)

        assert client is mock_motor_client
        factory.assert_called_once_with(
            mongo_settings.uri, **connector.client_options()
        )
        mock_motor_client.admin.command.assert_awaited_once_with("ping")

    @pytest.mark.asyncio
    async def test_failed_ping_closes_client(
        self, mongo_settings, mock_motor_client
    ) -> None:
        mock_motor_client.admin.command = AsyncMock(
            side_effect=ServerSelectionTimeoutError("No servers found")
        )
        connector = MongoConnector(
            mongo_settings, client_factory=MagicMock(return_value=mock_motor_client)
        )

        with pytest.raises(DatabaseConnectionError) as exc_info:
            await connector(mongo_settings.uri)

        assert "No servers found" in str(exc_info.value)
        mock_motor_client.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_driver_configuration_error_is_translated(
        self, mongo_settings
    ) -> None:
        factory = MagicMock(side_effect=PyMongoConfigurationError("bad option"))
        connector = MongoConnector(mongo_settings, client_factory=factory)

        with pytest.raises(ConfigurationError):
            await connector(mongo_settings.uri)


class TestGetDatabase:
    def test_uses_settings_database_as_default(self, mongo_settings) -> None:
        client = MagicMock()

        get_database(client, mongo_settings)

        client.get_default_database.assert_called_once_with(default="rasman_test")
