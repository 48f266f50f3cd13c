"""Unit tests for connection cache wiring into FastAPI."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI, Request

from infrastructure.database.connection import MongoConnector
from infrastructure.database.connection_cache import ConnectionCache
from infrastructure.database.dependencies import (
    close_database_connection,
    create_connection_cache,
    get_connection_cache,
    get_connection_probe,
    install_connection_cache,
)
from infrastructure.database.exceptions import DatabaseConnectionError
from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)


def make_request(app: FastAPI) -> Request:
    return Request({"type": "http", "app": app})


class TestCreateConnectionCache:
    def test_creates_unconnected_cache_with_mongo_connector(
        self, mongo_settings
    ) -> None:
        cache = create_connection_cache(mongo_settings)

        assert isinstance(cache, ConnectionCache)
        assert isinstance(cache._connector, MongoConnector)
        assert cache.is_connected is False


class TestGetConnectionCache:
    def test_returns_cache_installed_on_app(self, mongo_settings) -> None:
        app = FastAPI()
        cache = create_connection_cache(mongo_settings)
        install_connection_cache(app, cache)

        assert get_connection_cache(make_request(app)) is cache

    def test_missing_cache_raises(self) -> None:
        with pytest.raises(RuntimeError, match="not initialized"):
            get_connection_cache(make_request(FastAPI()))


class TestCloseDatabaseConnection:
    @pytest.mark.asyncio
    async def test_closes_live_client(self, mongo_settings) -> None:
        client = MagicMock()
        cache = MagicMock()
        cache.settle = AsyncMock(return_value=client)
        probe = MagicMock(spec=ConnectionProbe)

        await close_database_connection(cache, mongo_settings, probe=probe)

        client.close.assert_called_once()
        probe.connection_closed.assert_called_once_with(
            target="mongodb://testhost:27017/rasman_test"
        )

    @pytest.mark.asyncio
    async def test_noop_when_never_connected(self, mongo_settings) -> None:
        cache = MagicMock()
        cache.settle = AsyncMock(return_value=None)
        probe = MagicMock(spec=ConnectionProbe)

        await close_database_connection(cache, mongo_settings, probe=probe)

        probe.connection_closed.assert_not_called()

    @pytest.mark.asyncio
    async def test_closes_client_from_attempt_still_connecting(
        self, mongo_settings
    ) -> None:
        client = MagicMock()

        async def slow_connect(target: str) -> MagicMock:
            await asyncio.sleep(0.05)
            return client

        cache = ConnectionCache(
            mongo_settings.uri,
            connector=slow_connect,
            probe=MagicMock(spec=ConnectionProbe),
        )
        waiter = asyncio.create_task(cache.acquire())
        await asyncio.sleep(0)

        await close_database_connection(
            cache, mongo_settings, probe=MagicMock(spec=ConnectionProbe)
        )

        client.close.assert_called_once()
        assert await waiter is client

    @pytest.mark.asyncio
    async def test_failed_attempt_at_shutdown_closes_nothing(
        self, mongo_settings
    ) -> None:
        async def refused(target: str) -> MagicMock:
            await asyncio.sleep(0.01)
            raise OSError("connection refused")

        cache = ConnectionCache(
            mongo_settings.uri,
            connector=refused,
            probe=MagicMock(spec=ConnectionProbe),
        )
        waiter = asyncio.create_task(cache.acquire())
        await asyncio.sleep(0)
        probe = MagicMock(spec=ConnectionProbe)

        await close_database_connection(cache, mongo_settings, probe=probe)

        probe.connection_closed.assert_not_called()
        with pytest.raises(DatabaseConnectionError):
            await waiter


class TestGetConnectionProbe:
    def test_returns_structlog_implementation(self) -> None:
        assert isinstance(get_connection_probe(), DefaultConnectionProbe)
