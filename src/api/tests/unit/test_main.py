"""Unit tests for the FastAPI application wiring.

The lifespan is driven with asgi-lifespan; no database server is contacted.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from asgi_lifespan import LifespanManager
from fastapi.testclient import TestClient
from pymongo.errors import AutoReconnect

from infrastructure.database.connection_cache import ConnectionCache
from infrastructure.database.dependencies import (
    get_connection_cache,
    get_connection_probe,
)
from infrastructure.database.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
)
from infrastructure.observability import ConnectionProbe, StartupProbe
from infrastructure.settings import get_mongo_settings
from infrastructure.version import __version__
from main import app


@pytest.fixture
def mongo_env(monkeypatch):
    monkeypatch.setenv("MONGODB_URI", "mongodb://user:pw@localhost:27017/rasman")
    get_mongo_settings.cache_clear()
    yield
    get_mongo_settings.cache_clear()


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def override_cache(cache) -> None:
    app.dependency_overrides[get_connection_cache] = lambda: cache


@pytest.fixture
def connection_probe():
    probe = MagicMock(spec=ConnectionProbe)
    app.dependency_overrides[get_connection_probe] = lambda: probe
    return probe


class TestLifespan:
    @pytest.mark.asyncio
    async def test_installs_unconnected_cache(self, mongo_env):
        async with LifespanManager(app):
            cache = app.state.connection_cache

            assert isinstance(cache, ConnectionCache)
            assert cache.is_connected is False

    @pytest.mark.asyncio
    async def test_missing_uri_aborts_startup(self, monkeypatch):
        monkeypatch.delenv("MONGODB_URI", raising=False)
        monkeypatch.chdir("/")
        get_mongo_settings.cache_clear()
        try:
            with pytest.raises(ConfigurationError):
                async with LifespanManager(app):
                    pass
        finally:
            get_mongo_settings.cache_clear()

    @pytest.mark.asyncio
    async def test_shutdown_closes_live_client(self, mongo_env):
        client = MagicMock()
        cache = MagicMock()
        cache.settle = AsyncMock(return_value=client)

        with patch("main.create_connection_cache", return_value=cache):
            async with LifespanManager(app):
                assert app.state.connection_cache is cache

        client.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_reports_start_and_stop(self, mongo_env):
        probe = MagicMock(spec=StartupProbe)

        with patch("main.DefaultStartupProbe", return_value=probe):
            async with LifespanManager(app):
                probe.application_started.assert_called_once_with(
                    version=__version__,
                    database="mongodb://localhost:27017/rasman",
                )
                probe.application_stopped.assert_not_called()

        probe.application_stopped.assert_called_once()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_health_db_connected(self, client, mock_motor_client):
        cache = MagicMock()
        cache.acquire = AsyncMock(return_value=mock_motor_client)
        override_cache(cache)

        response = client.get("/health/db")

        assert response.json() == {"status": "ok", "connected": True}
        mock_motor_client.admin.command.assert_awaited_once_with("ping")

    def test_health_db_connection_failure_hides_details(
        self, client, connection_probe
    ):
        cache = MagicMock()
        cache.display_target = "mongodb://db.internal:27017/rasman"
        cache.acquire = AsyncMock(
            side_effect=DatabaseConnectionError("Failed to connect: db.internal:27017")
        )
        override_cache(cache)

        response = client.get("/health/db")

        assert response.status_code == 200
        assert response.json() == {"status": "error", "connected": False}
        assert "db.internal" not in response.text
        connection_probe.health_check_failed.assert_called_once()
        assert connection_probe.health_check_failed.call_args.kwargs["target"] == (
            "mongodb://db.internal:27017/rasman"
        )

    def test_health_db_ping_failure_reports_same_status(
        self, client, mock_motor_client, connection_probe
    ):
        mock_motor_client.admin.command = AsyncMock(side_effect=AutoReconnect("lost"))
        cache = MagicMock()
        cache.acquire = AsyncMock(return_value=mock_motor_client)
        override_cache(cache)

        response = client.get("/health/db")

        assert response.json() == {"status": "error", "connected": False}
        error = connection_probe.health_check_failed.call_args.kwargs["error"]
        assert isinstance(error, AutoReconnect)


class TestRoutes:
    def test_bounded_context_routes_are_mounted(self):
        paths = {route.path for route in app.routes}

        assert {
            "/api/songs",
            "/api/albums",
            "/api/purchase",
            "/api/admin/dashboard",
            "/api/admin/users",
            "/api/contact",
        } <= paths
