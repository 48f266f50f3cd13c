"""Unit tests for catalog HTTP routes.

The service is mocked; admin access is granted by overriding require_admin
except in the tests that exercise authentication itself.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from catalog.application.observability import CatalogServiceProbe
from catalog.application.services import CatalogService
from catalog.dependencies import get_catalog_service, get_catalog_service_probe
from catalog.domain.value_objects import (
    AlbumRef,
    SongSortField,
    SortOrder,
)
from catalog.presentation import routes
from infrastructure.database.exceptions import (
    DatabaseConnectionError,
    DocumentNotFoundError,
)
from shared_kernel.auth.dependencies import get_jwt_validator, require_admin
from shared_kernel.auth.jwt_validator import Principal
from shared_kernel.pagination import Page


@pytest.fixture
def mock_service() -> AsyncMock:
    return AsyncMock(spec=CatalogService)


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock(spec=CatalogServiceProbe)


@pytest.fixture
def app(mock_service: AsyncMock, mock_probe: MagicMock) -> FastAPI:
    app = FastAPI()
    app.include_router(routes.router)
    app.dependency_overrides[get_catalog_service] = lambda: mock_service
    app.dependency_overrides[get_catalog_service_probe] = lambda: mock_probe
    app.dependency_overrides[require_admin] = lambda: Principal(
        user_id="user_admin", role="admin"
    )
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


class TestListSongs:
    def test_returns_songs_and_pagination(self, client, mock_service, song_factory):
        song = song_factory(album=AlbumRef(id="alb1", title="Roots Revival"))
        mock_service.list_songs.return_value = Page(
            items=[song], page=1, limit=10, total_count=11
        )

        response = client.get("/api/songs")

        assert response.status_code == 200
        body = response.json()
        assert body["songs"][0]["title"] == "Jah Guide"
        assert body["songs"][0]["album"] == {"id": "alb1", "title": "Roots Revival"}
        assert body["pagination"] == {
            "page": 1,
            "limit": 10,
            "totalCount": 11,
            "totalPages": 2,
            "hasNext": True,
            "hasPrev": False,
        }

    def test_file_key_is_not_exposed(self, client, mock_service, song_factory):
        mock_service.list_songs.return_value = Page(
            items=[song_factory()], page=1, limit=10, total_count=1
        )

        body = client.get("/api/songs").json()

        assert "fileKey" not in body["songs"][0]

    def test_query_parameters_become_filters(self, client, mock_service):
        mock_service.list_songs.return_value = Page(
            items=[], page=3, limit=5, total_count=0
        )

        response = client.get(
            "/api/songs",
            params={
                "genre": "Reggae",
                "featured": "true",
                "minPrice": "1",
                "maxPrice": "3",
                "search": "jah",
                "sortBy": "price",
                "sortOrder": "asc",
                "page": "3",
                "limit": "5",
            },
        )

        assert response.status_code == 200
        filters = mock_service.list_songs.await_args.args[0]
        assert filters.genre == "Reggae"
        assert filters.featured is True
        assert filters.price.minimum == 1
        assert filters.price.maximum == 3
        assert filters.sort_by is SongSortField.PRICE
        assert filters.sort_order is SortOrder.ASC
        assert filters.skip == 10

    @pytest.mark.parametrize(
        "params",
        [{"limit": "101"}, {"page": "0"}, {"sortBy": "artist"}, {"search": "x" * 101}],
    )
    def test_invalid_query_is_rejected(self, client, params):
        assert client.get("/api/songs", params=params).status_code == 422

    def test_database_failure_is_generic_500(self, client, mock_service, mock_probe):
        error = DatabaseConnectionError(
            "Failed to connect to MongoDB: db.internal:27017 timed out"
        )
        mock_service.list_songs.side_effect = error

        response = client.get("/api/songs")

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to fetch songs"}
        mock_probe.request_failed.assert_called_once_with(
            operation="Failed to fetch songs", error=error
        )


class TestListAlbums:
    def test_default_limit_is_nine(self, client, mock_service, album_factory):
        mock_service.list_albums.return_value = Page(
            items=[album_factory()], page=1, limit=9, total_count=1
        )

        response = client.get("/api/albums")

        assert response.status_code == 200
        assert mock_service.list_albums.await_args.args[0].limit == 9
        assert response.json()["albums"][0]["title"] == "Roots Revival"

    def test_database_failure(self, client, mock_service, mock_probe):
        mock_service.list_albums.side_effect = DatabaseConnectionError("down")

        response = client.get("/api/albums")

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to fetch albums"
        mock_probe.request_failed.assert_called_once()


class TestCreateSong:
    PAYLOAD = {
        "title": "Jah Guide",
        "duration": 245,
        "price": 1.99,
        "fileKey": "songs/jah-guide.mp3",
        "coverArtUrl": "https://cdn.example/jah-guide.jpg",
    }

    def test_creates_song(self, client, mock_service, song_factory):
        mock_service.create_song.return_value = song_factory()

        response = client.post("/api/songs", json=self.PAYLOAD)

        assert response.status_code == 201
        assert response.json()["fileKey"] == "songs/jah-guide.mp3"
        draft = mock_service.create_song.await_args.args[0]
        assert draft.artist == "Rasman Peter Dudu"
        assert draft.genre == "Reggae"

    @pytest.mark.parametrize(
        "override",
        [{"title": ""}, {"duration": 0}, {"duration": 3601}, {"price": -1}],
    )
    def test_validation_errors(self, client, mock_service, override):
        response = client.post("/api/songs", json={**self.PAYLOAD, **override})

        assert response.status_code == 422
        mock_service.create_song.assert_not_awaited()

    def test_requires_token(self, app, mock_service):
        del app.dependency_overrides[require_admin]
        validator = MagicMock()
        app.dependency_overrides[get_jwt_validator] = lambda: validator

        response = TestClient(app).post("/api/songs", json=self.PAYLOAD)

        assert response.status_code == 401
        mock_service.create_song.assert_not_awaited()

    def test_requires_admin_role(self, app, mock_service):
        del app.dependency_overrides[require_admin]
        validator = MagicMock()
        validator.validate_token = AsyncMock(
            return_value=Principal(user_id="user_fan", role="customer")
        )
        app.dependency_overrides[get_jwt_validator] = lambda: validator

        response = TestClient(app).post(
            "/api/songs",
            json=self.PAYLOAD,
            headers={"Authorization": "Bearer token"},
        )

        assert response.status_code == 403
        mock_service.create_song.assert_not_awaited()


class TestUpdateSong:
    def test_partial_update(self, client, mock_service, song_factory):
        mock_service.update_song.return_value = song_factory(price=2.49)

        response = client.put("/api/songs", json={"id": "abc", "price": 2.49})

        assert response.status_code == 200
        mock_service.update_song.assert_awaited_once_with("abc", {"price": 2.49})

    def test_album_can_be_cleared(self, client, mock_service, song_factory):
        mock_service.update_song.return_value = song_factory()

        client.put("/api/songs", json={"id": "abc", "albumId": None})

        mock_service.update_song.assert_awaited_once_with("abc", {"album_id": None})

    def test_not_found(self, client, mock_service):
        mock_service.update_song.side_effect = DocumentNotFoundError("songs", "abc")

        response = client.put("/api/songs", json={"id": "abc", "title": "New"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Song not found"

    def test_id_is_required(self, client):
        assert client.put("/api/songs", json={"title": "New"}).status_code == 422


class TestDeleteSong:
    def test_deletes(self, client, mock_service):
        response = client.delete("/api/songs", params={"id": "abc"})

        assert response.status_code == 200
        assert response.json() == {"message": "Song deleted successfully"}
        mock_service.delete_song.assert_awaited_once_with("abc")

    def test_missing_id_is_400(self, client, mock_service):
        response = client.delete("/api/songs")

        assert response.status_code == 400
        assert response.json()["detail"] == "Song ID is required"
        mock_service.delete_song.assert_not_awaited()

    def test_not_found(self, client, mock_service):
        mock_service.delete_song.side_effect = DocumentNotFoundError("songs", "abc")

        response = client.delete("/api/songs", params={"id": "abc"})

        assert response.status_code == 404


class TestAlbumWrites:
    def test_create_album(self, client, mock_service, album_factory):
        mock_service.create_album.return_value = album_factory()

        response = client.post(
            "/api/albums",
            json={"title": "Roots Revival", "price": 9.99, "coverArtUrl": "c.jpg"},
        )

        assert response.status_code == 201
        assert response.json()["artist"] == "Rasman Peter Dudu"

    def test_album_price_limit(self, client):
        response = client.post(
            "/api/albums",
            json={"title": "Roots", "price": 50_001, "coverArtUrl": "c.jpg"},
        )
        assert response.status_code == 422

    def test_update_not_found(self, client, mock_service):
        mock_service.update_album.side_effect = DocumentNotFoundError("albums", "x")

        response = client.put("/api/albums", json={"id": "x", "title": "New"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Album not found"

    def test_delete_album(self, client, mock_service):
        response = client.delete("/api/albums", params={"id": "abc"})

        assert response.status_code == 200
        assert response.json() == {
            "message": "Album and associated songs deleted successfully"
        }

    def test_delete_album_missing_id(self, client):
        response = client.delete("/api/albums")

        assert response.status_code == 400
        assert response.json()["detail"] == "Album ID is required"
