"""Dependency injection for the Catalog bounded context.

Composes the application-scoped connection cache with catalog repositories
and services.
"""

from typing import Annotated

from fastapi import Depends

from catalog.application.observability import (
    CatalogServiceProbe,
    DefaultCatalogServiceProbe,
)
from catalog.application.services import CatalogService
from catalog.infrastructure.repositories import (
    MongoAlbumRepository,
    MongoSongRepository,
)
from infrastructure.database.dependencies import (
    MongoConnectionCache,
    get_connection_cache,
)
from infrastructure.settings import get_mongo_settings


def get_catalog_service_probe() -> CatalogServiceProbe:
    """Get CatalogServiceProbe instance.

    Returns:
        DefaultCatalogServiceProbe instance for observability
    """
    return DefaultCatalogServiceProbe()


def get_song_repository(
    cache: Annotated[MongoConnectionCache, Depends(get_connection_cache)],
) -> MongoSongRepository:
    """Get a song repository bound to the shared connection cache."""
    return MongoSongRepository(cache, get_mongo_settings())


def get_album_repository(
    cache: Annotated[MongoConnectionCache, Depends(get_connection_cache)],
) -> MongoAlbumRepository:
    """Get an album repository bound to the shared connection cache."""
    return MongoAlbumRepository(cache, get_mongo_settings())


def get_catalog_service(
    songs: Annotated[MongoSongRepository, Depends(get_song_repository)],
    albums: Annotated[MongoAlbumRepository, Depends(get_album_repository)],
    probe: Annotated[CatalogServiceProbe, Depends(get_catalog_service_probe)],
) -> CatalogService:
    """Get CatalogService instance.

    Args:
        songs: Song repository
        albums: Album repository
        probe: Catalog service probe

    Returns:
        CatalogService instance
    """
    return CatalogService(songs=songs, albums=albums, probe=probe)
