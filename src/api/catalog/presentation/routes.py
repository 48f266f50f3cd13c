"""HTTP routes for the Catalog bounded context.

Listing endpoints are public. Create, update and delete require the admin
role. Any database failure (including an unreachable server) is reported
as a generic 500 without connection details.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from catalog.application.observability import CatalogServiceProbe
from catalog.application.services import CatalogService
from catalog.dependencies import get_catalog_service, get_catalog_service_probe
from catalog.domain.value_objects import (
    AlbumFilter,
    AlbumSortField,
    PriceRange,
    SongFilter,
    SongSortField,
    SortOrder,
)
from catalog.presentation.models import (
    AdminSongResponse,
    AlbumListResponse,
    AlbumResponse,
    CreateAlbumRequest,
    CreateSongRequest,
    SongListResponse,
    UpdateAlbumRequest,
    UpdateSongRequest,
)
from infrastructure.database.exceptions import DatabaseError, DocumentNotFoundError
from shared_kernel.api_models import MessageResponse
from shared_kernel.auth.dependencies import require_admin

router = APIRouter(prefix="/api", tags=["catalog"])

Service = Annotated[CatalogService, Depends(get_catalog_service)]
Probe = Annotated[CatalogServiceProbe, Depends(get_catalog_service_probe)]


def _server_error(
    probe: CatalogServiceProbe, message: str, error: Exception
) -> HTTPException:
    probe.request_failed(operation=message, error=error)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=message,
    )


def _not_found(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)


def _missing_id(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


@router.get("/songs")
async def list_songs(
    service: Service,
    probe: Probe,
    genre: Annotated[str | None, Query(max_length=30)] = None,
    featured: bool | None = None,
    album_id: Annotated[str | None, Query(alias="albumId")] = None,
    min_price: Annotated[float | None, Query(alias="minPrice", ge=0)] = None,
    max_price: Annotated[float | None, Query(alias="maxPrice", ge=0)] = None,
    search: Annotated[str | None, Query(max_length=100)] = None,
    sort_by: Annotated[SongSortField, Query(alias="sortBy")] = SongSortField.CREATED_AT,
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = SortOrder.DESC,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> SongListResponse:
    """List songs with filtering, sorting and pagination.

    Search matches title, artist or genre case-insensitively.
    """
    filters = SongFilter(
        genre=genre,
        featured=featured,
        album_id=album_id,
        price=PriceRange(minimum=min_price, maximum=max_price),
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    try:
        result = await service.list_songs(filters)
    except DatabaseError as e:
        raise _server_error(probe, "Failed to fetch songs", e) from e

    return SongListResponse.from_page(result)


@router.post(
    "/songs",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_song(
    request: CreateSongRequest, service: Service, probe: Probe
) -> AdminSongResponse:
    """Create a song (admin only)."""
    try:
        song = await service.create_song(request.to_draft())
    except DatabaseError as e:
        raise _server_error(probe, "Failed to create song", e) from e

    return AdminSongResponse.from_domain(song)


@router.put("/songs", dependencies=[Depends(require_admin)])
async def update_song(
    request: UpdateSongRequest, service: Service, probe: Probe
) -> AdminSongResponse:
    """Partially update a song addressed by ``id`` in the body (admin only)."""
    try:
        song = await service.update_song(request.id, request.changes())
    except DocumentNotFoundError as e:
        raise _not_found("Song not found") from e
    except DatabaseError as e:
        raise _server_error(probe, "Failed to update song", e) from e

    return AdminSongResponse.from_domain(song)


@router.delete("/songs", dependencies=[Depends(require_admin)])
async def delete_song(
    service: Service,
    probe: Probe,
    song_id: Annotated[str | None, Query(alias="id")] = None,
) -> MessageResponse:
    """Delete a song addressed by the ``id`` query parameter (admin only)."""
    if not song_id:
        raise _missing_id("Song ID is required")

    try:
        await service.delete_song(song_id)
    except DocumentNotFoundError as e:
        raise _not_found("Song not found") from e
    except DatabaseError as e:
        raise _server_error(probe, "Failed to delete song", e) from e

    return MessageResponse(message="Song deleted successfully")


@router.get("/albums")
async def list_albums(
    service: Service,
    probe: Probe,
    featured: bool | None = None,
    min_price: Annotated[float | None, Query(alias="minPrice", ge=0)] = None,
    max_price: Annotated[float | None, Query(alias="maxPrice", ge=0)] = None,
    search: Annotated[str | None, Query(max_length=100)] = None,
    sort_by: Annotated[
        AlbumSortField, Query(alias="sortBy")
    ] = AlbumSortField.CREATED_AT,
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = SortOrder.DESC,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 9,
) -> AlbumListResponse:
    """List albums with filtering, sorting and pagination.

    Search matches title, artist or description case-insensitively.
    """
    filters = AlbumFilter(
        featured=featured,
        price=PriceRange(minimum=min_price, maximum=max_price),
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    try:
        result = await service.list_albums(filters)
    except DatabaseError as e:
        raise _server_error(probe, "Failed to fetch albums", e) from e

    return AlbumListResponse.from_page(result)


@router.post(
    "/albums",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_album(
    request: CreateAlbumRequest, service: Service, probe: Probe
) -> AlbumResponse:
    """Create an album (admin only)."""
    try:
        album = await service.create_album(request.to_draft())
    except DatabaseError as e:
        raise _server_error(probe, "Failed to create album", e) from e

    return AlbumResponse.from_domain(album)


@router.put("/albums", dependencies=[Depends(require_admin)])
async def update_album(
    request: UpdateAlbumRequest, service: Service, probe: Probe
) -> AlbumResponse:
    """Partially update an album addressed by ``id`` in the body (admin only)."""
    try:
        album = await service.update_album(request.id, request.changes())
    except DocumentNotFoundError as e:
        raise _not_found("Album not found") from e
    except DatabaseError as e:
        raise _server_error(probe, "Failed to update album", e) from e

    return AlbumResponse.from_domain(album)


@router.delete("/albums", dependencies=[Depends(require_admin)])
async def delete_album(
    service: Service,
    probe: Probe,
    album_id: Annotated[str | None, Query(alias="id")] = None,
) -> MessageResponse:
    """Delete an album and the songs it contains (admin only)."""
    if not album_id:
        raise _missing_id("Album ID is required")

    try:
        await service.delete_album(album_id)
    except DocumentNotFoundError as e:
        raise _not_found("Album not found") from e
    except DatabaseError as e:
        raise _server_error(probe, "Failed to delete album", e) from e

    return MessageResponse(message="Album and associated songs deleted successfully")
