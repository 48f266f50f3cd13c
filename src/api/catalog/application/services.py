"""Application services for the Catalog bounded context."""

from __future__ import annotations

from typing import Any

from catalog.application.observability import (
    CatalogServiceProbe,
    DefaultCatalogServiceProbe,
)
from catalog.domain.value_objects import (
    ALBUM_UPDATABLE_FIELDS,
    SONG_UPDATABLE_FIELDS,
    Album,
    AlbumDraft,
    AlbumFilter,
    Song,
    SongDraft,
    SongFilter,
    restrict_changes,
)
from catalog.ports.repositories import IAlbumRepository, ISongRepository
from infrastructure.database.exceptions import DocumentNotFoundError
from shared_kernel.pagination import Page


class CatalogService:
    """Application service for browsing and managing songs and albums.

    Repository errors (DatabaseError and subclasses) propagate unchanged so
    the presentation layer can map them to a generic failure response.
    """

    def __init__(
        self,
        songs: ISongRepository,
        albums: IAlbumRepository,
        probe: CatalogServiceProbe | None = None,
    ):
        self._songs = songs
        self._albums = albums
        self._probe = probe or DefaultCatalogServiceProbe()

    async def list_songs(self, filters: SongFilter) -> Page[Song]:
        page = await self._songs.find_page(filters)
        self._probe.listing_served(
            kind="song",
            page=page.page,
            returned=len(page.items),
            total=page.total_count,
        )
        return page

    async def list_albums(self, filters: AlbumFilter) -> Page[Album]:
        page = await self._albums.find_page(filters)
        self._probe.listing_served(
            kind="album",
            page=page.page,
            returned=len(page.items),
            total=page.total_count,
        )
        return page

    async def create_song(self, draft: SongDraft) -> Song:
        song = await self._songs.create(draft)
        self._probe.item_created(kind="song", item_id=song.id, title=song.title)
        return song

    async def create_album(self, draft: AlbumDraft) -> Album:
        album = await self._albums.create(draft)
        self._probe.item_created(kind="album", item_id=album.id, title=album.title)
        return album

    async def update_song(self, song_id: str, changes: dict[str, Any]) -> Song:
        """Apply a partial update to a song.

        Raises:
            DocumentNotFoundError: If no song has this id.
        """
        changes = restrict_changes(changes, SONG_UPDATABLE_FIELDS)
        song = await self._songs.update(song_id, changes)
        if song is None:
            self._probe.item_not_found(kind="song", item_id=song_id)
            raise DocumentNotFoundError("songs", song_id)

        self._probe.item_updated(kind="song", item_id=song_id, fields=sorted(changes))
        return song

    async def update_album(self, album_id: str, changes: dict[str, Any]) -> Album:
        """Apply a partial update to an album.

        Raises:
            DocumentNotFoundError: If no album has this id.
        """
        changes = restrict_changes(changes, ALBUM_UPDATABLE_FIELDS)
        album = await self._albums.update(album_id, changes)
        if album is None:
            self._probe.item_not_found(kind="album", item_id=album_id)
            raise DocumentNotFoundError("albums", album_id)

        self._probe.item_updated(kind="album", item_id=album_id, fields=sorted(changes))
        return album

    async def delete_song(self, song_id: str) -> None:
        """Delete a song.

        Raises:
            DocumentNotFoundError: If no song has this id.
        """
        if not await self._songs.delete(song_id):
            self._probe.item_not_found(kind="song", item_id=song_id)
            raise DocumentNotFoundError("songs", song_id)

        self._probe.item_deleted(kind="song", item_id=song_id)

    async def delete_album(self, album_id: str) -> None:
        """Delete an album together with the songs it contains.

        Raises:
            DocumentNotFoundError: If no album has this id.
        """
        album = await self._albums.get(album_id)
        if album is None:
            self._probe.item_not_found(kind="album", item_id=album_id)
            raise DocumentNotFoundError("albums", album_id)

        removed_songs = 0
        if album.song_ids:
            removed_songs = await self._songs.delete_many(album.song_ids)

        await self._albums.delete(album_id)
        self._probe.item_deleted(
            kind="album", item_id=album_id, cascaded_songs=removed_songs
        )
