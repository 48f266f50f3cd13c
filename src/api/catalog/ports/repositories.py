"""Repository interfaces (ports) for the Catalog bounded context.

These protocols define the contracts for reading and writing songs and
albums without specifying the storage engine.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from catalog.domain.value_objects import (
    Album,
    AlbumDraft,
    AlbumFilter,
    Song,
    SongDraft,
    SongFilter,
)
from shared_kernel.pagination import Page


@runtime_checkable
class ISongRepository(Protocol):
    """Persistence contract for songs.

    Implementations raise DatabaseError (or a subclass) when the store is
    unreachable. Unknown or malformed ids behave as "not found".
    """

    async def find_page(self, filters: SongFilter) -> Page[Song]:
        """Return one page of songs matching the filter, album titles attached."""
        ...

    async def get(self, song_id: str) -> Song | None:
        """Return a song by id, or None."""
        ...

    async def create(self, draft: SongDraft) -> Song:
        """Persist a new song and return it."""
        ...

    async def update(self, song_id: str, changes: dict[str, Any]) -> Song | None:
        """Apply partial changes; return the updated song or None if missing."""
        ...

    async def delete(self, song_id: str) -> bool:
        """Delete a song; return False if it did not exist."""
        ...

    async def delete_many(self, song_ids: list[str]) -> int:
        """Delete songs by id; return how many were removed."""
        ...


@runtime_checkable
class IAlbumRepository(Protocol):
    """Persistence contract for albums."""

    async def find_page(self, filters: AlbumFilter) -> Page[Album]:
        """Return one page of albums matching the filter, song summaries attached."""
        ...

    async def get(self, album_id: str) -> Album | None:
        ...

    async def create(self, draft: AlbumDraft) -> Album:
        ...

    async def update(self, album_id: str, changes: dict[str, Any]) -> Album | None:
        ...

    async def delete(self, album_id: str) -> bool:
        ...
