"""Value objects for the Catalog bounded context.

Songs and albums are the sellable items of the catalog. These objects are
framework-agnostic; persistence and HTTP shapes live in other layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

DEFAULT_ARTIST = "Rasman Peter Dudu"
DEFAULT_GENRE = "Reggae"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class SongSortField(StrEnum):
    TITLE = "title"
    PRICE = "price"
    CREATED_AT = "createdAt"
    DURATION = "duration"


class AlbumSortField(StrEnum):
    TITLE = "title"
    PRICE = "price"
    CREATED_AT = "createdAt"
    RELEASE_DATE = "releaseDate"


@dataclass(frozen=True)
class AlbumRef:
    """Minimal album reference attached to a song."""

    id: str
    title: str


@dataclass(frozen=True)
class SongSummary:
    """Minimal song reference attached to an album."""

    id: str
    title: str
    duration: int


@dataclass(frozen=True)
class Song:
    """A single track in the catalog."""

    id: str
    title: str
    artist: str
    genre: str
    duration: int
    price: float
    file_key: str
    cover_art_url: str
    created_at: datetime
    updated_at: datetime
    album_id: str | None = None
    featured: bool = False
    preview_url: str | None = None
    album: AlbumRef | None = None


@dataclass(frozen=True)
class Album:
    """A collection of songs sold together."""

    id: str
    title: str
    artist: str
    price: float
    cover_art_url: str
    release_date: datetime
    created_at: datetime
    updated_at: datetime
    song_ids: list[str] = field(default_factory=list)
    description: str | None = None
    featured: bool = False
    songs: list[SongSummary] = field(default_factory=list)


@dataclass(frozen=True)
class SongDraft:
    """Validated input for creating a song."""

    title: str
    duration: int
    price: float
    file_key: str
    cover_art_url: str
    artist: str = DEFAULT_ARTIST
    genre: str = DEFAULT_GENRE
    album_id: str | None = None
    featured: bool = False
    preview_url: str | None = None


@dataclass(frozen=True)
class AlbumDraft:
    """Validated input for creating an album."""

    title: str
    price: float
    cover_art_url: str
    artist: str = DEFAULT_ARTIST
    description: str | None = None
    song_ids: list[str] = field(default_factory=list)
    featured: bool = False
    release_date: datetime | None = None


@dataclass(frozen=True)
class PriceRange:
    minimum: float | None = None
    maximum: float | None = None

    @property
    def is_empty(self) -> bool:
        return self.minimum is None and self.maximum is None


@dataclass(frozen=True)
class SongFilter:
    """Criteria for listing songs."""

    genre: str | None = None
    featured: bool | None = None
    album_id: str | None = None
    price: PriceRange = field(default_factory=PriceRange)
    search: str | None = None
    sort_by: SongSortField = SongSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    limit: int = 10

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class AlbumFilter:
    """Criteria for listing albums."""

    featured: bool | None = None
    price: PriceRange = field(default_factory=PriceRange)
    search: str | None = None
    sort_by: AlbumSortField = AlbumSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    limit: int = 9

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


# Partial updates are plain mappings of field name to new value, restricted to
# the fields below.
SONG_UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "artist",
        "genre",
        "duration",
        "price",
        "album_id",
        "featured",
        "file_key",
        "cover_art_url",
        "preview_url",
    }
)

ALBUM_UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "artist",
        "price",
        "description",
        "song_ids",
        "featured",
        "cover_art_url",
        "release_date",
    }
)


def restrict_changes(changes: dict[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    """Drop keys that are not updatable fields."""
    return {key: value for key, value in changes.items() if key in allowed}
