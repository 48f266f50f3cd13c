"""Pydantic models for catalog API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from catalog.domain.value_objects import (
    DEFAULT_ARTIST,
    DEFAULT_GENRE,
    Album,
    AlbumDraft,
    Song,
    SongDraft,
)
from shared_kernel.api_models import CamelModel, PaginationResponse
from shared_kernel.pagination import Page

# Fields that may be explicitly cleared with null in an update.
NULLABLE_SONG_FIELDS = frozenset({"album_id", "preview_url"})
NULLABLE_ALBUM_FIELDS = frozenset({"description"})


def _changes(
    model: CamelModel, nullable: frozenset[str], exclude: set[str]
) -> dict[str, Any]:
    provided = model.model_dump(exclude_unset=True, exclude=exclude)
    return {
        name: value
        for name, value in provided.items()
        if value is not None or name in nullable
    }


class AlbumRefResponse(CamelModel):
    id: str
    title: str


class SongSummaryResponse(CamelModel):
    id: str
    title: str
    duration: int


class SongResponse(CamelModel):
    """Public song representation. The audio file key is never exposed."""

    id: str
    title: str
    artist: str
    genre: str
    duration: int
    price: float
    album_id: str | None = None
    album: AlbumRefResponse | None = None
    featured: bool
    cover_art_url: str
    preview_url: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, song: Song) -> SongResponse:
        return cls(**_song_fields(song))


class AdminSongResponse(SongResponse):
    """Song representation returned to admins, including the file key."""

    file_key: str

    @classmethod
    def from_domain(cls, song: Song) -> AdminSongResponse:
        return cls(**_song_fields(song), file_key=song.file_key)


def _song_fields(song: Song) -> dict[str, Any]:
    return {
        "id": song.id,
        "title": song.title,
        "artist": song.artist,
        "genre": song.genre,
        "duration": song.duration,
        "price": song.price,
        "album_id": song.album_id,
        "album": (
            AlbumRefResponse(id=song.album.id, title=song.album.title)
            if song.album
            else None
        ),
        "featured": song.featured,
        "cover_art_url": song.cover_art_url,
        "preview_url": song.preview_url,
        "created_at": song.created_at,
        "updated_at": song.updated_at,
    }


class SongListResponse(CamelModel):
    songs: list[SongResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: Page[Song]) -> SongListResponse:
        return cls(
            songs=[SongResponse.from_domain(song) for song in page.items],
            pagination=PaginationResponse.from_page(page),
        )


class AlbumResponse(CamelModel):
    id: str
    title: str
    artist: str
    price: float
    cover_art_url: str
    description: str | None = None
    song_ids: list[str]
    songs: list[SongSummaryResponse] = Field(default_factory=list)
    featured: bool
    release_date: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, album: Album) -> AlbumResponse:
        return cls(
            id=album.id,
            title=album.title,
            artist=album.artist,
            price=album.price,
            cover_art_url=album.cover_art_url,
            description=album.description,
            song_ids=album.song_ids,
            songs=[
                SongSummaryResponse(id=s.id, title=s.title, duration=s.duration)
                for s in album.songs
            ],
            featured=album.featured,
            release_date=album.release_date,
            created_at=album.created_at,
            updated_at=album.updated_at,
        )


class AlbumListResponse(CamelModel):
    albums: list[AlbumResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: Page[Album]) -> AlbumListResponse:
        return cls(
            albums=[AlbumResponse.from_domain(album) for album in page.items],
            pagination=PaginationResponse.from_page(page),
        )


class CreateSongRequest(CamelModel):
    """Request model for creating a song."""

    title: str = Field(..., min_length=1, max_length=100)
    artist: str = Field(default=DEFAULT_ARTIST, min_length=1, max_length=50)
    genre: str = Field(default=DEFAULT_GENRE, min_length=1, max_length=30)
    duration: int = Field(..., ge=1, le=3600, description="Duration in seconds")
    price: float = Field(..., ge=0, le=10_000)
    album_id: str | None = None
    featured: bool = False
    file_key: str = Field(..., min_length=1, description="Storage key of the audio")
    cover_art_url: str = Field(..., min_length=1)
    preview_url: str | None = None

    def to_draft(self) -> SongDraft:
        return SongDraft(**self.model_dump())


class UpdateSongRequest(CamelModel):
    """Request model for a partial song update addressed by id."""

    id: str = Field(..., min_length=1, description="Song ID")
    title: str | None = Field(default=None, min_length=1, max_length=100)
    artist: str | None = Field(default=None, min_length=1, max_length=50)
    genre: str | None = Field(default=None, min_length=1, max_length=30)
    duration: int | None = Field(default=None, ge=1, le=3600)
    price: float | None = Field(default=None, ge=0, le=10_000)
    album_id: str | None = None
    featured: bool | None = None
    file_key: str | None = Field(default=None, min_length=1)
    cover_art_url: str | None = Field(default=None, min_length=1)
    preview_url: str | None = None

    def changes(self) -> dict[str, Any]:
        return _changes(self, NULLABLE_SONG_FIELDS, exclude={"id"})


class CreateAlbumRequest(CamelModel):
    """Request model for creating an album."""

    title: str = Field(..., min_length=1, max_length=100)
    artist: str = Field(default=DEFAULT_ARTIST, min_length=1, max_length=50)
    price: float = Field(..., ge=0, le=50_000)
    description: str | None = Field(default=None, max_length=500)
    song_ids: list[str] = Field(default_factory=list)
    featured: bool = False
    cover_art_url: str = Field(..., min_length=1)
    release_date: datetime | None = None

    def to_draft(self) -> AlbumDraft:
        return AlbumDraft(**self.model_dump())


class UpdateAlbumRequest(CamelModel):
    """Request model for a partial album update addressed by id."""

    id: str = Field(..., min_length=1, description="Album ID")
    title: str | None = Field(default=None, min_length=1, max_length=100)
    artist: str | None = Field(default=None, min_length=1, max_length=50)
    price: float | None = Field(default=None, ge=0, le=50_000)
    description: str | None = Field(default=None, max_length=500)
    song_ids: list[str] | None = None
    featured: bool | None = None
    cover_art_url: str | None = Field(default=None, min_length=1)
    release_date: datetime | None = None

    def changes(self) -> dict[str, Any]:
        return _changes(self, NULLABLE_ALBUM_FIELDS, exclude={"id"})
