"""Mapping between catalog value objects and MongoDB documents.

Documents use camelCase field names (``fileKey``, ``albumId``,
``createdAt``) so existing collections stay readable by other clients.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from bson import ObjectId

from catalog.domain.value_objects import (
    DEFAULT_ARTIST,
    DEFAULT_GENRE,
    Album,
    AlbumDraft,
    AlbumFilter,
    AlbumRef,
    PriceRange,
    Song,
    SongDraft,
    SongFilter,
    SongSummary,
    SortOrder,
)
from infrastructure.database.repository import parse_object_id

SONG_FIELD_NAMES = {
    "title": "title",
    "artist": "artist",
    "genre": "genre",
    "duration": "duration",
    "price": "price",
    "album_id": "albumId",
    "featured": "featured",
    "file_key": "fileKey",
    "cover_art_url": "coverArtUrl",
    "preview_url": "previewUrl",
}

ALBUM_FIELD_NAMES = {
    "title": "title",
    "artist": "artist",
    "price": "price",
    "description": "description",
    "song_ids": "songIds",
    "featured": "featured",
    "cover_art_url": "coverArtUrl",
    "release_date": "releaseDate",
}

SONG_SEARCH_FIELDS = ("title", "artist", "genre")
ALBUM_SEARCH_FIELDS = ("title", "artist", "description")


def _id_or_raw(value: str) -> ObjectId | str:
    # A malformed id cannot match any stored ObjectId, so it is kept as-is.
    return parse_object_id(value) or value


def _price_clause(price: PriceRange) -> dict[str, float]:
    clause: dict[str, float] = {}
    if price.minimum is not None:
        clause["$gte"] = price.minimum
    if price.maximum is not None:
        clause["$lte"] = price.maximum
    return clause


def _search_clause(search: str, fields: tuple[str, ...]) -> list[dict[str, Any]]:
    pattern = re.escape(search)
    return [{name: {"$regex": pattern, "$options": "i"}} for name in fields]


def _sort_direction(order: SortOrder) -> int:
    return 1 if order is SortOrder.ASC else -1


def build_song_query(filters: SongFilter) -> dict[str, Any]:
    """Build the MongoDB filter document for a song listing."""
    query: dict[str, Any] = {}
    if filters.genre:
        query["genre"] = filters.genre
    if filters.featured is not None:
        query["featured"] = filters.featured
    if filters.album_id:
        query["albumId"] = _id_or_raw(filters.album_id)
    if not filters.price.is_empty:
        query["price"] = _price_clause(filters.price)
    if filters.search:
        query["$or"] = _search_clause(filters.search, SONG_SEARCH_FIELDS)
    return query


def build_album_query(filters: AlbumFilter) -> dict[str, Any]:
    """Build the MongoDB filter document for an album listing."""
    query: dict[str, Any] = {}
    if filters.featured is not None:
        query["featured"] = filters.featured
    if not filters.price.is_empty:
        query["price"] = _price_clause(filters.price)
    if filters.search:
        query["$or"] = _search_clause(filters.search, ALBUM_SEARCH_FIELDS)
    return query


def build_song_sort(filters: SongFilter) -> list[tuple[str, int]]:
    return [(filters.sort_by.value, _sort_direction(filters.sort_order))]


def build_album_sort(filters: AlbumFilter) -> list[tuple[str, int]]:
    return [(filters.sort_by.value, _sort_direction(filters.sort_order))]


def _stringify_id(value: Any) -> str | None:
    return str(value) if value is not None else None


def song_from_document(
    document: dict[str, Any], album: AlbumRef | None = None
) -> Song:
    """Convert a stored song document into a Song."""
    return Song(
        id=str(document["_id"]),
        title=document["title"],
        artist=document.get("artist", DEFAULT_ARTIST),
        genre=document.get("genre", DEFAULT_GENRE),
        duration=document["duration"],
        price=document["price"],
        file_key=document.get("fileKey", ""),
        cover_art_url=document.get("coverArtUrl", ""),
        created_at=document["createdAt"],
        updated_at=document.get("updatedAt", document["createdAt"]),
        album_id=_stringify_id(document.get("albumId")),
        featured=document.get("featured", False),
        preview_url=document.get("previewUrl"),
        album=album,
    )


def album_from_document(
    document: dict[str, Any], songs: list[SongSummary] | None = None
) -> Album:
    """Convert a stored album document into an Album."""
    return Album(
        id=str(document["_id"]),
        title=document["title"],
        artist=document.get("artist", DEFAULT_ARTIST),
        price=document["price"],
        cover_art_url=document.get("coverArtUrl", ""),
        release_date=document.get("releaseDate", document["createdAt"]),
        created_at=document["createdAt"],
        updated_at=document.get("updatedAt", document["createdAt"]),
        song_ids=[str(song_id) for song_id in document.get("songIds", [])],
        description=document.get("description"),
        featured=document.get("featured", False),
        songs=songs or [],
    )


def song_document(draft: SongDraft, now: datetime) -> dict[str, Any]:
    """Build the document inserted for a new song."""
    document = song_changes_document(
        {name: getattr(draft, name) for name in SONG_FIELD_NAMES}
    )
    document["createdAt"] = now
    document["updatedAt"] = now
    return document


def album_document(draft: AlbumDraft, now: datetime) -> dict[str, Any]:
    """Build the document inserted for a new album."""
    document = album_changes_document(
        {name: getattr(draft, name) for name in ALBUM_FIELD_NAMES}
    )
    if document.get("releaseDate") is None:
        document["releaseDate"] = now
    document["createdAt"] = now
    document["updatedAt"] = now
    return document


def song_changes_document(changes: dict[str, Any]) -> dict[str, Any]:
    """Rename changed song fields to document names, converting ids."""
    document: dict[str, Any] = {}
    for name, value in changes.items():
        if name == "album_id" and value is not None:
            value = _id_or_raw(value)
        document[SONG_FIELD_NAMES[name]] = value
    return document


def album_changes_document(changes: dict[str, Any]) -> dict[str, Any]:
    """Rename changed album fields to document names, converting ids."""
    document: dict[str, Any] = {}
    for name, value in changes.items():
        if name == "song_ids" and value is not None:
            value = [_id_or_raw(song_id) for song_id in value]
        document[ALBUM_FIELD_NAMES[name]] = value
    return document
