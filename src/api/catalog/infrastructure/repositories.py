"""MongoDB implementations of the catalog repositories."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any

from pymongo import ReturnDocument

from catalog.domain.value_objects import (
    Album,
    AlbumDraft,
    AlbumFilter,
    AlbumRef,
    Song,
    SongDraft,
    SongFilter,
    SongSummary,
)
from catalog.infrastructure.documents import (
    album_changes_document,
    album_document,
    album_from_document,
    build_album_query,
    build_album_sort,
    build_song_query,
    build_song_sort,
    song_changes_document,
    song_document,
    song_from_document,
)
from infrastructure.database.repository import (
    MongoRepository,
    parse_object_id,
    translate_driver_errors,
)
from shared_kernel.pagination import Page

SONGS_COLLECTION = "songs"
ALBUMS_COLLECTION = "albums"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class MongoSongRepository(MongoRepository):
    """Song repository over the ``songs`` collection."""

    async def find_page(self, filters: SongFilter) -> Page[Song]:
        songs = await self._collection(SONGS_COLLECTION)
        query = build_song_query(filters)

        with translate_driver_errors("song listing"):
            cursor = (
                songs.find(query)
                .sort(build_song_sort(filters))
                .skip(filters.skip)
                .limit(filters.limit)
            )
            documents, total_count = await asyncio.gather(
                cursor.to_list(length=filters.limit),
                songs.count_documents(query),
            )
            albums = await self._album_refs(documents)

        items = [
            song_from_document(document, albums.get(str(document.get("albumId"))))
            for document in documents
        ]
        return Page(
            items=items,
            page=filters.page,
            limit=filters.limit,
            total_count=total_count,
        )

    async def _album_refs(self, documents: list[dict[str, Any]]) -> dict[str, AlbumRef]:
        album_ids = {d["albumId"] for d in documents if d.get("albumId") is not None}
        if not album_ids:
            return {}

        albums = await self._collection(ALBUMS_COLLECTION)
        found = await albums.find(
            {"_id": {"$in": list(album_ids)}}, {"title": 1}
        ).to_list(length=None)
        return {
            str(album["_id"]): AlbumRef(id=str(album["_id"]), title=album["title"])
            for album in found
        }

    async def get(self, song_id: str) -> Song | None:
        object_id = parse_object_id(song_id)
        if object_id is None:
            return None

        songs = await self._collection(SONGS_COLLECTION)
        with translate_driver_errors("song lookup"):
            document = await songs.find_one({"_id": object_id})
        return song_from_document(document) if document else None

    async def create(self, draft: SongDraft) -> Song:
        document = song_document(draft, now=_utcnow())

        songs = await self._collection(SONGS_COLLECTION)
        with translate_driver_errors("song insert"):
            result = await songs.insert_one(document)
        document["_id"] = result.inserted_id
        return song_from_document(document)

    async def update(self, song_id: str, changes: dict[str, Any]) -> Song | None:
        object_id = parse_object_id(song_id)
        if object_id is None:
            return None

        update = song_changes_document(changes)
        update["updatedAt"] = _utcnow()

        songs = await self._collection(SONGS_COLLECTION)
        with translate_driver_errors("song update"):
            document = await songs.find_one_and_update(
                {"_id": object_id},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
        return song_from_document(document) if document else None

    async def delete(self, song_id: str) -> bool:
        object_id = parse_object_id(song_id)
        if object_id is None:
            return False

        songs = await self._collection(SONGS_COLLECTION)
        with translate_driver_errors("song delete"):
            result = await songs.delete_one({"_id": object_id})
        return result.deleted_count > 0

    async def delete_many(self, song_ids: list[str]) -> int:
        object_ids = [oid for oid in map(parse_object_id, song_ids) if oid is not None]
        if not object_ids:
            return 0

        songs = await self._collection(SONGS_COLLECTION)
        with translate_driver_errors("song bulk delete"):
            result = await songs.delete_many({"_id": {"$in": object_ids}})
        return result.deleted_count


class MongoAlbumRepository(MongoRepository):
    """Album repository over the ``albums`` collection."""

    async def find_page(self, filters: AlbumFilter) -> Page[Album]:
        albums = await self._collection(ALBUMS_COLLECTION)
        query = build_album_query(filters)

        with translate_driver_errors("album listing"):
            cursor = (
                albums.find(query)
                .sort(build_album_sort(filters))
                .skip(filters.skip)
                .limit(filters.limit)
            )
            documents, total_count = await asyncio.gather(
                cursor.to_list(length=filters.limit),
                albums.count_documents(query),
            )
            summaries = await self._song_summaries(documents)

        items = [
            album_from_document(
                document,
                [
                    summaries[str(song_id)]
                    for song_id in document.get("songIds", [])
                    if str(song_id) in summaries
                ],
            )
            for document in documents
        ]
        return Page(
            items=items,
            page=filters.page,
            limit=filters.limit,
            total_count=total_count,
        )

    async def _song_summaries(
        self, documents: list[dict[str, Any]]
    ) -> dict[str, SongSummary]:
        song_ids = {song_id for d in documents for song_id in d.get("songIds", [])}
        if not song_ids:
            return {}

        songs = await self._collection(SONGS_COLLECTION)
        found = await songs.find(
            {"_id": {"$in": list(song_ids)}}, {"title": 1, "duration": 1}
        ).to_list(length=None)
        return {
            str(song["_id"]): SongSummary(
                id=str(song["_id"]),
                title=song["title"],
                duration=song.get("duration", 0),
            )
            for song in found
        }

    async def get(self, album_id: str) -> Album | None:
        object_id = parse_object_id(album_id)
        if object_id is None:
            return None

        albums = await self._collection(ALBUMS_COLLECTION)
        with translate_driver_errors("album lookup"):
            document = await albums.find_one({"_id": object_id})
        return album_from_document(document) if document else None

    async def create(self, draft: AlbumDraft) -> Album:
        document = album_document(draft, now=_utcnow())

        albums = await self._collection(ALBUMS_COLLECTION)
        with translate_driver_errors("album insert"):
            result = await albums.insert_one(document)
        document["_id"] = result.inserted_id
        return album_from_document(document)

    async def update(self, album_id: str, changes: dict[str, Any]) -> Album | None:
        object_id = parse_object_id(album_id)
        if object_id is None:
            return None

        update = album_changes_document(changes)
        update["updatedAt"] = _utcnow()

        albums = await self._collection(ALBUMS_COLLECTION)
        with translate_driver_errors("album update"):
            document = await albums.find_one_and_update(
                {"_id": object_id},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
        return album_from_document(document) if document else None

    async def delete(self, album_id: str) -> bool:
        object_id = parse_object_id(album_id)
        if object_id is None:
            return False

        albums = await self._collection(ALBUMS_COLLECTION)
        with translate_driver_errors("album delete"):
            result = await albums.delete_one({"_id": object_id})
        return result.deleted_count > 0
