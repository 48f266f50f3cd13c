"""Base class for MongoDB-backed repositories.

Repositories acquire the shared client from the connection cache before
every operation, so a failed connect surfaces as DatabaseConnectionError at
the call site and the next request retries.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from infrastructure.database.connection import get_database
from infrastructure.database.exceptions import DatabaseError

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection

    from infrastructure.database.dependencies import MongoConnectionCache
    from infrastructure.settings import MongoSettings


def parse_object_id(value: str | ObjectId | None) -> ObjectId | None:
    """Convert a string id to an ObjectId, or None if it is not a valid id."""
    if value is None:
        return None
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class MongoRepository:
    """Shared plumbing for repositories over one MongoDB database."""

    def __init__(self, cache: MongoConnectionCache, settings: MongoSettings):
        self._cache = cache
        self._settings = settings

    async def _collection(self, name: str) -> AsyncIOMotorCollection:
        """Return a collection handle, connecting on first use."""
        client = await self._cache.acquire()
        return get_database(client, self._settings)[name]


@contextmanager
def translate_driver_errors(operation: str) -> Iterator[None]:
    """Re-raise driver errors raised inside the block as DatabaseError."""
    try:
        yield
    except PyMongoError as e:
        raise DatabaseError(f"MongoDB {operation} failed: {e}") from e
