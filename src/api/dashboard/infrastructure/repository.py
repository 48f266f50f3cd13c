"""MongoDB implementation of the dashboard repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from dashboard.ports.repositories import RecentDocument
from infrastructure.database.repository import MongoRepository, translate_driver_errors

RECENT_PROJECTION = {
    "title": 1,
    "artist": 1,
    "firstName": 1,
    "lastName": 1,
    "createdAt": 1,
}


def created_between(
    since: datetime | None = None, until: datetime | None = None
) -> dict[str, Any]:
    """Filter on ``createdAt`` within ``[since, until)``."""
    bounds: dict[str, datetime] = {}
    if since is not None:
        bounds["$gte"] = since
    if until is not None:
        bounds["$lt"] = until
    return {"createdAt": bounds} if bounds else {}


class MongoDashboardRepository(MongoRepository):
    """Aggregate queries used by the admin dashboard."""

    async def count(
        self,
        collection: str,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> int:
        documents = await self._collection(collection)
        with translate_driver_errors(f"{collection} count"):
            return await documents.count_documents(created_between(since, until))

    async def total_price(self, collection: str) -> float:
        documents = await self._collection(collection)
        pipeline = [{"$group": {"_id": None, "total": {"$sum": "$price"}}}]
        with translate_driver_errors(f"{collection} price total"):
            results = await documents.aggregate(pipeline).to_list(length=1)
        return float(results[0]["total"]) if results else 0.0

    async def recent(
        self, collection: str, since: datetime, limit: int
    ) -> list[RecentDocument]:
        documents = await self._collection(collection)
        with translate_driver_errors(f"{collection} recent listing"):
            found = (
                await documents.find(created_between(since), RECENT_PROJECTION)
                .sort("createdAt", -1)
                .limit(limit)
                .to_list(length=limit)
            )
        return [
            RecentDocument(
                id=str(document["_id"]),
                created_at=document["createdAt"],
                title=document.get("title"),
                artist=document.get("artist"),
                first_name=document.get("firstName"),
                last_name=document.get("lastName"),
            )
            for document in found
        ]
