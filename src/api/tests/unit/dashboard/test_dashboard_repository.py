"""Unit tests for the MongoDB dashboard repository with a mocked driver."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from dashboard.infrastructure.repository import (
    RECENT_PROJECTION,
    MongoDashboardRepository,
    created_between,
)

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def collection() -> MagicMock:
    return MagicMock()


@pytest.fixture
def repository(collection, mongo_settings) -> MongoDashboardRepository:
    client = MagicMock()
    client.get_default_database.return_value.__getitem__.return_value = collection
    cache = MagicMock()
    cache.acquire = AsyncMock(return_value=client)
    return MongoDashboardRepository(cache, mongo_settings)


class TestCreatedBetween:
    def test_unbounded(self):
        assert created_between() == {}

    def test_half_open_range(self):
        since = NOW - timedelta(days=30)
        assert created_between(since, NOW) == {
            "createdAt": {"$gte": since, "$lt": NOW}
        }


class TestMongoDashboardRepository:
    @pytest.mark.asyncio
    async def test_count_filters_on_created_at(self, repository, collection):
        collection.count_documents = AsyncMock(return_value=4)

        assert await repository.count("songs", since=NOW) == 4
        collection.count_documents.assert_awaited_once_with(
            {"createdAt": {"$gte": NOW}}
        )

    @pytest.mark.asyncio
    async def test_total_price_sums_prices(self, repository, collection):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[{"_id": None, "total": 21.5}])
        collection.aggregate.return_value = cursor

        assert await repository.total_price("albums") == 21.5
        pipeline = collection.aggregate.call_args.args[0]
        assert pipeline == [{"$group": {"_id": None, "total": {"$sum": "$price"}}}]

    @pytest.mark.asyncio
    async def test_total_price_of_empty_collection(self, repository, collection):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[])
        collection.aggregate.return_value = cursor

        assert await repository.total_price("songs") == 0.0

    @pytest.mark.asyncio
    async def test_recent_projects_and_sorts_newest_first(
        self, repository, collection
    ):
        oid = ObjectId()
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.limit.return_value = cursor
        cursor.to_list = AsyncMock(
            return_value=[
                {"_id": oid, "createdAt": NOW, "firstName": "Ada", "lastName": "K"}
            ]
        )
        collection.find.return_value = cursor
        since = NOW - timedelta(days=7)

        documents = await repository.recent("user_profiles", since=since, limit=5)

        collection.find.assert_called_once_with(
            {"createdAt": {"$gte": since}}, RECENT_PROJECTION
        )
        cursor.sort.assert_called_once_with("createdAt", -1)
        cursor.limit.assert_called_once_with(5)
        assert documents[0].id == str(oid)
        assert documents[0].first_name == "Ada"
        assert documents[0].title is None
