"""MongoDB implementation of the user profile repository."""

from __future__ import annotations

import asyncio
import re
from datetime import UTC, datetime
from typing import Any

from infrastructure.database.repository import MongoRepository, translate_driver_errors
from shared_kernel.pagination import Page
from users.domain.value_objects import (
    PurchaseSummary,
    UserAccount,
    UserFilter,
    UserRemoval,
    UserRole,
)

PROFILES_COLLECTION = "user_profiles"
PURCHASES_COLLECTION = "purchases"
SEARCH_FIELDS = ("email", "firstName", "lastName")


def build_user_query(filters: UserFilter) -> dict[str, Any]:
    query: dict[str, Any] = {}
    if filters.role is not None:
        query["role"] = filters.role.value
    if filters.search:
        pattern = re.escape(filters.search)
        query["$or"] = [
            {name: {"$regex": pattern, "$options": "i"}} for name in SEARCH_FIELDS
        ]
    return query


def purchase_summary_pipeline(user_ids: list[str]) -> list[dict[str, Any]]:
    """Totals over completed purchases, one result per user id."""
    return [
        {"$match": {"userId": {"$in": user_ids}, "status": "completed"}},
        {
            "$group": {
                "_id": "$userId",
                "totalPurchases": {"$sum": 1},
                "totalSpent": {"$sum": "$amount"},
                "lastPurchase": {"$max": "$purchaseDate"},
            }
        },
    ]


def summary_from_document(document: dict[str, Any]) -> PurchaseSummary:
    return PurchaseSummary(
        total_purchases=int(document.get("totalPurchases", 0)),
        total_spent=float(document.get("totalSpent", 0)),
        last_purchase=document.get("lastPurchase"),
    )


def _role(value: Any) -> UserRole:
    # Profiles created before roles existed carry no role or an unknown one.
    try:
        return UserRole(value)
    except ValueError:
        return UserRole.USER


def user_from_document(
    document: dict[str, Any], purchases: PurchaseSummary | None = None
) -> UserAccount:
    return UserAccount(
        id=str(document["_id"]),
        user_id=document["clerkId"],
        email=document.get("email", ""),
        role=_role(document.get("role")),
        first_name=document.get("firstName"),
        last_name=document.get("lastName"),
        created_at=document.get("createdAt"),
        last_login=document.get("lastLogin"),
        purchases=purchases or PurchaseSummary(),
    )


class MongoUserRepository(MongoRepository):
    """User profiles from ``user_profiles`` with totals from ``purchases``."""

    async def find_page(self, filters: UserFilter) -> Page[UserAccount]:
        profiles = await self._collection(PROFILES_COLLECTION)
        query = build_user_query(filters)

        with translate_driver_errors("user listing"):
            cursor = (
                profiles.find(query)
                .sort("createdAt", -1)
                .skip(filters.skip)
                .limit(filters.limit)
            )
            documents, total_count = await asyncio.gather(
                cursor.to_list(length=filters.limit),
                profiles.count_documents(query),
            )
            summaries = await self._purchase_summaries(
                [document["clerkId"] for document in documents]
            )

        return Page(
            items=[
                user_from_document(document, summaries.get(document["clerkId"]))
                for document in documents
            ],
            page=filters.page,
            limit=filters.limit,
            total_count=total_count,
        )

    async def _purchase_summaries(
        self, user_ids: list[str]
    ) -> dict[str, PurchaseSummary]:
        if not user_ids:
            return {}

        purchases = await self._collection(PURCHASES_COLLECTION)
        results = await purchases.aggregate(
            purchase_summary_pipeline(user_ids)
        ).to_list(length=None)
        return {result["_id"]: summary_from_document(result) for result in results}

    async def update_role(self, user_id: str, role: UserRole) -> bool:
        profiles = await self._collection(PROFILES_COLLECTION)
        with translate_driver_errors("user role update"):
            result = await profiles.update_one(
                {"clerkId": user_id},
                {"$set": {"role": role.value, "updatedAt": datetime.now(UTC)}},
            )
        return result.matched_count > 0

    async def delete(self, user_id: str) -> UserRemoval:
        profiles = await self._collection(PROFILES_COLLECTION)
        purchases = await self._collection(PURCHASES_COLLECTION)
        with translate_driver_errors("user delete"):
            profile_result, purchase_result = await asyncio.gather(
                profiles.delete_one({"clerkId": user_id}),
                purchases.delete_many({"userId": user_id}),
            )
        return UserRemoval(
            profile_deleted=profile_result.deleted_count > 0,
            purchases_deleted=purchase_result.deleted_count,
        )
