"""MongoDB implementation of the purchase repository."""

from __future__ import annotations

import asyncio
from typing import Any

from infrastructure.database.repository import MongoRepository, translate_driver_errors
from purchases.domain.value_objects import (
    DEFAULT_CURRENCY,
    ItemType,
    Purchase,
    PurchasedItem,
    PurchaseFilter,
    PurchaseStatus,
)
from shared_kernel.pagination import Page

PURCHASES_COLLECTION = "purchases"
ITEM_COLLECTIONS = {ItemType.SONG: "songs", ItemType.ALBUM: "albums"}
ITEM_PROJECTION = {"title": 1, "artist": 1, "coverArtUrl": 1, "price": 1}


def build_purchase_query(filters: PurchaseFilter) -> dict[str, Any]:
    query: dict[str, Any] = {"userId": filters.user_id}
    if filters.status is not None:
        query["status"] = filters.status.value
    if filters.item_type is not None:
        query["itemType"] = filters.item_type.value
    return query


def purchase_from_document(
    document: dict[str, Any], item: PurchasedItem | None = None
) -> Purchase:
    payment_id = document.get("paymentId")
    return Purchase(
        id=str(document["_id"]),
        user_id=document["userId"],
        item_id=str(document["itemId"]),
        item_type=ItemType(document["itemType"]),
        amount=float(document.get("amount", 0)),
        status=PurchaseStatus(document.get("status", PurchaseStatus.PENDING)),
        purchase_date=document["purchaseDate"],
        payment_id=None if payment_id is None else str(payment_id),
        currency=document.get("currency", DEFAULT_CURRENCY),
        email_sent=bool(document.get("emailSent", False)),
        item=item,
    )


def item_from_document(document: dict[str, Any]) -> PurchasedItem:
    price = document.get("price")
    return PurchasedItem(
        id=str(document["_id"]),
        title=document["title"],
        artist=document.get("artist"),
        cover_art_url=document.get("coverArtUrl"),
        price=None if price is None else float(price),
    )


class MongoPurchaseRepository(MongoRepository):
    """Purchase repository over the ``purchases`` collection.

    Purchased songs and albums are loaded with one ``$in`` query per item
    type rather than one lookup per purchase.
    """

    async def find_page(self, filters: PurchaseFilter) -> Page[Purchase]:
        purchases = await self._collection(PURCHASES_COLLECTION)
        query = build_purchase_query(filters)

        with translate_driver_errors("purchase listing"):
            cursor = (
                purchases.find(query)
                .sort("purchaseDate", -1)
                .skip(filters.skip)
                .limit(filters.limit)
            )
            documents, total_count = await asyncio.gather(
                cursor.to_list(length=filters.limit),
                purchases.count_documents(query),
            )
            items = await self._items(documents)

        return Page(
            items=[
                purchase_from_document(
                    document,
                    items.get((document["itemType"], str(document["itemId"]))),
                )
                for document in documents
            ],
            page=filters.page,
            limit=filters.limit,
            total_count=total_count,
        )

    async def _items(
        self, documents: list[dict[str, Any]]
    ) -> dict[tuple[str, str], PurchasedItem]:
        wanted: dict[str, set[Any]] = {}
        for document in documents:
            wanted.setdefault(document["itemType"], set()).add(document["itemId"])

        found: dict[tuple[str, str], PurchasedItem] = {}
        for item_type, item_ids in wanted.items():
            collection = await self._collection(ITEM_COLLECTIONS[ItemType(item_type)])
            matches = await collection.find(
                {"_id": {"$in": list(item_ids)}}, ITEM_PROJECTION
            ).to_list(length=None)
            for match in matches:
                found[(item_type, str(match["_id"]))] = item_from_document(match)
        return found
