"""Pydantic response models for purchase history."""

from __future__ import annotations

from datetime import datetime

from purchases.domain.value_objects import (
    ItemType,
    Purchase,
    PurchasedItem,
    PurchaseStatus,
)
from shared_kernel.api_models import CamelModel, PaginationResponse
from shared_kernel.pagination import Page


class PurchasedItemResponse(CamelModel):
    id: str
    title: str
    artist: str | None = None
    cover_art_url: str | None = None
    price: float | None = None

    @classmethod
    def from_domain(cls, item: PurchasedItem) -> PurchasedItemResponse:
        return cls(
            id=item.id,
            title=item.title,
            artist=item.artist,
            cover_art_url=item.cover_art_url,
            price=item.price,
        )


class PurchaseResponse(CamelModel):
    id: str
    user_id: str
    item_id: str
    item_type: ItemType
    payment_id: str | None = None
    amount: float
    currency: str
    status: PurchaseStatus
    purchase_date: datetime
    email_sent: bool
    item: PurchasedItemResponse | None = None

    @classmethod
    def from_domain(cls, purchase: Purchase) -> PurchaseResponse:
        return cls(
            id=purchase.id,
            user_id=purchase.user_id,
            item_id=purchase.item_id,
            item_type=purchase.item_type,
            payment_id=purchase.payment_id,
            amount=purchase.amount,
            currency=purchase.currency,
            status=purchase.status,
            purchase_date=purchase.purchase_date,
            email_sent=purchase.email_sent,
            item=(
                PurchasedItemResponse.from_domain(purchase.item)
                if purchase.item
                else None
            ),
        )


class PurchaseListResponse(CamelModel):
    purchases: list[PurchaseResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: Page[Purchase]) -> PurchaseListResponse:
        return cls(
            purchases=[PurchaseResponse.from_domain(p) for p in page.items],
            pagination=PaginationResponse.from_page(page),
        )
