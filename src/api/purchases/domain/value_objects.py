"""Value objects for the Purchases bounded context.

A purchase records one paid (or attempted) order of a single song or album
by a signed-in listener. Payment initialisation and verification happen
outside this service; these objects only describe what was recorded.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

DEFAULT_CURRENCY = "NGN"


class PurchaseStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class ItemType(StrEnum):
    SONG = "song"
    ALBUM = "album"


@dataclass(frozen=True)
class PurchasedItem:
    """Catalog details of the song or album a purchase refers to."""

    id: str
    title: str
    artist: str | None = None
    cover_art_url: str | None = None
    price: float | None = None


@dataclass(frozen=True)
class Purchase:
    """A recorded purchase.

    ``item`` is None when the song or album has since been deleted.
    """

    id: str
    user_id: str
    item_id: str
    item_type: ItemType
    amount: float
    status: PurchaseStatus
    purchase_date: datetime
    payment_id: str | None = None
    currency: str = DEFAULT_CURRENCY
    email_sent: bool = False
    item: PurchasedItem | None = None


@dataclass(frozen=True)
class PurchaseFilter:
    """Criteria for listing one user's purchases, newest first."""

    user_id: str
    status: PurchaseStatus | None = None
    item_type: ItemType | None = None
    page: int = 1
    limit: int = 10

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit
