"""Application service for a listener's purchase history."""

from __future__ import annotations

from purchases.application.observability import (
    DefaultPurchaseServiceProbe,
    PurchaseServiceProbe,
)
from purchases.domain.value_objects import Purchase, PurchaseFilter
from purchases.ports.repositories import IPurchaseRepository
from shared_kernel.pagination import Page


class PurchaseService:
    """Reads the purchases recorded for the signed-in user.

    Repository errors propagate unchanged.
    """

    def __init__(
        self,
        repository: IPurchaseRepository,
        probe: PurchaseServiceProbe | None = None,
    ):
        self._repository = repository
        self._probe = probe or DefaultPurchaseServiceProbe()

    async def list_purchases(self, filters: PurchaseFilter) -> Page[Purchase]:
        page = await self._repository.find_page(filters)
        self._probe.purchases_listed(
            user_id=filters.user_id,
            page=page.page,
            returned=len(page.items),
            total=page.total_count,
        )
        return page
