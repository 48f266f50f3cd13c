"""Repository interface (port) for recorded purchases."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from purchases.domain.value_objects import Purchase, PurchaseFilter
from shared_kernel.pagination import Page


@runtime_checkable
class IPurchaseRepository(Protocol):
    """Read contract for purchases.

    Implementations raise DatabaseError (or a subclass) when the store is
    unreachable or a query fails.
    """

    async def find_page(self, filters: PurchaseFilter) -> Page[Purchase]:
        """Return one page of a user's purchases with their items attached."""
        ...
