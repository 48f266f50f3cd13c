"""Repository interface (port) for user profiles."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from shared_kernel.pagination import Page
from users.domain.value_objects import UserAccount, UserFilter, UserRemoval, UserRole


@runtime_checkable
class IUserRepository(Protocol):
    """Persistence contract for user profiles and their purchase totals.

    Implementations raise DatabaseError (or a subclass) when the store is
    unreachable or a query fails.
    """

    async def find_page(self, filters: UserFilter) -> Page[UserAccount]:
        """Return one page of profiles, each with its purchase summary."""
        ...

    async def update_role(self, user_id: str, role: UserRole) -> bool:
        """Set a profile's role. Returns False if no profile matched."""
        ...

    async def delete(self, user_id: str) -> UserRemoval:
        """Remove a profile and every purchase recorded for it."""
        ...
