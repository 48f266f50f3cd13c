"""Value objects for the Users bounded context.

User profiles are created when a listener first signs in through the hosted
identity provider. Admins browse them together with a summary of each
user's completed purchases.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class UserRole(StrEnum):
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class PurchaseSummary:
    """Totals over a user's completed purchases."""

    total_purchases: int = 0
    total_spent: float = 0.0
    last_purchase: datetime | None = None


@dataclass(frozen=True)
class UserAccount:
    """A stored user profile, keyed by the identity provider's user id."""

    id: str
    user_id: str
    email: str
    role: UserRole = UserRole.USER
    first_name: str | None = None
    last_name: str | None = None
    created_at: datetime | None = None
    last_login: datetime | None = None
    purchases: PurchaseSummary = field(default_factory=PurchaseSummary)


@dataclass(frozen=True)
class UserFilter:
    """Criteria for the admin user listing.

    ``search`` matches email, first name or last name case-insensitively.
    """

    role: UserRole | None = None
    search: str | None = None
    page: int = 1
    limit: int = 50

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class UserRemoval:
    """What was removed when a user account was deleted."""

    profile_deleted: bool
    purchases_deleted: int

    @property
    def removed_anything(self) -> bool:
        return self.profile_deleted or self.purchases_deleted > 0
