"""Repository interface (port) for dashboard statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class RecentDocument:
    """Lightweight projection of a recently created document."""

    id: str
    created_at: datetime
    title: str | None = None
    artist: str | None = None
    first_name: str | None = None
    last_name: str | None = None


@runtime_checkable
class IDashboardRepository(Protocol):
    """Read-only aggregate queries over the catalog and user profiles.

    ``collection`` is one of ``songs``, ``albums`` or ``user_profiles``.
    """

    async def count(
        self,
        collection: str,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> int:
        """Count documents created in ``[since, until)``."""
        ...

    async def total_price(self, collection: str) -> float:
        """Sum the ``price`` field over a collection."""
        ...

    async def recent(
        self, collection: str, since: datetime, limit: int
    ) -> list[RecentDocument]:
        """Return documents created since ``since``, newest first."""
        ...
