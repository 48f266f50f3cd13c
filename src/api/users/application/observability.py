"""Domain probes for the Users application layer.

Following Domain Oriented Observability pattern.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserServiceProbe(Protocol):
    """Domain probe for admin user management."""

    def users_listed(self, page: int, returned: int, total: int) -> None:
        """Record that a page of user profiles was served."""
        ...

    def role_changed(self, actor_id: str, user_id: str, role: str) -> None:
        """Record that an admin changed another user's role."""
        ...

    def user_deleted(self, actor_id: str, user_id: str, purchases_deleted: int) -> None:
        """Record that an admin deleted a user and their purchases."""
        ...

    def self_modification_rejected(self, actor_id: str, action: str) -> None:
        """Record that an admin tried to change or delete their own account."""
        ...

    def user_not_found(self, user_id: str) -> None:
        """Record that an operation addressed a user with no stored profile."""
        ...

    def request_failed(self, operation: str, error: Exception) -> None:
        """Record that a user management request ended in a database failure."""
        ...

    def with_context(self, context: ObservationContext) -> UserServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserServiceProbe:
    """Default implementation using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultUserServiceProbe:
        return DefaultUserServiceProbe(logger=self._logger, context=context)

    def users_listed(self, page: int, returned: int, total: int) -> None:
        self._logger.debug(
            "users_listed",
            page=page,
            returned=returned,
            total=total,
            **self._get_context_kwargs(),
        )

    def role_changed(self, actor_id: str, user_id: str, role: str) -> None:
        self._logger.info(
            "user_role_changed",
            actor_id=actor_id,
            user_id=user_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, actor_id: str, user_id: str, purchases_deleted: int) -> None:
        self._logger.info(
            "user_deleted",
            actor_id=actor_id,
            user_id=user_id,
            purchases_deleted=purchases_deleted,
            **self._get_context_kwargs(),
        )

    def self_modification_rejected(self, actor_id: str, action: str) -> None:
        self._logger.warning(
            "user_self_modification_rejected",
            actor_id=actor_id,
            action=action,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: str) -> None:
        self._logger.debug(
            "user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def request_failed(self, operation: str, error: Exception) -> None:
        self._logger.error(
            "users_request_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
