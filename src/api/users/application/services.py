"""Application service for admin user management."""

from __future__ import annotations

from shared_kernel.pagination import Page
from users.application.observability import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)
from users.domain.value_objects import UserAccount, UserFilter, UserRemoval, UserRole
from users.ports.exceptions import SelfModificationError, UserNotFoundError
from users.ports.repositories import IUserRepository


class UserService:
    """Lists user profiles and applies admin changes to them.

    ``actor_id`` is the id of the admin making the request. Admins may not
    change or delete their own account.
    """

    def __init__(
        self,
        repository: IUserRepository,
        probe: UserServiceProbe | None = None,
    ):
        self._repository = repository
        self._probe = probe or DefaultUserServiceProbe()

    async def list_users(self, filters: UserFilter) -> Page[UserAccount]:
        page = await self._repository.find_page(filters)
        self._probe.users_listed(
            page=page.page,
            returned=len(page.items),
            total=page.total_count,
        )
        return page

    async def change_role(self, actor_id: str, user_id: str, role: UserRole) -> None:
        """Set another user's stored role.

        Raises:
            SelfModificationError: If the admin targets their own account.
            UserNotFoundError: If no profile has this user id.
        """
        self._reject_self(actor_id, user_id, action="change_role")

        if not await self._repository.update_role(user_id, role):
            self._probe.user_not_found(user_id=user_id)
            raise UserNotFoundError(user_id)

        self._probe.role_changed(actor_id=actor_id, user_id=user_id, role=role.value)

    async def delete_user(self, actor_id: str, user_id: str) -> UserRemoval:
        """Delete another user's profile and purchase history.

        Raises:
            SelfModificationError: If the admin targets their own account.
            UserNotFoundError: If there was neither a profile nor purchases.
        """
        self._reject_self(actor_id, user_id, action="delete")

        removal = await self._repository.delete(user_id)
        if not removal.removed_anything:
            self._probe.user_not_found(user_id=user_id)
            raise UserNotFoundError(user_id)

        self._probe.user_deleted(
            actor_id=actor_id,
            user_id=user_id,
            purchases_deleted=removal.purchases_deleted,
        )
        return removal

    def _reject_self(self, actor_id: str, user_id: str, action: str) -> None:
        if actor_id == user_id:
            self._probe.self_modification_rejected(actor_id=actor_id, action=action)
            raise SelfModificationError(f"Cannot {action} on own account")
