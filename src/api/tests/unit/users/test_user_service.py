"""Unit tests for UserService with a mocked repository."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.database.exceptions import DatabaseError
from shared_kernel.pagination import Page
from users.application.observability import UserServiceProbe
from users.application.services import UserService
from users.domain.value_objects import UserAccount, UserFilter, UserRemoval, UserRole
from users.ports.exceptions import SelfModificationError, UserNotFoundError
from users.ports.repositories import IUserRepository


@pytest.fixture
def repository() -> AsyncMock:
    return AsyncMock(spec=IUserRepository)


@pytest.fixture
def probe() -> MagicMock:
    return MagicMock(spec=UserServiceProbe)


@pytest.fixture
def service(repository, probe) -> UserService:
    return UserService(repository=repository, probe=probe)


class TestListUsers:
    @pytest.mark.asyncio
    async def test_returns_repository_page(self, service, repository, probe):
        user = UserAccount(id="u1", user_id="user_fan", email="fan@example.com")
        page = Page(items=[user], page=1, limit=50, total_count=1)
        repository.find_page.return_value = page

        result = await service.list_users(UserFilter())

        assert result is page
        probe.users_listed.assert_called_once_with(page=1, returned=1, total=1)


class TestChangeRole:
    @pytest.mark.asyncio
    async def test_updates_another_user(self, service, repository, probe):
        repository.update_role.return_value = True

        await service.change_role("user_admin", "user_fan", UserRole.ADMIN)

        repository.update_role.assert_awaited_once_with("user_fan", UserRole.ADMIN)
        probe.role_changed.assert_called_once_with(
            actor_id="user_admin", user_id="user_fan", role="admin"
        )

    @pytest.mark.asyncio
    async def test_rejects_own_account(self, service, repository, probe):
        with pytest.raises(SelfModificationError):
            await service.change_role("user_admin", "user_admin", UserRole.USER)

        repository.update_role.assert_not_awaited()
        probe.self_modification_rejected.assert_called_once_with(
            actor_id="user_admin", action="change_role"
        )

    @pytest.mark.asyncio
    async def test_missing_profile(self, service, repository, probe):
        repository.update_role.return_value = False

        with pytest.raises(UserNotFoundError):
            await service.change_role("user_admin", "user_ghost", UserRole.USER)

        probe.user_not_found.assert_called_once_with(user_id="user_ghost")
        probe.role_changed.assert_not_called()


class TestDeleteUser:
    @pytest.mark.asyncio
    async def test_deletes_profile_and_purchases(self, service, repository, probe):
        removal = UserRemoval(profile_deleted=True, purchases_deleted=2)
        repository.delete.return_value = removal

        assert await service.delete_user("user_admin", "user_fan") is removal
        probe.user_deleted.assert_called_once_with(
            actor_id="user_admin", user_id="user_fan", purchases_deleted=2
        )

    @pytest.mark.asyncio
    async def test_purchases_without_profile_still_count(self, service, repository):
        repository.delete.return_value = UserRemoval(
            profile_deleted=False, purchases_deleted=1
        )

        removal = await service.delete_user("user_admin", "user_fan")

        assert removal.removed_anything

    @pytest.mark.asyncio
    async def test_nothing_removed_is_not_found(self, service, repository):
        repository.delete.return_value = UserRemoval(
            profile_deleted=False, purchases_deleted=0
        )

        with pytest.raises(UserNotFoundError):
            await service.delete_user("user_admin", "user_ghost")

    @pytest.mark.asyncio
    async def test_rejects_own_account(self, service, repository):
        with pytest.raises(SelfModificationError):
            await service.delete_user("user_admin", "user_admin")

        repository.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_database_errors_propagate(self, service, repository):
        repository.delete.side_effect = DatabaseError("boom")

        with pytest.raises(DatabaseError):
            await service.delete_user("user_admin", "user_fan")
