"""Pydantic models for admin user management."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from shared_kernel.api_models import CamelModel, PaginationResponse
from shared_kernel.pagination import Page
from users.domain.value_objects import UserAccount, UserRole


class UserResponse(CamelModel):
    """A user profile with totals over its completed purchases."""

    id: str
    user_id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: UserRole
    created_at: datetime | None = None
    last_login: datetime | None = None
    total_purchases: int
    total_spent: float
    last_purchase: datetime | None = None

    @classmethod
    def from_domain(cls, user: UserAccount) -> UserResponse:
        return cls(
            id=user.id,
            user_id=user.user_id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            created_at=user.created_at,
            last_login=user.last_login,
            total_purchases=user.purchases.total_purchases,
            total_spent=user.purchases.total_spent,
            last_purchase=user.purchases.last_purchase,
        )


class UserListResponse(CamelModel):
    users: list[UserResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: Page[UserAccount]) -> UserListResponse:
        return cls(
            users=[UserResponse.from_domain(user) for user in page.items],
            pagination=PaginationResponse.from_page(page),
        )


class UpdateUserRequest(CamelModel):
    """Role change for one user, addressed by identity provider user id."""

    id: str | None = Field(default=None, description="User id to update")
    role: UserRole = Field(..., description="New role")
