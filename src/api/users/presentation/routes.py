"""HTTP routes for admin user management.

Every route requires the admin role. Changes apply to the stored profile
only; the identity provider's own user record is managed in its console.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from infrastructure.database.exceptions import DatabaseError
from shared_kernel.api_models import MessageResponse
from shared_kernel.auth.dependencies import require_admin
from shared_kernel.auth.jwt_validator import Principal
from users.application.observability import UserServiceProbe
from users.application.services import UserService
from users.dependencies import get_user_service, get_user_service_probe
from users.domain.value_objects import UserFilter, UserRole
from users.ports.exceptions import SelfModificationError, UserNotFoundError
from users.presentation.models import UpdateUserRequest, UserListResponse

router = APIRouter(prefix="/api/admin", tags=["admin"])

Admin = Annotated[Principal, Depends(require_admin)]
Service = Annotated[UserService, Depends(get_user_service)]
Probe = Annotated[UserServiceProbe, Depends(get_user_service_probe)]

ALL_ROLES = "all"


def _server_error(
    probe: UserServiceProbe, message: str, error: Exception
) -> HTTPException:
    probe.request_failed(operation=message, error=error)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=message,
    )


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


@router.get("/users", dependencies=[Depends(require_admin)])
async def list_users(
    service: Service,
    probe: Probe,
    role: Annotated[str | None, Query(pattern="^(all|user|admin)$")] = None,
    search: Annotated[str | None, Query(max_length=100)] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
) -> UserListResponse:
    """List user profiles with their completed purchase totals.

    ``role=all`` is the same as omitting the filter.
    """
    filters = UserFilter(
        role=None if role in (None, ALL_ROLES) else UserRole(role),
        search=search,
        page=page,
        limit=limit,
    )
    try:
        result = await service.list_users(filters)
    except DatabaseError as e:
        raise _server_error(probe, "Failed to fetch users", e) from e

    return UserListResponse.from_page(result)


@router.put("/users")
async def update_user(
    request: UpdateUserRequest, admin: Admin, service: Service, probe: Probe
) -> MessageResponse:
    """Change another user's role, addressed by ``id`` in the body."""
    if not request.id:
        raise _bad_request("User ID is required")

    try:
        await service.change_role(admin.user_id, request.id, request.role)
    except SelfModificationError as e:
        raise _bad_request("Cannot modify your own account") from e
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        ) from e
    except DatabaseError as e:
        raise _server_error(probe, "Failed to update user", e) from e

    return MessageResponse(message="User updated successfully")


@router.delete("/users")
async def delete_user(
    admin: Admin,
    service: Service,
    probe: Probe,
    user_id: Annotated[str | None, Query(alias="id")] = None,
) -> MessageResponse:
    """Delete another user's profile and purchase history."""
    if not user_id:
        raise _bad_request("User ID is required")

    try:
        await service.delete_user(admin.user_id, user_id)
    except SelfModificationError as e:
        raise _bad_request("Cannot delete your own account") from e
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        ) from e
    except DatabaseError as e:
        raise _server_error(probe, "Failed to delete user", e) from e

    return MessageResponse(message="User account deleted successfully")
