"""FastAPI dependencies for authenticating callers and requiring admin access."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from infrastructure.settings import get_identity_settings
from shared_kernel.auth.jwt_validator import InvalidTokenError, JWTValidator, Principal
from shared_kernel.auth.observability import (
    DefaultJWTValidatorProbe,
    JWTValidatorProbe,
)
from shared_kernel.observability_context import ObservationContext

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_jwt_validator_probe() -> JWTValidatorProbe:
    return DefaultJWTValidatorProbe()


@lru_cache
def get_jwt_validator() -> JWTValidator:
    """Get cached JWT validator.

    A single instance is reused across requests so its JWKS cache is shared.
    """
    settings = get_identity_settings()
    return JWTValidator(
        issuer_url=settings.issuer_url,
        probe=get_jwt_validator_probe(),
        audience=settings.audience,
        user_id_claim=settings.user_id_claim,
        role_claim=settings.role_claim,
    )


async def get_current_principal(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    validator: Annotated[JWTValidator, Depends(get_jwt_validator)],
) -> Principal:
    """Authenticate the caller from the Authorization header.

    Raises:
        HTTPException: 401 if the token is missing or invalid.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return await validator.validate_token(credentials.credentials)
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


async def require_admin(
    request: Request,
    principal: Annotated[Principal, Depends(get_current_principal)],
    probe: Annotated[JWTValidatorProbe, Depends(get_jwt_validator_probe)],
) -> Principal:
    """Require the authenticated caller to hold the admin role.

    Raises:
        HTTPException: 403 if the caller is not an admin.
    """
    admin_role = get_identity_settings().admin_role
    if not principal.has_role(admin_role):
        context = ObservationContext(
            request_id=request.headers.get("x-request-id")
        ).with_extra(path=request.url.path)
        probe.with_context(context).admin_access_denied(
            user_id=principal.user_id, role=principal.role
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return principal
