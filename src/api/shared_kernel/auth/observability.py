"""Probe for bearer token validation and admin access checks.

Events are prefixed with ``identity_`` so they group together in log search.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class JWTValidatorProbe(Protocol):
    """Events raised while turning a bearer token into a Principal."""

    def token_validated(self, user_id: str) -> None:
        """The token verified and named a user."""
        ...

    def token_validation_failed(self, reason: str) -> None:
        """The token was rejected; ``reason`` is safe to log."""
        ...

    def jwks_fetched(self, key_count: int) -> None:
        """A fresh key set was downloaded from the issuer."""
        ...

    def jwks_cache_hit(self) -> None:
        """The cached key set was still within its TTL."""
        ...

    def jwks_fetch_failed(self, error: str) -> None:
        """Discovery or the key set download failed."""
        ...

    def admin_access_denied(self, user_id: str, role: str | None) -> None:
        """A valid caller reached an admin route without the admin role."""
        ...

    def with_context(self, context: ObservationContext) -> JWTValidatorProbe:
        ...


class DefaultJWTValidatorProbe:
    """JWTValidatorProbe that writes structlog events."""

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

    def with_context(self, context: ObservationContext) -> DefaultJWTValidatorProbe:
        return DefaultJWTValidatorProbe(logger=self._logger, context=context)

    def token_validated(self, user_id: str) -> None:
        self._logger.debug(
            "identity_token_validated",
            **{**self._get_context_kwargs(), "user_id": user_id},
        )

    def token_validation_failed(self, reason: str) -> None:
        self._logger.warning(
            "identity_token_validation_failed",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def jwks_fetched(self, key_count: int) -> None:
        self._logger.info(
            "identity_jwks_fetched",
            key_count=key_count,
            **self._get_context_kwargs(),
        )

    def jwks_cache_hit(self) -> None:
        self._logger.debug("identity_jwks_cache_hit", **self._get_context_kwargs())

    def jwks_fetch_failed(self, error: str) -> None:
        self._logger.error(
            "identity_jwks_fetch_failed",
            error=error,
            **self._get_context_kwargs(),
        )

    def admin_access_denied(self, user_id: str, role: str | None) -> None:
        self._logger.warning(
            "identity_admin_access_denied",
            role=role,
            **{**self._get_context_kwargs(), "user_id": user_id},
        )
