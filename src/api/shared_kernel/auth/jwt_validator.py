"""Bearer token validation against the hosted identity provider.

Session tokens are RS256 JWTs signed with keys published at the issuer's
JWKS endpoint. Keys are discovered through the OpenID configuration document
and cached.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Any, NoReturn

import httpx
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import JWTValidatorProbe

DISCOVERY_PATH = "/.well-known/openid-configuration"


@dataclass(frozen=True)
class Principal:
    """Authenticated caller derived from validated token claims."""

    user_id: str
    role: str | None = None

    def has_role(self, role: str) -> bool:
        return self.role == role


class InvalidTokenError(Exception):
    """The bearer token cannot be trusted."""


def lookup_claim(claims: dict[str, Any], path: str) -> Any:
    """Resolve a dotted claim path such as ``metadata.role``."""
    value: Any = claims
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


class JWTValidator:
    """Turns session tokens into principals.

    Audience is verified only when one is configured; many hosted providers
    issue session tokens without an ``aud`` claim.
    """

    def __init__(
        self,
        issuer_url: str,
        probe: JWTValidatorProbe,
        audience: str | None = None,
        user_id_claim: str = "sub",
        role_claim: str = "metadata.role",
        jwks_cache_ttl: timedelta = timedelta(hours=24),
    ):
        self._issuer = issuer_url.rstrip("/")
        self._audience = audience
        self._probe = probe
        self._user_id_claim = user_id_claim
        self._role_claim = role_claim
        self._ttl_seconds = jwks_cache_ttl.total_seconds()

        self._key_set: dict[str, Any] | None = None
        self._key_set_expires = 0.0
        self._refresh_lock = asyncio.Lock()

    async def validate_token(self, token: str) -> Principal:
        """Verify signature, expiry and issuer, then map claims to a Principal.

        Raises:
            InvalidTokenError: If the token is malformed, expired or unverifiable.
        """
        try:
            jwt.get_unverified_header(token)
        except JWTError as e:
            self._reject(f"Malformed token: {e}", f"Invalid token format: {e}", e)

        claims = self._decode(token, await self._keys())

        user_id = claims.get(self._user_id_claim)
        if user_id is None:
            self._probe.token_validation_failed(
                reason=f"Missing {self._user_id_claim} claim"
            )
            raise InvalidTokenError(f"Missing required claim: {self._user_id_claim}")

        role = lookup_claim(claims, self._role_claim)
        self._probe.token_validated(user_id=str(user_id))
        return Principal(
            user_id=str(user_id),
            role=None if role is None else str(role),
        )

    def _decode(self, token: str, key_set: dict[str, Any]) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                key_set,
                algorithms=["RS256"],
                audience=self._audience,
                issuer=self._issuer,
                options={"verify_aud": self._audience is not None},
            )
        except ExpiredSignatureError as e:
            self._reject("Token expired", "Token has expired", e)
        except JWTClaimsError as e:
            self._reject(f"Claims error: {e}", f"Invalid token claims: {e}", e)
        except JWTError as e:
            self._reject(f"JWT error: {e}", f"Invalid token: {e}", e)

    def _reject(self, reason: str, message: str, cause: Exception) -> NoReturn:
        self._probe.token_validation_failed(reason=reason)
        raise InvalidTokenError(message) from cause

    async def _keys(self) -> dict[str, Any]:
        if self._key_set is not None and time.monotonic() < self._key_set_expires:
            self._probe.jwks_cache_hit()
            return self._key_set

        async with self._refresh_lock:
            # Another waiter may have refreshed while this one was queued.
            if self._key_set is not None and time.monotonic() < self._key_set_expires:
                self._probe.jwks_cache_hit()
                return self._key_set

            key_set = await self._fetch_key_set()
            self._key_set = key_set
            self._key_set_expires = time.monotonic() + self._ttl_seconds
            self._probe.jwks_fetched(key_count=len(key_set.get("keys", [])))
            return key_set

    async def _fetch_key_set(self) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient() as client:
                discovery = await client.get(f"{self._issuer}{DISCOVERY_PATH}")
                discovery.raise_for_status()
                jwks_uri = discovery.json().get("jwks_uri")
                if not jwks_uri:
                    self._probe.jwks_fetch_failed(
                        error="Missing jwks_uri in OpenID configuration"
                    )
                    raise InvalidTokenError(
                        "Identity provider missing jwks_uri in configuration"
                    )

                response = await client.get(jwks_uri)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as e:
            self._probe.jwks_fetch_failed(error=str(e))
            raise InvalidTokenError(f"Failed to fetch JWKS: {e}") from e
