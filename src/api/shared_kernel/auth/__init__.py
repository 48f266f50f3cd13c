"""Bearer token authentication against the hosted identity provider."""

from shared_kernel.auth.jwt_validator import (
    InvalidTokenError,
    JWTValidator,
    Principal,
)
from shared_kernel.auth.observability import (
    DefaultJWTValidatorProbe,
    JWTValidatorProbe,
)

__all__ = [
    "DefaultJWTValidatorProbe",
    "InvalidTokenError",
    "JWTValidator",
    "JWTValidatorProbe",
    "Principal",
]
