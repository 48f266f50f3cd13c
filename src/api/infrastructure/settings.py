"""Application settings using pydantic-settings.

Settings are loaded from environment variables (and an optional ``.env``
file). The MongoDB connection target has no default: a missing or malformed
``MONGODB_URI`` is a fatal configuration error at startup.
"""

from functools import lru_cache
from urllib.parse import urlsplit, urlunsplit

from pydantic import (
    AliasChoices,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.database.exceptions import ConfigurationError

MONGODB_SCHEMES = ("mongodb", "mongodb+srv")


class MongoSettings(BaseSettings):
    """MongoDB connection settings.

    Environment variables:
        MONGODB_URI: Connection URI (required, mongodb:// or mongodb+srv://)
        MONGODB_DATABASE: Database name used when the URI names none
            (default: rasman_music)
        MONGODB_SERVER_SELECTION_TIMEOUT_MS: How long a connect attempt may
            wait for a reachable server (default: 10000)
        MONGODB_APP_NAME: Client application name reported to the server
            (default: rasman-music-api)
    """

    model_config = SettingsConfigDict(
        env_prefix="MONGODB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    uri: str = Field(..., description="MongoDB connection URI")
    database: str = Field(default="rasman_music", description="Database name")
    server_selection_timeout_ms: int = Field(
        default=10_000,
        description="Server selection timeout for connect attempts",
        ge=100,
        le=120_000,
    )
    app_name: str = Field(
        default="rasman-music-api",
        description="Application name reported to MongoDB",
    )

    @field_validator("uri")
    @classmethod
    def validate_uri(cls, value: str) -> str:
        """Require a non-empty URI with a MongoDB scheme and a host."""
        value = value.strip()
        if not value:
            raise ValueError("MONGODB_URI must not be empty")

        parts = urlsplit(value)
        if parts.scheme not in MONGODB_SCHEMES:
            raise ValueError(
                f"MONGODB_URI must use one of {', '.join(MONGODB_SCHEMES)} schemes"
            )
        if not parts.netloc.rpartition("@")[2]:
            raise ValueError("MONGODB_URI must name at least one host")
        return value

    @property
    def redacted_uri(self) -> str:
        """Connection URI without credentials or query string (for logging)."""
        return redact_uri(self.uri)


class SmtpSettings(BaseSettings):
    """Outbound mail settings for contact form delivery.

    Environment variables:
        SMTP_HOST: Mail server host (default: localhost)
        SMTP_PORT: Mail server port (default: 465)
        SMTP_USER: Login user (optional)
        SMTP_PASS: Login password (optional)
        SMTP_USE_SSL: Connect with implicit TLS (default: true)
        SMTP_TIMEOUT_SECONDS: Socket timeout (default: 30)
        SMTP_SENDER: From address for outgoing mail
        SMTP_CONTACT_RECIPIENT: Address that receives contact messages
    """

    model_config = SettingsConfigDict(
        env_prefix="SMTP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="SMTP host")
    port: int = Field(default=465, description="SMTP port", ge=1, le=65535)
    user: str | None = Field(default=None, description="SMTP login user")
    password: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("SMTP_PASS", "SMTP_PASSWORD", "password"),
        description="SMTP login password",
    )
    use_ssl: bool = Field(default=True, description="Use implicit TLS")
    timeout_seconds: float = Field(default=30.0, description="Socket timeout", gt=0)
    sender: str = Field(
        default="no-reply@rasmanmusic.com",
        description="From address for outgoing mail",
    )
    contact_recipient: str = Field(
        default="contact@rasmanmusic.com",
        description="Recipient of contact form messages",
    )


class IdentitySettings(BaseSettings):
    """Hosted identity provider settings for bearer token validation.

    Environment variables:
        IDENTITY_ISSUER_URL: Token issuer URL (OIDC discovery base)
        IDENTITY_AUDIENCE: Expected audience (optional; unchecked when unset)
        IDENTITY_USER_ID_CLAIM: Claim holding the user id (default: sub)
        IDENTITY_ROLE_CLAIM: Dotted path to the role claim (default: metadata.role)
        IDENTITY_ADMIN_ROLE: Role value granting admin access (default: admin)
    """

    model_config = SettingsConfigDict(
        env_prefix="IDENTITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    issuer_url: str = Field(
        default="http://localhost:8080",
        description="Identity provider issuer URL",
    )
    audience: str | None = Field(default=None, description="Expected audience")
    user_id_claim: str = Field(default="sub", description="User id claim")
    role_claim: str = Field(default="metadata.role", description="Role claim path")
    admin_role: str = Field(default="admin", description="Admin role value")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Rasman Music API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")


def redact_uri(uri: str) -> str:
    """Strip userinfo and query parameters from a connection URI."""
    parts = urlsplit(uri)
    host = parts.netloc.rpartition("@")[2]
    return urlunsplit((parts.scheme, host, parts.path, "", ""))


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


@lru_cache
def get_mongo_settings() -> MongoSettings:
    """Get cached MongoDB settings.

    Raises:
        ConfigurationError: If MONGODB_URI is missing or malformed.
    """
    try:
        return MongoSettings()  # type: ignore[call-arg]
    except ValidationError as e:
        raise ConfigurationError(f"Invalid MongoDB configuration: {e}") from e


@lru_cache
def get_smtp_settings() -> SmtpSettings:
    """Get cached SMTP settings."""
    return SmtpSettings()


@lru_cache
def get_identity_settings() -> IdentitySettings:
    """Get cached identity provider settings."""
    return IdentitySettings()
