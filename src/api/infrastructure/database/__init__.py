"""Database infrastructure - shared connection primitives."""

from infrastructure.database.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    DatabaseError,
    DocumentNotFoundError,
)

__all__ = [
    "ConfigurationError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DocumentNotFoundError",
]
