"""Database-specific exceptions shared by every data-accessing context."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class ConfigurationError(DatabaseError):
    """Raised when the connection target is missing or malformed.

    Fatal at startup: the application must not serve traffic without a
    usable connection target.
    """

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when a connection attempt fails (network, auth, DNS).

    Recoverable: the connection cache resets so a later call may retry.
    """

    pass


class DocumentNotFoundError(DatabaseError):
    """Raised when a document addressed by id does not exist."""

    def __init__(self, collection: str, document_id: str):
        super().__init__(f"{collection} document {document_id!r} not found")
        self.collection = collection
        self.document_id = document_id
