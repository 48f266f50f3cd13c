"""Domain exceptions for the Users bounded context."""


class SelfModificationError(Exception):
    """Raised when an admin tries to change or delete their own account.

    Admins keep their own role and account so the service is never left
    without an administrator by accident.
    """

    pass


class UserNotFoundError(Exception):
    """Raised when no stored profile matches the given user id."""

    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id
