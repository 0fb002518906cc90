"""Shared exceptions for service layer operations."""


class BookmarkValidationError(Exception):
    """
    Raised when a create or update payload breaks a validation rule.

    The message is returned to the client verbatim, so its wording is part of
    the API contract.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BookmarkNotFoundError(Exception):
    """Raised when no bookmark matches the requested id."""

    def __init__(self, bookmark_id: int) -> None:
        self.bookmark_id = bookmark_id
        super().__init__("Bookmark not found")


class InfrastructureError(Exception):
    """
    Raised when the store cannot complete an operation (database unreachable,
    query failure).

    Never retried. Surfaced to clients as a generic 500.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Bookmark store failed during {operation}")
