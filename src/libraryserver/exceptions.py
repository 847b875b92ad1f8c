"""libraryserver exceptions.

Every refusal a manager reports is a ``LibraryError`` carrying the status
code the request/response boundary answers with.
"""

from typing import Optional


class LibraryError(Exception):
    """Base error for refused library operations.

    Usage:
        try:
            customer = registry.get(7)
        except LibraryError as e:
            if e.status_code == 404:
                handle_not_found()
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Internal error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"

    def as_dict(self) -> dict:
        """Serialize the error for a response body."""
        return {"status": self.status_code, "code": self.code, "message": self.message}


class BadRequestError(LibraryError):
    """Sent data is structurally incomplete."""

    status_code = 400
    code = "BAD_REQUEST"
    default_message = "incomplete data"


class NotFoundError(LibraryError):
    """A referenced record does not exist."""

    status_code = 404
    code = "NOT_FOUND"
    default_message = "Not found"


class ConflictError(LibraryError):
    """An exclusivity rule or a live reference blocks the operation."""

    status_code = 409
    code = "CONFLICT"
    default_message = "Conflict"
