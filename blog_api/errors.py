"""Application error kinds.

Every failure a resolver or endpoint raises on purpose is one of the
``BlogError`` subclasses below. Each carries the HTTP status it maps to and an
optional structured payload (``data``) that is sent to the client unchanged.
"""

from typing import Any


class BlogError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500
    default_message: str = "An error occurred."

    def __init__(self, message: str | None = None, data: Any = None):
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)


class ValidationFailed(BlogError):
    """One or more input fields were rejected.

    ``data`` is the ordered list of ``{"message": ...}`` records, one per
    violation.
    """

    status_code = 422
    default_message = "Invalid input."

    def __init__(self, errors: list[dict[str, str]], message: str | None = None):
        super().__init__(message, data=list(errors))

    @property
    def errors(self) -> list[dict[str, str]]:
        return self.data


class Conflict(ValidationFailed):
    """The record would collide with an existing one (e.g. email taken)."""

    default_message = "User exists already!"

    def __init__(self, message: str | None = None):
        message = message or self.default_message
        super().__init__([{"message": message}], message=message)


class Unauthenticated(BlogError):
    status_code = 401
    default_message = "Not authenticated!"


class Forbidden(BlogError):
    status_code = 403
    default_message = "Not authorized!"


class NotFound(BlogError):
    status_code = 404
    default_message = "No post found!"


class Internal(BlogError):
    status_code = 500
