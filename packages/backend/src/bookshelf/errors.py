"""Domain errors surfaced to GraphQL callers.

Learn: graphql-core copies an exception's ``extensions`` attribute onto
the GraphQL error it wraps, so the ``code`` set here reaches the client
as ``errors[].extensions.code``. Anything that is NOT a BookshelfError
gets masked (see graphql/schema.py).
"""

from typing import Optional


class BookshelfError(Exception):
    """Base class for errors that are safe to show to the caller."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def extensions(self) -> dict:
        return {"code": self.code}


class AuthenticationError(BookshelfError):
    """Caller is not logged in, or supplied bad credentials."""

    code = "UNAUTHENTICATED"


class ValidationError(BookshelfError):
    """Bad user input. ``field`` names the offending argument."""

    code = "BAD_USER_INPUT"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    @property
    def extensions(self) -> dict:
        ext = {"code": self.code}
        if self.field:
            ext["field"] = self.field
        return ext
