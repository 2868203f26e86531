"""
Request Error Taxonomy

Errors raised by the ledger and the HTTP layer that map directly to a
response status. Anything that is not an ApiError and escapes a handler
becomes a 500 with the exception message as the error body.
"""

from typing import Optional


class ApiError(Exception):
    """Base class for errors with a fixed HTTP status."""
    status_code = 500

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def to_body(self) -> dict[str, str]:
        body = {"error": self.message}
        if self.hint:
            body["hint"] = self.hint
        return body


class InvalidArgument(ApiError):
    """Malformed path parameter or request body."""
    status_code = 400


class Unauthenticated(ApiError):
    """Missing, malformed or rejected bearer credential."""
    status_code = 401


class NotFound(ApiError):
    """
    Document missing or owned by someone else.

    Both cases share one message so callers cannot discover other users' IDs.
    """
    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class ServiceUnavailable(ApiError):
    """Identity provider or database not configured or unreachable."""
    status_code = 503
