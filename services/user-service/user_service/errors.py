"""Error taxonomy shared by the service layer and the HTTP boundary."""

from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base class for errors that are safe to surface to API clients.

    Subclasses carry the HTTP status the boundary should answer with; the
    message is returned to the caller verbatim, so it must never contain
    store errors or other internal detail.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailed(ServiceError):
    """Raised when a request body does not satisfy its schema."""

    status_code = 400

    def __init__(self, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__("Validation failed")
        self.errors = errors or []


class Unauthorized(ServiceError):
    """Login rejected; never says whether the email or the password was wrong."""

    status_code = 401


class Unauthenticated(ServiceError):
    """Missing, malformed or expired token, or a token for an unusable account."""

    status_code = 401


class NotFound(ServiceError):
    status_code = 404


class InternalError(ServiceError):
    status_code = 500

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
