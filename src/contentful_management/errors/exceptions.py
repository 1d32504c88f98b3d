"""Structured exceptions for API errors.

Error values are exception instances. Depending on ``raise_errors`` the client
either returns them as ``response.object`` or raises them.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from contentful_management.errors.models import ErrorDetail


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
        detail: "ErrorDetail | None" = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response
        self.detail = detail

    @property
    def error_id(self) -> str | None:
        """Error identifier from the payload, e.g. ``"NotFound"``."""
        return self.detail.id if self.detail else None

    @property
    def request_id(self) -> str | None:
        return self.detail.request_id if self.detail else None


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized (missing or invalid access token)."""

    pass


class AccessDeniedError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class VersionMismatchError(ConflictError):
    """409 Conflict caused by a stale ``X-Contentful-Version``."""

    pass


class ValidationError(ClientError):
    """422 Unprocessable Entity (validation errors)."""

    def __init__(self, message: str, validation_errors: list[dict] | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.validation_errors = validation_errors if validation_errors is not None else []


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(APIError):
    """5xx server errors."""

    pass


class ServiceUnavailableError(ServerError):
    """503 Service Unavailable."""

    pass


class UnparsableJSONError(APIError):
    """Response body could not be decoded as JSON."""

    pass
