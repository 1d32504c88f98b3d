"""Error taxonomy for Content Management API responses."""

from contentful_management.errors.exceptions import (
    AccessDeniedError,
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ServiceUnavailableError,
    UnauthorizedError,
    UnparsableJSONError,
    ValidationError,
    VersionMismatchError,
)
from contentful_management.errors.handler import error_for_response
from contentful_management.errors.models import ErrorDetail

__all__ = [
    "APIError",
    "AccessDeniedError",
    "BadRequestError",
    "ClientError",
    "ConflictError",
    "ErrorDetail",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "ServiceUnavailableError",
    "UnauthorizedError",
    "UnparsableJSONError",
    "ValidationError",
    "VersionMismatchError",
    "error_for_response",
]
