"""Map API responses to error values."""

from typing import Any

import httpx

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
    ValidationError,
    VersionMismatchError,
)
from contentful_management.errors.models import ErrorDetail

RATE_LIMIT_RESET_HEADER = "x-contentful-ratelimit-reset"

# Error ids from the payload's sys.id take precedence over the status code.
ERROR_ID_MAP: dict[str, type[APIError]] = {
    "BadRequest": BadRequestError,
    "InvalidQuery": BadRequestError,
    "AccessTokenInvalid": UnauthorizedError,
    "AccessDenied": AccessDeniedError,
    "NotFound": NotFoundError,
    "VersionMismatch": VersionMismatchError,
    "Conflict": ConflictError,
    "ValidationFailed": ValidationError,
    "UnknownField": ValidationError,
    "RateLimitExceeded": RateLimitError,
    "ServerError": ServerError,
    "ServiceUnavailable": ServiceUnavailableError,
}

STATUS_CODE_MAP: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: AccessDeniedError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
    503: ServiceUnavailableError,
}

_UNSET: Any = object()


def error_for_response(response: httpx.Response, data: Any = _UNSET) -> APIError | None:
    """Build the error value for a response, if it carries one.

    A response is an error when its body is an API error object (whatever the
    status code) or when its status is not 2xx.

    Args:
        response: HTTP response object
        data: Decoded JSON body, when the caller already parsed it

    Returns:
        APIError subclass instance, or None for a successful response
    """
    if data is _UNSET:
        try:
            data = response.json()
        except (ValueError, TypeError):
            data = None

    detail = ErrorDetail.from_data(data) if ErrorDetail.is_error_payload(data) else None
    if detail is None and response.is_success:
        return None

    status_code = response.status_code
    exc_class = _exception_class(detail, status_code)

    # Build error message
    if detail:
        message = detail.to_exception_message()
    else:
        # Fallback to simple message with response text
        response_text = response.text[:200]
        message = f"HTTP {status_code}: {response_text}" if response_text else f"HTTP {status_code}"

    kwargs: dict[str, Any] = {"status_code": status_code, "response": response, "detail": detail}

    if issubclass(exc_class, RateLimitError):
        kwargs["retry_after"] = _retry_after(response)
    elif issubclass(exc_class, ValidationError):
        kwargs["validation_errors"] = detail.validation_errors if detail else None

    return exc_class(message, **kwargs)


def _exception_class(detail: ErrorDetail | None, status_code: int) -> type[APIError]:
    if detail and detail.id in ERROR_ID_MAP:
        return ERROR_ID_MAP[detail.id]
    if status_code in STATUS_CODE_MAP:
        return STATUS_CODE_MAP[status_code]
    if 400 <= status_code < 500:
        return ClientError
    if 500 <= status_code < 600:
        return ServerError
    return APIError


def _retry_after(response: httpx.Response) -> int | None:
    value = response.headers.get(RATE_LIMIT_RESET_HEADER) or response.headers.get("retry-after")
    if value is None:
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        # If parsing fails, leave as None
        return None
