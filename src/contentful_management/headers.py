"""Header composition for Content Management API calls."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from contentful_management import __version__

if TYPE_CHECKING:
    from contentful_management.configuration import Configuration

USER_AGENT = f"contentful-management.py/{__version__}"

ORGANIZATION_HEADER = "X-Contentful-Organization"
VERSION_HEADER = "X-Contentful-Version"
CONTENT_TYPE_HEADER = "X-Contentful-Content-Type"


@dataclass(frozen=True)
class RequestContext:
    """Per-call values that only affect the headers of a single request.

    Attributes:
        organization_id: Sent as ``X-Contentful-Organization`` (space creation).
        version: Sent as ``X-Contentful-Version`` for optimistic locking.
        content_type_id: Sent as ``X-Contentful-Content-Type`` (entry creation).
        zero_length: Force ``Content-Length: 0`` for bodyless PUT/DELETE calls.
    """

    organization_id: str | None = None
    version: int | str | None = None
    content_type_id: str | None = None
    zero_length: bool = False


EMPTY_CONTEXT = RequestContext()


def media_type(api_version: str) -> str:
    """Versioned media type sent as ``Content-Type``."""
    return f"application/vnd.contentful.management.v{api_version}+json"


def compose_headers(
    access_token: str | None,
    configuration: "Configuration",
    context: RequestContext = EMPTY_CONTEXT,
) -> dict[str, str]:
    """Build the header set for one outbound call.

    Headers are added in a fixed order and composition has no side effects, so
    the same inputs always produce the same headers.

    Args:
        access_token: Bearer token. A missing token is sent empty and left
            for the API to reject.
        configuration: Client configuration (API version, gzip).
        context: Request-scoped values for this call.

    Returns:
        Ordered mapping of header names to values
    """
    headers = {
        "User-Agent": USER_AGENT,
        "Authorization": f"Bearer {access_token or ''}",
        "Content-Type": media_type(configuration.api_version),
    }

    if context.organization_id:
        headers[ORGANIZATION_HEADER] = context.organization_id
    if context.version is not None:
        headers[VERSION_HEADER] = str(context.version)
    if context.zero_length:
        headers["Content-Length"] = "0"
    if context.content_type_id:
        headers[CONTENT_TYPE_HEADER] = context.content_type_id
    if configuration.gzip_encoded:
        headers["Accept-Encoding"] = "gzip"

    return headers


def masked(headers: dict[str, str]) -> dict[str, str]:
    """Copy of ``headers`` safe for logging."""
    if "Authorization" not in headers:
        return dict(headers)
    return {**headers, "Authorization": "Bearer ***"}
