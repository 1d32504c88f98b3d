"""Turn decoded API responses into domain objects."""

import logging
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from contentful_management.dynamic_entry import DynamicEntry, DynamicEntryCache
from contentful_management.errors import APIError, UnparsableJSONError, error_for_response
from contentful_management.resources import RESOURCE_CLASSES, Collection, Entry, Resource

if TYPE_CHECKING:
    from contentful_management.request import Request

logger = logging.getLogger(__name__)


class ResourceBuilder(Protocol):
    """Contract for turning a raw response into a resource, collection or error value."""

    def build(self, raw_response: httpx.Response, request: "Request") -> Any: ...


class DefaultResourceBuilder:
    """Build resources from ``sys.type``.

    Entries whose content type is in ``cache`` become ``DynamicEntry``
    instances; the rest become generic resources.

    Args:
        cache: Content-type descriptors used for dynamic entries
        default_locale: Locale used by dynamic entry attribute access
    """

    def __init__(self, cache: DynamicEntryCache | None = None, default_locale: str = "en-US") -> None:
        self.cache = cache if cache is not None else DynamicEntryCache()
        self.default_locale = default_locale

    def build(self, raw_response: httpx.Response, request: "Request") -> Resource | Collection | APIError | None:
        """Build the domain object for one response.

        Args:
            raw_response: Response returned by the transport
            request: Request the response answers

        Returns:
            Resource, Collection, error value, or None for an empty success body
        """
        if not raw_response.content:
            return error_for_response(raw_response, data=None)

        try:
            data = raw_response.json()
        except ValueError as e:
            error = error_for_response(raw_response, data=None)
            if error is not None:
                return error
            logger.debug(f"Unparsable response body for {request.url}: {e}")
            return UnparsableJSONError(
                f"Unable to parse response body: {e}",
                status_code=raw_response.status_code,
                response=raw_response,
            )

        error = error_for_response(raw_response, data=data)
        if error is not None:
            return error
        return self.build_object(data)

    def build_object(self, data: Any) -> Any:
        """Build a resource (or collection) from decoded JSON."""
        if not isinstance(data, dict):
            return data

        sys_type = (data.get("sys") or {}).get("type")

        if sys_type == "Array":
            return Collection(
                items=[self.build_object(item) for item in data.get("items") or []],
                total=data.get("total", 0),
                skip=data.get("skip", 0),
                limit=data.get("limit", 100),
            )

        if sys_type == "Entry":
            entry = Entry(data)
            descriptor = self.cache.get(entry.content_type_id)
            if descriptor is not None:
                return DynamicEntry(data, descriptor=descriptor, default_locale=self.default_locale)
            return entry

        return RESOURCE_CLASSES.get(sys_type, Resource)(data)
