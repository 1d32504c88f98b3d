"""Per-resource sub-clients.

Each factory only knows its endpoints: it builds ``Request`` descriptors,
picks the verb and request context, and returns ``response.object``. That is
the resource, a ``Collection``, or the error value when the client does not
raise errors.

Example:
    ```python
    entries = client.entries.all("cfexampleapi", content_type="cat", limit=10)
    entry = client.entries.create("cfexampleapi", "cat", {"name": {"en-US": "Nyan"}})
    client.entries.publish("cfexampleapi", entry.id, entry.version)
    ```
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from contentful_management.headers import RequestContext
from contentful_management.request import Request
from contentful_management.resources import Collection, ContentType

if TYPE_CHECKING:
    from contentful_management.client import Client


class ResourceFactory:
    """CRUD endpoints of one space-scoped resource family."""

    endpoint = ""

    def __init__(self, client: "Client") -> None:
        self.client = client

    def _path(self, space_id: str, *parts: str) -> str:
        return "/" + "/".join([space_id, self.endpoint, *parts])

    def _get(self, path: str, query: Mapping[str, Any] | None = None) -> Any:
        return self.client.get(Request(path, query or {}), context=RequestContext()).object

    def _post(self, path: str, payload: Mapping[str, Any], context: RequestContext | None = None) -> Any:
        return self.client.post(Request(path, payload), context=context or RequestContext()).object

    def _put(self, path: str, payload: Mapping[str, Any] | None = None, context: RequestContext | None = None) -> Any:
        return self.client.put(Request(path, payload or {}), context=context or RequestContext()).object

    def _delete(self, path: str, context: RequestContext | None = None) -> Any:
        return self.client.delete(Request(path), context=context or RequestContext()).object

    def all(self, space_id: str, **query: Any) -> Any:
        """List resources; keyword arguments become query parameters."""
        return self._get(self._path(space_id), query)

    def find(self, space_id: str, resource_id: str) -> Any:
        return self._get(self._path(space_id, resource_id))

    def create(self, space_id: str, attributes: Mapping[str, Any], id: str | None = None) -> Any:
        """Create a resource, with a chosen id when ``id`` is given."""
        if id:
            return self._put(self._path(space_id, id), attributes)
        return self._post(self._path(space_id), attributes)

    def update(self, space_id: str, resource_id: str, attributes: Mapping[str, Any], version: int) -> Any:
        return self._put(self._path(space_id, resource_id), attributes, RequestContext(version=version))

    def delete(self, space_id: str, resource_id: str) -> Any:
        return self._delete(self._path(space_id, resource_id))


class PublishingMixin:
    """Publish state endpoints shared by entries, assets and content types."""

    def publish(self, space_id: str, resource_id: str, version: int) -> Any:
        return self._put(
            self._path(space_id, resource_id, "published"),
            context=RequestContext(version=version, zero_length=True),
        )

    def unpublish(self, space_id: str, resource_id: str, version: int) -> Any:
        return self._delete(
            self._path(space_id, resource_id, "published"),
            context=RequestContext(version=version, zero_length=True),
        )


class ArchivingMixin:
    def archive(self, space_id: str, resource_id: str, version: int) -> Any:
        return self._put(
            self._path(space_id, resource_id, "archived"),
            context=RequestContext(version=version, zero_length=True),
        )

    def unarchive(self, space_id: str, resource_id: str, version: int) -> Any:
        return self._delete(
            self._path(space_id, resource_id, "archived"),
            context=RequestContext(version=version, zero_length=True),
        )


class SpaceFactory:
    """Spaces live at the root of the ``/spaces`` base URL."""

    def __init__(self, client: "Client") -> None:
        self.client = client

    def all(self, **query: Any) -> Any:
        return self.client.get(Request("", query), context=RequestContext()).object

    def find(self, space_id: str) -> Any:
        return self.client.get(Request(f"/{space_id}"), context=RequestContext()).object

    def create(self, attributes: Mapping[str, Any], organization_id: str | None = None) -> Any:
        """Create a space; ``organization_id`` is required for users in several organizations."""
        context = RequestContext(organization_id=organization_id)
        return self.client.post(Request("", attributes), context=context).object

    def update(self, space_id: str, attributes: Mapping[str, Any], version: int) -> Any:
        return self.client.put(Request(f"/{space_id}", attributes), context=RequestContext(version=version)).object

    def delete(self, space_id: str) -> Any:
        return self.client.delete(Request(f"/{space_id}"), context=RequestContext()).object


class ApiKeyFactory(ResourceFactory):
    endpoint = "api_keys"


class AssetFactory(PublishingMixin, ArchivingMixin, ResourceFactory):
    endpoint = "assets"

    def process(self, space_id: str, asset_id: str, locale: str, version: int) -> Any:
        """Ask the API to process the uploaded file of one locale."""
        return self._put(
            self._path(space_id, asset_id, "files", locale, "process"),
            context=RequestContext(version=version, zero_length=True),
        )


class ContentTypeFactory(PublishingMixin, ResourceFactory):
    """Content types; every content type read or written here refreshes the client's dynamic entry cache."""

    endpoint = "content_types"

    def _cache(self, result: Any) -> Any:
        if isinstance(result, Collection):
            self.client.update_dynamic_entry_cache(item for item in result if isinstance(item, ContentType))
        elif isinstance(result, ContentType):
            self.client.update_dynamic_entry_cache([result])
        return result

    def all(self, space_id: str, **query: Any) -> Any:
        return self._cache(super().all(space_id, **query))

    def find(self, space_id: str, resource_id: str) -> Any:
        return self._cache(super().find(space_id, resource_id))

    def create(self, space_id: str, attributes: Mapping[str, Any], id: str | None = None) -> Any:
        return self._cache(super().create(space_id, attributes, id=id))

    def update(self, space_id: str, resource_id: str, attributes: Mapping[str, Any], version: int) -> Any:
        return self._cache(super().update(space_id, resource_id, attributes, version))

    def activate(self, space_id: str, content_type_id: str, version: int) -> Any:
        return self._cache(self.publish(space_id, content_type_id, version))

    def deactivate(self, space_id: str, content_type_id: str, version: int) -> Any:
        return self.unpublish(space_id, content_type_id, version)


class EntryFactory(PublishingMixin, ArchivingMixin, ResourceFactory):
    endpoint = "entries"

    def create(
        self,
        space_id: str,
        content_type_id: str,
        fields: Mapping[str, Any],
        id: str | None = None,
    ) -> Any:
        """Create an entry of ``content_type_id`` with localized ``fields``."""
        payload = {"fields": dict(fields)}
        context = RequestContext(content_type_id=content_type_id)
        if id:
            return self._put(self._path(space_id, id), payload, context)
        return self._post(self._path(space_id), payload, context)


class LocaleFactory(ResourceFactory):
    endpoint = "locales"


class RoleFactory(ResourceFactory):
    endpoint = "roles"


class WebhookFactory(ResourceFactory):
    endpoint = "webhook_definitions"
