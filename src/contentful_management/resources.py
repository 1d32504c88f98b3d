"""Domain objects built from API responses.

Every resource keeps the decoded JSON in ``raw`` and exposes the common
``sys`` metadata as properties.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class Resource:
    """Generic API resource."""

    raw: dict[str, Any]

    @property
    def sys(self) -> dict[str, Any]:
        return self.raw.get("sys") or {}

    @property
    def id(self) -> str | None:
        return self.sys.get("id")

    @property
    def type(self) -> str | None:
        return self.sys.get("type")

    @property
    def version(self) -> int | None:
        """Version to send back in ``X-Contentful-Version`` on update."""
        return self.sys.get("version")

    @property
    def created_at(self) -> str | None:
        return self.sys.get("createdAt")

    @property
    def updated_at(self) -> str | None:
        return self.sys.get("updatedAt")

    @property
    def space_id(self) -> str | None:
        return _link_id(self.sys.get("space"))


class NamedResource(Resource):
    """Resource with a top-level ``name``."""

    @property
    def name(self) -> str | None:
        return self.raw.get("name")


class Space(NamedResource):
    """A space."""

    @property
    def space_id(self) -> str | None:
        return self.id


class ContentType(NamedResource):
    """Schema shared by the entries of one type."""

    @property
    def display_field(self) -> str | None:
        return self.raw.get("displayField")

    @property
    def description(self) -> str | None:
        return self.raw.get("description")

    @property
    def fields(self) -> list[dict[str, Any]]:
        return self.raw.get("fields") or []


class Entry(Resource):
    """An entry, with fields in their localized form ``{field: {locale: value}}``."""

    @property
    def content_type_id(self) -> str | None:
        return _link_id(self.sys.get("contentType"))

    @property
    def fields(self) -> dict[str, dict[str, Any]]:
        return self.raw.setdefault("fields", {})


class Asset(Entry):
    """A media asset."""

    @property
    def content_type_id(self) -> str | None:
        return None


class Locale(NamedResource):
    @property
    def code(self) -> str | None:
        return self.raw.get("code")

    @property
    def default(self) -> bool:
        return bool(self.raw.get("default"))


class Role(NamedResource):
    pass


class Webhook(NamedResource):
    @property
    def url(self) -> str | None:
        return self.raw.get("url")


class ApiKey(NamedResource):
    @property
    def access_token(self) -> str | None:
        return self.raw.get("accessToken")


RESOURCE_CLASSES: dict[str, type[Resource]] = {
    "Space": Space,
    "ContentType": ContentType,
    "Entry": Entry,
    "Asset": Asset,
    "Locale": Locale,
    "Role": Role,
    "WebhookDefinition": Webhook,
    "ApiKey": ApiKey,
}


@dataclass
class Collection(Generic[T]):
    """One page of an ``Array`` response."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    skip: int = 0
    limit: int = 100

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> T:
        return self.items[index]

    @property
    def has_more(self) -> bool:
        """Check if there are more results."""
        return self.skip + len(self.items) < self.total


def _link_id(link: Any) -> str | None:
    if not isinstance(link, dict):
        return None
    return (link.get("sys") or {}).get("id")
