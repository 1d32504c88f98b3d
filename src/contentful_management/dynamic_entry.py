"""Typed entries driven by content-type descriptors.

A ``ContentTypeDescriptor`` records the fields of one content type. The client
keeps descriptors in a ``DynamicEntryCache`` keyed by content-type id, and the
resource builder wraps entries of a known type in a ``DynamicEntry``.

Example:
    ```python
    client.register_dynamic_entry("blogPost", descriptor)

    entry = client.entries.find(space_id, "hello-world")
    entry.title  # value of the "title" field in the default locale
    entry.validate()  # [] when the fields match the descriptor
    ```
"""

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from contentful_management.resources import ContentType, Entry

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case(name: str) -> str:
    """``"publishDate"`` -> ``"publish_date"``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def _is_link(value: Any) -> bool:
    return isinstance(value, dict) and (value.get("sys") or {}).get("type") == "Link"


def _is_location(value: Any) -> bool:
    return isinstance(value, dict) and "lat" in value and "lon" in value


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


TYPE_CHECKS = {
    "Symbol": lambda value: isinstance(value, str),
    "Text": lambda value: isinstance(value, str),
    "Date": lambda value: isinstance(value, str),
    "Integer": _is_integer,
    "Number": _is_number,
    "Boolean": lambda value: isinstance(value, bool),
    "Location": _is_location,
    "Object": lambda value: isinstance(value, dict),
    "RichText": lambda value: isinstance(value, dict),
    "Link": _is_link,
    "Array": lambda value: isinstance(value, list),
}


@dataclass(frozen=True)
class FieldDescriptor:
    """One field of a content type."""

    id: str
    name: str = ""
    type: str = "Symbol"
    localized: bool = False
    required: bool = False
    disabled: bool = False
    link_type: str | None = None
    items: dict[str, Any] | None = None

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> "FieldDescriptor":
        return cls(
            id=data["id"],
            name=data.get("name") or data["id"],
            type=data.get("type") or "Symbol",
            localized=bool(data.get("localized")),
            required=bool(data.get("required")),
            disabled=bool(data.get("disabled")),
            link_type=data.get("linkType"),
            items=data.get("items"),
        )

    @property
    def alias(self) -> str:
        return snake_case(self.id)

    def check(self, value: Any) -> str | None:
        """Describe why ``value`` does not fit this field, or None if it does."""
        if value is None:
            return None

        check = TYPE_CHECKS.get(self.type)
        if check is not None and not check(value):
            return f"expected {self.type}, got {type(value).__name__}"

        if self.type == "Array" and self.items:
            item_type = self.items.get("type")
            item_check = TYPE_CHECKS.get(item_type)
            if item_check is not None:
                for index, item in enumerate(value):
                    if not item_check(item):
                        return f"item {index}: expected {item_type}, got {type(item).__name__}"
        return None


@dataclass(frozen=True)
class ContentTypeDescriptor:
    """Field layout of one content type."""

    id: str
    name: str = ""
    display_field: str | None = None
    fields: tuple[FieldDescriptor, ...] = ()

    @classmethod
    def from_content_type(cls, content_type: ContentType | dict[str, Any]) -> "ContentTypeDescriptor":
        """Build from a ``ContentType`` resource or its raw JSON."""
        if isinstance(content_type, dict):
            content_type = ContentType(content_type)
        if not content_type.id:
            raise ValueError("Content type has no sys.id")

        return cls(
            id=content_type.id,
            name=content_type.name or content_type.id,
            display_field=content_type.display_field,
            fields=tuple(FieldDescriptor.from_data(item) for item in content_type.fields),
        )

    def field(self, key: str) -> FieldDescriptor | None:
        """Look up a field by id or by its snake_case alias."""
        for descriptor in self.fields:
            if key in (descriptor.id, descriptor.alias):
                return descriptor
        return None

    @property
    def field_ids(self) -> list[str]:
        return [descriptor.id for descriptor in self.fields]


@dataclass(frozen=True)
class FieldProblem:
    """A field value that does not match its descriptor."""

    field_id: str
    locale: str | None
    message: str

    def __str__(self) -> str:
        where = f"{self.field_id}[{self.locale}]" if self.locale else self.field_id
        return f"{where}: {self.message}"


@dataclass
class DynamicEntry(Entry):
    """An entry whose fields are described by a ``ContentTypeDescriptor``.

    Fields can be read as attributes, by id (``entry.publishDate``) or by
    snake_case alias (``entry.publish_date``), in ``default_locale``. Fields
    named like an entry attribute (``id``, ``fields``, ``version``...) are
    only reachable through ``get``.
    """

    descriptor: ContentTypeDescriptor = field(default_factory=lambda: ContentTypeDescriptor(id=""))
    default_locale: str = "en-US"

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not regular attributes.
        descriptor = self.__dict__.get("descriptor")
        if name.startswith("_") or descriptor is None:
            raise AttributeError(name)

        field_descriptor = descriptor.field(name)
        if field_descriptor is None:
            raise AttributeError(f"{type(self).__name__} '{descriptor.id}' has no field '{name}'")
        return self.get(field_descriptor.id)

    def _resolve(self, key: str) -> str:
        field_descriptor = self.descriptor.field(key)
        if field_descriptor is None:
            raise KeyError(f"Unknown field '{key}' for content type '{self.descriptor.id}'")
        return field_descriptor.id

    def get(self, key: str, locale: str | None = None) -> Any:
        """Value of a field in ``locale`` (default locale when omitted)."""
        field_id = self._resolve(key)
        return (self.fields.get(field_id) or {}).get(locale or self.default_locale)

    def set(self, key: str, value: Any, locale: str | None = None) -> None:
        """Set a field value in ``locale``; the change is local until saved."""
        field_id = self._resolve(key)
        self.fields.setdefault(field_id, {})[locale or self.default_locale] = value

    def fields_for(self, locale: str | None = None) -> dict[str, Any]:
        """Flat ``{field_id: value}`` for one locale."""
        locale = locale or self.default_locale
        return {
            field_id: values[locale]
            for field_id, values in self.fields.items()
            if isinstance(values, dict) and locale in values
        }

    def validate(self) -> list[FieldProblem]:
        """Check field values against the descriptor."""
        problems = []
        known = set(self.descriptor.field_ids)

        for field_id, values in self.fields.items():
            if field_id not in known:
                problems.append(FieldProblem(field_id, None, "unknown field"))
                continue
            if not isinstance(values, dict):
                problems.append(FieldProblem(field_id, None, "expected a mapping of locale to value"))
                continue

            field_descriptor = self.descriptor.field(field_id)
            for locale, value in values.items():
                message = field_descriptor.check(value)
                if message:
                    problems.append(FieldProblem(field_id, locale, message))

        for field_descriptor in self.descriptor.fields:
            if not field_descriptor.required or field_descriptor.disabled:
                continue
            if self.get(field_descriptor.id) is None:
                problems.append(FieldProblem(field_descriptor.id, self.default_locale, "required field is missing"))

        return problems

    @property
    def is_valid(self) -> bool:
        return not self.validate()


class DynamicEntryCache:
    """Content-type id -> ``ContentTypeDescriptor``.

    Keys are case-sensitive. A missing key means "use a generic ``Entry``",
    never an error. Entries are only replaced, never evicted.
    """

    def __init__(self) -> None:
        self._descriptors: dict[str, ContentTypeDescriptor] = {}

    def register(self, key: str, descriptor: ContentTypeDescriptor) -> None:
        """Insert or overwrite the descriptor for ``key``."""
        self._descriptors[str(key)] = descriptor

    def get(self, key: str | None) -> ContentTypeDescriptor | None:
        if key is None:
            return None
        return self._descriptors.get(str(key))

    lookup = get

    def update(self, content_types: Iterable[ContentType | dict[str, Any]]) -> list[str]:
        """Register one descriptor per content type.

        Returns:
            Ids of the registered content types
        """
        registered = []
        for content_type in content_types:
            descriptor = ContentTypeDescriptor.from_content_type(content_type)
            self.register(descriptor.id, descriptor)
            registered.append(descriptor.id)

        if registered:
            logger.debug(f"Registered dynamic entries: {', '.join(registered)}")
        return registered

    def keys(self) -> list[str]:
        return list(self._descriptors)

    def clear(self) -> None:
        self._descriptors.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._descriptors

    def __iter__(self) -> Iterator[str]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __getitem__(self, key: str) -> ContentTypeDescriptor:
        return self._descriptors[key]
