"""Request descriptors handed from resource factories to the client."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class Request:
    """Immutable description of one API call.

    Attributes:
        url: Path relative to the ``/spaces`` base URL, or a full URL when
            ``absolute`` is set.
        query: Query parameters for GET, JSON payload for POST and PUT.
        absolute: Use ``url`` verbatim instead of prefixing the base URL.

    Example:
        ```python
        request = Request(f"/{space_id}/entries", {"limit": 10})
        response = client.get(request)
        ```
    """

    url: str
    query: Mapping[str, Any] = field(default_factory=dict)
    absolute: bool = False

    def __post_init__(self) -> None:
        # Callers keep ownership of their dict; the descriptor holds a read-only copy.
        object.__setattr__(self, "query", MappingProxyType(dict(self.query or {})))

    @classmethod
    def for_absolute_url(cls, url: str, query: Mapping[str, Any] | None = None) -> "Request":
        """Build a request for a URL outside the ``/spaces`` namespace."""
        return cls(url, query or {}, absolute=True)
