"""Interpreted API responses."""

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from contentful_management.errors import APIError
from contentful_management.resources import Collection

if TYPE_CHECKING:
    from contentful_management.builder import ResourceBuilder
    from contentful_management.request import Request


class ResultKind(enum.Enum):
    SUCCESS = "success"
    COLLECTION = "collection"
    ERROR = "error"


@dataclass(frozen=True)
class Response:
    """Result of one API call.

    ``kind`` is decided once, when the response is built. A success status
    with an error payload is still an ``ERROR``.

    Attributes:
        kind: Which variant ``object`` is
        object: Resource (or None for an empty body), Collection, or APIError
        status: HTTP status code
        raw: The transport response
        request: The request this response answers
    """

    kind: ResultKind
    object: Any
    status: int
    raw: httpx.Response
    request: "Request"

    @classmethod
    def from_raw(cls, raw: httpx.Response, request: "Request", builder: "ResourceBuilder") -> "Response":
        """Build the domain object with ``builder`` and classify it."""
        obj = builder.build(raw, request)

        if isinstance(obj, APIError):
            kind = ResultKind.ERROR
        elif isinstance(obj, Collection):
            kind = ResultKind.COLLECTION
        else:
            kind = ResultKind.SUCCESS

        return cls(kind=kind, object=obj, status=raw.status_code, raw=raw, request=request)

    @property
    def raw_body(self) -> str:
        return self.raw.text

    @property
    def is_error(self) -> bool:
        return self.kind is ResultKind.ERROR

    @property
    def error(self) -> APIError | None:
        return self.object if self.kind is ResultKind.ERROR else None

    def raise_for_error(self) -> "Response":
        """Raise the error value, if any; otherwise return self."""
        if self.kind is ResultKind.ERROR:
            raise self.object
        return self
