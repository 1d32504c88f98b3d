"""Contentful Management - Python client for the Contentful Content Management API.

The package is built around one request pipeline:
- Header composition with the versioned media type and request-scoped headers
- Pluggable HTTP transport (httpx by default) with proxy and rate-limit support
- Response interpretation into resources, collections or error values
- A cache of content-type descriptors for typed "dynamic entries"

Example:
    ```python
    from contentful_management import Client

    client = Client("<access token>", raise_errors=True)

    space = client.spaces.find("cfexampleapi")
    for content_type in client.content_types.all("cfexampleapi"):
        print(content_type.id, content_type.name)
    ```
"""

__version__ = "0.1.0"

from contentful_management.client import Client  # noqa: E402
from contentful_management.configuration import DEFAULT_CONFIGURATION, Configuration  # noqa: E402
from contentful_management.dynamic_entry import (  # noqa: E402
    ContentTypeDescriptor,
    DynamicEntry,
    DynamicEntryCache,
    FieldDescriptor,
)
from contentful_management.headers import RequestContext  # noqa: E402
from contentful_management.request import Request  # noqa: E402
from contentful_management.response import Response, ResultKind  # noqa: E402

__all__ = [
    "DEFAULT_CONFIGURATION",
    "Client",
    "Configuration",
    "ContentTypeDescriptor",
    "DynamicEntry",
    "DynamicEntryCache",
    "FieldDescriptor",
    "Request",
    "RequestContext",
    "Response",
    "ResultKind",
    "__version__",
]
