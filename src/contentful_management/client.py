"""Client for the Contentful Content Management API.

The client owns the request pipeline: it resolves URLs, composes headers,
hands the call to the transport, interprets the response and applies the
``raise_errors`` policy. Resource-specific endpoints live in the factories
exposed as properties (``client.entries``, ``client.spaces``, ...).

Example:
    ```python
    from contentful_management import Client

    client = Client("<access token>", raise_errors=True, dynamic_entries=["cfexampleapi"])
    cat = client.entries.find("cfexampleapi", "nyancat")
    cat.name  # typed access through the cached "cat" content type
    ```
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from contentful_management import factories
from contentful_management.auth import resolve_access_token
from contentful_management.builder import DefaultResourceBuilder, ResourceBuilder
from contentful_management.configuration import Configuration
from contentful_management.context import current_client, set_current_client
from contentful_management.dynamic_entry import ContentTypeDescriptor, DynamicEntryCache
from contentful_management.errors import APIError
from contentful_management.headers import RequestContext, compose_headers, masked
from contentful_management.request import Request
from contentful_management.resources import ContentType
from contentful_management.response import Response, ResultKind
from contentful_management.transport import HTTPTransport, HttpxTransport, ProxyParameters

logger = logging.getLogger(__name__)

CONTENT_TYPE_PAGE_SIZE = 1000


class Client:
    """Entry point for the management API.

    Request-scoped values (``organization_id``, ``version``,
    ``content_type_id``, ``zero_length``) can be passed per call as a
    ``RequestContext``. Setting them as attributes on the client also works:
    they apply to the next call only and are reset when it finishes, success or
    failure. The attribute form is not safe when several threads share one
    client; pass ``context=`` or use one client per thread instead.

    Args:
        access_token: Management API token. Resolved from the environment
            (``CONTENTFUL_MANAGEMENT_ACCESS_TOKEN``) when omitted.
        configuration: Options mapping or a ready ``Configuration``.
        transport: Network adapter (``HttpxTransport`` by default).
        resource_builder: Response parser (``DefaultResourceBuilder`` by default).
        **options: Configuration options, merged over ``configuration``.
    """

    def __init__(
        self,
        access_token: str | None = None,
        configuration: Configuration | Mapping[str, Any] | None = None,
        *,
        transport: HTTPTransport | None = None,
        resource_builder: ResourceBuilder | None = None,
        **options: Any,
    ) -> None:
        if isinstance(configuration, Configuration):
            configuration = configuration.to_dict()
        self.configuration = Configuration.merge(configuration, **options)

        self.logger = self.configuration.logger
        if self.logger is not None:
            self.logger.setLevel(self.configuration.log_level)

        self.access_token = resolve_access_token(access_token)
        self.transport = transport or HttpxTransport(
            timeout=self.configuration.timeout,
            max_rate_limit_retries=self.configuration.max_rate_limit_retries,
            max_rate_limit_wait=self.configuration.max_rate_limit_wait,
        )
        self.dynamic_entry_cache = DynamicEntryCache()
        self.resource_builder = resource_builder or DefaultResourceBuilder(
            self.dynamic_entry_cache, default_locale=self.configuration.default_locale
        )

        self.clear_request_state()
        set_current_client(self)
        self.update_all_dynamic_entry_cache()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Release connections held by the transport."""
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    @classmethod
    def shared_instance(cls) -> "Client | None":
        """Client most recently constructed in the current thread or task."""
        return current_client()

    # =========================================================================
    # Resource factories
    # =========================================================================

    @property
    def spaces(self) -> factories.SpaceFactory:
        return factories.SpaceFactory(self)

    @property
    def api_keys(self) -> factories.ApiKeyFactory:
        return factories.ApiKeyFactory(self)

    @property
    def assets(self) -> factories.AssetFactory:
        return factories.AssetFactory(self)

    @property
    def content_types(self) -> factories.ContentTypeFactory:
        return factories.ContentTypeFactory(self)

    @property
    def entries(self) -> factories.EntryFactory:
        return factories.EntryFactory(self)

    @property
    def locales(self) -> factories.LocaleFactory:
        return factories.LocaleFactory(self)

    @property
    def roles(self) -> factories.RoleFactory:
        return factories.RoleFactory(self)

    @property
    def webhooks(self) -> factories.WebhookFactory:
        return factories.WebhookFactory(self)

    # =========================================================================
    # Configuration shortcuts
    # =========================================================================

    @property
    def base_url(self) -> str:
        return self.configuration.base_url

    @property
    def api_version(self) -> str:
        return self.configuration.api_version

    @property
    def default_locale(self) -> str:
        return self.configuration.default_locale

    @property
    def proxy_parameters(self) -> ProxyParameters:
        return self.configuration.proxy

    # =========================================================================
    # Dynamic entries
    # =========================================================================

    def update_all_dynamic_entry_cache(self) -> None:
        """Load content types of every space listed in ``dynamic_entries``."""
        for space_id in self.configuration.dynamic_entries:
            self.update_dynamic_entry_cache_for_space(space_id)

    def update_dynamic_entry_cache_for_space(self, space_id: str) -> list[str]:
        """Fetch a space and all of its content types into the cache.

        Raises:
            APIError: If the space or its content types cannot be fetched,
                whatever ``raise_errors`` says.

        Returns:
            Ids of the registered content types
        """
        space = self.spaces.find(space_id)
        if isinstance(space, APIError):
            raise space

        registered = []
        skip = 0
        while True:
            page = self.content_types.all(space_id, limit=CONTENT_TYPE_PAGE_SIZE, skip=skip)
            if isinstance(page, APIError):
                raise page

            # content_types.all has already registered the page
            registered.extend(item.id for item in page if isinstance(item, ContentType))
            skip += len(page)
            if not page.has_more or not len(page):
                break

        logger.debug(f"Loaded {len(registered)} dynamic entries for space {space_id}")
        return registered

    def update_dynamic_entry_cache(self, content_types: Iterable[ContentType | dict[str, Any]]) -> list[str]:
        """Register a descriptor for each content type, keyed by its id."""
        return self.dynamic_entry_cache.update(content_types)

    def register_dynamic_entry(self, key: str, descriptor: ContentTypeDescriptor | ContentType) -> None:
        """Register or replace the descriptor for one content-type id, without any request."""
        if isinstance(descriptor, ContentType):
            descriptor = ContentTypeDescriptor.from_content_type(descriptor)
        self.dynamic_entry_cache.register(key, descriptor)

    # =========================================================================
    # Request execution
    # =========================================================================

    def clear_request_state(self) -> None:
        """Reset the request-scoped attributes."""
        self.content_type_id: str | None = None
        self.version: int | str | None = None
        self.organization_id: str | None = None
        self.zero_length = False

    def _pending_context(self) -> RequestContext:
        return RequestContext(
            organization_id=self.organization_id,
            version=self.version,
            content_type_id=self.content_type_id,
            zero_length=self.zero_length,
        )

    def request_headers(self, context: RequestContext | None = None) -> dict[str, str]:
        """Headers the next call would send."""
        return compose_headers(self.access_token, self.configuration, context or self._pending_context())

    def delete(self, request: Request, context: RequestContext | None = None) -> Response:
        return self.execute_request("DELETE", request, context)

    def get(self, request: Request, context: RequestContext | None = None) -> Response:
        return self.execute_request("GET", request, context)

    def post(self, request: Request, context: RequestContext | None = None) -> Response:
        return self.execute_request("POST", request, context)

    def put(self, request: Request, context: RequestContext | None = None) -> Response:
        return self.execute_request("PUT", request, context)

    def execute_request(self, method: str, request: Request, context: RequestContext | None = None) -> Response:
        """Send one request and interpret the response.

        Args:
            method: HTTP verb
            request: What to call
            context: Request-scoped header values. When omitted, the values
                set as client attributes are used.

        Returns:
            Interpreted response; ``response.object`` is the error value when
            the call failed and ``raise_errors`` is off.

        Raises:
            APIError: On an error response when ``raise_errors`` is on.
            httpx.HTTPError: On network failures, unchanged.
        """
        try:
            if context is None:
                context = self._pending_context()

            url = request.url if request.absolute else self.base_url + request.url
            headers = self.request_headers(context)
            # The API ignores DELETE parameters.
            query = {} if method == "DELETE" else dict(request.query)

            if self.logger is not None:
                self.logger.info(f"Request: {method} {url} query={query} headers={masked(headers)}")

            raw_response = self.transport.send(method, url, query, headers, self.proxy_parameters)

            if self.logger is not None:
                self.logger.debug(f"Response: {raw_response.status_code} {raw_response.text}")
        finally:
            self.clear_request_state()

        response = Response.from_raw(raw_response, request, self.resource_builder)
        if response.kind is ResultKind.ERROR and self.configuration.raise_errors:
            raise response.object
        return response

    def __repr__(self) -> str:
        return f"<Client base_url={self.base_url!r} dynamic_entries={len(self.dynamic_entry_cache)}>"

