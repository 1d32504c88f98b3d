"""HTTP transport adapter.

The client talks to the network only through an ``HTTPTransport``: anything
with a ``send(method, url, query, headers, proxy)`` method returning an
``httpx.Response``. ``HttpxTransport`` is the default implementation.
"""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from contentful_management.transport.proxy import ProxyParameters
from contentful_management.transport.retry import RateLimitRetry

logger = logging.getLogger(__name__)

NO_PROXY = ProxyParameters()


class HTTPTransport(Protocol):
    """Contract between the client and the network layer."""

    def send(
        self,
        method: str,
        url: str,
        query: Mapping[str, Any],
        headers: Mapping[str, str],
        proxy: ProxyParameters,
    ) -> httpx.Response: ...


class HttpxTransport:
    """Send API calls with ``httpx``.

    GET parameters go into the query string; for POST and PUT the same mapping
    is the JSON body. One ``httpx.Client`` is kept per proxy setting.

    Args:
        timeout: Request timeout in seconds
        max_rate_limit_retries: Wrap the connection in ``RateLimitRetry`` when > 0
        max_rate_limit_wait: Longest wait before a rate-limit retry, in seconds
        wrapped_transport: Replace the network transport (``httpx.MockTransport``
            in tests). Proxy settings are not applied to a replaced transport.

    Example:
        ```python
        transport = HttpxTransport(timeout=10, max_rate_limit_retries=2)
        response = transport.send(
            "GET",
            "https://api.contentful.com/spaces",
            {},
            {"Authorization": "Bearer <token>"},
            ProxyParameters(),
        )
        ```
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        max_rate_limit_retries: int = 0,
        max_rate_limit_wait: float = 60.0,
        wrapped_transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.max_rate_limit_retries = max_rate_limit_retries
        self.max_rate_limit_wait = max_rate_limit_wait
        self._wrapped_transport = wrapped_transport
        self._clients: dict[ProxyParameters, httpx.Client] = {}

    def send(
        self,
        method: str,
        url: str,
        query: Mapping[str, Any],
        headers: Mapping[str, str],
        proxy: ProxyParameters = NO_PROXY,
    ) -> httpx.Response:
        """Perform one HTTP call.

        Network errors (``httpx.HTTPError``) propagate unchanged.

        Args:
            method: GET, POST, PUT or DELETE
            url: Absolute URL
            query: Query parameters (GET) or JSON body (POST, PUT)
            headers: Headers to send
            proxy: Proxy settings

        Returns:
            The response, with its body read
        """
        method = method.upper()
        client = self._client_for(proxy)
        kwargs: dict[str, Any] = {"headers": dict(headers)}

        if method == "GET":
            kwargs["params"] = _query_params(query)
        elif method in ("POST", "PUT") and query:
            # httpx keeps the explicit vendor Content-Type over its json default
            kwargs["json"] = dict(query)

        return client.request(method, url, **kwargs)

    def close(self) -> None:
        for client in self._clients.values():
            client.close()
        self._clients.clear()

    def _client_for(self, proxy: ProxyParameters) -> httpx.Client:
        client = self._clients.get(proxy)
        if client is None:
            client = httpx.Client(transport=self._build_transport(proxy), timeout=self.timeout)
            self._clients[proxy] = client
        return client

    def _build_transport(self, proxy: ProxyParameters) -> httpx.BaseTransport:
        if self._wrapped_transport is not None:
            transport = self._wrapped_transport
        else:
            if proxy.enabled:
                logger.debug(f"Using proxy {proxy.host}:{proxy.port}")
            transport = httpx.HTTPTransport(proxy=proxy.url)

        if self.max_rate_limit_retries > 0:
            transport = RateLimitRetry(
                wrapped_transport=transport,
                max_retries=self.max_rate_limit_retries,
                max_backoff=self.max_rate_limit_wait,
            )
        return transport


def _query_params(query: Mapping[str, Any]) -> dict[str, Any]:
    """Render query values the way the API expects them."""
    params = {}
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            value = ",".join(str(item) for item in value)
        params[key] = value
    return params
