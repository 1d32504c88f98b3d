"""Transport layer: the only part of the package that touches the network.

Modules:
    http: ``HTTPTransport`` protocol and the default ``HttpxTransport``
    proxy: Proxy settings passed with every call
    retry: Opt-in retry on rate-limited (429) responses

Example:
    ```python
    from contentful_management import Client
    from contentful_management.transport import HttpxTransport

    client = Client("<token>", transport=HttpxTransport(max_rate_limit_retries=3))
    ```
"""

from contentful_management.transport.http import HTTPTransport, HttpxTransport
from contentful_management.transport.proxy import ProxyParameters
from contentful_management.transport.retry import RateLimitRetry

__all__ = ["HTTPTransport", "HttpxTransport", "ProxyParameters", "RateLimitRetry"]
