"""Rate-limit retry transport.

The Content Management API answers ``429 Too Many Requests`` when a token
exceeds its rate limit and tells the caller how long to wait through the
``X-Contentful-RateLimit-Reset`` header. ``RateLimitRetry`` wraps an httpx
transport and replays the request after that delay.

Only 429 responses are retried. Server errors and network failures are
returned or raised unchanged.

## Example

```python
import httpx

from contentful_management.transport.retry import RateLimitRetry

transport = RateLimitRetry(
    wrapped_transport=httpx.HTTPTransport(),
    max_retries=3,
    max_backoff=60,
)

with httpx.Client(transport=transport) as client:
    response = client.get("https://api.contentful.com/spaces")
```
"""

import logging
import time
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

import httpx

logger = logging.getLogger(__name__)

RATE_LIMIT_RESET_HEADER = "X-Contentful-RateLimit-Reset"


class RateLimitRetry(httpx.BaseTransport):
    """Retry transport that waits out 429 responses.

    All methods are retried: a rate-limited request was rejected before the
    API acted on it.

    Args:
        wrapped_transport: The underlying transport to wrap
        max_retries: Maximum number of retry attempts (default: 1)
        backoff_factor: Multiplier for exponential backoff (default: 1.0)
        max_backoff: Maximum wait before a retry in seconds (default: 60)
        sleep: Function used to wait (default: time.sleep)

    Example:
        ```python
        transport = RateLimitRetry(
            wrapped_transport=httpx.HTTPTransport(),
            max_retries=5,
        )
        ```
    """

    def __init__(
        self,
        *,
        wrapped_transport: httpx.BaseTransport,
        max_retries: int = 1,
        backoff_factor: float = 1.0,
        max_backoff: float = 60.0,
        sleep=time.sleep,
    ) -> None:
        self._wrapped_transport = wrapped_transport
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self.max_backoff = max_backoff
        self._sleep = sleep

    def __enter__(self):
        """Enter context, delegating to wrapped transport."""
        self._wrapped_transport.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context, delegating to wrapped transport."""
        return self._wrapped_transport.__exit__(exc_type, exc_val, exc_tb)

    def close(self) -> None:
        self._wrapped_transport.close()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """Send the request, retrying while the API reports a rate limit.

        Args:
            request: The HTTP request to send

        Returns:
            HTTP response (the last 429 once retries are exhausted)
        """
        retries = 0

        while True:
            response = self._wrapped_transport.handle_request(request)

            if response.status_code != 429 or retries >= self.max_retries:
                return response

            retries += 1
            delay = self._parse_retry_after(response)
            if delay is None:
                delay = self._calculate_backoff_delay(retries)

            logger.warning(
                f"Request {request.method} {request.url} was rate limited, "
                f"retrying in {delay}s (attempt {retries}/{self.max_retries})"
            )

            # Release the connection before replaying the request
            response.close()
            self._sleep(delay)

    def _parse_retry_after(self, response: httpx.Response) -> float | None:
        """Read the wait time from the rate-limit headers.

        ``X-Contentful-RateLimit-Reset`` holds seconds. ``Retry-After`` is also
        accepted, as seconds or as an HTTP-date.

        Args:
            response: HTTP response with optional rate-limit headers

        Returns:
            Delay in seconds (capped at max_backoff), or None if absent or invalid
        """
        value = response.headers.get(RATE_LIMIT_RESET_HEADER) or response.headers.get("Retry-After")
        if not value:
            return None

        # Try parsing as integer (delay-seconds format)
        try:
            delay = int(value)
            # Protect against negative values
            if delay < 0:
                return None
            return float(min(delay, self.max_backoff))
        except ValueError:
            pass

        # Try parsing as HTTP-date format
        try:
            retry_date = parsedate_to_datetime(value)
            delay = (retry_date - datetime.now(UTC)).total_seconds()

            # Protect against negative delays (clock skew)
            if delay < 0:
                return None

            return float(min(delay, self.max_backoff))
        except (ValueError, TypeError):
            return None

    def _calculate_backoff_delay(self, retry_number: int) -> float:
        """Exponential backoff used when the API sends no reset header.

        Uses formula: min(backoff_factor * (2 ** (retry_number - 1)), max_backoff)

        Args:
            retry_number: Current retry attempt (1-indexed)

        Returns:
            Delay in seconds (capped at max_backoff)
        """
        delay = self.backoff_factor * (2 ** (retry_number - 1))
        return min(delay, self.max_backoff)
