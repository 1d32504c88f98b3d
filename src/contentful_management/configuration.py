"""Client configuration.

Options are merged over ``DEFAULT_CONFIGURATION`` once, when the client is
constructed, and the resulting record is frozen.

Example:
    ```python
    config = Configuration.merge({"secure": False, "api_url": "local.test"})
    config.base_url  # "http://local.test/spaces"
    ```
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from contentful_management.transport.proxy import ProxyParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Configuration:
    """Immutable client configuration.

    Attributes:
        api_url: API host, without scheme.
        api_version: Version embedded in the ``Content-Type`` media type.
        secure: Use ``https`` when True, ``http`` otherwise.
        default_locale: Locale used when reading dynamic entry fields.
        gzip_encoded: Ask for gzip-compressed responses.
        logger: Optional sink for request and response logs.
        log_level: Level applied to ``logger`` when the client is built.
        raise_errors: Raise API errors instead of returning them.
        dynamic_entries: Space ids whose content types are loaded at startup.
        proxy_host: Proxy host, or None for a direct connection.
        proxy_port: Proxy port.
        proxy_username: Proxy username.
        proxy_password: Proxy password.
        timeout: Request timeout in seconds for the default transport.
        max_rate_limit_retries: Retries on 429 for the default transport (0 disables).
        max_rate_limit_wait: Longest single wait, in seconds, before a rate-limit retry.
    """

    api_url: str = "api.contentful.com"
    api_version: str = "1"
    secure: bool = True
    default_locale: str = "en-US"
    gzip_encoded: bool = False
    logger: logging.Logger | None = None
    log_level: int = logging.INFO
    raise_errors: bool = False
    dynamic_entries: tuple[str, ...] = ()
    proxy_host: str | None = None
    proxy_port: int | None = None
    proxy_username: str | None = None
    proxy_password: str | None = None
    timeout: float = 30.0
    max_rate_limit_retries: int = 0
    max_rate_limit_wait: float = 60.0

    def __post_init__(self) -> None:
        dynamic_entries = self.dynamic_entries or ()
        if isinstance(dynamic_entries, str):
            dynamic_entries = (dynamic_entries,)
        object.__setattr__(self, "dynamic_entries", tuple(dynamic_entries))
        # logger=False means no logger
        if not self.logger:
            object.__setattr__(self, "logger", None)

    @classmethod
    def option_names(cls) -> frozenset[str]:
        """Names of all recognised options."""
        return frozenset(f.name for f in fields(cls))

    @classmethod
    def merge(cls, options: Mapping[str, Any] | None = None, **overrides: Any) -> "Configuration":
        """Merge user options over the defaults.

        Unrecognised keys are ignored.

        Args:
            options: Mapping of option name to value.
            **overrides: Same as ``options``; wins over it on duplicate keys.

        Returns:
            New Configuration
        """
        merged = {**(options or {}), **overrides}
        known = cls.option_names()

        ignored = sorted(key for key in merged if key not in known)
        if ignored:
            logger.debug(f"Ignoring unknown configuration options: {', '.join(ignored)}")

        return cls(**{key: value for key, value in merged.items() if key in known})

    def to_dict(self) -> dict[str, Any]:
        """Plain dict of every option."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @property
    def protocol(self) -> str:
        return "https" if self.secure else "http"

    @property
    def base_url(self) -> str:
        """Base URL every relative request path is appended to."""
        return f"{self.protocol}://{self.api_url}/spaces"

    @property
    def proxy(self) -> ProxyParameters:
        return ProxyParameters(
            host=self.proxy_host,
            port=self.proxy_port,
            username=self.proxy_username,
            password=self.proxy_password,
        )


DEFAULT_CONFIGURATION = Configuration()
