"""Proxy settings passed from the client to the transport."""

from dataclasses import dataclass
from urllib.parse import quote


@dataclass(frozen=True)
class ProxyParameters:
    """Proxy host, port and credentials. All None means no proxy."""

    host: str | None = None
    port: int | None = None
    username: str | None = None
    password: str | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.host)

    @property
    def url(self) -> str | None:
        """Proxy URL in the form httpx expects, or None without a host."""
        if not self.enabled:
            return None

        credentials = ""
        if self.username:
            credentials = quote(self.username, safe="")
            if self.password:
                credentials += f":{quote(self.password, safe='')}"
            credentials += "@"

        port = f":{self.port}" if self.port else ""
        return f"http://{credentials}{self.host}{port}"
