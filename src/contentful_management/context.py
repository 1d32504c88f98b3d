"""Current-client slot, one per thread or asyncio task.

The most recently constructed ``Client`` in an execution context is stored
here. Nothing inside the package reads it: factories, the resource builder
and dynamic entries are always handed their client explicitly. It exists for
application code that wants "the client" without threading it through.
"""

from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contentful_management.client import Client

_current_client: ContextVar["Client | None"] = ContextVar("contentful_management_client", default=None)


def current_client() -> "Client | None":
    """Client most recently constructed in this context, if any."""
    return _current_client.get()


def set_current_client(client: "Client | None") -> None:
    _current_client.set(client)
