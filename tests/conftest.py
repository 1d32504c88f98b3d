"""Pytest configuration and shared fixtures for contentful-management tests."""

import httpx
import pytest


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents a developer's real token from leaking into tests.
    """
    import os

    test_prefixes = ("TEST_", "CONTENTFUL_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


class StubTransport:
    """In-memory transport recording every call.

    Responses are looked up by ``(method, url)``; unknown calls get ``default``.
    """

    def __init__(self, routes=None, default=None):
        self.routes = dict(routes or {})
        self.default = default or httpx.Response(200, json={"sys": {"type": "Space", "id": "default"}})
        self.calls = []

    def send(self, method, url, query, headers, proxy):
        self.calls.append({"method": method, "url": url, "query": query, "headers": headers, "proxy": proxy})
        response = self.routes.get((method, url), self.default)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def stub_transport():
    return StubTransport()


@pytest.fixture
def make_client(stub_transport):
    """Build a client wired to ``stub_transport``."""
    from contentful_management import Client

    def _make(access_token="test-token", **options):
        return Client(access_token, transport=stub_transport, **options)

    return _make
