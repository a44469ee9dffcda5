"""Shared pytest fixtures."""

import base64
import json
from collections.abc import Iterator
from typing import Any
from uuid import UUID

import httpx
import pytest
from fastapi.testclient import TestClient

from notesweb.app import App
from notesweb.config import Config
from notesweb.web.server import create_fastapi_app

API_BASE_URL = "http://notes-api.test:3123/api"

SESSION_ID = UUID("11111111-1111-4111-8111-111111111111")
USER_ID = UUID("87654321-4321-8765-4321-876543218765")
NOTE_ID = UUID("12345678-1234-5678-1234-567812345678")


def make_token(header: dict[str, Any] | None = None, *, session_id: UUID = SESSION_ID, user_id: UUID = USER_ID) -> str:
    """Build a compact JWE-shaped token whose header carries the session claims."""
    if header is None:
        header = {
            "alg": "A256GCMKW",
            "enc": "A256GCM",
            "typ": "JWT",
            "session_id": str(session_id),
            "user_id": str(user_id),
        }
    segment = base64.urlsafe_b64encode(json.dumps(header).encode()).rstrip(b"=").decode()
    return f"{segment}.ZW5jcnlwdGVkLWtleQ.aXY.Y2lwaGVydGV4dA.dGFn"


class FakeBackend:
    """In-memory stand-in for the notes API, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], tuple[int, Any]] = {}

    def on(self, method: str, path: str, status_code: int = 200, json: Any = None) -> None:
        """Register a response; a path ending in `*` matches any suffix."""
        self._routes[(method, f"/api{path}")] = (status_code, json)

    def _match(self, request: httpx.Request) -> tuple[int, Any] | None:
        path = request.url.path
        if (request.method, path) in self._routes:
            return self._routes[(request.method, path)]
        for (method, pattern), route in self._routes.items():
            if method == request.method and pattern.endswith("*") and path.startswith(pattern[:-1]):
                return route
        return None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._match(request)
        if route is None:
            return httpx.Response(404)
        status_code, body = route
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == f"/api{path}"]


@pytest.fixture
def config():
    """Debug config so session cookies round-trip over plain http in tests."""
    return Config(api_base_url=API_BASE_URL, debug=True)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(config, backend) -> Iterator[TestClient]:
    """Test client for the web app wired to the fake notes API."""
    app = create_fastapi_app(App(config, transport=backend.transport), config)
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


@pytest.fixture
def session_token():
    return make_token()


@pytest.fixture
def signed_in_client(client, session_token):
    """Test client carrying a valid-looking session cookie."""
    client.cookies.set("sessionToken", session_token)
    client.cookies.set("userId", str(USER_ID))
    return client
