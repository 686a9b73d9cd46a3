"""
Shared fixtures: a recording fake Odoo behind httpx.MockTransport.
"""
import asyncio
import json
from typing import Any, Callable, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.deps import get_odoo_client
from app.main import app
from app.services.odoo import OdooClient
from app.session import session_marker


ODOO_URL = "http://odoo.example.com"
AUTH_PATH = "/web/session/authenticate"
CREATE_PATH = "/web/dataset/call_kw/res.partner/create"
SEARCH_PATH = "/web/dataset/call_kw/res.partner/search_read"


def envelope(result: Any = None, error: Any = None) -> dict:
    """JSON-RPC reply as Odoo shapes it."""
    body = {"jsonrpc": "2.0", "id": None}
    if error is not None:
        body["error"] = error
    else:
        body["result"] = result
    return body


class FakeOdoo:
    """Routes outbound calls by path and records every request it sees."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def reply_json(
        self,
        path: str,
        payload: Any,
        status_code: int = 200,
        headers: Optional[dict] = None,
    ) -> None:
        self._routes[path] = lambda request: httpx.Response(
            status_code, json=payload, headers=headers
        )

    def reply_raw(self, path: str, content: bytes, status_code: int = 200) -> None:
        self._routes[path] = lambda request: httpx.Response(
            status_code,
            content=content,
            headers={"content-type": "application/json"},
        )

    def reply_slowly(self, path: str, payload: Any, delay: float) -> None:
        """Valid envelope, sent one byte at a time with a pause before each."""
        content = json.dumps(payload).encode()

        async def trickle():
            for i in range(len(content)):
                await asyncio.sleep(delay)
                yield content[i:i + 1]

        self._routes[path] = lambda request: httpx.Response(
            200,
            content=trickle(),
            headers={"content-type": "application/json"},
        )

    def fail(self, path: str, exc_type: type[httpx.HTTPError], message: str) -> None:
        def raise_error(request: httpx.Request) -> httpx.Response:
            raise exc_type(message, request=request)
        self._routes[path] = raise_error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": "no route"})
        return route(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, path: Optional[str] = None) -> list[httpx.Request]:
        if path is None:
            return list(self.requests)
        return [r for r in self.requests if r.url.path == path]

    @staticmethod
    def body_of(request: httpx.Request) -> dict:
        return json.loads(request.content)


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at the fake upstream."""
    return Settings(
        ODOO_URL=ODOO_URL + "/",
        ODOO_DATABASE="testdb",
        ODOO_USERNAME="proxy@example.com",
        ODOO_PASSWORD="s3cret",
        UPSTREAM_TIMEOUT_SECONDS=10.0,
        CONTACTS_FETCH_LIMIT=20,
    )


@pytest.fixture
def odoo() -> FakeOdoo:
    return FakeOdoo()


@pytest.fixture(autouse=True)
def reset_session_marker():
    session_marker.clear()
    yield
    session_marker.clear()


@pytest.fixture
def client(odoo, test_settings):
    """Test client whose upstream calls land on the fake Odoo."""

    async def override_odoo_client():
        async with OdooClient(test_settings, transport=odoo.transport()) as upstream:
            yield upstream

    app.dependency_overrides[get_odoo_client] = override_odoo_client
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()
