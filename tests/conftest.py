from __future__ import annotations

from typing import Any

import httpx
import pytest
import pytest_asyncio

from revenuecat import RevenueCatClient, disable_tracing
from revenuecat.core.connection import disconnect_all


class FakeApi:
    """In-memory stand-in for the RevenueCat API, served through httpx.MockTransport.

    Responses are queued per (method, path); the last one queued for a route
    keeps being served once the others are used up.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[Any]] = {}

    def add(self, method: str, path: str, *responses: Any) -> None:
        self._routes.setdefault((method, path), []).extend(responses)

    def add_json(self, method: str, path: str, *bodies: Any, status: int = 200) -> None:
        self.add(method, path, *(httpx.Response(status, json=body) for body in bodies))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(
                404,
                json={"object": "error", "type": "resource_missing", "message": "No route"},
            )
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        # Fresh copy so a repeated response is never sent twice
        return httpx.Response(
            response.status_code, headers=response.headers, content=response.content
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def params(self, index: int) -> httpx.QueryParams:
        return self.requests[index].url.params


@pytest.fixture(autouse=True)
def _no_env_api_key(monkeypatch):
    """Keep a developer's REVENUECAT_* environment out of the tests."""
    for name in ("REVENUECAT_API_KEY", "REVENUECAT_BASE_URL", "REVENUECAT_MAX_PAGES"):
        monkeypatch.delenv(name, raising=False)


@pytest_asyncio.fixture(autouse=True)
async def _reset_state():
    """Close registered clients and reset observability between tests."""
    yield
    await disconnect_all()
    disable_tracing()


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest_asyncio.fixture
async def client(api: FakeApi):
    client = RevenueCatClient("sk_test_123", transport=api.transport)
    yield client
    await client.aclose()
