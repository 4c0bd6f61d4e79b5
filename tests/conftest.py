"""Shared test fixtures."""

from collections.abc import AsyncGenerator, Callable

import httpx
import pytest

from src.sk_api.client import ApiClient
from src.sk_common.storage import InMemoryKeyValueStore

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
async def make_api_client() -> AsyncGenerator[Callable[..., ApiClient], None]:
    """Build ApiClients backed by httpx.MockTransport; all are closed after the test."""
    clients: list[ApiClient] = []

    def _make(handler: Handler, token: str | None = None) -> ApiClient:
        client = ApiClient(
            "http://test/api",
            timeout=5.0,
            token_provider=lambda: token,
            transport=httpx.MockTransport(handler),
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.aclose()
