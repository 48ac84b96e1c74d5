import json
from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest

from zep_client import AsyncZep, ZepClientConfig


TEST_BASE_URL = "http://zep.test/api/v2"

Handler = Callable[[httpx.Request], httpx.Response]


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    """Build a JSON response for a mock transport handler."""
    return httpx.Response(status_code, json=payload)


def request_json(request: httpx.Request) -> Any:
    """Decode the JSON body of a captured request."""
    return json.loads(request.content) if request.content else None


@pytest.fixture()
def sent_requests() -> list[httpx.Request]:
    """Requests captured by the mock transport, in order."""
    return []


@pytest.fixture()
async def mock_http_client_factory(
    sent_requests,
) -> AsyncGenerator[Callable[[Handler], httpx.AsyncClient], None]:
    """Create httpx clients backed by a recording mock transport."""
    clients: list[httpx.AsyncClient] = []

    def factory(handler: Handler) -> httpx.AsyncClient:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture()
def make_zep_client(mock_http_client_factory) -> Callable[..., AsyncZep]:
    """Create an AsyncZep whose HTTP traffic goes to ``handler``."""

    def factory(handler: Handler, **config: Any) -> AsyncZep:
        settings = {
            "base_url": TEST_BASE_URL,
            "api_key": "test-key",
            "retry_backoff": 0,
            **config,
        }
        return AsyncZep(
            ZepClientConfig(**settings),
            http_client=mock_http_client_factory(handler),
        )

    return factory
