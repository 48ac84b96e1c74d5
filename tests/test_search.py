"""
Tests for session memory search.
"""

import pytest

from tests.conftest import TEST_BASE_URL, json_response, request_json
from zep_client.exceptions import InternalServerError, NotFoundError
from zep_client.models import (
    MemorySearchPayload,
    MemorySearchResult,
    SearchScope,
    SearchType,
)


@pytest.mark.asyncio
async def test_search_sends_limit_as_query_and_rest_as_body(
    make_zep_client, sent_requests
):
    client = make_zep_client(
        lambda request: json_response(
            [
                {
                    "message": {"role_type": "user", "content": "Flying to Lisbon"},
                    "dist": 0.12,
                },
                {"summary": {"content": "Travel planning"}, "dist": 0.3},
            ]
        )
    )

    results = await client.search.get(
        "s1",
        MemorySearchPayload(
            text="travel",
            metadata={"where": {"jsonpath": "$[*] ? (@.foo == \"bar\")"}},
            search_scope=SearchScope.MESSAGES,
            search_type=SearchType.MMR,
            mmr_lambda=0.5,
            limit=2,
        ),
    )

    request = sent_requests[0]
    assert request.method == "POST"
    assert str(request.url) == f"{TEST_BASE_URL}/sessions/s1/search?limit=2"
    assert request_json(request) == {
        "text": "travel",
        "metadata": {"where": {"jsonpath": "$[*] ? (@.foo == \"bar\")"}},
        "search_scope": "messages",
        "search_type": "mmr",
        "mmr_lambda": 0.5,
    }
    assert all(isinstance(r, MemorySearchResult) for r in results)
    assert results[0].message.content == "Flying to Lisbon"
    assert results[0].dist == 0.12
    assert results[1].summary.content == "Travel planning"


@pytest.mark.asyncio
async def test_search_without_limit_has_no_query(make_zep_client, sent_requests):
    client = make_zep_client(lambda request: json_response([]))

    results = await client.search.get("s1", MemorySearchPayload(text="travel"))

    assert sent_requests[0].url.query == b""
    assert results == []


@pytest.mark.asyncio
async def test_search_null_body_is_empty_list(make_zep_client):
    client = make_zep_client(lambda request: json_response(None))

    assert await client.search.get("s1", MemorySearchPayload(text="x")) == []


@pytest.mark.asyncio
async def test_search_unknown_session(make_zep_client):
    client = make_zep_client(
        lambda request: json_response({"message": "session not found"}, 404)
    )

    with pytest.raises(NotFoundError) as exc_info:
        await client.search.get("missing", MemorySearchPayload(text="x"))

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "session not found"


@pytest.mark.asyncio
async def test_search_server_error(make_zep_client):
    client = make_zep_client(
        lambda request: json_response({"message": "embedding failed"}, 500),
        max_attempts=1,
    )

    with pytest.raises(InternalServerError) as exc_info:
        await client.search.get("s1", MemorySearchPayload(text="x"))

    assert exc_info.value.message == "embedding failed"
