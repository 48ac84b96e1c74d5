"""
Tests for user endpoints.
"""

import pytest

from tests.conftest import TEST_BASE_URL, json_response, request_json
from zep_client.exceptions import BadRequestError, NotFoundError
from zep_client.models import CreateUserRequest, UpdateUserRequest, User


USER = {
    "user_id": "u1",
    "uuid": "8b5f0a2c-1c1e-4d58-9a53-2f1c3e7d9a10",
    "email": "jane@example.com",
    "first_name": "Jane",
    "metadata": {"plan": "pro"},
    "session_count": 3,
}


class TestUsers:
    @pytest.mark.asyncio
    async def test_add_user(self, make_zep_client, sent_requests):
        client = make_zep_client(lambda request: json_response(USER))

        user = await client.user.add(
            CreateUserRequest(user_id="u1", email="jane@example.com", first_name="Jane")
        )

        request = sent_requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{TEST_BASE_URL}/users"
        assert request_json(request) == {
            "user_id": "u1",
            "email": "jane@example.com",
            "first_name": "Jane",
        }
        assert isinstance(user, User)
        assert user.session_count == 3

    @pytest.mark.asyncio
    async def test_add_user_bad_request(self, make_zep_client):
        client = make_zep_client(
            lambda request: json_response({"message": "user_id is required"}, 400)
        )

        with pytest.raises(BadRequestError) as exc_info:
            await client.user.add(CreateUserRequest(user_id=""))

        assert exc_info.value.message == "user_id is required"

    @pytest.mark.asyncio
    async def test_get_user(self, make_zep_client, sent_requests):
        client = make_zep_client(lambda request: json_response(USER))

        user = await client.user.get("u1")

        assert str(sent_requests[0].url) == f"{TEST_BASE_URL}/users/u1"
        assert user.email == "jane@example.com"

    @pytest.mark.asyncio
    async def test_get_user_not_found(self, make_zep_client):
        client = make_zep_client(
            lambda request: json_response({"message": "user not found"}, 404)
        )

        with pytest.raises(NotFoundError):
            await client.user.get("nobody")

    @pytest.mark.asyncio
    async def test_update_user_sends_only_set_fields(
        self, make_zep_client, sent_requests
    ):
        client = make_zep_client(lambda request: json_response(USER))

        await client.user.update("u1", UpdateUserRequest(last_name="Doe"))

        request = sent_requests[0]
        assert request.method == "PATCH"
        assert request_json(request) == {"last_name": "Doe"}

    @pytest.mark.asyncio
    async def test_delete_user(self, make_zep_client, sent_requests):
        client = make_zep_client(lambda request: json_response({"message": "deleted"}))

        response = await client.user.delete("u1")

        assert sent_requests[0].method == "DELETE"
        assert str(sent_requests[0].url) == f"{TEST_BASE_URL}/users/u1"
        assert response.message == "deleted"

    @pytest.mark.asyncio
    async def test_list_ordered(self, make_zep_client, sent_requests):
        client = make_zep_client(
            lambda request: json_response(
                {"users": [USER], "total_count": 21, "row_count": 1}
            )
        )

        result = await client.user.list_ordered(page_number=3, page_size=10)

        params = sent_requests[0].url.params
        assert sent_requests[0].url.path == "/api/v2/users-ordered"
        assert params["pageNumber"] == "3"
        assert params["pageSize"] == "10"
        assert result.total_count == 21
        assert result.users[0].user_id == "u1"

    @pytest.mark.asyncio
    async def test_get_sessions(self, make_zep_client, sent_requests):
        client = make_zep_client(
            lambda request: json_response(
                [{"session_id": "s1", "user_id": "u1"}, {"session_id": "s2"}]
            )
        )

        sessions = await client.user.get_sessions("u1")

        assert str(sent_requests[0].url) == f"{TEST_BASE_URL}/users/u1/sessions"
        assert [s.session_id for s in sessions] == ["s1", "s2"]
