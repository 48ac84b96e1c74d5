from zep_client.core.http import encode_path_param
from zep_client.core.request_options import RequestOptions
from zep_client.exceptions import BadRequestError, InternalServerError, NotFoundError
from zep_client.models import (
    CreateUserRequest,
    Session,
    SuccessResponse,
    UpdateUserRequest,
    User,
    UserListResponse,
)
from zep_client.resources.base import ResourceClient


class UserClient(ResourceClient):
    """User management."""

    async def add(
        self, request: CreateUserRequest, request_options: RequestOptions | None = None
    ) -> User:
        """Create a user."""
        return await self._request(
            "POST",
            "users",
            request_options=request_options,
            json=request.model_dump(exclude_none=True, mode="json"),
            response_type=User,
            errors={400: BadRequestError, 500: InternalServerError},
        )

    async def get(
        self, user_id: str, request_options: RequestOptions | None = None
    ) -> User:
        """
        Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        return await self._request(
            "GET",
            f"users/{encode_path_param(user_id)}",
            request_options=request_options,
            response_type=User,
            errors={404: NotFoundError, 500: InternalServerError},
        )

    async def update(
        self,
        user_id: str,
        request: UpdateUserRequest,
        request_options: RequestOptions | None = None,
    ) -> User:
        """Update a user. Only fields set on ``request`` are sent."""
        return await self._request(
            "PATCH",
            f"users/{encode_path_param(user_id)}",
            request_options=request_options,
            json=request.model_dump(exclude_none=True, mode="json"),
            response_type=User,
            errors={
                400: BadRequestError,
                404: NotFoundError,
                500: InternalServerError,
            },
        )

    async def delete(
        self, user_id: str, request_options: RequestOptions | None = None
    ) -> SuccessResponse:
        return await self._request(
            "DELETE",
            f"users/{encode_path_param(user_id)}",
            request_options=request_options,
            response_type=SuccessResponse,
            errors={404: NotFoundError, 500: InternalServerError},
        )

    async def list_ordered(
        self,
        page_number: int | None = None,
        page_size: int | None = None,
        request_options: RequestOptions | None = None,
    ) -> UserListResponse:
        """
        List users ordered by creation date.

        Args:
            page_number: Page number, starting at 1
            page_size: Users per page
            request_options: Optional per-call overrides
        """
        return await self._request(
            "GET",
            "users-ordered",
            request_options=request_options,
            params={"pageNumber": page_number, "pageSize": page_size},
            response_type=UserListResponse,
            errors={400: BadRequestError, 500: InternalServerError},
        )

    async def get_sessions(
        self, user_id: str, request_options: RequestOptions | None = None
    ) -> list[Session]:
        """List all sessions belonging to a user."""
        sessions = await self._request(
            "GET",
            f"users/{encode_path_param(user_id)}/sessions",
            request_options=request_options,
            response_type=list[Session],
            errors={500: InternalServerError},
        )
        return sessions or []
