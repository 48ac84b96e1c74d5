from zep_client.core.http import encode_path_param
from zep_client.core.request_options import RequestOptions
from zep_client.exceptions import BadRequestError, InternalServerError, NotFoundError
from zep_client.models import (
    AddMemoryRequest,
    CreateSessionRequest,
    Memory,
    Message,
    MessageListResponse,
    Session,
    SuccessResponse,
    UpdateSessionRequest,
)
from zep_client.resources.base import ResourceClient


def _session_path(session_id: str, *rest: str) -> str:
    return "/".join(["sessions", encode_path_param(session_id), *rest])


class MemoryClient(ResourceClient):
    """
    Sessions and their memory.

    Covers session management (get, add, update, list) and the memory
    attached to a session (get, add, delete, list messages).
    """

    async def get_session(
        self, session_id: str, request_options: RequestOptions | None = None
    ) -> Session:
        """
        Get a session by ID.

        Raises:
            NotFoundError: If the session does not exist
        """
        return await self._request(
            "GET",
            _session_path(session_id),
            request_options=request_options,
            response_type=Session,
            errors={404: NotFoundError, 500: InternalServerError},
        )

    async def add_session(
        self,
        request: CreateSessionRequest,
        request_options: RequestOptions | None = None,
    ) -> Session:
        """
        Create a new session.

        Args:
            request: Session ID plus optional user ID and metadata
            request_options: Optional per-call overrides

        Returns:
            The created session
        """
        return await self._request(
            "POST",
            "sessions",
            request_options=request_options,
            json=request.model_dump(exclude_none=True, mode="json"),
            response_type=Session,
            errors={400: BadRequestError, 500: InternalServerError},
        )

    async def update_session(
        self,
        session_id: str,
        request: UpdateSessionRequest,
        request_options: RequestOptions | None = None,
    ) -> Session:
        """Update a session's metadata."""
        return await self._request(
            "PATCH",
            _session_path(session_id),
            request_options=request_options,
            json=request.model_dump(exclude_none=True, mode="json"),
            response_type=Session,
            errors={
                400: BadRequestError,
                404: NotFoundError,
                500: InternalServerError,
            },
        )

    async def list_sessions(
        self,
        limit: int | None = None,
        cursor: int | None = None,
        request_options: RequestOptions | None = None,
    ) -> list[Session]:
        """
        List sessions.

        Args:
            limit: Maximum number of sessions to return
            cursor: Cursor for pagination
            request_options: Optional per-call overrides
        """
        sessions = await self._request(
            "GET",
            "sessions",
            request_options=request_options,
            params={"limit": limit, "cursor": cursor},
            response_type=list[Session],
            errors={400: BadRequestError, 500: InternalServerError},
        )
        return sessions or []

    async def get(
        self,
        session_id: str,
        lastn: int | None = None,
        request_options: RequestOptions | None = None,
    ) -> Memory:
        """
        Get memory for a session: recent messages, summary and facts.

        Args:
            session_id: The session to read
            lastn: Number of most recent messages to return
            request_options: Optional per-call overrides

        Raises:
            NotFoundError: If the session does not exist
        """
        return await self._request(
            "GET",
            _session_path(session_id, "memory"),
            request_options=request_options,
            params={"lastn": lastn},
            response_type=Memory,
            errors={404: NotFoundError, 500: InternalServerError},
        )

    async def add(
        self,
        session_id: str,
        messages: AddMemoryRequest | list[Message],
        request_options: RequestOptions | None = None,
    ) -> SuccessResponse:
        """
        Add messages to a session's memory.

        Example:
            ```python
            await client.memory.add(
                "session-1",
                [Message(role_type=RoleType.USER, content="Book me a flight")],
            )
            ```
        """
        if not isinstance(messages, AddMemoryRequest):
            messages = AddMemoryRequest(messages=list(messages))

        return await self._request(
            "POST",
            _session_path(session_id, "memory"),
            request_options=request_options,
            json=messages.model_dump(exclude_none=True, mode="json"),
            response_type=SuccessResponse,
            errors={500: InternalServerError},
        )

    async def delete(
        self, session_id: str, request_options: RequestOptions | None = None
    ) -> SuccessResponse:
        """Delete the memory of a session. The session itself is kept."""
        return await self._request(
            "DELETE",
            _session_path(session_id, "memory"),
            request_options=request_options,
            response_type=SuccessResponse,
            errors={404: NotFoundError, 500: InternalServerError},
        )

    async def get_session_messages(
        self,
        session_id: str,
        limit: int | None = None,
        cursor: int | None = None,
        request_options: RequestOptions | None = None,
    ) -> MessageListResponse:
        """Page through all messages of a session."""
        return await self._request(
            "GET",
            _session_path(session_id, "messages"),
            request_options=request_options,
            params={"limit": limit, "cursor": cursor},
            response_type=MessageListResponse,
            errors={404: NotFoundError, 500: InternalServerError},
        )
