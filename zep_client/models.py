from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from zep_client.core.query import QueryPayload


class ZepModel(BaseModel):
    """Base for API models; unknown response fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RoleType(str, Enum):
    """Enum for message role types with string values"""

    NO_ROLE = "norole"
    SYSTEM = "system"
    ASSISTANT = "assistant"
    USER = "user"
    FUNCTION = "function"
    TOOL = "tool"


class SearchScope(str, Enum):
    """What a memory search runs over"""

    MESSAGES = "messages"
    SUMMARY = "summary"


class SearchType(str, Enum):
    """Ranking used by a memory search"""

    SIMILARITY = "similarity"
    MMR = "mmr"


class ApiErrorBody(ZepModel):
    """Structured error body returned by the API"""

    message: str | None = None


class SuccessResponse(ZepModel):
    """Generic acknowledgement"""

    message: str | None = None


# === Memory ===


class Message(ZepModel):
    """A message in a session"""

    role: str | None = Field(
        default=None, description="Free-form role, e.g. the speaker's name"
    )
    role_type: RoleType | None = None
    content: str
    uuid: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    metadata: dict[str, Any] | None = None
    token_count: int | None = None


class Summary(ZepModel):
    """A rolling summary of older messages in a session"""

    content: str | None = None
    uuid: str | None = None
    created_at: datetime | None = None
    metadata: dict[str, Any] | None = None
    related_message_uuids: list[str] | None = None
    token_count: int | None = None


class Memory(ZepModel):
    """Messages, summary and facts for a session"""

    messages: list[Message] = Field(default_factory=list)
    summary: Summary | None = None
    metadata: dict[str, Any] | None = None
    facts: list[str] | None = None


class AddMemoryRequest(ZepModel):
    messages: list[Message]


class MessageListResponse(ZepModel):
    messages: list[Message] = Field(default_factory=list)
    total_count: int | None = None
    row_count: int | None = None


# === Sessions ===


class Session(ZepModel):
    session_id: str
    uuid: str | None = None
    user_id: str | None = None
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    ended_at: datetime | None = None


class CreateSessionRequest(ZepModel):
    session_id: str
    user_id: str | None = None
    metadata: dict[str, Any] | None = None


class UpdateSessionRequest(ZepModel):
    metadata: dict[str, Any]


# === Search ===


class MemorySearchPayload(QueryPayload):
    """Search request for a session's memory.

    ``limit`` is sent as a query parameter, everything else as JSON.
    """

    query_fields: ClassVar[frozenset[str]] = frozenset({"limit"})

    text: str | None = None
    metadata: dict[str, Any] | None = None
    search_scope: SearchScope | None = None
    search_type: SearchType | None = None
    mmr_lambda: float | None = None
    limit: int | None = None


class MemorySearchResult(ZepModel):
    message: Message | None = None
    summary: Summary | None = None
    metadata: dict[str, Any] | None = None
    dist: float | None = None


# === Users ===


class User(ZepModel):
    user_id: str
    uuid: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    session_count: int | None = None


class CreateUserRequest(ZepModel):
    user_id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    metadata: dict[str, Any] | None = None


class UpdateUserRequest(ZepModel):
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    metadata: dict[str, Any] | None = None


class UserListResponse(ZepModel):
    users: list[User] = Field(default_factory=list)
    total_count: int | None = None
    row_count: int | None = None
