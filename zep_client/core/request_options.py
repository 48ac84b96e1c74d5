from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator


def auth_headers(api_key: str | None) -> dict[str, str]:
    """Headers carrying the API key, empty when no key is set."""
    if not api_key:
        return {}
    return {"Authorization": f"Api-Key {api_key}"}


class RequestOptions(BaseModel):
    """Per-call overrides for a single API request.

    Unset fields fall back to the client configuration. ``headers`` are
    merged over the client's default headers rather than replacing them.

    Example:
        ```python
        await client.memory.get(
            "session-1",
            request_options=RequestOptions(max_attempts=5, timeout=60.0),
        )
        ```
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    base_url: str | None = None
    api_key: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    http_client: httpx.AsyncClient | None = None
    max_attempts: int | None = None
    timeout: float | None = None
    additional_query_parameters: dict[str, Any] = Field(default_factory=dict)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        return v.rstrip("/") if v else v

    @field_validator("max_attempts")
    @classmethod
    def validate_max_attempts(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("max_attempts must be at least 1")
        return v

    def to_headers(self) -> dict[str, str]:
        """Headers contributed by these options, auth included."""
        return {**self.headers, **auth_headers(self.api_key)}
