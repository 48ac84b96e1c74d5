"""
Zep API Client

This module provides the async client for the Zep memory REST API.
"""

from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel, Field, field_validator


if TYPE_CHECKING:
    from typing_extensions import Self

from zep_client.config import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_TIMEOUT,
    Settings,
)
from zep_client.config import settings as default_settings
from zep_client.core.caller import Caller
from zep_client.core.request_options import auth_headers
from zep_client.resources import MemoryClient, SearchClient, UserClient


class ZepClientConfig(BaseModel):
    """Configuration for the Zep API Client"""

    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retry_backoff: float = 0.5

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("max_attempts")
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_attempts must be at least 1")
        return v

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ZepClientConfig":
        """Build a config from ``ZEP_*`` environment settings."""
        settings = settings or default_settings
        return cls(
            base_url=settings.api_url,
            api_key=settings.api_key,
            timeout=settings.timeout,
            max_attempts=settings.max_attempts,
            retry_backoff=settings.retry_backoff,
        )


class AsyncZep:
    """
    Client for the Zep REST API.

    Resources are exposed as attributes:
    - ``memory``: sessions and session memory
    - ``search``: memory search within a session
    - ``user``: user management

    Example:
        ```python
        async with AsyncZep(ZepClientConfig(api_key="z_...")) as client:
            memory = await client.memory.get("session-1", lastn=10)
        ```
    """

    def __init__(
        self,
        config: ZepClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the Zep client.

        Args:
            config: Connection details; read from the environment when omitted
            http_client: Optional transport to use instead of an owned one.
                A client passed in here is not closed by ``close()``.
        """
        from zep_client import __version__

        self.config = config or ZepClientConfig.from_settings()
        self._owns_http_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=self.config.timeout)

        self.headers: dict[str, str] = {
            "User-Agent": f"zep-client/{__version__}",
            "X-Client-Version": __version__,
            **self.config.headers,
            **auth_headers(self.config.api_key),
        }
        self.caller = Caller(
            self._client,
            max_attempts=self.config.max_attempts,
            backoff=self.config.retry_backoff,
        )

        resource_args: dict[str, Any] = {
            "base_url": self.config.base_url,
            "caller": self.caller,
            "headers": self.headers,
        }
        self.memory = MemoryClient(**resource_args)
        self.search = SearchClient(**resource_args)
        self.user = UserClient(**resource_args)

    async def close(self) -> None:
        """Close the underlying HTTP client if this client created it."""
        if self._owns_http_client:
            await self._client.aclose()

    async def __aenter__(self) -> "Self":
        """Support using the client as an async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Close the client when exiting the context manager."""
        await self.close()
