"""
Compatibility client for self-hosted Zep servers on the v1 API.

Unlike ``AsyncZep`` this client works with raw ``httpx`` requests: it checks
the server's health and version once, then maps response status codes of
requests you build yourself to typed errors.
"""

from typing import TYPE_CHECKING, Any

import httpx
import semver


if TYPE_CHECKING:
    from typing_extensions import Self

from zep_client.core.http import join_url
from zep_client.exceptions import (
    APIError,
    AuthenticationError,
    NotFoundError,
    ZepError,
)
from zep_client.logging import get_logger


logger = get_logger(__name__)

API_BASE_PATH = "/api/v1"
HEALTH_CHECK_PATH = "/healthz"
VERSION_HEADER = "X-Zep-Version"
SERVER_ERROR_MESSAGE = (
    "Failed to connect to Zep server. Please check that the server is running, "
    "the API URL is correct, and no other process is using the same port"
)
MIN_SERVER_VERSION = "0.16.0"
MIN_SERVER_WARNING_MESSAGE = (
    "You are using an incompatible Zep server version. Please upgrade to "
    f"{MIN_SERVER_VERSION} or later."
)
DEFAULT_REQUEST_TIMEOUT = 30  # seconds


def parse_version(version: str) -> semver.Version:
    """Parse a server version, tolerating a ``v`` prefix and partial versions.

    Raises:
        ValueError: If the string is not a semantic version
    """
    return semver.Version.parse(
        version.strip().removeprefix("v"), optional_minor_and_patch=True
    )


def is_version_greater_or_equal(
    version: str | None, minimum: str = MIN_SERVER_VERSION
) -> bool:
    """Check a version string against a minimum using semver ordering.

    Pre-release versions sort before their release, so ``0.16.0-rc1`` does
    not satisfy a ``0.16.0`` minimum. A missing or unparseable version never
    satisfies the minimum.
    """
    if not version:
        return False
    try:
        return parse_version(version) >= parse_version(minimum)
    except ValueError:
        return False


class ZepClient:
    """
    Client for the v1 API of a self-hosted Zep server.

    Example:
        ```python
        client = await create_legacy_client("http://localhost:8000", api_key)
        request = client.build_request("GET", "/sessions/abc/memory")
        response = await client.handle_request(request, "Session abc not found")
        ```
    """

    def __init__(
        self,
        server_url: str,
        api_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.server_url = server_url.rstrip("/")
        self.headers: dict[str, str] = {}
        if api_key:
            self.headers["Authorization"] = f"Bearer {api_key}"

        self._owns_http_client = http_client is None
        self.client = http_client or httpx.AsyncClient(timeout=DEFAULT_REQUEST_TIMEOUT)

    async def close(self) -> None:
        """Close the underlying HTTP client if this client created it."""
        if self._owns_http_client:
            await self.client.aclose()

    async def __aenter__(self) -> "Self":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def get_full_url(self, endpoint: str) -> str:
        """Join the server URL, the API base path and ``endpoint``."""
        return join_url(self.server_url, API_BASE_PATH, endpoint)

    def build_request(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Request:
        """Build a request for an API endpoint carrying the client headers.

        Extra keyword arguments (``json``, ``params``, ...) go to
        ``httpx.AsyncClient.build_request``.
        """
        headers = {**self.headers, **kwargs.pop("headers", {})}
        return self.client.build_request(
            method, self.get_full_url(endpoint), headers=headers, **kwargs
        )

    async def check_server(self) -> None:
        """
        Check that the server is up and runs a compatible version.

        An outdated or unknown server version only logs a warning.

        Raises:
            ZepError: If the server is unreachable or unhealthy
        """
        health_check_url = self.server_url + HEALTH_CHECK_PATH

        try:
            response = await self.client.get(health_check_url, headers=self.headers)
        except httpx.TransportError as e:
            raise ZepError(f"{SERVER_ERROR_MESSAGE}: {e}") from e

        if response.status_code != 200:
            raise ZepError(SERVER_ERROR_MESSAGE)

        server_version = response.headers.get(VERSION_HEADER)
        if not is_version_greater_or_equal(server_version):
            logger.warning(
                MIN_SERVER_WARNING_MESSAGE,
                server_version=server_version,
                min_version=MIN_SERVER_VERSION,
            )

    async def handle_request(
        self, request: httpx.Request, not_found_message: str
    ) -> httpx.Response:
        """
        Send a request and return the response if it succeeded.

        Raises:
            NotFoundError: If the status code is 404
            AuthenticationError: If the status code is 401
            APIError: For any other non-200 status code
            ZepError: If the server could not be reached
        """
        try:
            response = await self.client.send(request)
        except httpx.TransportError as e:
            raise ZepError(f"{SERVER_ERROR_MESSAGE}: {e}") from e

        if response.status_code == 200:
            return response

        body = response.text
        if response.status_code == 404:
            raise NotFoundError(not_found_message, status_code=404, body=body)
        if response.status_code == 401:
            raise AuthenticationError(
                "Authentication failed.", status_code=401, body=body
            )
        raise APIError(
            f"Got an unexpected status code: {response.status_code}",
            status_code=response.status_code,
            body=body,
        )


async def create_legacy_client(
    server_url: str,
    api_key: str | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> ZepClient:
    """
    Create a legacy client and verify the server it points at.

    Args:
        server_url: Base URL of the Zep server (e.g., 'http://localhost:8000')
        api_key: Optional API key, sent as a bearer token
        http_client: Optional transport to use instead of an owned one

    Returns:
        A ZepClient whose server passed the health check

    Raises:
        ZepError: If the server is unreachable or unhealthy
    """
    client = ZepClient(server_url, api_key=api_key, http_client=http_client)
    try:
        await client.check_server()
    except ZepError:
        await client.close()
        raise
    return client
