"""
Shared request execution for every resource client.

The caller sends a request, retries transient failures, decodes a successful
JSON body into the expected type and turns error statuses into exceptions.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError
from tenacity import RetryCallState
from tenacity.asyncio import AsyncRetrying
from tenacity.retry import retry_if_exception_type, retry_if_result
from tenacity.stop import stop_after_attempt
from tenacity.wait import wait_exponential

from zep_client.exceptions import (
    APIError,
    AuthenticationError,
    ZepConnectionError,
)
from zep_client.logging import get_logger
from zep_client.models import ApiErrorBody


logger = get_logger(__name__)

ErrorDecoder = Callable[[int, httpx.Response], Exception]

RETRYABLE_STATUS_CODES = frozenset({408, 409, 429})
MAX_BACKOFF_SECONDS = 8.0

# Declared by every endpoint
DEFAULT_ERRORS: Mapping[int, type[APIError]] = {401: AuthenticationError}


def is_retryable_status(status_code: int) -> bool:
    return status_code in RETRYABLE_STATUS_CODES or status_code >= 500


def decode_error(errors: Mapping[int, type[APIError]] | None = None) -> ErrorDecoder:
    """Build a status-code keyed error decoder.

    A declared status whose body decodes as an API error body produces the
    mapped exception class. Anything else becomes a plain ``APIError``
    carrying the raw body.
    """
    declared = {**DEFAULT_ERRORS, **(errors or {})}

    def decoder(status_code: int, response: httpx.Response) -> Exception:
        raw = response.text
        error_class = declared.get(status_code)
        if error_class is not None:
            try:
                body = ApiErrorBody.model_validate_json(raw)
            except ValidationError:
                body = None
            if body is not None:
                return error_class(
                    body.message or f"HTTP {status_code}",
                    status_code=status_code,
                    body=raw,
                )
        return APIError(raw or f"HTTP {status_code}", status_code=status_code, body=raw)

    return decoder


@dataclass
class CallParams:
    """Everything needed to execute one API call."""

    url: str
    method: str
    headers: Mapping[str, str] | None = None
    params: list[tuple[str, str]] | None = None
    json: Any = None
    max_attempts: int | None = None
    http_client: httpx.AsyncClient | None = None
    timeout: float | None = None
    response_type: Any = None
    error_decoder: ErrorDecoder | None = field(default=None)


class Caller:
    """Executes HTTP requests with retries and response decoding."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        max_attempts: int = 2,
        backoff: float = 0.5,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.http_client = http_client
        self.max_attempts = max_attempts
        self.backoff = backoff

    def _log_retry(self, retry_state: RetryCallState) -> None:
        url, method = retry_state.args[1], retry_state.args[2]
        outcome = retry_state.outcome
        if outcome is not None and outcome.failed:
            reason = repr(outcome.exception())
        elif outcome is not None:
            reason = f"HTTP {outcome.result().status_code}"
        else:
            reason = "unknown"
        logger.warning(
            "Retrying request",
            method=method,
            url=url,
            attempt=retry_state.attempt_number,
            reason=reason,
        )

    async def _send(
        self,
        client: httpx.AsyncClient,
        url: str,
        method: str,
        params: CallParams,
    ) -> httpx.Response:
        timeout = (
            params.timeout if params.timeout is not None else httpx.USE_CLIENT_DEFAULT
        )
        return await client.request(
            method,
            url,
            headers=params.headers,
            params=params.params or None,
            json=params.json,
            timeout=timeout,
        )

    async def execute(self, params: CallParams) -> httpx.Response:
        """Send the request, retrying transient failures.

        Returns the last response whatever its status once attempts run out.

        Only transport errors are retried. Any other request error, such as
        a bad content encoding or too many redirects, fails immediately.

        Raises:
            ZepConnectionError: If the request failed on the final attempt
        """
        client = params.http_client or self.http_client
        max_attempts = params.max_attempts or self.max_attempts

        retrying = AsyncRetrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential(multiplier=self.backoff, max=MAX_BACKOFF_SECONDS),
            retry=(
                retry_if_exception_type(httpx.TransportError)
                | retry_if_result(lambda r: is_retryable_status(r.status_code))
            ),
            before_sleep=self._log_retry,
            # Hand back the last response, or re-raise the last transport error
            retry_error_callback=lambda state: state.outcome.result(),
        )

        try:
            return await retrying(self._send, client, params.url, params.method, params)
        except httpx.RequestError as e:
            logger.error(
                "Request failed",
                method=params.method,
                url=params.url,
                max_attempts=max_attempts,
                error=repr(e),
            )
            raise ZepConnectionError(
                f"Failed to reach {params.url}: {e}"
            ) from e

    async def call(self, params: CallParams) -> Any:
        """Execute the call and decode its result.

        Returns the decoded body, or ``None`` when no response type is
        expected or the body is empty.

        Raises:
            APIError: Or a subclass, for error status codes
            ZepConnectionError: If the server could not be reached
        """
        response = await self.execute(params)

        if response.is_success:
            if params.response_type is None or not response.content:
                return None
            # ValidationError and JSONDecodeError are both ValueErrors
            try:
                data = response.json()
                if data is None:
                    return None
                return TypeAdapter(params.response_type).validate_python(data)
            except ValueError as e:
                raise APIError(
                    f"Failed to decode response body: {e}",
                    status_code=response.status_code,
                    body=response.text,
                ) from e

        decoder = params.error_decoder or decode_error()
        raise decoder(response.status_code, response)
