from collections.abc import Mapping
from typing import Any

from zep_client.config import DEFAULT_BASE_URL
from zep_client.core.caller import Caller, CallParams, decode_error
from zep_client.core.http import join_url, merge_headers
from zep_client.core.query import query_values
from zep_client.core.request_options import RequestOptions
from zep_client.exceptions import APIError


class ResourceClient:
    """Base class for the per-resource clients.

    Holds the client-level base URL, default headers and the shared caller.
    """

    def __init__(self, *, base_url: str | None, caller: Caller, headers: Mapping[str, str]):
        self._base_url = base_url
        self._caller = caller
        self._headers = dict(headers)

    def _resolve_base_url(self, options: RequestOptions) -> str:
        return options.base_url or self._base_url or DEFAULT_BASE_URL

    async def _request(
        self,
        method: str,
        path: str,
        *,
        request_options: RequestOptions | None = None,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        response_type: Any = None,
        errors: Mapping[int, type[APIError]] | None = None,
    ) -> Any:
        options = request_options or RequestOptions()

        url = join_url(self._resolve_base_url(options), path)
        query = query_values({**(params or {}), **options.additional_query_parameters})
        headers = merge_headers(self._headers, options.to_headers())

        return await self._caller.call(
            CallParams(
                url=url,
                method=method,
                headers=headers,
                params=query,
                json=json,
                max_attempts=options.max_attempts,
                http_client=options.http_client,
                timeout=options.timeout,
                response_type=response_type,
                error_decoder=decode_error(errors),
            )
        )
