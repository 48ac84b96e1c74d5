from zep_client.core.http import encode_path_param
from zep_client.core.query import split_payload
from zep_client.core.request_options import RequestOptions
from zep_client.exceptions import InternalServerError, NotFoundError
from zep_client.models import MemorySearchPayload, MemorySearchResult
from zep_client.resources.base import ResourceClient


class SearchClient(ResourceClient):
    """Memory search within a session."""

    async def get(
        self,
        session_id: str,
        request: MemorySearchPayload,
        request_options: RequestOptions | None = None,
    ) -> list[MemorySearchResult]:
        """
        Search memory messages by session ID and query.

        Args:
            session_id: The session to search in
            request: Search payload; ``limit`` is sent in the query string
            request_options: Optional per-call overrides

        Returns:
            Matching results, closest first

        Raises:
            NotFoundError: If the session does not exist
            InternalServerError: If the server failed to run the search

        Example:
            ```python
            results = await client.search.get(
                "session-1",
                MemorySearchPayload(text="travel plans", limit=5),
            )
            for result in results:
                print(result.dist, result.message.content)
            ```
        """
        query, body = split_payload(request)
        results = await self._request(
            "POST",
            f"sessions/{encode_path_param(session_id)}/search",
            request_options=request_options,
            params=query,
            json=body,
            response_type=list[MemorySearchResult],
            errors={404: NotFoundError, 500: InternalServerError},
        )
        return results or []
