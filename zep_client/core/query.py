"""
Query-string marshaling for request payloads.
"""

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel


class QueryPayload(BaseModel):
    """A request model whose fields are split between query string and body.

    Subclasses list the fields that travel in the query string in
    ``query_fields``; every other field is sent as JSON.
    """

    query_fields: ClassVar[frozenset[str]] = frozenset()


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime | date):
        return value.isoformat()
    return str(value)


def query_values(params: Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """Encode a mapping as query-string pairs.

    ``None`` values are dropped and sequences expand into repeated keys,
    so ``{"ids": ["a", "b"]}`` becomes ``ids=a&ids=b``.
    """
    if not params:
        return []

    values: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, Sequence) and not isinstance(value, str | bytes):
            values.extend((key, _format_value(item)) for item in value if item is not None)
        else:
            values.append((key, _format_value(value)))
    return values


def split_payload(
    payload: BaseModel | None,
) -> tuple[dict[str, Any], dict[str, Any] | None]:
    """Split a request model into ``(query, body)``.

    Returns a ``None`` body when there is no payload at all.
    """
    if payload is None:
        return {}, None

    fields = getattr(payload, "query_fields", frozenset())
    query = {
        name: getattr(payload, name)
        for name in fields
        if getattr(payload, name, None) is not None
    }
    body = payload.model_dump(exclude_none=True, mode="json", exclude=set(fields))
    return query, body
