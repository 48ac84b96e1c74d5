from collections.abc import Mapping
from urllib.parse import quote

import httpx


def merge_headers(*sources: Mapping[str, str] | None) -> httpx.Headers:
    """Merge header mappings into a new ``httpx.Headers``.

    Later sources win on conflicting (case-insensitive) keys. The inputs are
    never modified.
    """
    merged = httpx.Headers()
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            merged[key] = value
    return merged


def join_url(base_url: str, *segments: str) -> str:
    """Join a base URL and path segments with single slashes."""
    parts = [base_url.rstrip("/")]
    parts.extend(segment.strip("/") for segment in segments if segment)
    return "/".join(parts)


def encode_path_param(value: str) -> str:
    """Escape a value for use as a single path segment."""
    return quote(str(value), safe="")
