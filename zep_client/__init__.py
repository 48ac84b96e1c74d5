"""
Zep Client

A Python client for the Zep memory REST API, with a compatibility client for
self-hosted servers on the v1 API.
"""

__version__ = "0.1.0"

from .client import AsyncZep, ZepClientConfig
from .core.request_options import RequestOptions
from .exceptions import (
    APIError,
    AuthenticationError,
    BadRequestError,
    InternalServerError,
    NotFoundError,
    ZepConnectionError,
    ZepError,
)
from .legacy import ZepClient, create_legacy_client


__all__ = [
    # Client classes
    "AsyncZep",
    "ZepClientConfig",
    "RequestOptions",
    "ZepClient",
    "create_legacy_client",
    # Exceptions
    "ZepError",
    "ZepConnectionError",
    "APIError",
    "BadRequestError",
    "AuthenticationError",
    "NotFoundError",
    "InternalServerError",
]
