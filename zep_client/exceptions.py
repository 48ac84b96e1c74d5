"""
Exception classes for the Zep client.
"""


class ZepError(Exception):
    """Base exception for all Zep client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ZepConnectionError(ZepError):
    """Raised when the server cannot be reached after all attempts."""

    pass


class APIError(ZepError):
    """Raised when the server answers with an error status code.

    ``body`` holds the raw response text so callers can inspect payloads
    that did not decode into a structured error.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.status_code}: {self.message}"


class BadRequestError(APIError):
    """Raised on HTTP 400."""

    pass


class AuthenticationError(APIError):
    """Raised when the server rejects the credentials (HTTP 401)."""

    pass


class NotFoundError(APIError):
    """Raised when a requested session, user or memory is not found."""

    pass


class InternalServerError(APIError):
    """Raised on HTTP 500."""

    pass
