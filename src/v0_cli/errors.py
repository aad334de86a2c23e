"""SDK error types."""

from __future__ import annotations


class V0SDKError(RuntimeError):
    """Base SDK error."""


class APIUnavailableError(V0SDKError):
    """Platform API could not be reached."""


class APIRequestError(APIUnavailableError):
    """Platform API returned a structured HTTP error response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: object | None = None,
        error_code: str | None = None,
        body: object | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
        self.error_code = error_code
        self.body = body


class SDKTimeoutError(V0SDKError):
    """Timed out waiting for platform state."""
