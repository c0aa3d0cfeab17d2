from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .envelope import ApiErrorPayload


class RendevoClientError(Exception):
    """Base client error."""


class RendevoAPIError(RendevoClientError):
    """The API rejected the request with a status code and an error payload."""

    def __init__(self, status_code: int, response: ApiErrorPayload):
        super().__init__(response.get("message") or "An error occurred")
        self.status_code = status_code
        self.response = response

    @property
    def message(self) -> str:
        return str(self)


class NetworkError(RendevoClientError):
    """Transport/network layer error."""


class RequestTimeoutError(RendevoClientError):
    def __init__(self, endpoint: str, timeout_ms: int):
        super().__init__(
            f"Request timeout: The request to {endpoint} took longer than {timeout_ms}ms"
        )
        self.endpoint = endpoint
        self.timeout_ms = timeout_ms


class ResponseFormatError(RendevoClientError):
    """Response body was not JSON or could not be decoded."""

    def __init__(self, message: str, content_type: str | None = None):
        super().__init__(message)
        self.content_type = content_type
