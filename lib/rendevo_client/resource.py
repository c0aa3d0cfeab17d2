from __future__ import annotations

from .transport import RequestExecutor


class ApiResource:
    """Base for endpoint groups; token access goes through the shared executor state."""

    def __init__(self, transport: RequestExecutor):
        self._t = transport

    def set_token(self, token: str) -> None:
        self._t.set_token(token)

    def get_token(self) -> str | None:
        return self._t.get_token()

    def clear_token(self) -> None:
        self._t.clear_token()

    def set_refresh_token(self, token: str) -> None:
        self._t.set_refresh_token(token)

    def get_refresh_token(self) -> str | None:
        return self._t.get_refresh_token()

    def clear_refresh_token(self) -> None:
        self._t.clear_refresh_token()
