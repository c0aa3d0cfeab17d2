from __future__ import annotations

from typing import Callable

Listener = Callable[["AuthState"], None]


class AuthState:
    """Bearer and refresh token shared by every endpoint wrapper of one client."""

    def __init__(self, token: str | None = None, refresh_token: str | None = None):
        self._token = token
        self._refresh_token = refresh_token
        self._listeners: list[Listener] = []

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def refresh_token(self) -> str | None:
        return self._refresh_token

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def set_token(self, token: str) -> None:
        self._token = token
        self._notify()

    def clear_token(self) -> None:
        self._token = None
        self._notify()

    def set_refresh_token(self, token: str) -> None:
        self._refresh_token = token
        self._notify()

    def clear_refresh_token(self) -> None:
        self._refresh_token = None
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
