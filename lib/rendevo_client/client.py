from __future__ import annotations

import httpx

from .auth import AuthAPI
from .auth_state import AuthState
from .config_types import ClientConfig
from .transport import RequestExecutor, Sleep
from .users import UsersAPI


class RendevoClient:
    """Entry point composing the endpoint groups around one token state.

    ``auth`` and ``users`` share a single :class:`RequestExecutor`, so a token set
    by ``auth.login`` is visible to ``users`` without any copying.
    """

    def __init__(
            self,
            cfg: ClientConfig,
            *,
            transport: httpx.AsyncBaseTransport | None = None,
            sleep: Sleep | None = None,
    ):
        self.state = AuthState()
        self._t = RequestExecutor(cfg, state=self.state, transport=transport, sleep=sleep)
        self.auth = AuthAPI(self._t)
        self.users = UsersAPI(self._t)

    @property
    def config(self) -> ClientConfig:
        return self._t.config

    async def aclose(self) -> None:
        await self._t.aclose()

    async def __aenter__(self) -> RendevoClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def set_token(self, token: str) -> None:
        self.state.set_token(token)

    def get_token(self) -> str | None:
        return self.state.token

    def clear_token(self) -> None:
        self.state.clear_token()

    def set_refresh_token(self, token: str) -> None:
        self.state.set_refresh_token(token)

    def get_refresh_token(self) -> str | None:
        return self.state.refresh_token

    def clear_refresh_token(self) -> None:
        self.state.clear_refresh_token()
