from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, NoReturn

import typer
from rendevo_client import RendevoAPIError, RendevoClient, RendevoClientError
from rendevo_client.config_types import DEFAULT_TIMEOUT_MS, ClientConfig

from . import console
from .config import normalize_base_url


def make_client(base_url: str, *, timeout_ms: int | None = None) -> RendevoClient:
    normalized = normalize_base_url(base_url)
    if not normalized:
        console.err("Base URL is required (--base-url or RENDEVO_BASE_URL).")
        raise typer.Exit(code=2)
    return RendevoClient(ClientConfig(base_url=normalized, timeout_ms=timeout_ms or DEFAULT_TIMEOUT_MS))


def exit_on_error(action: str, exc: RendevoClientError) -> NoReturn:
    if isinstance(exc, RendevoAPIError):
        if exc.status_code in (401, 403):
            console.err(f"{action} failed: unauthorized ({exc.status_code}): {exc}")
        else:
            console.err(f"{action} failed ({exc.status_code}): {exc}")
    else:
        console.err(f"{action} failed: {exc}")
    raise typer.Exit(code=2)


@asynccontextmanager
async def session(client: RendevoClient, email: str, password: str) -> AsyncIterator[RendevoClient]:
    """Log in, yield the authenticated client, log out again.

    Tokens live only for the duration of one command.
    """
    auth = await client.auth.login({"email": email, "password": password})
    try:
        yield client
    finally:
        try:
            await client.auth.logout({"refreshToken": auth["refresh_token"]})
        except RendevoClientError as exc:
            console.warn(f"Logout failed: {exc}")
