from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping

import httpx

from . import __version__
from .auth_state import AuthState
from .config_types import ClientConfig
from .envelope import ApiEnvelope, is_envelope, is_error_payload, synthesize_error, wrap
from .errors import (
    NetworkError,
    RendevoAPIError,
    RendevoClientError,
    RequestTimeoutError,
    ResponseFormatError,
)
from .retry import RetryPolicy

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class RequestExecutor:
    """Executes API calls: headers, timeout guard, retries and response normalization.

    Every verb method returns the unwrapped ``data`` of the response envelope and
    raises a :class:`RendevoClientError` subclass on failure.
    """

    def __init__(
            self,
            cfg: ClientConfig,
            *,
            state: AuthState | None = None,
            transport: httpx.AsyncBaseTransport | None = None,
            sleep: Sleep | None = None,
    ):
        self._cfg = cfg
        self._state = state if state is not None else AuthState()
        self._retry = RetryPolicy.for_mode(cfg.retries)
        self._sleep = sleep or asyncio.sleep
        self._default_headers: dict[str, str] = {
            "Content-Type": "application/json",
            **cfg.headers,
        }
        # The per-attempt asyncio timeout is the only deadline; httpx's own is off.
        self._client = httpx.AsyncClient(
            timeout=None,
            headers={"User-Agent": f"rendevo-client/{__version__}"},
            follow_redirects=True,
            transport=transport,
        )

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def base_url(self) -> str:
        return self._cfg.base_url

    @property
    def timeout_ms(self) -> int:
        return self._cfg.timeout_ms

    @property
    def default_headers(self) -> dict[str, str]:
        return dict(self._default_headers)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> RequestExecutor:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # --- token state ---
    def set_token(self, token: str) -> None:
        self._state.set_token(token)

    def get_token(self) -> str | None:
        return self._state.token

    def clear_token(self) -> None:
        self._state.clear_token()

    def set_refresh_token(self, token: str) -> None:
        self._state.set_refresh_token(token)

    def get_refresh_token(self) -> str | None:
        return self._state.refresh_token

    def clear_refresh_token(self) -> None:
        self._state.clear_refresh_token()

    # --- verbs ---
    async def get(self, endpoint: str, *, headers: Mapping[str, str] | None = None,
                  timeout_ms: int | None = None) -> Any:
        envelope = await self.request(endpoint, method="GET", headers=headers, timeout_ms=timeout_ms)
        return envelope["data"]

    async def post(self, endpoint: str, body: Any | None = None, *, headers: Mapping[str, str] | None = None,
                   timeout_ms: int | None = None) -> Any:
        envelope = await self.request(endpoint, method="POST", body=body, headers=headers, timeout_ms=timeout_ms)
        return envelope["data"]

    async def patch(self, endpoint: str, body: Any | None = None, *, headers: Mapping[str, str] | None = None,
                    timeout_ms: int | None = None) -> Any:
        envelope = await self.request(endpoint, method="PATCH", body=body, headers=headers, timeout_ms=timeout_ms)
        return envelope["data"]

    async def put(self, endpoint: str, body: Any | None = None, *, headers: Mapping[str, str] | None = None,
                  timeout_ms: int | None = None) -> Any:
        envelope = await self.request(endpoint, method="PUT", body=body, headers=headers, timeout_ms=timeout_ms)
        return envelope["data"]

    async def delete(self, endpoint: str, *, headers: Mapping[str, str] | None = None,
                     timeout_ms: int | None = None) -> Any:
        envelope = await self.request(endpoint, method="DELETE", headers=headers, timeout_ms=timeout_ms)
        return envelope["data"]

    # --- core ---
    async def request(
            self,
            endpoint: str,
            *,
            method: str = "GET",
            body: Any | None = None,
            headers: Mapping[str, str] | None = None,
            timeout_ms: int | None = None,
    ) -> ApiEnvelope:
        last_error: RendevoClientError | None = None
        for attempt in range(self._retry.max_attempts):
            try:
                return await self._execute(endpoint, method, body=body, headers=headers, timeout_ms=timeout_ms)
            except RendevoClientError as exc:
                last_error = exc
                if not self._retry.should_retry(exc, attempt):
                    raise
                delay = self._retry.delay_for(attempt)
                logger.warning(
                    "%s %s failed (%s), retrying in %.0fs (attempt %d/%d)",
                    method, endpoint, exc, delay, attempt + 2, self._retry.max_attempts,
                )
                await self._sleep(delay)

        if last_error is not None:
            raise last_error
        raise RendevoClientError("Request failed after retries")

    def _build_headers(self, overrides: Mapping[str, str] | None) -> dict[str, str]:
        headers = {**self._default_headers, **(overrides or {})}
        token = self._state.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _execute(
            self,
            endpoint: str,
            method: str,
            *,
            body: Any | None,
            headers: Mapping[str, str] | None,
            timeout_ms: int | None,
    ) -> ApiEnvelope:
        url = f"{self._cfg.base_url}{endpoint}"
        # Captured before the first await: a concurrent logout cannot change it mid-request.
        request_headers = self._build_headers(headers)
        effective_timeout = timeout_ms or self._cfg.timeout_ms

        logger.debug("%s %s (timeout=%dms)", method, url, effective_timeout)
        try:
            async with asyncio.timeout(effective_timeout / 1000):
                r = await self._client.request(method, url, json=body, headers=request_headers)
        except TimeoutError as e:
            raise RequestTimeoutError(endpoint, effective_timeout) from e
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(endpoint, effective_timeout) from e
        except httpx.RequestError as e:
            raise NetworkError(
                f"Network error: Unable to reach {self._cfg.base_url}. "
                f"This may be due to CORS policy or network connectivity issues. ({e})"
            ) from e

        logger.debug("%s %s -> %d", method, url, r.status_code)
        return self._decode(r, endpoint, method)

    def _decode(self, r: httpx.Response, endpoint: str, method: str) -> ApiEnvelope:
        content_type = r.headers.get("content-type")
        if not content_type or "application/json" not in content_type.lower():
            raise ResponseFormatError(
                f"Invalid response format: expected JSON but got {content_type or 'unknown'}",
                content_type,
            )

        try:
            data = r.json()
        except ValueError as e:
            raise ResponseFormatError(
                f"Invalid response format: {method} {endpoint} returned malformed JSON",
                content_type,
            ) from e

        if not r.is_success:
            if is_error_payload(data):
                raise RendevoAPIError(r.status_code, data)
            raise RendevoAPIError(
                r.status_code,
                synthesize_error(r.status_code, data, path=endpoint, method=method),
            )

        if isinstance(data, dict) and data.get("success") is False and is_error_payload(data):
            status = data.get("statusCode")
            raise RendevoAPIError(status if isinstance(status, int) else r.status_code, data)

        if is_envelope(data):
            return data
        return wrap(data)
