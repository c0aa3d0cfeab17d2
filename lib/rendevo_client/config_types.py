from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal, Mapping

RetryMode = Literal["default", "disabled"]

DEFAULT_TIMEOUT_MS = 10_000


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    headers: Mapping[str, str] = field(default_factory=dict)
    retries: RetryMode = "default"

    def __post_init__(self) -> None:
        base_url = self.base_url
        if base_url.endswith("/"):
            base_url = base_url[:-1]
        object.__setattr__(self, "base_url", base_url)
        object.__setattr__(self, "timeout_ms", int(self.timeout_ms or DEFAULT_TIMEOUT_MS))
        object.__setattr__(self, "headers", dict(self.headers or {}))
        if self.retries not in ("default", "disabled"):
            raise ValueError(f"retries must be 'default' or 'disabled', got {self.retries!r}")

    def with_timeout(self, timeout_ms: int) -> ClientConfig:
        return replace(self, timeout_ms=timeout_ms)

    def with_headers(self, headers: Mapping[str, str]) -> ClientConfig:
        return replace(self, headers={**self.headers, **headers})
