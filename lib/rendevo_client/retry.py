from __future__ import annotations

from dataclasses import dataclass

from .config_types import RetryMode
from .errors import NetworkError, RendevoAPIError

MAX_ATTEMPTS = 3
BASE_DELAY_S = 1.0


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = MAX_ATTEMPTS
    base_delay_s: float = BASE_DELAY_S

    @classmethod
    def for_mode(cls, mode: RetryMode) -> RetryPolicy:
        if mode == "disabled":
            return cls(max_attempts=1)
        return cls()

    def is_retryable(self, exc: BaseException) -> bool:
        # 4xx means the request itself is wrong; only server faults and
        # connectivity failures are worth another attempt.
        if isinstance(exc, RendevoAPIError):
            return exc.status_code >= 500
        return isinstance(exc, NetworkError)

    def should_retry(self, exc: BaseException, attempt: int) -> bool:
        """``attempt`` is the 0-based index of the attempt that just failed."""
        if attempt >= self.max_attempts - 1:
            return False
        return self.is_retryable(exc)

    def delay_for(self, attempt: int) -> float:
        return (2 ** attempt) * self.base_delay_s
