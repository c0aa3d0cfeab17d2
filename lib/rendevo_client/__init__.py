__version__ = "0.1.0"

from .auth_state import AuthState
from .client import RendevoClient
from .config_types import ClientConfig
from .envelope import ApiEnvelope, ApiErrorPayload
from .errors import (
    NetworkError,
    RendevoAPIError,
    RendevoClientError,
    RequestTimeoutError,
    ResponseFormatError,
)
from .models import AuthResponse, Role, UpdateUserDto, User
from .transport import RequestExecutor

__all__ = [
    "RendevoClient",
    "RequestExecutor",
    "ClientConfig",
    "AuthState",
    "ApiEnvelope",
    "ApiErrorPayload",
    "RendevoClientError",
    "RendevoAPIError",
    "NetworkError",
    "RequestTimeoutError",
    "ResponseFormatError",
    "AuthResponse",
    "Role",
    "UpdateUserDto",
    "User",
]
