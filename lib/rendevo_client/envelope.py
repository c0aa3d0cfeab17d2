from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal, TypedDict


class ApiEnvelope(TypedDict):
    success: bool
    data: Any
    timestamp: str


class ApiErrorPayload(TypedDict):
    success: Literal[False]
    statusCode: int
    timestamp: str
    path: str
    method: str
    message: str


def utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def is_envelope(body: Any) -> bool:
    return isinstance(body, dict) and "success" in body and "data" in body


def is_error_payload(body: Any) -> bool:
    return isinstance(body, dict) and "message" in body and "statusCode" in body


def wrap(body: Any) -> ApiEnvelope:
    return {"success": True, "data": body, "timestamp": utc_timestamp()}


def synthesize_error(status_code: int, body: Any, *, path: str, method: str) -> ApiErrorPayload:
    message = body if isinstance(body, str) and body else "An error occurred"
    return {
        "success": False,
        "statusCode": status_code,
        "timestamp": utc_timestamp(),
        "path": path,
        "method": method,
        "message": message,
    }
