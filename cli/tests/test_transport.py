from __future__ import annotations

import asyncio

import httpx
import pytest
from rendevo_client import (
    ClientConfig,
    NetworkError,
    RendevoAPIError,
    RendevoClientError,
    RequestExecutor,
    RequestTimeoutError,
    ResponseFormatError,
)

from factories import BASE_URL, api_error, body_of, connect_error, envelope, ok, slow


def test_get_returns_inner_data(api, executor_factory) -> None:
    api.queue(ok({"id": 1, "name": "Test"}))
    executor = executor_factory()

    result = asyncio.run(executor.get("/test"))

    assert result == {"id": 1, "name": "Test"}
    assert api.last.method == "GET"
    assert str(api.last.url) == f"{BASE_URL}/test"


def test_envelope_is_returned_unchanged(api, executor_factory) -> None:
    body = envelope([1, 2, 3])
    api.queue(httpx.Response(200, json=body))

    result = asyncio.run(executor_factory().request("/test"))

    assert result == body


def test_non_envelope_body_is_wrapped(api, executor_factory) -> None:
    api.queue(httpx.Response(200, json={"id": 7}))
    executor = executor_factory()

    wrapped = asyncio.run(executor.request("/plain"))
    assert wrapped["success"] is True
    assert wrapped["data"] == {"id": 7}
    assert wrapped["timestamp"].endswith("Z")

    assert asyncio.run(executor.get("/plain")) == {"id": 7}


def test_list_body_is_wrapped(api, executor_factory) -> None:
    api.queue(httpx.Response(200, json=[{"id": 1}, {"id": 2}]))
    assert asyncio.run(executor_factory().get("/items")) == [{"id": 1}, {"id": 2}]


def test_post_serializes_body(api, executor_factory) -> None:
    api.queue(ok({"id": 1}, status=201))
    payload = {"name": "Test", "value": 123}

    result = asyncio.run(executor_factory().post("/test", payload))

    assert result == {"id": 1}
    assert api.last.method == "POST"
    assert body_of(api.last) == payload
    assert api.last.headers["Content-Type"] == "application/json"


def test_post_without_body_sends_no_content(api, executor_factory) -> None:
    api.queue(ok({"ok": True}))
    asyncio.run(executor_factory().post("/test"))
    assert api.last.content == b""


@pytest.mark.parametrize("verb,method", [("patch", "PATCH"), ("put", "PUT")])
def test_body_verbs(api, executor_factory, verb, method) -> None:
    api.queue(ok({"updated": True}))
    executor = executor_factory()

    result = asyncio.run(getattr(executor, verb)("/test/1", {"name": "Updated"}))

    assert result == {"updated": True}
    assert api.last.method == method
    assert body_of(api.last) == {"name": "Updated"}


def test_delete(api, executor_factory) -> None:
    api.queue(ok(None))
    assert asyncio.run(executor_factory().delete("/test/1")) is None
    assert api.last.method == "DELETE"


def test_authorization_header_follows_token(api, executor_factory) -> None:
    api.queue(ok({}))
    executor = executor_factory()

    executor.set_token("mock-jwt-token-abc123")
    asyncio.run(executor.get("/protected"))
    assert api.last.headers["Authorization"] == "Bearer mock-jwt-token-abc123"

    executor.clear_token()
    asyncio.run(executor.get("/protected"))
    assert "Authorization" not in api.last.headers


def test_per_call_headers_are_merged(api, executor_factory) -> None:
    api.queue(ok({}))
    executor = executor_factory(headers={"X-App": "rendevo"})

    asyncio.run(executor.get("/test", headers={"X-Request-Id": "abc"}))

    assert api.last.headers["X-App"] == "rendevo"
    assert api.last.headers["X-Request-Id"] == "abc"


def test_token_accessors() -> None:
    executor = RequestExecutor(ClientConfig(base_url=BASE_URL))
    assert executor.get_token() is None
    executor.set_token("T1")
    executor.set_refresh_token("R1")
    assert executor.get_token() == "T1"
    assert executor.get_refresh_token() == "R1"
    executor.clear_token()
    assert executor.get_token() is None
    assert executor.get_refresh_token() == "R1"
    executor.clear_refresh_token()
    assert executor.get_refresh_token() is None


def test_api_error_payload_is_kept(api, executor_factory) -> None:
    api.queue(api_error(404, "User not found", path="/users/999"))

    with pytest.raises(RendevoAPIError) as exc:
        asyncio.run(executor_factory().get("/users/999"))

    assert exc.value.status_code == 404
    assert str(exc.value) == "User not found"
    assert exc.value.message == "User not found"
    assert exc.value.response["path"] == "/users/999"


def test_error_without_payload_is_synthesized(api, executor_factory) -> None:
    api.queue(httpx.Response(502, json={"error": "bad gateway"}))

    with pytest.raises(RendevoAPIError) as exc:
        asyncio.run(executor_factory().post("/things", {"a": 1}))

    payload = exc.value.response
    assert exc.value.status_code == 502
    assert payload["success"] is False
    assert payload["statusCode"] == 502
    assert payload["path"] == "/things"
    assert payload["method"] == "POST"
    assert payload["message"] == "An error occurred"


def test_string_error_body_becomes_message(api, executor_factory) -> None:
    api.queue(httpx.Response(400, json="Bad input"))

    with pytest.raises(RendevoAPIError) as exc:
        asyncio.run(executor_factory().get("/things"))

    assert exc.value.status_code == 400
    assert str(exc.value) == "Bad input"


def test_error_shaped_success_body_raises(api, executor_factory) -> None:
    api.queue(
        httpx.Response(
            200,
            json={"success": False, "statusCode": 409, "message": "Conflict", "path": "/x", "method": "GET",
                  "timestamp": "2024-01-01T00:00:00.000Z"},
        )
    )

    with pytest.raises(RendevoAPIError) as exc:
        asyncio.run(executor_factory().get("/x"))

    assert exc.value.status_code == 409
    assert str(exc.value) == "Conflict"


def test_non_json_content_type_is_rejected(api, executor_factory) -> None:
    api.queue(httpx.Response(200, content=b"<html></html>", headers={"content-type": "text/html"}))

    with pytest.raises(ResponseFormatError) as exc:
        asyncio.run(executor_factory().get("/test"))

    assert "text/html" in str(exc.value)
    assert exc.value.content_type == "text/html"


def test_missing_content_type_is_reported_as_unknown(api, executor_factory) -> None:
    api.queue(httpx.Response(204))

    with pytest.raises(ResponseFormatError) as exc:
        asyncio.run(executor_factory().delete("/test/1"))

    assert "unknown" in str(exc.value)


def test_non_json_error_response_is_format_error(api, executor_factory) -> None:
    api.queue(httpx.Response(500, content=b"Internal Server Error", headers={"content-type": "text/plain"}))

    with pytest.raises(ResponseFormatError):
        asyncio.run(executor_factory().get("/test"))


def test_malformed_json_is_format_error(api, executor_factory) -> None:
    api.queue(httpx.Response(200, content=b"{not json", headers={"content-type": "application/json"}))

    with pytest.raises(ResponseFormatError):
        asyncio.run(executor_factory().get("/test"))


def test_timeout_names_endpoint_and_value(api, executor_factory) -> None:
    api.queue(slow(ok({})))

    with pytest.raises(RequestTimeoutError) as exc:
        asyncio.run(executor_factory(timeout_ms=1).get("/slow-endpoint"))

    assert "Request timeout" in str(exc.value)
    assert "/slow-endpoint" in str(exc.value)
    assert "1ms" in str(exc.value)
    assert exc.value.endpoint == "/slow-endpoint"
    assert exc.value.timeout_ms == 1


def test_per_call_timeout_overrides_config(api, executor_factory) -> None:
    api.queue(slow(ok({})))

    with pytest.raises(RequestTimeoutError) as exc:
        asyncio.run(executor_factory(timeout_ms=60000).get("/slow", timeout_ms=5))

    assert exc.value.timeout_ms == 5


def test_httpx_timeout_is_translated(api, executor_factory) -> None:
    def _reply(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    api.queue(_reply)

    with pytest.raises(RequestTimeoutError):
        asyncio.run(executor_factory(timeout_ms=250).get("/test"))


def test_connect_error_is_network_error(api, executor_factory) -> None:
    api.queue(connect_error())

    with pytest.raises(NetworkError) as exc:
        asyncio.run(executor_factory().get("/test"))

    assert str(exc.value).startswith(f"Network error: Unable to reach {BASE_URL}")


def test_all_client_errors_share_base_class() -> None:
    for cls in (RendevoAPIError, NetworkError, RequestTimeoutError, ResponseFormatError):
        assert issubclass(cls, RendevoClientError)


def test_unrelated_exceptions_propagate(api, executor_factory) -> None:
    def _reply(_request):
        raise RuntimeError("boom")

    api.queue(_reply)

    with pytest.raises(RuntimeError, match="boom"):
        asyncio.run(executor_factory().get("/test"))


def test_executor_as_async_context_manager(api, executor_factory) -> None:
    api.queue(ok({"ok": True}))

    async def _run():
        async with executor_factory() as executor:
            return await executor.get("/test")

    assert asyncio.run(_run()) == {"ok": True}
