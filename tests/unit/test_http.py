"""Unit tests for the HTTP dispatcher."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from pydantic import ValidationError

from unkey import http as http_module
from unkey.exceptions import ApiError, DeserializationError, ErrorCode, TransportError
from unkey.http import REDACTED, USER_AGENT, HttpService
from unkey.models import (
    CreateKeyRequest,
    CreateKeyResponse,
    RevokeKeyRequest,
    UpdateKeyRequest,
    VerifyKeyRequest,
    VerifyKeyResponse,
)
from unkey.result import Err, Ok
from unkey.routes import Operation, get_route

BASE_URL = "https://api.unkey.test/v1"

Handler = Callable[[httpx.Request], httpx.Response]


class _CaptureLogger:
    """Capture structlog-like logger calls for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def debug(self, event: str, **kwargs: Any) -> None:
        self.calls.append(("debug", event, kwargs))

    def info(self, event: str, **kwargs: Any) -> None:
        self.calls.append(("info", event, kwargs))

    def warning(self, event: str, **kwargs: Any) -> None:
        self.calls.append(("warning", event, kwargs))

    def error(self, event: str, **kwargs: Any) -> None:
        self.calls.append(("error", event, kwargs))


async def _execute(
    handler: Handler,
    operation: Operation,
    request: Any,
    response_type: Any = None,
) -> Any:
    """Run one request through HttpService against a mock transport."""
    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(base_url=BASE_URL, transport=transport) as http_client:
        service = HttpService(root_key="unkey_root", http_client=http_client)
        return await service.execute(get_route(operation), request, response_type)


@pytest.mark.asyncio
async def test_execute_sends_required_headers_and_body() -> None:
    """Requests carry auth, content type, version header and JSON body."""
    seen: dict[str, Any] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(status_code=200, json={"key": "test_abc", "keyId": "key_1"})

    result = await _execute(
        handler,
        Operation.CREATE_KEY,
        CreateKeyRequest(api_id="api_123").set_prefix("test"),
        CreateKeyResponse,
    )

    assert result == Ok(CreateKeyResponse(key="test_abc", key_id="key_1"))
    assert seen["method"] == "POST"
    assert seen["path"] == "/v1/keys"
    assert seen["headers"]["authorization"] == "Bearer unkey_root"
    assert seen["headers"]["content-type"] == "application/json"
    assert seen["headers"]["x-user-agent"] == USER_AGENT
    assert seen["body"] == {"apiId": "api_123", "prefix": "test"}


@pytest.mark.asyncio
async def test_execute_maps_conflict_envelope() -> None:
    """HTTP 409 with CONFLICT code becomes a typed API error."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code=409,
            json={
                "error": {
                    "code": "CONFLICT",
                    "message": "Key already exists.",
                    "docs": "https://unkey.dev/docs/api-reference/errors/code/CONFLICT",
                    "requestId": "req_1",
                }
            },
        )

    result = await _execute(handler, Operation.CREATE_KEY, CreateKeyRequest(api_id="api_1"))

    assert isinstance(result, Err)
    assert isinstance(result.error, ApiError)
    assert result.error.code is ErrorCode.CONFLICT
    assert result.error.message == "Key already exists."
    assert result.error.status_code == 409
    assert result.error.request_id == "req_1"
    assert result.error.docs is not None


@pytest.mark.asyncio
async def test_execute_maps_unknown_code_to_fallback() -> None:
    """Unrecognized codes map to UNKNOWN and keep the raw code."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code=400, json={"error": {"code": "NEW_CODE", "message": "?"}})

    result = await _execute(handler, Operation.CREATE_KEY, CreateKeyRequest(api_id="api_1"))

    assert isinstance(result.error, ApiError)
    assert result.error.code is ErrorCode.UNKNOWN
    assert result.error.raw_code == "NEW_CODE"


@pytest.mark.asyncio
async def test_execute_accepts_flat_error_body() -> None:
    """Flat code/message bodies are read as error envelopes."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code=404, json={"code": "NOT_FOUND", "message": "gone"})

    result = await _execute(handler, Operation.REVOKE_KEY, RevokeKeyRequest(key_id="key_1"))

    assert isinstance(result.error, ApiError)
    assert result.error.code is ErrorCode.NOT_FOUND
    assert result.error.message == "gone"


@pytest.mark.asyncio
async def test_execute_uses_envelope_message_when_code_is_missing() -> None:
    """An envelope without a code keeps its message and takes the code from the status."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code=400, json={"error": {"message": "apiId is required"}})

    result = await _execute(handler, Operation.CREATE_KEY, CreateKeyRequest(api_id="api_1"))

    assert isinstance(result.error, ApiError)
    assert result.error.code is ErrorCode.BAD_REQUEST
    assert result.error.message == "apiId is required"
    assert result.error.status_code == 400


@pytest.mark.asyncio
async def test_execute_falls_back_to_status_for_plain_text_errors() -> None:
    """Bodies without an envelope derive the code from the status."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code=503, text="upstream unavailable")

    result = await _execute(handler, Operation.CREATE_KEY, CreateKeyRequest(api_id="api_1"))

    assert isinstance(result.error, ApiError)
    assert result.error.code is ErrorCode.INTERNAL_SERVER_ERROR
    assert result.error.message == "upstream unavailable"
    assert result.error.status_code == 503


@pytest.mark.asyncio
async def test_execute_treats_error_envelope_in_success_body_as_error() -> None:
    """A 2xx body carrying an error envelope is still a failure."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code=200,
            json={"error": {"code": "USAGE_EXCEEDED", "message": "limit reached"}},
        )

    result = await _execute(
        handler, Operation.VERIFY_KEY, VerifyKeyRequest(key="test_abc"), VerifyKeyResponse
    )

    assert isinstance(result.error, ApiError)
    assert result.error.code is ErrorCode.KEY_USAGE_EXCEEDED


@pytest.mark.asyncio
async def test_execute_returns_deserialization_error_for_missing_field() -> None:
    """HTTP 200 without a required field becomes a deserialization error."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code=200, json={"key": "test_abc"})

    result = await _execute(
        handler, Operation.CREATE_KEY, CreateKeyRequest(api_id="api_1"), CreateKeyResponse
    )

    assert isinstance(result, Err)
    assert isinstance(result.error, DeserializationError)
    assert isinstance(result.error.cause, ValidationError)
    assert result.error.status_code == 200
    assert json.loads(result.error.body or "") == {"key": "test_abc"}


@pytest.mark.asyncio
async def test_execute_returns_deserialization_error_for_invalid_json() -> None:
    """Malformed JSON on success is reported, not raised."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code=200, text="{not json")

    result = await _execute(
        handler, Operation.CREATE_KEY, CreateKeyRequest(api_id="api_1"), CreateKeyResponse
    )

    assert isinstance(result.error, DeserializationError)
    assert result.error.body == "{not json"


@pytest.mark.asyncio
async def test_execute_wraps_network_errors() -> None:
    """Network failures become transport errors preserving the cause."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("network down", request=request)

    result = await _execute(handler, Operation.CREATE_KEY, CreateKeyRequest(api_id="api_1"))

    assert isinstance(result, Err)
    assert isinstance(result.error, TransportError)
    assert isinstance(result.error.cause, httpx.ConnectError)


@pytest.mark.asyncio
async def test_execute_wraps_timeouts() -> None:
    """Transport timeouts are transport errors, not API errors."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    result = await _execute(handler, Operation.CREATE_KEY, CreateKeyRequest(api_id="api_1"))

    assert isinstance(result.error, TransportError)
    assert isinstance(result.error.cause, httpx.ReadTimeout)


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["", "{}", "OK"])
async def test_execute_empty_operations_succeed_with_none(body: str) -> None:
    """Operations without a response model accept empty or trivial bodies."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code=200, text=body)

    result = await _execute(handler, Operation.UPDATE_KEY, UpdateKeyRequest(key_id="key_1"))

    assert result == Ok(None)


@pytest.mark.asyncio
async def test_execute_logs_redacted_payload(monkeypatch) -> None:
    """Raw keys never reach the logs."""
    capture = _CaptureLogger()
    monkeypatch.setattr(http_module, "logger", capture)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code=200, json={"valid": True})

    await _execute(
        handler, Operation.VERIFY_KEY, VerifyKeyRequest(key="test_secret"), VerifyKeyResponse
    )

    events = [(level, event) for level, event, _ in capture.calls]
    assert events == [("debug", "request_sent"), ("info", "response_received")]
    assert capture.calls[0][2]["payload"] == {"key": REDACTED}
    assert "duration_ms" in capture.calls[1][2]


@pytest.mark.asyncio
async def test_execute_logs_warning_for_api_errors(monkeypatch) -> None:
    """Non-2xx responses are logged at warning level."""
    capture = _CaptureLogger()
    monkeypatch.setattr(http_module, "logger", capture)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code=401, json={"error": {"code": "UNAUTHORIZED"}})

    result = await _execute(handler, Operation.CREATE_KEY, CreateKeyRequest(api_id="api_1"))

    assert result.error.code is ErrorCode.UNAUTHORIZED
    assert result.error.message == "UNAUTHORIZED"
    assert ("warning", "response_received") in [(lvl, ev) for lvl, ev, _ in capture.calls]


def test_http_service_rejects_blank_root_key() -> None:
    """An auth token is required."""
    with pytest.raises(ValueError):
        HttpService(root_key="  ")


@pytest.mark.asyncio
async def test_aclose_leaves_injected_client_open() -> None:
    """Injected clients are owned by the caller."""
    async with httpx.AsyncClient(base_url=BASE_URL) as http_client:
        service = HttpService(root_key="unkey_root", http_client=http_client)
        await service.aclose()
        assert http_client.is_closed is False


@pytest.mark.asyncio
async def test_aclose_closes_owned_client() -> None:
    """Clients created by the service are closed with it."""
    service = HttpService(root_key="unkey_root", base_url=BASE_URL)
    await service.aclose()
    assert service._client.is_closed is True
