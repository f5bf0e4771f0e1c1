"""Async HTTP dispatcher mapping Unkey responses to typed results."""

from __future__ import annotations

from collections.abc import Mapping
from time import perf_counter
from types import MappingProxyType
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from unkey.config import DEFAULT_BASE_URL, SDK_VERSION, get_logger
from unkey.exceptions import (
    ApiError,
    DeserializationError,
    ErrorCode,
    TransportError,
    error_code_for_status,
)
from unkey.models.base import RequestModel, ResponseModel
from unkey.result import Err, Ok, Result
from unkey.routes import Route

DEFAULT_TIMEOUT = httpx.Timeout(connect=5.0, read=10.0, write=10.0, pool=5.0)
USER_AGENT = f"Unkey Python SDK v{SDK_VERSION}"

SENSITIVE_KEYS = {
    "api_key",
    "authorization",
    "key",
    "root_key",
    "token",
}
REDACTED = "***REDACTED***"

ResponseT = TypeVar("ResponseT", bound=ResponseModel)

logger = get_logger(__name__)


def _is_sensitive_key(key: str) -> bool:
    """Return True when key likely carries credential material."""
    normalized = key.lower().replace("-", "_")
    if normalized in SENSITIVE_KEYS:
        return True
    return "token" in normalized or "secret" in normalized or normalized.endswith("_key")


def _redact_mapping(values: Mapping[str, Any]) -> dict[str, Any]:
    """Redact sensitive values from a mapping before logging it."""
    redacted: dict[str, Any] = {}
    for key, value in values.items():
        if _is_sensitive_key(key):
            redacted[key] = REDACTED
        elif isinstance(value, Mapping):
            redacted[key] = _redact_mapping(value)
        elif isinstance(value, list):
            redacted[key] = [
                _redact_mapping(item) if isinstance(item, Mapping) else item for item in value
            ]
        else:
            redacted[key] = value
    return redacted


class HttpService:
    """Send one request per call and classify the outcome.

    Ordinary failures are returned as ``Err`` values, never raised.
    """

    def __init__(
        self,
        root_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: httpx.Timeout | float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Create the service; an injected client is used as-is and never closed."""
        if not root_key or not root_key.strip():
            raise ValueError("root_key must not be empty.")

        self._headers: Mapping[str, str] = MappingProxyType(
            {
                "Authorization": f"Bearer {root_key}",
                "Accept": "application/json",
                "x-user-agent": USER_AGENT,
            }
        )
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout or DEFAULT_TIMEOUT,
        )

    @property
    def headers(self) -> Mapping[str, str]:
        """Headers sent with every request."""
        return self._headers

    async def execute(
        self,
        route: Route,
        request: RequestModel,
        response_type: type[ResponseT] | None = None,
    ) -> Result[Any]:
        """Send the request for route and parse the reply into response_type.

        Operations without a response body pass ``response_type=None`` and
        succeed with ``Ok(None)``.
        """
        compiled = route.compile(request)
        logger.debug(
            "request_sent",
            method=compiled.method,
            path=compiled.path,
            query=_redact_mapping(compiled.query),
            payload=_redact_mapping(compiled.body) if compiled.body is not None else None,
        )

        start = perf_counter()
        try:
            response = await self._client.request(
                compiled.method,
                compiled.path,
                json=compiled.body,
                params=dict(compiled.query) or None,
                headers={**self._headers, **compiled.headers},
            )
        except httpx.RequestError as exc:
            logger.error(
                "request_failed",
                method=compiled.method,
                path=compiled.path,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return Err(TransportError(f"Request to {compiled.path} failed: {exc}", cause=exc))

        duration_ms = round((perf_counter() - start) * 1000, 2)
        event_logger = logger.warning if response.status_code >= 400 else logger.info
        event_logger(
            "response_received",
            method=compiled.method,
            path=compiled.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        if not response.is_success:
            return Err(self._api_error(response, self._json_or_none(response)))
        return self._parse_success(response, response_type)

    async def aclose(self) -> None:
        """Close underlying HTTP client if owned by this instance."""
        if self._owns_client:
            await self._client.aclose()

    def _parse_success(
        self, response: httpx.Response, response_type: type[ResponseT] | None
    ) -> Result[Any]:
        """Parse a 2xx response body."""
        if response_type is None and not response.text.strip():
            return Ok(None)

        try:
            payload = response.json()
        except ValueError as exc:
            if response_type is None:
                return Ok(None)
            return Err(self._deserialization_error(response, "Response body is not valid JSON.", exc))

        if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
            return Err(self._api_error(response, payload))
        if response_type is None:
            return Ok(None)

        try:
            return Ok(response_type.model_validate(payload))
        except ValidationError as exc:
            return Err(
                self._deserialization_error(
                    response,
                    f"Response body does not match {response_type.__name__}.",
                    exc,
                )
            )

    @staticmethod
    def _json_or_none(response: httpx.Response) -> Any:
        """Return the decoded JSON body, or None when it is not JSON."""
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _api_error(response: httpx.Response, payload: Any) -> ApiError:
        """Build an API error from the error envelope or the HTTP status."""
        status_code = response.status_code
        envelope = payload.get("error", payload) if isinstance(payload, dict) else None
        if isinstance(envelope, dict) and (
            envelope.get("code") is not None or envelope.get("message") is not None
        ):
            raw_code = str(envelope["code"]) if envelope.get("code") is not None else None
            if raw_code is not None:
                code = ErrorCode.parse(raw_code)
            else:
                code = error_code_for_status(status_code)
            message = envelope.get("message")
            return ApiError(
                code=code,
                message=str(message) if message is not None else (raw_code or code.value),
                status_code=status_code,
                raw_code=raw_code,
                docs=str(envelope["docs"]) if envelope.get("docs") is not None else None,
                request_id=(
                    str(envelope["requestId"]) if envelope.get("requestId") is not None else None
                ),
            )

        message = response.text.strip() or f"Request failed with status {status_code}."
        return ApiError(
            code=error_code_for_status(status_code),
            message=message,
            status_code=status_code,
        )

    @staticmethod
    def _deserialization_error(
        response: httpx.Response, message: str, cause: Exception
    ) -> DeserializationError:
        """Log and wrap a response that could not be parsed."""
        logger.warning(
            "response_invalid",
            status_code=response.status_code,
            error=str(cause),
        )
        return DeserializationError(
            message,
            status_code=response.status_code,
            body=response.text,
            cause=cause,
        )
