"""Static routing table for the Unkey REST endpoints."""

from __future__ import annotations

import string
from urllib.parse import quote
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Literal

from unkey.models.base import RequestModel

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

BODY_METHODS: frozenset[str] = frozenset({"POST", "PUT", "PATCH"})
JSON_HEADERS: Mapping[str, str] = MappingProxyType({"Content-Type": "application/json"})


class Operation(StrEnum):
    """Logical operations exposed by the client."""

    CREATE_KEY = "create_key"
    VERIFY_KEY = "verify_key"
    UPDATE_KEY = "update_key"
    REVOKE_KEY = "revoke_key"
    LIST_KEYS = "list_keys"
    GET_KEY = "get_key"
    UPDATE_REMAINING = "update_remaining"
    GET_API = "get_api"
    DELETE_API = "delete_api"


@dataclass(frozen=True)
class CompiledRoute:
    """Route with its path parameters filled in for one request."""

    method: HttpMethod
    path: str
    headers: Mapping[str, str]
    query: Mapping[str, str] = field(default_factory=dict)
    body: dict[str, Any] | None = None


@dataclass(frozen=True)
class Route:
    """HTTP method, path template and headers for one operation."""

    method: HttpMethod
    path: str
    headers: Mapping[str, str] = field(default_factory=lambda: JSON_HEADERS)

    @property
    def has_body(self) -> bool:
        return self.method in BODY_METHODS

    @property
    def path_params(self) -> tuple[str, ...]:
        """Names of the ``{placeholders}`` in the path template."""
        return tuple(
            name for _, name, _, _ in string.Formatter().parse(self.path) if name is not None
        )

    def compile(self, request: RequestModel) -> CompiledRoute:
        """Interpolate path parameters and split the payload into body or query."""
        params: dict[str, str] = {}
        for name in self.path_params:
            value = str(getattr(request, name, ""))
            if not value:
                raise ValueError(f"'{name}' is required to build path '{self.path}'.")
            params[name] = quote(value, safe="")

        payload = request.to_payload()
        path = self.path.format(**params)
        if self.has_body:
            return CompiledRoute(method=self.method, path=path, headers=self.headers, body=payload)
        query = {key: _query_value(value) for key, value in payload.items() if value is not None}
        return CompiledRoute(method=self.method, path=path, headers=self.headers, query=query)


def _query_value(value: Any) -> str:
    """Render a payload value as a query string value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


ROUTES: Mapping[Operation, Route] = MappingProxyType(
    {
        Operation.CREATE_KEY: Route("POST", "/keys"),
        Operation.VERIFY_KEY: Route("POST", "/keys/verify"),
        Operation.UPDATE_KEY: Route("PUT", "/keys/{key_id}"),
        Operation.REVOKE_KEY: Route("DELETE", "/keys/{key_id}"),
        Operation.LIST_KEYS: Route("GET", "/apis/{api_id}/keys"),
        Operation.GET_KEY: Route("GET", "/keys/{key_id}"),
        Operation.UPDATE_REMAINING: Route("POST", "/keys/{key_id}/remaining"),
        Operation.GET_API: Route("GET", "/apis/{api_id}"),
        Operation.DELETE_API: Route("DELETE", "/apis/{api_id}"),
    }
)


def get_route(operation: Operation) -> Route:
    """Return the route registered for an operation."""
    return ROUTES[operation]
