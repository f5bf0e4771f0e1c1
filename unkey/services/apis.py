"""API endpoints."""

from __future__ import annotations

from unkey.http import HttpService
from unkey.models import (
    DeleteApiRequest,
    GetApiRequest,
    GetApiResponse,
    ListKeysRequest,
    ListKeysResponse,
)
from unkey.result import Result
from unkey.routes import Operation, get_route


class ApiService:
    """Inspect and delete APIs and list their keys."""

    def __init__(self, http: HttpService) -> None:
        self._http = http

    async def get_api(self, request: GetApiRequest) -> Result[GetApiResponse]:
        route = get_route(Operation.GET_API)
        return await self._http.execute(route, request, GetApiResponse)

    async def list_keys(self, request: ListKeysRequest) -> Result[ListKeysResponse]:
        """Return one page of keys for an API."""
        route = get_route(Operation.LIST_KEYS)
        return await self._http.execute(route, request, ListKeysResponse)

    async def delete_api(self, request: DeleteApiRequest) -> Result[None]:
        """Delete an API and revoke all of its keys."""
        route = get_route(Operation.DELETE_API)
        return await self._http.execute(route, request)
