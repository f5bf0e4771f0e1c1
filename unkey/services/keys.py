"""Key endpoints."""

from __future__ import annotations

from unkey.http import HttpService
from unkey.models import (
    ApiKey,
    CreateKeyRequest,
    CreateKeyResponse,
    GetKeyRequest,
    RevokeKeyRequest,
    UpdateKeyRequest,
    UpdateRemainingRequest,
    UpdateRemainingResponse,
    VerifyKeyRequest,
    VerifyKeyResponse,
)
from unkey.result import Result
from unkey.routes import Operation, get_route


class KeyService:
    """Create, verify, update and revoke keys."""

    def __init__(self, http: HttpService) -> None:
        self._http = http

    async def create_key(self, request: CreateKeyRequest) -> Result[CreateKeyResponse]:
        """Create a new key."""
        route = get_route(Operation.CREATE_KEY)
        return await self._http.execute(route, request, CreateKeyResponse)

    async def verify_key(self, request: VerifyKeyRequest) -> Result[VerifyKeyResponse]:
        """Verify a raw key."""
        route = get_route(Operation.VERIFY_KEY)
        return await self._http.execute(route, request, VerifyKeyResponse)

    async def update_key(self, request: UpdateKeyRequest) -> Result[None]:
        """Update an existing key. Succeeds with ``Ok(None)``."""
        route = get_route(Operation.UPDATE_KEY)
        return await self._http.execute(route, request)

    async def revoke_key(self, request: RevokeKeyRequest) -> Result[None]:
        """Revoke a key. Succeeds with ``Ok(None)``."""
        route = get_route(Operation.REVOKE_KEY)
        return await self._http.execute(route, request)

    async def get_key(self, request: GetKeyRequest) -> Result[ApiKey]:
        route = get_route(Operation.GET_KEY)
        return await self._http.execute(route, request, ApiKey)

    async def update_remaining(
        self, request: UpdateRemainingRequest
    ) -> Result[UpdateRemainingResponse]:
        """Increment, decrement or set a key's remaining verifications."""
        route = get_route(Operation.UPDATE_REMAINING)
        return await self._http.execute(route, request, UpdateRemainingResponse)
