"""Async client for the Unkey API."""

from __future__ import annotations

from typing import Any

import httpx

from unkey.config import DEFAULT_BASE_URL, ClientSettings, get_settings
from unkey.http import HttpService
from unkey.models import (
    ApiKey,
    CreateKeyRequest,
    CreateKeyResponse,
    DeleteApiRequest,
    GetApiRequest,
    GetApiResponse,
    GetKeyRequest,
    ListKeysRequest,
    ListKeysResponse,
    RevokeKeyRequest,
    UpdateKeyRequest,
    UpdateRemainingRequest,
    UpdateRemainingResponse,
    VerifyKeyRequest,
    VerifyKeyResponse,
)
from unkey.result import Result
from unkey.services import ApiService, KeyService


class Client:
    """Entry point for key and API operations.

    Every operation returns ``Ok`` on success or ``Err`` wrapping an
    ``ApiError``, ``TransportError`` or ``DeserializationError``. The client
    holds no mutable state and can be shared across concurrent tasks.

    Example::

        async with Client("unkey_root") as client:
            result = await client.verify_key(VerifyKeyRequest(key="test_abc"))
            if result.is_ok:
                print(result.value.valid)
    """

    def __init__(
        self,
        root_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: httpx.Timeout | float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Create client with sane defaults and optional injected transport."""
        self._http = HttpService(
            root_key=root_key,
            base_url=base_url,
            timeout=timeout,
            http_client=http_client,
        )
        self._keys = KeyService(self._http)
        self._apis = ApiService(self._http)

    @classmethod
    def from_settings(
        cls, settings: ClientSettings, http_client: httpx.AsyncClient | None = None
    ) -> Client:
        """Create a client from loaded settings."""
        return cls(
            root_key=settings.root_key.get_secret_value(),
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            http_client=http_client,
        )

    @classmethod
    def from_env(cls) -> Client:
        """Create a client from ``UNKEY_*`` environment variables."""
        return cls.from_settings(get_settings())

    @property
    def keys(self) -> KeyService:
        return self._keys

    @property
    def apis(self) -> ApiService:
        return self._apis

    async def create_key(self, request: CreateKeyRequest) -> Result[CreateKeyResponse]:
        """Create a new key."""
        return await self._keys.create_key(request)

    async def verify_key(self, request: VerifyKeyRequest) -> Result[VerifyKeyResponse]:
        """Verify a raw key."""
        return await self._keys.verify_key(request)

    async def update_key(self, request: UpdateKeyRequest) -> Result[None]:
        """Update an existing key."""
        return await self._keys.update_key(request)

    async def revoke_key(self, request: RevokeKeyRequest) -> Result[None]:
        """Revoke an existing key."""
        return await self._keys.revoke_key(request)

    async def get_key(self, request: GetKeyRequest) -> Result[ApiKey]:
        """Fetch details for a key."""
        return await self._keys.get_key(request)

    async def update_remaining(
        self, request: UpdateRemainingRequest
    ) -> Result[UpdateRemainingResponse]:
        """Update the remaining verifications for a key."""
        return await self._keys.update_remaining(request)

    async def list_keys(self, request: ListKeysRequest) -> Result[ListKeysResponse]:
        """List keys for an API."""
        return await self._apis.list_keys(request)

    async def get_api(self, request: GetApiRequest) -> Result[GetApiResponse]:
        """Fetch details for an API."""
        return await self._apis.get_api(request)

    async def delete_api(self, request: DeleteApiRequest) -> Result[None]:
        """Delete an API and revoke all of its keys."""
        return await self._apis.delete_api(request)

    async def aclose(self) -> None:
        """Close underlying HTTP client if owned by this instance."""
        await self._http.aclose()

    async def __aenter__(self) -> Client:
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        """Exit async context manager and close managed resources."""
        del exc_type, exc, tb
        await self.aclose()
