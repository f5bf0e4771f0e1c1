"""Key request/response models."""

from __future__ import annotations

from typing import Any, Self

from pydantic import Field, NonNegativeInt, PositiveInt, model_validator

from unkey.models.base import Identifier, RequestModel, ResponseModel
from unkey.models.common import Ratelimit, RatelimitState, Refill, UpdateOp
from unkey.undefined import UNDEFINED, Undefined, UndefinedOr


class CreateKeyRequest(RequestModel):
    """Create a new key for an API.

    Example::

        req = (
            CreateKeyRequest(api_id="api_123")
            .set_prefix("test")
            .set_remaining(100)
        )
    """

    api_id: Identifier
    owner_id: str | Undefined = UNDEFINED
    byte_length: PositiveInt | Undefined = UNDEFINED
    prefix: str | Undefined = UNDEFINED
    name: str | Undefined = UNDEFINED
    meta: dict[str, Any] | Undefined = UNDEFINED
    expires: NonNegativeInt | Undefined = UNDEFINED
    remaining: NonNegativeInt | Undefined = UNDEFINED
    ratelimit: Ratelimit | Undefined = UNDEFINED
    refill: Refill | Undefined = UNDEFINED
    enabled: bool | Undefined = UNDEFINED

    def set_owner_id(self, owner_id: str) -> Self:
        """Set the id of the user or entity owning the key."""
        return self._replace(owner_id=owner_id)

    def set_byte_length(self, byte_length: int) -> Self:
        """Set the number of random bytes used to generate the key."""
        return self._replace(byte_length=byte_length)

    def set_prefix(self, prefix: str) -> Self:
        """Set the prefix prepended to the generated key."""
        return self._replace(prefix=prefix)

    def set_name(self, name: str) -> Self:
        return self._replace(name=name)

    def set_meta(self, meta: dict[str, Any]) -> Self:
        """Set arbitrary JSON metadata returned on verification."""
        return self._replace(meta=meta)

    def set_expires(self, expires: int) -> Self:
        """Set the expiry as a unix timestamp in milliseconds."""
        return self._replace(expires=expires)

    def set_remaining(self, remaining: int) -> Self:
        """Set how many verifications the key allows before it is exhausted."""
        return self._replace(remaining=remaining)

    def set_ratelimit(self, ratelimit: Ratelimit) -> Self:
        return self._replace(ratelimit=ratelimit)

    def set_refill(self, refill: Refill) -> Self:
        return self._replace(refill=refill)

    def set_enabled(self, enabled: bool) -> Self:
        return self._replace(enabled=enabled)


class CreateKeyResponse(ResponseModel):
    """Newly created key. The raw key is only ever returned here."""

    key: str
    key_id: str


class VerifyKeyRequest(RequestModel):
    """Verify a raw key, optionally scoped to one API."""

    key: Identifier
    api_id: Identifier | Undefined = UNDEFINED

    def set_api_id(self, api_id: str) -> Self:
        """Restrict verification to keys belonging to this API."""
        return self._replace(api_id=api_id)


class VerifyKeyResponse(ResponseModel):
    """Verification outcome for a raw key."""

    valid: bool
    code: str | None = None
    key_id: str | None = None
    name: str | None = None
    owner_id: str | None = None
    meta: dict[str, Any] | None = None
    remaining: int | None = None
    ratelimit: RatelimitState | None = None
    refill: Refill | None = None
    expires: int | None = None
    enabled: bool | None = None


class ApiKey(ResponseModel):
    """Key details as returned by ``get_key`` and ``list_keys``."""

    id: str
    api_id: str
    workspace_id: str
    start: str
    created_at: int
    name: str | None = None
    owner_id: str | None = None
    meta: dict[str, Any] | None = None
    expires: int | None = None
    remaining: int | None = None
    ratelimit: Ratelimit | None = None
    refill: Refill | None = None
    enabled: bool | None = None


class UpdateKeyRequest(RequestModel):
    """Update an existing key.

    Every setter accepts ``None`` to clear the field on the server. Fields
    that are never set are left untouched.
    """

    key_id: Identifier = Field(exclude=True)
    name: UndefinedOr[str] = UNDEFINED
    owner_id: UndefinedOr[str] = UNDEFINED
    meta: UndefinedOr[dict[str, Any]] = UNDEFINED
    expires: UndefinedOr[NonNegativeInt] = UNDEFINED
    remaining: UndefinedOr[NonNegativeInt] = UNDEFINED
    ratelimit: UndefinedOr[Ratelimit] = UNDEFINED
    refill: UndefinedOr[Refill] = UNDEFINED
    enabled: UndefinedOr[bool] = UNDEFINED

    def set_name(self, name: str | None) -> Self:
        return self._replace(name=name)

    def set_owner_id(self, owner_id: str | None) -> Self:
        return self._replace(owner_id=owner_id)

    def set_meta(self, meta: dict[str, Any] | None) -> Self:
        return self._replace(meta=meta)

    def set_expires(self, expires: int | None) -> Self:
        """Set the expiry in unix milliseconds, or ``None`` to never expire."""
        return self._replace(expires=expires)

    def set_remaining(self, remaining: int | None) -> Self:
        """Set remaining verifications, or ``None`` for unlimited."""
        return self._replace(remaining=remaining)

    def set_ratelimit(self, ratelimit: Ratelimit | None) -> Self:
        """Set the ratelimit, or ``None`` to remove it."""
        return self._replace(ratelimit=ratelimit)

    def set_refill(self, refill: Refill | None) -> Self:
        """Set the refill policy, or ``None`` to remove it."""
        return self._replace(refill=refill)

    def set_enabled(self, enabled: bool | None) -> Self:
        return self._replace(enabled=enabled)


class RevokeKeyRequest(RequestModel):
    """Revoke a key permanently."""

    key_id: Identifier = Field(exclude=True)


class GetKeyRequest(RequestModel):
    """Fetch a single key."""

    key_id: Identifier = Field(exclude=True)


class UpdateRemainingRequest(RequestModel):
    """Change a key's remaining verifications server-side."""

    key_id: Identifier = Field(exclude=True)
    op: UpdateOp
    value: NonNegativeInt | None

    @model_validator(mode="after")
    def validate_value_for_op(self) -> Self:
        """Only ``set`` may clear the counter with a null value."""
        if self.value is None and self.op is not UpdateOp.SET:
            raise ValueError(f"value is required for the '{self.op.value}' operation.")
        return self


class UpdateRemainingResponse(ResponseModel):
    """Remaining verifications after the update, ``None`` when unlimited."""

    remaining: int | None
