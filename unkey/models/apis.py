"""API request/response models."""

from __future__ import annotations

from typing import Self

from pydantic import Field, NonNegativeInt, PositiveInt

from unkey.models.base import Identifier, RequestModel, ResponseModel
from unkey.models.keys import ApiKey
from unkey.undefined import UNDEFINED, Undefined


class GetApiRequest(RequestModel):
    """Fetch a single API."""

    api_id: Identifier = Field(exclude=True)


class GetApiResponse(ResponseModel):
    """API details."""

    id: str
    name: str
    workspace_id: str


class DeleteApiRequest(RequestModel):
    """Delete an API and revoke every key that belongs to it."""

    api_id: Identifier = Field(exclude=True)


class ListKeysRequest(RequestModel):
    """List the keys of an API, one page at a time."""

    api_id: Identifier = Field(exclude=True)
    limit: PositiveInt | Undefined = UNDEFINED
    offset: NonNegativeInt | Undefined = UNDEFINED
    owner_id: str | Undefined = UNDEFINED

    def set_limit(self, limit: int) -> Self:
        """Set the maximum number of keys returned."""
        return self._replace(limit=limit)

    def set_offset(self, offset: int) -> Self:
        """Set how many keys to skip."""
        return self._replace(offset=offset)

    def set_owner_id(self, owner_id: str) -> Self:
        """Only return keys owned by this id."""
        return self._replace(owner_id=owner_id)


class ListKeysResponse(ResponseModel):
    """A page of keys and the total key count for the API."""

    keys: list[ApiKey]
    total: int
