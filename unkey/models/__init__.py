"""Request and response models for the Unkey API.

Requests are the classes suffixed with ``Request`` and are built with chained
``set_*`` calls. Responses are suffixed with ``Response`` (plus ``ApiKey``)
and are only ever produced by the client.
"""

from unkey.models.apis import (
    DeleteApiRequest,
    GetApiRequest,
    GetApiResponse,
    ListKeysRequest,
    ListKeysResponse,
)
from unkey.models.base import RequestModel, ResponseModel
from unkey.models.common import (
    Ratelimit,
    RatelimitState,
    RatelimitType,
    Refill,
    RefillInterval,
    UpdateOp,
)
from unkey.models.keys import (
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

__all__ = [
    "ApiKey",
    "CreateKeyRequest",
    "CreateKeyResponse",
    "DeleteApiRequest",
    "GetApiRequest",
    "GetApiResponse",
    "GetKeyRequest",
    "ListKeysRequest",
    "ListKeysResponse",
    "Ratelimit",
    "RatelimitState",
    "RatelimitType",
    "Refill",
    "RefillInterval",
    "RequestModel",
    "ResponseModel",
    "RevokeKeyRequest",
    "UpdateKeyRequest",
    "UpdateOp",
    "UpdateRemainingRequest",
    "UpdateRemainingResponse",
    "VerifyKeyRequest",
    "VerifyKeyResponse",
]
