"""Service facades grouping the Unkey endpoints."""

from unkey.services.apis import ApiService
from unkey.services.keys import KeyService

__all__ = ["ApiService", "KeyService"]
