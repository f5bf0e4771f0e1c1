"""Value objects embedded in key requests and responses."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field, NonNegativeInt

from unkey.models.base import WireModel


class RefillInterval(StrEnum):
    """How often a key's remaining verifications are refilled."""

    DAILY = "daily"
    MONTHLY = "monthly"


class Refill(WireModel):
    """Automatic refill policy for a key's remaining verifications."""

    amount: NonNegativeInt
    interval: RefillInterval
    last_refilled_at: int | None = Field(default=None, exclude=True)


class RatelimitType(StrEnum):
    """Ratelimit consistency mode.

    ``fast`` limits are tracked per edge location, ``consistent`` limits go
    through a single origin.
    """

    FAST = "fast"
    CONSISTENT = "consistent"


class Ratelimit(WireModel):
    """Ratelimit imposed on a key."""

    ratelimit_type: RatelimitType = Field(alias="type")
    limit: NonNegativeInt
    refill_rate: NonNegativeInt
    refill_interval: NonNegativeInt


class RatelimitState(WireModel):
    """Snapshot of a key's ratelimit returned by verification."""

    limit: int
    remaining: int
    reset: int


class UpdateOp(StrEnum):
    """Server-side operation applied by ``update_remaining``."""

    INCREMENT = "increment"
    DECREMENT = "decrement"
    SET = "set"
