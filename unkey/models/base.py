"""Shared pydantic bases for request and response models."""

from __future__ import annotations

from typing import Annotated, Any, Self

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

from unkey.undefined import UNDEFINED

# Ids are trimmed when the model is built, so paths and bodies use the same value.
Identifier = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class WireModel(BaseModel):
    """Model whose wire names are the camelCase form of its field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class RequestModel(WireModel):
    """Immutable request payload built through chained ``set_*`` calls."""

    model_config = ConfigDict(extra="forbid")

    def _replace(self, **changes: Any) -> Self:
        """Return a validated copy with the given fields changed."""
        values = {name: getattr(self, name) for name in type(self).model_fields}
        values.update(changes)
        return type(self).model_validate(values)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to wire form, dropping unset fields and path parameters."""
        omitted = {name for name in type(self).model_fields if getattr(self, name) is UNDEFINED}
        return self.model_dump(mode="json", by_alias=True, exclude=omitted)


class ResponseModel(WireModel):
    """Read-only model parsed from an API response body."""

    model_config = ConfigDict(extra="ignore")
