"""Tri-state optional values: omitted, explicit null, or a concrete value."""

from __future__ import annotations

from typing import Any, Final, TypeVar, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

T = TypeVar("T")


class Undefined:
    """Marker for a field the caller never set.

    Fields holding this value are dropped from outgoing payloads, while
    ``None`` is sent as an explicit JSON ``null``.
    """

    _instance: Undefined | None = None

    def __new__(cls) -> Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> Undefined:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Undefined:
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Accept only the singleton and never emit it when serializing."""
        del source_type, handler
        return core_schema.is_instance_schema(
            cls,
            serialization=core_schema.plain_serializer_function_ser_schema(lambda _: None),
        )


UNDEFINED: Final = Undefined()

UndefinedOr = Union[T, None, Undefined]


def is_undefined(value: object) -> bool:
    """Return True when value is the omitted-field marker."""
    return value is UNDEFINED


def is_defined(value: object) -> bool:
    """Return True when value is ``None`` or a concrete value."""
    return value is not UNDEFINED
