"""Async client for the Unkey key-management API."""

from unkey.client import Client
from unkey.config import SDK_VERSION, ClientSettings, configure_logging
from unkey.exceptions import (
    ApiError,
    DeserializationError,
    ErrorCode,
    TransportError,
    UnkeyError,
)
from unkey.result import Err, Ok, Result
from unkey.undefined import UNDEFINED, Undefined, UndefinedOr

__version__ = SDK_VERSION

__all__ = [
    "UNDEFINED",
    "ApiError",
    "Client",
    "ClientSettings",
    "DeserializationError",
    "Err",
    "ErrorCode",
    "Ok",
    "Result",
    "TransportError",
    "Undefined",
    "UndefinedOr",
    "UnkeyError",
    "configure_logging",
]
