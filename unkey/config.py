"""Client settings and logging configuration."""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.unkey.dev/v1"
SDK_VERSION = "0.1.0"
SERVICE_NAME = "unkey-python"
LOGGER_NAME = "unkey"

_LOG_HANDLER: dict[str, logging.Handler] = {}

# Library events stay silent until the application opts in.
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ClientSettings(BaseSettings):
    """Client settings loaded from ``UNKEY_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="UNKEY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    root_key: SecretStr
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(default=10.0, gt=0)
    log: LogLevel = "WARNING"

    @field_validator("root_key")
    @classmethod
    def validate_root_key(cls, value: SecretStr) -> SecretStr:
        """Reject blank root keys."""
        if not value.get_secret_value().strip():
            raise ValueError("root_key must not be empty.")
        return value

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """Ensure the base URL uses a supported scheme."""
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must start with 'http://' or 'https://'.")
        return value.rstrip("/")

    @field_validator("log", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        """Accept log levels in any case."""
        return value.upper() if isinstance(value, str) else value


def _standard_log_fields(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Inject service and timestamp fields."""
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("timestamp", datetime.now(UTC).isoformat())
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger backed by the stdlib ``unkey`` logger tree."""
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )


def configure_logging(settings: ClientSettings) -> None:
    """Emit library events as JSON lines on stdout at the configured level."""
    log_level = getattr(logging, settings.log, logging.WARNING)
    library_logger = logging.getLogger(LOGGER_NAME)
    previous = _LOG_HANDLER.pop("stdout", None)
    if previous is not None:
        library_logger.removeHandler(previous)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    _LOG_HANDLER["stdout"] = handler
    library_logger.addHandler(handler)
    library_logger.setLevel(log_level)
    library_logger.propagate = False

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            _standard_log_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> ClientSettings:
    """Load and cache client settings from environment variables."""
    return ClientSettings()
