"""Error taxonomy for failed Unkey API calls."""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Error codes documented by the Unkey API."""

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    PRECONDITION_FAILED = "PRECONDITION_FAILED"
    KEY_USAGE_EXCEEDED = "KEY_USAGE_EXCEEDED"
    INVALID_KEY_TYPE = "INVALID_KEY_TYPE"
    NOT_UNIQUE = "NOT_UNIQUE"
    RATE_LIMITED = "RATE_LIMITED"
    DELETE_PROTECTED = "DELETE_PROTECTED"
    DISABLED = "DISABLED"
    EXPIRED = "EXPIRED"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, raw_code: str | None) -> ErrorCode:
        """Map a wire code to its member, falling back to ``UNKNOWN``."""
        if raw_code is None:
            return cls.UNKNOWN
        normalized = _LEGACY_ERROR_CODES.get(raw_code, raw_code)
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN


# Codes renamed upstream that older deployments still return.
_LEGACY_ERROR_CODES: dict[str, str] = {
    "USAGE_EXCEEDED": "KEY_USAGE_EXCEEDED",
    "RATELIMITED": "RATE_LIMITED",
}

_DEFAULT_ERROR_CODE_BY_STATUS: dict[int, ErrorCode] = {
    400: ErrorCode.BAD_REQUEST,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
    412: ErrorCode.PRECONDITION_FAILED,
    429: ErrorCode.RATE_LIMITED,
}


def error_code_for_status(status_code: int) -> ErrorCode:
    """Derive an error code from an HTTP status when the body carries none."""
    if status_code >= 500:
        return ErrorCode.INTERNAL_SERVER_ERROR
    return _DEFAULT_ERROR_CODE_BY_STATUS.get(status_code, ErrorCode.UNKNOWN)


class UnkeyError(Exception):
    """Base class for every failure returned by the client."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ApiError(UnkeyError):
    """Error reported by the Unkey API itself."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int | None = None,
        raw_code: str | None = None,
        docs: str | None = None,
        request_id: str | None = None,
    ) -> None:
        """Initialize with the parsed code and the untouched wire code."""
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.raw_code = raw_code if raw_code is not None else code.value
        self.docs = docs
        self.request_id = request_id

    def __repr__(self) -> str:
        return (
            f"ApiError(code={self.code.value!r}, message={self.message!r}, "
            f"status_code={self.status_code!r})"
        )


class TransportError(UnkeyError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
        self.__cause__ = cause


class DeserializationError(UnkeyError):
    """Raised when a response body does not match the expected shape."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.cause = cause
        self.__cause__ = cause
