"""Error classes for the WeChat API client.

Every failure, whether raised by the transport, reported by the remote
authority, or hit while acquiring a credential, surfaces as a
:class:`WeChatError` subclass carrying a structured code.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class ErrorCode(IntEnum):
    """Protocol codes the client itself relies on."""

    NO_DATA = -1
    OK = 0
    # The authority's "access_token invalid or expired" code.
    INVALID_CREDENTIAL = 40001


class ClientErrorCode(StrEnum):
    """Codes for failures raised by the client rather than the authority."""

    NETWORK_ERROR = "NET_3001"
    TIMEOUT_ERROR = "NET_3002"
    HTTP_STATUS_ERROR = "NET_3003"
    RESPONSE_FORMAT_ERROR = "NET_3004"
    SERVER_ERROR = "SRV_5001"
    INVALID_CONFIG = "VAL_2002"


class WeChatError(Exception):
    """Base error for the WeChat client with structured error information."""

    def __init__(
        self,
        message: str,
        code: int | str,
        *,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code.value if isinstance(code, (IntEnum, StrEnum)) else code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class WeChatAPIError(WeChatError):
    """The authority answered with a non-zero ``errcode``.

    ``data`` keeps the raw body so callers can still inspect it, and
    ``response`` is the HTTP response it came from.
    """

    def __init__(
        self,
        message: str,
        code: int,
        *,
        data: Any = None,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(
            message,
            code,
            status_code=response.status_code if response is not None else None,
        )
        self.data = data
        self.response = response

    @property
    def is_credential_expired(self) -> bool:
        return self.code == ErrorCode.INVALID_CREDENTIAL


class NoDataError(WeChatAPIError):
    """A body was expected but none arrived."""

    def __init__(
        self,
        message: str = "No data received.",
        *,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.NO_DATA, data=None, response=response)


class NetworkError(WeChatError):
    """Network request failed."""

    def __init__(
        self,
        message: str = "Network request failed",
        *,
        code: int | str = ClientErrorCode.NETWORK_ERROR,
        status_code: int | None = None,
        cause: Exception | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        merged = dict(details or {})
        if cause is not None:
            merged["cause"] = str(cause)
        super().__init__(message, code, status_code=status_code, details=merged)
        self.__cause__ = cause


class RequestTimeoutError(NetworkError):
    """Request timed out."""

    def __init__(
        self,
        message: str = "Request timed out",
        *,
        timeout_seconds: float | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ClientErrorCode.TIMEOUT_ERROR,
            status_code=408,
            cause=cause,
            details={"timeout_seconds": timeout_seconds} if timeout_seconds else None,
        )
        self.timeout_seconds = timeout_seconds


class HTTPStatusError(NetworkError):
    """The server answered with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        code: int | str = ClientErrorCode.HTTP_STATUS_ERROR,
    ) -> None:
        super().__init__(message, code=code, status_code=status_code)


class ServerError(HTTPStatusError):
    """Server-side error."""

    def __init__(
        self,
        message: str = "Server error",
        *,
        status_code: int = 500,
    ) -> None:
        super().__init__(message, status_code=status_code, code=ClientErrorCode.SERVER_ERROR)


class ResponseFormatError(NetworkError):
    """The body could not be decoded as JSON."""

    def __init__(
        self,
        message: str = "Response body is not valid JSON",
        *,
        cause: Exception | None = None,
        content_type: str | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ClientErrorCode.RESPONSE_FORMAT_ERROR,
            cause=cause,
            details={"content_type": content_type} if content_type else None,
        )


class InvalidConfigError(WeChatError):
    """Invalid client configuration."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ClientErrorCode.INVALID_CONFIG,
            details={"field": field} if field else None,
        )
