"""WeChat public account API client."""

from .async_client import AsyncWeChatClient
from .client import WeChatClient
from .config import TelemetryConfig, WeChatConfig
from .errors import (
    ErrorCode,
    HTTPStatusError,
    InvalidConfigError,
    NetworkError,
    NoDataError,
    RequestTimeoutError,
    ResponseFormatError,
    ServerError,
    WeChatAPIError,
    WeChatError,
)
from .models import APIResult, Credential, CredentialGrant
from .stores import (
    AsyncCredentialStore,
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
)
from .telemetry import configure_telemetry

__all__ = [
    "APIResult",
    "AsyncCredentialStore",
    "AsyncWeChatClient",
    "Credential",
    "CredentialGrant",
    "CredentialStore",
    "ErrorCode",
    "FileCredentialStore",
    "HTTPStatusError",
    "InvalidConfigError",
    "MemoryCredentialStore",
    "NetworkError",
    "NoDataError",
    "RequestTimeoutError",
    "ResponseFormatError",
    "ServerError",
    "TelemetryConfig",
    "WeChatAPIError",
    "WeChatClient",
    "WeChatConfig",
    "WeChatError",
    "configure_telemetry",
]

__version__ = "0.1.0"
