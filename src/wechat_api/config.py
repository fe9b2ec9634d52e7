"""Configuration for the WeChat API client.

Uses Pydantic v2 for validation with sensible defaults.
"""

from __future__ import annotations

from typing import Annotated, Any, Self
from urllib.parse import urlsplit

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    field_validator,
)

DEFAULT_ENDPOINT = "https://api.weixin.qq.com"

# Regional access points offered by the authority.
REGION_DOMAINS = frozenset(
    {
        "api.weixin.qq.com",
        "sh.api.weixin.qq.com",
        "sz.api.weixin.qq.com",
        "hk.api.weixin.qq.com",
    }
)


class TelemetryConfig(BaseModel):
    """Logging and tracing configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    service_name: str = "wechat-api"
    log_level: str = "INFO"


class WeChatConfig(BaseModel):
    """Main configuration for the WeChat client."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    # Required
    app_id: str = Field(..., min_length=1)
    app_secret: SecretStr

    # Endpoints
    endpoint: str = DEFAULT_ENDPOINT
    mp_prefix: str = "https://mp.weixin.qq.com/cgi-bin/"

    # HTTP settings
    timeout: Annotated[float, Field(gt=0, le=300)] = 15.0
    connect_timeout: Annotated[float, Field(gt=0, le=60)] = 10.0
    upload_timeout: Annotated[float, Field(gt=0, le=600)] = 60.0

    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @field_validator("app_secret")
    @classmethod
    def validate_secret(cls, v: SecretStr) -> SecretStr:
        """Reject an empty app secret."""
        if not v.get_secret_value():
            msg = "app_secret must not be empty"
            raise ValueError(msg)
        return v

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Require an absolute http(s) URL without trailing slash."""
        if not v.startswith(("http://", "https://")):
            msg = f"endpoint must be an absolute http(s) URL, got {v!r}"
            raise ValueError(msg)
        return v.rstrip("/")

    def url(self, path: str) -> str:
        """Join a ``/cgi-bin/...`` style path onto the endpoint."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.endpoint}/{path.lstrip('/')}"

    def with_overrides(self, **kwargs: Any) -> Self:
        """Create new config with overridden values."""
        data = self.model_dump()
        data.update(kwargs)
        return self.__class__(**data)

    @staticmethod
    def region_endpoint(domain: str) -> str:
        """Build the endpoint URL for a regional access point domain."""
        domain = domain.strip().rstrip("/")
        if domain.startswith(("http://", "https://")):
            return domain
        return f"https://{domain}"

    @staticmethod
    def is_region_endpoint(endpoint: str) -> bool:
        """Check ``endpoint`` points at one of the authority's access points."""
        return urlsplit(endpoint).hostname in REGION_DOMAINS

    @classmethod
    def from_env(cls, prefix: str = "WECHAT_") -> Self:
        """Create config from environment variables."""
        import os

        def get_env(key: str, default: Any = None) -> Any:
            return os.environ.get(f"{prefix}{key}", default)

        app_id = get_env("APP_ID")
        if not app_id:
            msg = f"{prefix}APP_ID environment variable is required"
            raise ValueError(msg)

        app_secret = get_env("APP_SECRET")
        if not app_secret:
            msg = f"{prefix}APP_SECRET environment variable is required"
            raise ValueError(msg)

        return cls(
            app_id=app_id,
            app_secret=app_secret,
            endpoint=get_env("ENDPOINT", DEFAULT_ENDPOINT),
            timeout=float(get_env("TIMEOUT", "15.0")),
            upload_timeout=float(get_env("UPLOAD_TIMEOUT", "60.0")),
        )
