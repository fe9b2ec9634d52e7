"""Pydantic models for the WeChat API client.

Credentials are frozen: a stale one is replaced, never mutated.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Seconds shaved off the server-reported lifetime so a credential never
# expires while a request carrying it is in transit.
TOKEN_SAFETY_MARGIN_SECONDS = 10


class CredentialGrant(BaseModel):
    """What the authority hands back when issuing a token or ticket."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    value: str = Field(..., min_length=1)
    expires_in: int


class Credential(BaseModel):
    """An opaque token or ticket with an absolute expiry."""

    model_config = ConfigDict(frozen=True)

    value: str
    expires_at: datetime

    @field_validator("expires_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Treat a naive expiry as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @classmethod
    def from_grant(
        cls,
        grant: CredentialGrant,
        *,
        now: datetime | None = None,
        margin_seconds: int = TOKEN_SAFETY_MARGIN_SECONDS,
    ) -> Self:
        """Create a credential whose expiry is ``now + expires_in - margin``."""
        issued_at = now or datetime.now(UTC)
        return cls(
            value=grant.value,
            expires_at=issued_at + timedelta(seconds=grant.expires_in - margin_seconds),
        )

    def is_valid(self, *, now: datetime | None = None) -> bool:
        """Check the credential has a value and has not expired."""
        return bool(self.value) and (now or datetime.now(UTC)) < self.expires_at

    def time_until_expiry(self) -> timedelta:
        """Get time remaining until the credential expires."""
        return self.expires_at - datetime.now(UTC)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict for shared stores."""
        return {"value": self.value, "expires_at": self.expires_at.isoformat()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Rebuild a credential from :meth:`to_dict` output.

        Also accepts the ``{"accessToken"|"ticket": ..., "expireTime": ms}``
        shape written by older deployments sharing the same store.
        """
        if "value" in data:
            expires_at = data["expires_at"]
            if isinstance(expires_at, str):
                expires_at = datetime.fromisoformat(expires_at)
            return cls(value=data["value"], expires_at=expires_at)

        value = data.get("accessToken", data.get("ticket", ""))
        expire_ms = data.get("expireTime", 0)
        return cls(
            value=value or "",
            expires_at=datetime.fromtimestamp(expire_ms / 1000, tz=UTC),
        )


class APIResult(BaseModel):
    """A normalized value together with the response it came from."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any
    response: Any = None
