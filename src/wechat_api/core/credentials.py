"""Expiring-credential managers.

One generic component serves both credential families: the access token
(kind ``access_token``) and the signing tickets (kinds ``jsapi`` and
``wx_card``). Each manager is configured with a store and a fetcher; the
fetcher talks to the authority and returns a :class:`CredentialGrant`.

Two concurrent callers that both find the stored credential expired will both
fetch. The last ``save`` wins, and either credential is usable by anyone.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from ..models import TOKEN_SAFETY_MARGIN_SECONDS, Credential, CredentialGrant
from ..telemetry import get_logger, trace_operation

if TYPE_CHECKING:
    from ..stores import AsyncCredentialStore, CredentialStore, StoredCredential

Fetcher = Callable[[str], CredentialGrant]
AsyncFetcher = Callable[[str], Awaitable[CredentialGrant]]


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class CredentialManagerBase:
    """Shared lookup and construction logic for sync and async managers.

    Attributes:
        store: Where credentials are loaded from and saved to.
        default_kind: Kind used when a caller passes none.
        margin_seconds: Seconds subtracted from the reported lifetime.
    """

    def __init__(
        self,
        store: Any,
        *,
        default_kind: str,
        margin_seconds: int = TOKEN_SAFETY_MARGIN_SECONDS,
    ) -> None:
        self.store = store
        self.default_kind = default_kind
        self.margin_seconds = margin_seconds
        self._logger = get_logger()

    def resolve_kind(self, kind: str | None) -> str:
        return kind or self.default_kind

    @staticmethod
    def coerce(stored: StoredCredential) -> Credential | None:
        """Turn whatever a store returned into a credential."""
        if stored is None:
            return None
        if isinstance(stored, Credential):
            return stored
        if isinstance(stored, Mapping):
            return Credential.from_dict(dict(stored))
        msg = f"Store returned unsupported credential type {type(stored).__name__}"
        raise TypeError(msg)

    def cached(self, stored: StoredCredential, kind: str) -> Credential | None:
        """Return the stored credential if it is still valid, else ``None``."""
        credential = self.coerce(stored)
        if credential is not None and credential.is_valid():
            self._logger.debug("Credential cache hit", kind=kind)
            return credential
        self._logger.debug(
            "Credential missing or expired",
            kind=kind,
            present=credential is not None,
        )
        return None

    def build(self, grant: CredentialGrant, kind: str) -> Credential:
        credential = Credential.from_grant(grant, margin_seconds=self.margin_seconds)
        self._logger.info(
            "Fetched new credential",
            kind=kind,
            expires_in=grant.expires_in,
            expires_at=credential.expires_at.isoformat(),
        )
        return credential


class CredentialManager(CredentialManagerBase):
    """Synchronous expiring-credential manager."""

    def __init__(
        self,
        store: CredentialStore,
        fetcher: Fetcher,
        *,
        default_kind: str,
        margin_seconds: int = TOKEN_SAFETY_MARGIN_SECONDS,
    ) -> None:
        super().__init__(store, default_kind=default_kind, margin_seconds=margin_seconds)
        self._fetcher = fetcher

    def ensure_valid(self, kind: str | None = None) -> Credential:
        """Return a credential valid right now, fetching one if needed.

        Args:
            kind: Credential kind; defaults to the manager's kind.

        Returns:
            The stored credential when still valid, else a fresh one.
        """
        kind = self.resolve_kind(kind)
        with trace_operation("ensure_credential", attributes={"credential.kind": kind}):
            credential = self.cached(self.store.load(kind), kind)
            if credential is not None:
                return credential
            return self.fetch_new(kind)

    def get_latest(self, kind: str | None = None) -> Credential:
        """Get the currently effective credential without calling an endpoint."""
        return self.ensure_valid(kind)

    def fetch_new(self, kind: str | None = None) -> Credential:
        """Fetch a credential from the authority and save it.

        Errors from the fetcher or the store propagate unchanged and nothing
        is saved when the fetch fails.
        """
        kind = self.resolve_kind(kind)
        with trace_operation("fetch_credential", attributes={"credential.kind": kind}):
            grant = self._fetcher(kind)
            credential = self.build(grant, kind)
            self.store.save(kind, credential)
            return credential


class AsyncCredentialManager(CredentialManagerBase):
    """Asynchronous expiring-credential manager.

    The store may be synchronous or asynchronous.
    """

    def __init__(
        self,
        store: CredentialStore | AsyncCredentialStore,
        fetcher: AsyncFetcher,
        *,
        default_kind: str,
        margin_seconds: int = TOKEN_SAFETY_MARGIN_SECONDS,
    ) -> None:
        super().__init__(store, default_kind=default_kind, margin_seconds=margin_seconds)
        self._fetcher = fetcher

    async def ensure_valid(self, kind: str | None = None) -> Credential:
        """Return a credential valid right now, fetching one if needed."""
        kind = self.resolve_kind(kind)
        with trace_operation("ensure_credential", attributes={"credential.kind": kind}):
            credential = self.cached(await _maybe_await(self.store.load(kind)), kind)
            if credential is not None:
                return credential
            return await self.fetch_new(kind)

    async def get_latest(self, kind: str | None = None) -> Credential:
        """Get the currently effective credential without calling an endpoint."""
        return await self.ensure_valid(kind)

    async def fetch_new(self, kind: str | None = None) -> Credential:
        """Fetch a credential from the authority and save it."""
        kind = self.resolve_kind(kind)
        with trace_operation("fetch_credential", attributes={"credential.kind": kind}):
            grant = await self._fetcher(kind)
            credential = self.build(grant, kind)
            await _maybe_await(self.store.save(kind, credential))
            return credential
