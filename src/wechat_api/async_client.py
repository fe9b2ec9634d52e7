"""Asynchronous WeChat API client.

Endpoint wrappers return awaitables. Calls interleave on one event loop; two
calls that both find the token expired may both fetch one, and the last save
wins.
"""

from __future__ import annotations

import asyncio
import functools
from pathlib import Path
from typing import TYPE_CHECKING, Any, Awaitable, Self

from .core.credentials import AsyncCredentialManager
from .core.dispatch import AsyncDispatcher
from .core.http_executor import AsyncHTTPExecutor
from .core.signing import build_card_ext, build_js_config
from .core.token_ops import ACCESS_TOKEN_KIND, JSAPI_TICKET, WX_CARD_TICKET, TokenOperations
from .endpoints import WeChatEndpoints
from .http import create_async_http_client
from .stores import MemoryCredentialStore
from .telemetry import get_logger

if TYPE_CHECKING:
    import os

    import httpx

    from .config import WeChatConfig
    from .core.request import APIRequest
    from .models import Credential, CredentialGrant
    from .stores import AsyncCredentialStore, CredentialStore


class AsyncWeChatClient(WeChatEndpoints):
    """Asynchronous WeChat public account client."""

    def __init__(
        self,
        config: WeChatConfig,
        *,
        token_store: CredentialStore | AsyncCredentialStore | None = None,
        ticket_store: CredentialStore | AsyncCredentialStore | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize async client.

        Args:
            config: Client configuration.
            token_store: Access token store, sync or async.
            ticket_store: Ticket store, sync or async.
            http_client: Pre-built HTTP client; it is not closed by :meth:`close`.
        """
        self.config = config
        self._owns_http = http_client is None
        self._http = http_client or create_async_http_client(config)
        self._executor = AsyncHTTPExecutor(self._http, config)
        self._logger = get_logger()

        self.tokens = AsyncCredentialManager(
            token_store or MemoryCredentialStore(),
            self._fetch_access_token,
            default_kind=ACCESS_TOKEN_KIND,
        )
        self.tickets = AsyncCredentialManager(
            ticket_store or MemoryCredentialStore(),
            self._fetch_ticket,
            default_kind=JSAPI_TICKET,
        )
        self._dispatcher = AsyncDispatcher(self.tokens)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    def set_endpoint(self, domain: str) -> None:
        """Switch to a regional access point, e.g. ``sh.api.weixin.qq.com``."""
        endpoint = self.config.region_endpoint(domain)
        if not self.config.is_region_endpoint(endpoint):
            self._logger.warning("Endpoint is not a known access point", endpoint=endpoint)
        self.config = self.config.with_overrides(endpoint=endpoint)
        self._logger.info("Endpoint changed", endpoint=self.config.endpoint)

    def _execute(self, request: APIRequest) -> Awaitable[Any]:
        if not request.authenticated:
            return self._executor.execute(request)
        return self._dispatcher.dispatch(functools.partial(self._executor.execute, request))

    # ------------------------------------------------------------------
    # Media files
    # ------------------------------------------------------------------
    async def upload_media(self, path: str | os.PathLike[str], media_type: str) -> Any:
        """Upload temporary media from a file path, reading it off the event loop."""
        path = Path(path)
        content = await asyncio.to_thread(path.read_bytes)
        return await self.upload_media_content(content, path.name, media_type)

    async def upload_news_image(self, path: str | os.PathLike[str]) -> Any:
        path = Path(path)
        content = await asyncio.to_thread(path.read_bytes)
        return await self.upload_news_image_content(content, path.name)

    # ------------------------------------------------------------------
    # Access token
    # ------------------------------------------------------------------
    async def _fetch_access_token(self, kind: str) -> CredentialGrant:
        body = await self._executor.execute(TokenOperations.access_token_request(self.config))
        return TokenOperations.grant_from_token_body(body)

    async def get_access_token(self) -> Credential:
        """Fetch and save a new access token, whatever the store holds."""
        return await self.tokens.fetch_new()

    async def get_latest_token(self) -> Credential:
        """Get the effective access token, fetching one only if needed."""
        return await self.tokens.get_latest()

    # ------------------------------------------------------------------
    # Tickets
    # ------------------------------------------------------------------
    async def _fetch_ticket(self, kind: str) -> CredentialGrant:
        body = await self._execute(TokenOperations.ticket_request(self.config, kind))
        return TokenOperations.grant_from_ticket_body(body)

    async def get_ticket(self, kind: str = JSAPI_TICKET) -> Credential:
        """Fetch and save a new ticket of ``kind`` (``jsapi`` or ``wx_card``)."""
        return await self.tickets.fetch_new(kind)

    async def get_latest_ticket(self, kind: str = JSAPI_TICKET) -> Credential:
        """Get the effective ticket of ``kind``, fetching one only if needed."""
        return await self.tickets.get_latest(kind)

    async def get_js_config(
        self,
        url: str,
        js_api_list: list[str],
        *,
        debug: bool = False,
        beta: bool = False,
    ) -> dict[str, Any]:
        """Build the signed ``wx.config`` parameters for the page at ``url``."""
        ticket = await self.tickets.ensure_valid(JSAPI_TICKET)
        return build_js_config(
            self.config.app_id,
            ticket.value,
            url,
            js_api_list,
            debug=debug,
            beta=beta,
        )

    async def get_card_ext(
        self,
        card_id: str,
        *,
        code: str = "",
        openid: str = "",
        balance: int | None = None,
    ) -> dict[str, Any]:
        """Build a signed ``card_ext`` for adding ``card_id`` from a page."""
        ticket = await self.tickets.ensure_valid(WX_CARD_TICKET)
        return build_card_ext(
            ticket.value,
            card_id,
            code=code,
            openid=openid,
            balance=balance,
        )
