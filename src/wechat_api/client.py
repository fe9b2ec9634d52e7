"""Synchronous WeChat API client."""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, Self

from .core.credentials import CredentialManager
from .core.dispatch import Dispatcher
from .core.http_executor import SyncHTTPExecutor
from .core.signing import build_card_ext, build_js_config
from .core.token_ops import ACCESS_TOKEN_KIND, JSAPI_TICKET, WX_CARD_TICKET, TokenOperations
from .endpoints import WeChatEndpoints
from .http import create_http_client
from .stores import MemoryCredentialStore
from .telemetry import get_logger

if TYPE_CHECKING:
    import httpx

    from .config import WeChatConfig
    from .core.request import APIRequest
    from .models import Credential, CredentialGrant
    from .stores import CredentialStore


class WeChatClient(WeChatEndpoints):
    """Synchronous WeChat public account client.

    The access token and tickets live in the given stores. The defaults keep
    them in process memory; pass shared stores to run several processes or
    hosts against the same app.

    Example::

        config = WeChatConfig(app_id="wx...", app_secret="...")
        with WeChatClient(config) as client:
            client.send_text(openid, "hello")
    """

    def __init__(
        self,
        config: WeChatConfig,
        *,
        token_store: CredentialStore | None = None,
        ticket_store: CredentialStore | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize client.

        Args:
            config: Client configuration.
            token_store: Access token store.
            ticket_store: Ticket store, keyed by ticket type.
            http_client: Pre-built HTTP client; it is not closed by :meth:`close`.
        """
        self.config = config
        self._owns_http = http_client is None
        self._http = http_client or create_http_client(config)
        self._executor = SyncHTTPExecutor(self._http, config)
        self._logger = get_logger()

        self.tokens = CredentialManager(
            token_store or MemoryCredentialStore(),
            self._fetch_access_token,
            default_kind=ACCESS_TOKEN_KIND,
        )
        self.tickets = CredentialManager(
            ticket_store or MemoryCredentialStore(),
            self._fetch_ticket,
            default_kind=JSAPI_TICKET,
        )
        self._dispatcher = Dispatcher(self.tokens)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http:
            self._http.close()

    def set_endpoint(self, domain: str) -> None:
        """Switch to a regional access point, e.g. ``sh.api.weixin.qq.com``."""
        endpoint = self.config.region_endpoint(domain)
        if not self.config.is_region_endpoint(endpoint):
            self._logger.warning("Endpoint is not a known access point", endpoint=endpoint)
        self.config = self.config.with_overrides(endpoint=endpoint)
        self._logger.info("Endpoint changed", endpoint=self.config.endpoint)

    def _execute(self, request: APIRequest) -> Any:
        if not request.authenticated:
            return self._executor.execute(request)
        return self._dispatcher.dispatch(functools.partial(self._executor.execute, request))

    # ------------------------------------------------------------------
    # Access token
    # ------------------------------------------------------------------
    def _fetch_access_token(self, kind: str) -> CredentialGrant:
        body = self._executor.execute(TokenOperations.access_token_request(self.config))
        return TokenOperations.grant_from_token_body(body)

    def get_access_token(self) -> Credential:
        """Fetch and save a new access token, whatever the store holds."""
        return self.tokens.fetch_new()

    def get_latest_token(self) -> Credential:
        """Get the effective access token, fetching one only if needed."""
        return self.tokens.get_latest()

    # ------------------------------------------------------------------
    # Tickets
    # ------------------------------------------------------------------
    def _fetch_ticket(self, kind: str) -> CredentialGrant:
        body = self._execute(TokenOperations.ticket_request(self.config, kind))
        return TokenOperations.grant_from_ticket_body(body)

    def get_ticket(self, kind: str = JSAPI_TICKET) -> Credential:
        """Fetch and save a new ticket of ``kind`` (``jsapi`` or ``wx_card``)."""
        return self.tickets.fetch_new(kind)

    def get_latest_ticket(self, kind: str = JSAPI_TICKET) -> Credential:
        """Get the effective ticket of ``kind``, fetching one only if needed."""
        return self.tickets.get_latest(kind)

    def get_js_config(
        self,
        url: str,
        js_api_list: list[str],
        *,
        debug: bool = False,
        beta: bool = False,
    ) -> dict[str, Any]:
        """Build the signed ``wx.config`` parameters for the page at ``url``."""
        ticket = self.tickets.ensure_valid(JSAPI_TICKET)
        return build_js_config(
            self.config.app_id,
            ticket.value,
            url,
            js_api_list,
            debug=debug,
            beta=beta,
        )

    def get_card_ext(
        self,
        card_id: str,
        *,
        code: str = "",
        openid: str = "",
        balance: int | None = None,
    ) -> dict[str, Any]:
        """Build a signed ``card_ext`` for adding ``card_id`` from a page."""
        ticket = self.tickets.ensure_valid(WX_CARD_TICKET)
        return build_card_ext(
            ticket.value,
            card_id,
            code=code,
            openid=openid,
            balance=balance,
        )
