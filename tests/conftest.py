"""
Shared test fixtures for WeChat client tests.

Provides a fake authority behind ``httpx.MockTransport``, configuration
and recording credential stores.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from wechat_api.config import TelemetryConfig, WeChatConfig
from wechat_api.models import Credential
from wechat_api.stores import MemoryCredentialStore

TOKEN_PATH = "/cgi-bin/token"
TICKET_PATH = "/cgi-bin/ticket/getticket"


class FakeWeChatServer:
    """Routes requests by path to queued responses.

    A queued item may be a dict (sent as a 200 JSON body), a callable taking
    the request and returning a response, or an exception to raise. The last
    item of a queue is sticky. Token requests without a queued answer get a
    fresh ``T1``, ``T2``, ... token each.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, list[Any]] = {}
        self.tokens_issued = 0

    def add(self, path: str, *items: Any) -> None:
        self.routes.setdefault(path, []).extend(items)

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        queue = self.routes.get(path)

        if not queue:
            if path == TOKEN_PATH:
                self.tokens_issued += 1
                return httpx.Response(
                    200,
                    json={"access_token": f"T{self.tokens_issued}", "expires_in": 7200},
                )
            return httpx.Response(404, text="not found")

        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item(request)
        return httpx.Response(200, json=item)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class RecordingStore(MemoryCredentialStore):
    """Memory store that records every load and save."""

    def __init__(self) -> None:
        super().__init__()
        self.loads: list[str] = []
        self.saves: list[tuple[str, Credential]] = []

    def load(self, kind: str) -> Credential | None:
        self.loads.append(kind)
        return super().load(kind)

    def save(self, kind: str, credential: Credential) -> None:
        self.saves.append((kind, credential))
        super().save(kind, credential)


@pytest.fixture
def config() -> WeChatConfig:
    """Provide a basic client configuration for testing."""
    return WeChatConfig(
        app_id="wx1",
        app_secret="s1",
        telemetry=TelemetryConfig(enabled=False),
    )


@pytest.fixture
def server() -> FakeWeChatServer:
    return FakeWeChatServer()


@pytest.fixture
def token_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def ticket_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def make_client(
    config: WeChatConfig,
    server: FakeWeChatServer,
    token_store: RecordingStore,
    ticket_store: RecordingStore,
) -> Callable[..., Any]:
    """Build a sync client wired to the fake server."""
    from wechat_api.client import WeChatClient

    def factory(**overrides: Any) -> WeChatClient:
        client_config = overrides.pop("config", config)
        kwargs: dict[str, Any] = {
            "token_store": token_store,
            "ticket_store": ticket_store,
            "http_client": httpx.Client(transport=server.transport()),
        }
        kwargs.update(overrides)
        return WeChatClient(client_config, **kwargs)

    return factory


@pytest.fixture
def client(make_client: Callable[..., Any]) -> Any:
    return make_client()


@pytest.fixture
def sample_token_response() -> dict[str, Any]:
    """Provide a sample token issuance body."""
    return {"access_token": "T1", "expires_in": 7200}


@pytest.fixture
def sample_ticket_response() -> dict[str, Any]:
    """Provide a sample ticket issuance body."""
    return {"errcode": 0, "errmsg": "ok", "ticket": "J1", "expires_in": 7200}
