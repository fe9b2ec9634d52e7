"""Unit tests for the asynchronous client."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from wechat_api import AsyncWeChatClient
from wechat_api.errors import ServerError, WeChatAPIError
from wechat_api.models import Credential

IP_PATH = "/cgi-bin/getcallbackip"


class AsyncDictStore:
    def __init__(self) -> None:
        self.data: dict[str, Credential] = {}

    async def load(self, kind: str) -> Credential | None:
        return self.data.get(kind)

    async def save(self, kind: str, credential: Credential) -> None:
        self.data[kind] = credential


@pytest.fixture
def make_async_client(config, server, token_store, ticket_store):
    def factory(**overrides: Any) -> AsyncWeChatClient:
        kwargs: dict[str, Any] = {
            "token_store": token_store,
            "ticket_store": ticket_store,
            "http_client": httpx.AsyncClient(transport=server.transport()),
        }
        kwargs.update(overrides)
        return AsyncWeChatClient(config, **kwargs)

    return factory


class TestAsyncWeChatClient:
    def test_call_attaches_token(self, make_async_client, server) -> None:
        server.add(IP_PATH, {"ip_list": ["1.1.1.1"]})

        async def run() -> Any:
            async with make_async_client() as client:
                return await client.get_ip()

        assert asyncio.run(run()) == {"ip_list": ["1.1.1.1"]}
        assert server.calls(IP_PATH)[0].url.params["access_token"] == "T1"

    def test_retries_once_on_invalid_credential(self, make_async_client, server) -> None:
        server.add(IP_PATH, {"errcode": 40001, "errmsg": "invalid credential"}, {"ip_list": []})

        async def run() -> Any:
            return await make_async_client().get_ip()

        assert asyncio.run(run()) == {"ip_list": []}
        tokens = [r.url.params["access_token"] for r in server.calls(IP_PATH)]
        assert tokens == ["T1", "T2"]

    def test_gives_up_after_two_attempts(self, make_async_client, server) -> None:
        server.add(IP_PATH, {"errcode": 40001, "errmsg": "invalid credential"})

        with pytest.raises(WeChatAPIError):
            asyncio.run(make_async_client().get_ip())
        assert len(server.calls(IP_PATH)) == 2

    def test_server_error(self, make_async_client, server) -> None:
        server.add(IP_PATH, lambda request: httpx.Response(503))

        with pytest.raises(ServerError):
            asyncio.run(make_async_client().get_ip())

    def test_async_stores(self, make_async_client, server, sample_ticket_response) -> None:
        tokens = AsyncDictStore()
        tickets = AsyncDictStore()
        server.add("/cgi-bin/ticket/getticket", sample_ticket_response)
        client = make_async_client(token_store=tokens, ticket_store=tickets)

        async def run() -> dict[str, Any]:
            await client.get_latest_token()
            return await client.get_js_config("http://example.com", ["scanQRCode"])

        config = asyncio.run(run())

        assert tokens.data["access_token"].value == "T1"
        assert tickets.data["jsapi"].value == "J1"
        assert config["appId"] == "wx1"

    def test_binary_media(self, make_async_client, server) -> None:
        server.add(
            "/cgi-bin/media/get",
            lambda request: httpx.Response(
                200, content=b"AMR", headers={"content-type": "audio/amr"}
            ),
        )

        assert asyncio.run(make_async_client().get_media("M1")) == b"AMR"

    def test_upload_reads_file_in_worker_thread(
        self, make_async_client, server, tmp_path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        image = tmp_path / "photo.jpg"
        image.write_bytes(b"\xff\xd8jpeg")
        server.add("/cgi-bin/media/upload", {"type": "image", "media_id": "M1"})
        offloaded: list[Any] = []
        to_thread = asyncio.to_thread

        async def recording_to_thread(func: Any, *args: Any) -> Any:
            offloaded.append(func)
            return await to_thread(func, *args)

        monkeypatch.setattr(asyncio, "to_thread", recording_to_thread)

        result = asyncio.run(make_async_client().upload_image(image))

        assert result["media_id"] == "M1"
        assert len(offloaded) == 1
        (request,) = server.calls("/cgi-bin/media/upload")
        assert b"\xff\xd8jpeg" in request.content
        assert request.extensions["timeout"]["read"] == 60.0

    def test_upload_news_image(self, make_async_client, server, tmp_path) -> None:
        image = tmp_path / "inline.png"
        image.write_bytes(b"\x89PNG")
        server.add("/cgi-bin/media/uploadimg", {"url": "http://mmbiz.qpic.cn/x"})

        result = asyncio.run(make_async_client().upload_news_image(image))

        assert result == {"url": "http://mmbiz.qpic.cn/x"}
        assert b'filename="inline.png"' in server.calls("/cgi-bin/media/uploadimg")[0].content

    def test_upload_rejects_unknown_media_type(self, make_async_client, tmp_path) -> None:
        path = tmp_path / "a.bin"
        path.write_bytes(b"x")

        with pytest.raises(ValueError, match="media_type"):
            asyncio.run(make_async_client().upload_media(path, "document"))

    def test_close_keeps_injected_client(self, config, server) -> None:
        http_client = httpx.AsyncClient(transport=server.transport())

        async def run() -> None:
            async with AsyncWeChatClient(config, http_client=http_client):
                pass

        asyncio.run(run())
        assert not http_client.is_closed
