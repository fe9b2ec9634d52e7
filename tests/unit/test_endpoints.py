"""Unit tests for endpoint wrappers, generic calls and runtime patching."""

from __future__ import annotations

import json
from collections.abc import Iterator

import httpx
import pytest
from structlog.testing import capture_logs

from wechat_api import APIResult, WeChatClient
from wechat_api.errors import InvalidConfigError


def _body(request) -> dict:
    return json.loads(request.content)


@pytest.fixture
def patched_names() -> Iterator[list[str]]:
    """Remove methods added to WeChatClient during a test."""
    names: list[str] = []
    yield names
    for name in names:
        if name in vars(WeChatClient):
            delattr(WeChatClient, name)


class TestCommonEndpoints:
    def test_clear_quota_defaults_to_own_app(self, client, server) -> None:
        server.add("/cgi-bin/clear_quota", {"errcode": 0, "errmsg": "ok"})

        client.clear_quota()

        assert _body(server.calls("/cgi-bin/clear_quota")[0]) == {"appid": "wx1"}

    def test_shorturl(self, client, server) -> None:
        server.add("/cgi-bin/shorturl", {"errcode": 0, "short_url": "http://w.url.cn/s/x"})

        result = client.shorturl("http://example.com/long")

        assert result["short_url"] == "http://w.url.cn/s/x"
        assert _body(server.calls("/cgi-bin/shorturl")[0]) == {
            "action": "long2short",
            "long_url": "http://example.com/long",
        }


class TestMenuEndpoints:
    def test_create_menu_posts_menu(self, client, server) -> None:
        menu = {"button": [{"type": "click", "name": "今日歌曲", "key": "V1001"}]}
        server.add("/cgi-bin/menu/create", {"errcode": 0, "errmsg": "ok"})

        client.create_menu(menu)

        assert _body(server.calls("/cgi-bin/menu/create")[0]) == menu

    def test_remove_menu(self, client, server) -> None:
        server.add("/cgi-bin/menu/delete", {"errcode": 0, "errmsg": "ok"})

        client.remove_menu()

        (request,) = server.calls("/cgi-bin/menu/delete")
        assert request.method == "GET"


class TestUserEndpoints:
    def test_get_user(self, client, server) -> None:
        server.add("/cgi-bin/user/info", {"openid": "o1", "subscribe": 1})

        client.get_user("o1")

        params = server.calls("/cgi-bin/user/info")[0].url.params
        assert params["openid"] == "o1"
        assert params["lang"] == "en"

    def test_batch_get_users(self, client, server) -> None:
        server.add("/cgi-bin/user/info/batchget", {"user_info_list": []})

        client.batch_get_users(["o1", "o2"])

        body = _body(server.calls("/cgi-bin/user/info/batchget")[0])
        assert [entry["openid"] for entry in body["user_list"]] == ["o1", "o2"]


class TestQRCodeEndpoints:
    def test_numeric_tmp_scene(self, client, server) -> None:
        server.add("/cgi-bin/qrcode/create", {"ticket": "Q1", "expire_seconds": 60})

        client.create_tmp_qrcode(123, 60)

        assert _body(server.calls("/cgi-bin/qrcode/create")[0]) == {
            "action_name": "QR_SCENE",
            "action_info": {"scene": {"scene_id": 123}},
            "expire_seconds": 60,
        }

    def test_string_limit_scene(self, client, server) -> None:
        server.add("/cgi-bin/qrcode/create", {"ticket": "Q1"})

        client.create_limit_qrcode("promo")

        body = _body(server.calls("/cgi-bin/qrcode/create")[0])
        assert body["action_name"] == "QR_LIMIT_STR_SCENE"
        assert body["action_info"] == {"scene": {"scene_str": "promo"}}

    def test_show_qrcode_url_makes_no_request(self, client, server) -> None:
        url = client.show_qrcode_url("a b/c")

        assert url == "https://mp.weixin.qq.com/cgi-bin/showqrcode?ticket=a%20b%2Fc"
        assert server.requests == []


class TestTemplateEndpoints:
    def test_send_template_optional_fields(self, client, server) -> None:
        server.add("/cgi-bin/message/template/send", {"errcode": 0, "msgid": 1})

        client.send_template("o1", "tpl", {"first": {"value": "hi"}}, url="http://example.com")

        body = _body(server.calls("/cgi-bin/message/template/send")[0])
        assert body["url"] == "http://example.com"
        assert "miniprogram" not in body


class TestMessageEndpoints:
    def test_kf_account(self, client, server) -> None:
        server.add("/cgi-bin/message/custom/send", {"errcode": 0, "errmsg": "ok"})

        client.send_image("o1", "M1", kf_account="test1@kftest")

        body = _body(server.calls("/cgi-bin/message/custom/send")[0])
        assert body["image"] == {"media_id": "M1"}
        assert body["customservice"] == {"kf_account": "test1@kftest"}

    def test_send_card_uses_wxcard_type(self, client, server) -> None:
        server.add("/cgi-bin/message/custom/send", {"errcode": 0, "errmsg": "ok"})

        client.send_card("o1", "card1")

        body = _body(server.calls("/cgi-bin/message/custom/send")[0])
        assert body["msgtype"] == "wxcard"
        assert body["wxcard"] == {"card_id": "card1"}


class TestCallApi:
    def test_relative_path(self, client, server) -> None:
        server.add("/cgi-bin/tags/get", {"tags": []})

        assert client.call_api("/cgi-bin/tags/get", method="get") == {"tags": []}
        (request,) = server.calls("/cgi-bin/tags/get")
        assert request.method == "GET"
        assert request.url.params["access_token"] == "T1"

    def test_include_response(self, client, server) -> None:
        server.add(
            "/cgi-bin/tags/get",
            lambda request: httpx.Response(
                200, json={"tags": []}, headers={"X-Request-Id": "req-1"}
            ),
        )

        result = client.call_api("/cgi-bin/tags/get", method="GET", include_response=True)

        assert isinstance(result, APIResult)
        assert result.value == {"tags": []}
        assert result.response.headers["x-request-id"] == "req-1"
        assert result.response.request.url.params["access_token"] == "T1"

    def test_include_response_after_retry(self, client, server) -> None:
        server.add(
            "/cgi-bin/tags/get",
            {"errcode": 40001, "errmsg": "invalid credential"},
            {"tags": []},
        )

        result = client.call_api("/cgi-bin/tags/get", method="GET", include_response=True)

        assert result.value == {"tags": []}
        assert result.response.request.url.params["access_token"] == "T2"

    def test_absolute_url_keeps_query(self, client, server) -> None:
        server.add("/card/create", {"card_id": "c1"})

        client.call_api("https://api.weixin.qq.com/card/create?debug=1", {"card": {}})

        params = server.calls("/card/create")[0].url.params
        assert params["debug"] == "1"
        assert params["access_token"] == "T1"


class TestPatch:
    def test_adds_method(self, client, server, patched_names) -> None:
        patched_names.append("send_gift")
        WeChatClient.patch("send_gift", "/cgi-bin/gift/send")
        server.add("/cgi-bin/gift/send", {"errcode": 0, "errmsg": "ok"})

        client.send_gift({"to": "o1"})

        (request,) = server.calls("/cgi-bin/gift/send")
        assert _body(request) == {"to": "o1"}
        assert request.url.params["access_token"] == "T1"

    def test_patched_method_retries_on_invalid_credential(
        self, client, server, patched_names
    ) -> None:
        patched_names.append("send_gift")
        WeChatClient.patch("send_gift", "/cgi-bin/gift/send")
        server.add(
            "/cgi-bin/gift/send",
            {"errcode": 40001, "errmsg": "invalid credential"},
            {"errcode": 0, "errmsg": "ok"},
        )

        client.send_gift({})

        assert len(server.calls("/cgi-bin/gift/send")) == 2

    def test_refuses_existing_name(self, patched_names) -> None:
        with pytest.raises(InvalidConfigError, match="already has"):
            WeChatClient.patch("get_ip", "/cgi-bin/other")

    def test_override_replaces_and_warns(self, client, server, patched_names) -> None:
        patched_names.append("get_ip")
        server.add("/cgi-bin/other", {"replaced": True})

        with capture_logs() as logs:
            WeChatClient.patch("get_ip", "/cgi-bin/other", override=True)

        assert client.get_ip() == {"replaced": True}
        assert any(entry["log_level"] == "warning" for entry in logs)

    @pytest.mark.parametrize(("name", "url"), [("", "/x"), ("x", ""), (None, "/x"), ("x", 5)])
    def test_rejects_non_strings(self, name, url) -> None:
        with pytest.raises(InvalidConfigError):
            WeChatClient.patch(name, url)
