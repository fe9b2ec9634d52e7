"""Customer service messages.

Every sender takes an optional ``kf_account`` to send as a specific customer
service account.
"""

from __future__ import annotations

from typing import Any

from ..core.request import APIRequest
from .base import EndpointMixin


class MessageEndpoints(EndpointMixin):
    def send_message(
        self,
        openid: str,
        msgtype: str,
        content: dict[str, Any],
        *,
        kf_account: str | None = None,
    ) -> Any:
        """Send a message of any type; ``content`` becomes the ``msgtype`` field."""
        body: dict[str, Any] = {"touser": openid, "msgtype": msgtype, msgtype: content}
        if kf_account:
            body["customservice"] = {"kf_account": kf_account}
        return self._execute(
            APIRequest.post_json(self._url("/cgi-bin/message/custom/send"), body)
        )

    def send_text(self, openid: str, text: str, *, kf_account: str | None = None) -> Any:
        return self.send_message(openid, "text", {"content": text}, kf_account=kf_account)

    def send_image(self, openid: str, media_id: str, *, kf_account: str | None = None) -> Any:
        return self.send_message(openid, "image", {"media_id": media_id}, kf_account=kf_account)

    def send_voice(self, openid: str, media_id: str, *, kf_account: str | None = None) -> Any:
        return self.send_message(openid, "voice", {"media_id": media_id}, kf_account=kf_account)

    def send_video(
        self,
        openid: str,
        media_id: str,
        thumb_media_id: str,
        *,
        kf_account: str | None = None,
    ) -> Any:
        content = {"media_id": media_id, "thumb_media_id": thumb_media_id}
        return self.send_message(openid, "video", content, kf_account=kf_account)

    def send_music(
        self,
        openid: str,
        music: dict[str, Any],
        *,
        kf_account: str | None = None,
    ) -> Any:
        """Send music: ``title``, ``description``, ``musicurl``, ``hqmusicurl``, ``thumb_media_id``."""
        return self.send_message(openid, "music", music, kf_account=kf_account)

    def send_news(
        self,
        openid: str,
        articles: list[dict[str, Any]],
        *,
        kf_account: str | None = None,
    ) -> Any:
        return self.send_message(openid, "news", {"articles": articles}, kf_account=kf_account)

    def send_mpnews(self, openid: str, media_id: str, *, kf_account: str | None = None) -> Any:
        return self.send_message(openid, "mpnews", {"media_id": media_id}, kf_account=kf_account)

    def send_card(
        self,
        openid: str,
        card_id: str,
        card_ext: dict[str, Any] | None = None,
        *,
        kf_account: str | None = None,
    ) -> Any:
        content: dict[str, Any] = {"card_id": card_id}
        if card_ext is not None:
            content["card_ext"] = card_ext
        return self.send_message(openid, "wxcard", content, kf_account=kf_account)
