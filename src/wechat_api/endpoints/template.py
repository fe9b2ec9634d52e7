"""Template message endpoints."""

from __future__ import annotations

from typing import Any

from ..core.request import APIRequest
from .base import EndpointMixin


class TemplateEndpoints(EndpointMixin):
    def set_industry(self, primary_industry_id: str, secondary_industry_id: str) -> Any:
        body = {
            "industry_id1": primary_industry_id,
            "industry_id2": secondary_industry_id,
        }
        return self._execute(
            APIRequest.post_json(self._url("/cgi-bin/template/api_set_industry"), body)
        )

    def get_industry(self) -> Any:
        return self._execute(APIRequest.get(self._url("/cgi-bin/template/get_industry")))

    def add_template(self, template_id_short: str) -> Any:
        """Add a template from the library by its short id; returns its ``template_id``."""
        body = {"template_id_short": template_id_short}
        return self._execute(
            APIRequest.post_json(self._url("/cgi-bin/template/api_add_template"), body)
        )

    def get_all_private_templates(self) -> Any:
        return self._execute(
            APIRequest.get(self._url("/cgi-bin/template/get_all_private_template"))
        )

    def del_private_template(self, template_id: str) -> Any:
        body = {"template_id": template_id}
        return self._execute(
            APIRequest.post_json(self._url("/cgi-bin/template/del_private_template"), body)
        )

    def send_template(
        self,
        openid: str,
        template_id: str,
        data: dict[str, Any],
        *,
        url: str | None = None,
        miniprogram: dict[str, Any] | None = None,
    ) -> Any:
        """Send a template message.

        Args:
            openid: Recipient.
            template_id: Template to render.
            data: Template fields, e.g. ``{"first": {"value": "...", "color": "#173177"}}``.
            url: Page opened when the message is tapped.
            miniprogram: ``{"appid": ..., "pagepath": ...}`` to open a mini program instead.
        """
        body: dict[str, Any] = {"touser": openid, "template_id": template_id, "data": data}
        if url is not None:
            body["url"] = url
        if miniprogram is not None:
            body["miniprogram"] = miniprogram
        return self._execute(
            APIRequest.post_json(self._url("/cgi-bin/message/template/send"), body)
        )
