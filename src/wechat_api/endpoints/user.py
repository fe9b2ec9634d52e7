"""Follower information endpoints."""

from __future__ import annotations

from typing import Any

from ..core.request import APIRequest
from .base import EndpointMixin


class UserEndpoints(EndpointMixin):
    def get_user(self, openid: str, *, lang: str = "en") -> Any:
        """Get one follower's profile."""
        return self._execute(
            APIRequest.get(self._url("/cgi-bin/user/info"), openid=openid, lang=lang)
        )

    def batch_get_users(self, openids: list[str], *, lang: str = "zh_CN") -> Any:
        """Get up to 100 follower profiles in one call."""
        body = {"user_list": [{"openid": openid, "lang": lang} for openid in openids]}
        return self._execute(APIRequest.post_json(self._url("/cgi-bin/user/info/batchget"), body))

    def get_followers(self, next_openid: str = "") -> Any:
        """List follower openids, 10000 per page, starting after ``next_openid``."""
        return self._execute(
            APIRequest.get(self._url("/cgi-bin/user/get"), next_openid=next_openid)
        )

    def update_remark(self, openid: str, remark: str) -> Any:
        body = {"openid": openid, "remark": remark}
        return self._execute(
            APIRequest.post_json(self._url("/cgi-bin/user/info/updateremark"), body)
        )
