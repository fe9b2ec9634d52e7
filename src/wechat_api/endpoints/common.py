"""Server IP list, quota reset and short URLs."""

from __future__ import annotations

from typing import Any

from ..core.request import APIRequest
from .base import EndpointMixin


class CommonEndpoints(EndpointMixin):
    def get_ip(self) -> Any:
        """Get the authority's callback server IP list (``{"ip_list": [...]}``)."""
        return self._execute(APIRequest.get(self._url("/cgi-bin/getcallbackip")))

    def clear_quota(self, app_id: str | None = None) -> Any:
        """Reset the daily call quota of ``app_id`` (defaults to this app)."""
        body = {"appid": app_id or self.config.app_id}
        return self._execute(APIRequest.post_json(self._url("/cgi-bin/clear_quota"), body))

    def shorturl(self, long_url: str) -> Any:
        """Shorten an ``http://``, ``https://`` or ``weixin://wxpay`` URL."""
        body = {"action": "long2short", "long_url": long_url}
        return self._execute(APIRequest.post_json(self._url("/cgi-bin/shorturl"), body))
