"""Scene QR codes."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from ..core.request import APIRequest
from .base import EndpointMixin


def _scene_body(action: str, scene: int | str) -> dict[str, Any]:
    if isinstance(scene, str):
        return {
            "action_name": action.replace("_SCENE", "_STR_SCENE"),
            "action_info": {"scene": {"scene_str": scene}},
        }
    return {"action_name": action, "action_info": {"scene": {"scene_id": scene}}}


class QRCodeEndpoints(EndpointMixin):
    def create_tmp_qrcode(self, scene: int | str, expire_seconds: int) -> Any:
        """Create a temporary QR code; a string scene uses ``QR_STR_SCENE``."""
        body = _scene_body("QR_SCENE", scene)
        body["expire_seconds"] = expire_seconds
        return self._execute(APIRequest.post_json(self._url("/cgi-bin/qrcode/create"), body))

    def create_limit_qrcode(self, scene: int | str) -> Any:
        """Create a permanent QR code; a string scene uses ``QR_LIMIT_STR_SCENE``."""
        body = _scene_body("QR_LIMIT_SCENE", scene)
        return self._execute(APIRequest.post_json(self._url("/cgi-bin/qrcode/create"), body))

    def show_qrcode_url(self, ticket: str) -> str:
        """URL of the QR code image for ``ticket``. No request is made."""
        return f"{self.config.mp_prefix}showqrcode?ticket={quote(ticket, safe='')}"
