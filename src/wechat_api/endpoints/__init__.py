"""Endpoint wrappers, grouped by API area."""

from __future__ import annotations

from .base import EndpointMixin
from .common import CommonEndpoints
from .media import MediaEndpoints
from .menu import MenuEndpoints
from .message import MessageEndpoints
from .qrcode import QRCodeEndpoints
from .template import TemplateEndpoints
from .user import UserEndpoints


class WeChatEndpoints(
    CommonEndpoints,
    MenuEndpoints,
    UserEndpoints,
    QRCodeEndpoints,
    TemplateEndpoints,
    MessageEndpoints,
    MediaEndpoints,
):
    """Every endpoint wrapper in one mixin."""


__all__ = [
    "CommonEndpoints",
    "EndpointMixin",
    "MediaEndpoints",
    "MenuEndpoints",
    "MessageEndpoints",
    "QRCodeEndpoints",
    "TemplateEndpoints",
    "UserEndpoints",
    "WeChatEndpoints",
]
