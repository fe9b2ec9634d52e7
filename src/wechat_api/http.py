"""HTTP client construction for the WeChat API client."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .config import WeChatConfig

USER_AGENT = "wechat-api/0.1.0 Python"


def read_timeout(config: WeChatConfig) -> httpx.Timeout:
    """Timeout for ordinary JSON calls."""
    return httpx.Timeout(config.timeout, connect=config.connect_timeout)


def upload_timeout(config: WeChatConfig) -> httpx.Timeout:
    """Timeout for calls that move media files."""
    return httpx.Timeout(config.upload_timeout, connect=config.connect_timeout)


def create_http_client(config: WeChatConfig) -> httpx.Client:
    """Create configured sync HTTP client.

    Args:
        config: Client configuration.

    Returns:
        Configured httpx.Client.
    """
    return httpx.Client(
        timeout=read_timeout(config),
        headers={"User-Agent": USER_AGENT},
        follow_redirects=False,
    )


def create_async_http_client(config: WeChatConfig) -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Args:
        config: Client configuration.

    Returns:
        Configured httpx.AsyncClient.
    """
    return httpx.AsyncClient(
        timeout=read_timeout(config),
        headers={"User-Agent": USER_AGENT},
        follow_redirects=False,
    )
