"""Signatures for the JS-SDK config and card extension payloads."""

from __future__ import annotations

import hashlib
import secrets
import string
import time
from collections.abc import Mapping
from typing import Any

_NONCE_ALPHABET = string.ascii_lowercase + string.digits


def create_nonce_str(length: int = 15) -> str:
    return "".join(secrets.choice(_NONCE_ALPHABET) for _ in range(length))


def create_timestamp() -> str:
    return str(int(time.time()))


def raw_query(args: Mapping[str, Any]) -> str:
    """Join ``args`` as ``k=v`` pairs, keys sorted then lower-cased."""
    return "&".join(f"{key.lower()}={args[key]}" for key in sorted(args))


def _sha1(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()  # noqa: S324


def sign_js_config(nonce_str: str, jsapi_ticket: str, timestamp: str, url: str) -> str:
    """Sign a JS-SDK config.

    Args:
        nonce_str: Random string.
        jsapi_ticket: Current ``jsapi`` ticket.
        timestamp: Seconds since the epoch, as a string.
        url: Page URL, exactly as the page calling the JS-SDK sees it.
    """
    return _sha1(
        raw_query(
            {
                "jsapi_ticket": jsapi_ticket,
                "nonceStr": nonce_str,
                "timestamp": timestamp,
                "url": url,
            }
        )
    )


def sign_card_ext(
    api_ticket: str,
    card_id: str,
    timestamp: str,
    code: str = "",
    openid: str = "",
    balance: int | str | None = None,
) -> str:
    """Sign a card ``card_ext``: sha1 over the sorted, concatenated values."""
    values = sorted(
        [
            api_ticket,
            card_id,
            timestamp,
            code or "",
            openid or "",
            str(balance) if balance else "",
        ]
    )
    return _sha1("".join(values))


def build_js_config(
    app_id: str,
    jsapi_ticket: str,
    url: str,
    js_api_list: list[str],
    *,
    debug: bool = False,
    beta: bool = False,
    nonce_str: str | None = None,
    timestamp: str | None = None,
) -> dict[str, Any]:
    """Build the object passed to ``wx.config`` on the page."""
    nonce_str = nonce_str or create_nonce_str()
    timestamp = timestamp or create_timestamp()
    config: dict[str, Any] = {
        "debug": debug,
        "appId": app_id,
        "timestamp": timestamp,
        "nonceStr": nonce_str,
        "signature": sign_js_config(nonce_str, jsapi_ticket, timestamp, url),
        "jsApiList": js_api_list,
    }
    # beta enables wx.invoke for hardware integrations
    if beta:
        config["beta"] = beta
    return config


def build_card_ext(
    api_ticket: str,
    card_id: str,
    *,
    code: str = "",
    openid: str = "",
    balance: int | None = None,
    timestamp: str | None = None,
) -> dict[str, Any]:
    """Build a card ``card_ext`` object."""
    timestamp = timestamp or create_timestamp()
    ext: dict[str, Any] = {
        "timestamp": timestamp,
        "signature": sign_card_ext(api_ticket, card_id, timestamp, code, openid, balance),
        "code": code or "",
        "openid": openid or "",
    }
    if balance:
        ext["balance"] = balance
    return ext
