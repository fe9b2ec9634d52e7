"""Response normalization.

Every endpoint funnels its HTTP response through :class:`ResponseNormalizer`,
so the dispatcher can rely on seeing 40001 as a :class:`WeChatAPIError`
regardless of which endpoint produced it.
"""

from __future__ import annotations

from typing import Any

import httpx

from ..errors import NoDataError, ResponseFormatError
from ..models import APIResult
from .errors import ErrorFactory

# Binary endpoints report failures with one of these content types.
JSON_LIKE_CONTENT_TYPES = ("application/json", "text/plain")


class ResponseNormalizer:
    """Map a raw response to a value or a typed error."""

    @staticmethod
    def check_status(response: httpx.Response) -> None:
        """Raise for a non-success HTTP status."""
        if not response.is_success:
            raise ErrorFactory.from_http_response(response)

    @staticmethod
    def is_json_like(response: httpx.Response) -> bool:
        content_type = response.headers.get("content-type", "")
        media_type = content_type.split(";", 1)[0].strip().lower()
        return media_type in JSON_LIKE_CONTENT_TYPES

    @staticmethod
    def parse_body(response: httpx.Response) -> Any:
        """Decode the JSON body, or ``None`` when the body is empty."""
        if not response.content or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ResponseFormatError(
                cause=e,
                content_type=response.headers.get("content-type"),
            ) from e

    @staticmethod
    def normalize_body(body: Any, response: httpx.Response | None = None) -> Any:
        """Apply the errcode and no-data rules to an already decoded body.

        Raises:
            NoDataError: When ``body`` is ``None``.
            WeChatAPIError: When ``body`` carries a truthy ``errcode``.
        """
        if body is None:
            raise NoDataError(response=response)
        if isinstance(body, dict) and body.get("errcode"):
            raise ErrorFactory.from_body(body, response)
        return body

    @classmethod
    def normalize(cls, response: httpx.Response, *, binary: bool = False) -> Any:
        """Normalize a response into its value.

        Args:
            response: HTTP response.
            binary: The endpoint returns media; unless the server answered
                with a JSON-like content type, the raw bytes are returned.

        Returns:
            Parsed JSON body, or bytes for binary media.
        """
        cls.check_status(response)
        if binary and not cls.is_json_like(response):
            return response.content
        return cls.normalize_body(cls.parse_body(response), response)

    @classmethod
    def normalize_result(cls, response: httpx.Response, *, binary: bool = False) -> APIResult:
        """Like :meth:`normalize`, keeping the response alongside the value."""
        return APIResult(value=cls.normalize(response, binary=binary), response=response)
