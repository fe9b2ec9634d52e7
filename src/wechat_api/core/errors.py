"""Centralized error factory.

Provides consistent error creation from httpx exceptions, bad HTTP statuses
and authority error bodies.
"""

from __future__ import annotations

from typing import Any

import httpx

from ..errors import (
    HTTPStatusError,
    NetworkError,
    RequestTimeoutError,
    ServerError,
    WeChatAPIError,
    WeChatError,
)


class ErrorFactory:
    """Centralized error creation with consistent structure."""

    @staticmethod
    def from_http_response(response: httpx.Response) -> HTTPStatusError:
        """Create an error for a non-success HTTP status.

        Args:
            response: HTTP response object.

        Returns:
            ServerError for 5xx statuses, HTTPStatusError otherwise.
        """
        status = response.status_code
        if status >= 500:
            return ServerError(f"Server error: {status}", status_code=status)
        return HTTPStatusError(f"Request failed with status {status}", status_code=status)

    @staticmethod
    def from_exception(
        exc: Exception,
        *,
        timeout_seconds: float | None = None,
    ) -> WeChatError:
        """Create a client error from a transport exception.

        Args:
            exc: Original exception.
            timeout_seconds: Timeout that applied to the failed request.

        Returns:
            Appropriate WeChatError subclass.
        """
        if isinstance(exc, WeChatError):
            return exc

        if isinstance(exc, httpx.TimeoutException):
            return RequestTimeoutError(
                f"Request timed out: {exc}",
                timeout_seconds=timeout_seconds,
                cause=exc,
            )

        if isinstance(exc, httpx.ConnectError):
            return NetworkError(f"Connection failed: {exc}", cause=exc)

        if isinstance(exc, httpx.HTTPError):
            return NetworkError(f"HTTP error: {exc}", cause=exc)

        return NetworkError(f"Unexpected error: {exc}", cause=exc)

    @staticmethod
    def from_body(
        body: dict[str, Any],
        response: httpx.Response | None = None,
    ) -> WeChatAPIError:
        """Create an error from a body carrying a non-zero ``errcode``."""
        code = body.get("errcode")
        message = body.get("errmsg") or f"WeChat API error {code}"
        return WeChatAPIError(message, code, data=body, response=response)
