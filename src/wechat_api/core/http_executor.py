"""HTTP executors shared by the sync and async clients.

An executor issues exactly one HTTP request per call. Transport failures are
mapped to client errors and raised; they are never retried here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from ..http import read_timeout, upload_timeout
from ..telemetry import trace_operation
from .errors import ErrorFactory
from .normalizer import ResponseNormalizer

if TYPE_CHECKING:
    from ..config import WeChatConfig
    from ..models import Credential
    from .request import APIRequest


class HTTPExecutorBase:
    """Timeout selection and span attributes common to both executors."""

    def __init__(self, config: WeChatConfig) -> None:
        self._read_timeout = read_timeout(config)
        self._upload_timeout = upload_timeout(config)

    def timeout_for(self, request: APIRequest) -> httpx.Timeout:
        return self._upload_timeout if request.upload or request.binary else self._read_timeout

    @staticmethod
    def finish(request: APIRequest, response: httpx.Response) -> Any:
        """Normalize ``response``, keeping it alongside the value when asked."""
        if request.include_response:
            return ResponseNormalizer.normalize_result(response, binary=request.binary)
        return ResponseNormalizer.normalize(response, binary=request.binary)

    @staticmethod
    def span_attributes(request: APIRequest) -> dict[str, Any]:
        # The query string carries the token, so only the bare URL is recorded.
        return {
            "http.method": request.method,
            "http.url": request.url,
            "wechat.upload": request.upload,
            "wechat.binary": request.binary,
        }


class SyncHTTPExecutor(HTTPExecutorBase):
    """Synchronous HTTP executor."""

    def __init__(self, client: httpx.Client, config: WeChatConfig) -> None:
        super().__init__(config)
        self._client = client

    def execute(self, request: APIRequest, credential: Credential | None = None) -> Any:
        """Issue ``request`` and return its normalized value.

        Raises:
            NetworkError: On transport failure, bad status or malformed body.
            WeChatAPIError: When the authority reports an error.
        """
        timeout = self.timeout_for(request)
        with trace_operation("http_request", attributes=self.span_attributes(request)):
            try:
                response = self._client.request(**request.build(credential), timeout=timeout)
            except httpx.HTTPError as e:
                raise ErrorFactory.from_exception(e, timeout_seconds=timeout.read) from e
            return self.finish(request, response)


class AsyncHTTPExecutor(HTTPExecutorBase):
    """Asynchronous HTTP executor."""

    def __init__(self, client: httpx.AsyncClient, config: WeChatConfig) -> None:
        super().__init__(config)
        self._client = client

    async def execute(self, request: APIRequest, credential: Credential | None = None) -> Any:
        """Issue ``request`` and return its normalized value."""
        timeout = self.timeout_for(request)
        with trace_operation("http_request", attributes=self.span_attributes(request)):
            try:
                response = await self._client.request(
                    **request.build(credential), timeout=timeout
                )
            except httpx.HTTPError as e:
                raise ErrorFactory.from_exception(e, timeout_seconds=timeout.read) from e
            return self.finish(request, response)
