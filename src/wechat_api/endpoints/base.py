"""Base for endpoint mixins.

Endpoint methods only describe a call and hand it to ``_execute``. The sync
client executes it and returns the value; the async client returns an
awaitable, so every wrapper serves both clients unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..errors import InvalidConfigError
from ..telemetry import get_logger

if TYPE_CHECKING:
    from ..config import WeChatConfig
    from ..core.request import APIRequest


class EndpointMixin:
    """Shared plumbing for endpoint wrappers."""

    config: WeChatConfig

    def _execute(self, request: APIRequest) -> Any:
        raise NotImplementedError

    def _url(self, path: str) -> str:
        return self.config.url(path)

    def call_api(
        self,
        url: str,
        payload: Any = None,
        *,
        method: str = "POST",
        include_response: bool = False,
    ) -> Any:
        """Call any endpoint with the current access token attached.

        Args:
            url: Absolute URL or a path relative to the endpoint. An existing
                query string is kept.
            payload: JSON body for POST calls.
            method: HTTP method.
            include_response: Return an :class:`~wechat_api.models.APIResult`
                holding the value and the raw ``httpx.Response``.
        """
        from ..core.request import APIRequest

        return self._execute(
            APIRequest(
                method.upper(),
                self._url(url),
                json_body=payload,
                include_response=include_response,
            )
        )

    @classmethod
    def patch(cls, name: str, url: str, *, override: bool = False) -> None:
        """Add a JSON-POST endpoint method named ``name`` to this client class.

        For when the remote API gains an endpoint before this library does.
        The new method takes the JSON payload as its only argument.

        Raises:
            InvalidConfigError: If ``name`` already exists and ``override`` is
                false, or an argument is not a string.
        """
        if not isinstance(name, str) or not name:
            raise InvalidConfigError("patch expects a method name string", field="name")
        if not isinstance(url, str) or not url:
            raise InvalidConfigError("patch expects the request url as a string", field="url")

        if hasattr(cls, name):
            if not override:
                msg = (
                    f"{cls.__name__} already has an attribute named {name!r}; "
                    "pass override=True to replace it or pick another name"
                )
                raise InvalidConfigError(msg, field="name")
            get_logger().warning("Overriding existing client method", method=name, url=url)

        def endpoint(self: EndpointMixin, payload: Any = None) -> Any:
            return self.call_api(url, payload)

        endpoint.__name__ = name
        endpoint.__qualname__ = f"{cls.__name__}.{name}"
        endpoint.__doc__ = f"POST the payload to {url}."
        setattr(cls, name, endpoint)
