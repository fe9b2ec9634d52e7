"""Call dispatch with automatic credential attachment.

Every authenticated endpoint call runs through a dispatcher: it obtains a
valid access token, hands it to the call, and when the authority rejects the
token with code 40001 it forces a refresh and runs the call exactly once more.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Awaitable, Callable, TypeVar

from ..errors import WeChatAPIError
from ..telemetry import get_logger, trace_operation

if TYPE_CHECKING:
    from ..models import Credential
    from .credentials import AsyncCredentialManager, CredentialManager

T = TypeVar("T")


def should_retry(error: BaseException) -> bool:
    """Check whether an error means the presented token was rejected."""
    return isinstance(error, WeChatAPIError) and error.is_credential_expired


class Dispatcher:
    """Synchronous dispatcher."""

    def __init__(self, tokens: CredentialManager) -> None:
        self._tokens = tokens
        self._logger = get_logger()

    def dispatch(self, call: Callable[[Credential], T]) -> T:
        """Run ``call`` with a valid credential, retrying once on 40001.

        Args:
            call: Performs one endpoint request with the given credential.

        Returns:
            Whatever ``call`` returns.

        Raises:
            WeChatError: From credential acquisition (``call`` is not run) or
                from the final attempt.
        """
        with trace_operation("dispatch") as span:
            credential = self._tokens.ensure_valid()
            try:
                return call(credential)
            except WeChatAPIError as e:
                if not should_retry(e):
                    raise
                self._logger.warning("Access token rejected, refreshing and retrying", code=e.code)
                span.set_attribute("dispatch.retried", True)

            credential = self._tokens.fetch_new()
            return call(credential)

    def wrap(self, call: Callable[[Credential], T]) -> Callable[[], T]:
        """Turn a credential-taking call into a dispatched zero-argument call."""
        return functools.partial(self.dispatch, call)


class AsyncDispatcher:
    """Asynchronous dispatcher."""

    def __init__(self, tokens: AsyncCredentialManager) -> None:
        self._tokens = tokens
        self._logger = get_logger()

    async def dispatch(self, call: Callable[[Credential], Awaitable[T]]) -> T:
        """Await ``call`` with a valid credential, retrying once on 40001."""
        with trace_operation("dispatch") as span:
            credential = await self._tokens.ensure_valid()
            try:
                return await call(credential)
            except WeChatAPIError as e:
                if not should_retry(e):
                    raise
                self._logger.warning("Access token rejected, refreshing and retrying", code=e.code)
                span.set_attribute("dispatch.retried", True)

            credential = await self._tokens.fetch_new()
            return await call(credential)

    def wrap(self, call: Callable[[Credential], Awaitable[T]]) -> Callable[[], Awaitable[T]]:
        """Turn a credential-taking call into a dispatched zero-argument call."""
        return functools.partial(self.dispatch, call)
