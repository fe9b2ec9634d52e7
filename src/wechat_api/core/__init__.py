"""Core components for the WeChat API client.

Credential lifecycle, call dispatch and response normalization shared
between the sync and async clients.
"""

from __future__ import annotations

from .credentials import AsyncCredentialManager, CredentialManager, CredentialManagerBase
from .dispatch import AsyncDispatcher, Dispatcher, should_retry
from .errors import ErrorFactory
from .http_executor import AsyncHTTPExecutor, SyncHTTPExecutor
from .normalizer import ResponseNormalizer
from .request import APIRequest
from .token_ops import TokenOperations

__all__ = [
    "APIRequest",
    "AsyncCredentialManager",
    "AsyncDispatcher",
    "AsyncHTTPExecutor",
    "CredentialManager",
    "CredentialManagerBase",
    "Dispatcher",
    "ErrorFactory",
    "ResponseNormalizer",
    "SyncHTTPExecutor",
    "TokenOperations",
    "should_retry",
]
