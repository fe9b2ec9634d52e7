"""Endpoint request descriptors."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..models import Credential

FileField = tuple[str, bytes, str]


@dataclass(frozen=True)
class APIRequest:
    """Everything needed to issue one endpoint call except the token.

    Payloads are held in memory so a request can be replayed when the
    dispatcher retries it with a refreshed token.
    """

    method: str
    url: str
    params: dict[str, Any] = field(default_factory=dict)
    json_body: Any = None
    files: dict[str, FileField] | None = None
    data: dict[str, Any] | None = None
    binary: bool = False
    upload: bool = False
    authenticated: bool = True
    include_response: bool = False

    def build(self, credential: Credential | None) -> dict[str, Any]:
        """Build keyword arguments for ``httpx.Client.request``."""
        params = {k: v for k, v in self.params.items() if v is not None}
        if self.authenticated:
            if credential is None:
                msg = f"{self.url} requires an access token"
                raise ValueError(msg)
            params["access_token"] = credential.value

        kwargs: dict[str, Any] = {"method": self.method, "url": self.url, "params": params}
        if self.json_body is not None:
            # The authority renders \u escapes literally, so send raw UTF-8.
            kwargs["content"] = json.dumps(self.json_body, ensure_ascii=False).encode("utf-8")
            kwargs["headers"] = {"Content-Type": "application/json"}
        if self.files is not None:
            kwargs["files"] = self.files
        if self.data is not None:
            kwargs["data"] = self.data
        return kwargs

    @classmethod
    def get(cls, url: str, **params: Any) -> APIRequest:
        return cls("GET", url, params=params)

    @classmethod
    def post_json(cls, url: str, body: Any, **params: Any) -> APIRequest:
        return cls("POST", url, params=params, json_body=body)
