"""Token and ticket issuance requests.

Provides the request building and response parsing shared by the sync and
async clients.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..errors import NoDataError
from ..models import CredentialGrant
from .request import APIRequest

if TYPE_CHECKING:
    from ..config import WeChatConfig

ACCESS_TOKEN_KIND = "access_token"
JSAPI_TICKET = "jsapi"
WX_CARD_TICKET = "wx_card"


class TokenOperations:
    """Issuance calls for the access token and the signing tickets."""

    @staticmethod
    def access_token_request(config: WeChatConfig) -> APIRequest:
        """Build the token issuance call.

        It identifies the application by id and secret, so it is sent
        without an access token.
        """
        return APIRequest(
            "GET",
            config.url("/cgi-bin/token"),
            params={
                "grant_type": "client_credential",
                "appid": config.app_id,
                "secret": config.app_secret.get_secret_value(),
            },
            authenticated=False,
        )

    @staticmethod
    def ticket_request(config: WeChatConfig, kind: str) -> APIRequest:
        """Build the ticket issuance call for ``kind`` (``jsapi``, ``wx_card``)."""
        return APIRequest.get(config.url("/cgi-bin/ticket/getticket"), type=kind)

    @staticmethod
    def grant_from_token_body(body: dict[str, Any]) -> CredentialGrant:
        token = body.get("access_token")
        if not token:
            raise NoDataError("Token response did not contain an access_token")
        return CredentialGrant(value=token, expires_in=int(body.get("expires_in", 7200)))

    @staticmethod
    def grant_from_ticket_body(body: dict[str, Any]) -> CredentialGrant:
        ticket = body.get("ticket")
        if not ticket:
            raise NoDataError("Ticket response did not contain a ticket")
        return CredentialGrant(value=ticket, expires_in=int(body.get("expires_in", 7200)))
