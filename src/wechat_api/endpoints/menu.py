"""Custom menu endpoints. Menu payloads are passed through untouched."""

from __future__ import annotations

from typing import Any

from ..core.request import APIRequest
from .base import EndpointMixin


class MenuEndpoints(EndpointMixin):
    def create_menu(self, menu: dict[str, Any]) -> Any:
        return self._execute(APIRequest.post_json(self._url("/cgi-bin/menu/create"), menu))

    def get_menu(self) -> Any:
        return self._execute(APIRequest.get(self._url("/cgi-bin/menu/get")))

    def remove_menu(self) -> Any:
        return self._execute(APIRequest.get(self._url("/cgi-bin/menu/delete")))

    def get_menu_config(self) -> Any:
        """Get the menu currently shown, whichever tool configured it."""
        return self._execute(APIRequest.get(self._url("/cgi-bin/get_current_selfmenu_info")))
