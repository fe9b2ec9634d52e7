"""Temporary media upload and download.

Uploads and downloads use the longer upload timeout. File contents are read
into memory up front so a call can be replayed after a token refresh. The
path-taking methods read the file here; the async client overrides them to
read in a worker thread.
"""

from __future__ import annotations

import mimetypes
import os
from pathlib import Path
from typing import Any

from ..core.request import APIRequest
from .base import EndpointMixin

MEDIA_TYPES = ("image", "voice", "video", "thumb")


def _media_file(content: bytes, filename: str) -> dict[str, tuple[str, bytes, str]]:
    content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
    return {"media": (filename, content, content_type)}


class MediaEndpoints(EndpointMixin):
    def upload_media_content(self, content: bytes, filename: str, media_type: str) -> Any:
        """Upload temporary media from memory.

        Args:
            content: File bytes.
            filename: Name reported to the server; its extension matters.
            media_type: One of ``image``, ``voice``, ``video``, ``thumb``.

        Returns:
            ``{"type": ..., "media_id": ..., "created_at": ...}``
        """
        if media_type not in MEDIA_TYPES:
            msg = f"media_type must be one of {MEDIA_TYPES}, got {media_type!r}"
            raise ValueError(msg)
        return self._execute(
            APIRequest(
                "POST",
                self._url("/cgi-bin/media/upload"),
                params={"type": media_type},
                files=_media_file(content, filename),
                upload=True,
            )
        )

    def upload_media(self, path: str | os.PathLike[str], media_type: str) -> Any:
        """Upload temporary media from a file path.

        Raises:
            OSError: If the file cannot be read.
        """
        path = Path(path)
        return self.upload_media_content(path.read_bytes(), path.name, media_type)

    def upload_image(self, path: str | os.PathLike[str]) -> Any:
        return self.upload_media(path, "image")

    def upload_voice(self, path: str | os.PathLike[str]) -> Any:
        return self.upload_media(path, "voice")

    def upload_video(self, path: str | os.PathLike[str]) -> Any:
        return self.upload_media(path, "video")

    def upload_thumb(self, path: str | os.PathLike[str]) -> Any:
        return self.upload_media(path, "thumb")

    def upload_news_image_content(self, content: bytes, filename: str) -> Any:
        """Upload an image for use inside article bodies; returns ``{"url": ...}``."""
        return self._execute(
            APIRequest(
                "POST",
                self._url("/cgi-bin/media/uploadimg"),
                files=_media_file(content, filename),
                upload=True,
            )
        )

    def upload_news_image(self, path: str | os.PathLike[str]) -> Any:
        path = Path(path)
        return self.upload_news_image_content(path.read_bytes(), path.name)

    def get_media(self, media_id: str) -> Any:
        """Download temporary media.

        Returns:
            The file bytes. Video media comes back as JSON with a download URL.
        """
        return self._execute(
            APIRequest(
                "GET",
                self._url("/cgi-bin/media/get"),
                params={"media_id": media_id},
                binary=True,
            )
        )
