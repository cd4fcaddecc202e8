"""Image source resolution — local paths, URLs, and base64 payloads to bytes."""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

import httpx

from ocrtool.config import ServerSettings
from ocrtool.ocr.errors import FailureReason, OCRError
from ocrtool.ocr.models import ImageSource

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = frozenset({"http", "https"})


@runtime_checkable
class SourceResolver(Protocol):
    """Maps an :class:`ImageSource` to raw image bytes."""

    def resolve(self, source: ImageSource) -> bytes:
        """Return the image bytes, raising :class:`OCRError` on failure."""
        ...


class DefaultSourceResolver:
    """Reads files from disk, downloads URLs with httpx, decodes base64.

    Usage::

        resolver = DefaultSourceResolver(ServerSettings())
        data = resolver.resolve(ImageSource(kind="path", value="~/scan.png"))
    """

    def __init__(
        self,
        settings: ServerSettings | None = None,
        *,
        client: httpx.Client | None = None,
        cwd: Path | None = None,
    ) -> None:
        self._settings = settings or ServerSettings()
        self._client = client
        self._cwd = cwd

    def resolve(self, source: ImageSource) -> bytes:
        if source.kind == "url":
            return self._fetch_url(source.value)
        if source.kind == "base64":
            return self._decode_base64(source.value)
        return self._read_path(source.value)

    def _read_path(self, value: str) -> bytes:
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = (self._cwd or Path.cwd()) / path

        logger.info("Loading image at: %s", path)

        if not path.is_file():
            raise OCRError(FailureReason.SOURCE_NOT_FOUND, f"Image file not found at path: {path}")
        try:
            self._check_size(path.stat().st_size)
            data = path.read_bytes()
        except OSError as exc:
            raise OCRError(
                FailureReason.SOURCE_NOT_FOUND,
                f"Cannot read image file at path: {path} ({exc.strerror or exc})",
            ) from exc
        self._check_size(len(data))
        return data

    def _fetch_url(self, value: str) -> bytes:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise OCRError(FailureReason.INVALID_ARGUMENT, f"Invalid URL: {value}") from exc
        if url.scheme not in _ALLOWED_SCHEMES or not url.host:
            raise OCRError(FailureReason.INVALID_ARGUMENT, f"Invalid URL: {value}")

        try:
            if self._client is not None:
                data = self._download(self._client, url)
            else:
                with httpx.Client(timeout=self._settings.url_timeout) as client:
                    data = self._download(client, url)
        except httpx.HTTPStatusError as exc:
            raise OCRError(
                FailureReason.SOURCE_UNREACHABLE,
                f"Failed to download image from {value}: HTTP {exc.response.status_code}",
            ) from exc
        except httpx.HTTPError as exc:
            raise OCRError(
                FailureReason.SOURCE_UNREACHABLE,
                f"Failed to download image from {value}: {exc}",
            ) from exc

        logger.info("Downloaded %d bytes from URL: %s", len(data), value)
        return data

    def _download(self, client: httpx.Client, url: httpx.URL) -> bytes:
        """Stream the body, stopping as soon as it exceeds ``max_image_bytes``."""
        with client.stream(
            "GET", url, follow_redirects=True, timeout=self._settings.url_timeout
        ) as response:
            response.raise_for_status()
            declared = response.headers.get("Content-Length", "")
            if declared.isdigit():
                self._check_size(int(declared))

            chunks: list[bytes] = []
            received = 0
            for chunk in response.iter_bytes():
                received += len(chunk)
                self._check_size(received)
                chunks.append(chunk)
        return b"".join(chunks)

    def _decode_base64(self, value: str) -> bytes:
        payload = value.strip()
        if payload.startswith("data:") and "," in payload:
            payload = payload.split(",", 1)[1]
        payload = "".join(payload.split())

        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise OCRError(FailureReason.DECODE_FAILED, "Invalid base64 image data") from exc
        if not data:
            raise OCRError(FailureReason.DECODE_FAILED, "Invalid base64 image data")

        logger.info("Decoded %d bytes of base64 image data", len(data))
        self._check_size(len(data))
        return data

    def _check_size(self, size: int) -> None:
        limit = self._settings.max_image_bytes
        if size > limit:
            raise OCRError(
                FailureReason.INVALID_ARGUMENT,
                f"Image is too large ({size} bytes, limit {limit})",
            )
