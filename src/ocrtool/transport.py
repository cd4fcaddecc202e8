"""Stdio transport and the synchronous server loop.

Messages are newline-delimited JSON-RPC. The loop reads one line, decodes
and dispatches it, and writes any response before reading the next line.
End of input is the shutdown signal.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, BinaryIO, TextIO

from ocrtool.config import ServerSettings
from ocrtool.ocr.recognizer import TesseractRecognizer
from ocrtool.ocr.sources import DefaultSourceResolver
from ocrtool.protocol.codec import decode_message, encode_message
from ocrtool.protocol.dispatcher import RequestDispatcher
from ocrtool.protocol.errors import DecodeError, InternalError
from ocrtool.protocol.lifecycle import Session
from ocrtool.protocol.models import JsonRpcResponse
from ocrtool.tools.ocr_text import OcrTextTool
from ocrtool.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from ocrtool.ocr.recognizer import Recognizer
    from ocrtool.ocr.sources import SourceResolver

logger = logging.getLogger(__name__)


class StdioTransport:
    """Reads raw lines from *reader* and writes flushed lines to *writer*."""

    def __init__(self, reader: BinaryIO, writer: TextIO) -> None:
        self._reader = reader
        self._writer = writer

    def receive(self) -> bytes | None:
        """Return the next line without its terminator, or ``None`` at end of input."""
        line = self._reader.readline()
        if not line:
            return None
        return line.rstrip(b"\r\n")

    def send(self, line: str) -> None:
        """Write one encoded message followed by a newline and flush."""
        self._writer.write(line + "\n")
        self._writer.flush()


class StdioServer:
    """Drives a :class:`RequestDispatcher` from a :class:`StdioTransport`."""

    def __init__(self, transport: StdioTransport, dispatcher: RequestDispatcher) -> None:
        self._transport = transport
        self._dispatcher = dispatcher

    @property
    def dispatcher(self) -> RequestDispatcher:
        return self._dispatcher

    def serve(self) -> None:
        """Process lines until the input stream closes."""
        logger.info("Server starting, awaiting initialization...")
        while True:
            raw = self._transport.receive()
            if raw is None:
                break
            self.handle_line(raw)
        logger.info("stdin closed, shutting down")

    def handle_line(self, raw: bytes) -> None:
        """Decode, dispatch, and answer a single input line."""
        line = raw.strip()
        if not line:
            return

        try:
            message = decode_message(line)
        except DecodeError as exc:
            logger.info("JSON parse error: %s", exc.detail)
            self._send(JsonRpcResponse.failure(None, exc.to_error()))
            return
        except Exception as exc:
            logger.exception("Unhandled error while decoding input line")
            self._send(JsonRpcResponse.failure(None, InternalError(str(exc)).to_error()))
            return

        try:
            response = self._dispatcher.dispatch(message)
        except Exception as exc:
            logger.exception("Unhandled error while dispatching %s", message.method)
            if message.is_notification:
                return
            response = JsonRpcResponse.failure(message.id, InternalError(str(exc)).to_error())

        if response is not None:
            self._send(response)

    def _send(self, response: JsonRpcResponse) -> None:
        try:
            line = encode_message(response)
        except (TypeError, ValueError) as exc:
            logger.error("Failed to encode response: %s", exc)
            fallback = JsonRpcResponse.failure(response.id, InternalError(str(exc)).to_error())
            line = encode_message(fallback)
        self._transport.send(line)


def build_server(
    settings: ServerSettings | None = None,
    *,
    reader: BinaryIO | None = None,
    writer: TextIO | None = None,
    resolver: SourceResolver | None = None,
    recognizer: Recognizer | None = None,
) -> StdioServer:
    """Wire the default resolver, recognizer, registry, and session together."""
    settings = settings or ServerSettings()
    tool = OcrTextTool(
        resolver or DefaultSourceResolver(settings),
        recognizer or TesseractRecognizer(settings.tesseract_cmd),
        default_languages=settings.default_languages,
    )
    dispatcher = RequestDispatcher(Session(), ToolRegistry([tool]), settings)
    transport = StdioTransport(
        reader if reader is not None else sys.stdin.buffer,
        writer if writer is not None else sys.stdout,
    )
    return StdioServer(transport, dispatcher)
