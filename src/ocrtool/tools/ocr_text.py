"""The ``ocr_text`` tool — extract text from exactly one image source."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ocrtool.config import DEFAULT_LANGUAGES
from ocrtool.ocr.errors import OCRError
from ocrtool.ocr.models import ImageSource, SourceKind
from ocrtool.tools.models import CallToolResult, ToolDescriptor
from ocrtool.utils.telemetry import (
    ATTR_OCR_LANGUAGES,
    ATTR_OCR_REGIONS,
    ATTR_TOOL_IS_ERROR,
    ATTR_TOOL_NAME,
    ATTR_TOOL_SOURCE,
    get_tracer,
)

if TYPE_CHECKING:
    from opentelemetry.trace import Span

    from ocrtool.ocr.recognizer import Recognizer
    from ocrtool.ocr.sources import SourceResolver
    from ocrtool.protocol.values import JsonValue

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

OCR_TEXT_TOOL = ToolDescriptor(
    name="ocr_text",
    title="OCR Text Extraction",
    description=(
        "Extract text from an image using OCR. Provide exactly one image source: "
        "a local file path, a URL, or base64-encoded data."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "image_path": {
                "type": "string",
                "description": "Absolute or relative path to a local image file",
            },
            "url": {
                "type": "string",
                "description": "URL to download the image from",
            },
            "base64": {
                "type": "string",
                "description": "Base64-encoded image data",
            },
            "lang": {
                "type": "string",
                "description": (
                    "OCR languages separated by '+', e.g. 'en-US+zh-Hans'. Default: 'en-US'"
                ),
            },
        },
    },
)

NO_SOURCE_MESSAGE = (
    "Error: No image source provided. Supply exactly one of 'image_path', 'url', or 'base64'."
)
MULTIPLE_SOURCES_MESSAGE = (
    "Error: Multiple image sources provided. Supply exactly one of 'image_path', 'url', "
    "or 'base64'."
)
NO_TEXT_MESSAGE = "No text found in image."


def _string_arg(arguments: JsonValue | None, *keys: str) -> str | None:
    """First string value among *keys*; non-string values count as absent."""
    if arguments is None:
        return None
    for key in keys:
        value = arguments.get(key)
        text = value.as_str() if value is not None else None
        if text is not None:
            return text
    return None


def parse_languages(lang: str | None, default: list[str] | None = None) -> list[str]:
    """Split a ``+``-delimited language list, falling back to *default*."""
    fallback = list(default or DEFAULT_LANGUAGES)
    if lang is None:
        return fallback
    languages = [part.strip() for part in lang.split("+") if part.strip()]
    return languages or fallback


class OcrTextTool:
    """Validates ``ocr_text`` arguments and runs source resolution plus OCR."""

    def __init__(
        self,
        resolver: SourceResolver,
        recognizer: Recognizer,
        *,
        default_languages: list[str] | None = None,
    ) -> None:
        self._resolver = resolver
        self._recognizer = recognizer
        self._default_languages = list(default_languages or DEFAULT_LANGUAGES)

    @property
    def descriptor(self) -> ToolDescriptor:
        return OCR_TEXT_TOOL

    def call(self, arguments: JsonValue | None) -> CallToolResult:
        if arguments is not None and arguments.as_object() is None:
            arguments = None

        candidates: list[tuple[SourceKind, str | None]] = [
            ("path", _string_arg(arguments, "image_path", "image")),
            ("url", _string_arg(arguments, "url")),
            ("base64", _string_arg(arguments, "base64")),
        ]
        supplied = [(kind, value) for kind, value in candidates if value]

        if not supplied:
            return CallToolResult.error(NO_SOURCE_MESSAGE)
        if len(supplied) > 1:
            return CallToolResult.error(MULTIPLE_SOURCES_MESSAGE)

        kind, value = supplied[0]
        languages = parse_languages(_string_arg(arguments, "lang"), self._default_languages)

        with _tracer.start_as_current_span("ocrtool.tool.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, OCR_TEXT_TOOL.name)
            span.set_attribute(ATTR_TOOL_SOURCE, kind)
            span.set_attribute(ATTR_OCR_LANGUAGES, languages)
            result = self._run(ImageSource(kind=kind, value=value), languages, span)
            span.set_attribute(ATTR_TOOL_IS_ERROR, result.is_error)
            return result

    def _run(self, source: ImageSource, languages: list[str], span: Span) -> CallToolResult:
        try:
            image = self._resolver.resolve(source)
            regions = self._recognizer.recognize(image, languages)
        except OCRError as exc:
            logger.info("ocr_text failed (%s): %s", exc.reason.value, exc.message)
            return CallToolResult.error(f"Error: {exc.message}")

        span.set_attribute(ATTR_OCR_REGIONS, len(regions))
        if not regions:
            return CallToolResult.text(NO_TEXT_MESSAGE)
        return CallToolResult.text("\n".join(region.text for region in regions))
