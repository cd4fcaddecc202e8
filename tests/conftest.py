"""Shared fakes for the OCR capabilities and a wired-up dispatcher."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

import pytest

from ocrtool.ocr.errors import OCRError
from ocrtool.ocr.models import ImageSource, TextRegion
from ocrtool.protocol.dispatcher import RequestDispatcher
from ocrtool.protocol.lifecycle import Session
from ocrtool.tools.ocr_text import OcrTextTool
from ocrtool.tools.registry import ToolRegistry


class FakeResolver:
    """Returns canned bytes (or raises) and records every source it saw."""

    def __init__(self, data: bytes = b"image-bytes", error: OCRError | None = None) -> None:
        self.data = data
        self.error = error
        self.sources: list[ImageSource] = []

    def resolve(self, source: ImageSource) -> bytes:
        self.sources.append(source)
        if self.error is not None:
            raise self.error
        return self.data


class FakeRecognizer:
    """Returns one region per configured line of text."""

    def __init__(self, lines: Sequence[str] = (), error: OCRError | None = None) -> None:
        self.lines = list(lines)
        self.error = error
        self.calls: list[tuple[bytes, list[str]]] = []

    def recognize(self, image: bytes, languages: Sequence[str]) -> list[TextRegion]:
        self.calls.append((image, list(languages)))
        if self.error is not None:
            raise self.error
        return [
            TextRegion(text=line, x=0, y=20 * i, width=10 * len(line), height=18)
            for i, line in enumerate(self.lines)
        ]


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def recognizer() -> FakeRecognizer:
    return FakeRecognizer(["Hello", "World"])


@pytest.fixture
def registry(resolver: FakeResolver, recognizer: FakeRecognizer) -> ToolRegistry:
    return ToolRegistry([OcrTextTool(resolver, recognizer)])


@pytest.fixture
def dispatcher(registry: ToolRegistry) -> RequestDispatcher:
    return RequestDispatcher(Session(), registry)


@pytest.fixture
def running_dispatcher(dispatcher: RequestDispatcher) -> RequestDispatcher:
    dispatcher.session.mark_initialized()
    return dispatcher


@pytest.fixture(autouse=True)
def _restore_ocrtool_logger() -> Iterator[None]:
    """Undo any ``configure_logging`` call so caplog keeps seeing records."""
    logger = logging.getLogger("ocrtool")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
