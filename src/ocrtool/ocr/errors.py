"""Failure reasons for image acquisition and recognition.

These never become JSON-RPC error codes: the tool handler reports them as
``isError`` results so the RPC itself still succeeds.
"""

from __future__ import annotations

from enum import Enum


class FailureReason(str, Enum):
    """Why an OCR attempt could not produce text regions."""

    SOURCE_NOT_FOUND = "source-not-found"
    SOURCE_UNREACHABLE = "source-unreachable"
    DECODE_FAILED = "decode-failed"
    UNSUPPORTED_FORMAT = "unsupported-format"
    RECOGNITION_FAILED = "recognition-failed"
    INVALID_ARGUMENT = "invalid-argument"


class OCRError(Exception):
    """An image source or recognizer failure with a human-readable message."""

    def __init__(self, reason: FailureReason, message: str) -> None:
        self.reason = reason
        self.message = message
        super().__init__(message)
