"""OCR capabilities — image source resolution and text recognition."""

from ocrtool.ocr.errors import FailureReason, OCRError
from ocrtool.ocr.models import ImageSource, TextRegion
from ocrtool.ocr.recognizer import Recognizer, TesseractRecognizer
from ocrtool.ocr.sources import DefaultSourceResolver, SourceResolver

__all__ = [
    "DefaultSourceResolver",
    "FailureReason",
    "ImageSource",
    "OCRError",
    "Recognizer",
    "SourceResolver",
    "TesseractRecognizer",
    "TextRegion",
]
