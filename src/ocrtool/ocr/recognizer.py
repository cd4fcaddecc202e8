"""Text recognition backends.

The default backend drives Tesseract through ``pytesseract`` and returns
one :class:`TextRegion` per recognized line, in reading order.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

import pytesseract
from PIL import Image, UnidentifiedImageError

from ocrtool.ocr.errors import FailureReason, OCRError
from ocrtool.ocr.models import TextRegion

logger = logging.getLogger(__name__)

# BCP-47 tags as sent by MCP clients -> Tesseract traineddata names.
_TESSERACT_LANGUAGES: dict[str, str] = {
    "en": "eng",
    "en-us": "eng",
    "en-gb": "eng",
    "zh-hans": "chi_sim",
    "zh-cn": "chi_sim",
    "zh-hant": "chi_tra",
    "zh-tw": "chi_tra",
    "ja": "jpn",
    "ja-jp": "jpn",
    "ko": "kor",
    "ko-kr": "kor",
    "fr": "fra",
    "fr-fr": "fra",
    "de": "deu",
    "de-de": "deu",
    "es": "spa",
    "es-es": "spa",
    "it": "ita",
    "it-it": "ita",
    "pt": "por",
    "pt-br": "por",
    "pt-pt": "por",
    "ru": "rus",
    "ru-ru": "rus",
    "uk": "ukr",
    "uk-ua": "ukr",
}


@runtime_checkable
class Recognizer(Protocol):
    """Extracts text regions from encoded image bytes."""

    def recognize(self, image: bytes, languages: Sequence[str]) -> list[TextRegion]:
        """Return recognized regions in reading order, raising :class:`OCRError`."""
        ...


def tesseract_language(tag: str) -> str:
    """Map a BCP-47 tag to a Tesseract language code.

    Unknown tags fall back to their primary subtag, and finally pass through
    unchanged so native Tesseract codes (``eng``, ``chi_sim``) also work.
    """
    key = tag.strip().lower().replace("_", "-")
    if key in _TESSERACT_LANGUAGES:
        return _TESSERACT_LANGUAGES[key]
    primary = key.split("-", 1)[0]
    return _TESSERACT_LANGUAGES.get(primary, tag.strip())


class TesseractRecognizer:
    """Recognizer backed by the Tesseract engine."""

    def __init__(self, tesseract_cmd: str | None = None) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def recognize(self, image: bytes, languages: Sequence[str]) -> list[TextRegion]:
        picture = self._open(image)
        lang = "+".join(dict.fromkeys(tesseract_language(tag) for tag in languages)) or "eng"
        logger.debug("Running tesseract with lang=%s on %dx%d image", lang, *picture.size)

        try:
            data = pytesseract.image_to_data(
                picture, lang=lang, output_type=pytesseract.Output.DICT
            )
        except pytesseract.TesseractNotFoundError as exc:
            raise OCRError(FailureReason.RECOGNITION_FAILED, f"OCR failed: {exc}") from exc
        except pytesseract.TesseractError as exc:
            raise OCRError(
                FailureReason.RECOGNITION_FAILED, f"OCR failed: {exc.message or exc}"
            ) from exc

        return _group_lines(data)

    @staticmethod
    def _open(image: bytes) -> Image.Image:
        try:
            picture = Image.open(io.BytesIO(image))
            picture.load()
        except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as exc:
            raise OCRError(
                FailureReason.UNSUPPORTED_FORMAT, "Unsupported or unreadable image format"
            ) from exc
        if picture.mode not in ("RGB", "L"):
            picture = picture.convert("RGB")
        return picture


def _group_lines(data: dict[str, list[Any]]) -> list[TextRegion]:
    """Merge Tesseract word boxes into one region per (block, paragraph, line)."""
    lines: dict[tuple[int, int, int], list[int]] = {}
    for i, word in enumerate(data.get("text", [])):
        if int(data["level"][i]) != 5 or not str(word).strip():
            continue
        key = (int(data["block_num"][i]), int(data["par_num"][i]), int(data["line_num"][i]))
        lines.setdefault(key, []).append(i)

    regions: list[TextRegion] = []
    for indices in lines.values():
        left = min(int(data["left"][i]) for i in indices)
        top = min(int(data["top"][i]) for i in indices)
        right = max(int(data["left"][i]) + int(data["width"][i]) for i in indices)
        bottom = max(int(data["top"][i]) + int(data["height"][i]) for i in indices)
        regions.append(
            TextRegion(
                text=" ".join(str(data["text"][i]).strip() for i in indices),
                x=left,
                y=top,
                width=right - left,
                height=bottom - top,
            )
        )
    return regions
