"""Data models shared by source resolvers and recognizers."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

SourceKind = Literal["path", "url", "base64"]


class ImageSource(BaseModel):
    """Exactly one way of locating the image to recognize."""

    kind: SourceKind
    value: str = Field(..., min_length=1)


class TextRegion(BaseModel):
    """One recognized run of text and its bounding box in image pixels.

    The origin is the image's top-left corner with ``y`` growing downwards.
    """

    text: str
    x: int
    y: int
    width: int
    height: int
