"""Laid-out page contracts (compiled document frames)."""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from schemas.internal.syntax import Span


class Glyph(BaseModel):
    """One shaped glyph and its back-reference into the syntax tree.

    ``range`` is a byte range into the owning item's text (the glyph cluster);
    ``offset`` is the byte offset inside the span's node where the cluster
    starts.
    """

    range: Tuple[int, int]
    span: Optional[Span] = None
    offset: int = 0
    x_advance: float = 0.0


class TextItem(BaseModel):
    text: str
    lang: str = "en"
    region: Optional[str] = None
    size: float = Field(default=11.0, description="Font size in pt.")
    cap_height: float = Field(default=0.7, description="Cap height in em.")
    width: float = Field(default=0.0, description="Visual width in pt.")
    glyphs: List[Glyph] = Field(default_factory=list)


class FrameItem(BaseModel):
    x: float = 0.0
    y: float = 0.0
    kind: str = Field(default="text", description="text | group; other kinds are ignored.")
    text: Optional[TextItem] = None
    frame: Optional["Frame"] = None


class Frame(BaseModel):
    width: float = 0.0
    height: float = 0.0
    items: List[FrameItem] = Field(default_factory=list)


class Page(BaseModel):
    number: int = 1
    frame: Frame = Field(default_factory=Frame)


FrameItem.model_rebuild()


__all__ = ["Frame", "FrameItem", "Glyph", "Page", "TextItem"]
