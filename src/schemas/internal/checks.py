"""Checker request/response contracts and produced diagnostics."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SegmentKind(str, Enum):
    TEXT = "text"
    MARKUP = "markup"
    ENCODED = "encoded"


class Segment(BaseModel):
    """One classified run of converted output.

    ``original`` is the source text the run stands for; ``substitute`` is what
    the checker sees for encoded runs.
    """

    kind: SegmentKind
    original: str = ""
    substitute: str = ""

    @classmethod
    def text(cls, text: str) -> "Segment":
        return cls(kind=SegmentKind.TEXT, original=text)

    @classmethod
    def markup(cls, markup: str) -> "Segment":
        return cls(kind=SegmentKind.MARKUP, original=markup)

    @classmethod
    def encoded(cls, original: str, substitute: str) -> "Segment":
        return cls(kind=SegmentKind.ENCODED, original=original, substitute=substitute)

    @property
    def emitted(self) -> str:
        if self.kind is SegmentKind.TEXT:
            return self.original
        if self.kind is SegmentKind.ENCODED:
            return self.substitute
        return ""


class CheckRequest(BaseModel):
    segments: List[Segment]
    language: str
    disabled_rules: Optional[List[str]] = None
    allowed_words: Optional[List[str]] = None

    @property
    def text(self) -> str:
        return "".join(segment.emitted for segment in self.segments)


class Suggestion(BaseModel):
    """Backend match; ``start``/``end`` index characters of one chunk stream."""

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    message: str
    rule_id: str = ""
    rule_description: str = ""
    replacements: List[str] = Field(default_factory=list)


class Location(BaseModel):
    file: str
    start: int
    end: int

    model_config = ConfigDict(frozen=True)


class Diagnostic(BaseModel):
    locations: List[Location] = Field(min_length=1)
    message: str
    rule_id: str = ""
    rule_description: str = ""
    replacements: List[str] = Field(
        default_factory=list, description="Presentable replacement strings."
    )
    edits: List[str] = Field(
        default_factory=list,
        description="Every backend replacement, including pure deletions.",
    )

    model_config = ConfigDict(frozen=True)


__all__ = [
    "CheckRequest",
    "Diagnostic",
    "Location",
    "Segment",
    "SegmentKind",
    "Suggestion",
]
