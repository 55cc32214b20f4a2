"""Internal schema definitions."""

from .checks import (  # noqa: F401
    CheckRequest,
    Diagnostic,
    Location,
    Segment,
    SegmentKind,
    Suggestion,
)
from .layout import Frame, FrameItem, Glyph, Page, TextItem  # noqa: F401
from .rules import ArgumentRule, FunctionRule, Rules  # noqa: F401
from .syntax import Span, SyntaxKind, SyntaxNode  # noqa: F401

__all__ = [
    "ArgumentRule",
    "CheckRequest",
    "Diagnostic",
    "Frame",
    "FrameItem",
    "FunctionRule",
    "Glyph",
    "Location",
    "Page",
    "Rules",
    "Segment",
    "SegmentKind",
    "Span",
    "Suggestion",
    "SyntaxKind",
    "SyntaxNode",
    "TextItem",
]
