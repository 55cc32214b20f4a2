"""Extracts checkable text from laid-out pages.

Word, line and paragraph boundaries are not visible in frames, so they are
reconstructed from item geometry: items on the same line are joined (with a
space when there is a gap), a new line starts a new paragraph unless the text
simply wraps within one source node.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from conversion.builder import Chunk
from conversion.chunking import ChunkCollector
from conversion.language import long_language
from schemas.internal.layout import Frame, Page, TextItem
from schemas.internal.syntax import Span

logger = logging.getLogger(__name__)

EPSILON = 0.01
PARAGRAPH = "\n\n"


@dataclass(frozen=True)
class LayoutOptions:
    """Tuning of the geometry heuristics.

    ``line_spacing`` is the leading in em; together with the cap height it
    gives the line pitch, and items less than half a pitch apart vertically
    share a line.
    """

    line_spacing: float = 0.65
    languages: Dict[str, str] = field(default_factory=dict)


@dataclass
class _Cursor:
    x_end: float
    y: Optional[float]
    size: float
    cap_height: float
    span: Optional[Span] = None
    offset_end: int = 0


def document(
    pages: Sequence[Page],
    chunk_size: int = 1000,
    file_id: str | None = None,
    options: LayoutOptions | None = None,
) -> List[Chunk]:
    """Convert laid-out pages into chunks, split by page, size and language."""
    options = options or LayoutOptions()
    collector = ChunkCollector(chunk_size, file_id=file_id)
    extractor = _LayoutExtractor(collector, options)
    for index, page in enumerate(pages):
        if index:
            extractor.page_break()
        extractor.frame(page.frame, 0.0, 0.0)
    chunks = collector.finish()
    logger.debug("Extracted %s chunks from %s pages", len(chunks), len(pages))
    return chunks


class _LayoutExtractor:
    def __init__(self, collector: ChunkCollector, options: LayoutOptions) -> None:
        self.out = collector
        self.options = options
        self.cursor: Optional[_Cursor] = None

    def page_break(self) -> None:
        self.out.paragraph_break()
        if self.cursor is not None:
            self.cursor.y = None

    def frame(self, frame: Frame, dx: float, dy: float) -> None:
        for item in frame.items:
            x = dx + item.x
            y = dy + item.y
            if item.kind == "group" and item.frame is not None:
                self.frame(item.frame, x, y)
            elif item.kind == "text" and item.text is not None:
                self.text_item(item.text, x, y)

    def text_item(self, item: TextItem, x: float, y: float) -> None:
        if not item.glyphs:
            return
        language = long_language(item.lang, item.region, self.options.languages)
        if language != self.out.language:
            logger.debug("Language change %s -> %s", self.out.language, language)
            self.out.set_language(language)
            self.cursor = None
        if self.cursor is not None:
            self._separate(item, x, y)

        data = item.text.encode("utf-8")
        cursor = _Cursor(
            x_end=x + _item_width(item),
            y=y,
            size=item.size,
            cap_height=item.cap_height,
        )
        if self.cursor is not None:
            cursor.span = self.cursor.span
            cursor.offset_end = self.cursor.offset_end
        last_range: Optional[tuple[int, int]] = None
        for glyph in item.glyphs:
            start, end = glyph.range
            # Several glyphs can share one cluster; it is emitted once.
            if last_range is not None and last_range[0] <= start and end <= last_range[1]:
                continue
            last_range = (start, end)
            cluster = data[start:end].decode("utf-8", errors="replace")
            span = glyph.span
            if span is not None and span.is_detached:
                span = None
            self.out.text(cluster, span, glyph.offset)
            if span is not None:
                cursor.span = span
                cursor.offset_end = glyph.offset + (end - start)
        self.cursor = cursor

    def _separate(self, item: TextItem, x: float, y: float) -> None:
        previous = self.cursor
        assert previous is not None
        first = item.glyphs[0]
        continues = (
            first.span is not None
            and first.span == previous.span
            and first.offset == previous.offset_end
        )
        pitch = previous.size * (previous.cap_height + self.options.line_spacing)
        same_line = previous.y is not None and abs(y - previous.y) < pitch / 2 + EPSILON
        if same_line:
            if continues or abs(x - previous.x_end) <= EPSILON:
                return
            self.out.encoded("", " ")
        elif not continues:
            self.out.encoded("", PARAGRAPH)
            self.out.paragraph_break()


def _item_width(item: TextItem) -> float:
    if item.width:
        return item.width
    return sum(glyph.x_advance for glyph in item.glyphs) * item.size


__all__ = ["LayoutOptions", "document"]
