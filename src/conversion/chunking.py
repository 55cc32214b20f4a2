"""Decides where the converted stream is cut into chunks."""

from __future__ import annotations

import logging
from typing import List, Optional

from conversion.builder import Chunk, ChunkBuilder
from schemas.internal.syntax import Span

logger = logging.getLogger(__name__)


class ChunkCollector:
    """Owns the current chunk builder and the finished chunks.

    Cuts only happen after a paragraph break (or a page/language boundary in
    layout mode), so a chunk may exceed ``chunk_size`` by up to one paragraph.
    A finished chunk is kept when it holds a character of ``file_id``, or, when
    no file is of interest, any character that came from a node.
    """

    def __init__(
        self,
        chunk_size: int = 1000,
        *,
        file_id: str | None = None,
        language: str = "en-US",
    ) -> None:
        self.chunk_size = chunk_size
        self.file_id = file_id
        self.language = language
        self.builder = ChunkBuilder(language=language)
        self.chunks: List[Chunk] = []

    def text(self, text: str, span: Optional[Span] = None, node_offset: int = 0) -> None:
        self.builder.text(text, span, node_offset)

    def markup(self, original: str) -> None:
        self.builder.markup(original)

    def encoded(self, original: str, substitute: str, span: Optional[Span] = None) -> None:
        self.builder.encoded(original, substitute, span)

    def paragraph_break(self) -> None:
        """Cut the chunk if it already exceeds the size limit."""
        if self.builder.char_count > self.chunk_size:
            self.cut()

    def set_language(self, language: str) -> None:
        """Switch language; the current chunk is cut unconditionally on change."""
        if language == self.language:
            return
        self.cut()
        self.language = language
        self.builder = ChunkBuilder(language=language)

    def cut(self) -> None:
        chunk = self.builder.finish()
        if self._keep(self.builder):
            self.chunks.append(chunk)
        else:
            logger.debug("Dropped chunk without content: %s chars", len(chunk.stream))
        self.builder = ChunkBuilder(language=self.language)

    def finish(self) -> List[Chunk]:
        self.cut()
        return self.chunks

    def _keep(self, builder: ChunkBuilder) -> bool:
        if self.file_id is not None:
            return self.file_id in builder.files
        return builder.has_content


__all__ = ["ChunkCollector"]
