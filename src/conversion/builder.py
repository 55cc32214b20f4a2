"""Accumulates classified segments into a chunk stream and its mapping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set

from conversion.mapping import Mapping, MappingEntry
from schemas.internal.checks import CheckRequest, Segment
from schemas.internal.syntax import Span


@dataclass
class Chunk:
    """One independently checkable piece of a document."""

    segments: List[Segment]
    mapping: Mapping

    @property
    def stream(self) -> str:
        return self.mapping.stream

    @property
    def language(self) -> str:
        return self.mapping.language

    @property
    def original(self) -> str:
        return "".join(segment.original for segment in self.segments)

    def request(
        self,
        *,
        disabled_rules: Optional[List[str]] = None,
        allowed_words: Optional[List[str]] = None,
    ) -> CheckRequest:
        return CheckRequest(
            segments=list(self.segments),
            language=self.language,
            disabled_rules=disabled_rules,
            allowed_words=allowed_words,
        )


@dataclass
class ChunkBuilder:
    """Collects the output of one chunk.

    Consecutive segments of the same kind are merged: a pending segment is
    only materialized once a segment of another kind arrives or the chunk is
    finished.
    """

    language: str = "en-US"
    segments: List[Segment] = field(default_factory=list)
    has_content: bool = False
    files: Set[str] = field(default_factory=set)
    _pending: Optional[Segment] = field(default=None, init=False, repr=False)
    _parts: List[str] = field(default_factory=list, init=False, repr=False)
    _mapping: Mapping = field(default_factory=Mapping, init=False, repr=False)
    _length: int = field(default=0, init=False, repr=False)

    @property
    def char_count(self) -> int:
        return self._length

    def text(self, text: str, span: Optional[Span] = None, node_offset: int = 0) -> None:
        self._push(Segment.text(text))
        self._emit(text, span, node_offset, exact=True, source_len=_byte_len(text))

    def markup(self, original: str) -> None:
        self._push(Segment.markup(original))

    def encoded(
        self,
        original: str,
        substitute: str,
        span: Optional[Span] = None,
    ) -> None:
        self._push(Segment.encoded(original, substitute))
        self._emit(substitute, span, 0, exact=False, source_len=_byte_len(original))

    def finish(self) -> Chunk:
        self._flush()
        mapping = Mapping(
            stream="".join(self._parts),
            language=self.language,
            entries=list(self._mapping.entries),
        )
        return Chunk(segments=list(self.segments), mapping=mapping)

    def _emit(
        self,
        text: str,
        span: Optional[Span],
        node_offset: int,
        *,
        exact: bool,
        source_len: int,
    ) -> None:
        if not text:
            return
        self._mapping.push(
            MappingEntry(
                stream_start=self._length,
                length=len(text),
                span=span,
                node_offset=node_offset,
                exact=exact,
                source_len=source_len,
            )
        )
        self._parts.append(text)
        self._length += len(text)
        if span is not None:
            self.has_content = True
            if span.file is not None:
                self.files.add(span.file)

    def _push(self, segment: Segment) -> None:
        pending = self._pending
        if pending is not None and pending.kind is segment.kind:
            self._pending = Segment(
                kind=pending.kind,
                original=pending.original + segment.original,
                substitute=pending.substitute + segment.substitute,
            )
            return
        self._flush()
        self._pending = segment

    def _flush(self) -> None:
        if self._pending is not None:
            self.segments.append(self._pending)
            self._pending = None


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


__all__ = ["Chunk", "ChunkBuilder"]
