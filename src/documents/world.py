"""A set of sources that resolves spans to nodes."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from core.errors import DocumentError
from documents.source import LinkedNode, Source
from schemas.internal.layout import Page
from schemas.internal.syntax import Span


class World:
    """Sources keyed by file id, plus the laid-out pages when available."""

    def __init__(
        self,
        sources: Iterable[Source] = (),
        *,
        main: str | None = None,
        pages: Optional[List[Page]] = None,
    ) -> None:
        self._sources: Dict[str, Source] = {}
        for source in sources:
            self.add(source)
        if main is None and self._sources:
            main = next(iter(self._sources))
        if main is not None and main not in self._sources:
            raise DocumentError(f"Main file not found: {main}")
        self.main = main
        self.pages = pages

    def add(self, source: Source) -> None:
        if source.id in self._sources:
            raise DocumentError(f"Duplicate file id: {source.id}")
        self._sources[source.id] = source

    @property
    def files(self) -> List[str]:
        return list(self._sources)

    def source(self, file_id: str) -> Source:
        try:
            return self._sources[file_id]
        except KeyError as exc:
            raise DocumentError(f"Unknown file id: {file_id}") from exc

    def find(self, span: Span) -> Optional[LinkedNode]:
        if span.file is None:
            return None
        source = self._sources.get(span.file)
        if source is None:
            return None
        return source.find(span)


__all__ = ["World"]
