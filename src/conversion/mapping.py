"""Position map from chunk stream characters back to source byte ranges."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import AbstractSet, List, Optional, Tuple

from documents.source import LinkedNode
from documents.world import World
from schemas.internal.checks import Location, Suggestion
from schemas.internal.syntax import Span, SyntaxKind, callee_name
from utils.text import utf8_width


@dataclass(frozen=True)
class MappingEntry:
    """A run of ``length`` stream characters that share one origin.

    Exact runs came from source text character by character, so each character
    owns the UTF-8 bytes of its own width starting at ``node_offset`` and the
    run covers ``source_len`` bytes in total. Coarse runs (substitutes) map
    every character to the whole ``[node_offset, node_offset + source_len)``
    range.
    """

    stream_start: int
    length: int
    span: Optional[Span]
    node_offset: int = 0
    exact: bool = True
    source_len: int = 0

    @property
    def stream_end(self) -> int:
        return self.stream_start + self.length


@dataclass
class Mapping:
    """Run-length encoded origin of every character of one chunk stream."""

    stream: str = ""
    language: str = "en-US"
    entries: List[MappingEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._starts = [entry.stream_start for entry in self.entries]

    def push(self, entry: MappingEntry) -> None:
        """Append ``entry``, merging it into the previous run when they continue."""
        if entry.length == 0:
            return
        if self.entries:
            last = self.entries[-1]
            if _continues(last, entry):
                self.entries[-1] = MappingEntry(
                    stream_start=last.stream_start,
                    length=last.length + entry.length,
                    span=last.span,
                    node_offset=last.node_offset,
                    exact=True,
                    source_len=last.source_len + entry.source_len,
                )
                return
        self.entries.append(entry)
        self._starts.append(entry.stream_start)

    def __len__(self) -> int:
        return len(self.stream)

    def entry_at(self, index: int) -> Optional[MappingEntry]:
        position = bisect_right(self._starts, index) - 1
        if position < 0:
            return None
        entry = self.entries[position]
        if index >= entry.stream_end:
            return None
        return entry

    def resolve(self, index: int) -> Optional[Tuple[Span, int, int]]:
        """Origin of stream character ``index`` as ``(span, start, end)`` node bytes."""
        entry = self.entry_at(index)
        if entry is None or entry.span is None:
            return None
        if not entry.exact:
            return entry.span, entry.node_offset, entry.node_offset + entry.source_len
        start = entry.node_offset
        for char in self.stream[entry.stream_start:index]:
            start += utf8_width(char)
        return entry.span, start, start + utf8_width(self.stream[index])

    def location(
        self,
        suggestion: Suggestion,
        world: World,
        file_id: str | None = None,
        ignore: AbstractSet[str] = frozenset(),
    ) -> List[Location]:
        """Translate a suggestion's stream range into source byte ranges.

        An empty list means nothing of the range can be shown: it covers only
        synthetic characters, other files or ignored constructs.
        """
        start = max(0, suggestion.start)
        end = min(suggestion.end, len(self.stream))
        locations: List[Location] = []
        for index in range(start, end):
            origin = self.resolve(index)
            if origin is None:
                continue
            span, node_start, node_end = origin
            if span.is_detached:
                continue
            if file_id is not None and span.file != file_id:
                continue
            node = world.find(span)
            if node is None or _is_ignored(node, ignore):
                continue
            if node.kind is SyntaxKind.TEXT:
                candidate = Location(
                    file=span.file, start=node.start + node_start, end=node.start + node_end
                )
            else:
                candidate = Location(file=span.file, start=node.start, end=node.end)
            _add_location(locations, candidate)
        return locations


def _continues(last: MappingEntry, entry: MappingEntry) -> bool:
    if not (last.exact and entry.exact):
        return False
    if last.span is None or last.span != entry.span:
        return False
    if last.stream_end != entry.stream_start:
        return False
    return last.node_offset + last.source_len == entry.node_offset


def _is_ignored(node: LinkedNode, ignore: AbstractSet[str]) -> bool:
    if not ignore:
        return False
    for ancestor in node.ancestors():
        if ancestor.kind is SyntaxKind.FUNC_CALL and callee_name(ancestor.node) in ignore:
            return True
    return False


def _add_location(locations: List[Location], candidate: Location) -> None:
    for existing in locations:
        if (
            existing.file == candidate.file
            and existing.start <= candidate.start
            and candidate.end <= existing.end
        ):
            return
    if locations:
        last = locations[-1]
        if last.file == candidate.file and last.end == candidate.start:
            locations[-1] = Location(file=last.file, start=last.start, end=candidate.end)
            return
    locations.append(candidate)


__all__ = ["Mapping", "MappingEntry"]
