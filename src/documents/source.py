"""Source files: span assignment, span lookup and byte/line conversion."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from core.errors import DocumentError
from schemas.internal.syntax import Span, SyntaxKind, SyntaxNode


@dataclass(frozen=True, eq=False)
class LinkedNode:
    """A syntax node together with its absolute byte range and parent."""

    node: SyntaxNode
    start: int
    end: int
    parent: Optional["LinkedNode"] = None

    @property
    def kind(self) -> SyntaxKind:
        return self.node.kind

    @property
    def text(self) -> str:
        return self.node.text

    def range(self) -> Tuple[int, int]:
        return self.start, self.end

    def ancestors(self) -> Iterator["LinkedNode"]:
        """Yield this node and then every parent up to the root."""
        current: Optional[LinkedNode] = self
        while current is not None:
            yield current
            current = current.parent


class Source:
    """One parsed file.

    Constructing a source numbers every node of its tree in pre-order, so the
    spans handed out by the compiler (``Span(file, number)``) resolve here.
    """

    def __init__(self, file_id: str, root: SyntaxNode, text: str | None = None) -> None:
        full_text = root.full_text()
        if text is not None and text != full_text:
            raise DocumentError(f"Source text of {file_id} does not match its syntax tree")
        self._id = file_id
        self._root = root
        self._text = full_text
        self._index: Dict[Span, LinkedNode] = {}
        self._numberize(root, 0, None, [0])
        self._line_starts = _line_starts(self._text)

    @property
    def id(self) -> str:
        return self._id

    @property
    def root(self) -> SyntaxNode:
        return self._root

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text.encode("utf-8"))

    def find(self, span: Span) -> Optional[LinkedNode]:
        return self._index.get(span)

    def get(self, start: int, end: int) -> str:
        return self._text.encode("utf-8")[start:end].decode("utf-8", errors="replace")

    def byte_to_line(self, index: int) -> int:
        return bisect_right(self._line_starts, index) - 1

    def line_to_byte(self, line: int) -> Optional[int]:
        if 0 <= line < len(self._line_starts):
            return self._line_starts[line]
        return None

    def line_range(self, line: int) -> Tuple[int, int]:
        start = self.line_to_byte(line)
        if start is None:
            raise IndexError(f"line {line} out of range")
        end = self.line_to_byte(line + 1)
        if end is None:
            end = len(self)
        elif end > start:
            end -= 1
        return start, end

    def byte_to_column(self, index: int) -> int:
        """Column of a byte offset counted in characters."""
        line_start = self._line_starts[self.byte_to_line(index)]
        return len(self.get(line_start, index))

    def _numberize(
        self,
        node: SyntaxNode,
        offset: int,
        parent: Optional[LinkedNode],
        counter: List[int],
    ) -> int:
        node.span = Span(file=self._id, number=counter[0])
        counter[0] += 1
        if node.is_leaf:
            end = offset + len(node.text.encode("utf-8"))
            self._index[node.span] = LinkedNode(node, offset, end, parent)
            return end
        # The parent's end is only known after its children were measured.
        end = offset + len(node.full_text().encode("utf-8"))
        linked = LinkedNode(node, offset, end, parent)
        self._index[node.span] = linked
        child_offset = offset
        for child in node.children:
            child_offset = self._numberize(child, child_offset, linked, counter)
        return end


def _line_starts(text: str) -> List[int]:
    starts = [0]
    position = 0
    for line in text.splitlines(keepends=True):
        position += len(line.encode("utf-8"))
        starts.append(position)
    if len(starts) > 1 and not text.endswith(("\n", "\r")):
        starts.pop()
    return starts


__all__ = ["LinkedNode", "Source"]
