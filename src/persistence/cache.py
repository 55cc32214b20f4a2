"""In-memory cache of backend results per checked paragraph."""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Iterable, List, Optional

from persistence.hashing import paragraph_key
from schemas.internal.checks import Suggestion


class ParagraphCache:
    """Suggestions keyed by ``(chunk text, language)``.

    Lookups consume the stored entry. A document that contains the same
    paragraph twice stores two entries, so re-checking it unchanged hits the
    cache for both. One check pass reads from the previous cache and fills a
    fresh one, which replaces the previous cache once the pass succeeded.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Deque[List[Suggestion]]] = {}

    def get(self, text: str, language: str) -> Optional[List[Suggestion]]:
        key = paragraph_key(text, language)
        stored = self._entries.get(key)
        if not stored:
            return None
        suggestions = stored.popleft()
        if not stored:
            del self._entries[key]
        return suggestions

    def insert(self, text: str, language: str, suggestions: Iterable[Suggestion]) -> None:
        key = paragraph_key(text, language)
        self._entries.setdefault(key, deque()).append(list(suggestions))

    def copy(self) -> "ParagraphCache":
        clone = ParagraphCache()
        clone._entries = {key: deque(stored) for key, stored in self._entries.items()}
        return clone

    def __len__(self) -> int:
        return sum(len(stored) for stored in self._entries.values())

    def clear(self) -> None:
        self._entries.clear()


__all__ = ["ParagraphCache"]
