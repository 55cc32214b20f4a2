"""Text helpers for offset unit conversion."""

from __future__ import annotations

from bisect import bisect_left
from typing import List


def utf16_offsets(text: str) -> List[int]:
    """Return the UTF-16 offset at which each character of ``text`` starts.

    The list has ``len(text) + 1`` entries; the last one is the total length.
    """
    offsets = [0]
    position = 0
    for char in text:
        position += 2 if ord(char) > 0xFFFF else 1
        offsets.append(position)
    return offsets


def utf16_to_char_index(offsets: List[int], utf16_offset: int) -> int:
    """Map a UTF-16 offset to a character index (rounding into the character)."""
    if utf16_offset <= 0:
        return 0
    index = bisect_left(offsets, utf16_offset)
    return min(index, len(offsets) - 1)


def utf8_width(char: str) -> int:
    return len(char.encode("utf-8"))


__all__ = ["utf16_offsets", "utf16_to_char_index", "utf8_width"]
