"""Minimal reader that turns plain prose into a syntax tree."""

from __future__ import annotations

import re
from typing import List

from schemas.internal.syntax import SyntaxKind, SyntaxNode

_TOKEN_RE = re.compile(
    r"(?P<parbreak>[^\S\n]*\n(?:[^\S\n]*\n)+[^\S\n]*)"
    r"|(?P<space>\s+)"
    r"|(?P<text>\S+)"
)

_KINDS = {
    "parbreak": SyntaxKind.PARBREAK,
    "space": SyntaxKind.SPACE,
    "text": SyntaxKind.TEXT,
}


def parse_plain(text: str) -> SyntaxNode:
    """Split ``text`` into Text, Space and Parbreak leaves under one Markup node.

    A blank line (two or more line breaks with only horizontal whitespace
    between them) is a paragraph break; other whitespace runs are spaces.
    """
    children: List[SyntaxNode] = []
    for match in _TOKEN_RE.finditer(text):
        kind = _KINDS[match.lastgroup or "text"]
        children.append(SyntaxNode.leaf(kind, match.group()))
    return SyntaxNode.inner(SyntaxKind.MARKUP, children)


__all__ = ["parse_plain"]
