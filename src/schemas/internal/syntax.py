"""Syntax tree contracts shared with the document compiler."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SyntaxKind(str, Enum):
    """Closed set of node kinds the converter knows about.

    Anything the compiler reports outside this set is loaded as ``OTHER`` and
    handled by the generic markup fallback.
    """

    MARKUP = "Markup"
    TEXT = "Text"
    SPACE = "Space"
    LINEBREAK = "Linebreak"
    PARBREAK = "Parbreak"
    ESCAPE = "Escape"
    SHORTHAND = "Shorthand"
    SMART_QUOTE = "SmartQuote"
    STRONG = "Strong"
    EMPH = "Emph"
    RAW = "Raw"
    LINK = "Link"
    LABEL = "Label"
    REF = "Ref"
    REF_MARKER = "RefMarker"
    HEADING = "Heading"
    HEADING_MARKER = "HeadingMarker"
    LIST_ITEM = "ListItem"
    LIST_MARKER = "ListMarker"
    ENUM_ITEM = "EnumItem"
    ENUM_MARKER = "EnumMarker"
    TERM_ITEM = "TermItem"
    TERM_MARKER = "TermMarker"
    EQUATION = "Equation"
    MATH = "Math"
    DOLLAR = "Dollar"
    FUNC_CALL = "FuncCall"
    FIELD_ACCESS = "FieldAccess"
    IDENT = "Ident"
    ARGS = "Args"
    NAMED = "Named"
    COLON = "Colon"
    COMMA = "Comma"
    STR = "Str"
    CONTENT_BLOCK = "ContentBlock"
    CODE_BLOCK = "CodeBlock"
    CODE = "Code"
    LEFT_BRACKET = "LeftBracket"
    RIGHT_BRACKET = "RightBracket"
    LEFT_BRACE = "LeftBrace"
    RIGHT_BRACE = "RightBrace"
    LEFT_PAREN = "LeftParen"
    RIGHT_PAREN = "RightParen"
    HASH = "Hash"
    STAR = "Star"
    UNDERSCORE = "Underscore"
    OTHER = "Other"

    @classmethod
    def coerce(cls, value: Any) -> "SyntaxKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


MARKER_KINDS = frozenset(
    {
        SyntaxKind.HEADING_MARKER,
        SyntaxKind.LIST_MARKER,
        SyntaxKind.ENUM_MARKER,
        SyntaxKind.TERM_MARKER,
    }
)


class Span(BaseModel):
    """Opaque identity of a syntax node.

    Only equality and the owning file are meaningful outside of ``Source``;
    ``number`` is assigned by the source that owns the node.
    """

    file: Optional[str] = None
    number: int = 0

    model_config = ConfigDict(frozen=True)

    @classmethod
    def detached(cls) -> "Span":
        return cls()

    @property
    def is_detached(self) -> bool:
        return self.file is None


class SyntaxNode(BaseModel):
    """One node of a parsed document; leaves carry text, inner nodes children."""

    kind: SyntaxKind
    text: str = ""
    children: List["SyntaxNode"] = Field(default_factory=list)
    span: Span = Field(default_factory=Span.detached)

    @field_validator("kind", mode="before")
    @classmethod
    def _coerce_kind(cls, value: Any) -> SyntaxKind:
        return SyntaxKind.coerce(value)

    @classmethod
    def leaf(cls, kind: SyntaxKind, text: str) -> "SyntaxNode":
        return cls(kind=kind, text=text)

    @classmethod
    def inner(cls, kind: SyntaxKind, children: List["SyntaxNode"]) -> "SyntaxNode":
        return cls(kind=kind, children=list(children))

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def leaves(self) -> Iterator["SyntaxNode"]:
        if self.is_leaf:
            yield self
            return
        for child in self.children:
            yield from child.leaves()

    def full_text(self) -> str:
        if self.is_leaf:
            return self.text
        return "".join(leaf.text for leaf in self.leaves())

    def leftmost_leaf(self) -> "SyntaxNode":
        node = self
        while node.children:
            node = node.children[0]
        return node


def callee_name(node: SyntaxNode) -> str | None:
    """Name of the construct invoked by a function call node.

    The leftmost token names ordinary calls; for field access (``a.b()``) the
    last identifier is the construct name.
    """
    if node.kind is not SyntaxKind.FUNC_CALL or not node.children:
        return None
    callee = node.children[0]
    if callee.kind is SyntaxKind.FIELD_ACCESS:
        idents = [leaf.text for leaf in callee.leaves() if leaf.kind is SyntaxKind.IDENT]
        if idents:
            return idents[-1]
    return callee.leftmost_leaf().text or None


SyntaxNode.model_rebuild()


__all__ = ["MARKER_KINDS", "Span", "SyntaxKind", "SyntaxNode", "callee_name"]
