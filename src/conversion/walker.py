"""Syntax tree walker that turns markup into checkable chunks.

Every leaf's text ends up in exactly one segment (as text, markup or the
original of an encoded run), so the originals of all chunks concatenate back
to the source text. Separators that have no source counterpart are encoded
runs with an empty original.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

from conversion.builder import Chunk
from conversion.chunking import ChunkCollector
from schemas.internal.rules import FunctionRule, Rules
from schemas.internal.syntax import MARKER_KINDS, SyntaxKind, SyntaxNode, callee_name

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    TEXT = "text"
    MARKUP = "markup"


SHORTHANDS = {
    "~": "\u00a0",
    "--": "\u2013",
    "---": "\u2014",
    "...": "\u2026",
    "-?": "",
}

PARAGRAPH = "\n\n"


def convert(
    root: SyntaxNode,
    rules: Optional[Rules] = None,
    chunk_size: int = 1000,
    *,
    file_id: str | None = None,
    language: str = "en-US",
) -> List[Chunk]:
    """Convert a syntax tree into chunks of checkable text.

    When ``file_id`` is given only chunks containing characters of that file
    are returned.
    """
    collector = ChunkCollector(chunk_size, file_id=file_id, language=language)
    _Walker(collector, rules or Rules()).visit(root, Mode.TEXT)
    chunks = collector.finish()
    logger.debug("Converted tree into %s chunks", len(chunks))
    return chunks


Handler = Callable[[SyntaxNode, Mode], None]


class _Walker:
    def __init__(self, collector: ChunkCollector, rules: Rules) -> None:
        self.out = collector
        self.rules = rules
        self._handlers: Dict[SyntaxKind, Handler] = {
            SyntaxKind.MARKUP: self._markup_block,
            SyntaxKind.TEXT: self._text,
            SyntaxKind.SMART_QUOTE: self._text,
            SyntaxKind.SPACE: self._space,
            SyntaxKind.PARBREAK: self._parbreak,
            SyntaxKind.LINEBREAK: self._linebreak,
            SyntaxKind.SHORTHAND: self._shorthand,
            SyntaxKind.ESCAPE: self._escape,
            SyntaxKind.STRONG: self._children,
            SyntaxKind.EMPH: self._children,
            SyntaxKind.HEADING: self._block_item,
            SyntaxKind.LIST_ITEM: self._block_item,
            SyntaxKind.ENUM_ITEM: self._block_item,
            SyntaxKind.TERM_ITEM: self._block_item,
            SyntaxKind.EQUATION: self._placeholder("0"),
            SyntaxKind.REF: self._placeholder("X"),
            SyntaxKind.FUNC_CALL: self._func_call,
            SyntaxKind.CONTENT_BLOCK: self._content_block,
        }

    def visit(self, node: SyntaxNode, mode: Mode) -> None:
        handler = self._handlers.get(node.kind, self._fallback)
        handler(node, mode)

    def _fallback(self, node: SyntaxNode, mode: Mode) -> None:
        if node.is_leaf:
            self.out.markup(node.text)
            return
        for child in node.children:
            self.visit(child, Mode.MARKUP)

    def _children(self, node: SyntaxNode, mode: Mode) -> None:
        if node.is_leaf:
            self._fallback(node, mode)
            return
        for child in node.children:
            self.visit(child, mode)

    def _markup_block(self, node: SyntaxNode, mode: Mode) -> None:
        for child in node.children:
            self.visit(child, Mode.TEXT)

    def _text(self, node: SyntaxNode, mode: Mode) -> None:
        if mode is Mode.TEXT:
            self.out.text(node.text, node.span)
        else:
            self.out.markup(node.text)

    def _space(self, node: SyntaxNode, mode: Mode) -> None:
        if mode is not Mode.TEXT:
            self.out.markup(node.text)
        elif "\n" in node.text and node.text != "\n":
            self.out.encoded(node.text, "\n", node.span)
        else:
            self.out.text(node.text, node.span)

    def _parbreak(self, node: SyntaxNode, mode: Mode) -> None:
        if mode is not Mode.TEXT:
            self.out.markup(node.text)
            return
        self.out.encoded(node.text, PARAGRAPH, node.span)
        self.out.paragraph_break()

    def _linebreak(self, node: SyntaxNode, mode: Mode) -> None:
        if mode is Mode.TEXT:
            self.out.encoded(node.text, "\n", node.span)
        else:
            self.out.markup(node.text)

    def _shorthand(self, node: SyntaxNode, mode: Mode) -> None:
        if mode is Mode.TEXT:
            self.out.encoded(node.text, SHORTHANDS.get(node.text, node.text), node.span)
        else:
            self.out.markup(node.text)

    def _escape(self, node: SyntaxNode, mode: Mode) -> None:
        if mode is Mode.TEXT:
            self.out.encoded(node.text, unescape(node.text), node.span)
        else:
            self.out.markup(node.text)

    def _block_item(self, node: SyntaxNode, mode: Mode) -> None:
        """Headings and list items read as paragraphs of their own."""
        self.out.encoded("", PARAGRAPH)
        after_marker = False
        for child in node.children:
            if child.kind in MARKER_KINDS:
                self.out.markup(child.full_text())
                after_marker = True
                continue
            if after_marker and child.kind is SyntaxKind.SPACE:
                self.out.markup(child.text)
            elif child.kind is SyntaxKind.COLON and node.kind is SyntaxKind.TERM_ITEM:
                self.out.text(child.text, child.span)
            else:
                self.visit(child, Mode.TEXT)
            after_marker = False
        self.out.encoded("", PARAGRAPH)

    def _placeholder(self, substitute: str) -> Handler:
        def handle(node: SyntaxNode, mode: Mode) -> None:
            if mode is Mode.TEXT:
                self.out.encoded("", substitute, node.span)
            self.out.markup(node.full_text())

        return handle

    def _func_call(self, node: SyntaxNode, mode: Mode) -> None:
        name = callee_name(node)
        rule = self.rules.functions.get(name) if name else None
        if rule is not None and rule.before:
            self.out.encoded("", rule.before)
        for child in node.children:
            if child.kind is SyntaxKind.ARGS:
                self._args(child, rule)
            else:
                self.visit(child, Mode.MARKUP)
        if rule is not None and rule.after:
            self.out.encoded("", rule.after)

    def _args(self, node: SyntaxNode, rule: Optional[FunctionRule]) -> None:
        for arg in node.children:
            if arg.kind is SyntaxKind.NAMED:
                arg_rule = self.rules.arguments.get(_argument_name(arg))
                if arg_rule is not None and arg_rule.before:
                    self.out.encoded("", arg_rule.before)
                self.visit(arg, Mode.MARKUP)
                if arg_rule is not None and arg_rule.after:
                    self.out.encoded("", arg_rule.after)
            elif arg.kind is SyntaxKind.CONTENT_BLOCK:
                self.visit(arg, Mode.MARKUP)
                if rule is not None and rule.after_argument:
                    self.out.encoded("", rule.after_argument)
            else:
                self.visit(arg, Mode.MARKUP)

    def _content_block(self, node: SyntaxNode, mode: Mode) -> None:
        for child in node.children:
            if child.kind is SyntaxKind.MARKUP:
                self.visit(child, Mode.TEXT)
            else:
                self.visit(child, Mode.MARKUP)


def unescape(text: str) -> str:
    r"""Character an escape sequence stands for (``\#`` or ``\u{1F600}``)."""
    body = text[1:] if text.startswith("\\") else text
    if body.startswith("u{") and body.endswith("}"):
        try:
            return chr(int(body[2:-1], 16))
        except (ValueError, OverflowError):
            return body
    return body


def _argument_name(node: SyntaxNode) -> str:
    for child in node.children:
        if child.kind is SyntaxKind.IDENT:
            return child.text
    return ""


__all__ = ["Mode", "SHORTHANDS", "convert", "unescape"]
