import pytest

from core.errors import DocumentError
from documents.plain import parse_plain
from documents.source import Source
from schemas.internal.syntax import Span, SyntaxKind, SyntaxNode, callee_name


def _hello_world() -> SyntaxNode:
    return SyntaxNode.inner(
        SyntaxKind.MARKUP,
        [
            SyntaxNode.leaf(SyntaxKind.TEXT, "Hello"),
            SyntaxNode.leaf(SyntaxKind.SPACE, " "),
            SyntaxNode.leaf(SyntaxKind.TEXT, "world"),
        ],
    )


def test_source_numbers_nodes_in_preorder() -> None:
    source = Source("main.typ", _hello_world())

    assert source.root.span == Span(file="main.typ", number=0)
    hello = source.find(Span(file="main.typ", number=1))
    world = source.find(Span(file="main.typ", number=3))

    assert hello is not None and hello.range() == (0, 5)
    assert world is not None and world.range() == (6, 11)
    assert world.kind is SyntaxKind.TEXT
    assert world.parent is not None and world.parent.kind is SyntaxKind.MARKUP
    assert source.find(Span(file="other.typ", number=1)) is None


def test_source_rejects_text_that_does_not_match_tree() -> None:
    with pytest.raises(DocumentError):
        Source("main.typ", _hello_world(), text="Hello there")


def test_byte_to_line_and_column_count_characters() -> None:
    source = Source("main.txt", parse_plain("ab\ncé d"))

    assert source.byte_to_line(0) == 0
    assert source.byte_to_line(3) == 1
    assert source.byte_to_column(7) == 3
    assert source.line_range(0) == (0, 2)
    assert source.get(3, 6) == "cé"


def test_unknown_kind_loads_as_other() -> None:
    node = SyntaxNode.model_validate({"kind": "Bogus", "text": "x"})

    assert node.kind is SyntaxKind.OTHER


def test_callee_name_uses_last_identifier_of_field_access() -> None:
    plain = SyntaxNode.inner(
        SyntaxKind.FUNC_CALL,
        [
            SyntaxNode.leaf(SyntaxKind.IDENT, "table"),
            SyntaxNode.inner(SyntaxKind.ARGS, [SyntaxNode.leaf(SyntaxKind.LEFT_PAREN, "(")]),
        ],
    )
    field = SyntaxNode.inner(
        SyntaxKind.FUNC_CALL,
        [
            SyntaxNode.inner(
                SyntaxKind.FIELD_ACCESS,
                [
                    SyntaxNode.leaf(SyntaxKind.IDENT, "table"),
                    SyntaxNode.leaf(SyntaxKind.OTHER, "."),
                    SyntaxNode.leaf(SyntaxKind.IDENT, "cell"),
                ],
            ),
            SyntaxNode.inner(SyntaxKind.ARGS, [SyntaxNode.leaf(SyntaxKind.LEFT_PAREN, "(")]),
        ],
    )

    assert callee_name(plain) == "table"
    assert callee_name(field) == "cell"
    assert callee_name(SyntaxNode.leaf(SyntaxKind.TEXT, "x")) is None
