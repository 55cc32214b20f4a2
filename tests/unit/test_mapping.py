from conversion.builder import ChunkBuilder
from conversion.walker import convert
from documents.plain import parse_plain
from documents.source import Source
from documents.world import World
from schemas.internal.checks import Location, Segment, Suggestion
from schemas.internal.syntax import Span, SyntaxKind, SyntaxNode

K = SyntaxKind


def _suggestion(start: int, end: int) -> Suggestion:
    return Suggestion(start=start, end=end, message="check this")


def _plain_world(text: str, file_id: str = "main.txt"):
    source = Source(file_id, parse_plain(text))
    world = World([source])
    (chunk,) = convert(source.root, file_id=file_id)
    return world, chunk


def test_builder_merges_segments_of_the_same_kind() -> None:
    builder = ChunkBuilder()
    builder.text("a")
    builder.text("b")
    builder.markup("x")
    builder.markup("y")
    builder.encoded("", "\n")
    chunk = builder.finish()

    assert chunk.segments == [
        Segment.text("ab"),
        Segment.markup("xy"),
        Segment.encoded("", "\n"),
    ]
    assert chunk.stream == "ab\n"


def test_exact_runs_resolve_per_character_bytes() -> None:
    span = Span(file="main.typ", number=1)
    builder = ChunkBuilder()
    builder.text("Hé", span, 0)
    builder.text("llo", span, 3)
    chunk = builder.finish()

    assert len(chunk.mapping.entries) == 1
    assert chunk.mapping.resolve(0) == (span, 0, 1)
    assert chunk.mapping.resolve(1) == (span, 1, 3)
    assert chunk.mapping.resolve(2) == (span, 3, 4)
    assert chunk.mapping.resolve(5) is None


def test_encoded_runs_map_to_the_whole_original() -> None:
    span = Span(file="main.typ", number=2)
    builder = ChunkBuilder()
    builder.encoded("\\#", "#", span)
    builder.encoded("", " ")
    chunk = builder.finish()

    assert chunk.mapping.resolve(0) == (span, 0, 2)
    assert chunk.mapping.resolve(1) is None


def test_suggestion_maps_back_to_word() -> None:
    world, chunk = _plain_world("Thiss is wrong.")

    assert chunk.mapping.location(_suggestion(0, 5), world) == [
        Location(file="main.txt", start=0, end=5)
    ]


def test_multibyte_characters_map_to_byte_ranges() -> None:
    world, chunk = _plain_world("Café latte")

    assert chunk.stream[5:10] == "latte"
    assert chunk.mapping.location(_suggestion(5, 10), world) == [
        Location(file="main.txt", start=6, end=11)
    ]


def test_adjacent_ranges_are_merged() -> None:
    world, chunk = _plain_world("Thiss is wrong.")

    assert chunk.mapping.location(_suggestion(6, 14), world) == [
        Location(file="main.txt", start=6, end=14)
    ]


def test_collapsed_whitespace_maps_to_the_whole_node() -> None:
    world, chunk = _plain_world("Hello   \n\tworld.")

    assert chunk.mapping.location(_suggestion(5, 6), world) == [
        Location(file="main.txt", start=5, end=10)
    ]


def test_synthetic_characters_have_no_location() -> None:
    source = Source(
        "main.typ",
        SyntaxNode.inner(
            K.MARKUP,
            [
                SyntaxNode.inner(
                    K.HEADING,
                    [
                        SyntaxNode.leaf(K.HEADING_MARKER, "="),
                        SyntaxNode.leaf(K.SPACE, " "),
                        SyntaxNode.inner(K.MARKUP, [SyntaxNode.leaf(K.TEXT, "Intro")]),
                    ],
                )
            ],
        ),
    )
    world = World([source])
    (chunk,) = convert(source.root, file_id="main.typ")

    assert chunk.mapping.location(_suggestion(0, 2), world) == []
    assert chunk.mapping.location(_suggestion(0, 9), world) == [
        Location(file="main.typ", start=2, end=7)
    ]


def test_ignored_function_produces_no_location() -> None:
    root = SyntaxNode.inner(
        K.MARKUP,
        [
            SyntaxNode.leaf(K.TEXT, "See"),
            SyntaxNode.leaf(K.SPACE, " "),
            SyntaxNode.leaf(K.HASH, "#"),
            SyntaxNode.inner(
                K.FUNC_CALL,
                [
                    SyntaxNode.leaf(K.IDENT, "bibliography"),
                    SyntaxNode.inner(
                        K.ARGS,
                        [
                            SyntaxNode.leaf(K.LEFT_PAREN, "("),
                            SyntaxNode.leaf(K.STR, '"refs.bib"'),
                            SyntaxNode.leaf(K.RIGHT_PAREN, ")"),
                            SyntaxNode.inner(
                                K.CONTENT_BLOCK,
                                [
                                    SyntaxNode.leaf(K.LEFT_BRACKET, "["),
                                    SyntaxNode.inner(K.MARKUP, [SyntaxNode.leaf(K.TEXT, "Refrences")]),
                                    SyntaxNode.leaf(K.RIGHT_BRACKET, "]"),
                                ],
                            ),
                        ],
                    ),
                ],
            ),
        ],
    )
    source = Source("main.typ", root)
    world = World([source])
    (chunk,) = convert(source.root, file_id="main.typ")
    suggestion = _suggestion(4, 13)

    assert chunk.stream == "See Refrences"
    assert chunk.mapping.location(suggestion, world, ignore={"bibliography"}) == []
    assert chunk.mapping.location(suggestion, world) == [
        Location(file="main.typ", start=30, end=39)
    ]


def test_other_files_are_skipped_when_a_file_is_required() -> None:
    world, chunk = _plain_world("Thiss is wrong.")

    assert chunk.mapping.location(_suggestion(0, 5), world, file_id="other.txt") == []


def test_range_is_clamped_to_the_stream() -> None:
    world, chunk = _plain_world("Thiss")

    assert chunk.mapping.location(_suggestion(3, 50), world) == [
        Location(file="main.txt", start=3, end=5)
    ]


def test_every_character_round_trips_to_its_source_text() -> None:
    text = "Ünïcode wörds and plain ones.\n\nSecond paragraph here."
    world, chunk = _plain_world(text)
    data = text.encode("utf-8")

    for index, char in enumerate(chunk.stream):
        locations = chunk.mapping.location(_suggestion(index, index + 1), world)
        if char.isspace():
            continue
        (location,) = locations
        assert data[location.start:location.end].decode("utf-8") == char
