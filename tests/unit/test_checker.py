import asyncio

import pytest

from core.errors import CheckAborted
from documents.loader import world_from_text
from persistence.cache import ParagraphCache
from schemas.internal.checks import Location, Suggestion
from schemas.requests import CheckOptions
from services.checker import build_chunks, check_chunks, run_check
from services.collector import DiagnosticCollector

TEXT = "Thiss is one.\n\nThiss is two.\n\nThiss is three."


def _starts(diagnostics) -> list:
    return [diagnostic.locations[0].start for diagnostic in diagnostics]


def test_run_check_locates_every_paragraph(fake_backend, flagging) -> None:
    world = world_from_text(TEXT)
    backend = fake_backend(flagging("Thiss"))

    result, cache = asyncio.run(run_check(world, CheckOptions(chunk_size=1), backend))

    assert backend.texts == ["Thiss is one.\n\n", "Thiss is two.\n\n", "Thiss is three."]
    assert _starts(result.diagnostics) == [0, 15, 30]
    assert result.diagnostics[0].locations == [Location(file="main.txt", start=0, end=5)]
    assert (result.chunks, result.checked, result.cached) == (3, 3, 0)
    assert len(cache) == 3
    assert result.warnings == []


def test_second_pass_is_served_from_cache(fake_backend, flagging) -> None:
    world = world_from_text(TEXT)
    backend = fake_backend(flagging("Thiss"))
    options = CheckOptions(chunk_size=1)

    async def scenario():
        first, cache = await run_check(world, options, backend)
        second, cache = await run_check(world, options, backend, cache)
        return first, second, cache

    first, second, cache = asyncio.run(scenario())

    assert len(backend.requests) == 3
    assert second.diagnostics == first.diagnostics
    assert (second.checked, second.cached) == (0, 3)
    assert len(cache) == 3


def test_only_edited_paragraph_is_rechecked(fake_backend, flagging) -> None:
    backend = fake_backend(flagging("Thiss"))
    options = CheckOptions(chunk_size=1)

    async def scenario():
        _, cache = await run_check(world_from_text(TEXT), options, backend)
        edited = TEXT.replace("two", "2")
        return await run_check(world_from_text(edited), options, backend, cache)

    result, _ = asyncio.run(scenario())

    assert backend.texts[-1] == "Thiss is 2.\n\n"
    assert (result.checked, result.cached) == (1, 2)
    assert _starts(result.diagnostics) == [0, 15, 28]


def test_options_reach_the_backend(fake_backend) -> None:
    world = world_from_text("Thiss is fine.")
    backend = fake_backend()
    options = CheckOptions(disabled_checks=["WHITESPACE_RULE"], dictionary=["Thiss"])

    asyncio.run(run_check(world, options, backend))

    (request,) = backend.requests
    assert request.disabled_rules == ["WHITESPACE_RULE"]
    assert request.allowed_words == ["Thiss"]
    assert request.language == "en-US"


def test_unlocated_suggestions_become_a_warning(fake_backend) -> None:
    world = world_from_text("Fine.\n\nFine.")

    def respond(request):
        return [Suggestion(start=40, end=45, message="past the end")]

    result, _ = asyncio.run(run_check(world, CheckOptions(), fake_backend(respond)))

    assert result.diagnostics == []
    assert result.warnings == ["1 suggestions had no source location"]


@pytest.mark.parametrize("concurrency", [1, 3])
def test_failure_keeps_partial_diagnostics_and_the_cache(
    concurrency: int, fake_backend, flagging
) -> None:
    world = world_from_text(TEXT)
    options = CheckOptions(chunk_size=1)
    chunks = build_chunks(world, options)
    cache = ParagraphCache()
    cache.insert("Unrelated.", "en-US", [])
    backend = fake_backend(flagging("Thiss"), fail_on=[1])
    collector = DiagnosticCollector(world, world.main)

    with pytest.raises(CheckAborted) as info:
        asyncio.run(
            check_chunks(chunks, backend, cache, collector, concurrency=concurrency)
        )

    assert _starts(info.value.diagnostics) == [0]
    assert len(cache) == 1
    assert cache.copy().get("Unrelated.", "en-US") == []


def test_concurrent_checks_keep_document_order(fake_backend, flagging) -> None:
    world = world_from_text(TEXT)
    backend = fake_backend(flagging("Thiss"), delay=0.01)

    result, _ = asyncio.run(
        run_check(world, CheckOptions(chunk_size=1, concurrency=3), backend)
    )

    assert _starts(result.diagnostics) == [0, 15, 30]
    assert result.checked == 3
