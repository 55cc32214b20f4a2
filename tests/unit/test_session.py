import asyncio

from documents.loader import world_from_text
from schemas.requests import CheckOptions
from services.session import CheckSession


def test_newer_edit_replaces_a_waiting_check(fake_backend, flagging) -> None:
    backend = fake_backend(flagging("Thiss"))
    results = []

    async def scenario():
        session = CheckSession(backend, debounce=0.05, on_result=results.append)
        first = session.notify_edit(world_from_text("Thiss one."))
        session.notify_edit(world_from_text("Thiss two."))
        await session.wait()
        return first

    first = asyncio.run(scenario())

    assert first.cancelled()
    assert backend.texts == ["Thiss two."]
    assert len(results) == 1


def test_result_of_superseded_check_is_discarded(fake_backend, flagging) -> None:
    backend = fake_backend(flagging("Thiss"), delay=0.1)
    results = []

    async def scenario():
        session = CheckSession(backend, debounce=0.0, on_result=results.append)
        first = session.notify_edit(world_from_text("Thiss one."))
        await asyncio.sleep(0.03)
        second = session.notify_edit(world_from_text("Thiss two."))
        await session.wait()
        return first.result(), second.result()

    first, second = asyncio.run(scenario())

    assert backend.texts == ["Thiss one.", "Thiss two."]
    assert first is None
    assert second is not None
    assert results == [second]


def test_session_reuses_its_cache_between_checks(fake_backend, flagging) -> None:
    backend = fake_backend(flagging("Thiss"))

    async def scenario():
        session = CheckSession(backend, CheckOptions(), debounce=0.0)
        world = world_from_text("Thiss is fine.")
        first = await session.check(world)
        second = await session.check(world)
        await session.aclose()
        return first, second

    first, second = asyncio.run(scenario())

    assert len(backend.requests) == 1
    assert second.cached == 1
    assert second.diagnostics == first.diagnostics
    assert backend.closed


def test_failed_debounced_check_yields_no_result(fake_backend, flagging) -> None:
    backend = fake_backend(fail_on=[0])
    results = []

    async def scenario():
        session = CheckSession(backend, debounce=0.0, on_result=results.append)
        task = session.notify_edit(world_from_text("Fine."))
        await session.wait()
        return task.result()

    assert asyncio.run(scenario()) is None
    assert results == []
