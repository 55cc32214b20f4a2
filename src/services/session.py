"""Long-lived check session with a debounced re-check loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Set

from backends.contracts import CheckBackend
from core.config import get_settings
from core.errors import ProsemapError
from documents.world import World
from persistence.cache import ParagraphCache
from schemas.requests import CheckOptions
from schemas.responses import CheckResult
from services.checker import run_check

logger = logging.getLogger(__name__)

ResultCallback = Callable[[CheckResult], None]


class CheckSession:
    """Owns one backend and the paragraph cache of one document.

    Passes are serialized through a lock. ``notify_edit`` schedules a check
    after ``debounce`` seconds; a newer edit replaces a check that is still
    waiting, while a check already talking to the backend runs to the end and
    its result is discarded.
    """

    def __init__(
        self,
        backend: CheckBackend,
        options: CheckOptions | None = None,
        *,
        debounce: float | None = None,
        on_result: ResultCallback | None = None,
    ) -> None:
        self.backend = backend
        self.options = options or CheckOptions()
        self.debounce = get_settings().debounce_seconds if debounce is None else debounce
        self.on_result = on_result
        self.cache = ParagraphCache()
        self._lock = asyncio.Lock()
        self._generation = 0
        self._waiting: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()

    async def check(self, world: World) -> CheckResult:
        """Check now (document opened or saved)."""
        async with self._lock:
            result, self.cache = await run_check(
                world, self.options, self.backend, self.cache
            )
        return result

    def notify_edit(self, world: World) -> asyncio.Task:
        """Schedule a debounced check of the edited document."""
        self._generation += 1
        if self._waiting is not None and not self._waiting.done():
            self._waiting.cancel()
        task = asyncio.ensure_future(self._debounced(world, self._generation))
        self._waiting = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait(self) -> None:
        """Wait until every scheduled check has finished or was replaced."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await self.wait()
        close = getattr(self.backend, "aclose", None)
        if close is not None:
            await close()

    async def _debounced(self, world: World, generation: int) -> Optional[CheckResult]:
        await asyncio.sleep(self.debounce)
        if self._waiting is asyncio.current_task():
            self._waiting = None
        try:
            result = await self.check(world)
        except ProsemapError as exc:
            logger.warning("Debounced check failed: %s", exc)
            return None
        if generation != self._generation:
            logger.debug("Discarded result of superseded check %s", generation)
            return None
        if self.on_result is not None:
            self.on_result(result)
        return result


__all__ = ["CheckSession"]
