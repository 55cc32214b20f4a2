"""Check runner service for CLI/API reuse."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from time import perf_counter
from typing import List, Optional, Sequence, Tuple

from backends.contracts import CheckBackend
from backends.remote import RemoteBackend
from conversion.builder import Chunk
from conversion.layout import LayoutOptions, document
from conversion.walker import convert
from core.config import get_settings
from core.errors import CheckAborted
from documents.world import World
from persistence.cache import ParagraphCache
from schemas.internal.checks import CheckRequest, Suggestion
from schemas.requests import CheckOptions
from schemas.responses import CheckResult
from services.collector import DiagnosticCollector

logger = logging.getLogger(__name__)


@dataclass
class CheckStats:
    chunks: int = 0
    checked: int = 0
    cached: int = 0


def build_chunks(
    world: World,
    options: CheckOptions,
    *,
    all_files: bool = False,
) -> List[Chunk]:
    """Convert a world into chunks using its pages when it has them."""
    if world.pages is not None:
        layout_options = LayoutOptions(
            line_spacing=options.line_spacing, languages=dict(options.languages)
        )
        file_id = None if all_files else world.main
        return document(world.pages, options.chunk_size, file_id, layout_options)

    files = world.files if all_files else [world.main] if world.main else []
    chunks: List[Chunk] = []
    for file_id in files:
        chunks.extend(
            convert(
                world.source(file_id).root,
                options.rules,
                options.chunk_size,
                file_id=file_id,
                language=options.language,
            )
        )
    return chunks


def create_backend(options: CheckOptions) -> RemoteBackend:
    settings = get_settings()
    return RemoteBackend(
        options.host or settings.lt_host,
        options.port or settings.lt_port,
        timeout=settings.lt_timeout,
    )


async def check_chunks(
    chunks: Sequence[Chunk],
    backend: CheckBackend,
    cache: ParagraphCache,
    collector: DiagnosticCollector,
    *,
    disabled_rules: Optional[List[str]] = None,
    allowed_words: Optional[List[str]] = None,
    concurrency: int = 1,
) -> Tuple[ParagraphCache, CheckStats]:
    """Check every chunk once and return the cache for the next pass.

    ``cache`` itself is left untouched. Diagnostics are added to ``collector``
    in chunk order. A backend failure raises ``CheckAborted`` with the
    diagnostics of the chunks checked before it.
    """
    lookup = cache.copy()
    next_cache = ParagraphCache()
    stats = CheckStats(chunks=len(chunks))
    # Cache lookups happen in document order so duplicate paragraphs consume
    # their stored entries deterministically.
    hits = [lookup.get(chunk.stream, chunk.language) for chunk in chunks]

    def request(chunk: Chunk) -> CheckRequest:
        return chunk.request(disabled_rules=disabled_rules, allowed_words=allowed_words)

    def record(chunk: Chunk, suggestions: List[Suggestion], cached: bool) -> None:
        next_cache.insert(chunk.stream, chunk.language, suggestions)
        collector.add(suggestions, chunk.mapping)
        if cached:
            stats.cached += 1
        else:
            stats.checked += 1

    if concurrency <= 1:
        for index, (chunk, hit) in enumerate(zip(chunks, hits)):
            if hit is not None:
                record(chunk, hit, True)
                continue
            try:
                suggestions = await backend.check(request(chunk))
            except Exception as exc:
                logger.warning("Check aborted at chunk %s/%s: %s", index + 1, len(chunks), exc)
                raise CheckAborted(collector.finish(), exc) from exc
            logger.debug("Chunk %s/%s: %s suggestions", index + 1, len(chunks), len(suggestions))
            record(chunk, suggestions, False)
        return next_cache, stats

    semaphore = asyncio.Semaphore(concurrency)

    async def run(chunk: Chunk) -> List[Suggestion]:
        async with semaphore:
            return await backend.check(request(chunk))

    tasks = [
        None if hit is not None else asyncio.ensure_future(run(chunk))
        for chunk, hit in zip(chunks, hits)
    ]
    try:
        for index, (chunk, hit, task) in enumerate(zip(chunks, hits, tasks)):
            if task is None:
                record(chunk, hit or [], True)
                continue
            try:
                suggestions = await task
            except Exception as exc:
                logger.warning("Check aborted at chunk %s/%s: %s", index + 1, len(chunks), exc)
                raise CheckAborted(collector.finish(), exc) from exc
            record(chunk, suggestions, False)
    finally:
        for task in tasks:
            if task is not None and not task.done():
                task.cancel()
    return next_cache, stats


async def run_check(
    world: World,
    options: CheckOptions,
    backend: CheckBackend,
    cache: ParagraphCache | None = None,
    *,
    all_files: bool = False,
) -> Tuple[CheckResult, ParagraphCache]:
    """Run one check pass over ``world`` and return the result and the new cache."""
    start = perf_counter()
    chunks = build_chunks(world, options, all_files=all_files)
    collector = DiagnosticCollector(
        world,
        None if all_files else world.main,
        frozenset(options.ignore_functions),
    )
    next_cache, stats = await check_chunks(
        chunks,
        backend,
        cache if cache is not None else ParagraphCache(),
        collector,
        disabled_rules=list(options.disabled_checks) or None,
        allowed_words=list(options.dictionary) or None,
        concurrency=options.concurrency,
    )
    diagnostics = collector.finish()
    warnings: List[str] = []
    if collector.dropped:
        warnings.append(f"{collector.dropped} suggestions had no source location")
    runtime_ms = int((perf_counter() - start) * 1000)
    result = CheckResult(
        diagnostics=diagnostics,
        chunks=stats.chunks,
        checked=stats.checked,
        cached=stats.cached,
        runtime_ms=runtime_ms,
        warnings=warnings,
    )
    return result, next_cache


__all__ = ["CheckStats", "build_chunks", "check_chunks", "create_backend", "run_check"]
