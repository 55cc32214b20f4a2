"""Checking backend protocol contracts."""

from __future__ import annotations

from typing import Iterable, List, Protocol

from schemas.internal.checks import CheckRequest, Suggestion


class CheckBackend(Protocol):
    async def check(self, request: CheckRequest) -> List[Suggestion]: ...

    async def allow_words(self, words: Iterable[str]) -> None: ...

    async def disable_checks(self, rules: Iterable[str]) -> None: ...


__all__ = ["CheckBackend"]
