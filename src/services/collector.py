"""Turns backend suggestions into located diagnostics."""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, List

from conversion.mapping import Mapping
from documents.world import World
from schemas.internal.checks import Diagnostic, Suggestion

logger = logging.getLogger(__name__)


class DiagnosticCollector:
    """Accumulates diagnostics for one check pass.

    Suggestions that resolve to no location (synthetic separators, other
    files, ignored constructs) are dropped.
    """

    def __init__(
        self,
        world: World,
        file_id: str | None = None,
        ignore: AbstractSet[str] = frozenset(),
    ) -> None:
        self.world = world
        self.file_id = file_id
        self.ignore = frozenset(ignore)
        self._diagnostics: List[Diagnostic] = []
        self.dropped = 0

    def add(self, suggestions: Iterable[Suggestion], mapping: Mapping) -> None:
        for suggestion in suggestions:
            locations = mapping.location(suggestion, self.world, self.file_id, self.ignore)
            if not locations:
                self.dropped += 1
                logger.debug(
                    "Dropped suggestion %s at %s-%s without location",
                    suggestion.rule_id,
                    suggestion.start,
                    suggestion.end,
                )
                continue
            self._diagnostics.append(
                Diagnostic(
                    locations=locations,
                    message=suggestion.message,
                    rule_id=suggestion.rule_id,
                    rule_description=suggestion.rule_description,
                    replacements=[
                        value for value in suggestion.replacements if value.strip()
                    ],
                    edits=list(suggestion.replacements),
                )
            )

    def finish(self) -> List[Diagnostic]:
        diagnostics = self._diagnostics
        self._diagnostics = []
        return diagnostics


__all__ = ["DiagnosticCollector"]
