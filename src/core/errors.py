"""Exception types raised across the checking pipeline."""

from __future__ import annotations

from typing import List, Sequence

from schemas.internal.checks import Diagnostic


class ProsemapError(Exception):
    """Base class for all errors raised by prosemap."""


class DocumentError(ProsemapError):
    """A document or interchange file could not be read."""


class BackendError(ProsemapError):
    """The checking backend failed (transport, HTTP status or payload)."""


class CheckAborted(ProsemapError):
    """A check pass stopped early; ``diagnostics`` holds what was collected."""

    def __init__(self, diagnostics: Sequence[Diagnostic], cause: BaseException) -> None:
        self.diagnostics: List[Diagnostic] = list(diagnostics)
        self.cause = cause
        super().__init__(f"check aborted after {len(self.diagnostics)} diagnostics: {cause}")


__all__ = ["BackendError", "CheckAborted", "DocumentError", "ProsemapError"]
