"""Document interchange contracts for compiler output."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.internal.layout import Page
from schemas.internal.syntax import SyntaxNode


class SourceDump(BaseModel):
    """One source file as exported by the compiler."""

    id: str = Field(description="Stable file identifier (virtual path).")
    text: Optional[str] = Field(
        default=None, description="Full file text; derived from the tree when omitted."
    )
    root: SyntaxNode


class DocumentDump(BaseModel):
    """Parsed sources plus, optionally, the laid-out pages of the document."""

    main: Optional[str] = None
    files: List[SourceDump]
    pages: Optional[List[Page]] = None

    model_config = ConfigDict(extra="allow")


__all__ = ["DocumentDump", "SourceDump"]
