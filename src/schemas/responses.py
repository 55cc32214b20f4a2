"""External response schemas for check runs."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from schemas.internal.checks import Diagnostic


class CheckResult(BaseModel):
    diagnostics: List[Diagnostic]
    chunks: int = 0
    checked: int = 0
    cached: int = 0
    runtime_ms: int | None = None
    warnings: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class ChunkView(BaseModel):
    text: str
    language: str
    characters: int


class ConvertResult(BaseModel):
    chunks: List[ChunkView]


__all__ = ["CheckResult", "ChunkView", "ConvertResult"]
