"""External request schemas for check runs."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.internal.rules import Rules


def _default_ignore_functions() -> List[str]:
    return ["bibliography", "lorem"]


class CheckOptions(BaseModel):
    """Per-run options. Values left unset fall back to the other source when merged."""

    language: str = "en-US"
    chunk_size: int = Field(default=1000, ge=1)
    rules: Rules = Field(default_factory=Rules)
    dictionary: List[str] = Field(default_factory=list)
    disabled_checks: List[str] = Field(default_factory=list)
    ignore_functions: List[str] = Field(default_factory=_default_ignore_functions)
    languages: Dict[str, str] = Field(
        default_factory=dict, description="Short to long language code overrides."
    )
    host: Optional[str] = None
    port: Optional[str] = None
    concurrency: int = Field(default=1, ge=1)
    line_spacing: float = Field(default=0.65, ge=0)

    model_config = ConfigDict(extra="forbid")

    @field_validator("port", mode="before")
    @classmethod
    def _port_as_text(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value

    def overwrite(self, other: "CheckOptions") -> "CheckOptions":
        """Return ``other`` updated with every field explicitly set on ``self``."""
        updates = {name: getattr(self, name) for name in self.model_fields_set}
        return other.model_copy(update=updates)


class CheckInput(BaseModel):
    text: str
    file: str = Field(default="main.txt", description="File id used in locations.")
    options: CheckOptions = Field(default_factory=CheckOptions)

    model_config = ConfigDict(extra="forbid")


__all__ = ["CheckInput", "CheckOptions"]
