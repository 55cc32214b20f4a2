"""Separator rules for named constructs (function calls and arguments)."""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class FunctionRule(BaseModel):
    before: str = ""
    after: str = ""
    after_argument: str = ""

    model_config = ConfigDict(extra="forbid")


class ArgumentRule(BaseModel):
    before: str = ""
    after: str = ""

    model_config = ConfigDict(extra="forbid")


def _default_functions() -> Dict[str, FunctionRule]:
    return {
        "grid": FunctionRule(after_argument="\n"),
        "table": FunctionRule(after_argument="\n"),
        "header": FunctionRule(after_argument="\n"),
        "cell": FunctionRule(before="\n", after="\n"),
    }


def _default_arguments() -> Dict[str, ArgumentRule]:
    return {"caption": ArgumentRule(before="\n\n", after="\n\n")}


class Rules(BaseModel):
    """Separators injected around constructs so their content reads as paragraphs."""

    functions: Dict[str, FunctionRule] = Field(default_factory=_default_functions)
    arguments: Dict[str, ArgumentRule] = Field(default_factory=_default_arguments)


__all__ = ["ArgumentRule", "FunctionRule", "Rules"]
