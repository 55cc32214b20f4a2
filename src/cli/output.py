"""Terminal rendering of diagnostics."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Tuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.text import Text

from documents.source import Source
from documents.world import World
from schemas.internal.checks import Diagnostic

MAX_SUGGESTIONS = 20


def byte_to_position(source: Source, index: int) -> Tuple[int, int]:
    """Zero-based ``(line, column)`` of a byte offset; columns count characters."""
    return source.byte_to_line(index), source.byte_to_column(index)


def presentable(replacements: Iterable[str]) -> List[str]:
    return [value for value in replacements if value.strip()][:MAX_SUGGESTIONS]


def plain_line(path: str, source: Source, diagnostic: Diagnostic) -> str:
    """``path l:c-l:c info message (r1, r2)`` with 1-based positions."""
    location = diagnostic.locations[0]
    start_line, start_column = byte_to_position(source, location.start)
    end_line, end_column = byte_to_position(source, location.end)
    line = (
        f"{path} {start_line + 1}:{start_column + 1}-{end_line + 1}:{end_column + 1}"
        f" info {diagnostic.message}"
    )
    replacements = presentable(diagnostic.replacements)
    if replacements:
        line += f" ({', '.join(replacements)})"
    return line


def emit_plain(
    world: World,
    diagnostics: Iterable[Diagnostic],
    names: Mapping[str, str] | None = None,
) -> None:
    names = names or {}
    typer.echo("START")
    for diagnostic in diagnostics:
        file_id = diagnostic.locations[0].file
        typer.echo(plain_line(names.get(file_id, file_id), world.source(file_id), diagnostic))
    typer.echo("END")


def emit_pretty(
    world: World,
    diagnostics: Iterable[Diagnostic],
    names: Mapping[str, str] | None = None,
    console: Console | None = None,
) -> None:
    names = names or {}
    console = console or Console()
    console.print("\n[bold green]Checking Document[/bold green]\n")
    for diagnostic in diagnostics:
        file_id = diagnostic.locations[0].file
        _render(console, names.get(file_id, file_id), world.source(file_id), diagnostic)


def _render(console: Console, path: str, source: Source, diagnostic: Diagnostic) -> None:
    location = diagnostic.locations[0]
    start_line, start_column = byte_to_position(source, location.start)
    end_line, _ = byte_to_position(source, location.end)
    context_start = source.line_to_byte(start_line) or 0
    context_end = source.line_range(end_line)[1]

    console.print(
        f"[bold blue]info[/bold blue][[dim]{escape(diagnostic.rule_id)}[/dim]]: "
        f"[bold]{escape(diagnostic.rule_description)}[/bold]"
    )
    console.print(f"  [blue]-->[/blue] {escape(path)}:{start_line + 1}:{start_column + 1}")

    snippet = Text(f"{start_line + 1:>4} | ")
    snippet.append(source.get(context_start, location.start))
    snippet.append(source.get(location.start, location.end), style="bold red underline")
    snippet.append(source.get(location.end, max(context_end, location.end)))
    console.print(snippet)
    console.print(f"       [red]{escape(diagnostic.message)}[/red]")
    for replacement in presentable(diagnostic.replacements):
        console.print(f"       [green]= {escape(replacement)}[/green]")
    console.print()


__all__ = [
    "MAX_SUGGESTIONS",
    "byte_to_position",
    "emit_plain",
    "emit_pretty",
    "plain_line",
    "presentable",
]
