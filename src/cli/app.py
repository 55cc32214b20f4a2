"""Typer CLI entrypoint for prose checks."""

from __future__ import annotations

import asyncio
import os
import shlex
import sys
from importlib import import_module
from pathlib import Path

import typer

from core.config import get_settings
from prosemap import __version__

_SUBCOMMAND_SPECS: list[tuple[str, str, str]] = [
    ("config", "cli.commands.config", "Inspect configuration"),
]
_SUBCOMMAND_NAMES = {name for name, _, _ in _SUBCOMMAND_SPECS}
_SUBCOMMANDS_REGISTERED = False

app = typer.Typer(
    help="Check the prose of markup documents with a LanguageTool server.",
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    add_completion=True,
)


@app.callback()
def root(
    ctx: typer.Context,
    version_flag: bool = typer.Option(
        False,
        "-v",
        "--version",
        help="Print the version",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: LOG_LEVEL)",
    ),
) -> None:
    from cli.common import configure_logging

    if version_flag:
        typer.echo(__version__)
        raise typer.Exit()
    configure_logging(log_level or get_settings().log_level)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command(help="Check a document and print diagnostics")
def check(
    path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        metavar="PATH",
        help="Plain text file or JSON document dump",
    ),
    language: str | None = typer.Option(
        None, "--language", "-l", help="Checker language (default: LT_LANGUAGE)"
    ),
    chunk_size: int | None = typer.Option(
        None, "--chunk-size", help="Characters per chunk (default: CHUNK_SIZE)"
    ),
    host: str | None = typer.Option(None, "--host", help="LanguageTool host"),
    port: str | None = typer.Option(None, "--port", help="LanguageTool port"),
    concurrency: int | None = typer.Option(
        None, "--concurrency", help="Chunks checked in parallel"
    ),
    options: str | None = typer.Option(
        None, "--options", help="CheckOptions as a JSON string"
    ),
    options_file: Path | None = typer.Option(
        None,
        "--options-file",
        help="JSON/YAML file with CheckOptions; its values win over flags",
    ),
    set_values: list[str] | None = typer.Option(
        None,
        "--set",
        help="Override one option with key=value, repeatable",
    ),
    all_files: bool = typer.Option(
        False, "--all-files", help="Report every file of a multi-file dump"
    ),
    plain: bool = typer.Option(
        False, "--plain", help="One line per diagnostic, easy to grep"
    ),
    json_out: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    from cli.common import build_options, emit_json, load_options_payload
    from cli.output import emit_plain, emit_pretty
    from core.errors import CheckAborted, DocumentError, ProsemapError
    from documents.loader import load_world
    from schemas.requests import CheckOptions

    settings = get_settings()
    flags = CheckOptions(
        language=language or settings.lt_language,
        chunk_size=chunk_size or settings.chunk_size,
        host=host,
        port=port,
        concurrency=concurrency or settings.check_concurrency,
        line_spacing=settings.layout_line_spacing,
    )
    payload = load_options_payload(options, options_file, set_values)
    options_obj = build_options(payload).overwrite(flags)

    try:
        world = load_world(path)
    except DocumentError as exc:
        raise typer.BadParameter(str(exc)) from exc

    names = _display_names(world, path)
    try:
        result = asyncio.run(_run_check(world, options_obj, all_files))
    except CheckAborted as exc:
        typer.echo(f"Error: {exc}", err=True)
        if exc.diagnostics:
            emit_plain(world, exc.diagnostics, names)
        raise typer.Exit(code=1) from exc
    except ProsemapError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if json_out:
        emit_json(result.model_dump())
    elif plain:
        emit_plain(world, result.diagnostics, names)
    else:
        emit_pretty(world, result.diagnostics, names)


@app.command(help="Print the checkable chunks of a document without checking")
def convert(
    path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        metavar="PATH",
    ),
    language: str | None = typer.Option(None, "--language", "-l"),
    chunk_size: int | None = typer.Option(None, "--chunk-size"),
    all_files: bool = typer.Option(False, "--all-files"),
    json_out: bool = typer.Option(False, "--json", help="Print chunks as JSON"),
) -> None:
    from cli.common import emit_json
    from core.errors import DocumentError
    from documents.loader import load_world
    from schemas.requests import CheckOptions
    from schemas.responses import ChunkView, ConvertResult
    from services.checker import build_chunks

    settings = get_settings()
    options_obj = CheckOptions(
        language=language or settings.lt_language,
        chunk_size=chunk_size or settings.chunk_size,
        line_spacing=settings.layout_line_spacing,
    )
    try:
        world = load_world(path)
    except DocumentError as exc:
        raise typer.BadParameter(str(exc)) from exc

    chunks = build_chunks(world, options_obj, all_files=all_files)
    if json_out:
        views = [
            ChunkView(text=chunk.stream, language=chunk.language, characters=len(chunk.stream))
            for chunk in chunks
        ]
        emit_json(ConvertResult(chunks=views).model_dump())
        return
    for index, chunk in enumerate(chunks, start=1):
        typer.echo(f"--- chunk {index} ({chunk.language}, {len(chunk.stream)} chars) ---")
        typer.echo(chunk.stream)


async def _run_check(world, options, all_files: bool):
    from services.checker import create_backend, run_check

    backend = create_backend(options)
    try:
        result, _ = await run_check(world, options, backend, all_files=all_files)
    finally:
        await backend.aclose()
    return result


def _display_names(world, path: Path) -> dict[str, str]:
    if path.suffix.lower() == ".json":
        return {}
    return {file_id: str(path) for file_id in world.files}


def _parse_invoked_subcommand() -> str | None:
    completion_args = os.getenv("_TYPER_COMPLETE_ARGS")
    tokens: list[str]
    if completion_args:
        try:
            tokens = shlex.split(completion_args)
        except ValueError:
            tokens = completion_args.split()
        if tokens:
            tokens = tokens[1:]
    else:
        tokens = sys.argv[1:]

    for token in tokens:
        if token in _SUBCOMMAND_NAMES:
            return token
        if token.startswith("-"):
            continue
        break
    return None


def _register_subcommands() -> None:
    global _SUBCOMMANDS_REGISTERED
    if _SUBCOMMANDS_REGISTERED:
        return

    selected = _parse_invoked_subcommand()
    for name, module_path, help_text in _SUBCOMMAND_SPECS:
        if selected == name:
            module = import_module(module_path)
            app.add_typer(module.app, name=name)
            continue
        app.add_typer(
            typer.Typer(help=help_text, add_completion=False, no_args_is_help=True),
            name=name,
        )

    _SUBCOMMANDS_REGISTERED = True


def main() -> None:
    _register_subcommands()
    app()


__all__ = ["app", "main"]
