"""Load documents from plain text files or compiler interchange dumps."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from core.errors import DocumentError
from documents.plain import parse_plain
from documents.source import Source
from documents.world import World
from schemas.internal.documents import DocumentDump

logger = logging.getLogger(__name__)


def world_from_dump(dump: DocumentDump) -> World:
    sources = [Source(entry.id, entry.root, entry.text) for entry in dump.files]
    return World(sources, main=dump.main, pages=dump.pages)


def world_from_text(text: str, file_id: str = "main.txt") -> World:
    return World([Source(file_id, parse_plain(text))], main=file_id)


def load_world(path: str | Path) -> World:
    """Read ``path`` as a JSON interchange dump (``.json``) or as plain prose."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentError(f"Cannot read {path}: {exc}") from exc

    if path.suffix.lower() != ".json":
        return world_from_text(raw, file_id=path.name)

    try:
        dump = DocumentDump.model_validate(json.loads(raw))
    except json.JSONDecodeError as exc:
        raise DocumentError(f"Invalid JSON in {path}: {exc}") from exc
    except ValidationError as exc:
        raise DocumentError(f"Invalid document dump {path}: {exc}") from exc
    world = world_from_dump(dump)
    logger.debug(
        "Loaded %s: files=%s pages=%s",
        path,
        len(world.files),
        len(world.pages) if world.pages is not None else 0,
    )
    return world


__all__ = ["load_world", "world_from_dump", "world_from_text"]
