"""Document model: sources, worlds and loaders."""

from .loader import load_world, world_from_dump, world_from_text
from .plain import parse_plain
from .source import LinkedNode, Source
from .world import World

__all__ = [
    "LinkedNode",
    "Source",
    "World",
    "load_world",
    "parse_plain",
    "world_from_dump",
    "world_from_text",
]
