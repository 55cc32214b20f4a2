"""Conversion of documents into checkable chunks and back."""

from .builder import Chunk, ChunkBuilder
from .chunking import ChunkCollector
from .language import long_language
from .layout import LayoutOptions, document
from .mapping import Mapping, MappingEntry
from .walker import convert

__all__ = [
    "Chunk",
    "ChunkBuilder",
    "ChunkCollector",
    "LayoutOptions",
    "Mapping",
    "MappingEntry",
    "convert",
    "document",
    "long_language",
]
