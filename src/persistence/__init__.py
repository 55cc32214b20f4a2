"""Persistence subsystem exports."""

from persistence.cache import ParagraphCache
from persistence.hashing import paragraph_key

__all__ = ["ParagraphCache", "paragraph_key"]
