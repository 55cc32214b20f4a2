"""Prose checking backends."""

from .contracts import CheckBackend
from .remote import RemoteBackend

__all__ = ["CheckBackend", "RemoteBackend"]
