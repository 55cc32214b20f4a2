"""Core settings and error types shared by the CLI, API and services."""

from dotenv import load_dotenv

from .config import Settings, get_settings
from .errors import BackendError, CheckAborted, DocumentError, ProsemapError

load_dotenv()

__all__ = [
    "BackendError",
    "CheckAborted",
    "DocumentError",
    "ProsemapError",
    "Settings",
    "get_settings",
]
