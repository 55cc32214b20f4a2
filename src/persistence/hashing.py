"""Hashing helpers for cache keys."""

from __future__ import annotations

import hashlib
import json


def sha256_bytes(data: bytes) -> str:
    """Return hex sha256 of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def stable_json_dumps(payload: object) -> str:
    """Dump JSON with stable ordering for hashing."""
    return json.dumps(
        payload,
        ensure_ascii=True,
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )


def hash_payload(payload: object) -> str:
    """Return sha256 hash of a JSON-serializable payload."""
    return sha256_bytes(stable_json_dumps(payload).encode("utf-8"))


def paragraph_key(text: str, language: str) -> str:
    """Cache key of one checked chunk stream in one language."""
    return hash_payload({"stage": "paragraph", "text": text, "language": language})


__all__ = ["hash_payload", "paragraph_key", "sha256_bytes", "stable_json_dumps"]
