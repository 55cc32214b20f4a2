"""HTTP client for a LanguageTool server."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Set

import httpx

from core.errors import BackendError
from schemas.internal.checks import CheckRequest, Suggestion
from utils.text import utf16_offsets, utf16_to_char_index

logger = logging.getLogger(__name__)

CHECK_PATH = "/v2/check"


class RemoteBackend:
    """Checks chunks against ``{host}:{port}/v2/check``.

    Rules disabled and words allowed on the backend apply to every request;
    values carried by a request are added on top.
    """

    def __init__(
        self,
        host: str = "http://127.0.0.1",
        port: str | int = "8081",
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = _base_url(host, str(port))
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self._allowed_words: Set[str] = set()
        self._disabled_rules: List[str] = []

    async def allow_words(self, words: Iterable[str]) -> None:
        self._allowed_words.update(words)

    async def disable_checks(self, rules: Iterable[str]) -> None:
        for rule in rules:
            if rule not in self._disabled_rules:
                self._disabled_rules.append(rule)

    async def check(self, request: CheckRequest) -> List[Suggestion]:
        text = request.text
        data = {"text": text, "language": request.language}
        disabled = list(self._disabled_rules)
        for rule in request.disabled_rules or []:
            if rule not in disabled:
                disabled.append(rule)
        if disabled:
            data["disabledRules"] = ",".join(disabled)

        url = f"{self.base_url}{CHECK_PATH}"
        try:
            response = await self.client.post(url, data=data)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise BackendError(f"LanguageTool request failed: {exc}") from exc
        except ValueError as exc:
            raise BackendError(f"LanguageTool returned invalid JSON: {exc}") from exc

        allowed = self._allowed_words.union(request.allowed_words or [])
        suggestions = parse_matches(payload, text, allowed)
        logger.debug(
            "Checked %s chars (%s): %s suggestions", len(text), request.language, len(suggestions)
        )
        return suggestions

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()


def parse_matches(
    payload: Dict[str, Any], text: str, allowed_words: Optional[Set[str]] = None
) -> List[Suggestion]:
    """Convert a ``/v2/check`` response into suggestions.

    The server counts offsets in UTF-16 code units; suggestions index
    characters of ``text``.
    """
    if not isinstance(payload, dict):
        raise BackendError("LanguageTool response is not an object")
    offsets = utf16_offsets(text)
    suggestions: List[Suggestion] = []
    for match in payload.get("matches") or []:
        try:
            offset = int(match["offset"])
            length = int(match["length"])
        except (KeyError, TypeError, ValueError) as exc:
            raise BackendError(f"Malformed LanguageTool match: {match!r}") from exc
        start = utf16_to_char_index(offsets, offset)
        end = utf16_to_char_index(offsets, offset + length)
        if allowed_words and length and text[start:end] in allowed_words:
            continue
        rule = match.get("rule") or {}
        suggestions.append(
            Suggestion(
                start=start,
                end=end,
                message=match.get("message", ""),
                rule_id=rule.get("id", ""),
                rule_description=rule.get("description", ""),
                replacements=[
                    item.get("value", "") for item in match.get("replacements") or []
                ],
            )
        )
    return suggestions


def _base_url(host: str, port: str) -> str:
    host = host.rstrip("/")
    if "://" not in host:
        host = f"http://{host}"
    return f"{host}:{port}" if port else host


__all__ = ["CHECK_PATH", "RemoteBackend", "parse_matches"]
