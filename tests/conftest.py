# tests/conftest.py
import asyncio
import re
from typing import Callable, Iterable, List, Optional

import pytest

from core.errors import BackendError
from schemas.internal.checks import CheckRequest, Suggestion


class FakeBackend:
    """In-memory backend recording every request it receives."""

    def __init__(
        self,
        responder: Optional[Callable[[CheckRequest], Iterable[Suggestion]]] = None,
        *,
        fail_on: Iterable[int] = (),
        delay: float = 0.0,
    ) -> None:
        self.responder = responder or (lambda request: [])
        self.fail_on = set(fail_on)
        self.delay = delay
        self.requests: List[CheckRequest] = []
        self.allowed: List[str] = []
        self.disabled: List[str] = []
        self.closed = False

    async def check(self, request: CheckRequest) -> List[Suggestion]:
        index = len(self.requests)
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if index in self.fail_on:
            raise BackendError("backend down")
        return list(self.responder(request))

    async def allow_words(self, words):
        self.allowed.extend(words)

    async def disable_checks(self, rules):
        self.disabled.extend(rules)

    async def aclose(self):
        self.closed = True

    @property
    def texts(self) -> List[str]:
        return [request.text for request in self.requests]


def flag_words(*words: str, message: str = "Possible spelling mistake found.") -> Callable:
    """Responder flagging every occurrence of ``words`` in the request text."""

    def respond(request: CheckRequest) -> List[Suggestion]:
        suggestions = []
        for word in words:
            for match in re.finditer(re.escape(word), request.text):
                suggestions.append(
                    Suggestion(
                        start=match.start(),
                        end=match.end(),
                        message=message,
                        rule_id="MORFOLOGIK_RULE_EN_US",
                        rule_description="Possible spelling mistake",
                        replacements=[word.replace("ss", "s"), " "],
                    )
                )
        suggestions.sort(key=lambda item: item.start)
        return suggestions

    return respond


@pytest.fixture
def fake_backend():
    return FakeBackend


@pytest.fixture
def flagging():
    return flag_words
