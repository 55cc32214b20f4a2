from persistence.cache import ParagraphCache
from persistence.hashing import hash_payload, paragraph_key
from schemas.internal.checks import Suggestion


def _suggestion(message: str) -> Suggestion:
    return Suggestion(start=0, end=1, message=message)


def test_get_consumes_the_entry() -> None:
    cache = ParagraphCache()
    cache.insert("Hello.", "en-US", [_suggestion("a")])

    assert cache.get("Hello.", "en-US") == [_suggestion("a")]
    assert cache.get("Hello.", "en-US") is None


def test_duplicate_paragraphs_are_stored_separately() -> None:
    cache = ParagraphCache()
    cache.insert("Same.", "en-US", [_suggestion("first")])
    cache.insert("Same.", "en-US", [_suggestion("second")])

    assert len(cache) == 2
    assert cache.get("Same.", "en-US") == [_suggestion("first")]
    assert cache.get("Same.", "en-US") == [_suggestion("second")]
    assert len(cache) == 0


def test_language_is_part_of_the_key() -> None:
    cache = ParagraphCache()
    cache.insert("Hallo.", "de-DE", [])

    assert cache.get("Hallo.", "en-US") is None
    assert cache.get("Hallo.", "de-DE") == []


def test_copy_is_independent() -> None:
    cache = ParagraphCache()
    cache.insert("Hello.", "en-US", [])
    clone = cache.copy()

    assert clone.get("Hello.", "en-US") == []
    assert len(cache) == 1


def test_keys_are_stable() -> None:
    assert hash_payload({"b": 1, "a": 2}) == hash_payload({"a": 2, "b": 1})
    assert paragraph_key("x", "en-US") == paragraph_key("x", "en-US")
    assert paragraph_key("x", "en-US") != paragraph_key("x", "de-DE")
