"""Short to long language code resolution."""

from __future__ import annotations

from typing import Mapping, Optional

LONG_LANGUAGES = {
    "de": "de-DE",
    "en": "en-US",
    "pt": "pt-PT",
    "ca": "ca-ES",
    "nl": "nl-NL",
    "ru": "ru-RU",
    "pl": "pl-PL",
    "sk": "sk-SK",
    "sl": "sl-SI",
    "uk": "uk-UA",
    "ast": "ast-ES",
    "be": "be-BY",
    "br": "br-FR",
    "gl": "gl-ES",
    "km": "km-KH",
    "ro": "ro-RO",
    "sv": "sv-SE",
    "ta": "ta-IN",
    "tl": "tl-PH",
}


def long_language(
    lang: str,
    region: Optional[str] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> str:
    """Return the checker's language code for a document language.

    Precedence: explicit overrides, then the document region, then the
    built-in table, then the short code unchanged.
    """
    if overrides and lang in overrides:
        return overrides[lang]
    if region:
        return f"{lang}-{region.upper()}"
    return LONG_LANGUAGES.get(lang, lang)


__all__ = ["LONG_LANGUAGES", "long_language"]
