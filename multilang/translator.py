"""Immutable key -> text lookup with placeholder substitution."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from multilang.domain import TextEntry

_PLACEHOLDER_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def substitute(text: str, replacements: Mapping[str, Any] | None = None) -> str:
    """Replace ``:name`` tokens with values from ``replacements``.

    Unknown tokens are left untouched.
    """

    if not replacements:
        return text

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in replacements:
            return str(replacements[name])
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_replace, text)


def choose_form(text: str, replacements: Mapping[str, Any] | None = None) -> str:
    # "one apple|:count apples": first form for a count of 1, last form otherwise.
    if not replacements or "count" not in replacements or "|" not in text:
        return text
    forms = text.split("|")
    try:
        count = int(replacements["count"])
    except (TypeError, ValueError):
        return forms[-1]
    return forms[0] if abs(count) == 1 else forms[-1]


class TranslationTable:
    """Texts for a single (locale, scope) pair."""

    def __init__(self, locale: str, scope: str, texts: Mapping[str, str] | None = None) -> None:
        self.locale = locale
        self.scope = scope
        self._texts = MappingProxyType(dict(texts or {}))

    @classmethod
    def from_entries(cls, locale: str, scope: str, entries: Iterable[TextEntry]) -> "TranslationTable":
        return cls(locale, scope, {entry.key: entry.value for entry in entries})

    def __contains__(self, key: object) -> bool:
        return key in self._texts

    def __len__(self) -> int:
        return len(self._texts)

    def __iter__(self) -> Iterator[str]:
        return iter(self._texts)

    def __repr__(self) -> str:
        return f"TranslationTable(locale={self.locale!r}, scope={self.scope!r}, size={len(self)})"

    @property
    def texts(self) -> Mapping[str, str]:
        return self._texts

    def translate(self, key: str, replacements: Mapping[str, Any] | None = None) -> str:
        """Resolve ``key``, falling back to the key itself when it is missing."""

        text = self._texts.get(key, key)
        return substitute(choose_form(text, replacements), replacements)


__all__ = ["TranslationTable", "choose_form", "substitute"]
