"""Locale detection and locale-prefixed URL helpers.

Requests are reduced to plain path strings ("ka/news/12") so the helpers can
sit behind any web framework's adapter.
"""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatchcase

from multilang.config import MultiLangSettings


@dataclass(frozen=True)
class RouteGroup:
    prefix: str
    name_prefix: str


def path_segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


class LocaleRouter:
    def __init__(self, settings: MultiLangSettings) -> None:
        self.settings = settings

    @property
    def default_locale(self) -> str:
        return self.settings.default_locale

    def is_excluded(self, path: str) -> bool:
        normalized = path.strip("/")
        return any(
            fnmatchcase(normalized, pattern.strip("/"))
            for pattern in self.settings.exclude_segments
        )

    def detect_locale(self, path: str) -> str:
        segments = path_segments(path)
        code = segments[0] if segments else ""
        descriptor = self.settings.locales.get(code)
        if descriptor is not None:
            return descriptor.locale or code
        return self.default_locale

    def get_redirect_url(self, path: str, query_string: str | None = None) -> str:
        """Return where to redirect ``path`` so it carries a known locale prefix.

        An empty string means no redirect is needed.
        """

        if self.is_excluded(path):
            return ""

        segments = path_segments(path)
        first = segments[0] if segments else ""
        if len(first) == 2:
            if first in self.settings.locales:
                return ""
            segments[0] = self.default_locale
            url = "/".join(segments)
        else:
            # An empty path yields the default locale with a trailing slash.
            url = f"{self.default_locale}/" + "/".join(segments)

        if query_string:
            url = f"{url}?{query_string}"
        return url

    def strip_locale(self, path: str) -> str:
        segments = path.lstrip("/").split("/", 1)
        if len(segments[0]) == 2 and segments[0] in self.settings.locales:
            return segments[1] if len(segments) > 1 else ""
        return path.lstrip("/")

    def localize_path(self, path: str, locale: str) -> str:
        return f"{locale}/{self.strip_locale(path)}"

    def route_groups(self) -> list[RouteGroup]:
        """Prefixes a router adapter mounts each localized route group under."""

        return [RouteGroup(prefix=code, name_prefix=f"{code}.") for code in self.settings.locales]


__all__ = ["LocaleRouter", "RouteGroup", "path_segments"]
