"""Per-request translation state: locale, scope, loaded texts and missing keys."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from multilang.config import LocaleDescriptor, MultiLangSettings
from multilang.domain import TextEntry
from multilang.exceptions import InvalidArgument
from multilang.logging import logger
from multilang.repository import Repository
from multilang.routing import LocaleRouter
from multilang.translator import TranslationTable

TextLoader = Callable[[Repository, str, str], Awaitable[list[TextEntry]]]


async def load_from_database(repository: Repository, locale: str, scope: str) -> list[TextEntry]:
    return await repository.load_from_database(locale, scope)


async def load_through_cache(repository: Repository, locale: str, scope: str) -> list[TextEntry]:
    cached = await repository.load_from_cache(locale, scope)
    if cached is not None:
        logger.debug("texts_cache_hit", locale=locale, scope=scope)
        return cached

    logger.debug("texts_cache_miss", locale=locale, scope=scope)
    entries = await repository.load_from_database(locale, scope)
    await repository.store_in_cache(locale, entries, scope)
    return entries


class MultiLang:
    """Translation context owned by a single request.

    Lookups before a locale is set return the key unchanged. Missing keys are
    queued and written back by :meth:`save_texts`.
    """

    def __init__(self, settings: MultiLangSettings, repository: Repository) -> None:
        self.settings = settings
        self.repository = repository
        self.router = LocaleRouter(settings)
        self._locale = ""
        self._scope = settings.default_scope
        self._table: TranslationTable | None = None
        self._pending: dict[str, None] = {}

    @property
    def locale(self) -> str:
        return self._locale

    def set_locale(self, lang: str) -> None:
        if not lang:
            raise InvalidArgument("Locale is empty")
        self._locale = lang

    @property
    def scope(self) -> str:
        return self._scope

    def set_scope(self, scope: str) -> None:
        if not scope:
            raise InvalidArgument("Scope is empty")
        self._scope = scope

    @property
    def locales(self) -> dict[str, LocaleDescriptor]:
        return dict(self.settings.locales)

    def locale_descriptor(self, code: str | None = None) -> LocaleDescriptor | None:
        return self.settings.locales.get(code or self._locale)

    @property
    def table(self) -> TranslationTable | None:
        return self._table

    @property
    def texts(self) -> dict[str, str]:
        return dict(self._table.texts) if self._table is not None else {}

    @property
    def pending_keys(self) -> frozenset[str]:
        return frozenset(self._pending)

    def _resolve_loader(self) -> TextLoader:
        if self.settings.environment != "production" or not self.settings.cache.enabled:
            return load_from_database
        return load_through_cache

    async def load_texts(self, locale: str | None = None, scope: str | None = None) -> list[TextEntry]:
        locale = locale or self._locale
        scope = scope or self._scope
        if not locale:
            raise InvalidArgument("Locale is empty")

        loader = self._resolve_loader()
        entries = await loader(self.repository, locale, scope)
        self._table = TranslationTable.from_entries(locale, scope, entries)
        logger.info(
            "texts_loaded",
            locale=locale,
            scope=scope,
            count=len(self._table),
            source=loader.__name__,
        )
        return entries

    def set_texts(self, texts: Mapping[str, str]) -> None:
        self._table = TranslationTable(self._locale, self._scope, texts)

    async def get(self, key: str, replacements: Mapping[str, Any] | None = None) -> str:
        if not key:
            raise InvalidArgument("String key not provided")
        if not self._locale:
            return key

        if self._table is None:
            await self.load_texts()
        assert self._table is not None

        if key not in self._table:
            self._queue_to_save(key)
        return self._table.translate(key, replacements)

    def _queue_to_save(self, key: str) -> None:
        if key not in self._pending:
            logger.debug("text_missing", key=key, locale=self._locale, scope=self._scope)
            self._pending[key] = None

    async def get_all_texts(self, locale: str | None = None, scope: str | None = None) -> list[TextEntry]:
        return await self.repository.load_all_from_database(locale, scope)

    async def save_texts(self) -> bool:
        if not self._pending:
            return False

        saved = await self.repository.save(list(self._pending), self._scope)
        self._pending.clear()
        return saved

    def autosave_allowed(self) -> bool:
        return self.settings.environment == "local" and self.settings.db.autosave

    def get_url(self, path: str, lang: str | None = None) -> str:
        locale = lang or self._locale
        if not locale:
            return path
        return self.router.localize_path(path, locale)

    def get_route(self, name: str) -> str:
        if self._locale:
            return f"{self._locale}.{name}"
        return name

    def detect_locale(self, path: str) -> str:
        return self.router.detect_locale(path)

    def get_redirect_url(self, path: str, query_string: str | None = None) -> str:
        return self.router.get_redirect_url(path, query_string)


__all__ = ["MultiLang", "TextLoader", "load_from_database", "load_through_cache"]
