"""Translation storage backed by a cache store and a relational table."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import Table, insert, select
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from multilang.cache import CacheStore
from multilang.config import MultiLangSettings
from multilang.db.models import texts_table, utc_now
from multilang.domain import TextEntry
from multilang.exceptions import StorageUnavailable
from multilang.logging import logger


class Repository:
    def __init__(self, settings: MultiLangSettings, cache: CacheStore, session: AsyncSession) -> None:
        self.settings = settings
        self.cache = cache
        self.session = session

    @property
    def table(self) -> Table:
        return texts_table(self.settings.db.texts_table)

    @property
    def cache_lifetime_seconds(self) -> int:
        return self.settings.cache.lifetime * 60

    def cache_key(self, locale: str, scope: str) -> str:
        return f"{self.settings.db.texts_table}:{locale}:{scope}"

    async def exists_in_cache(self, locale: str, scope: str) -> bool:
        return await self.cache.has(self.cache_key(locale, scope))

    async def load_from_cache(self, locale: str, scope: str) -> list[TextEntry] | None:
        """Return the cached entries, or None on a cache miss."""

        payload = await self.cache.get(self.cache_key(locale, scope))
        if payload is None:
            return None
        return [TextEntry(key=item["key"], value=item["value"]) for item in payload]

    async def store_in_cache(self, locale: str, entries: Iterable[TextEntry], scope: str) -> None:
        payload = [{"key": entry.key, "value": entry.value} for entry in entries]
        await self.cache.put(self.cache_key(locale, scope), payload, self.cache_lifetime_seconds)
        logger.debug("texts_cached", locale=locale, scope=scope, count=len(payload))

    async def forget_cache(self, locale: str, scope: str) -> None:
        await self.cache.forget(self.cache_key(locale, scope))

    async def load_from_database(self, locale: str, scope: str) -> list[TextEntry]:
        table = self.table
        stmt = (
            select(table.c.key, table.c.value)
            .where(table.c.locale == locale, table.c.scope == scope)
            .order_by(table.c.key)
        )
        result = await self._execute("load", stmt)
        return [TextEntry(key=row.key, value=row.value) for row in result]

    async def load_all_from_database(
        self, locale: str | None = None, scope: str | None = None
    ) -> list[TextEntry]:
        table = self.table
        stmt = select(table.c.key, table.c.value, table.c.locale, table.c.scope)
        if locale is not None:
            stmt = stmt.where(table.c.locale == locale)
        if scope is not None:
            stmt = stmt.where(table.c.scope == scope)
        stmt = stmt.order_by(table.c.scope, table.c.key, table.c.locale)
        result = await self._execute("load_all", stmt)
        return [
            TextEntry(key=row.key, value=row.value, locale=row.locale, scope=row.scope)
            for row in result
        ]

    async def save(self, new_keys: Iterable[str], scope: str) -> bool:
        """Insert a placeholder row per configured locale for every unseen key.

        Keys already stored for a (locale, scope) pair are skipped. Returns
        whether any row was written.
        """

        keys = list(dict.fromkeys(key for key in new_keys if key))
        locales = list(self.settings.locales)
        if not keys or not locales:
            return False

        table = self.table
        existing = await self._existing_pairs(keys, locales, scope)

        now = utc_now()
        rows = [
            {
                "locale": locale,
                "scope": scope,
                "key": key,
                "value": key,
                "created_at": now,
                "updated_at": now,
            }
            for key in keys
            for locale in locales
            if (locale, key) not in existing
        ]
        if not rows:
            logger.debug("texts_already_saved", scope=scope, count=len(keys))
            return False

        result = await self._execute("save", self._insert_ignore(table), rows)
        await self.session.flush()
        written = result.rowcount
        if written is None or written < 0:
            # Count unknown to the driver; conflicts were ignored, not raised.
            written = len(rows)
        logger.info("texts_saved", scope=scope, keys=len(keys), rows=written)
        return written > 0

    async def _existing_pairs(self, keys: list[str], locales: list[str], scope: str) -> set[tuple[str, str]]:
        table = self.table
        stmt = select(table.c.locale, table.c.key).where(
            table.c.scope == scope,
            table.c.key.in_(keys),
            table.c.locale.in_(locales),
        )
        return {(row.locale, row.key) for row in await self._execute("save", stmt)}

    def _insert_ignore(self, table: Table):
        dialect = self.session.get_bind().dialect.name
        if dialect == "sqlite":
            return sqlite.insert(table).on_conflict_do_nothing()
        if dialect == "postgresql":
            return postgresql.insert(table).on_conflict_do_nothing()
        if dialect in {"mysql", "mariadb"}:
            return mysql.insert(table).prefix_with("IGNORE")
        return insert(table)

    async def _execute(self, operation: str, stmt, params=None):
        try:
            if params is None:
                return await self.session.execute(stmt)
            return await self.session.execute(stmt, params)
        except (OperationalError, InterfaceError) as exc:
            logger.warning("database_unavailable", operation=operation, error=str(exc))
            raise StorageUnavailable(f"Database unreachable during {operation}") from exc


__all__ = ["Repository"]
