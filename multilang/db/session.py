"""Async SQLAlchemy session management."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from multilang.config import MultiLangSettings, get_settings
from multilang.db.models import texts_table
from multilang.logging import logger


class Database:
    """Lazy SQLAlchemy engine/session factory wrapper."""

    def __init__(self, settings: MultiLangSettings | None = None) -> None:
        self.settings = settings or get_settings()
        self._engine = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    def _ensure_engine(self) -> None:
        if self._engine is None:
            db_cfg = self.settings.db
            self._engine = create_async_engine(
                db_cfg.connection,
                echo=db_cfg.echo,
                pool_pre_ping=True,
            )
            self._session_factory = async_sessionmaker(
                bind=self._engine,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.info("db_engine_initialized", dsn=db_cfg.connection)

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        self._ensure_engine()
        assert self._session_factory is not None
        return self._session_factory

    async def create_schema(self) -> None:
        """Create the texts table if it does not exist yet."""

        self._ensure_engine()
        table = texts_table(self.settings.db.texts_table)
        async with self._engine.begin() as conn:
            await conn.run_sync(table.metadata.create_all, tables=[table])

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        factory = self.session_factory
        async with factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise


__all__ = ["Database"]
