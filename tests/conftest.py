"""Shared pytest fixtures for database-backed translation tests."""

from __future__ import annotations

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from multilang.cache import MemoryCacheStore
from multilang.config import MultiLangSettings
from multilang.db.base import Base
from multilang.repository import Repository
from multilang.session import MultiLang


class _AsyncSessionWrapper:
    def __init__(self, sync_session) -> None:
        self._sync = sync_session

    async def execute(self, *args, **kwargs):
        return self._sync.execute(*args, **kwargs)

    def get_bind(self, *args, **kwargs):
        return self._sync.get_bind(*args, **kwargs)

    def add(self, obj) -> None:
        self._sync.add(obj)

    def add_all(self, objs) -> None:
        self._sync.add_all(objs)

    async def flush(self) -> None:
        self._sync.flush()

    async def commit(self) -> None:
        self._sync.commit()

    async def rollback(self) -> None:
        self._sync.rollback()

    async def close(self) -> None:
        self._sync.close()


def _make_settings(**overrides) -> MultiLangSettings:
    data = {
        "environment": "production",
        "locales": {
            "en": {"name": "English", "native_name": "English", "locale": "en", "full_locale": "en_GB.UTF-8"},
            "ka": {"name": "Georgian", "native_name": "ქართული", "locale": "ka", "full_locale": "ka_GE.UTF-8"},
        },
        "default_locale": "en",
        "exclude_segments": ["api/*", "health"],
        "cache": {"enabled": True, "store": "memory", "lifetime": 1440},
        "db": {"autosave": True, "texts_table": "texts"},
    }
    data.update(overrides)
    return MultiLangSettings.from_mapping(data)


@pytest.fixture
def make_settings():
    return _make_settings


@pytest.fixture
def settings() -> MultiLangSettings:
    return _make_settings()


@pytest.fixture
def cache() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest_asyncio.fixture
async def session():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
    sync_session = SessionLocal()
    try:
        yield _AsyncSessionWrapper(sync_session)
    finally:
        sync_session.close()
        engine.dispose()


@pytest.fixture
def repository(settings, cache, session) -> Repository:
    return Repository(settings, cache, session)


@pytest.fixture
def multilang(settings, repository) -> MultiLang:
    return MultiLang(settings, repository)


@pytest.fixture
def offline_multilang(settings, cache) -> MultiLang:
    """MultiLang for tests that never reach the database."""

    return MultiLang(settings, Repository(settings, cache, None))  # type: ignore[arg-type]
