"""Locale-aware translation lookup with cached, database-backed texts."""

from multilang.cache import MemoryCacheStore, RedisCacheStore, build_cache_store
from multilang.config import Config, LocaleDescriptor, MultiLangSettings, get_settings
from multilang.db.session import Database
from multilang.domain import TextEntry
from multilang.exceptions import (
    ConfigurationInvalid,
    InvalidArgument,
    MultiLangError,
    StorageUnavailable,
)
from multilang.lifecycle import request_scope
from multilang.logging import configure_logging
from multilang.repository import Repository
from multilang.routing import LocaleRouter, RouteGroup
from multilang.session import MultiLang
from multilang.translator import TranslationTable

__all__ = [
    "Config",
    "ConfigurationInvalid",
    "Database",
    "InvalidArgument",
    "LocaleDescriptor",
    "LocaleRouter",
    "MemoryCacheStore",
    "MultiLang",
    "MultiLangError",
    "MultiLangSettings",
    "RedisCacheStore",
    "Repository",
    "RouteGroup",
    "StorageUnavailable",
    "TextEntry",
    "TranslationTable",
    "build_cache_store",
    "configure_logging",
    "get_settings",
    "request_scope",
]
