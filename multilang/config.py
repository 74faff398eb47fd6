"""Runtime configuration based on environment variables."""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from multilang.exceptions import ConfigurationInvalid


class LocaleDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str = ""
    name: str = ""
    native_name: str = ""
    locale: str = Field(default="", description="ISO 639-1 code returned by locale detection.")
    canonical_locale: str = ""
    full_locale: str = Field(default="", description="Value passed to setlocale(), e.g. en_GB.UTF-8.")


class CacheSettings(BaseModel):
    enabled: bool = True
    store: Literal["memory", "redis"] = "memory"
    url: str | None = Field(default=None, description="Redis URL, required when store is redis.")
    lifetime: int = Field(default=1440, ge=1, description="Minutes a cached table stays valid.")

    @model_validator(mode="after")
    def _redis_needs_url(self) -> "CacheSettings":
        if self.store == "redis" and not self.url:
            raise ValueError("cache.url is required for the redis store")
        return self


class DatabaseSettings(BaseModel):
    autosave: bool = Field(default=True, description="Persist missing keys, only in the local environment.")
    connection: str = Field(
        default="sqlite+aiosqlite:///./multilang.db",
        description="SQLAlchemy async DSN.",
    )
    texts_table: str = Field(default="texts", min_length=1)
    echo: bool = False


def _default_locales() -> dict[str, LocaleDescriptor]:
    return {
        "en": LocaleDescriptor(
            name="English",
            native_name="English",
            locale="en",
            canonical_locale="en_GB",
            full_locale="en_GB.UTF-8",
        )
    }


class MultiLangSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MULTILANG_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: Literal["local", "development", "testing", "staging", "production"] = "production"
    locales: dict[str, LocaleDescriptor] = Field(default_factory=_default_locales)
    default_locale: str = Field(default="en", min_length=1)
    default_scope: str = Field(default="global", min_length=1)
    set_system_locale: bool = False
    exclude_segments: list[str] = Field(default_factory=list)

    cache: CacheSettings = Field(default_factory=CacheSettings)
    db: DatabaseSettings = Field(default_factory=DatabaseSettings)

    @model_validator(mode="after")
    def _bind_locale_codes(self) -> "MultiLangSettings":
        self.locales = {
            code: descriptor.model_copy(
                update={"code": code, "locale": descriptor.locale or code}
            )
            for code, descriptor in self.locales.items()
        }
        return self

    @classmethod
    def from_mapping(cls, data: Any) -> "MultiLangSettings":
        """Validate an in-memory configuration mapping.

        Environment variables and ``.env`` are ignored so the mapping is the
        only source of truth.
        """

        if not isinstance(data, Mapping):
            raise ConfigurationInvalid(f"Configuration must be a mapping, got {type(data).__name__}")
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigurationInvalid(str(exc)) from exc

    def as_config(self) -> "Config":
        return Config(self.model_dump())


class Config:
    """Read-only dotted-path accessor over a nested configuration mapping."""

    def __init__(self, data: Mapping[str, Any]) -> None:
        if not isinstance(data, Mapping):
            raise ConfigurationInvalid(f"Configuration must be a mapping, got {type(data).__name__}")
        self._data = data

    def get(self, path: str | None = None, default: Any = None) -> Any:
        """Return the value at ``path`` or ``default`` when any segment is missing.

        A direct top-level match wins over dotted traversal, so keys that
        themselves contain dots stay reachable.
        """

        if path is None:
            return self._data
        if path in self._data:
            return self._data[path]

        node: Any = self._data
        for segment in path.split("."):
            if isinstance(node, Mapping) and segment in node:
                node = node[segment]
            else:
                return default
        return node


@lru_cache
def get_settings() -> MultiLangSettings:
    """Return cached settings instance."""

    try:
        return MultiLangSettings()
    except ValidationError as exc:
        raise ConfigurationInvalid(str(exc)) from exc


__all__ = [
    "CacheSettings",
    "Config",
    "DatabaseSettings",
    "LocaleDescriptor",
    "MultiLangSettings",
    "get_settings",
]
