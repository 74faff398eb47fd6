"""Request-scoped MultiLang construction and end-of-request flushing."""

from __future__ import annotations

import locale as system_locale
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from multilang.cache import CacheStore
from multilang.config import LocaleDescriptor, MultiLangSettings
from multilang.logging import logger
from multilang.repository import Repository
from multilang.session import MultiLang


def apply_system_locale(descriptor: LocaleDescriptor) -> bool:
    if not descriptor.full_locale:
        return False
    try:
        system_locale.setlocale(system_locale.LC_ALL, descriptor.full_locale)
    except system_locale.Error as exc:
        logger.warning("system_locale_unavailable", locale=descriptor.full_locale, error=str(exc))
        return False
    return True


@asynccontextmanager
async def request_scope(
    path: str,
    *,
    settings: MultiLangSettings,
    session: AsyncSession,
    cache: CacheStore,
    scope: str | None = None,
    commit: bool = True,
) -> AsyncIterator[MultiLang]:
    """Yield a MultiLang bound to the locale found in ``path``.

    Missing keys are saved on a clean exit when autosave is allowed and, with
    ``commit``, committed on ``session``. Nothing is written if the body raises.
    """

    multilang = MultiLang(settings, Repository(settings, cache, session))
    multilang.set_locale(multilang.detect_locale(path))
    if scope:
        multilang.set_scope(scope)

    if settings.set_system_locale:
        descriptor = multilang.locale_descriptor()
        if descriptor is not None:
            apply_system_locale(descriptor)

    yield multilang

    if multilang.autosave_allowed():
        saved = await multilang.save_texts()
        if saved and commit:
            await session.commit()
        logger.debug("request_texts_flushed", path=path, saved=saved)


__all__ = ["apply_system_locale", "request_scope"]
