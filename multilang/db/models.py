"""SQLAlchemy model for stored translations."""

from __future__ import annotations

from datetime import datetime, timezone
from functools import lru_cache

from sqlalchemy import DateTime, MetaData, String, Table, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from multilang.db.base import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TextRow(Base):
    __tablename__ = "texts"
    __table_args__ = (
        UniqueConstraint("locale", "scope", "key", name="uq_texts_locale_scope_key"),
    )

    locale: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    scope: Mapped[str] = mapped_column(String(64), nullable=False, default="global")
    key: Mapped[str] = mapped_column(String(255), nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )


_extra_metadata = MetaData()


@lru_cache(maxsize=8)
def texts_table(name: str = "texts") -> Table:
    """Return the texts table, copied under ``name`` when it is renamed in config."""

    if name == TextRow.__tablename__:
        return TextRow.__table__  # type: ignore[return-value]
    return TextRow.__table__.to_metadata(_extra_metadata, name=name)


__all__ = ["TextRow", "texts_table", "utc_now"]
