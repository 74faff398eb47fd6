"""Declarative base for SQLAlchemy models."""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base with a surrogate integer key."""

    id: Mapped[int] = mapped_column(primary_key=True)


__all__ = ["Base"]
