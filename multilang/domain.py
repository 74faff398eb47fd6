"""Pydantic models shared between the repository and the session."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TextEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    value: str
    locale: str | None = None
    scope: str | None = None


__all__ = ["TextEntry"]
