"""ORM nexus."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base mold."""
    pass


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


def list_models():
    """List model names."""
    return [cls.__name__ for cls in Base.registry._class_registry.values() if hasattr(cls, "__table__")]


__all__ = ["Base", "TimestampMixin", "list_models", "utcnow"]
