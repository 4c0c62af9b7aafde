"""Shared SQLAlchemy base class and column helpers for ORM models."""
from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base class for ORM models."""

    pass


def new_id() -> str:
    """Return a new opaque primary key."""

    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Return the current UTC time as a naive timestamp."""

    return datetime.now(UTC).replace(tzinfo=None)
