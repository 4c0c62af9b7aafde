"""Helpers shared by the data-access services."""
from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from relationhub.core.errors import ConflictError


@asynccontextmanager
async def guarded_write(session: AsyncSession, message: str) -> AsyncIterator[None]:
    """Apply the writes made in the block inside a savepoint.

    A constraint violation rolls back only the savepoint and is raised as
    ``ConflictError``; earlier work in the caller's transaction is kept.
    """

    try:
        async with session.begin_nested():
            yield
    except IntegrityError as exc:
        raise ConflictError(message) from exc


def column_values(data: dict[str, Any]) -> dict[str, Any]:
    """Map schema field names onto ORM attribute names."""

    values = dict(data)
    if "metadata" in values:
        values["extra"] = values.pop("metadata")
    return values


def apply_updates(instance: object, updates: dict[str, Any], *, required: tuple[str, ...] = ()) -> None:
    """Assign ``updates`` onto ``instance``, ignoring nulls for required columns."""

    for field, value in column_values(updates).items():
        if value is None and field in required:
            continue
        setattr(instance, field, value)
