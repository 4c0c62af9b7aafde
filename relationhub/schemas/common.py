"""Shared field types for API schemas."""
from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Generic, TypeVar

from pydantic import AfterValidator, BaseModel


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


# Timestamps are stored as naive UTC.
UTCDateTime = Annotated[datetime, AfterValidator(_to_naive_utc)]

T = TypeVar("T")


class PageInfo(BaseModel):
    has_next_page: bool
    has_previous_page: bool
    start_cursor: str | None = None
    end_cursor: str | None = None


class Page(BaseModel, Generic[T]):
    """A cursor-paginated slice of results."""

    nodes: list[T]
    total_count: int
    page_info: PageInfo
