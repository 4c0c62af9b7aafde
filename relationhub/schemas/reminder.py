"""Pydantic schemas for reminder resources."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from relationhub.schemas.common import UTCDateTime


class ReminderCreate(BaseModel):
    contact_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    due_date: UTCDateTime
    completed: bool = False


class ReminderUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    due_date: UTCDateTime | None = None
    completed: bool | None = None


class ReminderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    contact_id: str
    title: str
    due_date: datetime
    completed: bool
    completed_at: datetime | None = None
    created_at: datetime
