"""Pydantic schemas for activity resources."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from relationhub.models.activity import ActivityType
from relationhub.schemas.common import UTCDateTime


class ActivityCreate(BaseModel):
    contact_id: str = Field(min_length=1)
    type: ActivityType
    description: str = Field(min_length=1)
    occurred_at: UTCDateTime | None = None
    metadata: dict[str, Any] | None = None


class ActivityUpdate(BaseModel):
    type: ActivityType | None = None
    description: str | None = Field(default=None, min_length=1)
    occurred_at: UTCDateTime | None = None
    metadata: dict[str, Any] | None = None


class ActivityRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    contact_id: str
    type: ActivityType
    description: str
    occurred_at: datetime
    metadata: dict[str, Any] | None = Field(
        default=None, validation_alias=AliasChoices("extra", "metadata")
    )
