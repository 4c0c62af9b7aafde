"""Pydantic schemas for email resources."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from relationhub.models.email import EmailProvider
from relationhub.schemas.common import UTCDateTime


class EmailCreate(BaseModel):
    contact_id: str = Field(min_length=1)
    subject: str = Field(min_length=1, max_length=998)
    body: str
    provider: EmailProvider
    sent_at: UTCDateTime | None = None
    metadata: dict[str, Any] | None = None


class EmailRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    contact_id: str
    subject: str
    body: str
    provider: EmailProvider
    sent_at: datetime
    opened_at: datetime | None = None
    clicked_at: datetime | None = None
    metadata: dict[str, Any] | None = Field(
        default=None, validation_alias=AliasChoices("extra", "metadata")
    )
