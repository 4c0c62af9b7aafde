"""Pydantic schemas for contact resources."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

from relationhub.models.contact import Gender, Priority
from relationhub.schemas.common import UTCDateTime

ContactName = Annotated[str, Field(min_length=1, max_length=255)]
PhoneNumber = Annotated[str, Field(max_length=50)]
LinkedInUrl = Annotated[str, Field(max_length=2048, pattern=r"^https?://\S+$")]
ShortText = Annotated[str, Field(max_length=255)]


class ContactSortField(str, Enum):
    """Columns contacts may be ordered by."""

    NAME = "name"
    EMAIL = "email"
    COMPANY = "company"
    INDUSTRY = "industry"
    PRIORITY = "priority"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    LAST_CONTACTED_AT = "last_contacted_at"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ContactBase(BaseModel):
    email: EmailStr | None = None
    phone: PhoneNumber | None = None
    linkedin_url: LinkedInUrl | None = None
    company: ShortText | None = None
    industry: ShortText | None = None
    role: ShortText | None = None
    gender: Gender | None = None
    birthday: UTCDateTime | None = None
    profile_picture: str | None = None
    notes: Annotated[str, Field(max_length=10000)] | None = None
    metadata: dict[str, Any] | None = None


class ContactCreate(ContactBase):
    name: ContactName
    priority: Priority = Priority.MEDIUM

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            msg = "name cannot be only whitespace"
            raise ValueError(msg)
        return cleaned


class ContactUpdate(ContactBase):
    name: ContactName | None = None
    priority: Priority | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = value.strip()
        if not cleaned:
            msg = "name cannot be only whitespace"
            raise ValueError(msg)
        return cleaned


class ContactFilter(BaseModel):
    """Criteria combined with AND when listing contacts."""

    search: ShortText | None = None
    priority: Priority | None = None
    company: ShortText | None = None
    industry: ShortText | None = None
    role: ShortText | None = None
    tag_id: str | None = None


class ContactRead(ContactBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    priority: Priority
    email: str | None = None
    metadata: dict[str, Any] | None = Field(
        default=None, validation_alias=AliasChoices("extra", "metadata")
    )
    last_contacted_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
