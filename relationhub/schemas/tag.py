"""Pydantic schemas for tag resources."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

TagName = Annotated[str, Field(min_length=1, max_length=100)]
HexColor = Annotated[str, Field(pattern=r"^#[0-9A-Fa-f]{6}$")]


class TagCreate(BaseModel):
    name: TagName
    color: HexColor = "#6B7280"

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            msg = "Tags must not be empty"
            raise ValueError(msg)
        return cleaned


class TagUpdate(BaseModel):
    name: TagName | None = None
    color: HexColor | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = value.strip()
        if not cleaned:
            msg = "Tags must not be empty"
            raise ValueError(msg)
        return cleaned


class TagRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    color: str
    created_at: datetime
