"""Pydantic schemas for user resources."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserBase(BaseModel):
    name: Annotated[str, Field(max_length=255)] | None = None
    profile_picture: str | None = None
    provider: Annotated[str, Field(max_length=50)] | None = None
    settings: dict[str, Any] | None = None


class UserCreate(UserBase):
    supabase_id: Annotated[str, Field(min_length=1, max_length=255)]
    email: EmailStr


class UserUpdate(UserBase):
    pass


class AuthIdentity(BaseModel):
    """Identity asserted by the external auth provider at sign-in."""

    supabase_id: Annotated[str, Field(min_length=1, max_length=255)]
    email: EmailStr
    full_name: str | None = None
    avatar_url: str | None = None
    provider: str | None = None


class UserRead(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    supabase_id: str
    email: str
    last_login_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
