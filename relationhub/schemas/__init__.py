"""Pydantic schemas for the RelationHub data service."""

from .activity import ActivityCreate, ActivityRead, ActivityUpdate
from .common import Page, PageInfo
from .contact import (
    ContactCreate,
    ContactFilter,
    ContactRead,
    ContactSortField,
    ContactUpdate,
    SortOrder,
)
from .email import EmailCreate, EmailRead
from .reminder import ReminderCreate, ReminderRead, ReminderUpdate
from .tag import TagCreate, TagRead, TagUpdate
from .user import AuthIdentity, UserCreate, UserRead, UserUpdate

__all__ = [
    "ActivityCreate",
    "ActivityRead",
    "ActivityUpdate",
    "AuthIdentity",
    "ContactCreate",
    "ContactFilter",
    "ContactRead",
    "ContactSortField",
    "ContactUpdate",
    "EmailCreate",
    "EmailRead",
    "Page",
    "PageInfo",
    "ReminderCreate",
    "ReminderRead",
    "ReminderUpdate",
    "SortOrder",
    "TagCreate",
    "TagRead",
    "TagUpdate",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
