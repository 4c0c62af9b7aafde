"""Database models package for the RelationHub data service."""

from .base import Base
from .user import User
from .contact import Contact, Gender, Priority
from .tag import ContactTag, Tag
from .email import Email, EmailProvider
from .activity import Activity, ActivityType
from .reminder import Reminder

__all__ = [
    "Base",
    "User",
    "Contact",
    "Gender",
    "Priority",
    "Tag",
    "ContactTag",
    "Email",
    "EmailProvider",
    "Activity",
    "ActivityType",
    "Reminder",
]
