"""Contact model definition."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    JSON,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from relationhub.models.base import Base, new_id, utcnow

if TYPE_CHECKING:
    from relationhub.models.activity import Activity
    from relationhub.models.email import Email
    from relationhub.models.reminder import Reminder
    from relationhub.models.tag import ContactTag
    from relationhub.models.user import User


class Priority(str, Enum):
    """How important it is to stay in touch with a contact."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"
    PREFER_NOT_TO_SAY = "PREFER_NOT_TO_SAY"


class Contact(Base):
    """A person tracked by a user."""

    __tablename__ = "contacts"
    __table_args__ = (
        Index("contacts_userId_priority_idx", "userId", "priority"),
        Index("contacts_userId_lastContactedAt_idx", "userId", "lastContactedAt"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        "userId", ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))
    linkedin_url: Mapped[str | None] = mapped_column("linkedInUrl", Text())
    company: Mapped[str | None] = mapped_column(String(255))
    industry: Mapped[str | None] = mapped_column(String(255))
    role: Mapped[str | None] = mapped_column(String(255))
    priority: Mapped[Priority] = mapped_column(
        SQLEnum(Priority, name="Priority"),
        default=Priority.MEDIUM,
        server_default=Priority.MEDIUM.value,
        nullable=False,
    )
    gender: Mapped[Gender | None] = mapped_column(SQLEnum(Gender, name="Gender"))
    birthday: Mapped[datetime | None] = mapped_column(DateTime(timezone=False))
    profile_picture: Mapped[str | None] = mapped_column("profilePicture", Text())
    notes: Mapped[str | None] = mapped_column(Text())
    # "metadata" is reserved on declarative classes.
    extra: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSON)
    last_contacted_at: Mapped[datetime | None] = mapped_column(
        "lastContactedAt", DateTime(timezone=False)
    )
    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime(timezone=False),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt",
        DateTime(timezone=False),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )

    user: Mapped["User"] = relationship(back_populates="contacts")
    emails: Mapped[list["Email"]] = relationship(
        back_populates="contact", cascade="all, delete-orphan", passive_deletes=True
    )
    activities: Mapped[list["Activity"]] = relationship(
        back_populates="contact", cascade="all, delete-orphan", passive_deletes=True
    )
    reminders: Mapped[list["Reminder"]] = relationship(
        back_populates="contact", cascade="all, delete-orphan", passive_deletes=True
    )
    contact_tags: Mapped[list["ContactTag"]] = relationship(
        back_populates="contact", cascade="all, delete-orphan", passive_deletes=True
    )
