"""Activity model definition."""
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
    from relationhub.models.contact import Contact
    from relationhub.models.user import User


class ActivityType(str, Enum):
    """Permitted activity categories."""

    EMAIL_SENT = "EMAIL_SENT"
    EMAIL_RECEIVED = "EMAIL_RECEIVED"
    CALL = "CALL"
    MEETING = "MEETING"
    NOTE = "NOTE"


class Activity(Base):
    """A recorded touchpoint with a contact."""

    __tablename__ = "activities"
    __table_args__ = (Index("activities_userId_occurredAt_idx", "userId", "occurredAt"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        "userId", ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    contact_id: Mapped[str] = mapped_column(
        "contactId",
        ForeignKey("contacts.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    type: Mapped[ActivityType] = mapped_column(
        SQLEnum(ActivityType, name="ActivityType"), nullable=False
    )
    description: Mapped[str] = mapped_column(Text(), nullable=False)
    occurred_at: Mapped[datetime] = mapped_column(
        "occurredAt",
        DateTime(timezone=False),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    extra: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSON)

    user: Mapped["User"] = relationship(back_populates="activities")
    contact: Mapped["Contact"] = relationship(back_populates="activities")
