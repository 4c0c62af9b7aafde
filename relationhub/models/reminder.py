"""Reminder model definition."""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, false, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from relationhub.models.base import Base, new_id, utcnow

if TYPE_CHECKING:
    from relationhub.models.contact import Contact
    from relationhub.models.user import User


class Reminder(Base):
    """A follow-up reminder associated with a contact."""

    __tablename__ = "reminders"
    __table_args__ = (
        Index("reminders_userId_dueDate_completed_idx", "userId", "dueDate", "completed"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        "userId", ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    contact_id: Mapped[str] = mapped_column(
        "contactId",
        ForeignKey("contacts.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(Text(), nullable=False)
    due_date: Mapped[datetime] = mapped_column("dueDate", DateTime(timezone=False), nullable=False)
    completed: Mapped[bool] = mapped_column(
        Boolean(), default=False, server_default=false(), nullable=False
    )
    completed_at: Mapped[datetime | None] = mapped_column("completedAt", DateTime(timezone=False))
    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime(timezone=False),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    user: Mapped["User"] = relationship(back_populates="reminders")
    contact: Mapped["Contact"] = relationship(back_populates="reminders")
