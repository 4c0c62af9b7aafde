"""Email log model definition."""
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


class EmailProvider(str, Enum):
    """Mail service an email was sent through."""

    GMAIL = "GMAIL"
    OUTLOOK = "OUTLOOK"
    SMTP = "SMTP"


class Email(Base):
    """An email sent by a user to one of their contacts."""

    __tablename__ = "emails"
    __table_args__ = (Index("emails_userId_sentAt_idx", "userId", "sentAt"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        "userId", ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    contact_id: Mapped[str] = mapped_column(
        "contactId",
        ForeignKey("contacts.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    subject: Mapped[str] = mapped_column(Text(), nullable=False)
    body: Mapped[str] = mapped_column(Text(), nullable=False)
    sent_at: Mapped[datetime] = mapped_column(
        "sentAt",
        DateTime(timezone=False),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    opened_at: Mapped[datetime | None] = mapped_column("openedAt", DateTime(timezone=False))
    clicked_at: Mapped[datetime | None] = mapped_column("clickedAt", DateTime(timezone=False))
    provider: Mapped[EmailProvider] = mapped_column(
        SQLEnum(EmailProvider, name="EmailProvider"), nullable=False
    )
    extra: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSON)

    user: Mapped["User"] = relationship(back_populates="emails")
    contact: Mapped["Contact"] = relationship(back_populates="emails")
