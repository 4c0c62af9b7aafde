"""Tag and contact-tag link models."""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from relationhub.models.base import Base, new_id, utcnow

if TYPE_CHECKING:  # pragma: no cover - circular import guard
    from relationhub.models.contact import Contact
    from relationhub.models.user import User


class Tag(Base):
    """A user-defined label that can be attached to contacts."""

    __tablename__ = "tags"
    __table_args__ = (
        UniqueConstraint("userId", "name", name="tags_userId_name_key"),
        Index("tags_userId_idx", "userId"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        "userId", ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str] = mapped_column(String(7), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime(timezone=False),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    user: Mapped["User"] = relationship(back_populates="tags")
    contact_tags: Mapped[list["ContactTag"]] = relationship(
        back_populates="tag", cascade="all, delete-orphan", passive_deletes=True
    )


class ContactTag(Base):
    """Join row linking one contact to one tag."""

    __tablename__ = "contact_tags"

    contact_id: Mapped[str] = mapped_column(
        "contactId",
        ForeignKey("contacts.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[str] = mapped_column(
        "tagId",
        ForeignKey("tags.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime(timezone=False),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    contact: Mapped["Contact"] = relationship(back_populates="contact_tags")
    tag: Mapped["Tag"] = relationship(back_populates="contact_tags")
