"""Data access for the sent-email log."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from relationhub.core.errors import NotFoundError
from relationhub.models import Activity, ActivityType, Email
from relationhub.models.base import utcnow
from relationhub.schemas import EmailCreate
from relationhub.services.common import column_values, guarded_write
from relationhub.services.contacts import get_contact, refresh_last_contacted

logger = logging.getLogger(__name__)


async def log_email(session: AsyncSession, user_id: str, payload: EmailCreate) -> Email:
    """Store a sent email and record a matching ``EMAIL_SENT`` activity."""

    await get_contact(session, user_id, payload.contact_id)
    values = column_values(payload.model_dump(exclude_none=True))
    values.setdefault("sent_at", utcnow())
    email = Email(user_id=user_id, **values)
    async with guarded_write(session, "Email could not be stored"):
        session.add(email)

    session.add(
        Activity(
            user_id=user_id,
            contact_id=email.contact_id,
            type=ActivityType.EMAIL_SENT,
            description=f"Email sent: {email.subject}",
            occurred_at=email.sent_at,
            extra={"emailId": email.id, "provider": email.provider.value},
        )
    )
    await session.flush()
    await refresh_last_contacted(session, email.contact_id)
    await session.refresh(email)
    logger.info("Email logged", extra={"user_id": user_id, "email_id": email.id})
    return email


async def list_emails(
    session: AsyncSession,
    user_id: str,
    *,
    contact_id: str | None = None,
    sent_from: datetime | None = None,
    sent_to: datetime | None = None,
) -> Sequence[Email]:
    stmt = select(Email).where(Email.user_id == user_id)
    if contact_id is not None:
        stmt = stmt.where(Email.contact_id == contact_id)
    if sent_from is not None:
        stmt = stmt.where(Email.sent_at >= sent_from)
    if sent_to is not None:
        stmt = stmt.where(Email.sent_at <= sent_to)

    stmt = stmt.order_by(Email.sent_at.desc(), Email.id)
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_email(session: AsyncSession, user_id: str, email_id: str) -> Email:
    result = await session.execute(
        select(Email).where(Email.id == email_id, Email.user_id == user_id)
    )
    email = result.scalars().first()
    if email is None:
        raise NotFoundError("Email", email_id)
    return email


async def mark_email_opened(session: AsyncSession, email: Email) -> Email:
    """Stamp the first open; later opens keep the original time."""

    if email.opened_at is None:
        email.opened_at = utcnow()
        await session.flush()
    return email


async def mark_email_clicked(session: AsyncSession, email: Email) -> Email:
    """Stamp the first click; a click also counts as an open."""

    now = utcnow()
    if email.clicked_at is None:
        email.clicked_at = now
    if email.opened_at is None:
        email.opened_at = now
    await session.flush()
    return email


async def delete_email(session: AsyncSession, email: Email) -> None:
    email_id = email.id
    await session.delete(email)
    await session.flush()
    logger.info("Email deleted", extra={"email_id": email_id})
