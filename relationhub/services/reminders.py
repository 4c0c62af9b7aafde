"""Data access for follow-up reminders."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from relationhub.core.errors import NotFoundError
from relationhub.models import Reminder
from relationhub.models.base import utcnow
from relationhub.schemas import ReminderCreate, ReminderUpdate
from relationhub.services.common import apply_updates, guarded_write
from relationhub.services.contacts import get_contact

logger = logging.getLogger(__name__)


async def create_reminder(session: AsyncSession, user_id: str, payload: ReminderCreate) -> Reminder:
    await get_contact(session, user_id, payload.contact_id)
    reminder = Reminder(user_id=user_id, **payload.model_dump())
    if reminder.completed:
        reminder.completed_at = utcnow()
    async with guarded_write(session, "Reminder could not be created"):
        session.add(reminder)
    await session.refresh(reminder)
    logger.info("Reminder created", extra={"user_id": user_id, "reminder_id": reminder.id})
    return reminder


async def list_reminders(
    session: AsyncSession,
    user_id: str,
    *,
    contact_id: str | None = None,
    due_from: datetime | None = None,
    due_to: datetime | None = None,
    completed: bool | None = None,
) -> Sequence[Reminder]:
    stmt = select(Reminder).where(Reminder.user_id == user_id)
    if contact_id is not None:
        stmt = stmt.where(Reminder.contact_id == contact_id)
    if due_from is not None:
        stmt = stmt.where(Reminder.due_date >= due_from)
    if due_to is not None:
        stmt = stmt.where(Reminder.due_date <= due_to)
    if completed is not None:
        stmt = stmt.where(Reminder.completed.is_(completed))

    stmt = stmt.order_by(Reminder.due_date, Reminder.created_at, Reminder.id)
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_reminder(session: AsyncSession, user_id: str, reminder_id: str) -> Reminder:
    result = await session.execute(
        select(Reminder).where(Reminder.id == reminder_id, Reminder.user_id == user_id)
    )
    reminder = result.scalars().first()
    if reminder is None:
        raise NotFoundError("Reminder", reminder_id)
    return reminder


async def update_reminder(session: AsyncSession, reminder: Reminder, payload: ReminderUpdate) -> Reminder:
    updates = payload.model_dump(exclude_unset=True)
    completed = updates.pop("completed", None)
    apply_updates(reminder, updates, required=("title", "due_date"))
    if completed is not None:
        _set_completed(reminder, completed)
    await session.flush()
    await session.refresh(reminder)
    return reminder


async def complete_reminder(session: AsyncSession, reminder: Reminder) -> Reminder:
    _set_completed(reminder, True)
    await session.flush()
    return reminder


async def reopen_reminder(session: AsyncSession, reminder: Reminder) -> Reminder:
    _set_completed(reminder, False)
    await session.flush()
    return reminder


async def delete_reminder(session: AsyncSession, reminder: Reminder) -> None:
    reminder_id = reminder.id
    await session.delete(reminder)
    await session.flush()
    logger.info("Reminder deleted", extra={"reminder_id": reminder_id})


def _set_completed(reminder: Reminder, completed: bool) -> None:
    # completedAt records the first completion and is cleared on reopen.
    if completed and not reminder.completed:
        reminder.completed_at = utcnow()
    elif not completed:
        reminder.completed_at = None
    reminder.completed = completed
