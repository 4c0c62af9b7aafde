"""Reminder API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from relationhub.api.v1.common import data_response, get_current_user
from relationhub.core.db import get_session
from relationhub.models import User
from relationhub.schemas import ReminderCreate, ReminderRead, ReminderUpdate
from relationhub.schemas.common import UTCDateTime
from relationhub.services import reminders as reminder_service

router = APIRouter(prefix="/reminders", tags=["reminders"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_reminder(
    payload: ReminderCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, ReminderRead]:
    """Create a reminder for a contact."""

    reminder = await reminder_service.create_reminder(session, user.id, payload)
    await session.commit()
    return data_response(ReminderRead.model_validate(reminder))


@router.get("")
async def list_reminders(
    contact_id: str | None = None,
    due_from: UTCDateTime | None = Query(None, alias="from"),
    due_to: UTCDateTime | None = Query(None, alias="to"),
    completed: bool | None = None,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, list[ReminderRead]]:
    """List reminders with optional filters."""

    reminders = await reminder_service.list_reminders(
        session,
        user.id,
        contact_id=contact_id,
        due_from=due_from,
        due_to=due_to,
        completed=completed,
    )
    return data_response([ReminderRead.model_validate(reminder) for reminder in reminders])


@router.put("/{reminder_id}")
async def update_reminder(
    reminder_id: str,
    payload: ReminderUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, ReminderRead]:
    """Update a reminder."""

    reminder = await reminder_service.get_reminder(session, user.id, reminder_id)
    reminder = await reminder_service.update_reminder(session, reminder, payload)
    await session.commit()
    return data_response(ReminderRead.model_validate(reminder))


@router.post("/{reminder_id}/complete")
async def complete_reminder(
    reminder_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, ReminderRead]:
    reminder = await reminder_service.get_reminder(session, user.id, reminder_id)
    reminder = await reminder_service.complete_reminder(session, reminder)
    await session.commit()
    return data_response(ReminderRead.model_validate(reminder))


@router.post("/{reminder_id}/reopen")
async def reopen_reminder(
    reminder_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, ReminderRead]:
    reminder = await reminder_service.get_reminder(session, user.id, reminder_id)
    reminder = await reminder_service.reopen_reminder(session, reminder)
    await session.commit()
    return data_response(ReminderRead.model_validate(reminder))


@router.delete("/{reminder_id}")
async def delete_reminder(
    reminder_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, dict[str, bool]]:
    """Delete a reminder."""

    reminder = await reminder_service.get_reminder(session, user.id, reminder_id)
    await reminder_service.delete_reminder(session, reminder)
    await session.commit()
    return data_response({"deleted": True})
