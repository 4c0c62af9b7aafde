"""Data access for contact activities."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from relationhub.core.errors import NotFoundError
from relationhub.models import Activity, ActivityType
from relationhub.schemas import ActivityCreate, ActivityUpdate
from relationhub.services.common import apply_updates, column_values, guarded_write
from relationhub.services.contacts import get_contact, refresh_last_contacted

logger = logging.getLogger(__name__)


async def create_activity(session: AsyncSession, user_id: str, payload: ActivityCreate) -> Activity:
    """Record an activity and move the contact's last contacted time forward."""

    await get_contact(session, user_id, payload.contact_id)
    values = column_values(payload.model_dump(exclude_none=True))
    activity = Activity(user_id=user_id, **values)
    async with guarded_write(session, "Activity could not be created"):
        session.add(activity)
    await refresh_last_contacted(session, activity.contact_id)
    await session.refresh(activity)
    logger.info(
        "Activity recorded",
        extra={"user_id": user_id, "activity_id": activity.id, "type": activity.type.value},
    )
    return activity


async def list_activities(
    session: AsyncSession,
    user_id: str,
    *,
    contact_id: str | None = None,
    activity_type: ActivityType | None = None,
    occurred_from: datetime | None = None,
    occurred_to: datetime | None = None,
) -> Sequence[Activity]:
    stmt = select(Activity).where(Activity.user_id == user_id)
    if contact_id is not None:
        stmt = stmt.where(Activity.contact_id == contact_id)
    if activity_type is not None:
        stmt = stmt.where(Activity.type == activity_type)
    if occurred_from is not None:
        stmt = stmt.where(Activity.occurred_at >= occurred_from)
    if occurred_to is not None:
        stmt = stmt.where(Activity.occurred_at <= occurred_to)

    stmt = stmt.order_by(Activity.occurred_at.desc(), Activity.id)
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_activity(session: AsyncSession, user_id: str, activity_id: str) -> Activity:
    result = await session.execute(
        select(Activity).where(Activity.id == activity_id, Activity.user_id == user_id)
    )
    activity = result.scalars().first()
    if activity is None:
        raise NotFoundError("Activity", activity_id)
    return activity


async def update_activity(session: AsyncSession, activity: Activity, payload: ActivityUpdate) -> Activity:
    apply_updates(
        activity,
        payload.model_dump(exclude_unset=True),
        required=("type", "description", "occurred_at"),
    )
    await session.flush()
    await refresh_last_contacted(session, activity.contact_id)
    await session.refresh(activity)
    return activity


async def delete_activity(session: AsyncSession, activity: Activity) -> None:
    contact_id = activity.contact_id
    await session.delete(activity)
    await session.flush()
    await refresh_last_contacted(session, contact_id)
