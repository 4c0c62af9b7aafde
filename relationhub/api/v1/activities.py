"""Activity API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from relationhub.api.v1.common import data_response, get_current_user
from relationhub.core.db import get_session
from relationhub.models import ActivityType, User
from relationhub.schemas import ActivityCreate, ActivityRead, ActivityUpdate
from relationhub.schemas.common import UTCDateTime
from relationhub.services import activities as activity_service

router = APIRouter(prefix="/activities", tags=["activities"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_activity(
    payload: ActivityCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, ActivityRead]:
    """Record a new activity for a contact."""

    activity = await activity_service.create_activity(session, user.id, payload)
    await session.commit()
    return data_response(ActivityRead.model_validate(activity))


@router.get("")
async def list_activities(
    contact_id: str | None = None,
    type: ActivityType | None = None,
    occurred_from: UTCDateTime | None = Query(None, alias="from"),
    occurred_to: UTCDateTime | None = Query(None, alias="to"),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, list[ActivityRead]]:
    """List activities with optional filtering."""

    activities = await activity_service.list_activities(
        session,
        user.id,
        contact_id=contact_id,
        activity_type=type,
        occurred_from=occurred_from,
        occurred_to=occurred_to,
    )
    return data_response([ActivityRead.model_validate(activity) for activity in activities])


@router.get("/{activity_id}")
async def retrieve_activity(
    activity_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, ActivityRead]:
    activity = await activity_service.get_activity(session, user.id, activity_id)
    return data_response(ActivityRead.model_validate(activity))


@router.put("/{activity_id}")
async def update_activity(
    activity_id: str,
    payload: ActivityUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, ActivityRead]:
    """Update an existing activity."""

    activity = await activity_service.get_activity(session, user.id, activity_id)
    activity = await activity_service.update_activity(session, activity, payload)
    await session.commit()
    return data_response(ActivityRead.model_validate(activity))


@router.delete("/{activity_id}")
async def delete_activity(
    activity_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, dict[str, bool]]:
    """Delete an activity."""

    activity = await activity_service.get_activity(session, user.id, activity_id)
    await activity_service.delete_activity(session, activity)
    await session.commit()
    return data_response({"deleted": True})
