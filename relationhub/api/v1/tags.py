"""Tag API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from relationhub.api.v1.common import data_response, get_current_user
from relationhub.core.db import get_session
from relationhub.models import User
from relationhub.schemas import TagCreate, TagRead, TagUpdate
from relationhub.services import tags as tag_service

router = APIRouter(prefix="/tags", tags=["tags"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: TagCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, TagRead]:
    """Create a tag; names are unique per user."""

    tag = await tag_service.create_tag(session, user.id, payload)
    await session.commit()
    return data_response(TagRead.model_validate(tag))


@router.get("")
async def list_tags(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, list[TagRead]]:
    tags = await tag_service.list_tags(session, user.id)
    return data_response([TagRead.model_validate(tag) for tag in tags])


@router.put("/{tag_id}")
async def update_tag(
    tag_id: str,
    payload: TagUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, TagRead]:
    tag = await tag_service.get_tag(session, user.id, tag_id)
    tag = await tag_service.update_tag(session, tag, payload)
    await session.commit()
    return data_response(TagRead.model_validate(tag))


@router.delete("/{tag_id}")
async def delete_tag(
    tag_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, dict[str, bool]]:
    tag = await tag_service.get_tag(session, user.id, tag_id)
    await tag_service.delete_tag(session, tag)
    await session.commit()
    return data_response({"deleted": True})
