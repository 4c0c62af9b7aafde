"""Contacts API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from relationhub.api.v1.common import data_response, get_current_user
from relationhub.core.db import get_session
from relationhub.models import Priority, User
from relationhub.schemas import (
    ContactCreate,
    ContactFilter,
    ContactRead,
    ContactSortField,
    ContactUpdate,
    Page,
    SortOrder,
    TagRead,
)
from relationhub.services import contacts as contact_service
from relationhub.services import tags as tag_service

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_contact(
    payload: ContactCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, ContactRead]:
    """Create a new contact."""

    contact = await contact_service.create_contact(session, user.id, payload)
    await session.commit()
    return data_response(ContactRead.model_validate(contact))


@router.get("")
async def list_contacts(
    search: str | None = Query(None, max_length=255),
    priority: Priority | None = None,
    company: str | None = Query(None, max_length=255),
    industry: str | None = Query(None, max_length=255),
    role: str | None = Query(None, max_length=255),
    tag_id: str | None = None,
    cursor: str | None = None,
    limit: int = Query(20, ge=1, le=100),
    sort_by: ContactSortField = ContactSortField.CREATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, Page[ContactRead]]:
    """List contacts with filtering, sorting and cursor pagination."""

    filters = ContactFilter(
        search=search,
        priority=priority,
        company=company,
        industry=industry,
        role=role,
        tag_id=tag_id,
    )
    page = await contact_service.list_contacts(
        session,
        user.id,
        filters,
        cursor=cursor,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    payload = Page[ContactRead](
        nodes=[ContactRead.model_validate(contact) for contact in page.nodes],
        total_count=page.total_count,
        page_info=page.page_info,
    )
    return data_response(payload)


@router.get("/stats")
async def contact_stats(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, dict[str, int]]:
    """Count the user's contacts per priority."""

    return data_response(await contact_service.count_contacts_by_priority(session, user.id))


@router.get("/{contact_id}")
async def retrieve_contact(
    contact_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, ContactRead]:
    """Retrieve a single contact by identifier."""

    contact = await contact_service.get_contact(session, user.id, contact_id)
    return data_response(ContactRead.model_validate(contact))


@router.put("/{contact_id}")
async def update_contact(
    contact_id: str,
    payload: ContactUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, ContactRead]:
    """Update the provided contact."""

    contact = await contact_service.get_contact(session, user.id, contact_id)
    contact = await contact_service.update_contact(session, contact, payload)
    await session.commit()
    return data_response(ContactRead.model_validate(contact))


@router.delete("/{contact_id}")
async def delete_contact(
    contact_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, dict[str, bool]]:
    """Delete the specified contact."""

    contact = await contact_service.get_contact(session, user.id, contact_id)
    await contact_service.delete_contact(session, contact)
    await session.commit()
    return data_response({"deleted": True})


@router.get("/{contact_id}/tags")
async def list_contact_tags(
    contact_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, list[TagRead]]:
    tags = await tag_service.list_contact_tags(session, user.id, contact_id)
    return data_response([TagRead.model_validate(tag) for tag in tags])


@router.post("/{contact_id}/tags/{tag_id}", status_code=status.HTTP_201_CREATED)
async def add_contact_tag(
    contact_id: str,
    tag_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, dict[str, str]]:
    """Attach a tag to a contact."""

    await tag_service.tag_contact(session, user.id, contact_id, tag_id)
    await session.commit()
    return data_response({"contact_id": contact_id, "tag_id": tag_id})


@router.delete("/{contact_id}/tags/{tag_id}")
async def remove_contact_tag(
    contact_id: str,
    tag_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, dict[str, bool]]:
    """Detach a tag from a contact."""

    await tag_service.untag_contact(session, user.id, contact_id, tag_id)
    await session.commit()
    return data_response({"deleted": True})
