"""Data access for tags and the contact/tag links."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from relationhub.core.errors import ConflictError, NotFoundError
from relationhub.models import ContactTag, Tag
from relationhub.schemas import TagCreate, TagUpdate
from relationhub.services.common import apply_updates, guarded_write
from relationhub.services.contacts import get_contact

logger = logging.getLogger(__name__)

DUPLICATE_TAG_MESSAGE = "Tag with the same name already exists"


async def list_tags(session: AsyncSession, user_id: str) -> Sequence[Tag]:
    result = await session.execute(
        select(Tag).where(Tag.user_id == user_id).order_by(Tag.name)
    )
    return result.scalars().all()


async def get_tag(session: AsyncSession, user_id: str, tag_id: str) -> Tag:
    result = await session.execute(select(Tag).where(Tag.id == tag_id, Tag.user_id == user_id))
    tag = result.scalars().first()
    if tag is None:
        raise NotFoundError("Tag", tag_id)
    return tag


async def create_tag(session: AsyncSession, user_id: str, payload: TagCreate) -> Tag:
    tag = Tag(user_id=user_id, **payload.model_dump())
    async with guarded_write(session, DUPLICATE_TAG_MESSAGE):
        session.add(tag)
    await session.refresh(tag)
    logger.info("Tag created", extra={"user_id": user_id, "tag_id": tag.id})
    return tag


async def update_tag(session: AsyncSession, tag: Tag, payload: TagUpdate) -> Tag:
    async with guarded_write(session, DUPLICATE_TAG_MESSAGE):
        apply_updates(tag, payload.model_dump(exclude_unset=True), required=("name", "color"))
    await session.refresh(tag)
    return tag


async def delete_tag(session: AsyncSession, tag: Tag) -> None:
    """Delete a tag; links to contacts are removed by the foreign key cascade."""

    tag_id = tag.id
    await session.delete(tag)
    await session.flush()
    logger.info("Tag deleted", extra={"tag_id": tag_id})


async def tag_contact(
    session: AsyncSession, user_id: str, contact_id: str, tag_id: str
) -> ContactTag:
    """Attach a tag to a contact, both owned by ``user_id``."""

    await get_contact(session, user_id, contact_id)
    await get_tag(session, user_id, tag_id)
    if await session.get(ContactTag, (contact_id, tag_id)) is not None:
        raise ConflictError("Contact already has this tag")

    link = ContactTag(contact_id=contact_id, tag_id=tag_id)
    async with guarded_write(session, "Contact already has this tag"):
        session.add(link)
    return link


async def untag_contact(session: AsyncSession, user_id: str, contact_id: str, tag_id: str) -> None:
    await get_contact(session, user_id, contact_id)
    link = await session.get(ContactTag, (contact_id, tag_id))
    if link is None:
        raise NotFoundError("Contact tag", tag_id)
    await session.delete(link)
    await session.flush()


async def list_contact_tags(session: AsyncSession, user_id: str, contact_id: str) -> Sequence[Tag]:
    await get_contact(session, user_id, contact_id)
    result = await session.execute(
        select(Tag)
        .join(ContactTag, ContactTag.tag_id == Tag.id)
        .where(ContactTag.contact_id == contact_id, Tag.user_id == user_id)
        .order_by(Tag.name)
    )
    return result.scalars().all()
