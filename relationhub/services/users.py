"""Data access for user accounts."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from relationhub.core.errors import NotFoundError
from relationhub.models import User
from relationhub.models.base import utcnow
from relationhub.schemas import AuthIdentity, UserCreate, UserUpdate
from relationhub.services.common import apply_updates, guarded_write

logger = logging.getLogger(__name__)

DUPLICATE_USER_MESSAGE = "User with the same email or auth identity already exists"


async def get_user(session: AsyncSession, user_id: str) -> User:
    user = await session.get(User, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


async def find_user_by_supabase_id(session: AsyncSession, supabase_id: str) -> User | None:
    result = await session.execute(select(User).where(User.supabase_id == supabase_id))
    return result.scalars().first()


async def find_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalars().first()


async def list_users(session: AsyncSession) -> Sequence[User]:
    result = await session.execute(select(User).order_by(User.created_at, User.id))
    return result.scalars().all()


async def create_user(session: AsyncSession, payload: UserCreate) -> User:
    user = User(**payload.model_dump())
    async with guarded_write(session, DUPLICATE_USER_MESSAGE):
        session.add(user)
    await session.refresh(user)
    logger.info("User created", extra={"user_id": user.id})
    return user


async def update_user(session: AsyncSession, user: User, payload: UserUpdate) -> User:
    async with guarded_write(session, DUPLICATE_USER_MESSAGE):
        apply_updates(user, payload.model_dump(exclude_unset=True))
    await session.refresh(user)
    return user


async def delete_user(session: AsyncSession, user: User) -> None:
    """Delete a user together with everything they own."""

    user_id = user.id
    await session.delete(user)
    await session.flush()
    logger.info("User deleted", extra={"user_id": user_id})


async def sync_user_from_auth(session: AsyncSession, identity: AuthIdentity) -> User:
    """Create the user on first sign-in, otherwise refresh profile and login time.

    The lookup is keyed on the auth provider's subject id, so a changed email
    address at the provider does not create a second account.
    """

    profile = {
        "name": identity.full_name or None,
        "profile_picture": identity.avatar_url or None,
        "last_login_at": utcnow(),
    }
    user = await find_user_by_supabase_id(session, identity.supabase_id)
    if user is None:
        user = User(
            supabase_id=identity.supabase_id,
            email=identity.email,
            provider=identity.provider or None,
            **profile,
        )
        async with guarded_write(session, DUPLICATE_USER_MESSAGE):
            session.add(user)
        logger.info("User created from auth identity", extra={"user_id": user.id})
    else:
        for field, value in profile.items():
            setattr(user, field, value)
        await session.flush()
    await session.refresh(user)
    return user
