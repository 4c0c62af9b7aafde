"""User API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from relationhub.api.v1.common import data_response, get_current_user
from relationhub.core.db import get_session
from relationhub.core.errors import NotFoundError
from relationhub.models import User
from relationhub.schemas import AuthIdentity, UserCreate, UserRead, UserUpdate
from relationhub.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate, session: AsyncSession = Depends(get_session)
) -> dict[str, UserRead]:
    """Create a new user."""

    user = await user_service.create_user(session, payload)
    await session.commit()
    return data_response(UserRead.model_validate(user))


@router.post("/sync")
async def sync_user(
    payload: AuthIdentity, session: AsyncSession = Depends(get_session)
) -> dict[str, UserRead]:
    """Create or refresh the user for an identity reported by the auth provider."""

    user = await user_service.sync_user_from_auth(session, payload)
    await session.commit()
    return data_response(UserRead.model_validate(user))


@router.get("")
async def list_users(session: AsyncSession = Depends(get_session)) -> dict[str, list[UserRead]]:
    users = await user_service.list_users(session)
    return data_response([UserRead.model_validate(user) for user in users])


@router.get("/me")
async def retrieve_current_user(user: User = Depends(get_current_user)) -> dict[str, UserRead]:
    return data_response(UserRead.model_validate(user))


@router.get("/{user_id}")
async def retrieve_user(
    user_id: str, session: AsyncSession = Depends(get_session)
) -> dict[str, UserRead]:
    user = await user_service.get_user(session, user_id)
    return data_response(UserRead.model_validate(user))


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    payload: UserUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, UserRead]:
    """Update profile fields of the calling user."""

    user = _own_account(current_user, user_id)
    user = await user_service.update_user(session, user, payload)
    await session.commit()
    return data_response(UserRead.model_validate(user))


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, dict[str, bool]]:
    """Delete the calling user and every row they own."""

    user = _own_account(current_user, user_id)
    await user_service.delete_user(session, user)
    await session.commit()
    return data_response({"deleted": True})


def _own_account(current_user: User, user_id: str) -> User:
    # Other accounts are reported as missing, like other owner-scoped rows.
    if current_user.id != user_id:
        raise NotFoundError("User", user_id)
    return current_user
