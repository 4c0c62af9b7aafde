"""Version 1 API routes for the RelationHub data service."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from relationhub.api.v1.activities import router as activities_router
from relationhub.api.v1.contacts import router as contacts_router
from relationhub.api.v1.emails import router as emails_router
from relationhub.api.v1.reminders import router as reminders_router
from relationhub.api.v1.tags import router as tags_router
from relationhub.api.v1.users import router as users_router
from relationhub.core.config import Settings, get_settings
from relationhub.core.db import get_session

router = APIRouter()
router.include_router(users_router)
router.include_router(contacts_router)
router.include_router(tags_router)
router.include_router(emails_router)
router.include_router(activities_router)
router.include_router(reminders_router)


@router.get("/health", tags=["health"])
async def health_check(
    settings: Settings = Depends(get_settings), session: AsyncSession = Depends(get_session)
) -> dict[str, dict[str, str]]:
    """Report the service version and whether the database answers."""
    await session.execute(text("SELECT 1"))
    return {"data": {"status": "ok", "database": "ok", "version": settings.version}}
