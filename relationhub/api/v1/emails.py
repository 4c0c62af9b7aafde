"""Email log API routes."""
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from relationhub.api.v1.common import data_response, get_current_user
from relationhub.core.db import get_session
from relationhub.models import User
from relationhub.schemas import EmailCreate, EmailRead
from relationhub.schemas.common import UTCDateTime
from relationhub.services import emails as email_service

router = APIRouter(prefix="/emails", tags=["emails"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def log_email(
    payload: EmailCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, EmailRead]:
    """Record an email sent to a contact."""

    email = await email_service.log_email(session, user.id, payload)
    await session.commit()
    return data_response(EmailRead.model_validate(email))


@router.get("")
async def list_emails(
    contact_id: str | None = None,
    sent_from: UTCDateTime | None = Query(None, alias="from"),
    sent_to: UTCDateTime | None = Query(None, alias="to"),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, list[EmailRead]]:
    """List emails, newest first."""

    emails = await email_service.list_emails(
        session, user.id, contact_id=contact_id, sent_from=sent_from, sent_to=sent_to
    )
    return data_response([EmailRead.model_validate(email) for email in emails])


@router.get("/{email_id}")
async def retrieve_email(
    email_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, EmailRead]:
    email = await email_service.get_email(session, user.id, email_id)
    return data_response(EmailRead.model_validate(email))


@router.post("/{email_id}/opened")
async def mark_email_opened(
    email_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, EmailRead]:
    email = await email_service.get_email(session, user.id, email_id)
    email = await email_service.mark_email_opened(session, email)
    await session.commit()
    return data_response(EmailRead.model_validate(email))


@router.post("/{email_id}/clicked")
async def mark_email_clicked(
    email_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, EmailRead]:
    email = await email_service.get_email(session, user.id, email_id)
    email = await email_service.mark_email_clicked(session, email)
    await session.commit()
    return data_response(EmailRead.model_validate(email))


@router.delete("/{email_id}")
async def delete_email(
    email_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> dict[str, dict[str, bool]]:
    email = await email_service.get_email(session, user.id, email_id)
    await email_service.delete_email(session, email)
    await session.commit()
    return data_response({"deleted": True})
