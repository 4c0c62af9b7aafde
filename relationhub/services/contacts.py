"""Data access for contacts, including filtered cursor pagination."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import and_, case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement, Select

from relationhub.core.errors import NotFoundError, ValidationError
from relationhub.models import Activity, Contact, ContactTag, Priority
from relationhub.schemas import (
    ContactCreate,
    ContactFilter,
    ContactSortField,
    ContactUpdate,
    PageInfo,
    SortOrder,
)
from relationhub.services.common import apply_updates, column_values, guarded_write

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Declaration order, matching how the enum sorts in the database schema.
PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}

REQUIRED_FIELDS = ("name", "priority")


@dataclass
class ContactPage:
    """One page of contacts plus pagination metadata."""

    nodes: list[Contact]
    total_count: int
    page_info: PageInfo


async def get_contact(session: AsyncSession, user_id: str, contact_id: str) -> Contact:
    """Return a contact owned by ``user_id``."""

    result = await session.execute(
        select(Contact).where(Contact.id == contact_id, Contact.user_id == user_id)
    )
    contact = result.scalars().first()
    if contact is None:
        raise NotFoundError("Contact", contact_id)
    return contact


async def create_contact(session: AsyncSession, user_id: str, payload: ContactCreate) -> Contact:
    contact = Contact(user_id=user_id, **column_values(payload.model_dump()))
    async with guarded_write(session, "Contact could not be created"):
        session.add(contact)
    await session.refresh(contact)
    logger.info("Contact created", extra={"user_id": user_id, "contact_id": contact.id})
    return contact


async def update_contact(session: AsyncSession, contact: Contact, payload: ContactUpdate) -> Contact:
    async with guarded_write(session, "Contact could not be updated"):
        apply_updates(contact, payload.model_dump(exclude_unset=True), required=REQUIRED_FIELDS)
    await session.refresh(contact)
    return contact


async def delete_contact(session: AsyncSession, contact: Contact) -> None:
    contact_id, user_id = contact.id, contact.user_id
    await session.delete(contact)
    await session.flush()
    logger.info("Contact deleted", extra={"user_id": user_id, "contact_id": contact_id})


async def list_contacts(
    session: AsyncSession,
    user_id: str,
    filters: ContactFilter | None = None,
    *,
    cursor: str | None = None,
    limit: int | None = None,
    sort_by: ContactSortField | str = ContactSortField.CREATED_AT,
    sort_order: SortOrder | str = SortOrder.DESC,
) -> ContactPage:
    """Return one page of a user's contacts.

    ``cursor`` is the id of the last contact of the previous page. Results are
    ordered by ``sort_by`` with the id as tie-breaker so that pages never
    overlap, and rows with a null sort value come last in either direction.
    """

    sort_field = _coerce(ContactSortField, sort_by, "sort field")
    order = _coerce(SortOrder, sort_order, "sort order")
    page_size = min(limit or DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)
    if page_size < 1:
        raise ValidationError("limit must be a positive integer")

    conditions = _filter_conditions(user_id, filters or ContactFilter())
    sort_expr = _sort_expression(sort_field)
    descending = order is SortOrder.DESC

    stmt = select(Contact).where(*conditions)
    if cursor is not None:
        stmt = stmt.where(await _after_cursor(session, user_id, cursor, sort_expr, descending))

    if descending:
        stmt = stmt.order_by(sort_expr.desc().nulls_last(), Contact.id.desc())
    else:
        stmt = stmt.order_by(sort_expr.asc().nulls_last(), Contact.id.asc())

    result = await session.execute(stmt.limit(page_size + 1))
    fetched = list(result.scalars().all())
    total_count = await _count(session, select(func.count(Contact.id)).where(*conditions))

    has_next_page = len(fetched) > page_size
    nodes = fetched[:page_size]
    page_info = PageInfo(
        has_next_page=has_next_page,
        has_previous_page=cursor is not None,
        start_cursor=nodes[0].id if nodes else None,
        end_cursor=nodes[-1].id if nodes else None,
    )
    return ContactPage(nodes=nodes, total_count=total_count, page_info=page_info)


async def count_contacts_by_priority(session: AsyncSession, user_id: str) -> dict[str, int]:
    counts = {priority.value: 0 for priority in Priority}
    result = await session.execute(
        select(Contact.priority, func.count(Contact.id))
        .where(Contact.user_id == user_id)
        .group_by(Contact.priority)
    )
    for priority, count in result.all():
        counts[Priority(priority).value] = count
    return counts


async def refresh_last_contacted(session: AsyncSession, contact_id: str) -> None:
    """Set the contact's last contacted time to its newest activity."""

    contact = await session.get(Contact, contact_id)
    if contact is None:
        return
    result = await session.execute(
        select(func.max(Activity.occurred_at)).where(Activity.contact_id == contact_id)
    )
    contact.last_contacted_at = result.scalar_one_or_none()
    await session.flush()


def _coerce(enum_type: Any, value: Any, label: str) -> Any:
    try:
        return enum_type(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_type)
        raise ValidationError(f"Invalid {label}: {value}. Allowed values: {allowed}") from exc


def _filter_conditions(user_id: str, filters: ContactFilter) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = [Contact.user_id == user_id]
    if filters.priority is not None:
        conditions.append(Contact.priority == filters.priority)
    if filters.company:
        conditions.append(Contact.company.icontains(filters.company, autoescape=True))
    if filters.industry:
        conditions.append(Contact.industry.icontains(filters.industry, autoescape=True))
    if filters.role:
        conditions.append(Contact.role.icontains(filters.role, autoescape=True))
    if filters.search:
        conditions.append(
            or_(
                Contact.name.icontains(filters.search, autoescape=True),
                Contact.email.icontains(filters.search, autoescape=True),
                Contact.company.icontains(filters.search, autoescape=True),
            )
        )
    if filters.tag_id:
        conditions.append(
            Contact.id.in_(select(ContactTag.contact_id).where(ContactTag.tag_id == filters.tag_id))
        )
    return conditions


def _sort_expression(field: ContactSortField) -> ColumnElement[Any]:
    if field is ContactSortField.PRIORITY:
        return case(PRIORITY_RANK, value=Contact.priority)
    return getattr(Contact, field.value)


async def _after_cursor(
    session: AsyncSession,
    user_id: str,
    cursor: str,
    sort_expr: ColumnElement[Any],
    descending: bool,
) -> ColumnElement[bool]:
    result = await session.execute(
        select(sort_expr).where(Contact.id == cursor, Contact.user_id == user_id)
    )
    row = result.first()
    if row is None:
        raise ValidationError(f"Invalid cursor: {cursor}")
    cursor_value = row[0]

    id_after = Contact.id < cursor if descending else Contact.id > cursor
    if cursor_value is None:
        return and_(sort_expr.is_(None), id_after)
    value_after = sort_expr < cursor_value if descending else sort_expr > cursor_value
    return or_(
        value_after,
        and_(sort_expr == cursor_value, id_after),
        sort_expr.is_(None),
    )


async def _count(session: AsyncSession, stmt: Select[Any]) -> int:
    result = await session.execute(stmt)
    return int(result.scalar_one())
