from __future__ import annotations

import pytest
from sqlalchemy import func, select

from relationhub.core.errors import ConflictError, NotFoundError, ValidationError
from relationhub.models import Activity, Contact, ContactTag, Email, Reminder, Tag, User
from relationhub.schemas import ContactCreate, ContactFilter, TagCreate, UserCreate
from relationhub.seed import SAMPLE_USERS, run
from relationhub.services import contacts, tags, users
from relationhub.services.common import guarded_write


async def _count(session, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


@pytest.mark.anyio("asyncio")
async def test_contact_requires_existing_user(session):
    with pytest.raises(ConflictError):
        async with guarded_write(session, "Contact could not be created"):
            session.add(Contact(user_id="missing-user", name="Orphan"))


@pytest.mark.anyio("asyncio")
async def test_conflict_keeps_earlier_writes_in_the_transaction(session):
    first = await users.create_user(session, UserCreate(supabase_id="auth-a", email="a@example.com"))
    contact = await contacts.create_contact(session, first.id, ContactCreate(name="Kept"))

    with pytest.raises(ConflictError):
        await users.create_user(session, UserCreate(supabase_id="auth-b", email="a@example.com"))
    await tags.create_tag(session, first.id, TagCreate(name="Friend"))
    with pytest.raises(ConflictError):
        await tags.create_tag(session, first.id, TagCreate(name="Friend"))

    second = await users.create_user(session, UserCreate(supabase_id="auth-c", email="c@example.com"))
    await session.commit()

    result = await session.execute(select(User.id).order_by(User.created_at, User.id))
    assert set(result.scalars().all()) == {first.id, second.id}
    assert await _count(session, Contact) == 1
    assert await _count(session, Tag) == 1
    assert contact.name == "Kept"


@pytest.mark.anyio("asyncio")
async def test_contact_tag_pairs_are_unique(session):
    user = await users.create_user(session, UserCreate(supabase_id="auth-1", email="one@example.com"))
    contact = await contacts.create_contact(session, user.id, ContactCreate(name="Pat"))
    tag = await tags.create_tag(session, user.id, TagCreate(name="Friend"))

    await tags.tag_contact(session, user.id, contact.id, tag.id)
    with pytest.raises(ConflictError):
        await tags.tag_contact(session, user.id, contact.id, tag.id)


@pytest.mark.anyio("asyncio")
async def test_list_contacts_rejects_unknown_sort_field(session):
    user = await users.create_user(session, UserCreate(supabase_id="auth-2", email="two@example.com"))
    with pytest.raises(ValidationError):
        await contacts.list_contacts(session, user.id, ContactFilter(), sort_by="phone")
    with pytest.raises(NotFoundError):
        await contacts.get_contact(session, user.id, "nope")


@pytest.mark.anyio("asyncio")
async def test_seed_loads_sample_data_once(session):
    counts = await run()
    assert counts == {
        "users": 2,
        "contacts": 5,
        "tags": 5,
        "emails": 2,
        "activities": 4,
        "reminders": 3,
    }

    assert await _count(session, User) == 2
    assert await _count(session, Contact) == 5
    assert await _count(session, Tag) == 5
    assert await _count(session, ContactTag) == 3
    assert await _count(session, Email) == 2
    assert await _count(session, Activity) == 4
    assert await _count(session, Reminder) == 3

    assert await run() is None
    assert await _count(session, User) == 2

    alex = await users.find_user_by_supabase_id(session, SAMPLE_USERS[0].supabase_id)
    assert alex is not None
    page = await contacts.list_contacts(session, alex.id, sort_by="name", sort_order="asc")
    assert [contact.name for contact in page.nodes] == ["Jordan Lee", "Marco Bellini", "Priya Natarajan"]
    assert all(contact.last_contacted_at is not None for contact in page.nodes if contact.name != "Jordan Lee")
