"""Load sample data for local development.

Usage:
    python -m relationhub.seed [--reset]

Creates the schema when missing and inserts two users with contacts, tags,
emails, activities and reminders in a single transaction. Without ``--reset``
the command does nothing when the sample data is already present.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from relationhub.core.config import get_settings
from relationhub.core.db import AsyncSessionLocal, create_schema, engine
from relationhub.core.logging import configure_logging
from relationhub.models import ActivityType, EmailProvider, Gender, Priority
from relationhub.models.base import utcnow
from relationhub.schemas import (
    ActivityCreate,
    ContactCreate,
    EmailCreate,
    ReminderCreate,
    TagCreate,
    UserCreate,
)
from relationhub.services import activities, contacts, emails, reminders, tags, users

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    UserCreate(
        supabase_id="seed-supabase-alex",
        email="alex.morgan@relationhub.dev",
        name="Alex Morgan",
        provider="google",
        settings={"theme": "light", "weeklyDigest": True},
    ),
    UserCreate(
        supabase_id="seed-supabase-sam",
        email="sam.rivera@relationhub.dev",
        name="Sam Rivera",
        provider="email",
    ),
]


async def seed(session: AsyncSession) -> dict[str, int]:
    """Insert the sample rows and return how many of each were created."""

    now = utcnow()
    alex = await users.create_user(session, SAMPLE_USERS[0])
    sam = await users.create_user(session, SAMPLE_USERS[1])

    priya = await contacts.create_contact(
        session,
        alex.id,
        ContactCreate(
            name="Priya Natarajan",
            email="priya@northwind.io",
            company="Northwind Analytics",
            industry="Technology",
            role="VP Engineering",
            priority=Priority.HIGH,
            gender=Gender.FEMALE,
            linkedin_url="https://www.linkedin.com/in/priya-natarajan",
            notes="Met at the data platform meetup.",
        ),
    )
    marco = await contacts.create_contact(
        session,
        alex.id,
        ContactCreate(
            name="Marco Bellini",
            email="marco@bellini.design",
            company="Bellini Studio",
            industry="Design",
            role="Founder",
            priority=Priority.MEDIUM,
            gender=Gender.MALE,
        ),
    )
    await contacts.create_contact(
        session,
        alex.id,
        ContactCreate(
            name="Jordan Lee",
            phone="+1-555-0142",
            company="Lee & Partners",
            industry="Legal",
            role="Partner",
            priority=Priority.LOW,
            gender=Gender.PREFER_NOT_TO_SAY,
        ),
    )
    hana = await contacts.create_contact(
        session,
        sam.id,
        ContactCreate(
            name="Hana Sato",
            email="hana.sato@kumo.jp",
            company="Kumo Logistics",
            industry="Logistics",
            role="Operations Lead",
            priority=Priority.HIGH,
            birthday=now.replace(month=4, day=12, hour=0, minute=0, second=0, microsecond=0),
        ),
    )
    await contacts.create_contact(
        session,
        sam.id,
        ContactCreate(
            name="Chris Okafor",
            email="chris@okafor.ng",
            company="Okafor Ventures",
            industry="Finance",
            role="Investor",
            metadata={"source": "referral"},
        ),
    )

    investor = await tags.create_tag(session, alex.id, TagCreate(name="Investor", color="#10B981"))
    mentor = await tags.create_tag(session, alex.id, TagCreate(name="Mentor", color="#6366F1"))
    await tags.create_tag(session, alex.id, TagCreate(name="Conference", color="#F59E0B"))
    client = await tags.create_tag(session, sam.id, TagCreate(name="Client", color="#EF4444"))
    await tags.create_tag(session, sam.id, TagCreate(name="Friend", color="#3B82F6"))

    await tags.tag_contact(session, alex.id, priya.id, mentor.id)
    await tags.tag_contact(session, alex.id, priya.id, investor.id)
    await tags.tag_contact(session, sam.id, hana.id, client.id)

    await emails.log_email(
        session,
        alex.id,
        EmailCreate(
            contact_id=priya.id,
            subject="Great meeting you",
            body="Hi Priya, thanks for the chat about streaming pipelines.",
            provider=EmailProvider.GMAIL,
            sent_at=now - timedelta(days=6),
        ),
    )
    await emails.log_email(
        session,
        sam.id,
        EmailCreate(
            contact_id=hana.id,
            subject="Q3 shipping review",
            body="Hi Hana, sharing the agenda for our review call.",
            provider=EmailProvider.OUTLOOK,
            sent_at=now - timedelta(days=2),
        ),
    )

    await activities.create_activity(
        session,
        alex.id,
        ActivityCreate(
            contact_id=marco.id,
            type=ActivityType.MEETING,
            description="Coffee to discuss the rebrand",
            occurred_at=now - timedelta(days=10),
        ),
    )
    await activities.create_activity(
        session,
        sam.id,
        ActivityCreate(
            contact_id=hana.id,
            type=ActivityType.CALL,
            description="Intro call about warehouse automation",
            occurred_at=now - timedelta(days=1),
            metadata={"durationMinutes": 25},
        ),
    )

    await reminders.create_reminder(
        session,
        alex.id,
        ReminderCreate(contact_id=priya.id, title="Send follow-up deck", due_date=now + timedelta(days=3)),
    )
    await reminders.create_reminder(
        session,
        alex.id,
        ReminderCreate(contact_id=marco.id, title="Check in on rebrand", due_date=now + timedelta(days=14)),
    )
    await reminders.create_reminder(
        session,
        sam.id,
        ReminderCreate(
            contact_id=hana.id,
            title="Confirm Q3 review date",
            due_date=now - timedelta(days=1),
            completed=True,
        ),
    )

    # Logged emails record their own EMAIL_SENT activity.
    return {"users": 2, "contacts": 5, "tags": 5, "emails": 2, "activities": 4, "reminders": 3}


async def run(*, reset: bool = False) -> dict[str, int] | None:
    await create_schema(drop_first=reset)
    async with AsyncSessionLocal() as session:
        async with session.begin():
            existing = await users.find_user_by_supabase_id(session, SAMPLE_USERS[0].supabase_id)
            if existing is not None:
                logger.info("Sample data already present, nothing to do")
                return None
            counts = await seed(session)
    logger.info("Database seeded", extra={"counts": counts})
    return counts


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Load RelationHub sample data")
    parser.add_argument("--reset", action="store_true", help="drop and recreate all tables first")
    args = parser.parse_args(argv)

    configure_logging(get_settings())

    async def _run() -> None:
        try:
            await run(reset=args.reset)
        finally:
            await engine.dispose()

    asyncio.run(_run())


if __name__ == "__main__":
    main()
