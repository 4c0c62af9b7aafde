from __future__ import annotations

from datetime import datetime

import pytest


async def _create_contact(client, headers, name="Dana"):
    response = await client.post("/api/v1/contacts", json={"name": name}, headers=headers)
    assert response.status_code == 201
    return response.json()["data"]["id"]


@pytest.mark.anyio("asyncio")
async def test_activities_update_last_contacted_at(client, make_user):
    owner = await make_user()
    contact_id = await _create_contact(client, owner)

    first_time = datetime(2023, 1, 5, 12, 0, 0)
    second_time = datetime(2024, 6, 1, 9, 30, 0)
    third_time = datetime(2025, 2, 14, 15, 0, 0)

    first_resp = await client.post(
        "/api/v1/activities",
        json={
            "contact_id": contact_id,
            "type": "MEETING",
            "description": "Kick-off",
            "occurred_at": first_time.isoformat(),
        },
        headers=owner,
    )
    assert first_resp.status_code == 201
    contact = (await client.get(f"/api/v1/contacts/{contact_id}", headers=owner)).json()["data"]
    assert contact["last_contacted_at"] == first_time.isoformat()

    second_resp = await client.post(
        "/api/v1/activities",
        json={
            "contact_id": contact_id,
            "type": "CALL",
            "description": "Follow-up",
            "occurred_at": second_time.isoformat(),
            "metadata": {"durationMinutes": 15},
        },
        headers=owner,
    )
    assert second_resp.status_code == 201
    assert second_resp.json()["data"]["metadata"] == {"durationMinutes": 15}
    contact = (await client.get(f"/api/v1/contacts/{contact_id}", headers=owner)).json()["data"]
    assert contact["last_contacted_at"] == second_time.isoformat()

    first_id = first_resp.json()["data"]["id"]
    update_resp = await client.put(
        f"/api/v1/activities/{first_id}",
        json={"occurred_at": third_time.isoformat()},
        headers=owner,
    )
    assert update_resp.status_code == 200
    contact = (await client.get(f"/api/v1/contacts/{contact_id}", headers=owner)).json()["data"]
    assert contact["last_contacted_at"] == third_time.isoformat()

    calls = await client.get("/api/v1/activities", params={"type": "CALL"}, headers=owner)
    assert [item["description"] for item in calls.json()["data"]] == ["Follow-up"]

    ranged = await client.get(
        "/api/v1/activities",
        params={"from": "2024-01-01T00:00:00", "to": "2024-12-31T00:00:00"},
        headers=owner,
    )
    assert [item["description"] for item in ranged.json()["data"]] == ["Follow-up"]

    await client.delete(f"/api/v1/activities/{first_id}", headers=owner)
    await client.delete(f"/api/v1/activities/{second_resp.json()['data']['id']}", headers=owner)
    contact = (await client.get(f"/api/v1/contacts/{contact_id}", headers=owner)).json()["data"]
    assert contact["last_contacted_at"] is None


@pytest.mark.anyio("asyncio")
async def test_history_requires_an_owned_contact(client, make_user):
    owner = await make_user("owner")
    stranger = await make_user("stranger")
    contact_id = await _create_contact(client, owner)

    for path, payload in (
        ("/api/v1/activities", {"contact_id": contact_id, "type": "NOTE", "description": "x"}),
        ("/api/v1/emails", {"contact_id": contact_id, "subject": "s", "body": "b", "provider": "SMTP"}),
        ("/api/v1/reminders", {"contact_id": contact_id, "title": "t", "due_date": "2030-01-01T00:00:00"}),
    ):
        response = await client.post(path, json=payload, headers=stranger)
        assert response.status_code == 404

    bad_type = await client.post(
        "/api/v1/activities",
        json={"contact_id": contact_id, "type": "LUNCH", "description": "x"},
        headers=owner,
    )
    assert bad_type.status_code == 422


@pytest.mark.anyio("asyncio")
async def test_email_log_tracking_and_activity(client, make_user):
    owner = await make_user()
    contact_id = await _create_contact(client, owner)

    sent_at = datetime(2024, 5, 1, 8, 0, 0)
    create_resp = await client.post(
        "/api/v1/emails",
        json={
            "contact_id": contact_id,
            "subject": "Hello",
            "body": "Nice to meet you",
            "provider": "GMAIL",
            "sent_at": sent_at.isoformat(),
            "metadata": {"threadId": "abc"},
        },
        headers=owner,
    )
    assert create_resp.status_code == 201
    email = create_resp.json()["data"]
    assert email["opened_at"] is None
    assert email["metadata"] == {"threadId": "abc"}

    activities = (
        await client.get("/api/v1/activities", params={"contact_id": contact_id}, headers=owner)
    ).json()["data"]
    assert len(activities) == 1
    assert activities[0]["type"] == "EMAIL_SENT"
    assert activities[0]["metadata"]["emailId"] == email["id"]

    contact = (await client.get(f"/api/v1/contacts/{contact_id}", headers=owner)).json()["data"]
    assert contact["last_contacted_at"] == sent_at.isoformat()

    clicked = (await client.post(f"/api/v1/emails/{email['id']}/clicked", headers=owner)).json()["data"]
    assert clicked["clicked_at"] is not None
    assert clicked["opened_at"] == clicked["clicked_at"]

    reopened = (await client.post(f"/api/v1/emails/{email['id']}/opened", headers=owner)).json()["data"]
    assert reopened["opened_at"] == clicked["opened_at"]

    default_sent = await client.post(
        "/api/v1/emails",
        json={"contact_id": contact_id, "subject": "Later", "body": "b", "provider": "OUTLOOK"},
        headers=owner,
    )
    assert default_sent.status_code == 201
    listed = (await client.get("/api/v1/emails", params={"contact_id": contact_id}, headers=owner)).json()["data"]
    assert [item["subject"] for item in listed] == ["Later", "Hello"]

    delete_resp = await client.delete(f"/api/v1/emails/{email['id']}", headers=owner)
    assert delete_resp.status_code == 200
    assert (await client.get(f"/api/v1/emails/{email['id']}", headers=owner)).status_code == 404


@pytest.mark.anyio("asyncio")
async def test_reminders_completion_and_filters(client, make_user):
    owner = await make_user()
    contact_id = await _create_contact(client, owner)

    first = await client.post(
        "/api/v1/reminders",
        json={"contact_id": contact_id, "title": "New year greetings", "due_date": "2024-01-15T09:00:00"},
        headers=owner,
    )
    assert first.status_code == 201
    first_reminder = first.json()["data"]
    assert first_reminder["completed"] is False
    assert first_reminder["completed_at"] is None

    second = await client.post(
        "/api/v1/reminders",
        json={"contact_id": contact_id, "title": "Quarterly review", "due_date": "2024-03-01T09:00:00"},
        headers=owner,
    )
    second_id = second.json()["data"]["id"]

    upcoming = await client.get("/api/v1/reminders", params={"from": "2024-02-01T00:00:00"}, headers=owner)
    assert [item["id"] for item in upcoming.json()["data"]] == [second_id]

    completed = await client.post(f"/api/v1/reminders/{first_reminder['id']}/complete", headers=owner)
    assert completed.status_code == 200
    assert completed.json()["data"]["completed"] is True
    completed_at = completed.json()["data"]["completed_at"]
    assert completed_at is not None

    again = await client.put(
        f"/api/v1/reminders/{first_reminder['id']}", json={"completed": True}, headers=owner
    )
    assert again.json()["data"]["completed_at"] == completed_at

    open_only = await client.get("/api/v1/reminders", params={"completed": "false"}, headers=owner)
    assert [item["id"] for item in open_only.json()["data"]] == [second_id]

    reopened = await client.post(f"/api/v1/reminders/{first_reminder['id']}/reopen", headers=owner)
    assert reopened.json()["data"]["completed"] is False
    assert reopened.json()["data"]["completed_at"] is None

    renamed = await client.put(
        f"/api/v1/reminders/{second_id}", json={"title": "Half-year review"}, headers=owner
    )
    assert renamed.json()["data"]["title"] == "Half-year review"

    delete_resp = await client.delete(f"/api/v1/reminders/{second_id}", headers=owner)
    assert delete_resp.json()["data"] == {"deleted": True}
    remaining = await client.get("/api/v1/reminders", headers=owner)
    assert [item["id"] for item in remaining.json()["data"]] == [first_reminder["id"]]
