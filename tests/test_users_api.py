from __future__ import annotations

import pytest


@pytest.mark.anyio("asyncio")
async def test_users_crud_and_unique_email(client):
    create_resp = await client.post(
        "/api/v1/users",
        json={
            "supabase_id": "auth-uuid-1",
            "email": "taylor@example.com",
            "name": "Taylor",
            "provider": "google",
            "settings": {"theme": "dark"},
        },
    )
    assert create_resp.status_code == 201
    user = create_resp.json()["data"]
    assert user["supabase_id"] == "auth-uuid-1"
    assert user["settings"] == {"theme": "dark"}
    assert user["last_login_at"] is None

    duplicate_resp = await client.post(
        "/api/v1/users",
        json={"supabase_id": "auth-uuid-2", "email": "taylor@example.com"},
    )
    assert duplicate_resp.status_code == 409
    assert duplicate_resp.json()["error"]["code"] == "CONFLICT"

    owner = {"X-User-Id": user["id"]}
    update_resp = await client.put(
        f"/api/v1/users/{user['id']}", json={"name": "Taylor Swift-Jones"}, headers=owner
    )
    assert update_resp.status_code == 200
    assert update_resp.json()["data"]["name"] == "Taylor Swift-Jones"
    assert update_resp.json()["data"]["provider"] == "google"

    me_resp = await client.get("/api/v1/users/me", headers={"X-User-Id": user["id"]})
    assert me_resp.status_code == 200
    assert me_resp.json()["data"]["email"] == "taylor@example.com"

    list_resp = await client.get("/api/v1/users")
    assert [item["id"] for item in list_resp.json()["data"]] == [user["id"]]

    delete_resp = await client.delete(f"/api/v1/users/{user['id']}", headers=owner)
    assert delete_resp.status_code == 200
    assert delete_resp.json()["data"] == {"deleted": True}

    missing_resp = await client.get(f"/api/v1/users/{user['id']}")
    assert missing_resp.status_code == 404
    assert missing_resp.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


@pytest.mark.anyio("asyncio")
async def test_sync_creates_then_refreshes_login(client):
    identity = {
        "supabase_id": "auth-sync-1",
        "email": "robin@example.com",
        "full_name": "Robin",
        "avatar_url": "https://example.com/robin.png",
        "provider": "google",
    }
    first = await client.post("/api/v1/users/sync", json=identity)
    assert first.status_code == 200
    created = first.json()["data"]
    assert created["name"] == "Robin"
    assert created["provider"] == "google"
    assert created["profile_picture"] == "https://example.com/robin.png"
    assert created["last_login_at"] is not None

    second = await client.post(
        "/api/v1/users/sync",
        json={**identity, "full_name": "Robin Hood", "avatar_url": None},
    )
    assert second.status_code == 200
    refreshed = second.json()["data"]
    assert refreshed["id"] == created["id"]
    assert refreshed["name"] == "Robin Hood"
    assert refreshed["profile_picture"] is None
    assert refreshed["last_login_at"] >= created["last_login_at"]

    all_users = await client.get("/api/v1/users")
    assert len(all_users.json()["data"]) == 1


@pytest.mark.anyio("asyncio")
async def test_requests_without_known_user_are_rejected(client):
    missing_header = await client.get("/api/v1/contacts")
    assert missing_header.status_code == 401
    assert missing_header.json()["error"]["code"] == "UNAUTHORIZED"

    unknown_user = await client.get("/api/v1/contacts", headers={"X-User-Id": "nobody"})
    assert unknown_user.status_code == 401


@pytest.mark.anyio("asyncio")
async def test_deleting_user_removes_owned_rows(client, make_user):
    owner = await make_user("owner")
    contact = (
        await client.post("/api/v1/contacts", json={"name": "Casey"}, headers=owner)
    ).json()["data"]
    tag = (
        await client.post("/api/v1/tags", json={"name": "VIP"}, headers=owner)
    ).json()["data"]
    await client.post(f"/api/v1/contacts/{contact['id']}/tags/{tag['id']}", headers=owner)
    await client.post(
        "/api/v1/reminders",
        json={"contact_id": contact["id"], "title": "Call", "due_date": "2030-01-01T09:00:00"},
        headers=owner,
    )

    other = await make_user("other")
    other_contact = await client.post("/api/v1/contacts", json={"name": "Kept"}, headers=other)
    assert other_contact.status_code == 201

    owner_path = f"/api/v1/users/{owner['X-User-Id']}"
    assert (await client.delete(owner_path)).status_code == 401
    assert (await client.delete(owner_path, headers=other)).status_code == 404
    assert (await client.put(owner_path, json={"name": "Mallory"}, headers=other)).status_code == 404
    assert (await client.get(owner_path)).json()["data"]["name"] != "Mallory"

    delete_resp = await client.delete(f"/api/v1/users/{owner['X-User-Id']}", headers=owner)
    assert delete_resp.status_code == 200

    remaining = await client.get("/api/v1/contacts", headers=other)
    assert remaining.json()["data"]["total_count"] == 1
