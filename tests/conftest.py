from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from relationhub.core.config import get_settings  # noqa: E402

TEST_DB_PATH = ROOT / "test.db"
if TEST_DB_PATH.exists():
    TEST_DB_PATH.unlink()
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
get_settings.cache_clear()


async def _reset_schema() -> None:
    from relationhub.core.db import create_schema

    await create_schema(drop_first=True)


@pytest.fixture()
async def client() -> AsyncIterator[AsyncClient]:
    from relationhub.main import app

    await _reset_schema()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture()
async def session():
    from relationhub.core.db import AsyncSessionLocal

    await _reset_schema()
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture()
def make_user(client: AsyncClient) -> Callable[..., Awaitable[dict[str, str]]]:
    """Create a user through the API and return request headers acting as them."""

    async def _make_user(handle: str = "owner") -> dict[str, str]:
        response = await client.post(
            "/api/v1/users",
            json={"supabase_id": f"auth-{handle}", "email": f"{handle}@example.com", "name": handle},
        )
        assert response.status_code == 201
        return {"X-User-Id": response.json()["data"]["id"]}

    return _make_user


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"
