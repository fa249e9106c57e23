"""Pytest configuration and fixtures for API tests."""
import os
import shutil
import tempfile

# Set test env BEFORE any imports that use config
_storage_dir = tempfile.mkdtemp(prefix="tourney-storage-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["STORAGE_DIR"] = _storage_dir
os.environ["ADMIN_ALLOWLIST_EMAILS"] = "admin@example.com"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from httpx import ASGITransport, AsyncClient

from tourney.models.base import async_session_factory, engine, init_db
from tourney.games import registration_model
from tourney.services.query_cache import query_cache
from tourney.services.storage import screenshot_storage
from web.api.main import app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "s3cure-pass"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64

VALID_FIELDS = {
    "solo": {
        "team_leader_name": "Rahul Sharma",
        "team_leader_id": "5123456789",
        "whatsapp": "9876543210",
        "transaction_id": "TXN12345678",
    },
    "duo": {
        "team_name": "Night Owls",
        "team_leader_name": "Rahul Sharma",
        "team_leader_id": "5123456789",
        "whatsapp": "9876543210",
        "player2_name": "Amit Kumar",
        "player2_id": "5234567890",
        "transaction_id": "TXN12345678",
    },
    "squad": {
        "team_name": "Alpha Wolves",
        "team_leader_name": "Rahul Sharma",
        "team_leader_id": "5123456789",
        "whatsapp": "9876543210",
        "player2_name": "Amit Kumar",
        "player2_id": "5234567890",
        "player3_name": "Vikram Singh",
        "player3_id": "5345678901",
        "player4_name": "Arjun Mehta",
        "player4_id": "5456789012",
        "transaction_id": "TXN12345678",
    },
}


def valid_fields(tournament_type: str, **overrides) -> dict:
    return {**VALID_FIELDS[tournament_type], **overrides}


def screenshot_files(name: str = "payment.png", data: bytes = PNG_BYTES, content_type: str = "image/png") -> dict:
    return {"payment_screenshot": (name, data, content_type)}


async def seed_registrations(game: str, tournament_type: str, status: str, count: int) -> list[str]:
    """Insert rows directly, bypassing forms and storage."""
    model = registration_model(game)
    ids = []
    async with async_session_factory() as session:
        for i in range(count):
            reg = model(
                tournament_type=tournament_type,
                team_leader_name="Seed Player",
                team_leader_id=f"9{i:08d}",
                team_leader_whatsapp="9876543210",
                payment_screenshot_url=f"seed_{i}.png",
                transaction_id=f"SEEDTXN{i:05d}",
                status=status,
            )
            session.add(reg)
            await session.flush()
            ids.append(reg.id)
        await session.commit()
    return ids


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
async def _init_db():
    """Fresh in-memory database, cache and bucket per test (ASGI lifespan doesn't run with httpx)."""
    await init_db()
    query_cache.clear()
    yield
    query_cache.clear()
    # Closing the only connection drops the in-memory database
    await engine.dispose()
    shutil.rmtree(screenshot_storage.bucket_dir, ignore_errors=True)


@pytest.fixture
async def client():
    """Async HTTP client for testing the API."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def auth_headers(client):
    """Sign up the allow-listed admin, log in and return Authorization headers."""
    r = await client.post(
        "/api/auth/signup",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD, "confirm_password": ADMIN_PASSWORD},
    )
    assert r.status_code == 201, f"Signup failed: {r.text}"
    r = await client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert r.status_code == 200, f"Login failed: {r.text}"
    token = r.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}
