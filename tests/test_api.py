"""Tests for public pages, game info and the slot panel."""
import pytest

from conftest import seed_registrations


@pytest.mark.asyncio
async def test_health(client):
    """Health endpoint returns ok."""
    r = await client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_navigation_links(client):
    r = await client.get("/api/navigation")
    assert r.status_code == 200
    paths = [link["path"] for link in r.json()["links"]]
    assert paths == ["/", "/bgmi", "/freefire", "/contact", "/disclaimer"]


@pytest.mark.asyncio
async def test_static_pages(client):
    r = await client.get("/api/pages/landing")
    assert r.status_code == 200
    assert {g["path"] for g in r.json()["games"]} == {"/bgmi", "/freefire"}

    r = await client.get("/api/pages/contact")
    assert r.status_code == 200
    assert len(r.json()["faq"]) > 0

    r = await client.get("/api/pages/disclaimer")
    assert r.status_code == 200
    assert r.json()["sections"][0]["title"] == "General Disclaimer"


@pytest.mark.asyncio
async def test_contact_message_accepted(client):
    r = await client.post(
        "/api/contact",
        json={
            "name": "Priya",
            "email": "priya@example.com",
            "phone": "9876543210",
            "subject": "Room details",
            "message": "When will the room ID be shared?",
        },
    )
    assert r.status_code == 200
    assert r.json()["ok"] is True


@pytest.mark.asyncio
async def test_contact_message_invalid(client):
    r = await client.post(
        "/api/contact",
        json={"name": "P", "email": "nope", "phone": "123", "subject": "Hi", "message": "short"},
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_list_games(client):
    r = await client.get("/api/games")
    assert r.status_code == 200
    assert [g["key"] for g in r.json()] == ["bgmi", "freefire"]


@pytest.mark.asyncio
async def test_game_page_brackets(client):
    r = await client.get("/api/games/freefire")
    assert r.status_code == 200
    brackets = {b["type"]: b for b in r.json()["brackets"]}
    assert brackets["solo"]["max_slots"] == 48
    assert brackets["squad"]["max_slots"] == 12
    assert brackets["duo"]["entry_fee"] == 40
    assert brackets["squad"]["runner_up_prize"] == 150
    squad_fields = [f["name"] for f in brackets["squad"]["fields"]]
    assert "player4_id" in squad_fields
    solo_fields = [f["name"] for f in brackets["solo"]["fields"]]
    assert "team_name" not in solo_fields
    assert "player2_name" not in solo_fields


@pytest.mark.asyncio
async def test_unknown_game_404(client):
    r = await client.get("/api/games/pubg")
    assert r.status_code == 404
    r = await client.get("/api/games/bgmi/trio/slots")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_slots_empty(client):
    r = await client.get("/api/games/bgmi/duo/slots")
    assert r.status_code == 200
    data = r.json()
    assert data["max_slots"] == 50
    assert data["approved_count"] == 0
    assert data["available_slots"] == 50
    assert data["slot_unit"] == "teams"
    assert data["has_slots_available"] is True
    assert data["poll_interval_ms"] == 5000


@pytest.mark.asyncio
async def test_slots_count_only_approved(client):
    """37 approved BGMI solo players leave 63 of 100 slots; pending and rejected don't count."""
    await seed_registrations("bgmi", "solo", "approved", 37)
    await seed_registrations("bgmi", "solo", "pending", 5)
    await seed_registrations("bgmi", "solo", "rejected", 3)
    r = await client.get("/api/games/bgmi/solo/slots")
    data = r.json()
    assert data["approved_count"] == 37
    assert data["available_slots"] == 63
    assert data["slot_unit"] == "players"
    assert data["fill_percent"] == 37.0


@pytest.mark.asyncio
async def test_slots_not_clamped(client):
    """More approvals than capacity shows negative availability."""
    await seed_registrations("freefire", "squad", "approved", 14)
    r = await client.get("/api/games/freefire/squad/slots")
    data = r.json()
    assert data["available_slots"] == -2
    assert data["has_slots_available"] is False
