"""Admin review routes: dashboard, registration table, detail and approve/reject."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

import config
from tourney.games import BRACKET_SIZES, GAMES
from tourney.models import AdminAccount
from tourney.services import registrations as store
from tourney.services.query_cache import ADMIN_TABLE_POLL_MS, cached_registrations, query_cache
from tourney.services.storage import screenshot_storage
from web.api.utils import check_pair, check_status, unwrap_or_raise
from web.auth import require_admin

router = APIRouter(prefix="/api/admin", tags=["admin"])

_SHORT_NAMES = {"bgmi": "BGMI", "freefire": "FF"}


def _row_actions(reg: dict) -> list[str]:
    """Only pending rows can be decided."""
    if reg["status"] == "pending":
        return ["view", "approve", "reject"]
    return ["view"]


def _table_row(reg: dict) -> dict:
    return {
        **reg,
        "display_name": reg["team_name"] or reg["team_leader_name"],
        "actions": _row_actions(reg),
    }


@router.get("/dashboard")
async def dashboard(admin: AdminAccount = Depends(require_admin)):
    """One tab per (game, type) with its status counts."""
    tabs = []
    for game in GAMES:
        for tournament_type in BRACKET_SIZES:
            counts = unwrap_or_raise(await store.count_by_status(game, tournament_type))
            tabs.append({
                "key": f"{game}-{tournament_type}",
                "label": f"{_SHORT_NAMES.get(game, game)} {tournament_type.capitalize()}",
                "game": game,
                "type": tournament_type,
                "counts": counts,
            })
    return {"admin": admin.email, "tabs": tabs}


@router.get("/registrations/{game}/{tournament_type}")
async def list_registrations(
    game: str,
    tournament_type: str,
    status: Optional[str] = None,
    admin: AdminAccount = Depends(require_admin),
):
    """Registrations for a (game, type), newest first."""
    check_pair(game, tournament_type)
    check_status(status)
    rows = unwrap_or_raise(await cached_registrations(game, tournament_type, status))
    return {
        "game": game,
        "type": tournament_type,
        "registrations": [_table_row(r) for r in rows],
        "poll_interval_ms": ADMIN_TABLE_POLL_MS,
    }


@router.get("/registrations/{game}/{tournament_type}/{registration_id}")
async def get_registration_detail(
    game: str,
    tournament_type: str,
    registration_id: str,
    admin: AdminAccount = Depends(require_admin),
):
    """Full registration with a fresh signed screenshot URL (raw URLs pass through)."""
    check_pair(game, tournament_type)
    reg = unwrap_or_raise(await store.get_registration(game, registration_id))
    if reg["tournament_type"] != tournament_type:
        raise HTTPException(404, "Registration not found")
    screenshot = screenshot_storage.resolve_display_url(reg["payment_screenshot_url"], config.SIGNED_URL_TTL_SECONDS)
    detail = _table_row(reg)
    detail["screenshot_url"] = screenshot.value if screenshot.ok else None
    detail["screenshot_error"] = None if screenshot.ok else screenshot.error.message
    return detail


async def _decide(game: str, tournament_type: str, registration_id: str, new_status: str) -> dict:
    check_pair(game, tournament_type)
    reg = unwrap_or_raise(await store.get_registration(game, registration_id))
    if reg["tournament_type"] != tournament_type:
        raise HTTPException(404, "Registration not found")
    updated = unwrap_or_raise(await store.update_status(game, registration_id, new_status))
    query_cache.invalidate_registration(game, tournament_type)
    return {"message": f"Registration {new_status} successfully", "registration": _table_row(updated)}


@router.post("/registrations/{game}/{tournament_type}/{registration_id}/approve")
async def approve_registration(
    game: str,
    tournament_type: str,
    registration_id: str,
    admin: AdminAccount = Depends(require_admin),
):
    return await _decide(game, tournament_type, registration_id, "approved")


@router.post("/registrations/{game}/{tournament_type}/{registration_id}/reject")
async def reject_registration(
    game: str,
    tournament_type: str,
    registration_id: str,
    admin: AdminAccount = Depends(require_admin),
):
    return await _decide(game, tournament_type, registration_id, "rejected")
