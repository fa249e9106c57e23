"""Public tournament routes: game pages, slot availability and registration submission."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

import config
from tourney.games import BRACKET_SIZES, GAMES, PLAYER_SLOTS, bracket_info
from tourney.services import forms
from tourney.services.forms import RegistrationForm
from tourney.services.query_cache import POLL_INTERVALS_MS, cached_count, cached_slots_available
from tourney.services.registrations import available_slots
from web.api.utils import ERROR_STATUS, check_game, check_pair, unwrap_or_raise

logger = logging.getLogger("tourney.web")

router = APIRouter(prefix="/api", tags=["tournaments"])

SCREENSHOT_FIELD = "payment_screenshot"

TOURNAMENT_RULES = [
    "All players must pay the entry fee before registration is confirmed",
    "Upload payment screenshot and transaction ID for verification",
    "Room ID and password will be shared via WhatsApp after approval",
    "Winners must submit match result screenshot to claim prizes",
    "Any form of cheating will result in immediate disqualification",
    "Admin decisions are final and binding",
]


def form_fields(tournament_type: str) -> list[dict]:
    """Inputs rendered for a tournament type, in display order."""
    fields = []
    if tournament_type != "solo":
        fields.append({"name": "team_name", "label": "Team Name", "required": True})
    leader = "Player Name" if tournament_type == "solo" else "Team Leader Name"
    fields += [
        {"name": "team_leader_name", "label": leader, "required": True},
        {"name": "team_leader_id", "label": "Game ID", "required": True},
        {"name": "whatsapp", "label": "WhatsApp Number", "required": True},
    ]
    for slot in PLAYER_SLOTS[tournament_type]:
        fields.append({"name": f"player{slot}_name", "label": f"Player {slot} Name", "required": True})
        fields.append({"name": f"player{slot}_id", "label": f"Player {slot} Game ID", "required": True})
    fields += [
        {"name": "transaction_id", "label": "Transaction ID", "required": True},
        {"name": SCREENSHOT_FIELD, "label": "Payment Screenshot", "required": True, "type": "image"},
        {
            "name": "youtube_vote",
            "label": "Vote for YouTube live streaming",
            "required": False,
            "type": "checkbox",
            "default": True,
            # Sent as a hidden input ahead of the checkbox; the last value wins
            "unchecked_value": "false",
        },
    ]
    return fields


def _game_summary(game: dict) -> dict:
    return {
        "key": game["key"],
        "name": game["name"],
        "title": game["title"],
        "description": game["description"],
        "path": game["path"],
        "banner": game["banner"],
    }


@router.get("/games")
async def list_games():
    return [_game_summary(g) for g in GAMES.values()]


@router.get("/games/{game}")
async def get_game_page(game: str):
    """Tournament page: one tab per bracket with static info and its form layout."""
    check_game(game)
    g = GAMES[game]
    brackets = []
    for tournament_type in BRACKET_SIZES:
        info = bracket_info(game, tournament_type)
        info["fields"] = form_fields(tournament_type)
        brackets.append(info)
    return {
        **_game_summary(g),
        "subtitle": "Compete in Solo, Duo, or Squad modes",
        "payment_qr": g["payment_qr"],
        "rules": TOURNAMENT_RULES,
        "max_screenshot_bytes": config.MAX_SCREENSHOT_BYTES,
        "brackets": brackets,
    }


@router.get("/games/{game}/{tournament_type}/slots")
async def get_slots(game: str, tournament_type: str):
    """Tournament info panel: prizes plus live capacity minus approved registrations."""
    check_pair(game, tournament_type)
    approved = unwrap_or_raise(await cached_count(game, tournament_type, "approved"))
    has_slots = unwrap_or_raise(await cached_slots_available(game, tournament_type))
    info = bracket_info(game, tournament_type)
    available = available_slots(game, tournament_type, approved)
    return {
        **info,
        "approved_count": approved,
        "available_slots": available,
        "fill_percent": round(approved / info["max_slots"] * 100, 1),
        "has_slots_available": has_slots,
        "poll_interval_ms": POLL_INTERVALS_MS["count"],
    }


@router.post("/games/{game}/{tournament_type}/registrations", status_code=201)
async def submit_registration(game: str, tournament_type: str, request: Request):
    """Multipart registration: form fields plus the payment_screenshot image.

    Repeated fields keep their last value, so an unchecked youtube_vote box falls
    back to its hidden "false" input.
    """
    check_pair(game, tournament_type)
    form_data = await request.form()
    form = RegistrationForm(game, tournament_type)
    fields = {}
    upload = None
    for key, value in form_data.multi_items():
        if key == SCREENSHOT_FIELD:
            if isinstance(value, UploadFile) and value.filename:
                upload = value
        elif isinstance(value, str):
            fields[key] = value
    form.set_fields(fields)
    if upload is not None:
        # One byte past the limit is enough for the size check to reject it
        data = await upload.read(config.MAX_SCREENSHOT_BYTES + 1)
        form.stage_screenshot(upload.filename, upload.content_type or "", data)

    outcome = await form.submit()
    if outcome.ok:
        return outcome.registration
    if outcome.kind == forms.INVALID_FIELDS:
        return JSONResponse(status_code=422, content={"detail": outcome.message, "errors": outcome.errors})
    if outcome.kind in (forms.MISSING_SCREENSHOT, forms.BAD_SCREENSHOT):
        return JSONResponse(status_code=400, content={"detail": outcome.message})
    logger.warning("%s %s registration failed (%s): %s", game, tournament_type, outcome.kind, outcome.message)
    return JSONResponse(
        status_code=ERROR_STATUS.get(outcome.error_code, 500),
        content={"detail": f"Registration failed: {outcome.message}"},
    )
