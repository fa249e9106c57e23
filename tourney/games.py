"""Game configuration: capacity table, prizes and storage table per game."""
from __future__ import annotations

from typing import Optional

from tourney.models import BGMIRegistration, FreeFireRegistration
from tourney.models.registration import RegistrationColumns

# Players per team for each tournament type
BRACKET_SIZES = {
    "solo": 1,
    "duo": 2,
    "squad": 4,
}

# Extra player slots (beyond the team leader) populated for each tournament type
PLAYER_SLOTS = {
    "solo": (),
    "duo": (2,),
    "squad": (2, 3, 4),
}

ENTRY_FEES = {
    "solo": 20,
    "duo": 40,
    "squad": 80,
}

GAMES = {
    "bgmi": {
        "key": "bgmi",
        "title": "BGMI Tournament",
        "name": "BGMI",
        "description": "Battle Grounds Mobile India",
        "path": "/bgmi",
        "banner": "bgmi-banner.jpg",
        "payment_qr": "pubg_qr.jpg",
        "model": BGMIRegistration,
        "capacity": {"solo": 100, "duo": 50, "squad": 25},
        "winner_prize": 350,
        "runner_up_prize": 250,
        "per_kill_reward": 9,
    },
    "freefire": {
        "key": "freefire",
        "title": "Free Fire Tournament",
        "name": "Free Fire",
        "description": "Garena Free Fire",
        "path": "/freefire",
        "banner": "freefire-banner.jpg",
        "payment_qr": "freefire_qr.jpg",
        "model": FreeFireRegistration,
        "capacity": {"solo": 48, "duo": 24, "squad": 12},
        "winner_prize": 350,
        "runner_up_prize": 150,
        "per_kill_reward": 5,
    },
}


def get_game(game: str) -> Optional[dict]:
    return GAMES.get(game)


def is_valid_pair(game: str, tournament_type: str) -> bool:
    return game in GAMES and tournament_type in BRACKET_SIZES


def registration_model(game: str) -> type[RegistrationColumns]:
    """Return the model mapped to this game's registration table."""
    return GAMES[game]["model"]


def slot_limit(game: str, tournament_type: str) -> int:
    """Maximum approved registrations for (game, tournament_type). Static lookup."""
    return GAMES[game]["capacity"][tournament_type]


def slot_unit(tournament_type: str) -> str:
    """Solo capacity is counted in players, team modes in teams."""
    return "players" if tournament_type == "solo" else "teams"


def bracket_info(game: str, tournament_type: str) -> dict:
    """Static tournament data for one bracket (no live counts)."""
    g = GAMES[game]
    return {
        "game": game,
        "type": tournament_type,
        "player_count": BRACKET_SIZES[tournament_type],
        "max_slots": slot_limit(game, tournament_type),
        "slot_unit": slot_unit(tournament_type),
        "entry_fee": ENTRY_FEES[tournament_type],
        "winner_prize": g["winner_prize"],
        "runner_up_prize": g["runner_up_prize"],
        "per_kill_reward": g["per_kill_reward"],
    }
