"""Shared API utilities."""

from fastapi import HTTPException

from tourney.games import GAMES, is_valid_pair
from tourney.models import REGISTRATION_STATUSES
from tourney.services.results import CONFLICT, DATABASE, INVALID, NOT_FOUND, STORAGE, Result

ERROR_STATUS = {
    NOT_FOUND: 404,
    CONFLICT: 409,
    INVALID: 400,
    STORAGE: 502,
    DATABASE: 503,
}


def unwrap_or_raise(result: Result):
    """Return the result's value, or raise HTTPException mapped from its error code."""
    if result.ok:
        return result.value
    raise HTTPException(ERROR_STATUS.get(result.error.code, 500), result.error.message)


def check_game(game: str) -> None:
    if game not in GAMES:
        raise HTTPException(404, "Game not found")


def check_pair(game: str, tournament_type: str) -> None:
    if not is_valid_pair(game, tournament_type):
        raise HTTPException(404, "Tournament not found")


def check_status(status: str | None) -> None:
    if status is not None and status not in REGISTRATION_STATUSES:
        raise HTTPException(400, "Invalid status filter")
