"""Registration form schemas.

Each tournament type has a schema: solo is the base, duo extends it with a team
name and one extra player, squad extends duo with two more players. Values are
trimmed before the rules run. There is no cross-submission validation (e.g.
duplicate game IDs are accepted).
"""
from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

NAME_RE = re.compile(r"^[a-zA-Z\s]+$")
TEAM_NAME_RE = re.compile(r"^[a-zA-Z0-9\s]+$")
DIGITS_RE = re.compile(r"^[0-9]+$")
WHATSAPP_RE = re.compile(r"^[6-9][0-9]{9}$")  # Indian mobile number


def _check_length(value: str, low: int, high: int, label: str) -> None:
    if len(value) < low:
        raise ValueError(f"{label} must be at least {low} characters")
    if len(value) > high:
        raise ValueError(f"{label} must be less than {high} characters")


def check_player_name(value: str) -> str:
    _check_length(value, 3, 50, "Name")
    if not NAME_RE.match(value):
        raise ValueError("Name should only contain letters")
    return value


def check_game_id(value: str) -> str:
    _check_length(value, 5, 20, "Game ID")
    return value


def check_leader_game_id(value: str) -> str:
    check_game_id(value)
    if not DIGITS_RE.match(value):
        raise ValueError("Game ID must contain only numbers")
    return value


def check_whatsapp(value: str) -> str:
    if not WHATSAPP_RE.match(value):
        raise ValueError("Please enter valid 10-digit Indian mobile number")
    return value


def check_transaction_id(value: str) -> str:
    _check_length(value, 8, 50, "Transaction ID")
    return value


def check_team_name(value: str) -> str:
    _check_length(value, 3, 30, "Team name")
    if not TEAM_NAME_RE.match(value):
        raise ValueError("Team name should only contain letters and numbers")
    return value


class SoloEntry(BaseModel):
    """Team leader block; the whole solo form."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    team_leader_name: str
    team_leader_id: str
    whatsapp: str
    transaction_id: str
    youtube_vote: bool = True

    @field_validator("team_leader_name")
    @classmethod
    def validate_leader_name(cls, v: str) -> str:
        return check_player_name(v)

    @field_validator("team_leader_id")
    @classmethod
    def validate_leader_id(cls, v: str) -> str:
        return check_leader_game_id(v)

    @field_validator("whatsapp")
    @classmethod
    def validate_whatsapp(cls, v: str) -> str:
        return check_whatsapp(v)

    @field_validator("transaction_id")
    @classmethod
    def validate_transaction_id(cls, v: str) -> str:
        return check_transaction_id(v)

    def players(self) -> list[tuple[int, str, str]]:
        """Extra players as (slot, name, game_id); none for solo."""
        return []

    def to_record(self, tournament_type: str) -> dict:
        """Column values for a new registration row (without the screenshot key)."""
        record = {
            "tournament_type": tournament_type,
            "team_name": getattr(self, "team_name", None),
            "team_leader_name": self.team_leader_name,
            "team_leader_id": self.team_leader_id,
            "team_leader_whatsapp": self.whatsapp,
            "transaction_id": self.transaction_id,
            "youtube_streaming_vote": self.youtube_vote,
        }
        for slot in (2, 3, 4):
            record[f"player{slot}_name"] = None
            record[f"player{slot}_id"] = None
        for slot, name, game_id in self.players():
            record[f"player{slot}_name"] = name
            record[f"player{slot}_id"] = game_id
        return record


class DuoEntry(SoloEntry):
    team_name: str
    player2_name: str
    player2_id: str

    @field_validator("team_name")
    @classmethod
    def validate_team_name(cls, v: str) -> str:
        return check_team_name(v)

    @field_validator("player2_name")
    @classmethod
    def validate_player2_name(cls, v: str) -> str:
        return check_player_name(v)

    @field_validator("player2_id")
    @classmethod
    def validate_player2_id(cls, v: str) -> str:
        return check_game_id(v)

    def players(self) -> list[tuple[int, str, str]]:
        return [(2, self.player2_name, self.player2_id)]


class SquadEntry(DuoEntry):
    player3_name: str
    player3_id: str
    player4_name: str
    player4_id: str

    @field_validator("player3_name", "player4_name")
    @classmethod
    def validate_extra_names(cls, v: str) -> str:
        return check_player_name(v)

    @field_validator("player3_id", "player4_id")
    @classmethod
    def validate_extra_ids(cls, v: str) -> str:
        return check_game_id(v)

    def players(self) -> list[tuple[int, str, str]]:
        return super().players() + [
            (3, self.player3_name, self.player3_id),
            (4, self.player4_name, self.player4_id),
        ]


# Both games share the same schemas
ENTRY_SCHEMAS: dict[str, type[SoloEntry]] = {
    "solo": SoloEntry,
    "duo": DuoEntry,
    "squad": SquadEntry,
}


def field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Flatten a pydantic ValidationError into {field: [messages]}."""
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err.get("loc") else "__root__"
        if err["type"] == "missing":
            message = "This field is required"
        elif err["type"] == "value_error" and "error" in err.get("ctx", {}):
            message = str(err["ctx"]["error"])
        else:
            message = err["msg"]
        errors.setdefault(field, []).append(message)
    return errors


def validate_entry(tournament_type: str, data: dict) -> tuple[Optional[SoloEntry], dict[str, list[str]]]:
    """Validate raw form input. Returns (entry, {}) on success or (None, errors)."""
    schema = ENTRY_SCHEMAS[tournament_type]
    try:
        return schema.model_validate(data), {}
    except ValidationError as e:
        return None, field_errors(e)
