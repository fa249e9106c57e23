"""Database models."""
from tourney.models.base import Base, get_async_session, init_db
from tourney.models.registration import (
    REGISTRATION_STATUSES,
    TOURNAMENT_TYPES,
    BGMIRegistration,
    FreeFireRegistration,
)
from tourney.models.admin import AdminAccount, AdminAllowlistEntry  # noqa: F401 - for metadata

__all__ = [
    "Base",
    "BGMIRegistration",
    "FreeFireRegistration",
    "AdminAccount",
    "AdminAllowlistEntry",
    "REGISTRATION_STATUSES",
    "TOURNAMENT_TYPES",
    "get_async_session",
    "init_db",
]
