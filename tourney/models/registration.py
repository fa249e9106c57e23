"""Registration models - one table per game, identical shape."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from tourney.models.base import Base

TOURNAMENT_TYPES = ("solo", "duo", "squad")
REGISTRATION_STATUSES = ("pending", "approved", "rejected")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class RegistrationColumns:
    """Columns shared by every game's registration table."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    tournament_type: Mapped[str] = mapped_column(String(8), nullable=False, index=True)
    team_name: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)  # duo/squad only
    team_leader_name: Mapped[str] = mapped_column(String(50), nullable=False)
    team_leader_id: Mapped[str] = mapped_column(String(20), nullable=False)
    team_leader_whatsapp: Mapped[str] = mapped_column(String(10), nullable=False)
    player2_name: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    player2_id: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    player3_name: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    player3_id: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    player4_name: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    player4_id: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    payment_screenshot_url: Mapped[str] = mapped_column(String(512), nullable=False)  # storage key or full URL
    transaction_id: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending", index=True)
    slot_number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # never assigned
    youtube_streaming_vote: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    @declared_attr.directive
    def __table_args__(cls):
        types = ", ".join(f"'{t}'" for t in TOURNAMENT_TYPES)
        statuses = ", ".join(f"'{s}'" for s in REGISTRATION_STATUSES)
        return (
            CheckConstraint(f"tournament_type IN ({types})", name=f"ck_{cls.__tablename__}_type"),
            CheckConstraint(f"status IN ({statuses})", name=f"ck_{cls.__tablename__}_status"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "tournament_type": self.tournament_type,
            "team_name": self.team_name,
            "team_leader_name": self.team_leader_name,
            "team_leader_id": self.team_leader_id,
            "team_leader_whatsapp": self.team_leader_whatsapp,
            "player2_name": self.player2_name,
            "player2_id": self.player2_id,
            "player3_name": self.player3_name,
            "player3_id": self.player3_id,
            "player4_name": self.player4_name,
            "player4_id": self.player4_id,
            "payment_screenshot_url": self.payment_screenshot_url,
            "transaction_id": self.transaction_id,
            "status": self.status,
            "slot_number": self.slot_number,
            "youtube_streaming_vote": self.youtube_streaming_vote,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class BGMIRegistration(RegistrationColumns, Base):
    """BGMI tournament registration."""

    __tablename__ = "bgmi_registrations"


class FreeFireRegistration(RegistrationColumns, Base):
    """Free Fire tournament registration."""

    __tablename__ = "freefire_registrations"
