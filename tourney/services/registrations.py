"""Registration data access: counts, listings, inserts and status transitions.

Every function returns a Result; database errors are logged and returned as
failures rather than raised.
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError

from tourney.games import registration_model, slot_limit
from tourney.models.base import async_session_factory
from tourney.models.registration import REGISTRATION_STATUSES
from tourney.services.results import CONFLICT, DATABASE, INVALID, NOT_FOUND, Result

logger = logging.getLogger("tourney.store")

# Only a pending registration can be decided, and only once
DECISION_STATUSES = ("approved", "rejected")


async def count_registrations(game: str, tournament_type: str, status: str = "approved") -> Result[int]:
    """Exact count of registrations for (game, tournament_type) with status."""
    model = registration_model(game)
    try:
        async with async_session_factory() as session:
            result = await session.execute(
                select(func.count())
                .select_from(model)
                .where(model.tournament_type == tournament_type, model.status == status)
            )
            return Result.success(result.scalar_one())
    except SQLAlchemyError as e:
        logger.exception("Failed to count %s %s registrations", game, tournament_type)
        return Result.failure(DATABASE, f"Failed to fetch registration count: {e}")


async def count_by_status(game: str, tournament_type: str) -> Result[dict[str, int]]:
    """Counts for every status of (game, tournament_type), zero-filled."""
    model = registration_model(game)
    try:
        async with async_session_factory() as session:
            result = await session.execute(
                select(model.status, func.count())
                .where(model.tournament_type == tournament_type)
                .group_by(model.status)
            )
            counts = {s: 0 for s in REGISTRATION_STATUSES}
            for status, n in result.fetchall():
                counts[status] = n
            return Result.success(counts)
    except SQLAlchemyError as e:
        logger.exception("Failed to count %s %s registrations by status", game, tournament_type)
        return Result.failure(DATABASE, f"Failed to fetch registration counts: {e}")


async def list_registrations(
    game: str, tournament_type: str, status: Optional[str] = None
) -> Result[list[dict]]:
    """Registrations for (game, tournament_type), newest first, optionally filtered by status."""
    model = registration_model(game)
    query = select(model).where(model.tournament_type == tournament_type)
    if status:
        query = query.where(model.status == status)
    query = query.order_by(model.created_at.desc())
    try:
        async with async_session_factory() as session:
            result = await session.execute(query)
            return Result.success([r.to_dict() for r in result.scalars().all()])
    except SQLAlchemyError as e:
        logger.exception("Failed to list %s %s registrations", game, tournament_type)
        return Result.failure(DATABASE, f"Failed to fetch registrations: {e}")


async def get_registration(game: str, registration_id: str) -> Result[dict]:
    model = registration_model(game)
    try:
        async with async_session_factory() as session:
            reg = await session.get(model, registration_id)
    except SQLAlchemyError as e:
        logger.exception("Failed to load %s registration %s", game, registration_id)
        return Result.failure(DATABASE, f"Failed to fetch registration: {e}")
    if not reg:
        return Result.failure(NOT_FOUND, "Registration not found")
    return Result.success(reg.to_dict())


async def insert_registration(game: str, record: dict) -> Result[dict]:
    """Write a new pending registration. record must already carry payment_screenshot_url."""
    if not record.get("payment_screenshot_url"):
        return Result.failure(INVALID, "Payment screenshot is required")
    model = registration_model(game)
    values = {k: v for k, v in record.items() if k not in ("id", "status", "slot_number", "created_at", "updated_at")}
    try:
        async with async_session_factory() as session:
            reg = model(**values, status="pending")
            session.add(reg)
            await session.commit()
            await session.refresh(reg)
            logger.info("Created %s %s registration %s", game, reg.tournament_type, reg.id)
            return Result.success(reg.to_dict())
    except SQLAlchemyError as e:
        logger.exception("Failed to create %s registration", game)
        return Result.failure(DATABASE, f"Failed to create registration: {e}")


async def update_status(game: str, registration_id: str, new_status: str) -> Result[dict]:
    """Move a pending registration to approved or rejected.

    The write is conditional on the row still being pending, so a second decision
    (double approval, approve then reject, concurrent admins) fails with a conflict
    instead of overwriting the first.
    """
    if new_status not in DECISION_STATUSES:
        return Result.failure(INVALID, f"Invalid status: {new_status}")
    model = registration_model(game)
    try:
        async with async_session_factory() as session:
            result = await session.execute(
                update(model)
                .where(model.id == registration_id, model.status == "pending")
                .values(status=new_status)
            )
            await session.commit()
            if result.rowcount == 0:
                reg = await session.get(model, registration_id)
                if not reg:
                    return Result.failure(NOT_FOUND, "Registration not found")
                return Result.failure(CONFLICT, f"Registration is already {reg.status}")
            reg = await session.get(model, registration_id, populate_existing=True)
            logger.info("%s registration %s -> %s", game, registration_id, new_status)
            return Result.success(reg.to_dict())
    except SQLAlchemyError as e:
        logger.exception("Failed to update %s registration %s", game, registration_id)
        return Result.failure(DATABASE, f"Failed to update registration status: {e}")


async def has_slots_available(game: str, tournament_type: str) -> Result[bool]:
    counted = await count_registrations(game, tournament_type, "approved")
    if not counted.ok:
        return Result(error=counted.error)
    return Result.success(counted.value < slot_limit(game, tournament_type))


def available_slots(game: str, tournament_type: str, approved_count: int) -> int:
    """Capacity minus approved registrations. Not clamped: may go negative."""
    return slot_limit(game, tournament_type) - approved_count
