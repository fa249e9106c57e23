"""In-process query cache keyed by (kind, game, tournament_type[, status]).

Views poll on an interval advertised with each response; entries younger than
the kind's stale threshold are served from memory. Mutations invalidate every
key of the affected (game, tournament_type) so all views converge on their next
poll.
"""
from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable, Optional

from tourney.services import registrations as store
from tourney.services.results import Result

logger = logging.getLogger("tourney.cache")

COUNT = "count"
REGISTRATIONS = "registrations"
SLOTS_AVAILABLE = "slots-available"

# Seconds before a cached entry is refetched
STALE_SECONDS = {
    COUNT: 3.0,
    SLOTS_AVAILABLE: 3.0,
    REGISTRATIONS: 0.0,
}

# Client polling intervals (milliseconds)
POLL_INTERVALS_MS = {
    COUNT: 5000,
    SLOTS_AVAILABLE: 5000,
    REGISTRATIONS: 10000,
}
ADMIN_TABLE_POLL_MS = 5000


def count_key(game: str, tournament_type: str, status: str = "approved") -> tuple:
    return (COUNT, game, tournament_type, status)


def registrations_key(game: str, tournament_type: str, status: Optional[str] = None) -> tuple:
    return (REGISTRATIONS, game, tournament_type, status)


def slots_key(game: str, tournament_type: str) -> tuple:
    return (SLOTS_AVAILABLE, game, tournament_type)


class QueryCache:
    """Successful results only; failures are returned but never stored."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[tuple, tuple[float, object]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: tuple) -> bool:
        return key in self._entries

    async def fetch(self, key: tuple, loader: Callable[[], Awaitable[Result]]) -> Result:
        stale_after = STALE_SECONDS.get(key[0], 0.0)
        entry = self._entries.get(key)
        now = self._clock()
        if entry is not None and now - entry[0] < stale_after:
            return Result.success(entry[1])
        result = await loader()
        if result.ok:
            self._entries[key] = (self._clock(), result.value)
        else:
            self._entries.pop(key, None)
        return result

    def invalidate(self, prefix: tuple) -> int:
        """Drop every key starting with prefix. Returns how many were dropped."""
        n = len(prefix)
        doomed = [k for k in self._entries if k[:n] == prefix]
        for k in doomed:
            del self._entries[k]
        return len(doomed)

    def invalidate_registration(self, game: str, tournament_type: str) -> int:
        """Fan out after an insert or status change: list, counts and slot availability."""
        dropped = 0
        for kind in (REGISTRATIONS, COUNT, SLOTS_AVAILABLE):
            dropped += self.invalidate((kind, game, tournament_type))
        logger.debug("Invalidated %d cache entries for %s %s", dropped, game, tournament_type)
        return dropped

    def clear(self) -> None:
        self._entries.clear()


query_cache = QueryCache()


async def cached_count(game: str, tournament_type: str, status: str = "approved") -> Result[int]:
    return await query_cache.fetch(
        count_key(game, tournament_type, status),
        lambda: store.count_registrations(game, tournament_type, status),
    )


async def cached_registrations(
    game: str, tournament_type: str, status: Optional[str] = None
) -> Result[list[dict]]:
    return await query_cache.fetch(
        registrations_key(game, tournament_type, status),
        lambda: store.list_registrations(game, tournament_type, status),
    )


async def cached_slots_available(game: str, tournament_type: str) -> Result[bool]:
    return await query_cache.fetch(
        slots_key(game, tournament_type),
        lambda: store.has_slots_available(game, tournament_type),
    )
