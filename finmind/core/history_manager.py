"""
Conversation history manager.

Cache-aside memory over two tiers:
  - HistoryCache (Redis list): read accelerator, may lag or vanish
  - ConversationLog (SQL): authoritative, permanent

Reads try the cache first and fall back to the durable log, backfilling the
cache on the way out unless a concurrent save refilled it first. Writes go
to the durable log and the cache independently; a cache failure is only
logged, a durable failure is raised after the cache append has been
attempted.

Dependencies: finmind.boundary.cache, finmind.core.exceptions, finmind.models
System role: Per-user multi-turn memory for the chat orchestrator
"""

import logging
from typing import Protocol

from finmind.boundary.cache.history_cache import HistoryCache
from finmind.core.exceptions import CacheError, InvalidConfig, PersistenceError
from finmind.models.conversation import ConversationTurn

logger = logging.getLogger(__name__)


class DurableLog(Protocol):
    """Authoritative conversation store."""

    async def append(self, turn: ConversationTurn) -> None:
        ...

    async def recent(self, user_id: str, limit: int) -> list[ConversationTurn]:
        """Most recent turns, newest first."""
        ...


class ConversationHistoryManager:
    """Cache-aside conversation history with durable fallback."""

    def __init__(self, cache: HistoryCache, log: DurableLog, max_rounds: int = 3) -> None:
        """
        Initialize history manager.

        Args:
            cache: Redis history cache
            log: Durable conversation log
            max_rounds: Maximum turns kept in cache and returned by get()

        Raises:
            InvalidConfig: If max_rounds is not positive
        """
        if max_rounds < 1:
            raise InvalidConfig("max_rounds must be at least 1", {"max_rounds": max_rounds})
        self._cache = cache
        self._log = log
        self.max_rounds = max_rounds

    async def get(self, user_id: str) -> list[ConversationTurn]:
        """
        Return the most recent turns for a user, oldest first.

        Args:
            user_id: Conversation owner

        Returns:
            list[ConversationTurn]: At most max_rounds turns in chronological order

        Raises:
            PersistenceError: If the cache missed and the durable log failed
        """
        try:
            cached = await self._cache.read(user_id)
        except CacheError as e:
            logger.warning(
                f"{__name__}:get - Cache read failed, falling back to durable log: {e}",
                extra={"user_id": user_id},
            )
            cached = []

        if cached:
            try:
                await self._cache.touch(user_id)
            except CacheError as e:
                logger.warning(f"{__name__}:get - Expiry refresh failed: {e}", extra={"user_id": user_id})
            logger.debug(f"{__name__}:get - Cache hit ({len(cached)} turns)", extra={"user_id": user_id})
            return cached[-self.max_rounds :]

        newest_first = await self._log.recent(user_id, self.max_rounds)
        turns = list(reversed(newest_first))

        if turns:
            try:
                written = await self._cache.backfill(user_id, turns)
            except CacheError as e:
                logger.warning(f"{__name__}:get - Cache backfill failed: {e}", extra={"user_id": user_id})
            else:
                if written:
                    logger.info(
                        f"{__name__}:get - Backfilled cache with {len(turns)} turns",
                        extra={"user_id": user_id},
                    )
                else:
                    logger.debug(
                        f"{__name__}:get - Cache filled concurrently, backfill skipped",
                        extra={"user_id": user_id},
                    )
        return turns

    async def save(self, user_id: str, question: str, answer: str) -> ConversationTurn:
        """
        Record one exchange in both tiers.

        Args:
            user_id: Conversation owner
            question: User question
            answer: Full generated answer

        Returns:
            ConversationTurn: The recorded turn

        Raises:
            PersistenceError: If the durable write failed (the cache append still ran)
        """
        turn = ConversationTurn(user_id=user_id, question=question, answer=answer)

        persistence_error: PersistenceError | None = None
        try:
            await self._log.append(turn)
        except PersistenceError as e:
            logger.error(f"{__name__}:save - Durable write failed: {e}", extra={"user_id": user_id})
            persistence_error = e

        try:
            await self._cache.append(turn, max_len=self.max_rounds)
        except CacheError as e:
            logger.warning(f"{__name__}:save - Cache append failed: {e}", extra={"user_id": user_id})

        if persistence_error is not None:
            raise persistence_error
        return turn

    async def clear_cache(self, user_id: str) -> None:
        """Evict a user's cached history; the durable copy is untouched."""
        try:
            await self._cache.clear(user_id)
        except CacheError as e:
            logger.warning(f"{__name__}:clear_cache - Cache clear failed: {e}", extra={"user_id": user_id})
