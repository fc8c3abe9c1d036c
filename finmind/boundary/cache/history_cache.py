"""
Redis-backed conversation history cache.

Per-user list key `{prefix}{user_id}` holding JSON-serialized turns in
insertion (chronological) order with a sliding expiry. Appends push to the
tail and trim from the head inside one MULTI/EXEC pipeline, so concurrent
saves for the same user cannot interleave partial writes. Backfill only
writes a list that is still absent, so it never overwrites a concurrent append.

Dependencies: redis, pydantic, finmind.models, finmind.core.exceptions
System role: Fast tier of cache-aside conversation memory
"""

import logging
from collections.abc import Sequence

from pydantic import ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError, WatchError

from finmind.core.exceptions import CacheError
from finmind.models.conversation import ConversationTurn

logger = logging.getLogger(__name__)


class HistoryCache:
    """Redis list operations for per-user history."""

    def __init__(
        self,
        client: Redis,
        key_prefix: str = "finmind:history:",
        ttl_seconds: int = 3600,
    ) -> None:
        """
        Initialize history cache.

        Args:
            client: redis.asyncio client (decode_responses=True)
            key_prefix: Prefix of per-user list keys
            ttl_seconds: Sliding expiry applied on every read and write
        """
        self._client = client
        self._key_prefix = key_prefix
        self._ttl_seconds = ttl_seconds

    def key(self, user_id: str) -> str:
        return f"{self._key_prefix}{user_id}"

    async def read(self, user_id: str) -> list[ConversationTurn]:
        """
        Read every cached turn for a user in stored order.

        Args:
            user_id: Conversation owner

        Returns:
            list[ConversationTurn]: Cached turns, empty on a miss

        Raises:
            CacheError: If Redis is unreachable or an entry is malformed (the
                malformed list is dropped so the next backfill can rebuild it)
        """
        try:
            entries = await self._client.lrange(self.key(user_id), 0, -1)
        except RedisError as e:
            raise CacheError("Failed to read history list", {"user_id": user_id, "error": str(e)}) from e

        try:
            return [ConversationTurn.model_validate_json(entry) for entry in entries]
        except ValidationError as e:
            await self._drop_corrupt(user_id)
            raise CacheError(
                "Malformed history entry",
                {"user_id": user_id, "error": str(e)},
            ) from e

    async def _drop_corrupt(self, user_id: str) -> None:
        try:
            await self._client.delete(self.key(user_id))
        except RedisError as e:
            logger.warning(f"{__name__}:_drop_corrupt - Could not drop malformed list: {e}", extra={"user_id": user_id})

    async def append(self, turn: ConversationTurn, max_len: int) -> None:
        """
        Push a turn to the tail, keep only the newest max_len entries, refresh expiry.

        Args:
            turn: Turn to append
            max_len: Maximum list length after the append

        Raises:
            CacheError: If the pipeline fails
        """
        key = self.key(turn.user_id)
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.rpush(key, turn.model_dump_json())
                pipe.ltrim(key, -max_len, -1)
                pipe.expire(key, self._ttl_seconds)
                await pipe.execute()
        except RedisError as e:
            raise CacheError(
                "Failed to append history entry",
                {"user_id": turn.user_id, "error": str(e)},
            ) from e

    async def backfill(self, user_id: str, turns: Sequence[ConversationTurn]) -> bool:
        """
        Fill an empty list with the given turns (oldest first) and set expiry.

        The key is WATCHed; if it already exists or changes before EXEC (a
        concurrent save appended to it), nothing is written.

        Args:
            user_id: Conversation owner
            turns: Turns in chronological order

        Returns:
            bool: True if the list was written, False if the backfill was skipped

        Raises:
            CacheError: If Redis is unreachable
        """
        if not turns:
            return False

        key = self.key(user_id)
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                await pipe.watch(key)
                if await pipe.exists(key):
                    return False
                pipe.multi()
                pipe.rpush(key, *(turn.model_dump_json() for turn in turns))
                pipe.expire(key, self._ttl_seconds)
                await pipe.execute()
        except WatchError:
            logger.info(f"{__name__}:backfill - Key changed during backfill, skipped", extra={"user_id": user_id})
            return False
        except RedisError as e:
            raise CacheError("Failed to backfill history list", {"user_id": user_id, "error": str(e)}) from e
        return True

    async def touch(self, user_id: str) -> None:
        """
        Refresh the sliding expiry of a user's list.

        Raises:
            CacheError: If Redis is unreachable
        """
        try:
            await self._client.expire(self.key(user_id), self._ttl_seconds)
        except RedisError as e:
            raise CacheError("Failed to refresh history expiry", {"user_id": user_id, "error": str(e)}) from e

    async def clear(self, user_id: str) -> None:
        """
        Drop a user's cached history.

        Raises:
            CacheError: If Redis is unreachable
        """
        try:
            await self._client.delete(self.key(user_id))
        except RedisError as e:
            raise CacheError("Failed to clear history list", {"user_id": user_id, "error": str(e)}) from e
