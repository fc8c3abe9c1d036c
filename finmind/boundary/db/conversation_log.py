"""
Durable conversation log.

Session-per-operation wrapper over the conversation turn table. Opening a
fresh session for every call keeps the post-stream write independent of
any request-scoped session.

Dependencies: sqlalchemy, finmind.boundary.db.CRUD, finmind.models
System role: Authoritative store behind the history cache
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from finmind.boundary.db.CRUD.conversation_turn_crud import conversation_turn_crud
from finmind.core.exceptions import PersistenceError
from finmind.models.conversation import ConversationTurn

logger = logging.getLogger(__name__)


class ConversationLog:
    """Append-only durable store of conversation turns."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Initialize conversation log.

        Args:
            session_factory: Async session factory bound to the database
        """
        self._session_factory = session_factory

    async def append(self, turn: ConversationTurn) -> None:
        """
        Insert one turn and commit.

        Args:
            turn: Exchange to persist

        Raises:
            PersistenceError: If the insert or commit fails
        """
        try:
            async with self._session_factory() as session:
                await conversation_turn_crud.create(
                    session,
                    user_id=turn.user_id,
                    question=turn.question,
                    answer=turn.answer,
                    created_at=turn.created_at,
                )
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:append - Insert failed: {type(e).__name__}: {e}")
            raise PersistenceError(
                "Failed to save conversation turn",
                user_id=turn.user_id,
                details={"error": str(e)},
            ) from e

    async def recent(self, user_id: str, limit: int) -> list[ConversationTurn]:
        """
        Load a user's most recent turns, newest first.

        Args:
            user_id: Conversation owner
            limit: Maximum turns returned

        Returns:
            list[ConversationTurn]: Turns ordered newest to oldest

        Raises:
            PersistenceError: If the query fails
        """
        try:
            async with self._session_factory() as session:
                rows = await conversation_turn_crud.list_recent_for_user(session, user_id, limit)
                return [ConversationTurn.model_validate(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:recent - Query failed: {type(e).__name__}: {e}")
            raise PersistenceError(
                "Failed to load conversation turns",
                user_id=user_id,
                details={"error": str(e)},
            ) from e
