"""
Conversation turn CRUD operations.

Dependencies: sqlalchemy, finmind.boundary.db.models
System role: Queries over the durable conversation log
"""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from finmind.boundary.db.CRUD.base_crud import BaseCRUD
from finmind.boundary.db.models.conversation_turn_model import ConversationTurnModel


class ConversationTurnCRUD(BaseCRUD[ConversationTurnModel]):
    """CRUD operations for conversation turns."""

    def __init__(self) -> None:
        super().__init__(ConversationTurnModel)

    async def list_recent_for_user(
        self,
        session: AsyncSession,
        user_id: str,
        limit: int,
    ) -> Sequence[ConversationTurnModel]:
        """
        Retrieve a user's most recent turns, newest first.

        Args:
            session: Async database session
            user_id: Conversation owner
            limit: Maximum rows returned

        Returns:
            Sequence of turns ordered by created_at (then id) descending
        """
        stmt = (
            select(ConversationTurnModel)
            .where(ConversationTurnModel.user_id == user_id)
            .order_by(ConversationTurnModel.created_at.desc(), ConversationTurnModel.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


conversation_turn_crud = ConversationTurnCRUD()
