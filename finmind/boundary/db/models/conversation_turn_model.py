"""
Conversation turn ORM model.

Append-only record of one question/answer exchange. Authoritative and
permanent; the Redis history list only mirrors the latest rows.

Dependencies: sqlalchemy, finmind.boundary.db.base
System role: Durable conversation log persistence
"""

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from finmind.boundary.db.base import Base, CreatedAtMixin, IntegerIDMixin


class ConversationTurnModel(Base, IntegerIDMixin, CreatedAtMixin):
    """
    Conversation turn ORM model.

    Attributes:
        id: Auto-increment primary key
        user_id: Conversation owner
        question: User question
        answer: Full generated answer
        created_at: Exchange timestamp (UTC)
    """

    __tablename__ = "conversation_turn"
    __table_args__ = (Index("ix_conversation_turn_user_created", "user_id", "created_at"),)

    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
