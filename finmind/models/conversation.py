"""
Conversation turn model.

One question/answer exchange. The durable log holds the authoritative copy;
the Redis history list holds a JSON copy of the most recent turns.

Dependencies: pydantic
System role: Unit of conversational memory
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class ConversationTurn(BaseModel):
    """Single question/answer round for a user."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    user_id: str = Field(description="Owner of the conversation")
    question: str = Field(description="User question as asked")
    answer: str = Field(description="Full generated answer")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
