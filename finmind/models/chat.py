"""
Chat API schemas.

Dependencies: pydantic
System role: Request/response models for the chat endpoints
"""

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Fully materialized chat request body."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1, description="Conversation owner")
    message: str = Field(min_length=1, description="User question")


class ChatResponse(BaseModel):
    """Fully materialized chat answer."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(serialization_alias="userId")
    answer: str
    saved: bool = Field(description="Whether the exchange reached the durable log")
