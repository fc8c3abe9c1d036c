"""
Streaming event schemas for server-sent chat.

Defines event types and error codes for the text/event-stream chat endpoint.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel


class StreamEventType(str, Enum):
    """Server-to-client event types for streaming chat."""

    TOKEN = "token"
    COMPLETE = "complete"
    ERROR = "error"


class StreamErrorCode(str, Enum):
    """Distinguishes an answer that was never produced from one that was not saved."""

    GENERATION_FAILED = "GENERATION_FAILED"
    ANSWER_NOT_SAVED = "ANSWER_NOT_SAVED"


class StreamEvent(BaseModel):
    """
    Streaming event model.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: StreamEventType
    data: dict[str, Any]

    def to_sse(self) -> str:
        """Render as one server-sent events frame."""
        payload = json.dumps(self.data, ensure_ascii=False)
        return f"event: {self.event.value}\ndata: {payload}\n\n"
