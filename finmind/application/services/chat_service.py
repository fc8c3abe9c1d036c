"""
Chat service for streaming and materialized answers.

Wraps the chat orchestrator for the HTTP layer: stream() turns deltas into
StreamEvents and maps failures to error events; answer() collects the whole
reply.

Error events distinguish two failures:
  - GENERATION_FAILED: the answer could not be produced
  - ANSWER_NOT_SAVED: the answer was fully streamed but the durable write failed

Dependencies: finmind.core.orchestrator, finmind.models
System role: Chat service orchestration layer
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import aclosing

from finmind.core.exceptions import PersistenceError, ProviderError
from finmind.core.orchestrator import ChatOrchestrator
from finmind.models.chat import ChatResponse
from finmind.models.streaming import StreamErrorCode, StreamEvent, StreamEventType

logger = logging.getLogger(__name__)


class ChatService:
    """Chat service over the orchestrator."""

    def __init__(self, orchestrator: ChatOrchestrator) -> None:
        """
        Initialize chat service.

        Args:
            orchestrator: Chat orchestrator instance
        """
        self.orchestrator = orchestrator

    async def stream(self, user_id: str, message: str) -> AsyncGenerator[StreamEvent, None]:
        """
        Stream chat events.

        Args:
            user_id: Conversation owner
            message: User question

        Yields:
            StreamEvent: One TOKEN event per delta, then COMPLETE or ERROR
        """
        logger.info(f"{__name__}:stream - START", extra={"user_id": user_id})

        index = 0
        try:
            async with aclosing(self.orchestrator.chat(user_id, message)) as deltas:
                async for delta in deltas:
                    yield StreamEvent(event=StreamEventType.TOKEN, data={"token": delta, "index": index})
                    index += 1
        except ProviderError as e:
            yield StreamEvent(
                event=StreamEventType.ERROR,
                data={"code": StreamErrorCode.GENERATION_FAILED.value, "message": e.message},
            )
            return
        except PersistenceError as e:
            yield StreamEvent(
                event=StreamEventType.ERROR,
                data={"code": StreamErrorCode.ANSWER_NOT_SAVED.value, "message": e.message},
            )
            return

        yield StreamEvent(event=StreamEventType.COMPLETE, data={"token_count": index, "saved": True})
        logger.info(f"{__name__}:stream - END tokens={index}", extra={"user_id": user_id})

    async def answer(self, user_id: str, message: str) -> ChatResponse:
        """
        Produce the full answer in one response.

        Args:
            user_id: Conversation owner
            message: User question

        Returns:
            ChatResponse: Full answer; saved=False when the durable write failed

        Raises:
            ProviderError: If generation fails
        """
        parts: list[str] = []
        saved = True
        try:
            async for delta in self.orchestrator.chat(user_id, message):
                parts.append(delta)
        except PersistenceError as e:
            logger.error(f"{__name__}:answer - Answer generated but not saved: {e}", extra={"user_id": user_id})
            saved = False

        return ChatResponse(user_id=user_id, answer="".join(parts), saved=saved)
