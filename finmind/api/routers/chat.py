"""Chat API endpoints.

Routes:
- GET /chat/stream?userId=&message= - Stream the answer using Server-Sent Events (SSE)
- POST /chat - Fully materialized answer

Dependencies: finmind.application.services.chat_service
System role: Chat messaging HTTP API with streaming support
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import aclosing

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from finmind.api.deps import get_chat_service
from finmind.application.services.chat_service import ChatService
from finmind.core.exceptions import ProviderError
from finmind.models.chat import ChatRequest, ChatResponse
from finmind.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/stream")
async def chat_stream(
    user_id: str = Query(..., alias="userId", min_length=1),
    message: str = Query(..., min_length=1),
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """Stream a chat answer using Server-Sent Events (SSE).

    SSE Format:
        event: token
        data: {"token": "...", "index": 0}

        event: complete
        data: {"token_count": 12, "saved": true}

        event: error
        data: {"code": "GENERATION_FAILED" | "ANSWER_NOT_SAVED", "message": "..."}

    Args:
        user_id: Conversation owner
        message: User question
        chat_service: Injected ChatService

    Returns:
        StreamingResponse: SSE stream of chat events
    """
    log_with_context(logger, logging.INFO, f"{__name__}:chat_stream - START", user_id=user_id, question=message)

    async def event_generator() -> AsyncGenerator[str, None]:
        """Render chat events as SSE frames."""
        async with aclosing(chat_service.stream(user_id, message)) as events:
            async for event in events:
                yield event.to_sse()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Answer a chat message in one response.

    Args:
        request: ChatRequest with userId and message
        chat_service: Injected ChatService

    Returns:
        ChatResponse: Full answer and whether it was saved

    Raises:
        HTTPException(502): Generation failed
    """
    try:
        return await chat_service.answer(request.user_id, request.message)
    except ProviderError as e:
        logger.error(f"{__name__}:chat - Generation failed: {e}", extra={"user_id": request.user_id})
        raise HTTPException(status_code=502, detail=f"Answer generation failed: {e.message}")
