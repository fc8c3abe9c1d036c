"""
Chat orchestrator.

Runs one chat exchange:
  1. Load recent history (cache-aside)
  2. Retrieve and rerank knowledge; failures degrade to free conversation
  3. Assemble [system, ...history, final user message]
  4. Stream generation deltas to the caller while buffering the answer
  5. Persist the exchange once the stream has completed

A stream that fails or is abandoned by the caller is never persisted.

Dependencies: finmind.core, finmind.boundary.llm, finmind.models
System role: Core chat pipeline behind the streaming and materialized endpoints
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing
from typing import Protocol

from langchain_core.messages import BaseMessage

from finmind.core.exceptions import PersistenceError, ProviderError
from finmind.core.history_manager import ConversationHistoryManager
from finmind.core.knowledge_store import KnowledgeStore
from finmind.core.prompts import build_messages
from finmind.core.reranker import HybridReranker
from finmind.models.conversation import ConversationTurn
from finmind.models.search import RankedCandidate

logger = logging.getLogger(__name__)


class DeltaStream(Protocol):
    """Streaming generation capability."""

    def stream(self, messages: Sequence[BaseMessage]) -> AsyncIterator[str]:
        ...


class AnswerBuffer:
    """Accumulates streamed deltas into the full answer."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, delta: str) -> None:
        self._parts.append(delta)

    @property
    def delta_count(self) -> int:
        return len(self._parts)

    @property
    def text(self) -> str:
        return "".join(self._parts)


class ChatOrchestrator:
    """Retrieval-augmented streaming chat with conversational memory."""

    def __init__(
        self,
        history: ConversationHistoryManager,
        knowledge: KnowledgeStore,
        reranker: HybridReranker,
        generator: DeltaStream,
        top_k: int | None = None,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            history: Conversation history manager
            knowledge: Knowledge store used for retrieval
            reranker: Hybrid reranker applied to retrieved candidates
            generator: Streaming generation provider
            top_k: Candidates fetched before reranking (store default when None)
        """
        self._history = history
        self._knowledge = knowledge
        self._reranker = reranker
        self._generator = generator
        self.top_k = top_k

    async def load_history(self, user_id: str) -> list[ConversationTurn]:
        try:
            return await self._history.get(user_id)
        except PersistenceError as e:
            logger.warning(
                f"{__name__}:load_history - History unavailable, continuing without it: {e}",
                extra={"user_id": user_id},
            )
            return []

    async def retrieve(self, question: str) -> list[RankedCandidate]:
        """
        Search the knowledge store and rerank the candidates.

        Returns:
            list[RankedCandidate]: Ranked context; empty when nothing passes
            the threshold or retrieval failed
        """
        result = await self._knowledge.search(question, self.top_k)
        if not result.ok:
            logger.warning(f"{__name__}:retrieve - Retrieval failed, using free conversation: {result.error}")
            return []
        return self._reranker.rerank(result.value, question)

    async def chat(self, user_id: str, question: str) -> AsyncIterator[str]:
        """
        Stream the answer to one question and persist the completed exchange.

        Args:
            user_id: Conversation owner
            question: User question

        Yields:
            str: Non-empty answer deltas in arrival order

        Raises:
            ProviderError: If generation fails (nothing is persisted)
            PersistenceError: If the completed answer could not be saved durably
        """
        history = await self.load_history(user_id)
        context = await self.retrieve(question)
        messages = build_messages(history, question, context)

        mode = "knowledge" if context else "free"
        logger.info(
            f"{__name__}:chat - START mode={mode}, history_turns={len(history)}, context_chunks={len(context)}",
            extra={"user_id": user_id},
        )

        buffer = AnswerBuffer()
        try:
            async with aclosing(self._generator.stream(messages)) as deltas:
                async for delta in deltas:
                    if not delta:
                        continue
                    buffer.append(delta)
                    yield delta
        except ProviderError as e:
            logger.error(
                f"{__name__}:chat - Generation failed after {buffer.delta_count} deltas, answer not saved: {e}",
                extra={"user_id": user_id},
            )
            raise
        except (GeneratorExit, asyncio.CancelledError):
            logger.warning(
                f"{__name__}:chat - Caller stopped after {buffer.delta_count} deltas, partial answer dropped",
                extra={"user_id": user_id},
            )
            raise

        await self._history.save(user_id, question, buffer.text)
        logger.info(
            f"{__name__}:chat - END answer_len={len(buffer.text)}, deltas={buffer.delta_count}",
            extra={"user_id": user_id},
        )
