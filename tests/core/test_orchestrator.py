"""
Test suite for the chat orchestrator.

Covers prompt assembly in free and knowledge modes, delta forwarding,
persistence after completion only, and the failure paths (generation error,
caller disconnect, retrieval failure, durable write failure).

System role: Verification of the streaming chat pipeline
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import ScriptedGenerator
from finmind.core.exceptions import PersistenceError, ProviderError, VectorStoreError
from finmind.core.orchestrator import AnswerBuffer, ChatOrchestrator
from finmind.core.prompts import SYSTEM_PROMPT
from finmind.core.reranker import HybridReranker
from finmind.core.results import CallResult
from finmind.models.conversation import ConversationTurn
from finmind.models.search import SearchCandidate


@pytest.fixture
def history() -> MagicMock:
    """Provide history manager mock with one prior turn."""
    manager = MagicMock()
    manager.get = AsyncMock(
        return_value=[ConversationTurn(user_id="u1", question="What is CPI?", answer="A price index.")]
    )
    manager.save = AsyncMock()
    return manager


@pytest.fixture
def knowledge() -> MagicMock:
    """Provide knowledge store mock returning no candidates."""
    store = MagicMock()
    store.search = AsyncMock(return_value=CallResult.success([]))
    return store


def build_orchestrator(history, knowledge, generator, threshold: float = 0.45) -> ChatOrchestrator:
    return ChatOrchestrator(
        history=history,
        knowledge=knowledge,
        reranker=HybridReranker(threshold=threshold),
        generator=generator,
        top_k=20,
    )


async def collect(orchestrator: ChatOrchestrator, user_id: str, question: str) -> list[str]:
    return [delta async for delta in orchestrator.chat(user_id, question)]


class TestPromptAssembly:
    """Test message list construction."""

    @pytest.mark.asyncio
    async def test_chat_should_send_raw_question_in_free_mode(self, history, knowledge) -> None:
        """Test empty context uses the question verbatim as final message."""
        generator = ScriptedGenerator(["ok"])
        orchestrator = build_orchestrator(history, knowledge, generator)

        await collect(orchestrator, "u1", "Hello there")

        messages = generator.calls[0]
        assert [message.type for message in messages] == ["system", "human", "ai", "human"]
        assert messages[0].content == SYSTEM_PROMPT
        assert messages[1].content == "What is CPI?"
        assert messages[2].content == "A price index."
        assert messages[-1].content == "Hello there"

    @pytest.mark.asyncio
    async def test_chat_should_wrap_question_in_knowledge_mode(self, history, knowledge) -> None:
        """Test ranked context is inserted into the final message template."""
        knowledge.search.return_value = CallResult.success(
            [SearchCandidate(text="ZUEL funding rose 12% in 2024", vector_score=0.9, source="report.pdf")]
        )
        generator = ScriptedGenerator(["ok"])
        orchestrator = build_orchestrator(history, knowledge, generator)

        await collect(orchestrator, "u1", "ZUEL funding trend")

        final = generator.calls[0][-1].content
        assert "ZUEL funding rose 12% in 2024" in final
        assert "Question: ZUEL funding trend" in final
        assert "general knowledge" in final
        knowledge.search.assert_awaited_once_with("ZUEL funding trend", 20)

    @pytest.mark.asyncio
    async def test_chat_should_use_free_mode_when_nothing_passes_threshold(self, history, knowledge) -> None:
        """Test weak candidates are filtered out by the reranker."""
        knowledge.search.return_value = CallResult.success(
            [SearchCandidate(text="campus dining menu", vector_score=0.2)]
        )
        generator = ScriptedGenerator(["ok"])
        orchestrator = build_orchestrator(history, knowledge, generator)

        await collect(orchestrator, "u1", "ZUEL funding trend")

        assert generator.calls[0][-1].content == "ZUEL funding trend"

    @pytest.mark.asyncio
    async def test_chat_should_degrade_to_free_mode_on_retrieval_failure(self, history, knowledge) -> None:
        """Test embedding or index failure does not fail the chat."""
        knowledge.search.return_value = CallResult.failure(VectorStoreError("index down", operation="query"))
        generator = ScriptedGenerator(["fine"])
        orchestrator = build_orchestrator(history, knowledge, generator)

        deltas = await collect(orchestrator, "u1", "Hello")

        assert deltas == ["fine"]
        assert generator.calls[0][-1].content == "Hello"

    @pytest.mark.asyncio
    async def test_chat_should_continue_without_history_on_durable_read_failure(self, history, knowledge) -> None:
        """Test a failed history load leaves only system and question messages."""
        history.get.side_effect = PersistenceError("database unavailable", user_id="u1")
        generator = ScriptedGenerator(["ok"])
        orchestrator = build_orchestrator(history, knowledge, generator)

        await collect(orchestrator, "u1", "Hello")

        assert [message.type for message in generator.calls[0]] == ["system", "human"]


class TestStreaming:
    """Test delta forwarding and persistence on completion."""

    @pytest.mark.asyncio
    async def test_chat_should_forward_deltas_in_order_and_skip_empty(self, history, knowledge) -> None:
        """Test empty deltas are inert and order is preserved."""
        generator = ScriptedGenerator(["Infl", "", "ation ", "", "is rising."])
        orchestrator = build_orchestrator(history, knowledge, generator)

        deltas = await collect(orchestrator, "u1", "Inflation?")

        assert deltas == ["Infl", "ation ", "is rising."]

    @pytest.mark.asyncio
    async def test_chat_should_persist_full_answer_after_completion(self, history, knowledge) -> None:
        """Test accumulated answer is saved once with the original question."""
        generator = ScriptedGenerator(["Infl", "ation ", "is rising."])
        orchestrator = build_orchestrator(history, knowledge, generator)

        await collect(orchestrator, "u1", "Inflation?")

        history.save.assert_awaited_once_with("u1", "Inflation?", "Inflation is rising.")

    @pytest.mark.asyncio
    async def test_chat_should_not_persist_before_stream_completes(self, history, knowledge) -> None:
        """Test no save happens while deltas are still arriving."""
        generator = ScriptedGenerator(["a", "b", "c"])
        orchestrator = build_orchestrator(history, knowledge, generator)

        saves_seen = []
        async for _ in orchestrator.chat("u1", "q"):
            saves_seen.append(history.save.await_count)

        assert saves_seen == [0, 0, 0]
        assert history.save.await_count == 1


class TestFailures:
    """Test generation, cancellation and persistence failures."""

    @pytest.mark.asyncio
    async def test_chat_should_raise_and_not_persist_on_generation_error(self, history, knowledge) -> None:
        """Test ProviderError mid-stream propagates and drops the partial answer."""
        generator = ScriptedGenerator(["partial "], error=ProviderError("stream failed", provider="generation"))
        orchestrator = build_orchestrator(history, knowledge, generator)

        received = []
        with pytest.raises(ProviderError):
            async for delta in orchestrator.chat("u1", "q"):
                received.append(delta)

        assert received == ["partial "]
        history.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_chat_should_close_upstream_and_not_persist_on_disconnect(self, history, knowledge) -> None:
        """Test closing the chat stream early closes generation and skips persistence."""
        generator = ScriptedGenerator(["one ", "two ", "three"])
        orchestrator = build_orchestrator(history, knowledge, generator)

        stream = orchestrator.chat("u1", "q")
        first = await anext(stream)
        await stream.aclose()

        assert first == "one "
        assert generator.closed is True
        history.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_chat_should_surface_persistence_error_after_all_deltas(self, history, knowledge) -> None:
        """Test a failed durable write is raised after the whole answer was streamed."""
        history.save.side_effect = PersistenceError("database unavailable", user_id="u1")
        generator = ScriptedGenerator(["full ", "answer"])
        orchestrator = build_orchestrator(history, knowledge, generator)

        received = []
        with pytest.raises(PersistenceError):
            async for delta in orchestrator.chat("u1", "q"):
                received.append(delta)

        assert received == ["full ", "answer"]


class TestAnswerBuffer:
    """Test answer accumulation."""

    def test_buffer_should_join_deltas(self) -> None:
        """Test text joins appended deltas in order."""
        buffer = AnswerBuffer()
        buffer.append("a")
        buffer.append("b")

        assert buffer.text == "ab"
        assert buffer.delta_count == 2
