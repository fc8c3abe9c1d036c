"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory SQLite session factory, fake Redis client, fake embeddings,
scripted generation provider
Dependencies: pytest, sqlalchemy, aiosqlite, fakeredis, langchain_core
System role: Test infrastructure and fixture management
"""

from collections.abc import Sequence

import pytest
from fakeredis import FakeAsyncRedis
from langchain_core.embeddings import Embeddings

from finmind.core.exceptions import PersistenceError
from finmind.models.conversation import ConversationTurn


class KeywordEmbeddings(Embeddings):
    """
    Deterministic 4-d embeddings for tests.

    Dimensions: [contains 'A', contains 'B', 1.0, 0.5]. Texts containing
    'FAIL' raise to simulate an upstream error.
    """

    dimension = 4

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        if "FAIL" in text:
            raise RuntimeError("upstream returned 500")
        return [1.0 if "A" in text else 0.0, 1.0 if "B" in text else 0.0, 1.0, 0.5]

    async def aembed_query(self, text: str) -> list[float]:
        return self.embed_query(text)


class ScriptedGenerator:
    """Generation provider that replays fixed deltas and records its prompt."""

    def __init__(self, deltas: Sequence[str], error: Exception | None = None) -> None:
        self.deltas = list(deltas)
        self.error = error
        self.calls: list[list] = []
        self.closed = False

    async def stream(self, messages):
        self.calls.append(list(messages))
        try:
            for delta in self.deltas:
                yield delta
            if self.error is not None:
                raise self.error
        finally:
            self.closed = True


class InMemoryConversationLog:
    """Durable log stand-in that counts reads."""

    def __init__(self) -> None:
        self.turns: list[ConversationTurn] = []
        self.recent_calls = 0
        self.fail_append = False

    async def append(self, turn: ConversationTurn) -> None:
        if self.fail_append:
            raise PersistenceError("database unavailable", user_id=turn.user_id)
        self.turns.append(turn)

    async def recent(self, user_id: str, limit: int) -> list[ConversationTurn]:
        self.recent_calls += 1
        rows = [turn for turn in self.turns if turn.user_id == user_id]
        return list(reversed(rows))[:limit]


@pytest.fixture
async def session_factory():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        async_sessionmaker: Session factory bound to a database with all tables created
    """
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from finmind.boundary.db import create_tables

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)

    yield async_sessionmaker(engine, autoflush=False, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def redis_client():
    """
    Provide an isolated fake Redis client.

    Yields:
        FakeAsyncRedis: Client returning str responses
    """
    client = FakeAsyncRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture
def history_cache(redis_client):
    """Provide HistoryCache over fake Redis."""
    from finmind.boundary.cache import HistoryCache

    return HistoryCache(redis_client, key_prefix="test:history:", ttl_seconds=3600)


@pytest.fixture
def conversation_log_stub() -> InMemoryConversationLog:
    """Provide call-counting durable log stub."""
    return InMemoryConversationLog()


@pytest.fixture
def keyword_embeddings() -> KeywordEmbeddings:
    """Provide deterministic 4-d embeddings."""
    return KeywordEmbeddings()
