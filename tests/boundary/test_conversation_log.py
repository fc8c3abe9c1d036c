"""
Test suite for the durable conversation log.

Runs against in-memory SQLite through aiosqlite.

System role: Verification of the authoritative conversation store
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from finmind.boundary.db import ConversationLog
from finmind.boundary.db.CRUD import conversation_turn_crud
from finmind.core.exceptions import PersistenceError
from finmind.models.conversation import ConversationTurn


def turn_at(user_id: str, index: int) -> ConversationTurn:
    base = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return ConversationTurn(
        user_id=user_id,
        question=f"q{index}",
        answer=f"a{index}",
        created_at=base + timedelta(minutes=index),
    )


class TestConversationLog:
    """Test append and recent queries."""

    @pytest.mark.asyncio
    async def test_recent_should_return_newest_first_with_limit(self, session_factory) -> None:
        """Test recent() orders by creation time descending and applies the limit."""
        log = ConversationLog(session_factory)
        for i in range(5):
            await log.append(turn_at("u1", i))

        turns = await log.recent("u1", limit=3)

        assert [turn.question for turn in turns] == ["q4", "q3", "q2"]
        assert all(turn.user_id == "u1" for turn in turns)

    @pytest.mark.asyncio
    async def test_recent_should_filter_by_user(self, session_factory) -> None:
        """Test other users' turns are excluded."""
        log = ConversationLog(session_factory)
        await log.append(turn_at("u1", 0))
        await log.append(turn_at("u2", 1))

        turns = await log.recent("u2", limit=10)

        assert [turn.question for turn in turns] == ["q1"]

    @pytest.mark.asyncio
    async def test_recent_should_break_timestamp_ties_by_insertion(self, session_factory) -> None:
        """Test turns with equal timestamps come back newest insert first."""
        log = ConversationLog(session_factory)
        stamp = datetime(2025, 1, 1, tzinfo=timezone.utc)
        for i in range(3):
            await log.append(ConversationTurn(user_id="u1", question=f"q{i}", answer="a", created_at=stamp))

        turns = await log.recent("u1", limit=3)

        assert [turn.question for turn in turns] == ["q2", "q1", "q0"]

    @pytest.mark.asyncio
    async def test_recent_should_return_empty_for_unknown_user(self, session_factory) -> None:
        """Test unknown user yields no turns."""
        assert await ConversationLog(session_factory).recent("ghost", limit=3) == []

    @pytest.mark.asyncio
    async def test_log_should_raise_persistence_error_on_database_failure(self) -> None:
        """Test SQLAlchemy errors surface as PersistenceError."""
        engine = create_async_engine(
            "sqlite+aiosqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        log = ConversationLog(async_sessionmaker(engine, expire_on_commit=False))

        try:
            with pytest.raises(PersistenceError):
                await log.append(turn_at("u1", 0))
            with pytest.raises(PersistenceError):
                await log.recent("u1", limit=3)
        finally:
            await engine.dispose()


class TestConversationTurnCRUD:
    """Test generic CRUD operations on the turn table."""

    @pytest.mark.asyncio
    async def test_create_should_assign_id_and_timestamp(self, session_factory) -> None:
        async with session_factory() as session:
            created = await conversation_turn_crud.create(session, user_id="u1", question="q", answer="a")
            await session.commit()

        assert created.id is not None
        assert created.question == "q"
        assert created.created_at is not None
