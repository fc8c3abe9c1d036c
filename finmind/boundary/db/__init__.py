"""
Database boundary package.

Exports:
  - Base: SQLAlchemy declarative base
  - ConversationLog: Durable conversation turn store
  - get_async_engine, get_async_session_factory, create_tables: Connection management

Dependencies: sqlalchemy
System role: Durable persistence boundary
"""

from finmind.boundary.db.base import Base
from finmind.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from finmind.boundary.db.conversation_log import ConversationLog

__all__ = [
    "Base",
    "ConversationLog",
    "create_tables",
    "get_async_engine",
    "get_async_session_factory",
]
