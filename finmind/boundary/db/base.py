"""
SQLAlchemy declarative base and common mixins.

Provides base class for all ORM models and reusable mixins for common
fields.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class to ensure they're
    registered with the metadata and included in table creation.
    """

    pass


class IntegerIDMixin:
    """
    Mixin providing an auto-increment integer primary key.

    Insertion order of the id doubles as a tie-breaker for rows sharing a
    timestamp.

    Attributes:
        id: Auto-increment primary key
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class CreatedAtMixin:
    """
    Mixin providing an immutable creation timestamp.

    Append-only rows never change, so there is no updated_at column.

    Attributes:
        created_at: Row creation timestamp (UTC)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
