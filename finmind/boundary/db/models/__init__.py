"""
Database models package.

Exports:
  - ConversationTurnModel: Durable conversation log row

Dependencies: sqlalchemy, finmind.boundary.db.base
System role: Database model definitions for domain entities
"""

from finmind.boundary.db.models.conversation_turn_model import ConversationTurnModel

__all__ = ["ConversationTurnModel"]
