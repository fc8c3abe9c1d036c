"""
CRUD operations package.

Exports:
  - BaseCRUD: Generic create operation
  - ConversationTurnCRUD, conversation_turn_crud: Conversation log queries
"""

from finmind.boundary.db.CRUD.base_crud import BaseCRUD
from finmind.boundary.db.CRUD.conversation_turn_crud import (
    ConversationTurnCRUD,
    conversation_turn_crud,
)

__all__ = ["BaseCRUD", "ConversationTurnCRUD", "conversation_turn_crud"]
