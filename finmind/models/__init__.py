"""
Domain and API models.

Pydantic models shared by the core pipeline, the boundary adapters and the
HTTP layer.
"""

from finmind.models.chunk import Chunk
from finmind.models.conversation import ConversationTurn
from finmind.models.search import RankedCandidate, SearchCandidate

__all__ = ["Chunk", "ConversationTurn", "RankedCandidate", "SearchCandidate"]
