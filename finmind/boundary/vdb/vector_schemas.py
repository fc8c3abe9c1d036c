"""
Vector database schemas.

Pydantic models for vector index operations (upsert items and query matches).

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from pydantic import BaseModel, Field


class VectorMetadata(BaseModel):
    """Metadata attached to each stored vector."""

    text: str = Field(description="Chunk text content")
    source: str = Field(default="", description="Source document identifier")


class VectorItem(BaseModel):
    """Single vector to upsert."""

    id: str = Field(description="Vector identifier ({source}_part_{index})")
    values: list[float] = Field(description="Embedding vector")
    metadata: VectorMetadata = Field(description="Chunk metadata")


class VectorMatch(BaseModel):
    """Single result from a similarity query."""

    id: str = Field(description="Vector identifier")
    score: float = Field(description="Similarity score reported by the index")
    metadata: VectorMetadata = Field(description="Chunk metadata")
