"""
Chunk domain model.

Represents one bounded window of a source document's normalized text, the
unit of embedding and retrieval.

Dependencies: pydantic
System role: Data structure produced by the chunker
"""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Immutable slice of a source document."""

    model_config = ConfigDict(frozen=True)

    source_id: str = Field(description="Identifier of the source document (e.g. filename)")
    sequence_index: int = Field(ge=0, description="Dense zero-based position within the source")
    text: str = Field(description="Chunk text content")

    @property
    def vector_id(self) -> str:
        """Identifier used for this chunk in the vector index."""
        return f"{self.source_id}_part_{self.sequence_index}"
