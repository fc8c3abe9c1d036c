"""
Retrieval candidate models.

Ephemeral per-query results: raw vector matches and their reranked form.

Dependencies: pydantic
System role: Data passed from the knowledge store to the reranker and orchestrator
"""

from pydantic import BaseModel, ConfigDict, Field


class SearchCandidate(BaseModel):
    """Single vector-similarity match."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Chunk text content")
    vector_score: float = Field(ge=0.0, le=1.0, description="Similarity score (0.0-1.0)")
    source: str = Field(default="", description="Source document identifier")


class RankedCandidate(SearchCandidate):
    """Search candidate rescored with the lexical overlap signal."""

    lexical_score: float = Field(ge=0.0, le=1.0, description="Keyword overlap score (0.0-1.0)")
    final_score: float = Field(ge=0.0, le=1.0, description="Weighted vector and lexical score")
