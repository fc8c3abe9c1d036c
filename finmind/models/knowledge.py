"""
Knowledge ingestion models.

Dependencies: pydantic
System role: Ingestion outcome and upload API response schemas
"""

from pydantic import BaseModel, Field


class IngestionReport(BaseModel):
    """Outcome of storing one document in the knowledge store."""

    source_id: str = Field(description="Source document identifier")
    chunk_count: int = Field(default=0, description="Chunks produced by the chunker")
    stored_count: int = Field(default=0, description="Chunks embedded and upserted")
    skipped_chunks: list[int] = Field(
        default_factory=list,
        description="Sequence indexes skipped because their embedding failed",
    )


class UploadResponse(BaseModel):
    """Upload endpoint response."""

    success: bool
    message: str
    source_id: str
    chunk_count: int = 0
    stored_count: int = 0
    skipped_count: int = 0
