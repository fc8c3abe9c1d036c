"""
Retrieval configuration settings.

Chunking window, hybrid rerank weights and thresholds. The rerank constants
are empirically chosen and exposed here for tuning per corpus.

Dependencies: pydantic, pydantic_settings
System role: Tunables for chunking and hybrid reranking
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from finmind.configs.base import BaseSettings


class RetrievalSettings(BaseSettings):
    """Chunking and reranking configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=200, description="Characters per chunk window")
    chunk_overlap: int = Field(default=50, description="Characters shared by consecutive windows")

    rerank_threshold: float = Field(
        default=0.45,
        description="Minimum final score kept after reranking (0.45-0.65 typical)",
    )
    rerank_top_n: int = Field(default=5, description="Candidates returned after reranking")
    vector_weight: float = Field(default=0.8, description="Weight of the vector similarity score")
    lexical_weight: float = Field(default=0.2, description="Weight of the keyword overlap score")
    lexical_saturation_hits: int = Field(
        default=3,
        description="Distinct keyword hits at which the lexical score saturates at 1.0",
    )

    embedding_concurrency: int = Field(
        default=4,
        gt=0,
        description="Concurrent embedding calls during ingestion",
    )
