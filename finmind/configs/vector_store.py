"""
Vector store configuration settings.

Manages the vector index backend (Pinecone for production, FAISS for local
development), the namespace that isolates this corpus, and upsert batching.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from finmind.configs.base import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (FAISS for dev, Pinecone for prod)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="pinecone",
        description="Vector store type: 'faiss' for local dev, 'pinecone' for production",
    )
    pinecone_api_key: str = Field(default="", description="Pinecone API key")
    pinecone_index_name: str = Field(default="zuel-finmind", description="Pinecone index name")
    pinecone_index_host: str | None = Field(
        default=None,
        description="Pinecone index host; resolved from the index name when empty",
    )

    namespace: str = Field(
        default="zuel-finmind",
        description="Logical partition of the index holding this corpus",
    )
    upsert_batch_size: int = Field(
        default=96,
        description="Maximum vectors per upsert request (Pinecone payload limit)",
    )
    top_k: int = Field(default=20, gt=0, description="Candidates fetched per similarity query")
    query_timeout: float = Field(default=10.0, gt=0, description="Seconds before a Pinecone query is failed")
