"""
LLM provider configuration settings.

Covers the streaming generation model and the embedding model, including the
process-wide embedding dimension shared by the index and every query.

Dependencies: pydantic, pydantic_settings
System role: Model provider configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from finmind.configs.base import BaseSettings


class LLMSettings(BaseSettings):
    """Generation and embedding model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    generation_model: str = Field(
        default="gemini-2.5-flash",
        description="Google Gemini chat model used for streamed answers",
    )
    temperature: float = Field(default=0.3, ge=0.0, le=2.0, description="Sampling temperature")
    request_timeout: float = Field(default=60.0, gt=0, description="Per-request timeout in seconds")
    max_retries: int = Field(default=2, ge=0, description="Client-side retries on transient errors")
    stream_idle_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Maximum wait for the next streamed delta before the stream is failed",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=3072,
        description="Embedding vector dimension (gemini-embedding-001 default output size)",
    )
