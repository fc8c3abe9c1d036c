"""
LLM boundary package.

Exports:
  - EmbeddingGateway: Dimension-checked embeddings returning CallResult
  - GenerationProvider: Streaming text deltas with idle timeout
  - create_embedding_gateway, create_generation_provider: Gemini factories
"""

from finmind.boundary.llm.embedding_gateway import EmbeddingGateway
from finmind.boundary.llm.generation_provider import GenerationProvider, content_to_text
from finmind.boundary.llm.model_factory import create_embedding_gateway, create_generation_provider

__all__ = [
    "EmbeddingGateway",
    "GenerationProvider",
    "content_to_text",
    "create_embedding_gateway",
    "create_generation_provider",
]
