"""
Embedding gateway.

Wraps a LangChain embeddings client behind an explicit CallResult so callers
decide per call whether a failure skips one chunk or aborts the request.
Every vector is checked against the process-wide embedding dimension.

Dependencies: langchain_core, finmind.core
System role: Text-to-vector adapter for ingestion and retrieval
"""

import asyncio
import logging

from langchain_core.embeddings import Embeddings

from finmind.core.exceptions import DimensionMismatchError, ProviderError
from finmind.core.results import CallResult
from finmind.core.vector_utils import ensure_dimension

logger = logging.getLogger(__name__)


class EmbeddingGateway:
    """Dimension-checked embedding client."""

    def __init__(self, embeddings: Embeddings, dimension: int, timeout: float | None = None) -> None:
        """
        Initialize gateway.

        Args:
            embeddings: LangChain embeddings implementation
            dimension: Process-wide embedding dimension
            timeout: Upper bound in seconds for one embedding call (unbounded when None)
        """
        self._embeddings = embeddings
        self.dimension = dimension
        self.timeout = timeout

    async def embed(self, text: str) -> CallResult[list[float]]:
        """
        Embed one text.

        Args:
            text: Chunk or query text

        Returns:
            CallResult[list[float]]: Vector of the configured dimension, or
            ProviderError when the upstream fails, times out or returns a
            malformed vector
        """
        try:
            async with asyncio.timeout(self.timeout):
                vector = await self._embeddings.aembed_query(text)
        except TimeoutError:
            logger.error(f"{__name__}:embed - Embedding call exceeded {self.timeout}s")
            return CallResult.failure(
                ProviderError(
                    "Embedding request timed out",
                    provider="embedding",
                    details={"timeout": self.timeout, "text_len": len(text)},
                )
            )
        except Exception as e:
            logger.error(f"{__name__}:embed - Embedding call failed: {type(e).__name__}: {e}")
            return CallResult.failure(
                ProviderError(
                    "Embedding request failed",
                    provider="embedding",
                    details={"error": str(e), "text_len": len(text)},
                )
            )

        try:
            ensure_dimension(vector, self.dimension)
        except DimensionMismatchError as e:
            logger.error(f"{__name__}:embed - {e}")
            return CallResult.failure(
                ProviderError("Embedding has unexpected dimension", provider="embedding", details=e.details)
            )

        return CallResult.success([float(value) for value in vector])
