"""
Pinecone vector index.

Production vector index. The Pinecone data-plane client is blocking; calls
run in worker threads, and queries are bounded by an optional timeout.

Dependencies: pinecone, fastapi.concurrency, finmind.core
System role: Vector index client for knowledge storage and retrieval
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from fastapi.concurrency import run_in_threadpool
from pinecone import Pinecone

from finmind.boundary.vdb.vector_schemas import VectorItem, VectorMatch, VectorMetadata
from finmind.core.exceptions import DimensionMismatchError, InvalidConfig, VectorStoreError
from finmind.core.results import CallResult
from finmind.core.vector_utils import ensure_dimension

logger = logging.getLogger(__name__)

MAX_UPSERT_BATCH = 100


class PineconeVectorIndex:
    """Pinecone implementation of the VectorIndex protocol."""

    def __init__(
        self,
        api_key: str,
        index_name: str,
        dimension: int,
        index_host: str | None = None,
        index: Any | None = None,
        query_timeout: float | None = None,
    ) -> None:
        """
        Initialize Pinecone index handle.

        Args:
            api_key: Pinecone API key
            index_name: Index name
            dimension: Process-wide embedding dimension
            index_host: Index host, skips host resolution when given
            index: Pre-built index handle (used instead of connecting)
            query_timeout: Upper bound in seconds for one query (unbounded when None)

        Raises:
            InvalidConfig: If the API key is missing or dimension is not positive
        """
        if dimension <= 0:
            raise InvalidConfig("Embedding dimension must be positive", {"dimension": dimension})

        self.dimension = dimension
        self.index_name = index_name
        self.query_timeout = query_timeout

        if index is not None:
            self._index = index
        else:
            if not api_key:
                raise InvalidConfig("Pinecone API key is not configured")
            client = Pinecone(api_key=api_key)
            if index_host:
                self._index = client.Index(host=index_host)
            else:
                self._index = client.Index(name=index_name)

    async def verify_dimension(self) -> None:
        """
        Compare the remote index dimension with the configured one.

        Raises:
            DimensionMismatchError: If the index was created with another dimension
        """
        stats = await run_in_threadpool(self._index.describe_index_stats)
        remote_dimension = getattr(stats, "dimension", None)
        if remote_dimension is not None and int(remote_dimension) != self.dimension:
            raise DimensionMismatchError(expected=self.dimension, actual=int(remote_dimension))

    async def upsert(self, namespace: str, items: Sequence[VectorItem]) -> CallResult[int]:
        """
        Upsert one batch of vectors.

        Args:
            namespace: Target namespace
            items: At most 100 vectors

        Returns:
            CallResult[int]: Number of vectors upserted, or VectorStoreError
        """
        if not items:
            return CallResult.success(0)
        if len(items) > MAX_UPSERT_BATCH:
            return CallResult.failure(
                VectorStoreError(
                    "Upsert batch exceeds Pinecone payload limit",
                    operation="upsert",
                    details={"batch_size": len(items), "limit": MAX_UPSERT_BATCH},
                )
            )
        for item in items:
            ensure_dimension(item.values, self.dimension)

        vectors = [
            {"id": item.id, "values": item.values, "metadata": item.metadata.model_dump()}
            for item in items
        ]
        try:
            response = await run_in_threadpool(self._index.upsert, vectors=vectors, namespace=namespace)
        except Exception as e:
            logger.error(f"{__name__}:upsert - Pinecone upsert failed: {type(e).__name__}: {e}")
            return CallResult.failure(
                VectorStoreError(
                    "Failed to upsert vectors to Pinecone",
                    operation="upsert",
                    details={"error": str(e), "vector_count": len(items), "namespace": namespace},
                )
            )

        upserted = getattr(response, "upserted_count", None)
        return CallResult.success(int(upserted) if upserted is not None else len(items))

    async def query(
        self,
        namespace: str,
        vector: Sequence[float],
        top_k: int,
    ) -> CallResult[list[VectorMatch]]:
        """
        Query the most similar vectors.

        Args:
            namespace: Namespace to search
            vector: Query embedding
            top_k: Number of matches requested

        Returns:
            CallResult[list[VectorMatch]]: Matches best first, or VectorStoreError
            (also on timeout; the worker thread finishes in the background)
        """
        ensure_dimension(vector, self.dimension)
        try:
            # asyncio.to_thread can be cancelled while the worker is still blocked
            async with asyncio.timeout(self.query_timeout):
                response = await asyncio.to_thread(
                    self._index.query,
                    namespace=namespace,
                    vector=list(vector),
                    top_k=top_k,
                    include_metadata=True,
                    include_values=False,
                )
        except TimeoutError:
            logger.error(f"{__name__}:query - Pinecone query exceeded {self.query_timeout}s")
            return CallResult.failure(
                VectorStoreError(
                    "Pinecone query timed out",
                    operation="query",
                    details={"timeout": self.query_timeout, "namespace": namespace, "top_k": top_k},
                )
            )
        except Exception as e:
            logger.error(f"{__name__}:query - Pinecone query failed: {type(e).__name__}: {e}")
            return CallResult.failure(
                VectorStoreError(
                    "Failed to query vectors from Pinecone",
                    operation="query",
                    details={"error": str(e), "namespace": namespace, "top_k": top_k},
                )
            )

        matches = []
        for match in response.matches or []:
            metadata = match.metadata or {}
            matches.append(
                VectorMatch(
                    id=match.id,
                    score=float(match.score or 0.0),
                    metadata=VectorMetadata(
                        text=str(metadata.get("text", "")),
                        source=str(metadata.get("source", "")),
                    ),
                )
            )
        return CallResult.success(matches)
