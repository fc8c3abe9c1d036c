"""
Knowledge store.

Narrow capability interface (store, search) with one vector-backed
implementation that owns its chunker, embedding gateway and vector index.
Ingestion skips chunks whose embedding failed instead of failing the whole
document; search reports failures as a CallResult so chat can degrade.

Dependencies: finmind.boundary.llm, finmind.boundary.vdb, finmind.core, finmind.models
System role: Ingestion and retrieval pipeline over the vector index
"""

import asyncio
import logging
from typing import Protocol

from finmind.boundary.llm.embedding_gateway import EmbeddingGateway
from finmind.boundary.vdb.vector_index import VectorIndex
from finmind.boundary.vdb.vector_schemas import VectorItem, VectorMetadata
from finmind.core.chunker import Chunker
from finmind.core.exceptions import FinMindError, InvalidConfig
from finmind.core.results import CallResult
from finmind.core.vector_utils import clamp_score
from finmind.models.chunk import Chunk
from finmind.models.knowledge import IngestionReport
from finmind.models.search import SearchCandidate

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 100


class KnowledgeStore(Protocol):
    """Store documents and search them by similarity."""

    async def store(self, source_id: str, text: str) -> IngestionReport:
        ...

    async def search(self, query: str, top_k: int | None = None) -> CallResult[list[SearchCandidate]]:
        ...


class VectorKnowledgeStore:
    """KnowledgeStore backed by an embedding gateway and a vector index."""

    def __init__(
        self,
        chunker: Chunker,
        embedder: EmbeddingGateway,
        index: VectorIndex,
        namespace: str,
        batch_size: int = 96,
        top_k: int = 20,
        embedding_concurrency: int = 4,
    ) -> None:
        """
        Initialize knowledge store.

        Args:
            chunker: Configured chunker
            embedder: Embedding gateway
            index: Vector index backend
            namespace: Index namespace holding this corpus
            batch_size: Vectors per upsert request (1..100)
            top_k: Default candidates fetched per query
            embedding_concurrency: Maximum concurrent embedding calls during ingestion

        Raises:
            InvalidConfig: If any limit is out of range or dimensions disagree
        """
        if not 1 <= batch_size <= MAX_BATCH_SIZE:
            raise InvalidConfig(
                f"Upsert batch size must be within 1..{MAX_BATCH_SIZE}",
                {"batch_size": batch_size},
            )
        if top_k < 1:
            raise InvalidConfig("top_k must be at least 1", {"top_k": top_k})
        if embedding_concurrency < 1:
            raise InvalidConfig(
                "Embedding concurrency must be at least 1",
                {"embedding_concurrency": embedding_concurrency},
            )
        if embedder.dimension != index.dimension:
            raise InvalidConfig(
                "Embedding gateway and vector index disagree on dimension",
                {"embedding_dimension": embedder.dimension, "index_dimension": index.dimension},
            )

        self._chunker = chunker
        self._embedder = embedder
        self._index = index
        self.namespace = namespace
        self.batch_size = batch_size
        self.top_k = top_k
        self._semaphore = asyncio.Semaphore(embedding_concurrency)

    async def _embed_chunk(self, chunk: Chunk) -> CallResult[list[float]]:
        async with self._semaphore:
            return await self._embedder.embed(chunk.text)

    async def store(self, source_id: str, text: str) -> IngestionReport:
        """
        Chunk, embed and upsert one document.

        Args:
            source_id: Source document identifier (e.g. filename)
            text: Extracted document text

        Returns:
            IngestionReport: Chunk, stored and skipped counts

        Raises:
            VectorStoreError: If an upsert batch is rejected by the index
        """
        chunks = self._chunker.split(text, source_id=source_id)
        report = IngestionReport(source_id=source_id, chunk_count=len(chunks))
        if not chunks:
            logger.warning(f"{__name__}:store - No chunks produced", extra={"source_id": source_id})
            return report

        results = await asyncio.gather(*(self._embed_chunk(chunk) for chunk in chunks))

        items: list[VectorItem] = []
        for chunk, result in zip(chunks, results):
            if not result.ok:
                logger.warning(
                    f"{__name__}:store - Skipping chunk {chunk.sequence_index}: {result.error}",
                    extra={"source_id": source_id},
                )
                report.skipped_chunks.append(chunk.sequence_index)
                continue
            items.append(
                VectorItem(
                    id=chunk.vector_id,
                    values=result.value,
                    metadata=VectorMetadata(text=chunk.text, source=source_id),
                )
            )

        for start in range(0, len(items), self.batch_size):
            batch = items[start : start + self.batch_size]
            upserted = (await self._index.upsert(self.namespace, batch)).unwrap()
            report.stored_count += upserted
            logger.info(
                f"{__name__}:store - Upserted batch {start // self.batch_size + 1} ({upserted} vectors)",
                extra={"source_id": source_id},
            )

        logger.info(
            f"{__name__}:store - Ingestion finished: chunks={report.chunk_count}, "
            f"stored={report.stored_count}, skipped={len(report.skipped_chunks)}",
            extra={"source_id": source_id},
        )
        return report

    async def search(self, query: str, top_k: int | None = None) -> CallResult[list[SearchCandidate]]:
        """
        Embed a query and return the nearest chunks.

        Args:
            query: User question
            top_k: Override of the configured candidate count

        Returns:
            CallResult[list[SearchCandidate]]: Candidates in retrieval order with
            scores clamped into [0, 1], or the embedding/index failure
        """
        embedded = await self._embedder.embed(query)
        if not embedded.ok:
            return CallResult.failure(embedded.error)

        try:
            queried = await self._index.query(self.namespace, embedded.value, top_k or self.top_k)
        except FinMindError as e:
            return CallResult.failure(e)
        if not queried.ok:
            return CallResult.failure(queried.error)

        candidates = [
            SearchCandidate(
                text=match.metadata.text,
                vector_score=clamp_score(match.score),
                source=match.metadata.source,
            )
            for match in queried.value
        ]
        logger.info(f"{__name__}:search - Retrieved {len(candidates)} candidates")
        return CallResult.success(candidates)
