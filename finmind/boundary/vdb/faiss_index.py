"""
FAISS vector index for local development.

In-memory, one flat inner-product index per namespace over L2-normalized
vectors, so inner product equals cosine similarity. Contents are lost on
restart.

Dependencies: faiss-cpu, numpy, finmind.core
System role: Local vector index for development and tests
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import faiss
import numpy as np

from finmind.boundary.vdb.vector_schemas import VectorItem, VectorMatch, VectorMetadata
from finmind.core.exceptions import InvalidConfig
from finmind.core.results import CallResult
from finmind.core.vector_utils import ensure_dimension, normalize_rows

logger = logging.getLogger(__name__)


@dataclass
class _Namespace:
    index: faiss.IndexFlatIP
    ids: list[str] = field(default_factory=list)
    metadata: list[VectorMetadata] = field(default_factory=list)


class FaissVectorIndex:
    """FAISS implementation of the VectorIndex protocol."""

    def __init__(self, dimension: int) -> None:
        """
        Initialize empty index.

        Args:
            dimension: Process-wide embedding dimension

        Raises:
            InvalidConfig: If dimension is not positive
        """
        if dimension <= 0:
            raise InvalidConfig("Embedding dimension must be positive", {"dimension": dimension})
        self.dimension = dimension
        self._namespaces: dict[str, _Namespace] = {}

    def _namespace(self, name: str) -> _Namespace:
        if name not in self._namespaces:
            self._namespaces[name] = _Namespace(index=faiss.IndexFlatIP(self.dimension))
        return self._namespaces[name]

    def count(self, namespace: str) -> int:
        """Number of vectors stored in a namespace."""
        space = self._namespaces.get(namespace)
        return space.index.ntotal if space else 0

    async def upsert(self, namespace: str, items: Sequence[VectorItem]) -> CallResult[int]:
        """
        Append a batch of vectors. Re-ingestion adds new entries; ids are not deduplicated.

        Raises:
            DimensionMismatchError: If any vector has the wrong dimension
        """
        if not items:
            return CallResult.success(0)
        for item in items:
            ensure_dimension(item.values, self.dimension)

        matrix = normalize_rows(np.asarray([item.values for item in items], dtype=np.float32))
        space = self._namespace(namespace)
        space.index.add(matrix)
        space.ids.extend(item.id for item in items)
        space.metadata.extend(item.metadata for item in items)

        logger.info(f"{__name__}:upsert - Added {len(items)} vectors to namespace '{namespace}'")
        return CallResult.success(len(items))

    async def query(
        self,
        namespace: str,
        vector: Sequence[float],
        top_k: int,
    ) -> CallResult[list[VectorMatch]]:
        """
        Return up to top_k nearest vectors by cosine similarity, best first.

        Raises:
            DimensionMismatchError: If the query vector has the wrong dimension
        """
        ensure_dimension(vector, self.dimension)
        space = self._namespaces.get(namespace)
        if space is None or space.index.ntotal == 0:
            return CallResult.success([])

        query = normalize_rows(np.asarray([vector], dtype=np.float32))
        scores, positions = space.index.search(query, min(top_k, space.index.ntotal))

        matches = [
            VectorMatch(id=space.ids[pos], score=float(score), metadata=space.metadata[pos])
            for score, pos in zip(scores[0], positions[0])
            if pos >= 0
        ]
        return CallResult.success(matches)
