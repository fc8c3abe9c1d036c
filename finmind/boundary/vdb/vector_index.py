"""
Vector index capability interface.

Dependencies: finmind.boundary.vdb.vector_schemas, finmind.core.results
System role: Narrow contract implemented by every vector index backend
"""

from collections.abc import Sequence
from typing import Protocol

from finmind.boundary.vdb.vector_schemas import VectorItem, VectorMatch
from finmind.core.results import CallResult


class VectorIndex(Protocol):
    """Upsert and similarity query within a namespace."""

    dimension: int

    async def upsert(self, namespace: str, items: Sequence[VectorItem]) -> CallResult[int]:
        """Store one batch of vectors; the value is the number upserted."""
        ...

    async def query(
        self,
        namespace: str,
        vector: Sequence[float],
        top_k: int,
    ) -> CallResult[list[VectorMatch]]:
        """Return the top_k most similar vectors, best first."""
        ...
