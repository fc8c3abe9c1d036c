"""
Vector database boundary package.

Exports:
  - VectorIndex: Capability protocol (upsert, query)
  - PineconeVectorIndex, FaissVectorIndex: Backends
  - get_vector_index: Configuration-driven factory
  - VectorItem, VectorMatch, VectorMetadata: Schemas
"""

from finmind.boundary.vdb.faiss_index import FaissVectorIndex
from finmind.boundary.vdb.pinecone_index import PineconeVectorIndex
from finmind.boundary.vdb.vector_index import VectorIndex
from finmind.boundary.vdb.vector_index_factory import get_vector_index
from finmind.boundary.vdb.vector_schemas import VectorItem, VectorMatch, VectorMetadata

__all__ = [
    "FaissVectorIndex",
    "PineconeVectorIndex",
    "VectorIndex",
    "VectorItem",
    "VectorMatch",
    "VectorMetadata",
    "get_vector_index",
]
