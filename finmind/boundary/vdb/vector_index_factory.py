"""
Vector index factory for selecting between FAISS (dev) and Pinecone (prod).

Depends on VECTOR_STORE_STORE_TYPE environment variable.

Dependencies: finmind.boundary.vdb, finmind.configs
System role: Vector index instantiation and selection
"""

import logging

from finmind.boundary.vdb.faiss_index import FaissVectorIndex
from finmind.boundary.vdb.pinecone_index import PineconeVectorIndex
from finmind.boundary.vdb.vector_index import VectorIndex
from finmind.configs import Settings, get_settings
from finmind.core.exceptions import InvalidConfig

logger = logging.getLogger(__name__)


def get_vector_index(settings: Settings | None = None) -> VectorIndex:
    """
    Build the configured vector index.

    Args:
        settings: Application settings (global settings when omitted)

    Returns:
        FaissVectorIndex or PineconeVectorIndex

    Raises:
        InvalidConfig: If the store type is unknown or its configuration is invalid
    """
    settings = settings or get_settings()
    store_type = settings.vector_store.store_type.lower()
    dimension = settings.llm.embedding_dimension

    if store_type == "faiss":
        logger.info(f"{__name__}:get_vector_index - Creating FAISS index (local dev mode)")
        return FaissVectorIndex(dimension=dimension)

    if store_type == "pinecone":
        logger.info(f"{__name__}:get_vector_index - Creating Pinecone index (production mode)")
        return PineconeVectorIndex(
            api_key=settings.vector_store.pinecone_api_key,
            index_name=settings.vector_store.pinecone_index_name,
            index_host=settings.vector_store.pinecone_index_host,
            dimension=dimension,
            query_timeout=settings.vector_store.query_timeout,
        )

    raise InvalidConfig(
        f"Invalid vector store type: {store_type}. Must be 'faiss' (dev) or 'pinecone' (production).",
        {"store_type": store_type},
    )
