"""
Dependency injection container.

Lazily builds and caches the long-lived clients and services shared by all
requests. Routers receive services through the get_* functions, which tests
replace with app.dependency_overrides.

Dependencies: finmind.configs, finmind.boundary, finmind.core, finmind.application
System role: DI container for service injection
"""

import logging

from finmind.configs import Settings, get_settings

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._engine = None
        self._redis = None
        self._vector_index = None
        self._history_manager = None
        self._knowledge_store = None
        self._orchestrator = None
        self._chat_service = None
        self._knowledge_service = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def engine(self):
        """Get cached async database engine."""
        if self._engine is None:
            from finmind.boundary.db import get_async_engine

            self._engine = get_async_engine(self.settings.database)
        return self._engine

    @property
    def redis(self):
        """Get cached Redis client."""
        if self._redis is None:
            from finmind.boundary.cache import create_redis_client

            self._redis = create_redis_client(self.settings.cache)
        return self._redis

    @property
    def vector_index(self):
        """Get cached vector index."""
        if self._vector_index is None:
            from finmind.boundary.vdb import get_vector_index

            self._vector_index = get_vector_index(self.settings)
        return self._vector_index

    @property
    def history_manager(self):
        """Get cached conversation history manager."""
        if self._history_manager is None:
            from finmind.boundary.cache import HistoryCache
            from finmind.boundary.db import ConversationLog, get_async_session_factory
            from finmind.core.history_manager import ConversationHistoryManager

            cache_settings = self.settings.cache
            self._history_manager = ConversationHistoryManager(
                cache=HistoryCache(
                    self.redis,
                    key_prefix=cache_settings.key_prefix,
                    ttl_seconds=cache_settings.history_ttl_seconds,
                ),
                log=ConversationLog(get_async_session_factory(self.engine)),
                max_rounds=self.settings.history.max_rounds,
            )
        return self._history_manager

    @property
    def knowledge_store(self):
        """Get cached knowledge store."""
        if self._knowledge_store is None:
            from finmind.boundary.llm import create_embedding_gateway
            from finmind.core.chunker import Chunker
            from finmind.core.knowledge_store import VectorKnowledgeStore

            retrieval = self.settings.retrieval
            vector_store = self.settings.vector_store
            self._knowledge_store = VectorKnowledgeStore(
                chunker=Chunker(chunk_size=retrieval.chunk_size, overlap=retrieval.chunk_overlap),
                embedder=create_embedding_gateway(self.settings.llm),
                index=self.vector_index,
                namespace=vector_store.namespace,
                batch_size=vector_store.upsert_batch_size,
                top_k=vector_store.top_k,
                embedding_concurrency=retrieval.embedding_concurrency,
            )
        return self._knowledge_store

    @property
    def orchestrator(self):
        """Get cached chat orchestrator."""
        if self._orchestrator is None:
            from finmind.boundary.llm import create_generation_provider
            from finmind.core.orchestrator import ChatOrchestrator
            from finmind.core.reranker import HybridReranker

            retrieval = self.settings.retrieval
            self._orchestrator = ChatOrchestrator(
                history=self.history_manager,
                knowledge=self.knowledge_store,
                reranker=HybridReranker(
                    threshold=retrieval.rerank_threshold,
                    top_n=retrieval.rerank_top_n,
                    vector_weight=retrieval.vector_weight,
                    lexical_weight=retrieval.lexical_weight,
                    saturation_hits=retrieval.lexical_saturation_hits,
                ),
                generator=create_generation_provider(self.settings.llm),
                top_k=self.settings.vector_store.top_k,
            )
        return self._orchestrator

    @property
    def chat_service(self):
        """Get cached chat service."""
        if self._chat_service is None:
            from finmind.application.services import ChatService

            self._chat_service = ChatService(self.orchestrator)
        return self._chat_service

    @property
    def knowledge_service(self):
        """Get cached knowledge service."""
        if self._knowledge_service is None:
            from finmind.application.services import KnowledgeService
            from finmind.boundary.extractor import DocumentExtractor

            self._knowledge_service = KnowledgeService(DocumentExtractor(), self.knowledge_store)
        return self._knowledge_service

    async def aclose(self) -> None:
        """Close network clients and clear all cached instances."""
        if self._redis is not None:
            await self._redis.aclose()
        if self._engine is not None:
            await self._engine.dispose()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._engine = None
        self._redis = None
        self._vector_index = None
        self._history_manager = None
        self._knowledge_store = None
        self._orchestrator = None
        self._chat_service = None
        self._knowledge_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_chat_service():
    """
    Get chat service instance.

    Returns:
        ChatService: Shared chat service
    """
    return get_service_cache().chat_service


def get_knowledge_service():
    """
    Get knowledge service instance.

    Returns:
        KnowledgeService: Shared knowledge upload service
    """
    return get_service_cache().knowledge_service
