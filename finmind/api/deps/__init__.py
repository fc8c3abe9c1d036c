"""API-specific dependencies."""

from .dependencies import (
    ServiceCache,
    get_chat_service,
    get_knowledge_service,
    get_service_cache,
)

__all__ = [
    "ServiceCache",
    "get_chat_service",
    "get_knowledge_service",
    "get_service_cache",
]
