"""
Fast cache boundary package.

Exports:
  - HistoryCache: Per-user Redis history list
  - create_redis_client: Redis client factory
"""

from finmind.boundary.cache.history_cache import HistoryCache
from finmind.boundary.cache.redis_client import create_redis_client

__all__ = ["HistoryCache", "create_redis_client"]
