"""
Redis client factory.

Dependencies: redis, finmind.configs
System role: Connection setup for the history cache
"""

from redis.asyncio import Redis

from finmind.configs.cache import CacheSettings


def create_redis_client(settings: CacheSettings) -> Redis:
    """
    Create an asyncio Redis client with string responses.

    Args:
        settings: Cache configuration

    Returns:
        Redis: Client whose commands return str instead of bytes
    """
    return Redis.from_url(
        settings.url,
        decode_responses=True,
        socket_timeout=settings.socket_timeout,
        socket_connect_timeout=settings.socket_timeout,
    )
