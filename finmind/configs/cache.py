"""
Redis cache configuration settings.

Manages connection parameters for the fast conversation-history cache.

Dependencies: pydantic, pydantic_settings
System role: Fast cache configuration for cache-aside history
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from finmind.configs.base import BaseSettings


class CacheSettings(BaseSettings):
    """Redis configuration for the history cache."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REDIS_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Redis host")
    port: int = Field(default=6379, description="Redis port")
    db: int = Field(default=0, description="Redis database number")
    password: str | None = Field(default=None, description="Redis password")
    socket_timeout: float = Field(default=2.0, description="Socket timeout in seconds")

    key_prefix: str = Field(
        default="finmind:history:",
        description="Prefix of the per-user history list key",
    )
    history_ttl_seconds: int = Field(
        default=3600,
        gt=0,
        description="Sliding expiry of a user's history list, refreshed on read and write",
    )

    @property
    def url(self) -> str:
        """
        Construct Redis connection URL.

        Returns:
            str: redis-py compatible URL
        """
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"
