"""
Shared settings base for FinMind.

Every settings group reads the same `.env` file with case-insensitive
variable names and ignores keys owned by other groups. The root log level
lives here because the application lifespan applies it before any group is
used.

Dependencies: pydantic_settings
System role: Common parent of the prefixed settings groups
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Settings parent sharing `.env` loading and the log level."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level applied by configure_logging at startup",
    )
