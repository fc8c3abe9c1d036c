"""
Conversation history settings.

Dependencies: pydantic, pydantic_settings
System role: Bounds on per-user conversational memory
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from finmind.configs.base import BaseSettings


class HistorySettings(BaseSettings):
    """Conversation memory configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HISTORY_",
        case_sensitive=False,
        extra="ignore",
    )

    max_rounds: int = Field(
        default=3,
        gt=0,
        description="Maximum question/answer rounds kept as context (3 rounds = 6 messages)",
    )
