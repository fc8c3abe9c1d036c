"""
Streaming generation provider.

Adapts a LangChain chat model's astream() into a plain async iterator of
text deltas. Waiting for each delta is bounded by an idle timeout; a stalled
or failing upstream surfaces as ProviderError. The upstream stream is closed
whenever the consumer stops early.

Dependencies: langchain_core, finmind.core
System role: LLM streaming adapter behind the chat orchestrator
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage

from finmind.core.exceptions import ProviderError

logger = logging.getLogger(__name__)


def content_to_text(content: Any) -> str:
    """Flatten message chunk content (plain string or list of parts) into text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content) if content else ""


class GenerationProvider:
    """Chat model streaming with per-delta idle timeout."""

    def __init__(self, chat_model: BaseChatModel, idle_timeout: float = 60.0) -> None:
        """
        Initialize provider.

        Args:
            chat_model: LangChain chat model supporting astream()
            idle_timeout: Seconds to wait for each next delta
        """
        self._model = chat_model
        self.idle_timeout = idle_timeout

    async def stream(self, messages: Sequence[BaseMessage]) -> AsyncIterator[str]:
        """
        Stream answer deltas for a prompt.

        Args:
            messages: Prompt messages (system, history, final user message)

        Yields:
            str: Non-empty text deltas in arrival order

        Raises:
            ProviderError: If the upstream fails or stays idle past the timeout
        """
        delta_count = 0
        async with aclosing(self._model.astream(list(messages))) as upstream:
            while True:
                try:
                    async with asyncio.timeout(self.idle_timeout):
                        chunk = await anext(upstream)
                except StopAsyncIteration:
                    break
                except TimeoutError as e:
                    logger.error(
                        f"{__name__}:stream - No delta within {self.idle_timeout}s after {delta_count} deltas"
                    )
                    raise ProviderError(
                        "Generation stream timed out",
                        provider="generation",
                        details={"idle_timeout": self.idle_timeout, "delta_count": delta_count},
                    ) from e
                except Exception as e:
                    logger.error(f"{__name__}:stream - Upstream failed: {type(e).__name__}: {e}")
                    raise ProviderError(
                        "Generation stream failed",
                        provider="generation",
                        details={"error": str(e), "delta_count": delta_count},
                    ) from e

                delta = content_to_text(chunk.content)
                if delta:
                    delta_count += 1
                    yield delta

        logger.info(f"{__name__}:stream - Stream finished after {delta_count} deltas")
