"""
Google Gemini client construction.

Dependencies: langchain_google_genai, finmind.configs
System role: Builds the embedding and chat model clients from settings
"""

import logging

from langchain_google_genai import ChatGoogleGenerativeAI, GoogleGenerativeAIEmbeddings

from finmind.boundary.llm.embedding_gateway import EmbeddingGateway
from finmind.boundary.llm.generation_provider import GenerationProvider
from finmind.configs.llm import LLMSettings

logger = logging.getLogger(__name__)


def create_embedding_gateway(settings: LLMSettings) -> EmbeddingGateway:
    """Build a dimension-checked Gemini embedding gateway."""
    logger.info(
        f"{__name__}:create_embedding_gateway - model={settings.embedding_model}, "
        f"dimension={settings.embedding_dimension}"
    )
    embeddings = GoogleGenerativeAIEmbeddings(
        model=settings.embedding_model,
        request_options={"timeout": settings.request_timeout},
    )
    return EmbeddingGateway(
        embeddings,
        dimension=settings.embedding_dimension,
        timeout=settings.request_timeout,
    )


def create_generation_provider(settings: LLMSettings) -> GenerationProvider:
    """Build a streaming Gemini generation provider."""
    logger.info(f"{__name__}:create_generation_provider - model={settings.generation_model}")
    chat_model = ChatGoogleGenerativeAI(
        model=settings.generation_model,
        temperature=settings.temperature,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
    )
    return GenerationProvider(chat_model, idle_timeout=settings.stream_idle_timeout)
