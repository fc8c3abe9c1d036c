"""
Sliding-window text chunker.

Normalizes whitespace, then cuts fixed-size character windows that advance
by chunk_size - overlap, so consecutive chunks share overlap characters.
The final window may be shorter.

Dependencies: finmind.models.chunk, finmind.core.exceptions
System role: First stage of knowledge ingestion
"""

import logging
import re

from finmind.core.exceptions import InvalidConfig
from finmind.models.chunk import Chunk

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return _WHITESPACE_RUN.sub(" ", text).strip()


def validate_window(chunk_size: int, overlap: int) -> None:
    """
    Validate chunk window parameters.

    Raises:
        InvalidConfig: Unless chunk_size > overlap >= 0
    """
    if overlap < 0 or chunk_size <= overlap:
        raise InvalidConfig(
            "Chunk size must be greater than overlap and overlap must be non-negative",
            {"chunk_size": chunk_size, "overlap": overlap},
        )


def split_text(text: str, chunk_size: int, overlap: int, source_id: str = "") -> list[Chunk]:
    """
    Split text into overlapping fixed-size chunks.

    Args:
        text: Extracted document text
        chunk_size: Maximum characters per chunk
        overlap: Characters shared by consecutive chunks
        source_id: Identifier stamped on every chunk

    Returns:
        list[Chunk]: Chunks with dense zero-based sequence indexes; empty for blank text

    Raises:
        InvalidConfig: If overlap >= chunk_size or overlap < 0
    """
    validate_window(chunk_size, overlap)

    clean_text = normalize_text(text or "")
    length = len(clean_text)
    step = chunk_size - overlap

    chunks: list[Chunk] = []
    start = 0
    while start < length:
        end = min(start + chunk_size, length)
        chunks.append(
            Chunk(source_id=source_id, sequence_index=len(chunks), text=clean_text[start:end])
        )
        if end == length:
            break
        start += step

    return chunks


class Chunker:
    """Chunker bound to a validated window configuration."""

    def __init__(self, chunk_size: int = 200, overlap: int = 50) -> None:
        """
        Initialize chunker.

        Args:
            chunk_size: Maximum characters per chunk
            overlap: Characters shared by consecutive chunks

        Raises:
            InvalidConfig: If overlap >= chunk_size or overlap < 0
        """
        validate_window(chunk_size, overlap)
        self.chunk_size = chunk_size
        self.overlap = overlap

    def split(self, text: str, source_id: str = "") -> list[Chunk]:
        """Split text using the configured window."""
        chunks = split_text(text, self.chunk_size, self.overlap, source_id=source_id)
        logger.info(
            f"{__name__}:split - Split text into {len(chunks)} chunks",
            extra={"source_id": source_id},
        )
        return chunks
