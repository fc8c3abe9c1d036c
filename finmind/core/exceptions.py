"""
Exception hierarchy for FinMind.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class FinMindError(Exception):
    """Base exception for all FinMind application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ProviderError(FinMindError):
    """Raised when the embedding or generation upstream fails or answers malformed."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            provider: Collaborator that failed ("embedding", "generation")
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        super().__init__(message, details)


class CacheError(FinMindError):
    """Raised when the fast cache is unreachable or holds a corrupt entry (non-fatal)."""

    pass


class PersistenceError(FinMindError):
    """Raised when the durable conversation log cannot be written or read."""

    def __init__(
        self,
        message: str,
        user_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize persistence error.

        Args:
            message: Error message
            user_id: User whose record failed
            details: Additional context
        """
        details = details or {}
        if user_id:
            details["user_id"] = user_id
        super().__init__(message, details)


class ParseError(FinMindError):
    """Raised when document text extraction fails or yields no text."""

    def __init__(
        self,
        message: str,
        filename: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize parsing error.

        Args:
            message: Error message
            filename: Name of the uploaded file
            details: Additional context
        """
        details = details or {}
        if filename:
            details["filename"] = filename
        super().__init__(message, details)


class UnsupportedFormatError(ParseError):
    """Raised when an uploaded file has a format the extractor cannot read."""

    pass


class InvalidConfig(FinMindError):
    """Raised at construction time for invalid chunking, rerank or index parameters."""

    pass


class DimensionMismatchError(InvalidConfig):
    """Raised when a vector does not match the process-wide embedding dimension."""

    def __init__(self, expected: int, actual: int, details: dict[str, Any] | None = None) -> None:
        """
        Initialize dimension mismatch error.

        Args:
            expected: Configured embedding dimension
            actual: Dimension of the offending vector
            details: Additional context
        """
        details = details or {}
        details.update({"expected": expected, "actual": actual})
        super().__init__(
            f"Vector dimension {actual} does not match configured dimension {expected}",
            details,
        )


class VectorStoreError(FinMindError):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
