"""
Vector math helpers.

Dimension checks and cosine similarity for embedding vectors. Every vector
compared or stored must share the process-wide embedding dimension.

Dependencies: numpy, finmind.core.exceptions
System role: Dimension invariant enforcement before similarity computation
"""

from collections.abc import Sequence

import numpy as np

from finmind.core.exceptions import DimensionMismatchError


def ensure_dimension(vector: Sequence[float], expected: int) -> None:
    """
    Check a vector against the configured embedding dimension.

    Args:
        vector: Embedding vector
        expected: Configured dimension

    Raises:
        DimensionMismatchError: If the lengths differ
    """
    if len(vector) != expected:
        raise DimensionMismatchError(expected=expected, actual=len(vector))


def cosine_similarity(v1: Sequence[float], v2: Sequence[float]) -> float:
    """
    Cosine similarity of two equal-length vectors.

    Returns 0.0 when either vector has zero norm.

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    ensure_dimension(v2, len(v1))
    a = np.asarray(v1, dtype=np.float64)
    b = np.asarray(v2, dtype=np.float64)
    norm = float(np.linalg.norm(a) * np.linalg.norm(b))
    if norm == 0.0:
        return 0.0
    return float(np.dot(a, b) / norm)


def normalize_rows(matrix: np.ndarray) -> np.ndarray:
    """L2-normalize each row so inner product equals cosine similarity."""
    norms = np.linalg.norm(matrix, axis=1, keepdims=True)
    norms[norms == 0.0] = 1.0
    return (matrix / norms).astype(np.float32)


def clamp_score(score: float) -> float:
    """Clamp a similarity score into [0, 1]."""
    return min(max(float(score), 0.0), 1.0)
