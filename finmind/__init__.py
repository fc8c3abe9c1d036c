"""
FinMind retrieval-augmented conversational backend.

Answers user questions by combining streamed LLM generation with knowledge
retrieved from a vector index, while keeping per-user conversation memory in
a Redis cache backed by a durable SQL log.
"""

__version__ = "0.1.0"
