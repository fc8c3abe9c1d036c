"""
Boundary adapters for external collaborators.

Durable SQL log, Redis history cache, vector index, LLM providers and the
document extractor.
"""
