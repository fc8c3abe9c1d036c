"""
Core retrieval-augmentation and memory pipeline.

Chunking, hybrid reranking, cache-aside conversation history and the
streaming chat orchestrator.
"""
