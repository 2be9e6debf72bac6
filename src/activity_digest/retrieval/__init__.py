"""Chunking and top-k retrieval over the sanitized aggregate."""

from activity_digest.retrieval.chunker import ActivityChunk, chunk_activity, estimate_tokens
from activity_digest.retrieval.retriever import (
    ChunkRetriever,
    ScoredChunk,
    generate_queries,
    retrieve_top_k,
)

__all__ = [
    "ActivityChunk",
    "ChunkRetriever",
    "ScoredChunk",
    "chunk_activity",
    "estimate_tokens",
    "generate_queries",
    "retrieve_top_k",
]
