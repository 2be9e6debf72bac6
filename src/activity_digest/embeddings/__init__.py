"""Embedding backends with abstract base."""

from activity_digest.embeddings.base import BaseEmbedder, cosine_similarity
from activity_digest.embeddings.ollama import OllamaEmbedder

__all__ = [
    "BaseEmbedder",
    "OllamaEmbedder",
    "cosine_similarity",
]
