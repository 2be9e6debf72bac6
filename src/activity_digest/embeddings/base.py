"""Abstract base class for embedding backends."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod


class BaseEmbedder(ABC):
    """Abstract interface for text embedding."""

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Embed a single chunk of activity text."""
        ...

    @abstractmethod
    def embed_query(self, text: str) -> list[float]:
        """Embed a retrieval query."""
        ...

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        return [self.embed(text) for text in texts]


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """0.0 for mismatched, empty or zero-magnitude vectors."""
    if len(a) != len(b) or not a:
        return 0.0
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0
