"""Rank activity chunks against a handful of generated queries."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from activity_digest.embeddings.base import BaseEmbedder, cosine_similarity
from activity_digest.exceptions import EmbeddingError
from activity_digest.retrieval.chunker import ActivityChunk

logger = logging.getLogger(__name__)

MAX_QUERIES = 5
DEFAULT_TOP_K = 8
FALLBACK_QUERY = "Main activities and focus areas for the day"

_WORD_RE = re.compile(r"[a-z0-9][a-z0-9_.+-]*")


@dataclass(frozen=True)
class ScoredChunk:
    chunk: ActivityChunk
    score: float


def generate_queries(chunks: list[ActivityChunk]) -> list[str]:
    """Derive up to five retrieval queries from chunk metadata."""
    queries: list[str] = []

    def add(query: str) -> None:
        query = query.strip()
        if query and query not in queries and len(queries) < MAX_QUERIES:
            queries.append(query)

    for chunk in chunks:
        if chunk.kind == "agent":
            add(f"AI coding work on {', '.join(chunk.projects)}")
    for chunk in sorted((c for c in chunks if c.kind == "browser"), key=lambda c: -c.item_count):
        if not chunk.category or chunk.category in {"sensitive", "other"}:
            continue
        add(f"{chunk.category} browsing: {', '.join(chunk.domains[:3])}")
    for chunk in chunks:
        if chunk.kind == "search":
            for sample in chunk.samples:
                add(sample)

    return queries or [FALLBACK_QUERY]


def retrieve_top_k(
    query_embedding: list[float],
    embedded: list[tuple[ActivityChunk, list[float]]],
    k: int = DEFAULT_TOP_K,
) -> list[ScoredChunk]:
    scored = [ScoredChunk(chunk, cosine_similarity(query_embedding, vec)) for chunk, vec in embedded]
    scored.sort(key=lambda s: -s.score)
    return scored[:k]


def lexical_score(query: str, text: str) -> float:
    """Fraction of query terms present in `text`."""
    terms = set(_WORD_RE.findall(query.lower()))
    if not terms:
        return 0.0
    words = set(_WORD_RE.findall(text.lower()))
    return len(terms & words) / len(terms)


class ChunkRetriever:
    """Select the `top_k` chunks most relevant to the generated queries.

    Each chunk keeps its best score across all queries. Without an embedder,
    or when the embedder fails, scoring falls back to term overlap; the
    result is always a subset of the input chunks.
    """

    def __init__(self, embedder: BaseEmbedder | None = None, top_k: int = DEFAULT_TOP_K):
        self.embedder = embedder
        self.top_k = top_k

    def retrieve(self, chunks: list[ActivityChunk], queries: list[str] | None = None) -> list[ScoredChunk]:
        if not chunks:
            return []
        queries = queries or generate_queries(chunks)

        scores = None
        if self.embedder is not None:
            try:
                scores = self._embedding_scores(chunks, queries)
            except EmbeddingError as e:
                logger.warning("Embedding failed, using lexical ranking: %s", e)
        if scores is None:
            scores = [max(lexical_score(q, c.text) for q in queries) for c in chunks]

        ranked = sorted(
            (ScoredChunk(chunk, score) for chunk, score in zip(chunks, scores)),
            key=lambda s: -s.score,
        )
        logger.debug("Retrieved %d of %d chunks for %d queries", min(self.top_k, len(ranked)), len(chunks), len(queries))
        return ranked[: self.top_k]

    def _embedding_scores(self, chunks: list[ActivityChunk], queries: list[str]) -> list[float]:
        vectors = self.embedder.embed_batch([c.text for c in chunks])
        embedded = list(zip(chunks, vectors))
        best: dict[str, float] = {}
        for query in queries:
            for scored in retrieve_top_k(self.embedder.embed_query(query), embedded, k=len(embedded)):
                if scored.score > best.get(scored.chunk.id, float("-inf")):
                    best[scored.chunk.id] = scored.score
        return [best.get(c.id, 0.0) for c in chunks]
