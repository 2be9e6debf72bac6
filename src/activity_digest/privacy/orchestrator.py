"""Compose collection, scrubbing and filtering into one tier payload."""

from __future__ import annotations

import logging
from typing import Callable

from activity_digest.classify.events import classify_events
from activity_digest.classify.stats import compute_stats
from activity_digest.collect import collect_activity
from activity_digest.config import PipelineConfig
from activity_digest.embeddings.base import BaseEmbedder
from activity_digest.embeddings.ollama import OllamaEmbedder
from activity_digest.exceptions import SummarizerError
from activity_digest.models import CollectedData
from activity_digest.privacy.payloads import (
    ClassifiedPayload,
    DeidentifiedPayload,
    RetrievalPayload,
    StandardPayload,
    TierPayload,
)
from activity_digest.privacy.summarizer import BaseSummarizer
from activity_digest.privacy.tiers import PrivacyTier
from activity_digest.retrieval.chunker import chunk_activity
from activity_digest.retrieval.retriever import ChunkRetriever, generate_queries
from activity_digest.sanitize.pipeline import sanitize_collected_data
from activity_digest.sensitivity.filter import SensitivityFilter, SensitivityReport

logger = logging.getLogger(__name__)


class PrivacyOrchestrator:
    """Build the payload permitted by an externally chosen privacy tier.

    The tier is always an input. Each tier has its own builder, and only the
    selected builder runs, so a richer representation than the tier allows is
    never constructed.

    Usage::

        orchestrator = PrivacyOrchestrator(PipelineConfig.from_mapping(settings))
        summary = orchestrator.run("classified", summarizer)
    """

    def __init__(self, config: PipelineConfig, embedder: BaseEmbedder | None = None):
        self.config = config
        self._embedder = embedder
        self._builders: dict[PrivacyTier, Callable[[CollectedData, SensitivityReport], TierPayload]] = {
            PrivacyTier.DEIDENTIFIED: self._build_deidentified,
            PrivacyTier.CLASSIFIED: self._build_classified,
            PrivacyTier.RETRIEVAL: self._build_retrieval,
            PrivacyTier.STANDARD: self._build_standard,
        }

    def collect(self) -> tuple[CollectedData, SensitivityReport]:
        """Collect, scrub, then apply the sensitivity policy."""
        raw = collect_activity(self.config)
        sanitized = sanitize_collected_data(raw, self.config.sanitize)
        return SensitivityFilter(self.config.sensitivity).apply(sanitized)

    def prepare(
        self,
        tier,
        data: CollectedData | None = None,
        report: SensitivityReport | None = None,
    ) -> TierPayload:
        """Return the payload for `tier`.

        `data` must already be sanitized and filtered; when omitted it is
        collected. The tier is parsed before anything is read, so an
        unsupported tier fails without touching any source.
        """
        tier = PrivacyTier.parse(tier)
        if data is None:
            data, report = self.collect()
        payload = self._builders[tier](data, report or SensitivityReport())
        logger.info("Prepared %s payload", tier.name.lower())
        return payload

    def run(self, tier, summarizer: BaseSummarizer) -> str:
        payload = self.prepare(tier)
        try:
            return summarizer.summarize(payload)
        except SummarizerError:
            raise
        except Exception as e:
            raise SummarizerError(f"Summarizer failed: {e}") from e

    def _build_deidentified(self, data: CollectedData, report: SensitivityReport) -> DeidentifiedPayload:
        return DeidentifiedPayload(stats=compute_stats(classify_events(data)), filtered_count=report.total_filtered)

    def _build_classified(self, data: CollectedData, report: SensitivityReport) -> ClassifiedPayload:
        events = classify_events(data)
        return ClassifiedPayload(events=tuple(events), stats=compute_stats(events), filtered_count=report.total_filtered)

    def _build_retrieval(self, data: CollectedData, report: SensitivityReport) -> RetrievalPayload:
        chunks = chunk_activity(data)
        queries = generate_queries(chunks)
        retriever = ChunkRetriever(embedder=self._retrieval_embedder(), top_k=self.config.embedding.top_k)
        return RetrievalPayload(
            chunks=tuple(retriever.retrieve(chunks, queries)),
            queries=tuple(queries),
            filtered_count=report.total_filtered,
        )

    def _build_standard(self, data: CollectedData, report: SensitivityReport) -> StandardPayload:
        return StandardPayload(data=data, filtered_count=report.total_filtered)

    def _retrieval_embedder(self) -> BaseEmbedder | None:
        if self._embedder is not None or not self.config.embedding.enabled:
            return self._embedder
        try:
            return OllamaEmbedder.from_config(self.config.embedding)
        except ImportError as e:
            logger.warning("Embeddings unavailable, using lexical ranking: %s", e)
            return None
