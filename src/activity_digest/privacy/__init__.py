"""Privacy tiers, their payloads and the orchestrator that builds them."""

from activity_digest.privacy.orchestrator import PrivacyOrchestrator
from activity_digest.privacy.payloads import (
    ClassifiedPayload,
    DeidentifiedPayload,
    RetrievalPayload,
    StandardPayload,
    TierPayload,
)
from activity_digest.privacy.summarizer import BaseSummarizer
from activity_digest.privacy.tiers import PrivacyTier

__all__ = [
    "BaseSummarizer",
    "ClassifiedPayload",
    "DeidentifiedPayload",
    "PrivacyOrchestrator",
    "PrivacyTier",
    "RetrievalPayload",
    "StandardPayload",
    "TierPayload",
]
