"""One payload type per tier; each holds only what its tier lets leave.

`filtered_count` is the number of items the sensitivity filter removed or
masked. Which categories they fell into stays local.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from activity_digest.classify.events import ClassifiedEvent
from activity_digest.classify.stats import ActivityStats
from activity_digest.models import CollectedData
from activity_digest.privacy.tiers import PrivacyTier
from activity_digest.retrieval.retriever import ScoredChunk


@dataclass(frozen=True)
class DeidentifiedPayload:
    tier: ClassVar[PrivacyTier] = PrivacyTier.DEIDENTIFIED

    stats: ActivityStats
    filtered_count: int = 0


@dataclass(frozen=True)
class ClassifiedPayload:
    tier: ClassVar[PrivacyTier] = PrivacyTier.CLASSIFIED

    events: tuple[ClassifiedEvent, ...]
    stats: ActivityStats
    filtered_count: int = 0


@dataclass(frozen=True)
class RetrievalPayload:
    tier: ClassVar[PrivacyTier] = PrivacyTier.RETRIEVAL

    chunks: tuple[ScoredChunk, ...]
    queries: tuple[str, ...] = ()
    filtered_count: int = 0


@dataclass(frozen=True)
class StandardPayload:
    tier: ClassVar[PrivacyTier] = PrivacyTier.STANDARD

    data: CollectedData
    filtered_count: int = 0


TierPayload = Union[DeidentifiedPayload, ClassifiedPayload, RetrievalPayload, StandardPayload]
