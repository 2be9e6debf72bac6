"""Interface for the external summarizer that receives a tier payload."""

from __future__ import annotations

from abc import ABC, abstractmethod

from activity_digest.privacy.payloads import TierPayload


class BaseSummarizer(ABC):
    """Abstract interface for summarization backends.

    Implementations receive exactly one tier payload and never the collected
    aggregate behind it.
    """

    @abstractmethod
    def summarize(self, payload: TierPayload) -> str:
        """Return the summary text for `payload`."""
        ...
