"""Rule-based activity classification."""

from activity_digest.classify.events import ClassifiedEvent, classify_events
from activity_digest.classify.rules import (
    categorize_domain,
    classify_prompt_task,
    prompt_topics,
    search_intent,
)
from activity_digest.classify.stats import ActivityStats, compute_stats

__all__ = [
    "ActivityStats",
    "ClassifiedEvent",
    "categorize_domain",
    "classify_events",
    "classify_prompt_task",
    "compute_stats",
    "prompt_topics",
    "search_intent",
]
