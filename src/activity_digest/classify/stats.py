"""Aggregate statistics over classified events."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import timezone

from activity_digest.classify.events import ClassifiedEvent

TOP_TOPICS = 5
PEAK_HOURS = 3


@dataclass(frozen=True)
class ActivityStats:
    total_events: int
    counts_by_source: dict[str, int] = field(default_factory=dict)
    activity_distribution: dict[str, int] = field(default_factory=dict)
    category_distribution: dict[str, int] = field(default_factory=dict)
    top_topics: list[tuple[str, int]] = field(default_factory=list)
    peak_hours_utc: list[int] = field(default_factory=list)
    focus_score: float = 0.0


def compute_stats(events: list[ClassifiedEvent]) -> ActivityStats:
    """Counts and distributions only; nothing here identifies an individual event."""
    if not events:
        return ActivityStats(total_events=0)

    activities = Counter(e.activity_type for e in events)
    topics = Counter(topic for e in events for topic in e.topics)
    hours = Counter(
        e.timestamp.astimezone(timezone.utc).hour for e in events if e.timestamp is not None
    )
    dominant = activities.most_common(1)[0][1]

    return ActivityStats(
        total_events=len(events),
        counts_by_source=dict(Counter(e.source for e in events)),
        activity_distribution=dict(activities),
        category_distribution=dict(Counter(e.category for e in events)),
        top_topics=topics.most_common(TOP_TOPICS),
        peak_hours_utc=sorted(hour for hour, _ in hours.most_common(PEAK_HOURS)),
        focus_score=round(dominant / len(events), 3),
    )
