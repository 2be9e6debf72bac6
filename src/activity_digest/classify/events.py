"""Turn sanitized records into label-only classified events."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import urlsplit

from activity_digest.classify.rules import (
    CATEGORY_LABELS,
    CATEGORY_TO_ACTIVITY,
    TASK_TO_ACTIVITY,
    categorize_domain,
    classify_prompt_task,
    prompt_topics,
    search_intent,
    shell_activity,
)
from activity_digest.models import CollectedData
from activity_digest.sensitivity.filter import FILTERED_URL


@dataclass(frozen=True)
class ClassifiedEvent:
    """An activity reduced to labels; carries no URLs, titles or prompt text."""

    timestamp: datetime | None
    source: str  # "browser" | "search" | "shell" | "agent"
    activity_type: str
    intent: str
    category: str
    topics: tuple[str, ...] = field(default_factory=tuple)


def classify_events(data: CollectedData) -> list[ClassifiedEvent]:
    events: list[ClassifiedEvent] = []

    for visit in data.visits:
        category = _visit_category(visit.url)
        title_topics = prompt_topics(visit.title) if category != "sensitive" else []
        events.append(ClassifiedEvent(
            timestamp=visit.timestamp,
            source="browser",
            activity_type=CATEGORY_TO_ACTIVITY.get(category, "unknown"),
            intent=search_intent(visit.title) if category != "sensitive" else "unknown",
            category=category,
            topics=tuple([CATEGORY_LABELS[category], *title_topics]),
        ))

    for search in data.searches:
        events.append(ClassifiedEvent(
            timestamp=search.timestamp,
            source="search",
            activity_type="research",
            intent=search_intent(search.query),
            category="search",
            topics=tuple(prompt_topics(search.query)),
        ))

    for command in data.shell_commands:
        events.append(ClassifiedEvent(
            timestamp=command.timestamp,
            source="shell",
            activity_type=shell_activity(command.command),
            intent="implement",
            category="shell",
            topics=tuple(prompt_topics(command.command)),
        ))

    for session in data.agent_sessions:
        task = classify_prompt_task(session.prompt_text)
        events.append(ClassifiedEvent(
            timestamp=session.timestamp,
            source="agent",
            activity_type=TASK_TO_ACTIVITY[task],
            intent="implement",
            category="ai_coding",
            topics=tuple(prompt_topics(session.prompt_text)),
        ))

    return events


def _visit_category(url: str) -> str:
    if url == FILTERED_URL:
        return "sensitive"
    try:
        host = urlsplit(url).hostname or ""
    except ValueError:
        host = ""
    return categorize_domain(host)
