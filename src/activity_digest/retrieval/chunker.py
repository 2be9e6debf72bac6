"""Split a sanitized aggregate into small, self-describing text chunks."""

from __future__ import annotations

import math
import re
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from urllib.parse import urlsplit

from activity_digest.browser.parser import clean_title, normalize_domain
from activity_digest.classify.rules import CATEGORY_LABELS, categorize_domain
from activity_digest.models import BrowserVisit, CollectedData
from activity_digest.sensitivity.filter import FILTERED_URL

SEARCH_BATCH = 30
SHELL_BATCH = 40
PROMPTS_PER_PROJECT = 15
PROMPT_CHARS = 120
TITLES_PER_CATEGORY = 8
TITLE_CHARS = 60
MIN_CHUNK_TOKENS = 100


@dataclass(frozen=True)
class ActivityChunk:
    id: str
    kind: str  # "browser" | "search" | "shell" | "agent" | "misc"
    text: str
    item_count: int
    category: str = ""
    domains: tuple[str, ...] = ()
    projects: tuple[str, ...] = ()
    samples: tuple[str, ...] = field(default_factory=tuple)


def estimate_tokens(text: str) -> int:
    """Roughly four characters per token."""
    return math.ceil(len(text) / 4)


def chunk_activity(data: CollectedData) -> list[ActivityChunk]:
    chunks: list[ActivityChunk] = []
    chunks.extend(_browser_chunks(data.visits))

    if data.searches:
        engines = Counter(s.engine for s in data.searches)
        engine_line = ", ".join(f"{e} ({c})" for e, c in engines.most_common())
        span = _time_range(s.timestamp for s in data.searches)
        batches = _batches([s.query for s in data.searches], SEARCH_BATCH)
        for i, batch in enumerate(batches, start=1):
            lines = [
                f"Search Queries ({len(batch)} queries)",
                f"Queries: {' | '.join(batch)}",
                f"Engines: {engine_line}",
            ]
            if span:
                lines.append(f"Time range: {span}")
            chunks.append(ActivityChunk(
                id=f"search{_suffix(i, batches)}",
                kind="search",
                text="\n".join(lines),
                item_count=len(batch),
                samples=tuple(batch[:3]),
            ))

    if data.shell_commands:
        bases = Counter(c.command.split()[0] for c in data.shell_commands if c.command.split())
        pattern_line = ", ".join(f"{b} ({n})" for b, n in bases.most_common(6))
        span = _time_range(c.timestamp for c in data.shell_commands)
        batches = _batches([c.command.strip() for c in data.shell_commands], SHELL_BATCH)
        for i, batch in enumerate(batches, start=1):
            lines = [
                f"Shell Commands ({len(batch)} commands)",
                f"Commands: {' | '.join(batch)}",
                f"Patterns: {pattern_line}",
            ]
            if span:
                lines.append(f"Time range: {span}")
            chunks.append(ActivityChunk(
                id=f"shell{_suffix(i, batches)}",
                kind="shell",
                text="\n".join(lines),
                item_count=len(batch),
            ))

    by_project = defaultdict(list)
    for session in data.agent_sessions:
        by_project[session.project_name or "general"].append(session)
    for project, sessions in by_project.items():
        prompts = [s.prompt_text[:PROMPT_CHARS] for s in sessions[:PROMPTS_PER_PROJECT]]
        lines = [
            f"AI Coding Sessions - {project} ({len(sessions)} prompts)",
            f"Prompts: {' | '.join(prompts)}",
        ]
        span = _time_range(s.timestamp for s in sessions)
        if span:
            lines.append(f"Time range: {span}")
        chunks.append(ActivityChunk(
            id=f"agent:{re.sub(r'[^a-zA-Z0-9_-]', '_', project)}",
            kind="agent",
            text="\n".join(lines),
            item_count=len(sessions),
            projects=(project,),
        ))

    return merge_small_chunks(chunks)


def merge_small_chunks(chunks: list[ActivityChunk], min_tokens: int = MIN_CHUNK_TOKENS) -> list[ActivityChunk]:
    """Fold chunks below `min_tokens` into a single "misc" chunk."""
    keep = [c for c in chunks if estimate_tokens(c.text) >= min_tokens]
    small = [c for c in chunks if estimate_tokens(c.text) < min_tokens]
    if len(small) <= 1:
        return keep + small
    keep.append(ActivityChunk(
        id="misc",
        kind="misc",
        text="\n\n".join(c.text for c in small),
        item_count=sum(c.item_count for c in small),
        domains=tuple(d for c in small for d in c.domains),
        projects=tuple(p for c in small for p in c.projects),
        samples=tuple(s for c in small for s in c.samples),
    ))
    return keep


def _browser_chunks(visits: list[BrowserVisit]) -> list[ActivityChunk]:
    by_category: dict[str, list[tuple[str, BrowserVisit]]] = defaultdict(list)
    for visit in visits:
        domain = _domain(visit.url)
        category = "sensitive" if visit.url == FILTERED_URL else categorize_domain(domain)
        by_category[category].append((domain, visit))

    chunks = []
    for category, entries in by_category.items():
        label = CATEGORY_LABELS.get(category, category)
        domain_counts = Counter(d for d, _ in entries if d)
        top = domain_counts.most_common(8)
        cleaned = (clean_title(v.title) for _, v in entries[:TITLES_PER_CATEGORY])
        titles = [title[:TITLE_CHARS] for title in cleaned if title]
        lines = [f"{label} Browser Activity ({len(entries)} visits)"]
        if top:
            lines.append(f"Top domains: {', '.join(f'{d} ({n})' for d, n in top)}")
        if titles:
            lines.append(f"Sample pages: {' | '.join(titles)}")
        span = _time_range(v.timestamp for _, v in entries)
        if span:
            lines.append(f"Time range: {span}")
        chunks.append(ActivityChunk(
            id=f"browser:{category}",
            kind="browser",
            text="\n".join(lines),
            item_count=len(entries),
            category=category,
            domains=tuple(d for d, _ in top),
        ))
    return chunks


def _domain(url: str) -> str:
    try:
        return normalize_domain(urlsplit(url).hostname or "")
    except ValueError:
        return ""


def _time_range(timestamps) -> str:
    known = sorted(t.astimezone(timezone.utc) for t in timestamps if isinstance(t, datetime))
    if not known:
        return ""
    return f"{known[0]:%H:%M} - {known[-1]:%H:%M} UTC"


def _batches(items: list[str], size: int) -> list[list[str]]:
    return [items[i:i + size] for i in range(0, len(items), size)]


def _suffix(index: int, batches: list) -> str:
    return f":{index}" if len(batches) > 1 else ""
