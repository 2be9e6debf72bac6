"""Category/domain accept-or-redact policy over sanitized visits and searches.

Host entries match by bidirectional substring containment (entry in host, or
host in entry). Short entries and short hosts over-match.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from urllib.parse import urlsplit

from activity_digest.config import SensitivityAction, SensitivityCategory, SensitivityConfig
from activity_digest.models import BrowserVisit, CollectedData, SearchQuery
from activity_digest.sensitivity.domains import CATEGORY_REGISTRY, category_label

logger = logging.getLogger(__name__)

FILTERED_URL = "[FILTERED]"
SENSITIVE_SEARCH = "[SENSITIVE_SEARCH]"


@dataclass(frozen=True)
class DomainEntry:
    host: str
    path_prefix: str
    category: SensitivityCategory

    @property
    def text(self) -> str:
        return self.host + self.path_prefix


@dataclass
class SensitivityResult:
    """What survived, and how much was filtered, without saying what."""

    kept: list = field(default_factory=list)
    filtered_count: int = 0
    counts_by_category: dict[str, int] = field(default_factory=dict)


@dataclass
class SensitivityReport:
    visits_filtered: int = 0
    searches_filtered: int = 0
    counts_by_category: dict[str, int] = field(default_factory=dict)

    @property
    def total_filtered(self) -> int:
        return self.visits_filtered + self.searches_filtered


class SensitivityFilter:
    """Apply a `SensitivityConfig` to visits and searches."""

    def __init__(self, config: SensitivityConfig) -> None:
        self.config = config
        self.entries = build_entries(config) if config.is_active else []

    def match(self, url: str) -> SensitivityCategory | None:
        try:
            parts = urlsplit(url)
        except ValueError:
            return None
        host = (parts.hostname or "").lower()
        if host.startswith("www."):
            host = host[4:]
        if not host:
            return None
        path = (parts.path or "/").lower()
        for entry in self.entries:
            if not (entry.host in host or host in entry.host):
                continue
            if not entry.path_prefix or path.startswith(entry.path_prefix):
                return entry.category
        return None

    def filter_visits(self, visits: list[BrowserVisit]) -> SensitivityResult:
        if not self.entries:
            return SensitivityResult(kept=list(visits))

        kept: list[BrowserVisit] = []
        counts: Counter[str] = Counter()
        for visit in visits:
            category = self.match(visit.url)
            if category is None:
                kept.append(visit)
                continue
            counts[category.value] += 1
            if self.config.action is SensitivityAction.REDACT:
                kept.append(replace(
                    visit,
                    url=FILTERED_URL,
                    title=f"[{category_label(category)}]",
                ))
        return SensitivityResult(
            kept=kept,
            filtered_count=sum(counts.values()),
            counts_by_category=dict(counts),
        )

    def filter_searches(self, searches: list[SearchQuery]) -> SensitivityResult:
        """Drop or mask queries that mention a sensitive domain."""
        if not self.entries:
            return SensitivityResult(kept=list(searches))

        kept: list[SearchQuery] = []
        counts: Counter[str] = Counter()
        for search in searches:
            lowered = search.query.lower()
            entry = next((e for e in self.entries if e.text in lowered), None)
            if entry is None:
                kept.append(search)
                continue
            counts[entry.category.value] += 1
            if self.config.action is SensitivityAction.REDACT:
                kept.append(replace(search, query=SENSITIVE_SEARCH))
        return SensitivityResult(
            kept=kept,
            filtered_count=sum(counts.values()),
            counts_by_category=dict(counts),
        )

    def apply(self, data: CollectedData) -> tuple[CollectedData, SensitivityReport]:
        visits = self.filter_visits(data.visits)
        searches = self.filter_searches(data.searches)
        combined = Counter(visits.counts_by_category) + Counter(searches.counts_by_category)
        report = SensitivityReport(
            visits_filtered=visits.filtered_count,
            searches_filtered=searches.filtered_count,
            counts_by_category=dict(combined),
        )
        if report.total_filtered:
            logger.info("%d item(s) filtered for privacy", report.total_filtered)
            logger.debug("Filtered by category: %s", report.counts_by_category)
        filtered = CollectedData(
            visits=visits.kept,
            searches=searches.kept,
            shell_commands=list(data.shell_commands),
            agent_sessions=list(data.agent_sessions),
        )
        return filtered, report


def build_entries(config: SensitivityConfig) -> list[DomainEntry]:
    """Entries for enabled categories in registry order, then custom domains."""
    entries: list[DomainEntry] = []
    for category, info in CATEGORY_REGISTRY.items():
        if category in config.categories:
            entries.extend(_entry(d, category) for d in info.domains)
    entries.extend(_entry(d, SensitivityCategory.CUSTOM) for d in config.custom_domains)
    return [e for e in entries if e.host]


def _entry(raw: str, category: SensitivityCategory) -> DomainEntry:
    value = raw.strip().lower()
    if value.startswith("www."):
        value = value[4:]
    host, slash, rest = value.partition("/")
    return DomainEntry(host=host, path_prefix=f"/{rest}" if slash else "", category=category)
