"""Normalize raw browser visits and separate out search queries."""

from __future__ import annotations

import math
import re
from dataclasses import replace
from datetime import datetime
from typing import Iterable
from urllib.parse import parse_qs, urlsplit

from activity_digest.models import BrowserVisit, SearchQuery, newest_first_key

# Search engine host -> query parameter.
SEARCH_ENGINES: dict[str, str] = {
    "google.com": "q",
    "bing.com": "q",
    "duckduckgo.com": "q",
    "search.yahoo.com": "p",
    "search.brave.com": "q",
    "ecosia.org": "q",
    "kagi.com": "q",
    "perplexity.ai": "q",
}

# Hosts (optionally with a path prefix) that never carry browsing signal.
EXCLUDE_DOMAINS: tuple[str, ...] = (
    "google.com/complete",
    "google.com/gen_204",
    "accounts.google.com",
    "doubleclick.net",
    "localhost",
    "127.0.0.1",
)

# Redirector host -> (click-through path, destination parameters in priority order).
REDIRECTORS: dict[str, tuple[str, tuple[str, ...]]] = {
    "google.com": ("/url", ("q", "url")),
}

TITLE_SEPARATORS_RE = re.compile(r"\s+[|—–·»]\s+|\s+-\s+")

# Brand suffixes stripped before splitting, so the split sees only the article.
BRAND_SUFFIXES: tuple[str, ...] = (
    " | GitHub", " · GitHub", " - GitHub",
    " - Stack Overflow", " — Stack Overflow",
    " | MDN Web Docs", " | TypeScript",
    " | Google", " - Google Search",
    " | YouTube", " - YouTube",
    " | Reddit",
    " | Wikipedia", " - Wikipedia",
)

NAV_NOISE_TITLES = frozenset({
    "Home", "Login", "Sign In", "Dashboard", "Settings", "Profile",
    "New Tab", "Untitled", "Loading...", "404", "Error", "Page Not Found",
    "Search Results", "Google", "Bing", "DuckDuckGo",
})
MIN_TITLE_LENGTH = 5


def normalize_visits(
    raw_visits: Iterable[BrowserVisit],
    excluded_domains: Iterable[str] = (),
) -> list[BrowserVisit]:
    """Collapse near-duplicates, unwrap redirects, dedupe by exact URL (first
    wins), filter, sort newest-first."""
    excluded = [d.strip().lower() for d in excluded_domains if d.strip()]
    seen: set[str] = set()
    visits: list[BrowserVisit] = []

    for visit in collapse_near_duplicates(raw_visits):
        destination = unwrap_redirect(visit.url)
        if destination:
            visit = replace(visit, url=destination)
        if visit.url in seen:
            continue
        seen.add(visit.url)
        if not is_allowed_url(visit.url, excluded):
            continue
        visits.append(visit)

    visits.sort(key=lambda v: newest_first_key(v.timestamp))
    return visits


def collapse_near_duplicates(visits: Iterable[BrowserVisit]) -> list[BrowserVisit]:
    """One visit per canonical URL per calendar minute.

    Chromium logs several rows for one navigation, and synced profiles repeat
    rows. The survivor has the longest cleaned title; ties go to the earliest
    visit. Group order follows first appearance.
    """
    groups: dict[tuple[str, int], list[BrowserVisit]] = {}
    for visit in visits:
        key = (canonical_key(visit.url), _minute(visit.timestamp))
        groups.setdefault(key, []).append(visit)
    return [_best_visit(group) for group in groups.values()]


def canonical_key(url: str) -> str:
    """``https://<host without www><path>``, ignoring query, fragment and trailing slash.

    Google Maps paths also lose their ``/@lat,lng,zoom`` viewport suffix.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    host = normalize_domain(parts.hostname or "")
    if not host:
        return url
    path = parts.path
    if host in {"google.com", "maps.google.com"} and path.startswith("/maps/"):
        path = path.split("/@", 1)[0]
    else:
        path = path.rstrip("/") or "/"
    return f"https://{host}{path}"


def clean_title(raw: str) -> str:
    """The article part of a page title, or "" when it is navigation noise.

    >>> clean_title("Generics | TypeScript")
    'Generics'
    """
    if not raw:
        return ""
    title = raw
    for suffix in BRAND_SUFFIXES:
        if title.endswith(suffix):
            title = title[: -len(suffix)].strip()
            break
    parts = [part.strip() for part in TITLE_SEPARATORS_RE.split(title)]
    article = max(parts, key=len, default="")
    if article in NAV_NOISE_TITLES or len(article) < MIN_TITLE_LENGTH:
        return ""
    return article


def _best_visit(group: list[BrowserVisit]) -> BrowserVisit:
    best = group[0]
    for visit in group[1:]:
        score, best_score = _title_score(visit), _title_score(best)
        if score > best_score or (score == best_score and _epoch(visit.timestamp) < _epoch(best.timestamp)):
            best = visit
    return best


def _title_score(visit: BrowserVisit) -> int:
    return len(clean_title(visit.title)) or len(visit.title or "")


def _epoch(timestamp: datetime | None) -> float:
    return timestamp.timestamp() if timestamp is not None else math.inf


def _minute(timestamp: datetime | None) -> int:
    return int(timestamp.timestamp() // 60) if timestamp is not None else 0


def unwrap_redirect(url: str) -> str | None:
    """Return the destination of a known click-through link, or None.

    Only a destination parameter holding an absolute http(s) URL counts; no
    guessing is done otherwise.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    domain = normalize_domain(parts.hostname or "")
    for host, (path, params) in REDIRECTORS.items():
        if not _host_matches(domain, host) or parts.path != path:
            continue
        query = parse_qs(parts.query)
        for param in params:
            for value in query.get(param, []):
                if _is_http_url(value):
                    return value
    return None


def is_allowed_url(url: str, excluded_domains: Iterable[str] = ()) -> bool:
    """http(s) only, and not on the fixed or caller-supplied exclusion lists."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    if parts.scheme not in {"http", "https"}:
        return False
    domain = normalize_domain(parts.hostname or "")
    if not domain:
        return False
    for entry in EXCLUDE_DOMAINS:
        if _entry_matches(domain, parts.path, entry):
            return False
    return not _is_excluded_domain(domain, excluded_domains)


def split_searches(visits: Iterable[BrowserVisit]) -> tuple[list[BrowserVisit], list[SearchQuery]]:
    """Separate search result pages from ordinary visits.

    A visit that yields a query is recorded only as a search. Searches keep
    one entry per distinct decoded query, from the first (newest) visit.
    """
    kept: list[BrowserVisit] = []
    seen: set[str] = set()
    searches: list[SearchQuery] = []
    for visit in visits:
        search = parse_search(visit)
        if search is None:
            kept.append(visit)
            continue
        if search.query in seen:
            continue
        seen.add(search.query)
        searches.append(search)
    searches.sort(key=lambda s: newest_first_key(s.timestamp))
    return kept, searches


def parse_search(visit: BrowserVisit) -> SearchQuery | None:
    try:
        parts = urlsplit(visit.url)
    except ValueError:
        return None
    domain = normalize_domain(parts.hostname or "")
    for engine, param in SEARCH_ENGINES.items():
        if not _host_matches(domain, engine):
            continue
        redirector = REDIRECTORS.get(engine)
        if redirector and parts.path == redirector[0]:
            return None
        values = parse_qs(parts.query).get(param, [])
        query = values[0].strip() if values else ""
        if not query or query.startswith("http"):
            return None
        return SearchQuery(query=query, timestamp=visit.timestamp, engine=engine)
    return None


def normalize_domain(host: str) -> str:
    domain = (host or "").strip().lower()
    if domain.startswith("www."):
        domain = domain[4:]
    return domain


def _host_matches(domain: str, host: str) -> bool:
    return domain == host or domain.endswith(f".{host}")


def _entry_matches(domain: str, path: str, entry: str) -> bool:
    host, slash, prefix = entry.partition("/")
    if not _host_matches(domain, host):
        return False
    return not slash or path.startswith(f"/{prefix}")


def _is_excluded_domain(domain: str, excluded_domains: Iterable[str]) -> bool:
    for blocked in excluded_domains:
        b = blocked.strip().lower()
        if not b:
            continue
        if domain == b or domain.endswith(f".{b}"):
            return True
    return False


def _is_http_url(value: str) -> bool:
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in {"http", "https"} and bool(parts.hostname)
