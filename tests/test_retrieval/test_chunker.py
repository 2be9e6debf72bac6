"""Tests for activity chunking."""

from datetime import datetime, timedelta, timezone

from activity_digest.models import AgentSession, BrowserVisit, CollectedData, SearchQuery, ShellCommand
from activity_digest.retrieval.chunker import (
    ActivityChunk,
    chunk_activity,
    estimate_tokens,
    merge_small_chunks,
)
from activity_digest.sensitivity.filter import FILTERED_URL

T = datetime(2024, 5, 1, 9, tzinfo=timezone.utc)


def _big_data():
    return CollectedData(
        visits=[
            BrowserVisit(f"https://github.com/acme/repo{i}", f"acme/repo{i}: a repository with a fairly long title {i}", T + timedelta(minutes=i))
            for i in range(12)
        ],
        searches=[SearchQuery(f"search query number {i} about python packaging", T, "google.com") for i in range(60)],
        shell_commands=[ShellCommand(f"pytest tests/test_module_{i}.py -x", T) for i in range(80)],
        agent_sessions=[
            AgentSession(f"implement feature {i} for the billing service with retries and logging", T, "billing")
            for i in range(20)
        ],
    )


def test_estimate_tokens():
    assert estimate_tokens("") == 0
    assert estimate_tokens("abcd") == 1
    assert estimate_tokens("abcde") == 2


def test_browser_chunk_per_category():
    chunks = chunk_activity(_big_data())
    browser = [c for c in chunks if c.kind == "browser"]
    assert [c.id for c in browser] == ["browser:dev"]
    assert browser[0].item_count == 12
    assert browser[0].domains == ("github.com",)
    assert browser[0].text.count("acme/repo") == 8


def test_titles_truncated():
    chunk = next(c for c in chunk_activity(_big_data()) if c.kind == "browser")
    sample_line = next(line for line in chunk.text.splitlines() if line.startswith("Sample pages:"))
    assert all(len(title) <= 60 for title in sample_line[len("Sample pages: "):].split(" | "))


def test_search_and_shell_batches():
    chunks = chunk_activity(_big_data())
    ids = [c.id for c in chunks]
    assert "search:1" in ids and "search:2" in ids
    assert "shell:1" in ids and "shell:2" in ids
    assert next(c for c in chunks if c.id == "search:1").item_count == 30
    assert next(c for c in chunks if c.id == "shell:1").item_count == 40
    assert next(c for c in chunks if c.id == "search:1").samples == (
        "search query number 0 about python packaging",
        "search query number 1 about python packaging",
        "search query number 2 about python packaging",
    )


def test_agent_chunk_per_project():
    chunk = next(c for c in chunk_activity(_big_data()) if c.kind == "agent")
    assert chunk.id == "agent:billing"
    assert chunk.item_count == 20
    assert chunk.projects == ("billing",)
    assert chunk.text.count("implement feature") == 15


def test_small_chunks_merged_into_misc():
    data = CollectedData(
        shell_commands=[ShellCommand("make")],
        agent_sessions=[AgentSession("tidy imports", T, "tiny")],
    )
    chunks = chunk_activity(data)
    assert [c.id for c in chunks] == ["misc"]
    assert chunks[0].item_count == 2
    assert chunks[0].projects == ("tiny",)


def test_single_small_chunk_kept():
    small = ActivityChunk(id="shell", kind="shell", text="Shell Commands (1 commands)", item_count=1)
    assert merge_small_chunks([small]) == [small]


def test_filtered_visits_get_own_chunk_without_domains():
    data = CollectedData(visits=[BrowserVisit(FILTERED_URL, "[Health & Medical]", T)])
    chunk = chunk_activity(data)[0]
    assert chunk.category == "sensitive"
    assert chunk.domains == ()
    assert "Filtered" in chunk.text


def test_empty_aggregate():
    assert chunk_activity(CollectedData()) == []


def test_sample_titles_drop_navigation_noise():
    data = CollectedData(visits=[
        BrowserVisit("https://github.com/acme/api", "Dashboard", T),
        BrowserVisit("https://github.com/acme/api/pull/7", "Fix retry backoff by dana · Pull Request #7 · acme/api · GitHub", T),
    ])
    chunk = next(c for c in chunk_activity(data) if c.kind == "browser")
    sample_line = next(line for line in chunk.text.splitlines() if line.startswith("Sample pages:"))
    assert sample_line == "Sample pages: Fix retry backoff by dana"
