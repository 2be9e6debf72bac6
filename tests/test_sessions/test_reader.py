"""Tests for agent session transcript reader."""

import json
import os
from datetime import datetime, timedelta, timezone

import pytest

from activity_digest.config import CollectionMode, PipelineConfig
from activity_digest.result import Empty, Value
from activity_digest.sessions.reader import SessionLogReader, find_transcripts

NOW = datetime.now(timezone.utc)


def _iso(dt):
    return dt.strftime("%Y-%m-%dT%H:%M:%S.000Z")


def _write_jsonl(path, records):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(json.dumps(r) if isinstance(r, dict) else r for r in records) + "\n")
    return path


@pytest.fixture
def home(tmp_path):
    return tmp_path


@pytest.fixture
def codex_transcript(home):
    return _write_jsonl(home / ".codex" / "sessions" / "2024" / "05" / "01" / "rollout-1.jsonl", [
        {"type": "session_meta", "timestamp": _iso(NOW - timedelta(hours=2)), "payload": {"cwd": "/Users/dev/projects/billing-api"}},
        {"type": "response_item", "timestamp": _iso(NOW - timedelta(hours=2)), "payload": {"role": "user", "content": "<environment_context>...</environment_context>"}},
        {"type": "response_item", "timestamp": _iso(NOW - timedelta(hours=1)), "payload": {"role": "user", "content": "add retries to the invoice sync job"}},
        {"type": "response_item", "timestamp": _iso(NOW - timedelta(hours=1)), "payload": {"role": "assistant", "content": "Sure."}},
        "{corrupt line",
        {"type": "response_item", "timestamp": _iso(NOW - timedelta(days=3)), "payload": {"role": "user", "content": "an old prompt from before"}},
    ])


@pytest.fixture
def claude_transcript(home):
    return _write_jsonl(home / ".claude" / "projects" / "-home-dev-site" / "abc.jsonl", [
        {"type": "user", "cwd": "/home/dev/site", "timestamp": _iso(NOW - timedelta(minutes=30)), "message": {"role": "user", "content": "write tests for the navbar"}},
        {"type": "user", "cwd": "/home/dev/site", "isMeta": True, "message": {"role": "user", "content": "caveat: local command output"}},
    ])


def _config(home, **kwargs):
    return PipelineConfig(since=NOW - timedelta(days=1), home=home, **kwargs)


def test_find_transcripts(home, codex_transcript):
    (codex_transcript.parent / "notes.txt").write_text("x")
    assert find_transcripts(home / ".codex") == [codex_transcript]


def test_find_transcripts_missing_root(tmp_path):
    assert find_transcripts(tmp_path / "nope") == []


def test_read_codex_transcript(home, codex_transcript):
    reader = SessionLogReader(_config(home))
    result = reader.read_transcript(codex_transcript, "codex", NOW - timedelta(days=1))
    assert isinstance(result, Value)
    assert len(result.value) == 1
    session = result.value[0]
    assert session.prompt_text == "add retries to the invoice sync job"
    assert session.project_name == "billing-api"
    assert session.source == "codex"


def test_read_claude_transcript(home, claude_transcript):
    reader = SessionLogReader(_config(home))
    result = reader.read_transcript(claude_transcript, "claude", NOW - timedelta(days=1))
    assert [s.prompt_text for s in result.value] == ["write tests for the navbar"]
    assert result.value[0].project_name == "site"


def test_stale_file_skipped_by_mtime(home, codex_transcript):
    old = (NOW - timedelta(days=5)).timestamp()
    os.utime(codex_transcript, (old, old))
    reader = SessionLogReader(_config(home))
    assert reader.read_transcript(codex_transcript, "codex", NOW - timedelta(days=1)) == Empty()


def test_missing_timestamp_uses_mtime(home):
    path = _write_jsonl(home / ".claude" / "projects" / "proj" / "x.jsonl", [
        {"type": "user", "message": {"role": "user", "content": "explain this stack trace please"}},
    ])
    result = SessionLogReader(_config(home)).read_transcript(path, "claude", NOW - timedelta(days=1))
    assert result.value[0].timestamp is not None
    assert result.value[0].project_name == "proj"


def test_collect_merges_sources_newest_first(home, codex_transcript, claude_transcript):
    sessions = SessionLogReader(_config(home)).collect()
    assert [s.source for s in sessions] == ["claude", "codex"]


def test_collect_caps_by_mode(home):
    records = [
        {"type": "user", "cwd": "/home/dev/big", "timestamp": _iso(NOW - timedelta(minutes=i + 1)), "message": {"role": "user", "content": f"prompt number {i}"}}
        for i in range(40)
    ]
    _write_jsonl(home / ".claude" / "projects" / "big" / "s.jsonl", records)
    assert len(SessionLogReader(_config(home)).collect()) == 30
    assert len(SessionLogReader(_config(home, mode=CollectionMode.COMPLETE)).collect()) == 40


def test_collect_custom_roots(tmp_path, codex_transcript):
    config = _config(tmp_path / "elsewhere", codex_sessions_dir=codex_transcript.parents[3])
    sessions = SessionLogReader(config).collect()
    assert len(sessions) == 1


def test_collect_no_directories(tmp_path):
    assert SessionLogReader(_config(tmp_path)).collect() == []


def test_image_block_stripped_before_truncation(home):
    prompt = "<image>" + "iVBORw0KGgoZZ" * 30 + "</image> fix the layout"
    path = _write_jsonl(home / ".claude" / "projects" / "-home-dev-ui" / "img.jsonl", [
        {"type": "user", "cwd": "/home/dev/ui", "timestamp": _iso(NOW - timedelta(minutes=5)), "message": {"role": "user", "content": prompt}},
    ])
    result = SessionLogReader(_config(home)).read_transcript(path, "claude", NOW - timedelta(days=1))
    assert [s.prompt_text for s in result.value] == ["fix the layout"]
