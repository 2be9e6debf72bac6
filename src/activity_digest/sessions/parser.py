"""Parse transcript lines into tagged records.

Two layouts are understood:

- Codex: ``{"type": "session_meta", "payload": {"cwd": ...}}`` and
  ``{"type": "response_item", "payload": {"role": ..., "content": ...}}``
- Claude: ``{"type": "user", "cwd": ..., "message": {"role": ..., "content": ...}}``

`content` is either a string or a list of ``{"type", "text"}`` blocks.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import dateutil.parser

from activity_digest.sessions.models import (
    OtherTurn,
    SessionMeta,
    Skip,
    TranscriptRecord,
    UserTurn,
)

# Numeric timestamps above this are milliseconds.
MILLIS_THRESHOLD = 1e10

INJECTED_PREFIXES = (
    "<environment_context",
    "<permissions instructions>",
    "<app-context>",
    "# AGENTS.md",
    "<INSTRUCTIONS",
    "You are Codex",
    "<system",
)

MIN_PROMPT_LENGTH = 5
MAX_PROMPT_LENGTH = 200
ELLIPSIS = "…"


def parse_record(line: str) -> TranscriptRecord:
    """Resolve one JSON line to a record variant; never raises."""
    try:
        obj = json.loads(line)
    except ValueError:
        return Skip("invalid json")
    if not isinstance(obj, dict):
        return Skip("not an object")

    timestamp = parse_timestamp(obj.get("timestamp", obj.get("created_at")))
    kind = obj.get("type")
    cwd = obj.get("cwd") if isinstance(obj.get("cwd"), str) and obj.get("cwd") else None

    if kind == "session_meta":
        payload = obj.get("payload")
        meta_cwd = payload.get("cwd") if isinstance(payload, dict) else None
        if isinstance(meta_cwd, str) and meta_cwd:
            return SessionMeta(cwd=meta_cwd, timestamp=timestamp)
        return Skip("session_meta without cwd")

    if kind == "response_item":
        body = obj.get("payload")
    else:
        body = obj.get("message")
    if not isinstance(body, dict):
        body = {}
    role = body.get("role") or obj.get("role")
    content = body.get("content", obj.get("content"))

    if not role:
        if cwd:
            return SessionMeta(cwd=cwd, timestamp=timestamp)
        return Skip(f"unrecognized record type {kind!r}")
    if role == "user" and not obj.get("isMeta"):
        return UserTurn(text=content_text(content), timestamp=timestamp, cwd=cwd)
    return OtherTurn(role=str(role), timestamp=timestamp, cwd=cwd)


def content_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        pieces = [
            block["text"]
            for block in content
            if isinstance(block, dict) and isinstance(block.get("text"), str) and block["text"]
        ]
        return " ".join(pieces)
    return ""


def parse_timestamp(value: Any) -> datetime | None:
    """Epoch seconds or milliseconds, or an ISO string; naive values are UTC."""
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            seconds = value / 1000 if value > MILLIS_THRESHOLD else value
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        if isinstance(value, str) and value.strip():
            parsed = dateutil.parser.isoparse(value.strip())
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
    except (ValueError, OverflowError, OSError):
        return None
    return None


def is_user_prompt(text: str) -> bool:
    """Long enough and not tool-injected scaffolding."""
    if len(text) <= MIN_PROMPT_LENGTH:
        return False
    return not text.startswith(INJECTED_PREFIXES)


def truncate_prompt(text: str, limit: int = MAX_PROMPT_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS
