"""Normalized activity records shared by every collector."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class BrowserVisit:
    """One visited page. `url` is unique within a collection run."""

    url: str
    title: str
    timestamp: datetime | None
    visit_count: int | None = None
    browser: str = ""
    profile: str = ""


@dataclass(frozen=True)
class SearchQuery:
    """A free-text query recovered from a search-engine visit."""

    query: str
    timestamp: datetime | None
    engine: str


@dataclass(frozen=True)
class ShellCommand:
    """A shell history entry; `timestamp` is None for plain-line histories."""

    command: str
    timestamp: datetime | None = None


@dataclass(frozen=True)
class AgentSession:
    """One user turn from a coding-assistant transcript."""

    prompt_text: str
    timestamp: datetime | None
    project_name: str
    source: str = ""  # "codex" | "claude"


@dataclass
class CollectedData:
    """Aggregate handed to sanitization and onward."""

    visits: list[BrowserVisit] = field(default_factory=list)
    searches: list[SearchQuery] = field(default_factory=list)
    shell_commands: list[ShellCommand] = field(default_factory=list)
    agent_sessions: list[AgentSession] = field(default_factory=list)

    def counts(self) -> dict[str, int]:
        return {
            "visits": len(self.visits),
            "searches": len(self.searches),
            "shell_commands": len(self.shell_commands),
            "agent_sessions": len(self.agent_sessions),
        }


def newest_first_key(timestamp: datetime | None) -> tuple[int, float]:
    """Sort key placing known timestamps newest-first and None last."""
    if timestamp is None:
        return (1, 0.0)
    return (0, -timestamp.timestamp())
